"""
Tests for glyph gradients.
"""

import pytest

from glyphstag.gradient import BINARY_CHARS, STANDARD_CHARS, Gradient


class TestGradient:
    """Tests for the Gradient class."""

    def test_requires_two_glyphs(self):
        """Test that gradients with fewer than two glyphs are rejected."""
        with pytest.raises(ValueError):
            Gradient("")
        with pytest.raises(ValueError):
            Gradient("#")

    def test_presets(self):
        """Test the named presets."""
        assert Gradient.from_preset("standard").chars == STANDARD_CHARS
        assert Gradient.from_preset("BINARY").chars == BINARY_CHARS
        assert Gradient.from_preset("blocks") == Gradient.blocks()
        assert len(Gradient.detailed()) > len(Gradient.standard())

    def test_unknown_preset(self):
        """Test that an unknown preset name raises a ValueError."""
        with pytest.raises(ValueError, match="Unknown gradient preset"):
            Gradient.from_preset("fancy")

    def test_clamp_index_bounds(self):
        """Test that intensities outside 0-1 are clamped."""
        gradient = Gradient.standard()
        assert gradient.clamp_index(0.0) == 0
        assert gradient.clamp_index(1.0) == len(gradient) - 1
        assert gradient.clamp_index(-3.0) == 0
        assert gradient.clamp_index(7.5) == len(gradient) - 1

    def test_clamp_index_rounds_half_up(self):
        """Test rounding of intensities between two levels."""
        binary = Gradient.binary()
        assert binary.clamp_index(0.49) == 0
        assert binary.clamp_index(0.5) == 1
        standard = Gradient.standard()
        assert standard.clamp_index(0.5) == 5
        assert standard.char_at(standard.clamp_index(0.5)) == "="

    def test_char_at_clamps(self):
        """Test that indices past the end select the last glyph."""
        gradient = Gradient("ab")
        assert gradient.char_at(0) == "a"
        assert gradient.char_at(99) == "b"
        assert gradient.char_at(-1) == "a"

    def test_equality_and_hash(self):
        """Test value semantics."""
        assert Gradient("ab") == Gradient("ab")
        assert Gradient("ab") != Gradient("ba")
        assert len({Gradient("ab"), Gradient("ab")}) == 1
        assert "ab" in repr(Gradient("ab"))
