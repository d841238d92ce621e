# GlyphStag - Gradient
"""
Glyph gradients - ordered palettes mapping quantized intensity to a glyph.

All presets are ordered from the densest glyph (index 0, selected for an
intensity of 0.0) to the sparsest one (selected for 1.0), so dark pixels are
drawn with a lot of ink and bright pixels stay mostly empty.

Example:
    from glyphstag.gradient import Gradient

    gradient = Gradient.from_preset("standard")
    gradient.char_at(gradient.clamp_index(0.5))  # '='
"""

from __future__ import annotations

import math

DETAILED_CHARS = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
STANDARD_CHARS = "@%#*+=-:. "
BLOCK_CHARS = "█▓▒░ "
BINARY_CHARS = "01"


class Gradient:
    """
    An ordered, immutable palette of at least two glyphs.
    """

    PRESETS: dict[str, str] = {
        "detailed": DETAILED_CHARS,
        "standard": STANDARD_CHARS,
        "blocks": BLOCK_CHARS,
        "binary": BINARY_CHARS,
    }
    "Named gradient presets"

    def __init__(self, chars: str):
        """
        :param chars: The glyphs, index 0 first

        Raises a ValueError if fewer than two glyphs are passed
        """
        chars = str(chars)
        if len(chars) < 2:
            raise ValueError("gradient must contain at least two characters")
        self._chars = chars

    @classmethod
    def detailed(cls) -> Gradient:
        """70 level gradient for photos and fine detail."""
        return cls(DETAILED_CHARS)

    @classmethod
    def standard(cls) -> Gradient:
        """Classic 10 level ASCII gradient."""
        return cls(STANDARD_CHARS)

    @classmethod
    def blocks(cls) -> Gradient:
        """Unicode shade blocks."""
        return cls(BLOCK_CHARS)

    @classmethod
    def binary(cls) -> Gradient:
        """Two level gradient."""
        return cls(BINARY_CHARS)

    @classmethod
    def from_preset(cls, name: str) -> Gradient:
        """
        Creates a gradient from a preset name.

        :param name: One of :attr:`PRESETS` (case insensitive)
        :return: The gradient
        """
        key = name.lower()
        if key not in cls.PRESETS:
            available = ", ".join(sorted(cls.PRESETS))
            raise ValueError(f"Unknown gradient preset: {name}. Available: {available}")
        return cls(cls.PRESETS[key])

    @property
    def chars(self) -> str:
        """The glyphs of this gradient, index 0 first."""
        return self._chars

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other) -> bool:
        return isinstance(other, Gradient) and self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"Gradient({self._chars!r})"

    def clamp_index(self, value: float) -> int:
        """
        Quantizes a normalized intensity to a palette index.

        :param value: Intensity, values outside [0, 1] are clamped
        :return: round(value * (N - 1)) clamped to [0, N - 1]
        """
        levels = len(self._chars) - 1
        scaled = min(max(value * levels, 0.0), float(levels))
        return int(math.floor(scaled + 0.5))

    def char_at(self, index: int) -> str:
        """
        Returns the glyph at given index, indices past the end select the
        last glyph.
        """
        return self._chars[min(max(index, 0), len(self._chars) - 1)]
