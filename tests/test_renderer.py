"""
Tests for the GlyphRenderer.
"""

import numpy as np
import PIL.Image
import pytest

from glyphstag import (
    ColorMode,
    EdgeMode,
    FitViewport,
    FixedColumns,
    Gradient,
    GlyphRenderer,
    RenderOptions,
    render,
)
from glyphstag.decoder import SourceFrame
from glyphstag.errors import DecodeError, InvalidLayoutError

from conftest import make_pixels


def _chars(grid):
    return [cell.ch for cell in grid.cells]


class TestRenderOptions:
    """Tests for RenderOptions."""

    def test_defaults(self):
        """Test the default options."""
        options = RenderOptions()
        assert options.gradient == Gradient.detailed()
        assert options.font_aspect == pytest.approx(0.55)
        assert options.edge_mode == EdgeMode.NONE
        assert options.color_mode == ColorMode.TRUE_COLOR

    def test_string_enums(self):
        """Test that enum values may be passed by name."""
        options = RenderOptions(edge_mode="sobel", color_mode="luminance")
        assert options.edge_mode == EdgeMode.SOBEL
        assert options.color_mode == ColorMode.LUMINANCE

    def test_invalid_values(self):
        """Test validation of aspect and threshold."""
        with pytest.raises(ValueError):
            RenderOptions(font_aspect=0.0)
        with pytest.raises(ValueError):
            RenderOptions(edge_threshold=1.5)

    def test_with_changes(self):
        """Test copying with changed fields."""
        options = RenderOptions()
        inverted = options.with_changes(invert=True)
        assert inverted.invert and not options.invert


class TestGlyphRenderer:
    """Tests for GlyphRenderer.render_image."""

    def test_solid_red(self, red_pixels):
        """Test a 2x2 red image with the binary gradient."""
        options = RenderOptions(gradient=Gradient.binary(), font_aspect=1.0)
        output = GlyphRenderer().render_image(red_pixels, FixedColumns(2), options)

        assert output.geometry.to_tuple() == (2, 2)
        assert output.grid.width == 2 and output.grid.height == 2
        assert output.assumed_cell_aspect == 1.0
        assert all(cell.fg == (255, 0, 0) for cell in output.grid.cells)
        # Red has a luminance of ~0.21, mapped to the densest glyph
        assert _chars(output.grid) == ["0"] * 4

    def test_luminance_colors(self, red_pixels):
        """Test gray foregrounds in luminance mode."""
        options = RenderOptions(
            gradient=Gradient.binary(), font_aspect=1.0, color_mode=ColorMode.LUMINANCE
        )
        output = render(red_pixels, FixedColumns(2), options)
        assert all(cell.fg == (54, 54, 54) for cell in output.grid.cells)
        assert all(cell.alpha == 1.0 for cell in output.grid.cells)

    def test_deterministic(self, gradient_pixels):
        """Test that identical inputs produce identical grids."""
        options = RenderOptions(contrast=40.0, brightness=-10.0)
        first = render(gradient_pixels, FixedColumns(20), options)
        second = render(gradient_pixels, FixedColumns(20), options)
        assert first.grid == second.grid

    def test_grid_matches_geometry(self, gradient_pixels):
        """Test that the grid has exactly the derived size."""
        output = render(gradient_pixels, FixedColumns(20), RenderOptions(font_aspect=1.0))
        assert output.geometry.to_tuple() == (20, 10)
        assert len(output.grid.cells) == 200

    def test_fit_viewport(self, gradient_pixels):
        """Test rendering into a viewport."""
        output = render(gradient_pixels, FitViewport(10, 3, 0.5), RenderOptions())
        assert output.grid.width <= 10
        assert output.grid.height <= 3
        assert output.assumed_cell_aspect == 0.5

    def test_transparent_pixels_blank(self):
        """Test that fully transparent pixels render as blank glyphs."""
        pixels = make_pixels(2, 2, (0, 0, 0), alpha=255)
        pixels[0, 0, 3] = 0
        output = render(pixels, FixedColumns(2), RenderOptions(font_aspect=1.0))
        assert output.grid.cell(0, 0).ch == " "
        assert output.grid.cell(0, 0).alpha == 0.0
        assert output.grid.cell(1, 0).ch != " "
        assert output.grid.cell(1, 0).alpha == 1.0

    def test_invert(self):
        """Test that invert swaps dense and sparse glyphs."""
        white = make_pixels(2, 2, (255, 255, 255))
        options = RenderOptions(gradient=Gradient.binary(), font_aspect=1.0)
        assert _chars(render(white, FixedColumns(2), options).grid) == ["1"] * 4
        inverted = render(white, FixedColumns(2), options.with_changes(invert=True))
        assert _chars(inverted.grid) == ["0"] * 4

    def test_sobel_uniform(self):
        """Test that a uniform image has no edges."""
        pixels = make_pixels(8, 8, (200, 200, 200))
        gradient = Gradient.standard()
        options = RenderOptions(gradient=gradient, font_aspect=1.0, edge_mode=EdgeMode.SOBEL)
        output = render(pixels, FixedColumns(8), options)
        assert set(_chars(output.grid)) == {gradient.char_at(0)}

    def test_orientation(self):
        """Test directional glyphs along a vertical edge."""
        pixels = make_pixels(8, 8, (0, 0, 0))
        pixels[:, 4:, :3] = 255
        options = RenderOptions(font_aspect=1.0, edge_mode=EdgeMode.ORIENTATION)
        output = render(pixels, FixedColumns(8), options)
        rows = list(output.grid.rows())
        assert rows[0] == " " * 8
        assert rows[4][3] == "-"
        assert rows[4][4] == "-"
        assert rows[4][1] == " "

    def test_pil_and_source_frame(self):
        """Test PIL images and decoded frames as input."""
        image = PIL.Image.new("RGB", (40, 20), (255, 255, 255))
        output = render(image, FixedColumns(10), RenderOptions())
        assert output.geometry.to_tuple() == (10, 3)

        frame = SourceFrame(make_pixels(40, 20), 0.1)
        output = render(frame, FixedColumns(10), RenderOptions())
        assert output.geometry.to_tuple() == (10, 3)

    def test_empty_raster(self):
        """Test that an empty raster can not be rendered."""
        with pytest.raises(InvalidLayoutError):
            render(np.zeros((0, 4, 4), dtype=np.uint8), FixedColumns(2))


class TestRenderPath:
    """Tests for GlyphRenderer.render_path."""

    def test_render_file(self, write_png):
        """Test rendering an image file."""
        path = write_png("image.png", 40, 20)
        output = GlyphRenderer().render_path(path, FixedColumns(20), RenderOptions(font_aspect=1.0))
        assert output.geometry.to_tuple() == (20, 10)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises a DecodeError."""
        with pytest.raises(DecodeError):
            GlyphRenderer().render_path(tmp_path / "missing.png", FixedColumns(20))
