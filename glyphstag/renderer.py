"""
Glyph Renderer - Convert a raster into a styled glyph grid.

The pipeline per raster:

1. derive the target geometry from the layout policy
2. resize the raster to exactly columns x rows pixels (bicubic)
3. extract normalized luminance, apply invert/contrast/brightness
4. optionally replace it by Sobel edge features
5. map the feature field onto the gradient
6. optionally overlay true per-pixel color and alpha

Example:
    from glyphstag import GlyphRenderer, RenderOptions, FixedColumns

    renderer = GlyphRenderer()
    output = renderer.render_path("photo.jpg", FixedColumns(100), RenderOptions())
    print(output.grid.to_text())
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

import numpy as np

from .config import settings
from .decoder import decode_image
from .filters.edges import EdgeMode, sobel_map, sobel_orientation
from .filters.luminance import apply_contrast_and_brightness, extract_luma
from .filters.resample import RasterTypes, raster_size, resize_rgba
from .gradient import Gradient
from .grid import GlyphGrid
from .layout import LayoutPolicy, TargetGeometry, derive_geometry
from .mapping import GlyphMapper


class ColorMode(Enum):
    """How cell colors are assigned."""

    LUMINANCE = "luminance"  # Gray foreground equal to the glyph intensity
    TRUE_COLOR = "true_color"  # Source RGB and alpha, transparent cells blank


def _default_gradient() -> Gradient:
    return Gradient.from_preset(settings.DEFAULT_GRADIENT)


@dataclass
class RenderOptions:
    """Options for rendering a raster into a glyph grid."""

    gradient: Gradient = field(default_factory=_default_gradient)
    invert: bool = False

    # Adjustments, both in the range -255..255
    brightness: float = 0.0
    contrast: float = 0.0

    # Cell aspect (width / height) assumed when deriving the grid size
    font_aspect: float = field(default_factory=lambda: settings.FONT_ASPECT)

    edge_mode: EdgeMode = EdgeMode.NONE
    edge_threshold: float = field(default_factory=lambda: settings.SOBEL_THRESHOLD)

    color_mode: ColorMode = ColorMode.TRUE_COLOR
    transparent_threshold: float = field(
        default_factory=lambda: settings.TRANSPARENT_ALPHA_THRESHOLD
    )

    def __post_init__(self):
        if isinstance(self.edge_mode, str):
            self.edge_mode = EdgeMode(self.edge_mode)
        if isinstance(self.color_mode, str):
            self.color_mode = ColorMode(self.color_mode)
        if not self.font_aspect > 0.0:
            raise ValueError(f"font_aspect must be positive, got {self.font_aspect}")
        if not 0.0 <= self.edge_threshold <= 1.0:
            raise ValueError(f"edge_threshold must be in [0, 1], got {self.edge_threshold}")

    def with_changes(self, **changes) -> RenderOptions:
        """Returns a copy with given fields replaced."""
        return replace(self, **changes)


@dataclass
class RenderOutput:
    """Result of rendering a single raster."""

    grid: GlyphGrid
    geometry: TargetGeometry
    assumed_cell_aspect: float
    "Cell aspect used to derive the layout"


def apply_true_color(
    grid: GlyphGrid,
    pixels: np.ndarray,
    transparent_threshold: float = 0.001,
) -> GlyphGrid:
    """
    Overwrites each cell's foreground and alpha with the raster's pixel.

    Cells whose alpha is at or below ``transparent_threshold`` get a blank
    glyph so fully transparent pixels carry no ink.

    :param grid: The grid, modified in place
    :param pixels: (H, W, 4) uint8 RGBA pixels matching the grid size
    :param transparent_threshold: Alpha at/below which a cell is blanked
    :return: The grid
    """
    if pixels.shape[0] * pixels.shape[1] != len(grid.cells):
        return grid
    flat = pixels.reshape(-1, 4).tolist()
    for cell, (r, g, b, a) in zip(grid.cells, flat):
        alpha = min(max(a / 255.0, 0.0), 1.0)
        cell.fg = (r, g, b)
        cell.alpha = alpha
        if alpha <= transparent_threshold:
            cell.ch = " "
    return grid


class GlyphRenderer:
    """
    Stateless raster to glyph grid renderer.

    Rendering is a pure function of raster, layout and options, so one
    renderer can be shared across all frames of an animation.
    """

    def render_image(
        self,
        raster: RasterTypes,
        layout: LayoutPolicy,
        options: RenderOptions | None = None,
    ) -> RenderOutput:
        """
        Renders a raster into a glyph grid.

        :param raster: A numpy array, PIL image or decoded source frame
        :param layout: The layout policy
        :param options: Rendering options (defaults if None)
        :return: Grid, geometry and the assumed cell aspect

        Raises an InvalidLayoutError if no geometry can be derived.
        """
        options = options or RenderOptions()
        width, height = raster_size(raster)
        geometry = derive_geometry(layout, width, height, options.font_aspect)

        pixels = resize_rgba(raster, geometry.columns, geometry.rows)

        luminance = extract_luma(pixels, options.invert)
        luminance = apply_contrast_and_brightness(
            luminance, options.contrast, options.brightness
        )

        mapper = GlyphMapper(options.gradient)
        if options.edge_mode == EdgeMode.ORIENTATION:
            grid = mapper.map_orientation(sobel_orientation(luminance, options.edge_threshold))
        elif options.edge_mode == EdgeMode.SOBEL:
            grid = mapper.map_intensity(sobel_map(luminance, options.edge_threshold))
        else:
            grid = mapper.map_intensity(luminance)

        if options.color_mode == ColorMode.TRUE_COLOR:
            apply_true_color(grid, pixels, options.transparent_threshold)

        return RenderOutput(grid, geometry, geometry.cell_aspect)

    def render_path(
        self,
        path: str | Path,
        layout: LayoutPolicy,
        options: RenderOptions | None = None,
    ) -> RenderOutput:
        """
        Decodes an image file and renders its first frame.

        Raises a DecodeError if the file can not be decoded.
        """
        frames = decode_image(path)
        return self.render_image(frames[0], layout, options)


def render(
    raster: RasterTypes,
    layout: LayoutPolicy,
    options: RenderOptions | None = None,
) -> RenderOutput:
    """
    Shortcut for ``GlyphRenderer().render_image(...)``.
    """
    return GlyphRenderer().render_image(raster, layout, options)


__all__ = [
    "ColorMode",
    "RenderOptions",
    "RenderOutput",
    "GlyphRenderer",
    "apply_true_color",
    "render",
]
