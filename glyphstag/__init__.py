"""
GlyphStag - Render images and animations as styled glyph grids and play them
in sync with a host's redraw loop.
"""

from .errors import (
    GlyphStagError,
    InvalidLayoutError,
    DecodeError,
    DimensionMismatchError,
    FrameCountMismatchError,
)
from .gradient import Gradient
from .layout import (
    TargetGeometry,
    FixedColumns,
    FitViewport,
    ScaleToHeight,
    LayoutPolicy,
    derive_geometry,
)
from .grid import RGB, CellGlyph, GlyphGrid
from .filters.edges import EdgeMode
from .mapping import GlyphMapper
from .renderer import ColorMode, RenderOptions, RenderOutput, GlyphRenderer, render
from .decoder import SourceFrame, decode_image, decode_bytes, load_frames
from .series import GlyphGridFrame, FrameSeries
from .components.background import (
    Viewport,
    HostPalette,
    HostCell,
    CellFlags,
    PlaybackController,
    BackgroundAnimation,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "GlyphStagError",
    "InvalidLayoutError",
    "DecodeError",
    "DimensionMismatchError",
    "FrameCountMismatchError",
    # Rendering
    "Gradient",
    "TargetGeometry",
    "FixedColumns",
    "FitViewport",
    "ScaleToHeight",
    "LayoutPolicy",
    "derive_geometry",
    "RGB",
    "CellGlyph",
    "GlyphGrid",
    "EdgeMode",
    "GlyphMapper",
    "ColorMode",
    "RenderOptions",
    "RenderOutput",
    "GlyphRenderer",
    "render",
    # Decoding
    "SourceFrame",
    "decode_image",
    "decode_bytes",
    "load_frames",
    # Playback
    "GlyphGridFrame",
    "FrameSeries",
    "Viewport",
    "HostPalette",
    "HostCell",
    "CellFlags",
    "PlaybackController",
    "BackgroundAnimation",
]
