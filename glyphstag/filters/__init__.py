# GlyphStag Filters
"""
Per-pixel signal processing on the way from raster to glyph grid.

- :mod:`.resample`: exact-size, high-quality resize into RGBA pixels
- :mod:`.luminance`: normalized luminance, invert, contrast and brightness
- :mod:`.edges`: Sobel gradient magnitude and orientation
"""

from .resample import resize_rgba, to_rgba_pixels
from .luminance import extract_luma, apply_contrast_and_brightness, contrast_factor
from .edges import EdgeMode, OrientationField, sobel_map, sobel_orientation

__all__ = [
    "resize_rgba",
    "to_rgba_pixels",
    "extract_luma",
    "apply_contrast_and_brightness",
    "contrast_factor",
    "EdgeMode",
    "OrientationField",
    "sobel_map",
    "sobel_orientation",
]
