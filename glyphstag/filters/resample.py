# GlyphStag Filters - Resample
"""
Conversion of the supported raster types into RGBA pixels and exact-size
resampling with a bicubic (Catmull-Rom like) filter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import numpy as np
import PIL.Image

if TYPE_CHECKING:
    from glyphstag.decoder import SourceFrame

RasterTypes = Union[np.ndarray, PIL.Image.Image, "SourceFrame"]
"The raster types accepted by the renderer"


def _array_to_pil(pixels: np.ndarray) -> PIL.Image.Image:
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")
    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[:, :, 0]
    if pixels.ndim == 2 or (pixels.ndim == 3 and pixels.shape[2] in (3, 4)):
        # Mode is inferred: L, RGB or RGBA
        return PIL.Image.fromarray(np.ascontiguousarray(pixels))
    raise ValueError(f"Expected pixels (H, W), (H, W, 1|3|4), got shape {pixels.shape}")


def to_pil(raster: RasterTypes) -> PIL.Image.Image:
    """
    Converts a raster into an RGBA PIL image.

    :param raster: A numpy array (gray, RGB or RGBA uint8), a PIL image or a
        decoded source frame
    :return: The image in RGBA mode
    """
    if isinstance(raster, PIL.Image.Image):
        image = raster
    elif isinstance(raster, np.ndarray):
        image = _array_to_pil(raster)
    elif hasattr(raster, "pixels"):
        image = _array_to_pil(raster.pixels)
    else:
        raise TypeError(f"Unsupported raster type: {type(raster).__name__}")
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


def to_rgba_pixels(raster: RasterTypes) -> np.ndarray:
    """
    Returns the raster's pixels as (H, W, 4) uint8 array.
    """
    return np.asarray(to_pil(raster), dtype=np.uint8)


def raster_size(raster: RasterTypes) -> tuple[int, int]:
    """
    Returns the (width, height) of a raster without converting it.
    """
    if isinstance(raster, PIL.Image.Image):
        return raster.size
    pixels = raster if isinstance(raster, np.ndarray) else raster.pixels
    return int(pixels.shape[1]), int(pixels.shape[0])


def resize_rgba(raster: RasterTypes, columns: int, rows: int) -> np.ndarray:
    """
    Resizes a raster to exactly columns x rows pixels.

    :param raster: The source raster
    :param columns: Target width
    :param rows: Target height
    :return: (rows, columns, 4) uint8 RGBA pixels
    """
    image = to_pil(raster)
    if image.size != (columns, rows):
        image = image.resize((columns, rows), PIL.Image.Resampling.BICUBIC)
    return np.asarray(image, dtype=np.uint8)


__all__ = ["RasterTypes", "to_pil", "to_rgba_pixels", "raster_size", "resize_rgba"]
