# GlyphStag Filters - Luminance
"""Normalized luminance extraction and contrast/brightness remapping.

All fields are float32 arrays of shape (H, W) with values in 0.0-1.0.

Usage:
    from glyphstag.filters.luminance import extract_luma, apply_contrast_and_brightness

    luma = extract_luma(rgba_pixels, invert=False)
    luma = apply_contrast_and_brightness(luma, contrast=40.0, brightness=-10.0)
"""

from __future__ import annotations

import numpy as np

LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)
"ITU-R BT.709 luminosity coefficients for R, G and B"


def extract_luma(pixels: np.ndarray, invert: bool = False) -> np.ndarray:
    """Extract normalized luminance from RGB(A) pixels.

    Uses ITU-R BT.709 luminosity coefficients:
    Y = 0.2126*R + 0.7152*G + 0.0722*B

    Args:
        pixels: uint8 array (H, W, 3|4). Alpha is ignored.
        invert: Return 1 - luminance

    Returns:
        float32 array (H, W), clamped to 0.0-1.0
    """
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected pixels (H, W, 3|4), got shape {pixels.shape}")

    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")

    rgb = np.ascontiguousarray(pixels[:, :, :3]).astype(np.float32) / 255.0
    luma = rgb @ LUMA_WEIGHTS
    if invert:
        luma = 1.0 - luma
    return np.clip(luma, 0.0, 1.0).astype(np.float32)


def contrast_factor(contrast: float) -> float:
    """Photographic contrast factor for contrast in -255..255.

    f = 259 * (c + 255) / (255 * (259 - c))
    """
    contrast = min(max(float(contrast), -255.0), 255.0)
    return (259.0 * (contrast + 255.0)) / (255.0 * (259.0 - contrast))


def apply_contrast_and_brightness(
    values: np.ndarray,
    contrast: float = 0.0,
    brightness: float = 0.0,
) -> np.ndarray:
    """Remap a luminance field with contrast and brightness.

    Each sample becomes clamp(f * (v - 0.5) + 0.5 + brightness / 255, 0, 1).

    Args:
        values: float32 luminance field, any shape
        contrast: -255 (flat gray) to 255 (maximum contrast), 0 = no change
        brightness: -255 (black) to 255 (white), 0 = no change

    Returns:
        Adjusted float32 array. With both parameters zero the input is
        returned unchanged.
    """
    if contrast == 0.0 and brightness == 0.0:
        return values

    factor = np.float32(contrast_factor(contrast))
    offset = np.float32(min(max(brightness / 255.0, -1.0), 1.0))
    result = factor * (values.astype(np.float32) - np.float32(0.5)) + np.float32(0.5) + offset
    return np.clip(result, 0.0, 1.0).astype(np.float32)


__all__ = ["extract_luma", "contrast_factor", "apply_contrast_and_brightness"]
