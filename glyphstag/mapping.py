# GlyphStag - Glyph Mapping
"""
Maps per-cell feature fields onto glyphs of a :class:`Gradient`.
"""

from __future__ import annotations

import numpy as np

from .filters.edges import OrientationField
from .gradient import Gradient
from .grid import GlyphGrid

# Directional glyphs by 45 degree sector of the gradient direction
ORIENTATION_HORIZONTAL = "-"
ORIENTATION_RISING = "/"
ORIENTATION_VERTICAL = "|"
ORIENTATION_FALLING = "\\"


def _round_levels(values: np.ndarray, levels: int) -> np.ndarray:
    """round(value * levels) with halves rounded up, for values in 0-1."""
    return np.floor(values * np.float32(levels) + np.float32(0.5)).astype(np.int64)


def _gray(values: np.ndarray) -> np.ndarray:
    level = _round_levels(values, 255).clip(0, 255).astype(np.uint8)
    return np.repeat(level[:, :, np.newaxis], 3, axis=2)


def orientation_glyph(angle: float) -> str:
    """
    Returns the directional glyph for a gradient angle in degrees.
    """
    angle = angle % 180.0
    if angle < 22.5 or angle >= 157.5:
        return ORIENTATION_HORIZONTAL
    if angle < 67.5:
        return ORIENTATION_RISING
    if angle < 112.5:
        return ORIENTATION_VERTICAL
    return ORIENTATION_FALLING


class GlyphMapper:
    """
    Turns intensity or orientation fields into glyph grids.

    Every produced cell is opaque, has no background and a gray foreground
    equal to its (quantized) intensity.
    """

    def __init__(self, gradient: Gradient):
        """
        :param gradient: The gradient used for intensity mapping
        """
        self.gradient = gradient

    def map_intensity(self, intensities: np.ndarray) -> GlyphGrid:
        """
        Maps each intensity to gradient index round(v * (N - 1)).

        :param intensities: (H, W) float field, values are clamped to 0.0-1.0
        :return: The glyph grid
        """
        if intensities.ndim != 2:
            raise ValueError(f"Expected field (H, W), got shape {intensities.shape}")
        normalized = np.clip(intensities.astype(np.float32), 0.0, 1.0)
        max_index = len(self.gradient) - 1
        indices = _round_levels(normalized, max_index).clip(0, max_index)
        palette = np.array(list(self.gradient.chars), dtype="<U1")
        return GlyphGrid.from_arrays(palette[indices], _gray(normalized))

    def map_orientation(self, field: OrientationField) -> GlyphGrid:
        """
        Maps active edge samples to directional glyphs, inactive ones to blanks.

        :param field: The orientation field
        :return: The glyph grid
        """
        angle = np.mod(field.angle_degrees, 180.0)
        chars = np.select(
            [
                (angle < 22.5) | (angle >= 157.5),
                angle < 67.5,
                angle < 112.5,
            ],
            [ORIENTATION_HORIZONTAL, ORIENTATION_RISING, ORIENTATION_VERTICAL],
            default=ORIENTATION_FALLING,
        ).astype("<U1")
        chars = np.where(field.active, chars, " ")
        intensity = np.where(field.active, np.clip(field.magnitude, 0.0, 1.0), 0.0)
        return GlyphGrid.from_arrays(chars, _gray(intensity.astype(np.float32)))


__all__ = ["GlyphMapper", "orientation_glyph"]
