# GlyphStag Filters - Edge Detection
"""
Sobel edge features on a normalized luminance field using OpenCV.

The 3x3 Sobel derivatives are evaluated for interior pixels only; the one
pixel wide border always has a magnitude of 0. Magnitudes are normalized by
dividing by 4 (the largest response of a single 0-to-1 step) and clamped to
0.0-1.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import cv2
import numpy as np


class EdgeMode(Enum):
    """Feature used to select glyphs."""

    NONE = "none"  # Plain (adjusted) luminance
    SOBEL = "sobel"  # Thresholded gradient magnitude
    ORIENTATION = "orientation"  # Directional glyphs along the local gradient


@dataclass
class OrientationField:
    """Per-pixel edge samples for orientation based glyph selection."""

    # True where the normalized magnitude passed the threshold
    active: np.ndarray
    # Normalized magnitude, 0.0-1.0
    magnitude: np.ndarray
    # Gradient direction in degrees, 0-180
    angle_degrees: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.magnitude.shape


def _sobel_gradients(values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Returns the horizontal and vertical Sobel derivatives (float32)."""
    src = np.ascontiguousarray(values, dtype=np.float32)
    gx = cv2.Sobel(src, cv2.CV_32F, 1, 0, ksize=3)
    gy = cv2.Sobel(src, cv2.CV_32F, 0, 1, ksize=3)
    return gx, gy


def _interior_mask(height: int, width: int) -> np.ndarray:
    mask = np.zeros((height, width), dtype=bool)
    mask[1:-1, 1:-1] = True
    return mask


def sobel_map(values: np.ndarray, threshold: float) -> np.ndarray:
    """
    Computes the thresholded, normalized Sobel magnitude.

    :param values: Luminance field (H, W), values 0.0-1.0
    :param threshold: Magnitudes below this value become 0 (clamped to 0-1)
    :return: float32 field (H, W). Fields smaller than 3x3 are all zero.
    """
    height, width = values.shape
    output = np.zeros((height, width), dtype=np.float32)
    threshold = min(max(float(threshold), 0.0), 1.0)

    if width < 3 or height < 3:
        return output

    gx, gy = _sobel_gradients(values)
    normalized = np.clip(np.sqrt(gx * gx + gy * gy) / np.float32(4.0), 0.0, 1.0)
    interior = normalized[1:-1, 1:-1]
    output[1:-1, 1:-1] = np.where(interior >= threshold, interior, np.float32(0.0))
    return output


def sobel_orientation(values: np.ndarray, threshold: float) -> OrientationField:
    """
    Computes normalized Sobel magnitude plus gradient direction.

    :param values: Luminance field (H, W), values 0.0-1.0
    :param threshold: Minimum normalized magnitude of an active sample
    :return: The orientation field. Border pixels are never active.
    """
    height, width = values.shape
    threshold = min(max(float(threshold), 0.0), 1.0)

    if width < 3 or height < 3:
        zeros = np.zeros((height, width), dtype=np.float32)
        return OrientationField(np.zeros((height, width), dtype=bool), zeros, zeros.copy())

    gx, gy = _sobel_gradients(values)
    interior = _interior_mask(height, width)
    magnitude = np.clip(np.sqrt(gx * gx + gy * gy) / np.float32(4.0), 0.0, 1.0)
    magnitude = np.where(interior, magnitude, np.float32(0.0)).astype(np.float32)

    angles = np.degrees(np.arctan2(gy, gx)).astype(np.float32)
    angles = np.where(angles < 0.0, angles + np.float32(180.0), angles)
    angles = np.where(interior, angles, np.float32(0.0)).astype(np.float32)

    active = interior & (magnitude > 0.0) & (magnitude >= threshold)
    return OrientationField(active, magnitude, angles)


__all__ = ["EdgeMode", "OrientationField", "sobel_map", "sobel_orientation"]
