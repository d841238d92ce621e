"""
Pytest fixtures for GlyphStag tests
"""

from pathlib import Path

import numpy as np
import PIL.Image
import pytest

from glyphstag.decoder import SourceFrame


def make_pixels(width: int, height: int, color=(255, 0, 0), alpha: int = 255) -> np.ndarray:
    """
    Creates a solid RGBA raster.
    """
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = color
    pixels[:, :, 3] = alpha
    return pixels


def make_frame(width: int = 40, height: int = 20, color=(255, 0, 0), delay: float = 0.1) -> SourceFrame:
    """
    Creates a solid source frame.
    """
    return SourceFrame(make_pixels(width, height, color), delay)


@pytest.fixture
def gradient_pixels() -> np.ndarray:
    """A 40x20 RGB raster with a horizontal red and vertical green ramp."""
    pixels = np.zeros((20, 40, 3), dtype=np.uint8)
    for y in range(20):
        for x in range(40):
            pixels[y, x] = [int(x * 6), int(y * 12), 128]
    return pixels


@pytest.fixture
def red_pixels() -> np.ndarray:
    """A 2x2 opaque solid red raster."""
    return make_pixels(2, 2, (255, 0, 0))


@pytest.fixture
def write_png(tmp_path):
    """
    Returns a function writing a solid PNG into tmp_path.
    """

    def _write(name: str, width: int = 40, height: int = 20, color=(255, 0, 0)) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        PIL.Image.new("RGB", (width, height), color).save(path)
        return path

    return _write


@pytest.fixture
def write_gif(tmp_path):
    """
    Returns a function writing an animated GIF into tmp_path.

    Each frame has its own color so Pillow does not merge frames.
    """

    def _write(
        name: str = "anim.gif",
        durations_ms=(100, 200, 300),
        width: int = 40,
        height: int = 20,
    ) -> Path:
        colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (0, 255, 255)]
        frames = [
            PIL.Image.new("RGB", (width, height), colors[index % len(colors)])
            for index in range(len(durations_ms))
        ]
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        frames[0].save(
            path,
            save_all=True,
            append_images=frames[1:],
            duration=list(durations_ms),
            loop=0,
        )
        return path

    return _write
