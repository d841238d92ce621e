# GlyphStag - Decoder
"""
Decodes image files and byte streams into :class:`SourceFrame` objects.

Static images produce exactly one frame with the configured static delay;
animated GIF/PNG/WebP sources produce one frame per animation frame with the
delay stored in the file (which may be 0). Interpreting a zero delay is up
to the consumer.

Decoding is the expensive, geometry independent step, so decoded frames are
read-only and meant to be shared by every geometry rendered from them.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import filetype
import numpy as np
import PIL.Image
import PIL.ImageSequence

from .config import settings
from .errors import DecodeError

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_FILETYPES = ["png", "bmp", "jpg", "jpeg", "gif", "webp"]
"List of image file types which can be decoded"

ANIMATED_MIME_TYPES = {"image/gif", "image/png", "image/apng", "image/webp"}
"MIME types which may carry more than one frame"


@dataclass(frozen=True, eq=False)
class SourceFrame:
    """A decoded raster plus its display delay."""

    pixels: np.ndarray
    "Read-only (H, W, 4) uint8 RGBA pixels"
    delay: float
    "Display delay in seconds, 0 if the source defines none"

    @classmethod
    def from_pil(cls, image: PIL.Image.Image, delay: float) -> SourceFrame:
        """
        Creates a frame from a PIL image, converting it to RGBA.
        """
        pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
        pixels.setflags(write=False)
        return cls(pixels, max(float(delay), 0.0))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.width, self.height


def _detect_mime_type(data: bytes) -> str | None:
    kind = filetype.guess(data)
    return kind.mime if kind is not None else None


def _decode_pil(image: PIL.Image.Image, mime_type: str | None) -> list[SourceFrame]:
    frame_count = getattr(image, "n_frames", 1)
    if frame_count <= 1 or mime_type not in ANIMATED_MIME_TYPES:
        return [SourceFrame.from_pil(image, settings.STATIC_FRAME_DELAY)]

    frames = []
    for frame in PIL.ImageSequence.Iterator(image):
        # Pillow reports frame durations in milliseconds
        duration = frame.info.get("duration", 0) or 0
        frames.append(SourceFrame.from_pil(frame, duration / 1000.0))
    return frames


def _decode_data(data: bytes, label: str) -> list[SourceFrame]:
    mime_type = _detect_mime_type(data)
    try:
        with PIL.Image.open(io.BytesIO(data)) as image:
            return _decode_pil(image, mime_type)
    except (PIL.UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Failed to decode {label}: {e}") from e


def decode_bytes(data: bytes) -> list[SourceFrame]:
    """
    Decodes an image from memory.

    :param data: Compressed image data (PNG, JPEG, GIF, WebP, BMP)
    :return: The decoded frames, never empty

    Raises a DecodeError if the data can not be decoded.
    """
    return _decode_data(data, "image data")


def decode_image(source: str | os.PathLike | bytes) -> list[SourceFrame]:
    """
    Decodes an image file or byte stream.

    :param source: A file path or the compressed bytes
    :return: The decoded frames, never empty

    Raises a DecodeError if the source can not be read or decoded.
    """
    if isinstance(source, (bytes, bytearray)):
        return decode_bytes(bytes(source))
    path = Path(source)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Failed to open image {path}: {e}") from e
    return _decode_data(data, f"image {path}")


def list_image_files(directory: str | os.PathLike) -> list[Path]:
    """
    Lists the image files below a directory (recursively), sorted
    lexicographically.

    Files whose extension is not in ``SUPPORTED_IMAGE_FILETYPES`` are ignored.
    """
    directory = Path(directory)
    entries = [
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower().lstrip(".") in SUPPORTED_IMAGE_FILETYPES
    ]
    return sorted(entries, key=lambda path: str(path))


def load_frames(path: str | os.PathLike) -> list[SourceFrame]:
    """
    Loads all frames of an input for batch conversion.

    :param path: A single image, an animation (GIF etc.) or a directory of
        images. Directory entries are sorted lexicographically and each
        file contributes its first frame.
    :return: The decoded frames, never empty

    Raises a DecodeError if nothing could be loaded.
    """
    path = Path(path)
    if path.is_dir():
        entries = list_image_files(path)
        if not entries:
            raise DecodeError(f"No image files found in {path}")
        frames = []
        for entry in entries:
            frames.append(decode_image(entry)[0])
        logger.debug("Loaded %d frames from directory %s", len(frames), path)
        return frames
    frames = decode_image(path)
    logger.debug("Loaded %d frames from %s", len(frames), path)
    return frames


__all__ = [
    "SourceFrame",
    "SUPPORTED_IMAGE_FILETYPES",
    "decode_bytes",
    "decode_image",
    "list_image_files",
    "load_frames",
]
