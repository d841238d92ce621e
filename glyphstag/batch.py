# GlyphStag - Batch Conversion
"""
Batch conversion of images and animations into plain text glyph files.

The batch tools always use :class:`~glyphstag.layout.FixedColumns` with the
options' font aspect, so a conversion's output size depends only on the
requested width and the source proportions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, TextIO

from .config import settings
from .decoder import load_frames
from .grid import GlyphGrid
from .layout import FixedColumns
from .renderer import GlyphRenderer, RenderOptions

logger = logging.getLogger(__name__)

FRAME_FILE_PATTERN = "frame_{:04d}.txt"
"File name of the n-th converted animation frame"

ProgressCallback = Callable[[int, int], None]
"Called with (finished frames, total frames)"


def grid_to_text(grid: GlyphGrid) -> str:
    """
    Returns the grid's glyphs with every row terminated by a line break.
    """
    return "".join(f"{row}\n" for row in grid.rows())


def preview(
    input_path: str | os.PathLike,
    width: int,
    options: RenderOptions | None = None,
    stream: TextIO | None = None,
) -> GlyphGrid:
    """
    Renders the first frame of an image and prints it row by row.

    :param input_path: The image
    :param width: Number of columns
    :param options: Rendering options
    :param stream: Where to print to, stdout if None
    :return: The rendered grid
    """
    output = GlyphRenderer().render_path(input_path, FixedColumns(width), options)
    for row in output.grid.rows():
        print(row, file=stream)
    return output.grid


def convert_image(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike,
    width: int,
    options: RenderOptions | None = None,
) -> GlyphGrid:
    """
    Renders the first frame of an image into a text file.

    :param input_path: The image
    :param output_path: The text file to create
    :param width: Number of columns
    :param options: Rendering options
    :return: The rendered grid
    """
    output = GlyphRenderer().render_path(input_path, FixedColumns(width), options)
    Path(output_path).write_text(grid_to_text(output.grid), encoding="utf-8")
    logger.info("Wrote %dx%d glyphs to %s", output.grid.width, output.grid.height, output_path)
    return output.grid


def convert_animation(
    input_path: str | os.PathLike,
    out_dir: str | os.PathLike,
    width: int,
    options: RenderOptions | None = None,
    fps: float | None = None,
    progress: ProgressCallback | None = None,
) -> list[Path]:
    """
    Converts every frame of an animation into its own text file.

    :param input_path: An animated image, a still image or a directory of
        images (sorted lexicographically)
    :param out_dir: Output directory, created if missing. Frames are written
        as ``frame_0000.txt``, ``frame_0001.txt``, ...
    :param width: Number of columns
    :param options: Rendering options
    :param fps: Frame rate reported for inputs without timing information
        (``settings.ANIMATE_FPS`` if None)
    :param progress: Optional callback invoked after each written frame
    :return: The written files in frame order

    Raises a DecodeError if the input can not be loaded.
    """
    fps = settings.ANIMATE_FPS if fps is None else fps
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    frames = load_frames(input_path)
    renderer = GlyphRenderer()
    layout = FixedColumns(width)
    written = []
    for index, frame in enumerate(frames):
        output = renderer.render_image(frame, layout, options)
        frame_path = out_dir / FRAME_FILE_PATTERN.format(index)
        frame_path.write_text(grid_to_text(output.grid), encoding="utf-8")
        written.append(frame_path)
        if progress is not None:
            progress(index + 1, len(frames))

    logger.info("Frames written to %s (fps %.2f)", out_dir, fps)
    return written


__all__ = [
    "FRAME_FILE_PATTERN",
    "grid_to_text",
    "preview",
    "convert_image",
    "convert_animation",
]
