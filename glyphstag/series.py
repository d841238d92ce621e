# GlyphStag - Frame Series
"""
Frame series - timed sequences of glyph grids sharing one geometry.

Durations are passed in seconds but accumulated as integer nanoseconds, so
looping lookups stay exact no matter how many cycles have elapsed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from .errors import DimensionMismatchError, FrameCountMismatchError
from .grid import GlyphGrid
from .layout import LayoutPolicy, TargetGeometry, derive_geometry

NANOS_PER_SECOND = 1_000_000_000


def to_nanos(seconds: float) -> int:
    """
    Converts seconds to whole nanoseconds.

    Negative and non-finite values (inf, nan) count as 0.
    """
    if not math.isfinite(seconds):
        return 0
    return max(int(round(seconds * NANOS_PER_SECOND)), 0)


@dataclass
class GlyphGridFrame:
    """A glyph grid and how long it is displayed."""

    grid: GlyphGrid
    duration: float
    "Display duration in seconds"


class FrameSeries:
    """
    An ordered sequence of (grid, duration) frames of identical size.

    The geometry is either declared up front or fixed by the first pushed
    frame. Every later frame has to match it.
    """

    def __init__(self, geometry: TargetGeometry | None = None):
        """
        :param geometry: The declared geometry, None to adopt the first frame's
        """
        self._frames: list[GlyphGridFrame] = []
        self._durations_ns: list[int] = []
        self._total_ns = 0
        self._geometry = geometry

    @classmethod
    def from_grids(
        cls,
        grids: Sequence[GlyphGrid],
        durations: Sequence[float],
        geometry: TargetGeometry | None = None,
    ) -> FrameSeries:
        """
        Builds a series from grids and their durations.

        :param grids: The grids, all of identical size
        :param durations: One duration in seconds per grid
        :param geometry: The declared geometry (adopted from the first grid
            if None)
        :return: The series

        Raises a FrameCountMismatchError if the total number of cells is not
        the geometry's area times the number of frames and a
        DimensionMismatchError if a single grid has the wrong size.
        """
        if len(grids) != len(durations):
            raise ValueError(f"Got {len(grids)} grids but {len(durations)} durations")
        series = cls(geometry)
        if not grids:
            return series
        reference = geometry or grids[0]
        if isinstance(reference, TargetGeometry):
            area = reference.area
        else:
            area = reference.width * reference.height
        total_cells = sum(len(grid.cells) for grid in grids)
        if total_cells != area * len(grids):
            raise FrameCountMismatchError(
                f"Expected {area * len(grids)} cells for {len(grids)} frames, found {total_cells}"
            )
        for grid, duration in zip(grids, durations):
            series.push_frame(GlyphGridFrame(grid, duration))
        return series

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def geometry(self) -> TargetGeometry | None:
        """The shared geometry, None for an empty series without declaration."""
        return self._geometry

    @property
    def width(self) -> int:
        return self._geometry.columns if self._geometry is not None else 0

    @property
    def height(self) -> int:
        return self._geometry.rows if self._geometry is not None else 0

    @property
    def durations(self) -> list[float]:
        """Per frame durations in seconds."""
        return [frame.duration for frame in self._frames]

    def is_empty(self) -> bool:
        return not self._frames

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[GlyphGridFrame]:
        return iter(self._frames)

    def total_duration(self) -> float:
        """Sum of all frame durations in seconds."""
        return self._total_ns / NANOS_PER_SECOND

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def set_geometry(self, geometry: TargetGeometry) -> None:
        """Declares the geometry of an empty series."""
        if self._frames and geometry.to_tuple() != self._geometry.to_tuple():
            raise DimensionMismatchError(
                "Can not change the geometry of a series which contains frames"
            )
        self._geometry = geometry

    def clear(self) -> None:
        """Removes all frames, the geometry is kept."""
        self._frames.clear()
        self._durations_ns.clear()
        self._total_ns = 0

    def push_frame(self, frame: GlyphGridFrame) -> None:
        """
        Appends a frame.

        Raises a DimensionMismatchError if the grid's size differs from the
        series' geometry or the grid is empty.
        """
        grid = frame.grid
        if grid.width <= 0 or grid.height <= 0:
            raise DimensionMismatchError("Can not add an empty grid to a frame series")
        if self._geometry is None:
            self._geometry = TargetGeometry(grid.width, grid.height, grid.height / grid.width)
        elif (grid.width, grid.height) != self._geometry.to_tuple():
            raise DimensionMismatchError(
                f"Grid of {grid.width}x{grid.height} does not match series geometry "
                f"{self._geometry.columns}x{self._geometry.rows}"
            )
        duration_ns = to_nanos(frame.duration)
        self._frames.append(frame)
        self._durations_ns.append(duration_ns)
        self._total_ns += duration_ns

    def rebuild_from(
        self,
        frame_count: int,
        frame_duration: float,
        builder: Callable[[int, TargetGeometry], GlyphGrid],
    ) -> None:
        """
        Replaces all frames by ``frame_count`` grids created by ``builder``.

        Nothing is built if the series has no geometry.

        :param frame_count: Number of frames to build
        :param frame_duration: Duration of each frame in seconds
        :param builder: Called with (index, geometry), returns the grid
        """
        self.clear()
        if frame_count <= 0 or self._geometry is None:
            return
        for index in range(frame_count):
            self.push_frame(GlyphGridFrame(builder(index, self._geometry), frame_duration))

    def update_geometry_from_layout(
        self,
        layout: LayoutPolicy,
        source_width: int,
        source_height: int,
        default_aspect: float,
    ) -> TargetGeometry:
        """
        Derives the geometry for a source size and adopts it if it changed.

        Frames of a different size are removed when the geometry changes.
        """
        geometry = derive_geometry(layout, source_width, source_height, default_aspect)
        if self._geometry != geometry:
            if self._geometry is None or self._geometry.to_tuple() != geometry.to_tuple():
                self.clear()
            self._geometry = geometry
        return geometry

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def normalize_elapsed(self, elapsed: float) -> float:
        """
        Reduces an elapsed time modulo the total duration.

        :return: Seconds into the current loop, 0 for series with at most one
            frame or a total duration of zero
        """
        if len(self._frames) <= 1 or self._total_ns == 0:
            return 0.0
        return (to_nanos(elapsed) % self._total_ns) / NANOS_PER_SECOND

    def frame_index_at(self, elapsed: float) -> int | None:
        """
        Returns the index of the frame shown after ``elapsed`` seconds.

        Playback loops. Zero duration frames span no time and are passed
        over, the last frame absorbs any remainder. Negative or non-finite
        elapsed values count as 0.

        :return: The index, None for an empty series
        """
        if not self._frames:
            return None
        if len(self._frames) == 1 or self._total_ns == 0:
            return 0

        remaining = to_nanos(elapsed) % self._total_ns
        for index, duration in enumerate(self._durations_ns):
            if remaining < duration:
                return index
            remaining -= duration
        return len(self._frames) - 1

    def frame_at(self, elapsed: float) -> GlyphGrid | None:
        """Returns the grid shown after ``elapsed`` seconds."""
        index = self.frame_index_at(elapsed)
        return self._frames[index].grid if index is not None else None

    def frame(self, index: int) -> GlyphGrid | None:
        """Returns the grid at given index, None if out of range."""
        if 0 <= index < len(self._frames):
            return self._frames[index].grid
        return None

    def delay(self, index: int) -> float | None:
        """Returns the duration of the frame at given index, None if out of range."""
        if 0 <= index < len(self._frames):
            return self._frames[index].duration
        return None


__all__ = ["GlyphGridFrame", "FrameSeries", "NANOS_PER_SECOND", "to_nanos"]
