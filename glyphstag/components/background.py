"""Background animation - plays a glyph frame series behind a host's text.

The :class:`PlaybackController` owns the decoded source frames, the frame
series rendered for the current viewport and the playback cursor. It does
not schedule anything itself: the host calls :meth:`PlaybackController.update`
from its own tick/redraw loop and asks for the visible cells whenever
``update`` reports a change.

Example:
    import time
    from glyphstag.components.background import PlaybackController, Viewport, HostPalette

    viewport = Viewport(columns=120, lines=40, cell_width=9, cell_height=18)
    controller = PlaybackController.from_path("sample.gif", viewport)

    # In the host's loop:
    if controller.update(time.monotonic()):
        cells = controller.render_visible_cells(HostPalette(), viewport)
        paint(cells)

    # On resize:
    controller.on_resize(new_viewport)
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, replace
from enum import Enum, Flag, auto
from typing import Callable, Sequence

from ..config import settings
from ..decoder import SourceFrame, decode_image
from ..errors import DecodeError, DimensionMismatchError, FrameCountMismatchError
from ..gradient import Gradient
from ..grid import RGB, CellGlyph, GlyphGrid
from ..layout import FitViewport
from ..renderer import GlyphRenderer, RenderOptions
from ..series import FrameSeries, to_nanos

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """The host's visible cell area."""

    columns: int
    lines: int
    cell_width: float = 1.0
    cell_height: float = 1.0

    @property
    def cell_aspect(self) -> float:
        """Width/height of one cell, 1.0 if the cell width is unknown."""
        if self.cell_width > 0.0 and self.cell_height > 0.0:
            return self.cell_width / self.cell_height
        return 1.0

    @property
    def is_empty(self) -> bool:
        return self.columns <= 0 or self.lines <= 0


@dataclass(frozen=True)
class HostPalette:
    """Host colors used where a glyph defines none."""

    background: RGB = (0, 0, 0)
    foreground: RGB = (255, 255, 255)


class CellFlags(Flag):
    """Style flags of a host cell."""

    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINE = auto()


@dataclass
class HostCell:
    """A cell ready to be displayed by the host."""

    character: str
    line: int
    column: int
    fg: RGB
    bg: RGB
    bg_alpha: float
    underline: RGB
    flags: CellFlags = CellFlags.DIM


class ControllerState(Enum):
    """Lifecycle of a playback controller."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    REBUILDING = "rebuilding"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class PlaybackState:
    """The playback cursor."""

    current_frame_index: int = 0
    last_advance: float = 0.0
    "Timestamp (seconds) of the last paint or advance"
    needs_full_redraw: bool = True


def advance_playback(
    state: PlaybackState,
    now: float,
    frame_count: int,
    frame_delay: float,
) -> tuple[PlaybackState, bool]:
    """
    Computes the playback state for a host tick.

    A pending full redraw is reported first without advancing, so the first
    paint after construction or a resize always shows the current frame.
    Afterwards the frame index advances (looping) once ``frame_delay``
    seconds have passed since the last paint or advance. Times are compared
    in whole nanoseconds, so an exactly elapsed delay advances.

    :param state: The current state
    :param now: The tick's timestamp in seconds
    :param frame_count: Number of frames in the series
    :param frame_delay: Display delay of the current frame in seconds
    :return: The new state and whether the host has to repaint
    """
    if state.needs_full_redraw:
        return replace(state, last_advance=now, needs_full_redraw=False), True

    if to_nanos(now) - to_nanos(state.last_advance) < to_nanos(frame_delay):
        return state, False

    index = state.current_frame_index
    if frame_count > 1:
        index = (index + 1) % frame_count
    return PlaybackState(index, now, False), True


class PlaybackController:
    """Play decoded source frames as glyph animation inside a host viewport.

    Decoded frames are kept for the controller's lifetime and shared by all
    geometries. The frame series is rebuilt from them on every resize, which
    also resets playback to frame 0 and forces a full redraw.

    The controller is inactive - :meth:`update` and
    :meth:`render_visible_cells` do nothing - while the viewport is empty or
    no frame could be rendered.
    """

    def __init__(
        self,
        viewport: Viewport,
        source_frames: Sequence[SourceFrame],
        options: RenderOptions | None = None,
        *,
        fallback_delay: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        :param viewport: The initial viewport
        :param source_frames: Decoded frames in playback order
        :param options: Rendering options, defaults with the blocks gradient
            if None
        :param fallback_delay: Delay in seconds used for frames without one
            (``settings.FALLBACK_FRAME_DELAY`` if None)
        :param clock: Time source for the initial timestamp
        """
        self.options = options or RenderOptions(gradient=Gradient.blocks())
        self.fallback_delay = (
            settings.FALLBACK_FRAME_DELAY if fallback_delay is None else fallback_delay
        )
        self._clock = clock
        self._renderer = GlyphRenderer()
        self._source_frames: tuple[SourceFrame, ...] = tuple(source_frames)
        self._controller_state = ControllerState.UNINITIALIZED
        self._series = FrameSeries()
        self._playback = PlaybackState()
        self._viewport = viewport
        self._rebuild(viewport)

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike,
        viewport: Viewport,
        options: RenderOptions | None = None,
        **kwargs,
    ) -> PlaybackController:
        """
        Creates a controller from an image or animation file.

        A file which can not be decoded results in an inactive controller.
        """
        try:
            frames = decode_image(path)
        except DecodeError as e:
            logger.warning("Failed to load background animation: %s", e)
            frames = []
        return cls(viewport, frames, options, **kwargs)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def source_frames(self) -> tuple[SourceFrame, ...]:
        return self._source_frames

    @property
    def series(self) -> FrameSeries:
        """The frame series for the current viewport."""
        return self._series

    @property
    def state(self) -> ControllerState:
        return self._controller_state

    @property
    def playback(self) -> PlaybackState:
        return self._playback

    @property
    def current_frame_index(self) -> int:
        return self._playback.current_frame_index

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def is_active(self, viewport: Viewport | None = None) -> bool:
        """
        True if there is something to draw into given (or the last) viewport.
        """
        viewport = viewport or self._viewport
        return (
            not viewport.is_empty
            and self._series.width > 0
            and self._series.height > 0
            and not self._series.is_empty()
        )

    # -------------------------------------------------------------------------
    # Source & geometry
    # -------------------------------------------------------------------------

    def load_source(self, source_frames: Sequence[SourceFrame]) -> None:
        """
        Replaces the source frames and rebuilds for the current viewport.
        """
        self._source_frames = tuple(source_frames)
        self._rebuild(self._viewport)

    def on_resize(self, viewport: Viewport) -> None:
        """
        Rebuilds the frame series for a new viewport.

        Playback restarts at frame 0 with a full redraw.
        """
        self._rebuild(viewport)

    def _rebuild(self, viewport: Viewport) -> None:
        self._controller_state = ControllerState.REBUILDING
        series = self._create_series(viewport)
        self._viewport = viewport
        self._series = series
        self._playback = PlaybackState(0, self._clock(), True)
        self._controller_state = (
            ControllerState.ACTIVE if self.is_active(viewport) else ControllerState.INACTIVE
        )
        logger.debug(
            "Rebuilt background for %dx%d viewport: %d frames of %dx%d",
            viewport.columns,
            viewport.lines,
            len(series),
            series.width,
            series.height,
        )

    def _create_series(self, viewport: Viewport) -> FrameSeries:
        if not self._source_frames or viewport.is_empty:
            return FrameSeries()

        layout = FitViewport(viewport.columns, viewport.lines, viewport.cell_aspect)
        grids: list[GlyphGrid] = []
        delays: list[float] = []
        dimensions: tuple[int, int] | None = None

        for index, frame in enumerate(self._source_frames):
            try:
                output = self._renderer.render_image(frame, layout, self.options)
            except ValueError as e:
                logger.warning("Failed to render background frame %d: %s", index, e)
                continue

            grid = output.grid
            if grid.width == 0 or grid.height == 0:
                continue
            if dimensions is None:
                dimensions = (grid.width, grid.height)
            elif dimensions != (grid.width, grid.height):
                logger.warning(
                    "Skipping background frame %d with mismatched dimensions %dx%d",
                    index,
                    grid.width,
                    grid.height,
                )
                continue
            grids.append(grid)
            delays.append(frame.delay)

        if not grids:
            return FrameSeries()

        try:
            return FrameSeries.from_grids(grids, delays)
        except (FrameCountMismatchError, DimensionMismatchError) as e:
            logger.warning("Dropping rendered background frames: %s", e)
            return FrameSeries()

    # -------------------------------------------------------------------------
    # Playback
    # -------------------------------------------------------------------------

    def current_frame_delay(self) -> float:
        """
        Display delay of the current frame in seconds.

        Zero delays and series without delays use the fallback delay, so a
        zero delay animation can not spin the host's redraw loop.
        """
        delays = self._series.durations
        if not delays:
            return self.fallback_delay
        delay = delays[min(self._playback.current_frame_index, len(delays) - 1)]
        return delay if delay > 0.0 else self.fallback_delay

    def update(self, now: float, viewport: Viewport | None = None) -> bool:
        """
        Advances playback for a host tick.

        :param now: Timestamp in seconds (same clock as the controller's)
        :param viewport: The host's viewport, the last known one if None
        :return: True if the host has to repaint
        """
        if not self.is_active(viewport):
            return False
        self._playback, changed = advance_playback(
            self._playback, now, len(self._series), self.current_frame_delay()
        )
        return changed

    def current_grid(self) -> GlyphGrid | None:
        """The grid of the current frame, None if there is none."""
        return self._series.frame(self._playback.current_frame_index)

    def current_frame_cells(self) -> list[CellGlyph]:
        grid = self.current_grid()
        return grid.cells if grid is not None else []

    def render_visible_cells(
        self,
        palette: HostPalette,
        viewport: Viewport | None = None,
        out: list[HostCell] | None = None,
    ) -> list[HostCell]:
        """
        Emits the current frame's cells clipped to the viewport.

        Cells without background use the palette's background with zero
        opacity, so the host's own background shows through.

        :param palette: The host palette
        :param viewport: The viewport to clip to, the last known one if None
        :param out: Optional list the cells are appended to
        :return: The list of cells
        """
        out = [] if out is None else out
        viewport = viewport or self._viewport
        if not self.is_active(viewport):
            return out

        grid = self.current_grid()
        if grid is None or grid.is_empty:
            return out

        visible_columns = min(viewport.columns, grid.width)
        visible_lines = min(viewport.lines, grid.height)

        for line in range(visible_lines):
            row_start = line * grid.width
            for column in range(visible_columns):
                cell = grid.cells[row_start + column]
                if cell.bg is not None:
                    bg, bg_alpha = cell.bg, 1.0
                else:
                    bg, bg_alpha = palette.background, 0.0
                out.append(
                    HostCell(
                        character=cell.ch,
                        line=line,
                        column=column,
                        fg=cell.fg,
                        bg=bg,
                        bg_alpha=bg_alpha,
                        underline=cell.fg,
                        flags=CellFlags.DIM,
                    )
                )
        return out


# Alias matching the host-side naming
BackgroundAnimation = PlaybackController


__all__ = [
    "Viewport",
    "HostPalette",
    "CellFlags",
    "HostCell",
    "ControllerState",
    "PlaybackState",
    "advance_playback",
    "PlaybackController",
    "BackgroundAnimation",
]
