"""
Terminal Background Player - paints an animated glyph grid behind text.

A small host for :class:`~glyphstag.components.background.PlaybackController`
using the blessed library: it derives the viewport from the terminal size,
forwards resizes, ticks the controller and paints its cells with 24-bit
ANSI colors.

Example:
    from glyphstag.components.terminal import TerminalBackgroundPlayer

    player = TerminalBackgroundPlayer("sample.gif", caption="Hello")
    player.play()

Controls:
    Q / Escape  - Exit
"""

from __future__ import annotations

import logging
import os
import signal
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from blessed import Terminal

from ...config import settings
from ...decoder import SourceFrame
from ...renderer import RenderOptions
from ..background import CellFlags, HostCell, HostPalette, PlaybackController, Viewport

logger = logging.getLogger(__name__)

# ANSI escape codes
ESC = "\033"
CLEAR_SCREEN = f"{ESC}[2J"
CURSOR_HOME = f"{ESC}[H"
RESET = f"{ESC}[0m"


@dataclass
class TerminalPlayerConfig:
    """Configuration for the terminal background player."""

    # Width/height ratio of a terminal character cell
    char_aspect: float = field(default_factory=lambda: settings.CHAR_ASPECT)
    # Seconds between host ticks
    tick_interval: float = 0.01
    # Colors used where the glyph grid defines none
    palette: HostPalette = field(default_factory=HostPalette)
    # Caption drawn over the background (bottom line)
    show_caption: bool = True


def cells_to_ansi(cells: Sequence[HostCell]) -> str:
    """
    Converts host cells into an ANSI string with cursor positioning.

    Cells with a transparent background leave the terminal background
    untouched.
    """
    parts = []
    last_line = -1
    last_column = -2
    for cell in cells:
        if cell.line != last_line or cell.column != last_column + 1:
            parts.append(f"{ESC}[{cell.line + 1};{cell.column + 1}H")
        last_line, last_column = cell.line, cell.column

        r, g, b = cell.fg
        style = f"{ESC}[0;38;2;{r};{g};{b}"
        if cell.bg_alpha > 0.0:
            br, bg, bb = cell.bg
            style += f";48;2;{br};{bg};{bb}"
        if CellFlags.DIM in cell.flags:
            style += ";2"
        if CellFlags.BOLD in cell.flags:
            style += ";1"
        parts.append(f"{style}m{cell.character}")
    if parts:
        parts.append(RESET)
    return "".join(parts)


class TerminalBackgroundPlayer:
    """
    Plays an image or animation as dimmed background of the terminal.
    """

    def __init__(
        self,
        source: str | Path | Sequence[SourceFrame],
        *,
        options: RenderOptions | None = None,
        config: TerminalPlayerConfig | None = None,
        caption: str | None = None,
        terminal: Terminal | None = None,
    ):
        """
        :param source: Image/animation path OR already decoded frames
        :param options: Rendering options for the background
        :param config: Player configuration (uses defaults if None)
        :param caption: Text drawn on the last line (defaults to file name)
        :param terminal: The blessed terminal (created if None)
        """
        self.config = config or TerminalPlayerConfig()
        self.options = options
        self._terminal = terminal or Terminal()
        if isinstance(source, (str, Path)):
            self.source_path: Path | None = Path(source)
            self._frames: Sequence[SourceFrame] | None = None
            self.caption = caption if caption is not None else self.source_path.name
        else:
            self.source_path = None
            self._frames = list(source)
            self.caption = caption or ""

        self._controller: PlaybackController | None = None
        self._running = False
        self._terminal_resized = False
        self._last_size: tuple[int, int] = (0, 0)

    @property
    def controller(self) -> PlaybackController:
        """The playback controller, created on first access."""
        if self._controller is None:
            viewport = self.viewport()
            if self.source_path is not None:
                self._controller = PlaybackController.from_path(
                    self.source_path, viewport, self.options
                )
            else:
                self._controller = PlaybackController(viewport, self._frames, self.options)
            self._last_size = (viewport.columns, viewport.lines)
        return self._controller

    def viewport(self) -> Viewport:
        """Current terminal size as viewport."""
        return Viewport(
            columns=max(0, self._terminal.width),
            lines=max(0, self._terminal.height),
            cell_width=self.config.char_aspect,
            cell_height=1.0,
        )

    def _handle_resize(self, _signum, _frame) -> None:
        """Handle terminal resize signal."""
        self._terminal_resized = True

    def _draw_caption(self, viewport: Viewport) -> str:
        if not self.config.show_caption or not self.caption or viewport.is_empty:
            return ""
        text = f" {self.caption} "[: viewport.columns]
        return f"{ESC}[{viewport.lines};1H{ESC}[1;38;2;240;240;240m{text}{RESET}"

    def tick(self, now: float) -> bool:
        """
        Processes one host tick: resize handling, playback and painting.

        :param now: Monotonic timestamp in seconds
        :return: True if the screen was repainted
        """
        controller = self.controller
        viewport = self.viewport()
        size = (viewport.columns, viewport.lines)
        if self._terminal_resized or size != self._last_size:
            self._terminal_resized = False
            self._last_size = size
            controller.on_resize(viewport)
            self._write(CLEAR_SCREEN)

        if not controller.update(now, viewport):
            return False

        cells = controller.render_visible_cells(self.config.palette, viewport)
        self._write(CURSOR_HOME + cells_to_ansi(cells) + self._draw_caption(viewport))
        return True

    def _write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def _process_input(self) -> None:
        key = self._terminal.inkey(timeout=self.config.tick_interval)
        if not key:
            return
        if key.name == "KEY_ESCAPE" or str(key) in ("q", "Q"):
            self._running = False

    def stop(self) -> None:
        """Stop playback at the next tick."""
        self._running = False

    def play(self) -> None:
        """Run the player until the user quits."""
        term = self._terminal
        old_handler = None
        if hasattr(signal, "SIGWINCH"):
            old_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        self._running = True
        try:
            with term.fullscreen(), term.hidden_cursor(), term.cbreak():
                self._write(CLEAR_SCREEN)
                if not self.controller.is_active():
                    logger.warning("Nothing to play for %s", self.source_path or "frames")
                while self._running:
                    self.tick(time.monotonic())
                    self._process_input()
        except KeyboardInterrupt:
            pass
        finally:
            self._running = False
            if old_handler is not None:
                signal.signal(signal.SIGWINCH, old_handler)
            self._write(RESET)


def get_terminal_size() -> tuple[int, int]:
    """Get terminal size with fallback."""
    try:
        size = os.get_terminal_size()
        return size.columns, size.lines
    except OSError:
        return 80, 24


__all__ = [
    "TerminalPlayerConfig",
    "TerminalBackgroundPlayer",
    "cells_to_ansi",
    "get_terminal_size",
]
