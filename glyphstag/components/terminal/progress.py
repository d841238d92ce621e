"""Single line progress display for batch conversions."""

from __future__ import annotations

import sys
import time
from typing import TextIO

from .player import ESC, RESET, get_terminal_size


class ConversionProgress:
    """Renders a one line progress bar, redrawn in place with ``\\r``."""

    COLORS = {
        "filled": f"{ESC}[38;2;100;200;100m",  # Green for done
        "empty": f"{ESC}[38;2;80;80;80m",  # Gray for remaining
        "time": f"{ESC}[38;2;200;200;255m",  # Light blue for time
    }

    def __init__(
        self,
        total: int,
        label: str = "Converting",
        stream: TextIO | None = None,
        width: int | None = None,
    ):
        """
        :param total: Number of steps
        :param label: Text shown in front of the bar
        :param stream: Output stream, stderr if None
        :param width: Line width, the terminal width if None
        """
        self.total = max(int(total), 0)
        self.label = label
        self.stream = stream or sys.stderr
        self.width = width or get_terminal_size()[0]
        self.current = 0
        self._started = time.monotonic()

    @staticmethod
    def _format_time(seconds: float) -> str:
        """Format seconds as MM:SS or HH:MM:SS."""
        if seconds < 0:
            seconds = 0
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = int(seconds % 60)
        if hours > 0:
            return f"{hours}:{minutes:02d}:{secs:02d}"
        return f"{minutes:02d}:{secs:02d}"

    def render(self, elapsed: float | None = None) -> str:
        """Returns the progress line without a line break."""
        if elapsed is None:
            elapsed = time.monotonic() - self._started
        C = self.COLORS
        counter = f" {self.current}/{self.total} "
        clock = self._format_time(elapsed)
        bar_width = max(10, self.width - len(self.label) - len(counter) - len(clock) - 4)
        progress = self.current / self.total if self.total else 1.0
        filled = int(min(max(progress, 0.0), 1.0) * bar_width)
        return (
            f"{self.label} "
            f"{C['filled']}{'━' * filled}{C['empty']}{'─' * (bar_width - filled)}{RESET}"
            f"{counter}{C['time']}{clock}{RESET}"
        )

    def update(self, current: int) -> None:
        """Sets the number of finished steps and redraws."""
        self.current = min(max(int(current), 0), self.total)
        self.stream.write("\r" + self.render())
        self.stream.flush()

    def advance(self, steps: int = 1) -> None:
        self.update(self.current + steps)

    def finish(self) -> None:
        """Completes the bar and ends the line."""
        self.update(self.total)
        self.stream.write("\n")
        self.stream.flush()
