"""Terminal hosts for glyph animations.

- TerminalBackgroundPlayer: plays an image or animation as dimmed terminal background
- ConversionProgress: progress line for batch conversions
"""

from .player import (
    TerminalBackgroundPlayer,
    TerminalPlayerConfig,
    cells_to_ansi,
    get_terminal_size,
)
from .progress import ConversionProgress

__all__ = [
    "TerminalBackgroundPlayer",
    "TerminalPlayerConfig",
    "cells_to_ansi",
    "get_terminal_size",
    "ConversionProgress",
]
