"""Playback components hosting glyph animations."""

from .background import (
    BackgroundAnimation,
    CellFlags,
    ControllerState,
    HostCell,
    HostPalette,
    PlaybackController,
    PlaybackState,
    Viewport,
    advance_playback,
)

__all__ = [
    "BackgroundAnimation",
    "CellFlags",
    "ControllerState",
    "HostCell",
    "HostPalette",
    "PlaybackController",
    "PlaybackState",
    "Viewport",
    "advance_playback",
]
