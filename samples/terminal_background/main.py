#!/usr/bin/env python3
"""
Terminal Background - Play an image or animation dimmed behind a caption.

This sample demonstrates the PlaybackController hosted by the
TerminalBackgroundPlayer component.

Usage:
    python samples/terminal_background/main.py [image_or_gif]

Examples:
    # Play a generated demo animation
    python samples/terminal_background/main.py

    # Play your own GIF with sobel edges
    python samples/terminal_background/main.py --edge sobel clip.gif

    # Print every gradient preset once instead of playing
    python samples/terminal_background/main.py --demo photo.jpg

Controls:
    Q / Escape  - Exit
"""

import argparse
import math
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from glyphstag import FixedColumns, Gradient, GlyphRenderer, RenderOptions, SourceFrame
from glyphstag.components.terminal import TerminalBackgroundPlayer, TerminalPlayerConfig

# ANSI escape codes for demo mode
ESC = "\033"
RESET = f"{ESC}[0m"


def generate_frames(count: int = 24, width: int = 160, height: int = 90) -> list[SourceFrame]:
    """Create a moving radial color wave."""
    y, x = np.mgrid[0:height, 0:width].astype(np.float32)
    cx, cy = width / 2, height / 2
    distance = np.sqrt((x - cx) ** 2 + (y - cy) ** 2)
    frames = []
    for index in range(count):
        phase = 2 * math.pi * index / count
        wave = (np.sin(distance / 6.0 - phase) + 1.0) / 2.0
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[:, :, 0] = (wave * 255).astype(np.uint8)
        pixels[:, :, 1] = (x / width * 200).astype(np.uint8)
        pixels[:, :, 2] = ((1.0 - wave) * 255).astype(np.uint8)
        pixels[:, :, 3] = 255
        frames.append(SourceFrame(pixels, 0.08))
    return frames


def demo_gradients(source):
    """Print one rendering per gradient preset."""
    renderer = GlyphRenderer()
    frame = source[0] if isinstance(source, list) else None
    for name in sorted(Gradient.PRESETS):
        print(f"\n{ESC}[1;33m{name}{RESET}\n")
        options = RenderOptions(gradient=Gradient.from_preset(name))
        if frame is not None:
            output = renderer.render_image(frame, FixedColumns(60), options)
        else:
            output = renderer.render_path(source, FixedColumns(60), options)
        print(output.grid.to_text())


def main():
    parser = argparse.ArgumentParser(
        description="Terminal Background - Play an image or animation behind a caption",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Image or animation path (default: generated animation)",
    )
    parser.add_argument(
        "--gradient",
        "-g",
        choices=sorted(Gradient.PRESETS),
        default="blocks",
        help="Gradient preset (default: blocks)",
    )
    parser.add_argument(
        "--edge",
        choices=["none", "sobel", "orientation"],
        default="none",
        help="Edge mode (default: none)",
    )
    parser.add_argument(
        "--aspect",
        "-a",
        type=float,
        default=0.45,
        help="Terminal char aspect ratio (width/height, default: 0.45)",
    )
    parser.add_argument(
        "--caption",
        default="GlyphStag terminal background - press q to quit",
        help="Caption on the last line",
    )
    parser.add_argument(
        "--demo",
        "-d",
        action="store_true",
        help="Print all gradient presets instead of playing",
    )

    args = parser.parse_args()
    source = args.source if args.source else generate_frames()

    if args.demo:
        demo_gradients(source)
        return 0

    options = RenderOptions(gradient=Gradient.from_preset(args.gradient), edge_mode=args.edge)
    player = TerminalBackgroundPlayer(
        source,
        options=options,
        config=TerminalPlayerConfig(char_aspect=args.aspect),
        caption=args.caption,
    )
    player.play()
    return 0


if __name__ == "__main__":
    exit(main())
