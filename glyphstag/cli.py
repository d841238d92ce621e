#!/usr/bin/env python3
"""
GlyphStag command line - convert images or animations to glyph grids.

Usage:
    glyphstag preview photo.jpg --width 80
    glyphstag convert photo.jpg -o photo.txt --gradient blocks
    glyphstag animate clip.gif -o frames/ --edge sobel
    glyphstag play clip.gif --caption "Hello"
"""

from __future__ import annotations

import argparse
import logging
import sys

from .batch import convert_animation, convert_image, preview
from .config import settings
from .errors import DecodeError, InvalidLayoutError
from .filters.edges import EdgeMode
from .gradient import Gradient
from .renderer import ColorMode, RenderOptions

logger = logging.getLogger(__name__)

MIN_FONT_ASPECT = 0.1
"Lower bound applied to --font-aspect"


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("rendering")
    group.add_argument(
        "--gradient",
        choices=sorted(Gradient.PRESETS),
        default=settings.DEFAULT_GRADIENT,
        help=f"Gradient preset mapping intensity to glyphs (default: {settings.DEFAULT_GRADIENT})",
    )
    group.add_argument(
        "--brightness",
        type=float,
        default=0.0,
        help="Brightness adjustment (-255..255)",
    )
    group.add_argument(
        "--contrast",
        type=float,
        default=0.0,
        help="Contrast adjustment (-255..255)",
    )
    group.add_argument(
        "--invert",
        action="store_true",
        help="Invert luminance before processing",
    )
    group.add_argument(
        "--font-aspect",
        type=float,
        default=settings.FONT_ASPECT,
        help=f"Character cell aspect ratio, width/height (default: {settings.FONT_ASPECT})",
    )
    group.add_argument(
        "--edge",
        choices=[mode.value for mode in EdgeMode],
        default=EdgeMode.NONE.value,
        help="Edge detection strategy (default: none)",
    )
    group.add_argument(
        "--sobel-threshold",
        type=float,
        default=settings.SOBEL_THRESHOLD,
        help=f"Sobel edge threshold 0.0-1.0 (default: {settings.SOBEL_THRESHOLD})",
    )
    group.add_argument(
        "--color-mode",
        choices=[mode.value for mode in ColorMode],
        default=ColorMode.TRUE_COLOR.value,
        help="Cell colors: source colors or grayscale (default: true_color)",
    )


def options_from_args(args: argparse.Namespace) -> RenderOptions:
    """Builds the rendering options from parsed command line arguments."""
    return RenderOptions(
        gradient=Gradient.from_preset(args.gradient),
        invert=args.invert,
        brightness=args.brightness,
        contrast=args.contrast,
        font_aspect=max(args.font_aspect, MIN_FONT_ASPECT),
        edge_mode=EdgeMode(args.edge),
        edge_threshold=min(max(args.sobel_threshold, 0.0), 1.0),
        color_mode=ColorMode(args.color_mode),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphstag",
        description="Convert images or animations to glyph grids",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    preview_parser = commands.add_parser(
        "preview", help="Render glyph art to stdout for a quick preview"
    )
    preview_parser.add_argument("input", help="Input image path")
    preview_parser.add_argument(
        "--width",
        type=int,
        default=settings.PREVIEW_WIDTH,
        help=f"Target column width (default: {settings.PREVIEW_WIDTH})",
    )
    _add_render_arguments(preview_parser)

    convert_parser = commands.add_parser(
        "convert", help="Convert an image and write the result to disk"
    )
    convert_parser.add_argument("input", help="Input image path")
    convert_parser.add_argument("--output", "-o", required=True, help="Output file path")
    convert_parser.add_argument(
        "--width",
        type=int,
        default=settings.CONVERT_WIDTH,
        help=f"Target column width (default: {settings.CONVERT_WIDTH})",
    )
    _add_render_arguments(convert_parser)

    animate_parser = commands.add_parser(
        "animate",
        help="Convert an animation (GIF or directory of frames) to glyph frame files",
    )
    animate_parser.add_argument("input", help="Animation file or directory of images")
    animate_parser.add_argument(
        "--out-dir", "-o", required=True, help="Output directory for frame files"
    )
    animate_parser.add_argument(
        "--width",
        type=int,
        default=settings.CONVERT_WIDTH,
        help=f"Target column width (default: {settings.CONVERT_WIDTH})",
    )
    animate_parser.add_argument(
        "--fps",
        type=float,
        default=settings.ANIMATE_FPS,
        help=f"Frame rate for inputs without timing information (default: {settings.ANIMATE_FPS})",
    )
    animate_parser.add_argument(
        "--no-progress", action="store_true", help="Do not draw a progress bar"
    )
    _add_render_arguments(animate_parser)

    play_parser = commands.add_parser(
        "play", help="Play an image or animation as terminal background"
    )
    play_parser.add_argument("input", help="Image or animation path")
    play_parser.add_argument("--caption", default=None, help="Text drawn on the last line")
    play_parser.add_argument(
        "--aspect",
        "-a",
        type=float,
        default=settings.CHAR_ASPECT,
        help=f"Terminal char aspect ratio, width/height (default: {settings.CHAR_ASPECT})",
    )
    _add_render_arguments(play_parser)

    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run_animate(args: argparse.Namespace, options: RenderOptions) -> None:
    from .components.terminal import ConversionProgress

    bar: ConversionProgress | None = None

    def report(done: int, total: int) -> None:
        nonlocal bar
        if args.no_progress:
            return
        if bar is None:
            bar = ConversionProgress(total, label="Frames")
        bar.update(done)

    written = convert_animation(args.input, args.out_dir, args.width, options, args.fps, report)
    if bar is not None:
        bar.finish()
    print(f"Frames written to {args.out_dir} ({len(written)} frames, fps {args.fps:.2f})")


def _run_play(args: argparse.Namespace, options: RenderOptions) -> None:
    from .components.terminal import TerminalBackgroundPlayer, TerminalPlayerConfig

    config = TerminalPlayerConfig(char_aspect=max(args.aspect, MIN_FONT_ASPECT))
    player = TerminalBackgroundPlayer(
        args.input, options=options, config=config, caption=args.caption
    )
    player.play()


def main(argv: list[str] | None = None) -> int:
    """
    Runs the command line.

    :param argv: Arguments without the program name, sys.argv if None
    :return: The exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    logger.debug("Running %s command", args.command)

    try:
        options = options_from_args(args)
        if args.command == "preview":
            preview(args.input, args.width, options)
        elif args.command == "convert":
            convert_image(args.input, args.output, args.width, options)
        elif args.command == "animate":
            _run_animate(args, options)
        elif args.command == "play":
            _run_play(args, options)
    except (DecodeError, InvalidLayoutError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
