"""
Tests for batch conversion and the command line.
"""

import io

import pytest

from glyphstag.batch import FRAME_FILE_PATTERN, convert_animation, convert_image, grid_to_text, preview
from glyphstag.cli import build_parser, main, options_from_args
from glyphstag.errors import DecodeError
from glyphstag.filters.edges import EdgeMode
from glyphstag.gradient import Gradient
from glyphstag.grid import CellGlyph, GlyphGrid
from glyphstag.renderer import ColorMode, RenderOptions


class TestBatch:
    """Tests for the batch conversion functions."""

    def test_grid_to_text(self):
        """Test that every row ends with a line break."""
        grid = GlyphGrid(2, 2, [CellGlyph(ch) for ch in "abcd"])
        assert grid_to_text(grid) == "ab\ncd\n"

    def test_preview(self, write_png):
        """Test printing a preview."""
        stream = io.StringIO()
        grid = preview(write_png("image.png", 40, 20), 10, RenderOptions(), stream=stream)
        lines = stream.getvalue().splitlines()
        assert len(lines) == grid.height
        assert all(len(line) == 10 for line in lines)

    def test_convert_image(self, tmp_path, write_png):
        """Test writing a single text file."""
        output = tmp_path / "out.txt"
        grid = convert_image(write_png("image.png", 40, 20), output, 12, RenderOptions(font_aspect=1.0))
        text = output.read_text(encoding="utf-8")
        assert text.endswith("\n")
        lines = text.splitlines()
        assert len(lines) == grid.height == 6
        assert all(len(line) == 12 for line in lines)

    def test_convert_animation(self, tmp_path, write_gif):
        """Test writing one file per frame."""
        calls = []
        written = convert_animation(
            write_gif(durations_ms=(50, 50, 50)),
            tmp_path / "frames",
            8,
            RenderOptions(),
            progress=lambda done, total: calls.append((done, total)),
        )
        assert [path.name for path in written] == [
            "frame_0000.txt",
            "frame_0001.txt",
            "frame_0002.txt",
        ]
        assert all(path.exists() for path in written)
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_frame_file_pattern(self):
        """Test zero padded frame names."""
        assert FRAME_FILE_PATTERN.format(12) == "frame_0012.txt"

    def test_convert_animation_missing_input(self, tmp_path):
        """Test that a missing input raises a DecodeError."""
        with pytest.raises(DecodeError):
            convert_animation(tmp_path / "missing.gif", tmp_path / "frames", 8)


class TestCommandLine:
    """Tests for the glyphstag command."""

    def test_options(self):
        """Test conversion of arguments into rendering options."""
        args = build_parser().parse_args(
            [
                "preview",
                "in.png",
                "--gradient",
                "blocks",
                "--font-aspect",
                "0.01",
                "--edge",
                "orientation",
                "--color-mode",
                "luminance",
                "--invert",
            ]
        )
        options = options_from_args(args)
        assert options.gradient == Gradient.blocks()
        assert options.font_aspect == pytest.approx(0.1)
        assert options.edge_mode == EdgeMode.ORIENTATION
        assert options.color_mode == ColorMode.LUMINANCE
        assert options.invert

    def test_defaults(self):
        """Test default widths of the sub commands."""
        parser = build_parser()
        assert parser.parse_args(["preview", "in.png"]).width == 100
        assert parser.parse_args(["convert", "in.png", "-o", "out.txt"]).width == 120
        args = parser.parse_args(["animate", "in.gif", "-o", "frames"])
        assert args.width == 120
        assert args.fps == pytest.approx(12.0)

    def test_convert(self, tmp_path, write_png):
        """Test the convert command."""
        output = tmp_path / "out.txt"
        code = main(
            ["convert", str(write_png("image.png")), "-o", str(output), "--width", "10", "--gradient", "binary"]
        )
        assert code == 0
        assert set(output.read_text(encoding="utf-8")) <= {"0", "1", "\n"}

    def test_animate(self, tmp_path, write_gif, capsys):
        """Test the animate command."""
        out_dir = tmp_path / "frames"
        code = main(["animate", str(write_gif()), "-o", str(out_dir), "--width", "8", "--no-progress"])
        assert code == 0
        assert len(list(out_dir.glob("frame_*.txt"))) == 3
        assert "Frames written" in capsys.readouterr().out

    def test_preview(self, write_png, capsys):
        """Test the preview command."""
        assert main(["preview", str(write_png("image.png")), "--width", "16"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines and all(len(line) == 16 for line in lines)

    def test_missing_input(self, tmp_path, capsys):
        """Test that errors are reported with exit code 1."""
        assert main(["preview", str(tmp_path / "missing.png")]) == 1
        assert "Error" in capsys.readouterr().err
