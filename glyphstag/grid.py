# GlyphStag - Glyph Grid
"""
Glyph grids - 2-D arrays of styled character cells, one per rendered frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

RGB = tuple[int, int, int]
"An 8-bit RGB color"


@dataclass
class CellGlyph:
    """A single styled character cell."""

    ch: str
    "The glyph"
    fg: RGB = (255, 255, 255)
    "Foreground color"
    bg: RGB | None = None
    "Optional background color, None lets the host background show through"
    alpha: float = 1.0
    "Transparency multiplier (1.0 = fully opaque glyph color)"

    @classmethod
    def from_intensity(cls, ch: str, intensity: float) -> CellGlyph:
        """
        Creates an opaque cell with a gray foreground matching intensity.

        :param ch: The glyph
        :param intensity: Normalized intensity, clamped to 0.0-1.0
        """
        level = int(min(max(intensity, 0.0), 1.0) * 255.0 + 0.5)
        return cls(ch, (level, level, level), None, 1.0)


@dataclass
class GlyphGrid:
    """
    A width x height grid of :class:`CellGlyph` stored in row-major order.

    Constructing a grid whose cell count differs from width * height raises
    a ValueError.
    """

    width: int
    height: int
    cells: list[CellGlyph] = field(default_factory=list)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Grid dimensions must not be negative: {self.width}x{self.height}")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"Grid of {self.width}x{self.height} needs {self.width * self.height} "
                f"cells, got {len(self.cells)}"
            )

    @classmethod
    def from_arrays(
        cls,
        chars: np.ndarray,
        fg: np.ndarray,
        alpha: np.ndarray | None = None,
    ) -> GlyphGrid:
        """
        Builds a grid from per-cell arrays.

        :param chars: (H, W) array of single characters
        :param fg: (H, W, 3) uint8 foreground colors
        :param alpha: Optional (H, W) float alpha, 1.0 if omitted
        """
        height, width = chars.shape
        flat_chars = chars.reshape(-1).tolist()
        flat_fg = fg.reshape(-1, 3).tolist()
        if alpha is None:
            flat_alpha = [1.0] * len(flat_chars)
        else:
            flat_alpha = alpha.reshape(-1).tolist()
        cells = [
            CellGlyph(ch, (color[0], color[1], color[2]), None, a)
            for ch, color, a in zip(flat_chars, flat_fg, flat_alpha)
        ]
        return cls(width, height, cells)

    @property
    def is_empty(self) -> bool:
        """True if the grid has no cells."""
        return not self.cells

    def cell(self, column: int, row: int) -> CellGlyph:
        """
        Returns the cell at given position.
        """
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(f"Cell ({column}, {row}) outside of {self.width}x{self.height} grid")
        return self.cells[row * self.width + column]

    def rows(self) -> Iterator[str]:
        """
        Yields each row as string of glyphs in column order.
        """
        for start in range(0, len(self.cells), max(self.width, 1)):
            yield "".join(cell.ch for cell in self.cells[start:start + self.width])

    def to_text(self) -> str:
        """
        Returns the glyphs as text, one line per row.
        """
        return "\n".join(self.rows())


__all__ = ["RGB", "CellGlyph", "GlyphGrid"]
