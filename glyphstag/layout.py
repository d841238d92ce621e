# GlyphStag - Layout
"""
Derives the column/row count a raster is rendered into.

Three layout policies are supported:

- :class:`FixedColumns`: fixed width, rows follow the image aspect
- :class:`FitViewport`: largest grid fitting into a column/row budget
- :class:`ScaleToHeight`: fixed height, columns follow the image aspect

The cell aspect is the width/height ratio of one character cell. Terminal
cells are roughly twice as high as wide, so fewer rows than columns are
needed to keep the source's proportions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import InvalidLayoutError

MAX_CELLS = 0xFFFF
"Upper bound for either grid dimension"


def _round(value: float) -> int:
    """Rounds half away from zero (values are never negative here)."""
    return int(math.floor(value + 0.5))


def _bounded(value: int) -> int:
    return min(max(value, 1), MAX_CELLS)


@dataclass(frozen=True)
class TargetGeometry:
    """The cell dimensions a raster is rendered into."""

    columns: int
    rows: int
    cell_aspect: float

    def __post_init__(self):
        if self.columns <= 0 or self.rows <= 0:
            raise InvalidLayoutError(
                f"Geometry needs positive dimensions, got {self.columns}x{self.rows}"
            )
        if not self.cell_aspect > 0.0:
            raise InvalidLayoutError(f"Cell aspect must be positive, got {self.cell_aspect}")

    @property
    def area(self) -> int:
        """Number of cells."""
        return self.columns * self.rows

    def to_tuple(self) -> tuple[int, int]:
        """Return (columns, rows) tuple."""
        return (self.columns, self.rows)


@dataclass(frozen=True)
class FixedColumns:
    """Render into exactly ``columns`` columns."""

    columns: int

    def derive(self, source_width: int, source_height: int, default_aspect: float) -> TargetGeometry:
        image_ratio = _image_ratio(source_width, source_height)
        _check_aspect(default_aspect)
        if self.columns <= 0:
            raise InvalidLayoutError(f"Column count must be positive, got {self.columns}")
        columns = min(self.columns, MAX_CELLS)
        rows = _bounded(_round(image_ratio * columns * default_aspect))
        return TargetGeometry(columns, rows, default_aspect)


@dataclass(frozen=True)
class FitViewport:
    """Render as large as possible without exceeding columns x rows.

    The policy's own ``cell_aspect`` overrides the default aspect.
    """

    columns: int
    rows: int
    cell_aspect: float

    def derive(self, source_width: int, source_height: int, default_aspect: float) -> TargetGeometry:
        image_ratio = _image_ratio(source_width, source_height)
        _check_aspect(self.cell_aspect)
        if self.columns <= 0 or self.rows <= 0:
            raise InvalidLayoutError(
                f"Viewport must be positive, got {self.columns}x{self.rows}"
            )
        columns = min(self.columns, MAX_CELLS)
        rows_limit = min(self.rows, MAX_CELLS)
        rows = _bounded(_round(image_ratio * columns * self.cell_aspect))
        if rows > rows_limit:
            rows = rows_limit
            derived_columns = _bounded(_round(rows / (image_ratio * self.cell_aspect)))
            columns = min(columns, derived_columns)
        return TargetGeometry(columns, rows, self.cell_aspect)


@dataclass(frozen=True)
class ScaleToHeight:
    """Render into exactly ``rows`` rows.

    The policy's own ``cell_aspect`` overrides the default aspect.
    """

    rows: int
    cell_aspect: float

    def derive(self, source_width: int, source_height: int, default_aspect: float) -> TargetGeometry:
        image_ratio = _image_ratio(source_width, source_height)
        _check_aspect(self.cell_aspect)
        if self.rows <= 0:
            raise InvalidLayoutError(f"Row count must be positive, got {self.rows}")
        rows = min(self.rows, MAX_CELLS)
        columns = _bounded(_round(rows / (image_ratio * self.cell_aspect)))
        return TargetGeometry(columns, rows, self.cell_aspect)


LayoutPolicy = Union[FixedColumns, FitViewport, ScaleToHeight]
"Any of the supported layout policies"


def _image_ratio(source_width: int, source_height: int) -> float:
    if source_width <= 0 or source_height <= 0:
        raise InvalidLayoutError(
            f"Source must not be empty, got {source_width}x{source_height}"
        )
    return source_height / source_width


def _check_aspect(aspect: float) -> None:
    if not aspect > 0.0:
        raise InvalidLayoutError(f"Cell aspect must be positive, got {aspect}")


def derive_geometry(
    layout: LayoutPolicy,
    source_width: int,
    source_height: int,
    default_aspect: float,
) -> TargetGeometry:
    """
    Derives the target geometry for a source of given pixel size.

    :param layout: The layout policy
    :param source_width: Source width in pixels
    :param source_height: Source height in pixels
    :param default_aspect: Cell aspect used by policies without their own
    :return: The geometry, columns and rows are always >= 1

    Raises an InvalidLayoutError if the source is empty or the policy is
    not satisfiable.
    """
    return layout.derive(source_width, source_height, default_aspect)


__all__ = [
    "TargetGeometry",
    "FixedColumns",
    "FitViewport",
    "ScaleToHeight",
    "LayoutPolicy",
    "derive_geometry",
    "MAX_CELLS",
]
