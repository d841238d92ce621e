"""
Tests for frame series.
"""

import pytest

from glyphstag.errors import DimensionMismatchError, FrameCountMismatchError
from glyphstag.grid import CellGlyph, GlyphGrid
from glyphstag.layout import FixedColumns, TargetGeometry
from glyphstag.series import FrameSeries, GlyphGridFrame, to_nanos


def _grid(width=3, height=2, ch="#"):
    return GlyphGrid(width, height, [CellGlyph(ch) for _ in range(width * height)])


def _series(durations):
    grids = [_grid(ch=str(index)) for index in range(len(durations))]
    return FrameSeries.from_grids(grids, durations)


class TestFrameSeriesLookup:
    """Tests for time and index based lookup."""

    def test_empty(self):
        """Test that an empty series has no frame and no geometry."""
        series = FrameSeries()
        assert series.is_empty()
        assert series.geometry is None
        assert series.width == 0 and series.height == 0
        assert series.frame_index_at(1.0) is None
        assert series.frame_at(1.0) is None

    def test_single_frame(self):
        """Test that a single frame is always selected."""
        series = _series([0.5])
        for elapsed in (0.0, 0.49, 0.5, 123.4):
            assert series.frame_index_at(elapsed) == 0

    def test_walks_frames(self):
        """Test lookup within one loop."""
        series = _series([0.1, 0.1, 0.1])
        assert series.frame_index_at(0.05) == 0
        assert series.frame_index_at(0.15) == 1
        assert series.frame_index_at(0.25) == 2

    def test_loops_with_period(self):
        """Test that lookup is periodic with the total duration."""
        series = _series([0.1, 0.2, 0.3])
        assert series.total_duration() == pytest.approx(0.6)
        for k in (1, 7, 1000):
            assert series.frame_index_at(0.05 + k * 0.6) == 0
            assert series.frame_index_at(0.15 + k * 0.6) == 1
            assert series.frame_index_at(0.45 + k * 0.6) == 2

    def test_zero_durations(self):
        """Test that zero duration frames span no time."""
        series = _series([0.0, 0.05, 0.0])
        assert series.total_duration() == pytest.approx(0.05)
        assert series.frame_index_at(0.0) == 1
        assert series.frame_index_at(0.01) == 1
        assert series.frame_index_at(0.06) == 1

    def test_all_zero_durations(self):
        """Test that an all zero series deterministically shows frame 0."""
        series = _series([0.0, 0.0, 0.0])
        assert series.frame_index_at(5.0) == 0
        assert series.normalize_elapsed(5.0) == 0.0

    def test_normalize_elapsed(self):
        """Test elapsed time reduction."""
        series = _series([0.25, 0.25])
        assert series.normalize_elapsed(1.1) == pytest.approx(0.1)

    def test_index_lookup_out_of_range(self):
        """Test that out of range indices return None."""
        series = _series([0.1, 0.2])
        assert series.frame(1) is not None
        assert series.frame(2) is None
        assert series.frame(-1) is None
        assert series.delay(1) == 0.2
        assert series.delay(5) is None

    def test_frame_at(self):
        """Test time based grid lookup."""
        series = _series([0.1, 0.1])
        assert series.frame_at(0.15).cells[0].ch == "1"

    def test_non_finite_elapsed(self):
        """Test that infinite and nan elapsed times resolve to the first frame."""
        series = _series([0.1, 0.1])
        assert series.frame_index_at(float("inf")) == 0
        assert series.frame_index_at(float("-inf")) == 0
        assert series.frame_index_at(float("nan")) == 0
        assert series.normalize_elapsed(float("inf")) == 0.0

    def test_to_nanos(self):
        """Test conversion to whole nanoseconds."""
        assert to_nanos(10.1) - to_nanos(10.0) == to_nanos(0.1)
        assert to_nanos(-1.0) == 0
        assert to_nanos(float("nan")) == 0


class TestFrameSeriesBuilding:
    """Tests for building and rebuilding series."""

    def test_from_grids(self):
        """Test that the first grid fixes the geometry."""
        series = _series([0.1, 0.2])
        assert len(series) == 2
        assert series.geometry.to_tuple() == (3, 2)
        assert series.durations == [0.1, 0.2]
        assert [frame.duration for frame in series] == [0.1, 0.2]

    def test_length_mismatch(self):
        """Test that grids and durations must have the same length."""
        with pytest.raises(ValueError):
            FrameSeries.from_grids([_grid()], [0.1, 0.2])

    def test_cell_count_mismatch(self):
        """Test that a declared geometry must match the total cell count."""
        geometry = TargetGeometry(2, 2, 1.0)
        with pytest.raises(FrameCountMismatchError):
            FrameSeries.from_grids([_grid(3, 1), _grid(3, 1)], [0.1, 0.1], geometry)

    def test_dimension_mismatch(self):
        """Test that pushing a grid of another size fails."""
        series = _series([0.1])
        with pytest.raises(DimensionMismatchError):
            series.push_frame(GlyphGridFrame(_grid(2, 3), 0.1))

    def test_empty_grid_rejected(self):
        """Test that empty grids can not be added."""
        with pytest.raises(DimensionMismatchError):
            FrameSeries().push_frame(GlyphGridFrame(GlyphGrid(0, 0), 0.1))

    def test_declared_geometry(self):
        """Test a series with declared geometry."""
        series = FrameSeries(TargetGeometry(3, 2, 0.5))
        series.push_frame(GlyphGridFrame(_grid(3, 2), 0.1))
        assert series.geometry.cell_aspect == 0.5
        with pytest.raises(DimensionMismatchError):
            series.set_geometry(TargetGeometry(4, 4, 0.5))

    def test_rebuild_from(self):
        """Test replacing all frames through a builder."""
        series = FrameSeries(TargetGeometry(4, 2, 1.0))
        calls = []

        def builder(index, geometry):
            calls.append(index)
            return _grid(geometry.columns, geometry.rows, ch=str(index))

        series.rebuild_from(3, 0.05, builder)
        assert len(series) == 3
        assert calls == [0, 1, 2]
        assert series.total_duration() == pytest.approx(0.15)

        series.rebuild_from(0, 0.05, builder)
        assert series.is_empty()

    def test_rebuild_without_geometry(self):
        """Test that nothing is built without geometry."""
        series = FrameSeries()
        series.rebuild_from(3, 0.1, lambda index, geometry: _grid())
        assert series.is_empty()

    def test_update_geometry_from_layout(self):
        """Test that a changed geometry drops old frames."""
        series = _series([0.1, 0.1])
        geometry = series.update_geometry_from_layout(FixedColumns(3), 30, 20, 1.0)
        assert geometry.to_tuple() == (3, 2)
        assert len(series) == 2

        geometry = series.update_geometry_from_layout(FixedColumns(6), 30, 20, 1.0)
        assert geometry.to_tuple() == (6, 4)
        assert series.is_empty()
        assert series.geometry == geometry

    def test_clear(self):
        """Test removing all frames."""
        series = _series([0.1, 0.1])
        series.clear()
        assert series.is_empty()
        assert series.total_duration() == 0.0
