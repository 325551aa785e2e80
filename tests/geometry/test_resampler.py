"""Tests for equal-distance resampling."""

from __future__ import annotations

import pytest

from slidercurve.geometry.models import AnchorPoint, TracePoint
from slidercurve.geometry.resampler import resample, segment_count_for


def trace_along_x(*xs: float) -> list[TracePoint]:
    return [TracePoint(AnchorPoint(x, 0.0), float(x)) for x in xs]


class TestSegmentCount:
    def test_floor_plus_one(self):
        assert segment_count_for(100.0, 3.0) == 34
        assert segment_count_for(10.0, 2.5) == 5

    def test_short_path_has_one_segment(self):
        assert segment_count_for(1.0, 3.0) == 1


class TestResample:
    def test_uneven_trace_becomes_even(self):
        result = resample(trace_along_x(0, 1, 7, 10), spacing=2.5)
        assert [p.x for p in result] == pytest.approx([0, 2, 4, 6, 8, 10])

    def test_first_and_last_points_are_exact(self):
        trace = trace_along_x(0, 3.1, 6.2, 9.3, 10.7)
        result = resample(trace, spacing=3.0)
        assert result[0] is trace[0].position
        assert result[-1] is trace[-1].position

    def test_long_line_is_equidistant(self):
        result = resample(trace_along_x(0, 100), spacing=3.0)
        assert len(result) == 35
        gaps = [a.distance_to(b) for a, b in zip(result, result[1:])]
        assert all(g == pytest.approx(100 / 34) for g in gaps)

    def test_follows_corners(self):
        trace = [
            TracePoint(AnchorPoint(0, 0), 0.0),
            TracePoint(AnchorPoint(10, 0), 10.0),
            TracePoint(AnchorPoint(10, 10), 20.0),
        ]
        result = resample(trace, spacing=5.0)
        assert len(result) == 6
        assert result[2].x == pytest.approx(8.0)
        assert result[3].x == pytest.approx(10.0)
        assert result[3].y == pytest.approx(2.0)

    def test_empty_trace_raises(self):
        with pytest.raises(ValueError):
            resample([], spacing=3.0)

    def test_non_positive_spacing_raises(self):
        with pytest.raises(ValueError):
            resample(trace_along_x(0, 10), spacing=0)
