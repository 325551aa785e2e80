"""Tests for ArcLengthTracer."""

from __future__ import annotations

import logging
import math

import pytest

from slidercurve.geometry.evaluator import evaluate
from slidercurve.geometry.models import AnchorPoint, Section, SectionKind
from slidercurve.geometry.tracer import ArcLengthTracer, TraceResult


def make_section(kind: SectionKind, *coords: tuple[float, float]) -> Section:
    return Section(kind, tuple(AnchorPoint(x, y) for x, y in coords))


def dense_length(section: Section, samples: int = 20_000) -> float:
    """Polyline length of *section* sampled very finely."""
    total = 0.0
    prev = evaluate(section, 0.0)
    for i in range(1, samples + 1):
        point = evaluate(section, i / samples)
        total += prev.distance_to(point)
        prev = point
    return total


QUADRATIC = make_section(SectionKind.BEZIER, (0, 0), (50, 100), (100, 0))


class TestTraceResult:
    def test_push_accumulates_and_skips_repeats(self):
        trace = TraceResult()
        trace.push(AnchorPoint(0, 0))
        trace.push(AnchorPoint(3, 4))
        trace.push(AnchorPoint(3, 4))
        trace.push(AnchorPoint(3, 10))
        assert [p.cumulative_distance for p in trace.points] == [0.0, 5.0, 11.0]
        assert trace.length == 11.0

    def test_empty_length(self):
        assert TraceResult().length == 0.0


class TestLinearSections:
    def test_only_endpoints_emitted(self):
        result = ArcLengthTracer().trace([make_section(SectionKind.LINEAR, (0, 0), (100, 0))])
        assert [p.position for p in result.points] == [AnchorPoint(0, 0), AnchorPoint(100, 0)]
        assert result.length == pytest.approx(100.0)


class TestCurvedSections:
    def test_spacing_within_tolerance(self):
        tracer = ArcLengthTracer(spacing=3.0, tolerance=0.25)
        result = tracer.trace([QUADRATIC])
        positions = [p.position for p in result.points]
        gaps = [a.distance_to(b) for a, b in zip(positions, positions[1:])]

        # Every gap but the tail to the section end hits the target spacing.
        for gap in gaps[:-1]:
            assert gap == pytest.approx(3.0, abs=0.25)
        assert gaps[-1] <= 3.25

    def test_length_close_to_true_arc_length(self):
        result = ArcLengthTracer().trace([QUADRATIC])
        assert result.length == pytest.approx(dense_length(QUADRATIC), rel=0.01)

    def test_section_end_is_always_emitted(self):
        result = ArcLengthTracer().trace([QUADRATIC])
        assert result.points[0].position == AnchorPoint(0, 0)
        assert result.points[-1].position == AnchorPoint(100, 0)

    def test_semicircle_length(self):
        section = make_section(SectionKind.CIRCULAR_ARC, (0, 0), (10, 10), (20, 0))
        result = ArcLengthTracer().trace([section])
        assert result.length == pytest.approx(10 * math.pi, abs=0.2)
        assert result.length <= 10 * math.pi

    def test_zero_extent_section_terminates(self):
        section = make_section(SectionKind.BEZIER, (5, 5), (5, 5), (5, 5))
        result = ArcLengthTracer().trace([section])
        assert len(result.points) == 1
        assert result.length == 0.0


class TestMultipleSections:
    def test_distances_accumulate_across_sections(self):
        first = make_section(SectionKind.LINEAR, (0, 0), (30, 0))
        second = make_section(SectionKind.BEZIER, (30, 0), (60, 30), (90, 0))
        result = ArcLengthTracer().trace([first, second])

        assert result.section_offsets == [0.0, pytest.approx(30.0)]
        junction = [p for p in result.points if p.position == AnchorPoint(30, 0)]
        assert len(junction) == 1
        assert junction[0].cumulative_distance == pytest.approx(30.0)

        distances = [p.cumulative_distance for p in result.points]
        assert distances == sorted(distances)


class TestTermination:
    def test_bisection_limit_accepts_closest_point(self, caplog):
        tracer = ArcLengthTracer(spacing=3.0, tolerance=1e-12, max_bisections=2)
        with caplog.at_level(logging.DEBUG, logger="slidercurve.geometry.tracer"):
            result = tracer.trace([QUADRATIC])
        assert result.points[-1].position == AnchorPoint(100, 0)
        assert any("did not converge" in r.message for r in caplog.records)

    def test_point_cap_stops_trace(self, caplog):
        tracer = ArcLengthTracer(max_points_per_section=5)
        with caplog.at_level(logging.WARNING, logger="slidercurve.geometry.tracer"):
            result = tracer.trace([QUADRATIC])
        # start + 5 interior points + section end
        assert len(result.points) == 7
        assert any("stopped at 5 points" in r.message for r in caplog.records)


class TestValidation:
    def test_rejects_non_positive_spacing(self):
        with pytest.raises(ValueError):
            ArcLengthTracer(spacing=0)

    def test_rejects_bad_probe_step(self):
        with pytest.raises(ValueError):
            ArcLengthTracer(probe_step=0)
