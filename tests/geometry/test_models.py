"""Tests for the curve geometry data model."""

from __future__ import annotations

import math

import pytest

from slidercurve.geometry.models import (
    AnchorPoint,
    BoundingBox,
    CurveResult,
    PathTypeHint,
    Section,
    SectionKind,
    SliderSpec,
)


class TestAnchorPoint:
    def test_distance_and_lerp(self):
        a = AnchorPoint(0.0, 0.0)
        b = AnchorPoint(30.0, 40.0)
        assert a.distance_to(b) == pytest.approx(50.0)
        assert a.lerp(b, 0.5) == AnchorPoint(15.0, 20.0)

    def test_angle_to(self):
        assert AnchorPoint(0, 0).angle_to(AnchorPoint(0, 5)) == pytest.approx(math.pi / 2)

    def test_equality_is_exact(self):
        assert AnchorPoint(1.0, 2.0) == AnchorPoint(1.0, 2.0)
        assert AnchorPoint(1.0, 2.0) != AnchorPoint(1.0, 2.0000001)

    def test_is_finite(self):
        assert AnchorPoint(1.0, 2.0).is_finite()
        assert not AnchorPoint(math.inf, 0.0).is_finite()
        assert not AnchorPoint(0.0, math.nan).is_finite()


class TestPathTypeHint:
    def test_known_letters(self):
        assert PathTypeHint.from_letter("L") is PathTypeHint.LINEAR
        assert PathTypeHint.from_letter("p") is PathTypeHint.PERFECT_CIRCLE
        assert PathTypeHint.from_letter("B") is PathTypeHint.BEZIER
        assert PathTypeHint.from_letter("C") is PathTypeHint.CATMULL

    def test_unknown_letter_falls_back_to_bezier(self):
        assert PathTypeHint.from_letter("X") is PathTypeHint.BEZIER


class TestSection:
    def test_linear_needs_exactly_two_points(self):
        with pytest.raises(ValueError):
            Section(SectionKind.LINEAR, (AnchorPoint(0, 0), AnchorPoint(1, 1), AnchorPoint(2, 2)))

    def test_arc_needs_exactly_three_points(self):
        with pytest.raises(ValueError):
            Section(SectionKind.CIRCULAR_ARC, (AnchorPoint(0, 0), AnchorPoint(1, 1)))

    def test_bezier_needs_at_least_two_points(self):
        with pytest.raises(ValueError):
            Section(SectionKind.BEZIER, (AnchorPoint(0, 0),))

    def test_control_points_stored_as_tuple(self):
        section = Section(SectionKind.BEZIER, [AnchorPoint(0, 0), AnchorPoint(1, 1), AnchorPoint(2, 0)])
        assert isinstance(section.control_points, tuple)
        assert section.start == AnchorPoint(0, 0)
        assert section.end == AnchorPoint(2, 0)


class TestSliderSpec:
    def test_repeat_count_must_be_positive(self):
        with pytest.raises(ValueError):
            SliderSpec(sections=(), repeat_count=0, nominal_length=10.0)

    def test_head_defaults_to_first_section_start(self):
        section = Section(SectionKind.LINEAR, (AnchorPoint(3, 4), AnchorPoint(5, 6)))
        spec = SliderSpec(sections=[section], nominal_length=1.0)
        assert spec.head == AnchorPoint(3, 4)
        assert spec.start_point == AnchorPoint(3, 4)

    def test_head_without_sections(self):
        spec = SliderSpec(sections=(), nominal_length=1.0, head=AnchorPoint(64, 64))
        assert spec.start_point == AnchorPoint(64, 64)

    def test_no_sections_and_no_head(self):
        with pytest.raises(ValueError, match="head"):
            SliderSpec(sections=(), nominal_length=1.0)

    def test_nominal_length_is_required(self):
        """There is no usable default length, so omitting it is a TypeError."""
        section = Section(SectionKind.LINEAR, (AnchorPoint(0, 0), AnchorPoint(1, 0)))
        with pytest.raises(TypeError):
            SliderSpec(sections=(section,))


class TestBoundingBox:
    def test_include_grows_box(self):
        box = BoundingBox.from_point(AnchorPoint(1, 1))
        box = box.include(AnchorPoint(-2, 5)).include(AnchorPoint(4, 0))
        assert box == BoundingBox(min_x=-2, min_y=0, max_x=4, max_y=5)
        assert box.width == 6
        assert box.height == 5


class TestCurveResult:
    def test_needs_two_points(self):
        with pytest.raises(ValueError):
            CurveResult(
                equal_distance_points=(AnchorPoint(0, 0),),
                length=1.0,
                bounding_box=BoundingBox.from_point(AnchorPoint(0, 0)),
            )

    def test_to_dict(self):
        result = CurveResult(
            equal_distance_points=[AnchorPoint(0, 0), AnchorPoint(3, 0)],
            length=3.0,
            bounding_box=BoundingBox(0, 0, 3, 0),
        )
        d = result.to_dict()
        assert d["equal_distance_points"] == [[0, 0], [3, 0]]
        assert d["length"] == 3.0
        assert d["bounding_box"] == {"min_x": 0, "min_y": 0, "max_x": 3, "max_y": 0}
