"""Curve construction pipeline and the query façade used by rendering and gameplay.

Pipeline (pure and deterministic):

1. correct degenerate arc sections,
2. trace all sections at roughly ``trace_spacing``,
3. reconcile the traced length with the chart's nominal length,
4. resample into exactly equidistant points,
5. compute the bounding box.
"""

from __future__ import annotations

import logging
import math

from slidercurve.config import CurveSettings
from slidercurve.geometry.corrector import correct_sections
from slidercurve.geometry.evaluator import ArcGeometry
from slidercurve.geometry.models import (
    AnchorPoint,
    BoundingBox,
    CurveResult,
    Section,
    SectionKind,
    SliderSpec,
)
from slidercurve.geometry.reconciler import reconcile, validate_nominal_length
from slidercurve.geometry.resampler import resample
from slidercurve.geometry.tracer import ArcLengthTracer

_logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Query façade
# ---------------------------------------------------------------------------


class SliderCurve:
    """Read-only view over a built :class:`CurveResult`.

    Completion values passed in are expected to be already reflected for
    repeats (see :func:`slidercurve.geometry.completion.reflect`); this class
    knows nothing about repeat counts.
    """

    def __init__(self, result: CurveResult) -> None:
        self._result = result
        self._points = result.equal_distance_points

    @property
    def result(self) -> CurveResult:
        return self._result

    @property
    def equal_distance_points(self) -> tuple[AnchorPoint, ...]:
        return self._points

    def position_at_completion(self, completion: float) -> AnchorPoint:
        """Point at *completion* (0 = head, 1 = tail) of the path."""
        index, t = self._locate(completion)
        if t == 0.0:
            return self._points[index]
        return self._points[index].lerp(self._points[index + 1], t)

    def angle_at_completion(self, completion: float) -> float:
        """Direction of travel in radians at *completion*."""
        index, _ = self._locate(completion)
        if index >= len(self._points) - 1:
            index = len(self._points) - 2
        return self._points[index].angle_to(self._points[index + 1])

    def end_point(self) -> AnchorPoint:
        return self._points[-1]

    def length(self) -> float:
        """Path length: the nominal length, or 0 for a stationary slider."""
        return self._result.length

    def bounding_box(self) -> BoundingBox:
        return self._result.bounding_box

    def _locate(self, completion: float) -> tuple[int, float]:
        """Split *completion* into (segment index, fraction within segment)."""
        if not completion > 0.0:  # also catches NaN
            return 0, 0.0
        last = len(self._points) - 1
        if completion >= 1.0:
            return last, 0.0
        actual = completion * last
        index = min(int(math.floor(actual)), last)
        return index, actual - index


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class CurveBuilder:
    """Build a :class:`SliderCurve` from a :class:`SliderSpec`.

    Args:
        settings: Spacing, tolerance and iteration bounds. Defaults to
            :class:`~slidercurve.config.CurveSettings` defaults.
    """

    def __init__(self, settings: CurveSettings | None = None) -> None:
        self.settings = settings or CurveSettings()
        self._tracer = ArcLengthTracer(
            spacing=self.settings.trace_spacing,
            tolerance=self.settings.tolerance,
            probe_step=self.settings.probe_step,
            max_bisections=self.settings.max_bisections,
            max_points_per_section=self.settings.max_points_per_section,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, spec: SliderSpec) -> SliderCurve:
        """Run the full pipeline for one slider.

        A slider whose anchors collapse to no sections, or whose path has no
        extent, still yields a curve: it stays on its head for the whole
        duration and reports a length of 0.

        Raises:
            NominalLengthError: If ``spec.nominal_length`` is not a positive
                finite number.
        """
        nominal_length = validate_nominal_length(spec.nominal_length)
        sections = correct_sections(spec.sections)
        if not sections:
            return _stationary_curve(spec.head, "has no sections")

        spacing = self.settings.trace_spacing
        trace = self._tracer.trace(sections)
        if trace.length <= 0.0:
            return _stationary_curve(trace.points[0].position, "has zero extent")

        reconciled = reconcile(trace.points, nominal_length, spacing)
        points = resample(reconciled, spacing)
        box = _bounding_box(points, sections, trace.section_offsets, trace.length, nominal_length)

        _logger.debug(
            "Built curve: %d sections, traced %.3f, nominal %.3f, %d points",
            len(sections),
            trace.length,
            nominal_length,
            len(points),
        )
        return SliderCurve(CurveResult(
            equal_distance_points=tuple(points),
            length=nominal_length,
            bounding_box=box,
        ))


def build_curve(spec: SliderSpec, settings: CurveSettings | None = None) -> SliderCurve:
    """Shortcut for ``CurveBuilder(settings).build(spec)``."""
    return CurveBuilder(settings).build(spec)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _stationary_curve(head: AnchorPoint, reason: str) -> SliderCurve:
    _logger.debug("Slider at %s %s; building a stationary curve", head, reason)
    return SliderCurve(CurveResult(
        equal_distance_points=(head, head),
        length=0.0,
        bounding_box=BoundingBox.from_point(head),
    ))


def _bounding_box(
    points: list[AnchorPoint],
    sections: list[Section],
    section_offsets: list[float],
    traced_length: float,
    length: float,
) -> BoundingBox:
    """Min/max over *points*, plus arc extremes that the sampling can miss.

    An arc reaches its axis-aligned extremes at multiples of 90°; those are
    added when the path actually turned past them. For the arc the path ends
    in, that is decided by the angle of the path's final point.
    """
    box = BoundingBox.from_point(points[0])
    for point in points[1:]:
        box = box.include(point)

    section_ends = section_offsets[1:] + [traced_length]
    for section, start, stop in zip(sections, section_offsets, section_ends):
        if start >= length:
            break
        if section.kind is not SectionKind.CIRCULAR_ARC:
            continue
        arc = ArcGeometry.from_points(*section.control_points)
        if length >= stop:
            reached = abs(arc.sweep)
        else:
            reached = arc.angular_offset(points[-1])
        direction = 1.0 if arc.sweep >= 0 else -1.0
        for angle_offset in arc.cardinal_offsets():
            if angle_offset > reached:
                break
            box = box.include(arc.point_at_angle(arc.start_angle + direction * angle_offset))

    return box
