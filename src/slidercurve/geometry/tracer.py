"""Arc-length tracer: walk sections emitting points roughly a fixed distance apart.

Generalised Bézier curves have no closed-form arc length, so each section is
walked in parameter space: coarse probing finds a parameter interval that
crosses the target spacing, then bisection narrows it down until the chord
length is within ``tolerance`` of the spacing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from slidercurve.geometry.evaluator import Evaluator, section_evaluator
from slidercurve.geometry.models import AnchorPoint, Section, SectionKind, TracePoint

_logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    """Output of :meth:`ArcLengthTracer.trace`."""

    points: list[TracePoint] = field(default_factory=list)

    section_offsets: list[float] = field(default_factory=list)
    """Cumulative distance at which each input section starts."""

    @property
    def length(self) -> float:
        """Total traced path length (polyline length through all trace points)."""
        if not self.points:
            return 0.0
        return self.points[-1].cumulative_distance

    def push(self, position: AnchorPoint) -> None:
        """Append *position*, accumulating distance; exact repeats are skipped."""
        if not self.points:
            self.points.append(TracePoint(position=position, cumulative_distance=0.0))
            return
        last = self.points[-1]
        if last.position == position:
            return
        distance = last.cumulative_distance + last.position.distance_to(position)
        self.points.append(TracePoint(position=position, cumulative_distance=distance))


class ArcLengthTracer:
    """Trace a list of sections into points approximately *spacing* apart.

    Args:
        spacing: Target distance between consecutive trace points, in
            chart-native units.
        tolerance: Accepted deviation from *spacing* for a bisected point.
        probe_step: Parameter increment used for coarse probing.
        max_bisections: Bisection steps per point before the closest
            candidate is accepted as-is.
        max_points_per_section: Hard cap on emitted points per section so
            pathological input always terminates.
    """

    def __init__(
        self,
        spacing: float = 3.0,
        tolerance: float = 0.25,
        probe_step: float = 0.01,
        max_bisections: int = 64,
        max_points_per_section: int = 100_000,
    ) -> None:
        if spacing <= 0:
            raise ValueError("spacing must be > 0")
        if not 0 < probe_step <= 1:
            raise ValueError("probe_step must be in (0, 1]")
        self.spacing = spacing
        self.tolerance = tolerance
        self.probe_step = probe_step
        self.max_bisections = max_bisections
        self.max_points_per_section = max_points_per_section

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def trace(self, sections: list[Section]) -> TraceResult:
        """Walk every section end to end.

        Distances accumulate across sections, so the last point's
        ``cumulative_distance`` is the traced length of the whole slider.
        Each section's final control point is always emitted.
        """
        result = TraceResult()

        for section in sections:
            result.push(section.start)
            result.section_offsets.append(result.length)

            if section.kind is not SectionKind.LINEAR:
                for point in self._walk(section):
                    result.push(point)

            result.push(section.end)

        return result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _walk(self, section: Section) -> list[AnchorPoint]:
        """Interior trace points of one curved section (endpoints excluded)."""
        evaluate = section_evaluator(section)
        spacing = self.spacing
        points: list[AnchorPoint] = []

        p1 = evaluate(0.0)
        left_t = 0.0

        while left_t < 1.0:
            if len(points) >= self.max_points_per_section:
                _logger.warning(
                    "Trace of %s section stopped at %d points",
                    section.kind.value,
                    len(points),
                )
                break

            # Coarse probing: move right_t forward until the chord reaches spacing.
            right_t = min(left_t + self.probe_step, 1.0)
            p2 = evaluate(right_t)
            while p1.distance_to(p2) < spacing and right_t < 1.0:
                left_t = right_t
                right_t = min(right_t + self.probe_step, 1.0)
                p2 = evaluate(right_t)

            if p1.distance_to(p2) < spacing:
                break  # remaining tail is shorter than one spacing

            t, point = self._bisect(evaluate, p1, left_t, right_t, p2)
            if t >= 1.0:
                break  # the section end is pushed by the caller
            points.append(point)
            p1 = point
            left_t = t

        return points

    def _bisect(
        self,
        evaluate: Evaluator,
        origin: AnchorPoint,
        left_t: float,
        right_t: float,
        right_point: AnchorPoint,
    ) -> tuple[float, AnchorPoint]:
        """Find t in (left_t, right_t] whose point lies *spacing* from *origin*.

        Returns the closest candidate seen if the tolerance is not reached
        within ``max_bisections`` steps.
        """
        spacing = self.spacing
        best_t = right_t
        best_point = right_point
        best_error = abs(origin.distance_to(right_point) - spacing)

        for _ in range(self.max_bisections):
            if best_error <= self.tolerance:
                return best_t, best_point

            mid_t = (left_t + right_t) / 2.0
            mid_point = evaluate(mid_t)
            dist = origin.distance_to(mid_point)
            error = abs(dist - spacing)
            if error < best_error:
                best_t, best_point, best_error = mid_t, mid_point, error

            if dist < spacing:
                left_t = mid_t
            else:
                right_t = mid_t

        if best_error > self.tolerance:
            _logger.debug(
                "Bisection did not converge (error %.4f > tolerance %.4f); using closest point",
                best_error,
                self.tolerance,
            )
        return best_t, best_point
