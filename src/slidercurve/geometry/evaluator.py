"""Section evaluator: point on a section's curve for a parameter t in [0, 1].

Bézier sections of degree <= 3 use closed forms; higher degrees fall back to
De Casteljau so no binomial coefficients are ever formed. Circular arcs are
parameterised by angle around the circumcircle of their three control points.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from slidercurve.geometry.models import AnchorPoint, Section, SectionKind

TAU = 2.0 * math.pi

# |cross product| below this is treated as "three points on one line".
COLLINEAR_EPSILON = 1e-9

Evaluator = Callable[[float], AnchorPoint]

# ---------------------------------------------------------------------------
# Geometry primitives
# ---------------------------------------------------------------------------


def _cross(p0: AnchorPoint, p1: AnchorPoint, p2: AnchorPoint) -> float:
    """z-component of cross(p1 - p0, p2 - p0); positive means counterclockwise."""
    return (p1.x - p0.x) * (p2.y - p0.y) - (p1.y - p0.y) * (p2.x - p0.x)


def is_collinear(p0: AnchorPoint, p1: AnchorPoint, p2: AnchorPoint) -> bool:
    """True if the three points lie on one line (or two of them coincide)."""
    return abs(_cross(p0, p1, p2)) < COLLINEAR_EPSILON


def circle_center(p0: AnchorPoint, p1: AnchorPoint, p2: AnchorPoint) -> AnchorPoint:
    """Circumcenter of the triangle p0, p1, p2.

    This is the intersection of the perpendicular bisectors of p0–p1 and
    p1–p2, written in determinant form so axis-aligned chords (zero or
    infinite slope) need no special case. Collinear input returns a
    non-finite point instead of raising.
    """
    d = 2.0 * _cross(p0, p1, p2)
    if abs(d) < 2.0 * COLLINEAR_EPSILON:
        return AnchorPoint(math.inf, math.inf)

    # Translate to p0 to keep the squared terms small.
    bx, by = p1.x - p0.x, p1.y - p0.y
    cx, cy = p2.x - p0.x, p2.y - p0.y
    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy

    ux = (cy * b_sq - by * c_sq) / d
    uy = (bx * c_sq - cx * b_sq) / d
    return AnchorPoint(p0.x + ux, p0.y + uy)


# ---------------------------------------------------------------------------
# Per-kind evaluation
# ---------------------------------------------------------------------------


def _bezier(points: Sequence[AnchorPoint], t: float) -> AnchorPoint:
    n = len(points) - 1  # degree
    u = 1.0 - t

    if n == 1:
        return points[0].lerp(points[1], t)
    if n == 2:
        a, b, c = u * u, 2.0 * u * t, t * t
        return AnchorPoint(
            a * points[0].x + b * points[1].x + c * points[2].x,
            a * points[0].y + b * points[1].y + c * points[2].y,
        )
    if n == 3:
        a, b, c, d = u * u * u, 3.0 * u * u * t, 3.0 * u * t * t, t * t * t
        return AnchorPoint(
            a * points[0].x + b * points[1].x + c * points[2].x + d * points[3].x,
            a * points[0].y + b * points[1].y + c * points[2].y + d * points[3].y,
        )

    # De Casteljau: repeatedly lerp neighbouring points until one remains.
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    for level in range(n, 0, -1):
        for i in range(level):
            xs[i] = u * xs[i] + t * xs[i + 1]
            ys[i] = u * ys[i] + t * ys[i + 1]
    return AnchorPoint(xs[0], ys[0])


def _catmull_span(
    v1: AnchorPoint, v2: AnchorPoint, v3: AnchorPoint, v4: AnchorPoint, t: float
) -> AnchorPoint:
    t2 = t * t
    t3 = t2 * t

    def axis(a: float, b: float, c: float, d: float) -> float:
        return 0.5 * (
            2.0 * b
            + (-a + c) * t
            + (2.0 * a - 5.0 * b + 4.0 * c - d) * t2
            + (-a + 3.0 * b - 3.0 * c + d) * t3
        )

    return AnchorPoint(axis(v1.x, v2.x, v3.x, v4.x), axis(v1.y, v2.y, v3.y, v4.y))


def _catmull(points: Sequence[AnchorPoint], t: float) -> AnchorPoint:
    """Uniform Catmull-Rom through all *points*; t is spread evenly over the spans."""
    spans = len(points) - 1
    scaled = t * spans
    i = min(int(scaled), spans - 1)
    local_t = scaled - i

    v2 = points[i]
    v3 = points[i + 1]
    v1 = points[i - 1] if i > 0 else v2
    if i + 2 < len(points):
        v4 = points[i + 2]
    else:
        # Mirror the last span to extrapolate the end tangent.
        v4 = AnchorPoint(2.0 * v3.x - v2.x, 2.0 * v3.y - v2.y)
    return _catmull_span(v1, v2, v3, v4, local_t)


@dataclass(frozen=True)
class ArcGeometry:
    """Circle parameters of a three-point arc.

    ``sweep`` is signed: positive sweeps towards increasing angle. Its
    magnitude is the angle travelled from the first control point, through
    the second, to the third.
    """

    center: AnchorPoint
    radius: float
    start_angle: float
    sweep: float

    @classmethod
    def from_points(cls, p0: AnchorPoint, p1: AnchorPoint, p2: AnchorPoint) -> ArcGeometry:
        """Fit the arc through three control points.

        Raises:
            ValueError: If the points are collinear (no finite circumcenter).
        """
        center = circle_center(p0, p1, p2)
        if not center.is_finite():
            raise ValueError("Arc control points are collinear")

        radius = center.distance_to(p0)
        a0 = center.angle_to(p0)
        a2 = center.angle_to(p2)

        # Going counterclockwise from p0 meets p1 before p2 iff the triangle
        # p0, p1, p2 is counterclockwise.
        if _cross(p0, p1, p2) > 0:
            sweep = (a2 - a0) % TAU
        else:
            sweep = -((a0 - a2) % TAU)
        return cls(center=center, radius=radius, start_angle=a0, sweep=sweep)

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep

    @property
    def arc_length(self) -> float:
        return abs(self.sweep) * self.radius

    def point_at_angle(self, angle: float) -> AnchorPoint:
        return AnchorPoint(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    def point_at(self, t: float) -> AnchorPoint:
        return self.point_at_angle(self.start_angle + t * self.sweep)

    def angular_offset(self, point: AnchorPoint) -> float:
        """Angle swept from the start towards the direction of *point*, within [0, |sweep|]."""
        direction = 1.0 if self.sweep >= 0 else -1.0
        span = abs(self.sweep)
        offset = (direction * (self.center.angle_to(point) - self.start_angle)) % TAU
        if offset > span:
            # Outside the swept range: snap to the nearer end.
            return span if offset - span < TAU - offset else 0.0
        return offset

    def cardinal_offsets(self) -> list[float]:
        """Angular distances from the start to every multiple of 90° inside the sweep.

        These are where the arc reaches its axis-aligned extremes, which a
        min/max over sampled points can miss.
        """
        quarter = math.pi / 2.0
        direction = 1.0 if self.sweep >= 0 else -1.0
        span = abs(self.sweep)

        if direction > 0:
            first = math.ceil(self.start_angle / quarter) * quarter
        else:
            first = math.floor(self.start_angle / quarter) * quarter

        offsets: list[float] = []
        offset = abs(first - self.start_angle)
        while offset <= span:
            offsets.append(offset)
            offset += quarter
        return offsets


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def section_evaluator(section: Section) -> Evaluator:
    """Return a ``t -> AnchorPoint`` callable for *section*.

    Per-section setup (the circle fit for arcs) runs once here rather than on
    every evaluation. Arc sections must already have passed through
    :func:`~slidercurve.geometry.corrector.correct_sections`.
    """
    points = section.control_points

    if section.kind is SectionKind.LINEAR:
        p0, p1 = points
        return lambda t: p0.lerp(p1, _clamp01(t))
    if section.kind is SectionKind.CIRCULAR_ARC:
        arc = ArcGeometry.from_points(*points)
        return lambda t: arc.point_at(_clamp01(t))
    if section.kind is SectionKind.CATMULL:
        return lambda t: _catmull(points, _clamp01(t))
    return lambda t: _bezier(points, _clamp01(t))


def evaluate(section: Section, t: float) -> AnchorPoint:
    """Point on *section* at parameter *t* (clamped to [0, 1])."""
    return section_evaluator(section)(t)


def _clamp01(t: float) -> float:
    if t < 0.0:
        return 0.0
    if t > 1.0:
        return 1.0
    return t
