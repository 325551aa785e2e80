"""Length reconciliation against the chart-declared nominal length.

Gameplay timing is driven by the nominal length, so the traced path is always
cut or extended to match it exactly:

* traced path too long: truncate at the nominal length and splice in the
  interpolated cut point;
* traced path too short: continue in a straight line along the final traced
  segment, adding a point every ``spacing`` and a last point exactly at the
  nominal length.
"""

from __future__ import annotations

import bisect
import math

from slidercurve.geometry.errors import DegenerateCurveError, NominalLengthError
from slidercurve.geometry.models import AnchorPoint, TracePoint

LENGTH_EPSILON = 1e-9


def validate_nominal_length(nominal_length: float) -> float:
    """Return *nominal_length* as a float, or raise :class:`NominalLengthError`."""
    try:
        value = float(nominal_length)
    except (TypeError, ValueError) as exc:
        raise NominalLengthError(f"Nominal length is not a number: {nominal_length!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise NominalLengthError(f"Nominal length must be a positive finite number, got {value!r}")
    return value


def _truncate(points: list[TracePoint], nominal_length: float) -> list[TracePoint]:
    distances = [p.cumulative_distance for p in points]
    # First index whose distance reaches the nominal length; always >= 1.
    idx = bisect.bisect_left(distances, nominal_length)
    before, after = points[idx - 1], points[idx]

    span = after.cumulative_distance - before.cumulative_distance
    t = (nominal_length - before.cumulative_distance) / span if span > 0 else 0.0
    cut = TracePoint(
        position=before.position.lerp(after.position, t),
        cumulative_distance=nominal_length,
    )
    return points[:idx] + [cut]


def _final_direction(points: list[TracePoint]) -> tuple[float, float] | None:
    """Unit vector of the last non-zero traced segment, or None if there is none."""
    end = points[-1].position
    for i in range(len(points) - 2, -1, -1):
        start = points[i].position
        dist = start.distance_to(end)
        if dist > 0:
            return (end.x - start.x) / dist, (end.y - start.y) / dist
    return None


def _extend(points: list[TracePoint], nominal_length: float, spacing: float) -> list[TracePoint]:
    direction = _final_direction(points)
    if direction is None:
        raise DegenerateCurveError("Cannot extend a path with zero extent")
    dx, dy = direction

    last = points[-1]
    origin = last.position
    deficit = nominal_length - last.cumulative_distance

    extended = list(points)
    travelled = spacing
    while travelled < deficit - LENGTH_EPSILON:
        extended.append(TracePoint(
            position=AnchorPoint(origin.x + dx * travelled, origin.y + dy * travelled),
            cumulative_distance=last.cumulative_distance + travelled,
        ))
        travelled += spacing

    extended.append(TracePoint(
        position=AnchorPoint(origin.x + dx * deficit, origin.y + dy * deficit),
        cumulative_distance=nominal_length,
    ))
    return extended


def reconcile(points: list[TracePoint], nominal_length: float, spacing: float) -> list[TracePoint]:
    """Cut or extend *points* so the path is exactly *nominal_length* long.

    Args:
        points: Trace points with cumulative distances, at least one.
        nominal_length: Chart-declared slider length.
        spacing: Distance between points added when extending.

    Returns:
        A new list; the final point's ``cumulative_distance`` equals
        *nominal_length*.

    Raises:
        NominalLengthError: If *nominal_length* is not a positive finite number.
        DegenerateCurveError: If *points* is empty, or the path must be
            extended but has no direction.
    """
    nominal_length = validate_nominal_length(nominal_length)
    if not points:
        raise DegenerateCurveError("No trace points to reconcile")

    traced = points[-1].cumulative_distance
    if math.isclose(traced, nominal_length, rel_tol=LENGTH_EPSILON, abs_tol=LENGTH_EPSILON):
        last = points[-1]
        return points[:-1] + [TracePoint(position=last.position, cumulative_distance=nominal_length)]
    if traced > nominal_length:
        return _truncate(points, nominal_length)
    return _extend(points, nominal_length, spacing)
