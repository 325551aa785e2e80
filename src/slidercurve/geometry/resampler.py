"""Equal-distance resampling of a traced path.

Trace points are only approximately evenly spaced. The resampler emits
``floor(L / spacing) + 1`` segments of identical path length, so walking the
output at a constant index rate moves at a constant on-path speed regardless
of local curvature.
"""

from __future__ import annotations

import bisect
import math

from slidercurve.geometry.models import AnchorPoint, TracePoint


def segment_count_for(length: float, spacing: float) -> int:
    """Number of equal segments for a path of *length*; never zero."""
    return math.floor(length / spacing) + 1


def resample(points: list[TracePoint], spacing: float) -> list[AnchorPoint]:
    """Return ``segment_count + 1`` points evenly spaced along *points*.

    The first and last output points are exactly the first and last trace
    points. Interior points are linear interpolations between the two trace
    points bracketing each target distance.

    Raises:
        ValueError: If *points* is empty or *spacing* is not positive.
    """
    if not points:
        raise ValueError("Cannot resample an empty trace")
    if spacing <= 0:
        raise ValueError("spacing must be > 0")

    length = points[-1].cumulative_distance
    count = segment_count_for(length, spacing)
    segment_length = length / count
    distances = [p.cumulative_distance for p in points]

    output = [points[0].position]
    idx = 1
    for k in range(1, count):
        target = k * segment_length
        # Targets increase monotonically, so the search can start from the last hit.
        idx = bisect.bisect_left(distances, target, lo=idx)
        before, after = points[idx - 1], points[idx]
        span = after.cumulative_distance - before.cumulative_distance
        t = (target - before.cumulative_distance) / span if span > 0 else 0.0
        output.append(before.position.lerp(after.position, t))
    output.append(points[-1].position)

    return output
