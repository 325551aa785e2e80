"""Curve geometry data structures.

All coordinates are in chart-native units (osu!pixels). Nothing in this
package knows about screen scaling.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class AnchorPoint:
    """A 2D coordinate in chart space."""

    x: float
    y: float

    def distance_to(self, other: AnchorPoint) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def lerp(self, other: AnchorPoint, t: float) -> AnchorPoint:
        """Point at fraction *t* of the way from ``self`` to *other*."""
        return AnchorPoint(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def angle_to(self, other: AnchorPoint) -> float:
        """Direction from ``self`` to *other* in radians (``atan2`` convention)."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


class PathTypeHint(enum.Enum):
    """Per-slider curve type letter as written in the chart."""

    LINEAR = "L"
    PERFECT_CIRCLE = "P"
    BEZIER = "B"
    CATMULL = "C"

    @classmethod
    def from_letter(cls, letter: str) -> PathTypeHint:
        """Map a chart letter to a hint; unknown letters fall back to Bézier."""
        try:
            return cls(letter.strip().upper())
        except ValueError:
            return cls.BEZIER


class SectionKind(enum.Enum):
    LINEAR = "linear"
    BEZIER = "bezier"
    CIRCULAR_ARC = "circular_arc"
    CATMULL = "catmull"


_EXACT_POINT_COUNTS = {
    SectionKind.LINEAR: 2,
    SectionKind.CIRCULAR_ARC: 3,
}


@dataclass(frozen=True)
class Section:
    """One contiguous sub-curve of a slider.

    ``LINEAR`` sections have exactly 2 control points, ``CIRCULAR_ARC``
    exactly 3, ``BEZIER`` and ``CATMULL`` at least 2.
    """

    kind: SectionKind
    control_points: tuple[AnchorPoint, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, "control_points", tuple(self.control_points))
        count = len(self.control_points)
        expected = _EXACT_POINT_COUNTS.get(self.kind)
        if expected is not None and count != expected:
            raise ValueError(
                f"{self.kind.value} section needs exactly {expected} control points, got {count}"
            )
        if count < 2:
            raise ValueError(f"{self.kind.value} section needs at least 2 control points")

    @property
    def start(self) -> AnchorPoint:
        return self.control_points[0]

    @property
    def end(self) -> AnchorPoint:
        return self.control_points[-1]


@dataclass(frozen=True)
class SliderSpec:
    """Sectionized slider geometry as delivered by the chart loader.

    ``nominal_length`` is authoritative for gameplay timing and may disagree
    with the geometric length of ``sections``. It is validated when the curve
    is built, so a bad value only fails that one slider.
    """

    sections: tuple[Section, ...]
    nominal_length: float
    repeat_count: int = 1
    head: AnchorPoint | None = None
    """Hit-object position. Defaults to the first section's start; required
    when the chart's anchors collapse to no sections at all."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        if self.repeat_count < 1:
            raise ValueError(f"repeat_count must be >= 1, got {self.repeat_count}")
        if self.head is None:
            if not self.sections:
                raise ValueError("A slider without sections needs a head position")
            object.__setattr__(self, "head", self.sections[0].start)

    @property
    def start_point(self) -> AnchorPoint:
        """Where the slider starts: the head position."""
        return self.head


@dataclass(frozen=True)
class TracePoint:
    """Intermediate sample produced while walking the sections."""

    position: AnchorPoint
    cumulative_distance: float
    """Path distance from the slider start, summed over all sections."""


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_point(cls, point: AnchorPoint) -> BoundingBox:
        return cls(min_x=point.x, min_y=point.y, max_x=point.x, max_y=point.y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def include(self, point: AnchorPoint) -> BoundingBox:
        """Return the smallest box containing ``self`` and *point*."""
        return BoundingBox(
            min_x=min(self.min_x, point.x),
            min_y=min(self.min_y, point.y),
            max_x=max(self.max_x, point.x),
            max_y=max(self.max_y, point.y),
        )

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass(frozen=True)
class CurveResult:
    """Write-once output of a curve build.

    ``equal_distance_points`` are evenly spaced along the path (at least two
    entries), so stepping through them at a uniform index rate gives a
    constant on-path speed.
    """

    equal_distance_points: tuple[AnchorPoint, ...]
    length: float
    bounding_box: BoundingBox

    def __post_init__(self) -> None:
        object.__setattr__(self, "equal_distance_points", tuple(self.equal_distance_points))
        if len(self.equal_distance_points) < 2:
            raise ValueError("CurveResult needs at least 2 equal-distance points")

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "equal_distance_points": [[p.x, p.y] for p in self.equal_distance_points],
            "length": self.length,
            "bounding_box": self.bounding_box.to_dict(),
        }
