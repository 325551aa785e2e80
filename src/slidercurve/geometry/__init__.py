"""Slider curve geometry engine.

Public API
----------
AnchorPoint, Section, SliderSpec, CurveResult, BoundingBox - data model
PathTypeHint, SectionKind    - path type enums
sectionize                   - raw anchors → sections
CurveBuilder / build_curve   - SliderSpec → SliderCurve
SliderCurve                  - position / end point / length / bounding box queries
reflect, completion_at_time  - repeat completion helpers
CurveConstructionError       - raised when one slider cannot be built
"""

from slidercurve.geometry.completion import completion_at_time, reflect
from slidercurve.geometry.curve import CurveBuilder, SliderCurve, build_curve
from slidercurve.geometry.errors import (
    CurveConstructionError,
    DegenerateCurveError,
    NominalLengthError,
)
from slidercurve.geometry.models import (
    AnchorPoint,
    BoundingBox,
    CurveResult,
    PathTypeHint,
    Section,
    SectionKind,
    SliderSpec,
)
from slidercurve.geometry.sectionizer import sectionize

__all__ = [
    "AnchorPoint",
    "BoundingBox",
    "CurveBuilder",
    "CurveConstructionError",
    "CurveResult",
    "DegenerateCurveError",
    "NominalLengthError",
    "PathTypeHint",
    "Section",
    "SectionKind",
    "SliderCurve",
    "SliderSpec",
    "build_curve",
    "completion_at_time",
    "reflect",
    "sectionize",
]
