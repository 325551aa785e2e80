"""Slider ingestion: converts chart slider fields to a SliderSpec.

The chart stores a slider's shape as one packed string::

    B|x1:y1|x2:y2|...

where the leading letter is the path type and the hit object's own ``x,y``
position is the implicit first anchor.
"""

from __future__ import annotations

import math

from slidercurve.geometry.models import AnchorPoint, PathTypeHint, SliderSpec
from slidercurve.geometry.sectionizer import sectionize

# Hit-object line layout: x,y,time,type,hitSound,curve,slides,length[,...]
_X, _Y, _CURVE, _SLIDES, _LENGTH = 0, 1, 5, 6, 7
_MIN_SLIDER_FIELDS = 8


class ChartFormatError(ValueError):
    """Raised when slider fields from a chart cannot be parsed."""


def _number(raw: str, what: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ChartFormatError(f"Invalid {what}: {raw!r}") from exc
    if not math.isfinite(value):
        raise ChartFormatError(f"Invalid {what}: {raw!r}")
    return value


def _parse_anchor(token: str) -> AnchorPoint:
    parts = token.split(":")
    if len(parts) != 2:
        raise ChartFormatError(f"Anchor must look like 'x:y', got {token!r}")
    return AnchorPoint(_number(parts[0], "anchor x"), _number(parts[1], "anchor y"))


def parse_curve_string(start: AnchorPoint, curve: str) -> tuple[PathTypeHint, list[AnchorPoint]]:
    """Split a packed curve string into its path type and anchor list.

    Args:
        start: The slider head (hit object position), used as anchor 0.
        curve: ``"<type>|x:y|x:y|..."``.

    Raises:
        ChartFormatError: If the string is empty or an anchor is malformed.
    """
    tokens = [t for t in curve.strip().split("|") if t]
    if not tokens:
        raise ChartFormatError("Empty curve string")

    hint = PathTypeHint.from_letter(tokens[0])
    anchors = [start]
    anchors.extend(_parse_anchor(token) for token in tokens[1:])
    return hint, anchors


def parse_slider(
    start: AnchorPoint,
    curve: str,
    nominal_length: float,
    repeat_count: int = 1,
) -> SliderSpec:
    """Build a :class:`SliderSpec` from already-split slider fields.

    The nominal length is passed through unchecked; the curve builder
    rejects non-positive values for this slider only.
    """
    if repeat_count < 1:
        raise ChartFormatError(f"Slider repeat count must be >= 1, got {repeat_count}")
    hint, anchors = parse_curve_string(start, curve)
    return SliderSpec(
        sections=tuple(sectionize(anchors, hint)),
        nominal_length=nominal_length,
        repeat_count=repeat_count,
        head=start,
    )


class SliderLineParser:
    """Parses one slider hit-object line into a :class:`SliderSpec`."""

    def parse(self, line: str) -> SliderSpec:
        """Convert a raw ``x,y,time,type,hitSound,curve,slides,length`` line."""
        fields = line.strip().split(",")
        if len(fields) < _MIN_SLIDER_FIELDS:
            raise ChartFormatError(
                f"Slider line needs at least {_MIN_SLIDER_FIELDS} fields, got {len(fields)}"
            )

        start = AnchorPoint(_number(fields[_X], "x"), _number(fields[_Y], "y"))
        slides = _number(fields[_SLIDES], "slide count")
        if slides != int(slides):
            raise ChartFormatError(f"Invalid slide count: {fields[_SLIDES]!r}")

        return parse_slider(
            start=start,
            curve=fields[_CURVE],
            repeat_count=int(slides),
            nominal_length=_number(fields[_LENGTH], "length"),
        )
