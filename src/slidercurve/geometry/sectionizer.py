"""Anchor sectionizer: split raw anchors into typed sections.

A point written twice in a row marks a section boundary ("red anchor").
"""

from __future__ import annotations

import logging

from slidercurve.geometry.models import AnchorPoint, PathTypeHint, Section, SectionKind

_logger = logging.getLogger(__name__)


def _section_kind(point_count: int, hint: PathTypeHint) -> SectionKind:
    if point_count == 3 and hint is PathTypeHint.PERFECT_CIRCLE:
        return SectionKind.CIRCULAR_ARC
    if point_count == 2:
        return SectionKind.LINEAR
    if hint is PathTypeHint.CATMULL:
        return SectionKind.CATMULL
    return SectionKind.BEZIER


def _close(buffer: list[AnchorPoint], hint: PathTypeHint, sections: list[Section]) -> None:
    if len(buffer) < 2:
        _logger.debug("Dropping section with %d control point(s)", len(buffer))
        return
    sections.append(Section(kind=_section_kind(len(buffer), hint), control_points=tuple(buffer)))


def sectionize(anchors: list[AnchorPoint], hint: PathTypeHint) -> list[Section]:
    """Split *anchors* into sections at repeated points.

    Args:
        anchors: Ordered anchor points; the first one is the slider head.
        hint: Path type declared by the chart.

    Returns:
        Sections in anchor order. Buffers that end up with fewer than two
        points are dropped, so the result may be empty for degenerate input.
    """
    if len(anchors) < 2:
        return []

    sections: list[Section] = []
    buffer: list[AnchorPoint] = [anchors[0]]
    last_index = len(anchors) - 1

    for i in range(1, len(anchors)):
        point = anchors[i]
        is_last = i == last_index

        if point == anchors[i - 1]:
            if is_last:
                # A trailing duplicate is absorbed into the current section.
                break
            _close(buffer, hint, sections)
            buffer = [point]
            continue

        buffer.append(point)

    _close(buffer, hint, sections)
    return sections
