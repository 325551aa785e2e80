"""Degenerate circular-arc correction.

Charts contain "perfect circle" sections that cannot define a circle. They are
rewritten into straight sections once, before any arc math runs:

* first point == last point: the loop collapses to two lines through the
  middle point;
* collinear points (no finite circumcenter): the middle point is dropped.
"""

from __future__ import annotations

import logging

from slidercurve.geometry.evaluator import circle_center, is_collinear
from slidercurve.geometry.models import Section, SectionKind

_logger = logging.getLogger(__name__)


def correct_section(section: Section) -> list[Section]:
    """Return the section(s) that replace *section*; non-arcs pass through."""
    if section.kind is not SectionKind.CIRCULAR_ARC:
        return [section]

    p0, p1, p2 = section.control_points

    if p0 == p2:
        _logger.debug("Arc %s -> %s -> %s closes on itself; using two lines", p0, p1, p2)
        return [
            Section(kind=SectionKind.LINEAR, control_points=(p0, p1)),
            Section(kind=SectionKind.LINEAR, control_points=(p1, p2)),
        ]

    if is_collinear(p0, p1, p2) or not circle_center(p0, p1, p2).is_finite():
        _logger.debug("Arc %s -> %s -> %s is collinear; using a line", p0, p1, p2)
        return [Section(kind=SectionKind.LINEAR, control_points=(p0, p2))]

    return [section]


def correct_sections(sections: list[Section] | tuple[Section, ...]) -> list[Section]:
    """Apply :func:`correct_section` to every section, preserving order."""
    corrected: list[Section] = []
    for section in sections:
        corrected.extend(correct_section(section))
    return corrected
