"""Errors raised while building a slider curve.

Only :class:`NominalLengthError` escapes
:meth:`~slidercurve.geometry.curve.CurveBuilder.build`; every other geometry
problem (dropped sections, degenerate arcs, unconverged bisection, sliders
with no extent) is recovered locally.
"""

from __future__ import annotations


class CurveConstructionError(ValueError):
    """Raised when chart data for one slider cannot produce a usable curve."""


class NominalLengthError(CurveConstructionError):
    """Raised when the chart-declared length is zero, negative or not finite."""


class DegenerateCurveError(CurveConstructionError):
    """Raised by :func:`~slidercurve.geometry.reconciler.reconcile` for a trace
    with no extent to extend along."""
