"""Completion helpers for repeating sliders.

A slider with ``repeat_count`` repeats travels its path back and forth. Raw
completion runs from 0 to ``repeat_count``; :func:`reflect` folds it back onto
[0, 1] before it is handed to :meth:`SliderCurve.position_at_completion`.
"""

from __future__ import annotations

import math


def reflect(value: float) -> float:
    """Ping-pong *value* onto [0, 1].

    Even integer parts run forward, odd ones backward::

        reflect(0.25) == 0.25
        reflect(1.25) == 0.75
        reflect(2.25) == 0.25

    An integral value maps to the end it has just reached, so ``reflect(1.0)``
    is 1.0 and ``reflect(2.0)`` is 0.0.
    """
    whole = math.floor(value)
    fraction = value - whole
    if whole % 2 == 0:
        return fraction
    return 1.0 - fraction


def completion_at_time(elapsed: float, duration: float, repeat_count: int) -> float:
    """Raw completion after *elapsed* time for a slider of total *duration*.

    Args:
        elapsed: Time since the slider started (any unit).
        duration: Time the whole slider takes, all repeats included.
        repeat_count: Number of passes along the path.

    Returns:
        A value in ``[0, repeat_count]``; pass it through :func:`reflect`.

    Raises:
        ValueError: If *duration* is not positive or *repeat_count* < 1.
    """
    if duration <= 0:
        raise ValueError(f"duration must be > 0, got {duration!r}")
    if repeat_count < 1:
        raise ValueError(f"repeat_count must be >= 1, got {repeat_count!r}")
    raw = elapsed / duration * repeat_count
    return min(max(raw, 0.0), float(repeat_count))
