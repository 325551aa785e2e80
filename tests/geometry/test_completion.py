"""Tests for repeat completion helpers."""

from __future__ import annotations

import pytest

from slidercurve.geometry.completion import completion_at_time, reflect


class TestReflect:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, 0.0),
            (0.25, 0.25),
            (1.0, 1.0),
            (1.25, 0.75),
            (2.0, 0.0),
            (2.25, 0.25),
            (3.5, 0.5),
        ],
    )
    def test_ping_pong(self, value, expected):
        assert reflect(value) == pytest.approx(expected)


class TestCompletionAtTime:
    def test_linear_in_time(self):
        """Halfway through a two-repeat slider is the end of the first pass."""
        assert completion_at_time(500, 1000, 2) == pytest.approx(1.0)

    def test_clamped_before_start_and_after_end(self):
        assert completion_at_time(-100, 1000, 3) == 0.0
        assert completion_at_time(5000, 1000, 3) == 3.0

    def test_feeds_reflect(self):
        """Three quarters of a two-repeat slider is halfway back."""
        assert reflect(completion_at_time(750, 1000, 2)) == pytest.approx(0.5)

    def test_rejects_bad_duration(self):
        with pytest.raises(ValueError):
            completion_at_time(0, 0, 1)

    def test_rejects_bad_repeat_count(self):
        with pytest.raises(ValueError):
            completion_at_time(0, 1000, 0)
