"""Engine settings, overridable through ``SLIDERCURVE_*`` environment variables.

Entry-point scripts call ``dotenv.load_dotenv()`` before
:meth:`CurveSettings.from_env` so a local ``.env`` file is honoured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Distance between trace points and between equal-distance points, in
# chart-native units. Independent of zoom so sampling quality does not depend
# on screen resolution.
DEFAULT_TRACE_SPACING = 3.0
DEFAULT_TOLERANCE = 0.25
DEFAULT_PROBE_STEP = 0.01
DEFAULT_MAX_BISECTIONS = 64
DEFAULT_MAX_POINTS_PER_SECTION = 100_000


def _env_number(name: str, default: float | None, cast: type[float] | type[int]) -> float | None:
    raw = os.environ.get(name, "")
    if not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc


@dataclass(frozen=True)
class CurveSettings:
    """Numerical parameters of the curve engine."""

    trace_spacing: float = DEFAULT_TRACE_SPACING
    tolerance: float = DEFAULT_TOLERANCE
    probe_step: float = DEFAULT_PROBE_STEP
    max_bisections: int = DEFAULT_MAX_BISECTIONS
    max_points_per_section: int = DEFAULT_MAX_POINTS_PER_SECTION
    max_workers: int | None = None
    """Worker count for batch builds; None lets the executor decide."""

    def __post_init__(self) -> None:
        if self.trace_spacing <= 0:
            raise ValueError("trace_spacing must be > 0")
        if not 0 < self.tolerance < self.trace_spacing:
            raise ValueError("tolerance must be > 0 and smaller than trace_spacing")
        if not 0 < self.probe_step <= 1:
            raise ValueError("probe_step must be in (0, 1]")
        if self.max_bisections < 1:
            raise ValueError("max_bisections must be >= 1")
        if self.max_points_per_section < 1:
            raise ValueError("max_points_per_section must be >= 1")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @classmethod
    def from_env(cls) -> CurveSettings:
        """Build settings from ``SLIDERCURVE_*`` variables, defaulting any that are unset."""
        return cls(
            trace_spacing=_env_number("SLIDERCURVE_TRACE_SPACING", DEFAULT_TRACE_SPACING, float),
            tolerance=_env_number("SLIDERCURVE_TOLERANCE", DEFAULT_TOLERANCE, float),
            probe_step=_env_number("SLIDERCURVE_PROBE_STEP", DEFAULT_PROBE_STEP, float),
            max_bisections=_env_number("SLIDERCURVE_MAX_BISECTIONS", DEFAULT_MAX_BISECTIONS, int),
            max_points_per_section=_env_number(
                "SLIDERCURVE_MAX_POINTS_PER_SECTION", DEFAULT_MAX_POINTS_PER_SECTION, int
            ),
            max_workers=_env_number("SLIDERCURVE_MAX_WORKERS", None, int),
        )
