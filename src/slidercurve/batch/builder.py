"""CurveBatchBuilder: builds every slider of a beatmap on a worker pool.

Each slider is an independent, pure task, so there is no ordering between
them and no locking. A slider whose chart data is unusable is recorded as a
failure without affecting the others.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from slidercurve.config import CurveSettings
from slidercurve.geometry.curve import CurveBuilder, SliderCurve
from slidercurve.geometry.errors import CurveConstructionError
from slidercurve.geometry.models import CurveResult, SliderSpec

_logger = logging.getLogger(__name__)

ExecutorFactory = Callable[[int | None], Executor]


@dataclass
class BatchResult:
    """Joined results of one :meth:`CurveBatchBuilder.build_all` call."""

    curves: dict[int, SliderCurve] = field(default_factory=dict)
    """Built curves keyed by slider id."""

    failures: dict[int, str] = field(default_factory=dict)
    """Error message per slider id that could not be built."""

    cancelled: bool = False
    """True if :meth:`CurveBatchBuilder.cancel` stopped the join early.

    Sliders joined before the cancel are kept; the rest are discarded.
    """


def _build_result(settings: CurveSettings, spec: SliderSpec) -> CurveResult:
    """Worker entry point; module-level so process pools can pickle it."""
    return CurveBuilder(settings).build(spec).result


def _thread_pool(max_workers: int | None) -> Executor:
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="CurveBuilder")


def _process_pool(max_workers: int | None) -> Executor:
    return ProcessPoolExecutor(max_workers=max_workers)


class CurveBatchBuilder:
    """Build many sliders concurrently, one task per slider.

    Parameters
    ----------
    settings:
        Engine settings shared by every task. ``settings.max_workers`` sizes
        the pool.
    use_processes:
        Use a process pool instead of threads. Curve building is pure Python
        and CPU bound, so processes scale better on large beatmaps.
    executor_factory:
        Callable taking ``max_workers`` and returning an executor. Injected
        for testability; overrides *use_processes*.
    """

    def __init__(
        self,
        settings: CurveSettings | None = None,
        use_processes: bool = False,
        executor_factory: ExecutorFactory | None = None,
    ) -> None:
        self.settings = settings or CurveSettings()
        if executor_factory is None:
            executor_factory = _process_pool if use_processes else _thread_pool
        self._executor_factory = executor_factory
        self._cancel_event = threading.Event()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_all(self, specs: Mapping[int, SliderSpec] | list[SliderSpec]) -> BatchResult:
        """Build every slider in *specs* and join the results.

        Args:
            specs: Slider specs keyed by id; a list is keyed by position.

        Returns:
            A :class:`BatchResult`. Sliders raising
            :class:`CurveConstructionError` land in ``failures``; any other
            exception propagates.
        """
        if not isinstance(specs, Mapping):
            specs = dict(enumerate(specs))

        self._cancel_event.clear()
        result = BatchResult()
        if not specs:
            return result

        with self._executor_factory(self.settings.max_workers) as executor:
            futures = {
                executor.submit(_build_result, self.settings, spec): slider_id
                for slider_id, spec in specs.items()
            }
            try:
                for future in as_completed(futures):
                    if self._cancel_event.is_set():
                        result.cancelled = True
                        break
                    slider_id = futures[future]
                    try:
                        result.curves[slider_id] = SliderCurve(future.result())
                    except CurveConstructionError as exc:
                        _logger.warning("Slider %s could not be built: %s", slider_id, exc)
                        result.failures[slider_id] = str(exc)
            finally:
                for future in futures:
                    future.cancel()

        if result.cancelled:
            _logger.info(
                "Batch cancelled after %d of %d sliders; the rest were discarded",
                len(result.curves) + len(result.failures),
                len(specs),
            )
        else:
            _logger.info(
                "Built %d slider curves (%d failed)", len(result.curves), len(result.failures)
            )
        return result

    def build_one(self, spec: SliderSpec) -> SliderCurve:
        """Build a single slider synchronously in the calling thread."""
        return CurveBuilder(self.settings).build(spec)

    def cancel(self) -> None:
        """Discard results of the running :meth:`build_all` call."""
        self._cancel_event.set()
