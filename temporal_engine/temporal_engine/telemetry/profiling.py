"""Timing instrumentation for scheduler queries.

``@profile_query(name)`` wraps a query function, measures it with
``time.perf_counter_ns`` and records the result in the process-wide
:class:`QueryTimingCollector`.  Scheduler queries are synchronous, so only
plain functions are supported.

Usage::

    from temporal_engine.telemetry.profiling import profile_query

    @profile_query("stn.free_slots")
    def find_free_slots(network, duration, window_start, window_end):
        ...
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class QueryTiming:
    """Immutable record of one timed query."""

    operation: str
    duration_ms: float
    succeeded: bool = True


class QueryTimingCollector:
    """Thread-safe store of the most recent timings per operation.

    Parameters
    ----------
    max_results:
        Timings retained per operation name; older ones are discarded.
    enabled:
        When ``False`` :meth:`record` is a no-op.
    """

    _instance: QueryTimingCollector | None = None
    _instance_lock = threading.Lock()

    def __init__(self, max_results: int = 100, enabled: bool = True) -> None:
        self._max_results = max_results
        self.enabled = enabled
        self._data: dict[str, deque[QueryTiming]] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> QueryTimingCollector:
        """Return the process-wide collector, creating it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = QueryTimingCollector()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide collector (for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def record(self, timing: QueryTiming) -> None:
        if not self.enabled:
            return
        with self._lock:
            bucket = self._data.setdefault(timing.operation, deque(maxlen=self._max_results))
            bucket.append(timing)

    def operations(self) -> list[str]:
        with self._lock:
            return sorted(self._data)

    def get_stats(self, operation: str) -> dict[str, Any] | None:
        """Aggregate the stored timings of *operation*.

        Returns ``None`` when nothing has been recorded, otherwise
        ``{"operation", "count", "failures", "mean_ms", "p50_ms", "p95_ms",
        "min_ms", "max_ms"}``.
        """
        with self._lock:
            timings = list(self._data.get(operation, ()))
        if not timings:
            return None

        durations = sorted(t.duration_ms for t in timings)
        count = len(durations)
        return {
            "operation": operation,
            "count": count,
            "failures": sum(1 for t in timings if not t.succeeded),
            "mean_ms": round(sum(durations) / count, 3),
            "p50_ms": round(_percentile(durations, 50), 3),
            "p95_ms": round(_percentile(durations, 95), 3),
            "min_ms": round(durations[0], 3),
            "max_ms": round(durations[-1], 3),
        }


def _percentile(sorted_data: list[float], p: float) -> float:
    """Linear-interpolated p-th percentile of already sorted data."""
    n = len(sorted_data)
    k = (p / 100.0) * (n - 1)
    lower = int(k)
    upper = min(lower + 1, n - 1)
    return sorted_data[lower] + (k - lower) * (sorted_data[upper] - sorted_data[lower])


def profile_query(name: str) -> Callable[[F], F]:
    """Decorator recording the wall-clock time of a scheduler query.

    Failed calls are recorded too (``succeeded=False``) and the exception
    propagates unchanged.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_ns = time.perf_counter_ns()
            succeeded = False
            try:
                result = func(*args, **kwargs)
                succeeded = True
                return result
            finally:
                duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
                QueryTimingCollector.get_instance().record(
                    QueryTiming(operation=name, duration_ms=round(duration_ms, 3), succeeded=succeeded)
                )
                logger.debug("PROFILE %s: %.3f ms", name, duration_ms)

        return wrapper  # type: ignore[return-value]

    return decorator
