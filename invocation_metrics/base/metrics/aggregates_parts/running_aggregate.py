"""Thread-safe running latency aggregate for a single operation.

Each aggregate owns its own lock so that concurrent updates of the same
operation never lose samples while different operations never contend.
"""

from __future__ import annotations

import time
from threading import RLock
from typing import Dict, Optional

from .aggregate_snapshot import AggregateSnapshot


class RunningAggregate:
    """Incrementally updated count/min/max/sum of observed latencies.

    ``count``, ``min_ns``, ``max_ns`` and ``total_ns`` change together under
    the aggregate's lock. Failed invocations only touch the failure counters.
    """

    __slots__ = (
        "_lock",
        "_count",
        "_total",
        "_min",
        "_max",
        "_failures",
        "_failure_by_code",
    )

    def __init__(self) -> None:
        self._lock = RLock()
        self._count = 0
        self._total = 0
        self._min: Optional[int] = None
        self._max: Optional[int] = None
        self._failures = 0
        self._failure_by_code: Dict[str, int] = {}

    # -------------------------- Static Helpers -------------------------- #
    @staticmethod
    def monotonic_ns() -> int:
        """Return the current high-resolution monotonic time in nanoseconds."""
        return time.perf_counter_ns()

    # -------------------------- Record Methods -------------------------- #
    def record(self, elapsed_ns: int) -> None:
        """Add one completed invocation taking ``elapsed_ns`` nanoseconds.

        Negative values cannot come from a monotonic clock and are ignored.
        """
        if elapsed_ns < 0:
            return
        with self._lock:
            if self._min is None or elapsed_ns < self._min:
                self._min = elapsed_ns
            if self._max is None or elapsed_ns > self._max:
                self._max = elapsed_ns
            self._count += 1
            self._total += elapsed_ns

    def record_failure(self, error_code: str) -> None:
        """Count a failed invocation without contributing a timing sample."""
        with self._lock:
            self._failures += 1
            self._failure_by_code[error_code] = self._failure_by_code.get(error_code, 0) + 1

    # -------------------------- Read Access -------------------------- #
    @property
    def count(self) -> int:
        return self._count

    @property
    def min_ns(self) -> Optional[int]:
        return self._min

    @property
    def max_ns(self) -> Optional[int]:
        return self._max

    @property
    def total_ns(self) -> int:
        return self._total

    @property
    def failures(self) -> int:
        return self._failures

    @property
    def average_ns(self) -> float:
        """Mean latency in nanoseconds, ``0.0`` when nothing was recorded."""
        with self._lock:
            return self._total / self._count if self._count else 0.0

    def snapshot(self) -> AggregateSnapshot:
        """Return an immutable, internally consistent copy of the aggregate."""
        with self._lock:
            return AggregateSnapshot(
                count=self._count,
                total_ns=self._total,
                min_ns=self._min,
                max_ns=self._max,
                avg_ns=self._total / self._count if self._count else 0.0,
                failures=self._failures,
                failure_by_code=dict(self._failure_by_code),
            )

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"RunningAggregate(count={snap.count}, min_ns={snap.min_ns}, "
            f"max_ns={snap.max_ns}, avg_ns={snap.avg_ns:f})"
        )


__all__ = ["RunningAggregate"]
