"""Aggregate snapshot dataclass.

Defines an immutable snapshot capturing the latency aggregate of one
operation. Kept separate to keep one class per file.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AggregateSnapshot:
    """Immutable snapshot of one operation's latency aggregate.

    Attributes:
        count: Number of completed invocations with recorded latency.
        total_ns: Sum of all observed latencies in nanoseconds.
        min_ns: Minimum observed latency (ns) or None if no samples.
        max_ns: Maximum observed latency (ns) or None if no samples.
        avg_ns: Arithmetic mean (ns); ``0.0`` when there are no samples.
        failures: Number of invocations whose delegated call raised.
        failure_by_code: Failed invocations bucketed by normalized error code.
    """

    count: int
    total_ns: int
    min_ns: Optional[int]
    max_ns: Optional[int]
    avg_ns: float
    failures: int
    failure_by_code: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:  # convenience
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["AggregateSnapshot"]
