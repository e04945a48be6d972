"""One-class-per-file parts for per-operation latency aggregates."""

from .aggregate_snapshot import AggregateSnapshot
from .running_aggregate import RunningAggregate

__all__ = ["AggregateSnapshot", "RunningAggregate"]
