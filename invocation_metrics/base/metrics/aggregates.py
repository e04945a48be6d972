"""Per-operation latency aggregates.

Re-exports the one-class-per-file implementations from
``metrics/aggregates_parts`` under a stable import path.
"""

from .aggregates_parts import AggregateSnapshot, RunningAggregate

__all__ = ["AggregateSnapshot", "RunningAggregate"]
