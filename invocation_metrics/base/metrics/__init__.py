"""Latency metrics package.

Exports running aggregates and their snapshots.
"""

from .aggregates import AggregateSnapshot, RunningAggregate

__all__ = ["AggregateSnapshot", "RunningAggregate"]
