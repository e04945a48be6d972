"""
Instrumentation Base Package

Exports the building blocks behind ``invocation_metrics.wrap``:
- Capabilities: discovery of declared contracts and their operation keys
- Metrics: thread-safe running latency aggregates
- Interception: generated proxy classes and the per-target interceptor
- Registry: process-wide identifier -> interceptor map
- Reporting: filtered queries and plain-text reports
"""

from .capabilities import OperationKey, declared_capabilities, normalize_capabilities
from .errors import ErrorCode, InstrumentationError, classify_exception
from .metrics import AggregateSnapshot, RunningAggregate
from .registry import StatisticsRegistry, get_registry, lookup, register
from .interception import Interceptor, interceptor_of, wrap
from .reporting import format_all, format_filtered, format_report, log_report, query_operations

__all__ = [
    "OperationKey",
    "declared_capabilities",
    "normalize_capabilities",
    "ErrorCode",
    "InstrumentationError",
    "classify_exception",
    "AggregateSnapshot",
    "RunningAggregate",
    "StatisticsRegistry",
    "get_registry",
    "lookup",
    "register",
    "Interceptor",
    "interceptor_of",
    "wrap",
    "format_all",
    "format_filtered",
    "format_report",
    "log_report",
    "query_operations",
]
