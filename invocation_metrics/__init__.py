"""invocation_metrics package

Per-operation latency statistics for any object, collected by a transparent
proxy over the object's declared capabilities (Protocols and ABCs).

Intended for ad-hoc debugging and profiling: every call is recorded, memory
grows with the number of wrapped targets, and nothing is exported.

Typical use::

    from collections.abc import MutableSequence
    import invocation_metrics as im

    items = im.wrap([], "items", MutableSequence)
    for i in range(1000):
        items.append(i)
    print(im.lookup("items").format("append"))

Public API (re-exported):
    - Entry points: :func:`wrap`, :func:`lookup`, :func:`get_registry`,
      :func:`interceptor_of`
    - Reporting: :func:`query_operations`, :func:`format_report`,
      :func:`format_all`, :func:`format_filtered`, :func:`log_report`
    - Types: :class:`Interceptor`, :class:`OperationKey`,
      :class:`RunningAggregate`, :class:`AggregateSnapshot`,
      :class:`StatisticsRegistry`
    - Configuration: :class:`FailurePolicy`, :class:`InstrumentationSettings`,
      :func:`load_settings`
    - Errors: :class:`InstrumentationError`, :class:`ErrorCode`
"""

from .config import FailurePolicy, InstrumentationSettings, load_settings
from .base import (
    AggregateSnapshot,
    ErrorCode,
    InstrumentationError,
    Interceptor,
    OperationKey,
    RunningAggregate,
    StatisticsRegistry,
    format_all,
    format_filtered,
    format_report,
    get_registry,
    interceptor_of,
    log_report,
    lookup,
    query_operations,
    wrap,
)
from .base.logging import configure_logger, get_logger

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "wrap",
    "lookup",
    "get_registry",
    "interceptor_of",
    "query_operations",
    "format_report",
    "format_all",
    "format_filtered",
    "log_report",
    "Interceptor",
    "OperationKey",
    "RunningAggregate",
    "AggregateSnapshot",
    "StatisticsRegistry",
    "FailurePolicy",
    "InstrumentationSettings",
    "load_settings",
    "InstrumentationError",
    "ErrorCode",
    "configure_logger",
    "get_logger",
]
