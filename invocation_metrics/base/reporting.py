"""Query and text rendering of interceptor statistics.

Reports are line oriented plain text meant for logs and debugging sessions::

    ++++ Stats for collections.abc.MutableSequence.append(value) ++++
    Count: 1000
    Min: 120ns
    Max: 9100ns
    Avg: 201.337000ns

Operations without samples render ``0ns`` for min and max and
``0.000000ns`` for the average.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from ..config.defaults import REPORT_HEADER_TEMPLATE, REPORT_TIME_UNIT
from .logging import LogContext, get_logger, log_event
from .metrics import AggregateSnapshot, RunningAggregate

if TYPE_CHECKING:
    from .interception.interceptor import Interceptor


def _header(label: str) -> str:
    return REPORT_HEADER_TEMPLATE.format(label=label)


def query_operations(
    instance: "Interceptor",
    name_filter: str,
    substring: bool = False,
    stop_on_first: bool = False,
) -> List[Tuple[str, RunningAggregate]]:
    """Return ``(label, aggregate)`` pairs for operations matching ``name_filter``.

    Args:
        instance: Interceptor whose aggregates are searched.
        name_filter: Operation name, or part of one when ``substring`` is set.
        substring: Match names containing ``name_filter`` instead of equal to it.
        stop_on_first: Return after the first match.

    Returns:
        Matches in the interceptor's discovery order; empty when nothing matches.
    """
    result: List[Tuple[str, RunningAggregate]] = []
    for key, aggregate in instance.aggregates.items():
        hit = name_filter in key.name if substring else key.name == name_filter
        if not hit:
            continue
        result.append((key.label, aggregate))
        if stop_on_first:
            break
    return result


def format_report(aggregate: Union[RunningAggregate, AggregateSnapshot], *preceding_lines: str) -> str:
    """Render one aggregate as ``Count``/``Min``/``Max``/``Avg`` lines.

    ``preceding_lines`` are emitted first, one per line.
    """
    snap = aggregate.snapshot() if isinstance(aggregate, RunningAggregate) else aggregate
    lines = list(preceding_lines)
    lines.append(f"Count: {snap.count}")
    lines.append(f"Min: {snap.min_ns or 0}{REPORT_TIME_UNIT}")
    lines.append(f"Max: {snap.max_ns or 0}{REPORT_TIME_UNIT}")
    lines.append(f"Avg: {snap.avg_ns:f}{REPORT_TIME_UNIT}")
    return "\n".join(lines)


def format_all(instance: "Interceptor") -> str:
    """Render every operation of ``instance``, each headed by its label."""
    return "\n".join(
        format_report(aggregate, _header(key.label)) for key, aggregate in instance.aggregates.items()
    )


def format_filtered(
    instance: "Interceptor",
    name_filter: str,
    substring: bool = False,
    stop_on_first: bool = False,
) -> str:
    """Render the matches of :func:`query_operations`; empty text if none."""
    return "\n".join(
        format_report(aggregate, _header(label))
        for label, aggregate in query_operations(instance, name_filter, substring, stop_on_first)
    )


def log_report(instance: "Interceptor", logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> str:
    """Emit :func:`format_all` as a ``report`` event and return the text."""
    text = format_all(instance)
    log_event(
        logger or get_logger("invocation_metrics.report"),
        "report",
        LogContext(identifier=instance.identifier, target_type=instance.target_type),
        level=level,
        report=text,
    )
    return text


__all__ = [
    "query_operations",
    "format_report",
    "format_all",
    "format_filtered",
    "log_report",
]
