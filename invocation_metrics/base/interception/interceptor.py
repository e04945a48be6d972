"""Interceptor owning one wrapped target and its per-operation aggregates.

The interceptor is the dispatch target of every forwarding method on a proxy.
It delegates to the wrapped target, times successful calls and records them
in the aggregate of the invoked operation.

Failure modes
-------------
- Exceptions raised by the target are classified, counted on the aggregate
  (without a timing sample), logged as ``invocation.failed`` and then either
  swallowed (the caller receives ``None``) or re-raised, depending on
  :class:`~invocation_metrics.config.FailurePolicy`.
- An operation without an aggregate is still delegated; its sample is dropped.
- ``async def`` operations are timed across the await. A cancelled await is
  counted under ``cancelled`` and always propagates.
"""

from __future__ import annotations

import asyncio
import logging
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ...config import FailurePolicy, InstrumentationSettings, load_settings
from ..capabilities import OperationKey
from ..errors import classify_exception
from ..logging import LogContext, get_logger, log_event
from ..metrics import RunningAggregate
from .. import reporting


class Interceptor:
    """Forwarding and timing state behind one proxy instance.

    Attributes are read-only after construction: the operation set is fixed
    and only the aggregates themselves change.
    """

    def __init__(
        self,
        target: Any,
        operations: Iterable[OperationKey],
        *,
        identifier: Any = None,
        settings: Optional[InstrumentationSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Bind ``target`` and pre-populate one aggregate per operation.

        Args:
            target: Object every call is delegated to.
            operations: Operation keys of the capability set.
            identifier: Registry identifier, used for logging context.
            settings: Behavior switches; loaded from the environment if omitted.
            logger: Logger for failure events.
        """
        self._target = target
        self._identifier = identifier
        self._settings = settings if settings is not None else load_settings()
        self._logger = logger or get_logger("invocation_metrics.interceptor")
        self._aggregates = MappingProxyType({key: RunningAggregate() for key in operations})

    # -------------------------- Introspection -------------------------- #
    @property
    def identifier(self) -> Any:
        return self._identifier

    @property
    def settings(self) -> InstrumentationSettings:
        return self._settings

    @property
    def target_type(self) -> str:
        return type(self._target).__qualname__

    @property
    def operations(self) -> Tuple[OperationKey, ...]:
        return tuple(self._aggregates)

    @property
    def aggregates(self) -> Mapping[OperationKey, RunningAggregate]:
        """Read-only view of ``OperationKey -> RunningAggregate`` in discovery order."""
        return self._aggregates

    def aggregate_for(self, key: OperationKey) -> Optional[RunningAggregate]:
        return self._aggregates.get(key)

    def is_target(self, obj: Any) -> bool:
        return obj is self._target

    def read_attribute(self, name: str) -> Any:
        """Read a forwarded (untimed) attribute of the target."""
        return getattr(self._target, name)

    # -------------------------- Dispatch -------------------------- #
    def invoke(self, key: OperationKey, args: Tuple[Any, ...] = (), kwargs: Optional[Mapping[str, Any]] = None) -> Any:
        """Delegate ``key`` to the target with unchanged arguments and time it.

        Returns the target's result. On failure returns ``None`` under the
        ``swallow`` policy, or re-raises under ``propagate``.
        """
        try:
            method = getattr(self._target, key.name)
            start = RunningAggregate.monotonic_ns()
            result = method(*args, **(kwargs or {}))
        except Exception as exc:
            self._record_failure(key, exc)
            if self._settings.failure_policy is FailurePolicy.PROPAGATE:
                raise
            return None
        self._record_success(key, start)
        return result

    async def ainvoke(
        self, key: OperationKey, args: Tuple[Any, ...] = (), kwargs: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Awaitable counterpart of :meth:`invoke` for ``async def`` operations.

        The sample spans the whole await. Cancellation is counted as a failure
        and always re-raised regardless of the failure policy.
        """
        try:
            method = getattr(self._target, key.name)
            start = RunningAggregate.monotonic_ns()
            result = await method(*args, **(kwargs or {}))
        except asyncio.CancelledError as exc:
            self._record_failure(key, exc)
            raise
        except Exception as exc:
            self._record_failure(key, exc)
            if self._settings.failure_policy is FailurePolicy.PROPAGATE:
                raise
            return None
        self._record_success(key, start)
        return result

    def _record_success(self, key: OperationKey, start: int) -> None:
        elapsed = RunningAggregate.monotonic_ns() - start
        aggregate = self._aggregates.get(key)
        if aggregate is not None:
            aggregate.record(elapsed)

    def _record_failure(self, key: OperationKey, exc: BaseException) -> None:
        code = classify_exception(exc)
        aggregate = self._aggregates.get(key)
        if aggregate is not None:
            aggregate.record_failure(code.value)
        if not self._settings.log_failures:
            return
        log_event(
            self._logger,
            "invocation.failed",
            LogContext(identifier=self._identifier, operation=key.label, target_type=self.target_type),
            level=logging.ERROR,
            exc_info=exc,
            error_code=code.value,
            error=str(exc),
            policy=self._settings.failure_policy.value,
        )

    # -------------------------- Reporting shortcuts -------------------------- #
    def stats_for(
        self, name: str, contains: bool = False, stop_on_first: bool = False
    ) -> List[Tuple[str, RunningAggregate]]:
        """See :func:`invocation_metrics.base.reporting.query_operations`."""
        return reporting.query_operations(self, name, contains, stop_on_first)

    def format_all(self) -> str:
        return reporting.format_all(self)

    def format(self, name: str, contains: bool = False, stop_on_first: bool = False) -> str:
        return reporting.format_filtered(self, name, contains, stop_on_first)

    def __repr__(self) -> str:
        return (
            f"Interceptor(identifier={self._identifier!r}, target_type={self.target_type!r}, "
            f"operations={len(self._aggregates)})"
        )


__all__ = ["Interceptor"]
