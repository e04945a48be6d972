"""Process-wide statistics registry.

Maps caller-supplied identifiers to :class:`Interceptor` instances. The
default registry is created lazily on first use and lives for the rest of the
process; entries are never removed or rebound.

Identifiers are restricted to ``str`` and ``int`` (``bool`` excluded) so
their equality and hash never change after registration.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

from ..errors import ErrorCode, InstrumentationError
from ..logging import LogContext, get_logger, log_event

if TYPE_CHECKING:
    from ..interception.interceptor import Interceptor

RegistryKey = Union[str, int]


class StatisticsRegistry:
    """Thread-safe insert-if-absent map from identifier to interceptor.

    Inserts are serialized by a lock; lookups are plain dictionary reads.
    """

    def __init__(self) -> None:
        self._entries: Dict[RegistryKey, "Interceptor"] = {}
        self._lock = Lock()
        self._logger = get_logger("invocation_metrics.registry")

    @staticmethod
    def is_valid_identifier(identifier: Any) -> bool:
        return isinstance(identifier, (str, int)) and not isinstance(identifier, bool)

    @classmethod
    def validate_identifier(cls, identifier: Any) -> None:
        """Raise :class:`InstrumentationError` unless ``identifier`` is a str or int."""
        if not cls.is_valid_identifier(identifier):
            raise InstrumentationError(
                code=ErrorCode.VALIDATION,
                message=f"identifier must be str or int, got {type(identifier).__name__}",
                identifier=identifier,
            )

    def register(self, identifier: RegistryKey, instance: "Interceptor") -> bool:
        """Bind ``identifier`` to ``instance`` unless it is already bound.

        Returns:
            True when the binding was created, False when an earlier
            registration was kept.
        """
        self.validate_identifier(identifier)
        with self._lock:
            created = identifier not in self._entries
            if created:
                self._entries[identifier] = instance
        log_event(
            self._logger,
            "registry.register" if created else "registry.duplicate",
            LogContext(identifier=identifier, target_type=instance.target_type),
            level=logging.DEBUG,
        )
        return created

    def lookup(self, identifier: Any) -> Optional["Interceptor"]:
        """Return the interceptor bound to ``identifier``, or None."""
        if not self.is_valid_identifier(identifier):
            return None
        return self._entries.get(identifier)

    def identifiers(self) -> Tuple[RegistryKey, ...]:
        with self._lock:
            return tuple(self._entries)

    def __contains__(self, identifier: Any) -> bool:
        return self.lookup(identifier) is not None

    def __len__(self) -> int:
        return len(self._entries)


_DEFAULT_REGISTRY: StatisticsRegistry | None = None
_DEFAULT_LOCK = Lock()


def get_registry() -> StatisticsRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_REGISTRY is None:
                _DEFAULT_REGISTRY = StatisticsRegistry()
    return _DEFAULT_REGISTRY


def register(identifier: RegistryKey, instance: "Interceptor") -> bool:
    """Insert-if-absent into the process-wide registry."""
    return get_registry().register(identifier, instance)


def lookup(identifier: Any) -> Optional["Interceptor"]:
    """Look up an interceptor in the process-wide registry."""
    return get_registry().lookup(identifier)


__all__ = ["RegistryKey", "StatisticsRegistry", "get_registry", "register", "lookup"]
