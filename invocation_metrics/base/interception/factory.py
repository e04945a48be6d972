"""Entry point creating timed proxies.

``wrap`` resolves the capability set of a target, obtains the cached proxy
class for it, binds a fresh :class:`Interceptor` and registers that
interceptor under the caller's identifier (first registration wins).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar, cast

from ...config import InstrumentationSettings
from ..capabilities import declared_capabilities, normalize_capabilities, qualified_name
from ..logging import LogContext, get_logger, log_event
from ..registry import RegistryKey, StatisticsRegistry, get_registry
from .interceptor import Interceptor
from .proxy import proxy_spec_for

T = TypeVar("T")

_logger = get_logger("invocation_metrics.factory")


def wrap(
    target: T,
    identifier: RegistryKey,
    *capabilities: Any,
    settings: Optional[InstrumentationSettings] = None,
    registry: Optional[StatisticsRegistry] = None,
) -> T:
    """Return a proxy timing every capability operation of ``target``.

    Parameters
    ----------
    target:
        Object receiving every delegated call. It is never exposed by the proxy.
    identifier:
        ``str`` or ``int`` key to retrieve the statistics later via ``lookup``.
        If the identifier is already registered the existing binding is kept
        and the new interceptor is only reachable through the returned proxy.
    *capabilities:
        Protocol or ABC classes to instrument. Inferred from the target's class
        hierarchy when omitted; a target without any yields a proxy with no
        operations.
    settings:
        Behavior switches for this proxy; defaults to ``load_settings()``.
    registry:
        Registry to bind into; defaults to the process-wide registry.

    Raises
    ------
    InstrumentationError
        If ``identifier`` is not a ``str``/``int`` or a capability is not a class.
    """
    StatisticsRegistry.validate_identifier(identifier)
    resolved = normalize_capabilities(capabilities) if capabilities else declared_capabilities(target)
    spec = proxy_spec_for(resolved)
    interceptor = Interceptor(target, spec.operations, identifier=identifier, settings=settings)
    (registry if registry is not None else get_registry()).register(identifier, interceptor)
    log_event(
        _logger,
        "interceptor.wrap",
        LogContext(identifier=identifier, target_type=interceptor.target_type),
        level=logging.DEBUG,
        capabilities=[qualified_name(c) for c in resolved],
        operations=len(spec.operations),
    )
    return cast(T, spec.instantiate(interceptor))


__all__ = ["wrap"]
