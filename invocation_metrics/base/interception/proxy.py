"""Proxy class generation per capability set.

For each distinct capability tuple one proxy class is generated and cached.
The class subclasses the capabilities, so ``isinstance`` checks against them
hold, and defines one forwarding method per operation plus a read-only
property per forwarded attribute. Forwarding methods dispatch to the
:class:`Interceptor` stored on the proxy instance; ``async def`` operations get
an awaitable forwarder. Static and class methods are forwarded untimed, read
from the target.
"""

from __future__ import annotations

import abc
import functools
import inspect
import types
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Tuple

from ..capabilities import OperationKey, enumerate_members
from ..errors import ErrorCode, InstrumentationError
from .interceptor import Interceptor

_INTERCEPTOR_ATTR = "_interceptor"


@dataclass(frozen=True)
class ProxySpec:
    """Generated proxy class and the operation keys it dispatches."""

    proxy_class: type
    operations: Tuple[OperationKey, ...]

    def instantiate(self, interceptor: Interceptor) -> Any:
        return self.proxy_class(interceptor)


_PROXY_CACHE: Dict[Tuple[type, ...], ProxySpec] = {}
_CACHE_LOCK = Lock()


def _proxy_init(self: Any, interceptor: Interceptor) -> None:
    object.__setattr__(self, _INTERCEPTOR_ATTR, interceptor)


def _proxy_repr(self: Any) -> str:
    interceptor = getattr(self, _INTERCEPTOR_ATTR)
    return f"<{type(self).__name__} for {interceptor.target_type} id={interceptor.identifier!r}>"


def _base_namespace(ns: Dict[str, Any]) -> None:
    ns["__init__"] = _proxy_init
    ns["__repr__"] = _proxy_repr
    ns["__module__"] = __name__


def _forwarder(key: OperationKey, func: Callable[..., Any]) -> Callable[..., Any]:
    if inspect.iscoroutinefunction(func):
        return _async_forwarder(key, func)

    # updated=() keeps __isabstractmethod__ off the forwarder
    @functools.wraps(func, updated=())
    def forward(self: Any, *args: Any, **kwargs: Any) -> Any:
        interceptor = getattr(self, _INTERCEPTOR_ATTR)
        result = interceptor.invoke(key, args, kwargs)
        return self if interceptor.is_target(result) else result

    return forward


def _async_forwarder(key: OperationKey, func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func, updated=())
    async def forward(self: Any, *args: Any, **kwargs: Any) -> Any:
        interceptor = getattr(self, _INTERCEPTOR_ATTR)
        result = await interceptor.ainvoke(key, args, kwargs)
        return self if interceptor.is_target(result) else result

    return forward


def _attribute_forwarder(name: str) -> property:
    def read(self: Any) -> Any:
        return getattr(self, _INTERCEPTOR_ATTR).read_attribute(name)

    return property(read, doc=f"Forwarded attribute ``{name}``.")


def _build(capabilities: Tuple[type, ...]) -> ProxySpec:
    name = "Timed" + "".join(c.__name__ for c in capabilities) if capabilities else "TimedObject"
    proxy_class = types.new_class(name, capabilities, exec_body=_base_namespace)
    members = enumerate_members(proxy_class.__mro__[1:])
    for key, func in members.operations:
        setattr(proxy_class, key.name, _forwarder(key, func))
    for attribute in members.attributes:
        setattr(proxy_class, attribute, _attribute_forwarder(attribute))
    abc.update_abstractmethods(proxy_class)
    return ProxySpec(proxy_class=proxy_class, operations=members.keys)


def interceptor_of(proxy: Any) -> Interceptor:
    """Return the interceptor behind a proxy created by ``wrap``.

    Raises:
        InstrumentationError: if ``proxy`` is not a timed proxy.
    """
    interceptor = getattr(proxy, "__dict__", {}).get(_INTERCEPTOR_ATTR)
    if not isinstance(interceptor, Interceptor):
        raise InstrumentationError(
            code=ErrorCode.VALIDATION,
            message=f"{type(proxy).__name__} is not a timed proxy",
        )
    return interceptor


def proxy_spec_for(capabilities: Tuple[type, ...]) -> ProxySpec:
    """Return the cached proxy spec for ``capabilities``, building it once."""
    with _CACHE_LOCK:
        spec = _PROXY_CACHE.get(capabilities)
        if spec is None:
            spec = _build(capabilities)
            _PROXY_CACHE[capabilities] = spec
    return spec


__all__ = ["ProxySpec", "interceptor_of", "proxy_spec_for"]
