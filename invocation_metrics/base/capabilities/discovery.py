"""Capability set discovery and member enumeration.

A capability is a declared contract class: a ``typing.Protocol`` or an
abstract base class (including the ``collections.abc`` ABCs). Targets do not
need to enumerate their capabilities; they are inferred from the marker
interfaces present in the target's class hierarchy, or passed explicitly.

Members are enumerated in method resolution order, so a name declared by
several capabilities resolves to a single operation exactly as attribute
lookup on the combined class would.
"""

from __future__ import annotations

import inspect
import typing
from abc import ABC, ABCMeta
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Protocol, Sequence, Tuple

from ..errors import ErrorCode, InstrumentationError
from .operation_key import OperationKey

_SKIPPED_BASES = frozenset((object, Protocol, Generic, ABC))

# object and class machinery; never part of a behavioral contract
_EXCLUDED_NAMES = frozenset(
    (
        "__init__",
        "__new__",
        "__del__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__getattribute__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__sizeof__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__copy__",
        "__deepcopy__",
        "__instancecheck__",
        "__subclasscheck__",
        "__annotate__",
        "__annotate_func__",
    )
)


@dataclass(frozen=True)
class CapabilityMembers:
    """Operations and forwarded attributes of one capability set.

    Attributes:
        operations: ``(key, declaring function)`` pairs in discovery order.
        attributes: Names read from the target without timing.
    """

    operations: Tuple[Tuple[OperationKey, Callable[..., Any]], ...]
    attributes: Tuple[str, ...]

    @property
    def keys(self) -> Tuple[OperationKey, ...]:
        return tuple(key for key, _ in self.operations)


def _is_public(name: str) -> bool:
    if not name.startswith("_"):
        return True
    return name.startswith("__") and name.endswith("__")


def _is_protocol(klass: type) -> bool:
    return bool(getattr(klass, "_is_protocol", False))


def is_capability(klass: type) -> bool:
    """Return True for Protocol classes and abstract base classes."""
    if klass in _SKIPPED_BASES:
        return False
    if _is_protocol(klass):
        return True
    return isinstance(klass, ABCMeta) and inspect.isabstract(klass)


def normalize_capabilities(capabilities: Iterable[Any]) -> Tuple[type, ...]:
    """Validate capabilities and drop duplicates and redundant bases.

    Parameterized generics (``Sequence[int]``) are reduced to their origin.
    A capability that is a base of another listed capability is dropped, so
    ``(Sequence, MutableSequence)`` becomes ``(MutableSequence,)``.

    Raises:
        InstrumentationError: when an entry is not a class.
    """
    resolved = []
    for capability in capabilities:
        origin = typing.get_origin(capability) or capability
        if not isinstance(origin, type):
            raise InstrumentationError(
                code=ErrorCode.VALIDATION,
                message=f"capability must be a class, got {capability!r}",
            )
        resolved.append(origin)
    unique = list(dict.fromkeys(resolved))
    return tuple(
        capability
        for capability in unique
        if not any(other is not capability and capability in other.__mro__ for other in unique)
    )


def declared_capabilities(target: Any) -> Tuple[type, ...]:
    """Infer the capability set from the target's class hierarchy."""
    return normalize_capabilities(k for k in type(target).__mro__ if is_capability(k))


def enumerate_members(mro: Sequence[type]) -> CapabilityMembers:
    """Collect operations and forwarded attributes along ``mro``.

    Plain functions become operations. Properties, static and class methods,
    abstract private members and annotated Protocol members become forwarded
    attributes. Other private names and object machinery are skipped.
    """
    seen: set[str] = set()
    operations = []
    attributes = []
    for klass in mro:
        if klass in _SKIPPED_BASES:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if name in _EXCLUDED_NAMES:
                continue
            if not _is_public(name):
                # untimed, but the proxy must still be instantiable
                if getattr(member, "__isabstractmethod__", False):
                    attributes.append(name)
                continue
            if isinstance(member, (staticmethod, classmethod, property)):
                attributes.append(name)
            elif inspect.isfunction(member):
                operations.append((OperationKey.from_function(klass, name, member), member))
        if _is_protocol(klass):
            for name in inspect.get_annotations(klass):
                if name in seen or not _is_public(name):
                    continue
                seen.add(name)
                attributes.append(name)
    return CapabilityMembers(operations=tuple(operations), attributes=tuple(attributes))


__all__ = [
    "CapabilityMembers",
    "is_capability",
    "normalize_capabilities",
    "declared_capabilities",
    "enumerate_members",
]
