"""Stable identity of one instrumentable operation.

An :class:`OperationKey` combines the operation name, its rendered parameter
list and the capability class that declares it. Keys are created once per
capability set and never change afterwards.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Tuple

_UNKNOWN_PARAMETERS = ("...",)
_BOUND_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _render_annotation(annotation: Any) -> str:
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


def render_parameters(func: Callable[..., Any]) -> Tuple[str, ...]:
    """Render the parameters of ``func`` (minus ``self``) as display strings.

    ``*args``/``**kwargs`` keep their star prefixes and annotations are kept
    verbatim, e.g. ``("index: int", "value")``. Callables without an
    introspectable signature render as ``("...",)``.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return _UNKNOWN_PARAMETERS
    rendered = []
    for index, param in enumerate(signature.parameters.values()):
        if index == 0 and param.kind in _BOUND_KINDS:
            continue
        text = param.name
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            text = f"*{text}"
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            text = f"**{text}"
        if param.annotation is not inspect.Parameter.empty:
            text = f"{text}: {_render_annotation(param.annotation)}"
        rendered.append(text)
    return tuple(rendered)


def qualified_name(klass: type) -> str:
    """Return ``module.QualName`` for a capability class."""
    return f"{klass.__module__}.{klass.__qualname__}"


@dataclass(frozen=True)
class OperationKey:
    """Name, parameter signature and declaring capability of one operation.

    Attributes:
        name: Attribute name the operation is invoked by.
        parameters: Rendered parameters excluding ``self``.
        owner: Dotted name of the declaring capability class.
    """

    name: str
    parameters: Tuple[str, ...] = ()
    owner: str = ""

    @classmethod
    def from_function(cls, owner: type, name: str, func: Callable[..., Any]) -> "OperationKey":
        return cls(name=name, parameters=render_parameters(func), owner=qualified_name(owner))

    @property
    def label(self) -> str:
        """Deterministic text form, e.g. ``pkg.Stack.push(item: int)``."""
        prefix = f"{self.owner}." if self.owner else ""
        return f"{prefix}{self.name}({', '.join(self.parameters)})"

    def __str__(self) -> str:
        return self.label


__all__ = ["OperationKey", "render_parameters", "qualified_name"]
