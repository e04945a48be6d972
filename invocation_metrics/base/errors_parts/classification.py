"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used to bucket failed invocations of wrapped operations and to tag the failure
log event. Classification is by exception type only; messages are not parsed.
"""
from __future__ import annotations

import asyncio
from typing import Tuple, Type

from .error_code import ErrorCode
from .instrumentation_error import InstrumentationError

_TYPE_MAP: Tuple[Tuple[Tuple[Type[BaseException], ...], ErrorCode], ...] = (
    ((TimeoutError, asyncio.TimeoutError), ErrorCode.TIMEOUT),
    ((asyncio.CancelledError,), ErrorCode.CANCELLED),
    ((NotImplementedError,), ErrorCode.UNSUPPORTED),
    ((LookupError,), ErrorCode.NOT_FOUND),
    ((ValueError, TypeError), ErrorCode.VALIDATION),
)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Order of evaluation:
    1. :class:`InstrumentationError` returns its own code.
    2. First matching entry of the exception type table.
    3. ``ErrorCode.UNKNOWN`` otherwise.
    """
    if isinstance(exc, InstrumentationError):
        return exc.code
    for types, code in _TYPE_MAP:
        if isinstance(exc, types):
            return code
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
