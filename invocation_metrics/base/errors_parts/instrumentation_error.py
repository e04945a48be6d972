"""
Structured instrumentation error exception type.

Raised by the instrumentation layer itself (never for failures of wrapped
operations, which are handled by the configured failure policy).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_code import ErrorCode


@dataclass
class InstrumentationError(Exception):
    """Represents a structured instrumentation error with a normalized code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        identifier: Registry identifier involved in the failure, if any.
    """

    code: ErrorCode
    message: str
    identifier: Any = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining code and message."""
        return f"{self.code.value}: {self.message}"


__all__ = ["InstrumentationError"]
