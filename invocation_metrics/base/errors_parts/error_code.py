"""
Normalized failure codes (taxonomy).

Defines the `ErrorCode` enumeration used when classifying failures raised by
delegated operations and by the instrumentation layer itself. Values are
lowercase snake_case and are considered a stable contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
