"""Unified instrumentation error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``invocation_metrics.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.instrumentation_error import InstrumentationError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "InstrumentationError", "classify_exception"]
