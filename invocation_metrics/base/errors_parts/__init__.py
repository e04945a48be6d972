"""One-class-per-file parts for the instrumentation error taxonomy."""

from .error_code import ErrorCode
from .instrumentation_error import InstrumentationError
from .classification import classify_exception

__all__ = ["ErrorCode", "InstrumentationError", "classify_exception"]
