"""invocation_metrics.config.defaults
==================================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or explicit
overrides, but provide sensible fallbacks for debugging sessions and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants and enums live here.
"""

from __future__ import annotations

from enum import Enum


class FailurePolicy(str, Enum):
    """What a proxy does after a delegated operation raised.

    ``SWALLOW`` logs the failure and returns ``None`` to the caller.
    ``PROPAGATE`` logs the failure and re-raises the original exception.
    Neither policy adds a timing sample for the failed call.
    """

    SWALLOW = "swallow"
    PROPAGATE = "propagate"


DEFAULT_FAILURE_POLICY = FailurePolicy.SWALLOW
DEFAULT_LOG_FAILURES = True

# ---- Report rendering ----
REPORT_HEADER_TEMPLATE = "++++ Stats for {label} ++++"
REPORT_TIME_UNIT = "ns"
