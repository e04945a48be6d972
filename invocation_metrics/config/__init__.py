"""Configuration layer for the instrumentation proxies.

Sources are merged in a predictable order:
    1. Built-in defaults (``config.defaults``)
    2. Environment variables (``INVOCATION_METRICS_FAILURE_POLICY``,
       ``INVOCATION_METRICS_LOG_FAILURES``)
    3. In-code overrides passed to :func:`load_settings`

Public API
----------
* InstrumentationSettings
* load_settings(overrides: dict | None = None) -> InstrumentationSettings
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .defaults import DEFAULT_FAILURE_POLICY, DEFAULT_LOG_FAILURES, FailurePolicy
from .env import env_overrides


class InstrumentationSettings(BaseModel):
    """Behavior switches applied to every proxy created by ``wrap``.

    Attributes
    ----------
    failure_policy:
        Handling of exceptions raised by the wrapped target. See
        :class:`FailurePolicy`.
    log_failures:
        Emit an ``invocation.failed`` ERROR event (with traceback) for each
        failed delegated call.
    """

    model_config = ConfigDict(frozen=True)

    failure_policy: FailurePolicy = DEFAULT_FAILURE_POLICY
    log_failures: bool = DEFAULT_LOG_FAILURES


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstrumentationSettings:
    """Build settings from defaults, environment and explicit overrides.

    Raises
    ------
    pydantic.ValidationError
        When a merged value is invalid (e.g. an unknown failure policy).
    """
    merged: dict[str, Any] = dict(env_overrides(environ))
    if overrides:
        merged.update(overrides)
    return InstrumentationSettings(**merged)


__all__ = ["FailurePolicy", "InstrumentationSettings", "load_settings"]
