"""invocation_metrics.config.env
=============================

Centralized environment variable names and small parsing helpers.

Failure Modes
-------------
- Helpers never raise on unset variables; they return ``None`` and callers
  fall back to defaults. Value validation happens in the settings model.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional

ENV_PREFIX = "INVOCATION_METRICS_"

LOG_LEVEL_ENV = f"{ENV_PREFIX}LOG_LEVEL"

# settings field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "failure_policy": f"{ENV_PREFIX}FAILURE_POLICY",
    "log_failures": f"{ENV_PREFIX}LOG_FAILURES",
}

_FALSY = {"0", "false", "no", "off"}


def get_env_value(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return a stripped environment value, or ``None`` when unset or blank."""
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_flag(value: str) -> bool:
    """Interpret common boolean spellings; anything not falsy is ``True``."""
    return value.strip().lower() not in _FALSY


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, object]:
    """Collect settings fields present in the environment.

    Returns a mapping suitable for merging into the settings model. Boolean
    fields are parsed with :func:`parse_flag`; other values are passed through
    unchanged so the model reports invalid ones.
    """
    found: Dict[str, object] = {}
    for field_name, env_name in ENV_FIELD_MAP.items():
        raw = get_env_value(env_name, environ)
        if raw is None:
            continue
        found[field_name] = parse_flag(raw) if field_name == "log_failures" else raw.lower()
    return found


__all__ = [
    "ENV_PREFIX",
    "LOG_LEVEL_ENV",
    "ENV_FIELD_MAP",
    "get_env_value",
    "parse_flag",
    "env_overrides",
]
