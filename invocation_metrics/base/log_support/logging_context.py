"""Structured logging context object for instrumentation events.

This module defines :class:`LogContext`, a dataclass used to carry common
fields for interceptor logging events (registry identifier, operation label,
target type, and extra metadata).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for instrumentation logging events."""

    identifier: Any = None
    operation: Optional[str] = None
    target_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
