"""Pytest configuration for the invocation_metrics test suite.

Provides unique registry identifiers, environment isolation for settings, and
capture of the structured events emitted on the package logger.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Dict, Iterator, List

import pytest

from invocation_metrics.base.logging import BASE_LOGGER_NAME, configure_logger, get_logger
from invocation_metrics.config.env import ENV_FIELD_MAP, LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip package environment variables and reset the package logger level."""

    for name in (*ENV_FIELD_MAP.values(), LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    configure_logger(level=logging.INFO)
    yield


@pytest.fixture()
def identifier(request: pytest.FixtureRequest) -> str:
    """Registry identifier unique to the requesting test."""

    return f"{request.node.name}-{uuid.uuid4().hex}"


@pytest.fixture()
def captured_events() -> Iterator[List[Dict[str, Any]]]:
    """Collect JSON payloads logged through the package logger."""

    events: List[Dict[str, Any]] = []
    records: List[logging.LogRecord] = []

    class _Collector(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)
            payload = json.loads(record.getMessage())
            payload["_level"] = record.levelname
            payload["_has_exc"] = record.exc_info is not None
            events.append(payload)

    base = get_logger(BASE_LOGGER_NAME)
    handler = _Collector()
    base.addHandler(handler)
    try:
        yield events
    finally:
        base.removeHandler(handler)
