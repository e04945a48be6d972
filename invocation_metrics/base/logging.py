"""Base structured logging utilities for the instrumentation layer.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid ad-hoc logger setup across the interceptor, registry and reporting code.

All loggers hang off the shared ``invocation_metrics`` logger, which owns a
single stderr handler. Its level is read from ``INVOCATION_METRICS_LOG_LEVEL``.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from ..config.env import LOG_LEVEL_ENV
from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "invocation_metrics"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_invocation_metrics_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_invocation_metrics_console_handler"
_FILE_HANDLER_ATTR = "_invocation_metrics_file_handler"


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _console_handler(formatter: logging.Formatter, level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``invocation_metrics`` logger."""

    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        # only the environment overrides a level set via configure_logger
        if env_level:
            logger.setLevel(_parse_level(env_level, default=logger.level))
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # setStream would flush the closed stream; swap the handler instead
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(existing.formatter or _formatter(json_mode), logger.level))
                continue
            existing.setLevel(logger.level)
            # follow sys.stderr if it was replaced after the handler was created
            if isinstance(existing, logging.StreamHandler):
                with contextlib.suppress(Exception):
                    existing.setStream(sys.stderr)
        return logger

    desired_level = _parse_level(env_level, default=level)
    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(_formatter(json_mode), desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the base logger or a child logger propagating to its handler.

    ``json_mode`` and ``level`` only apply when the base logger is first
    initialized; use :func:`configure_logger` to change them afterwards.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (replacing any previously managed one for another path). When
        ``None``, managed file handlers are removed.
    json_mode: bool
        Formatter choice for the console and file handlers.

    Returns
    -------
    logging.Logger
        The configured base logger. Handlers not created by this module are
        left untouched.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    for h in logger.handlers:
        if getattr(h, _CONSOLE_HANDLER_ATTR, False):
            h.setFormatter(_formatter(json_mode))

    if level is not None:
        if isinstance(level, str):
            logger.setLevel(_parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed:
            logger.removeHandler(h)
            h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if isinstance(h, logging.FileHandler) and h.baseFilename == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            h.close()

    if existing is None:
        # 10MB x 5 backups
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Summary
    -------
    Builds ``{"event": event, **ctx, **fields}`` (``None`` values dropped) and
    writes it as a single JSON message at ``level``. ``exc_info`` is passed
    through to the logger so failures carry their traceback.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr), exc_info=exc_info)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
