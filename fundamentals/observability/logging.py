"""Centralised logging helpers for the fundamentals library."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = "fundamentals") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: str = "warning", logger: Optional[logging.Logger] = None) -> logging.Logger:
    """Attach a console handler to the package logger at ``level``."""

    numeric_level = _LEVEL_MAP.get(level.lower(), logging.WARNING)
    target_logger = logger or get_logger()
    target_logger.setLevel(numeric_level)
    if not target_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        target_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        target_logger.propagate = False
    return target_logger


def log_fatal_event(
    message: str,
    *,
    location: Optional[str],
    exit_code: int,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured entry for an unrecoverable error, then flush handlers."""

    payload: Dict[str, Any] = {
        "message": message or "",
        "location": location or "unknown",
        "exit_code": exit_code,
    }
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("fundamentals.fatal")
    target_logger.critical(
        "Fatal error: %s",
        message or "(no message)",
        extra={"fundamentals_event": "fatal_error", "fundamentals_data": payload},
    )
    current: Optional[logging.Logger] = target_logger
    while current is not None:
        for handler in current.handlers:
            handler.flush()
        current = current.parent if current.propagate else None
