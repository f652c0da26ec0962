"""Unrecoverable termination.

A fatal error signals an invalid program state. It is deliberately not an
exception: ``os._exit`` ends the interpreter without unwinding the stack,
so no ``except`` clause, ``finally`` block or ``atexit`` hook can observe
or suppress it.
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn, Optional

from .config import DEFAULT_FATAL_EXIT_CODE, get_config
from .errors import ConfigError, ErrorLocation
from .observability.logging import get_logger, log_fatal_event

UNEXPECTED_ABSENT = "Unexpectedly found absent value while unwrapping an Optional value"

logger = get_logger(__name__)


def caller_location(stacklevel: int = 1) -> ErrorLocation:
    """Describe who called the current function.

    With ``stacklevel=1`` this is the direct caller of the function that
    invokes ``caller_location``; larger values walk further up the stack.
    """

    try:
        frame = sys._getframe(stacklevel + 1)
    except ValueError:
        return ErrorLocation()
    code = frame.f_code
    return ErrorLocation(path=code.co_filename, line=frame.f_lineno, function=code.co_name)


def _resolve_exit_code() -> int:
    try:
        return get_config().fatal_exit_code
    except ConfigError as exc:
        logger.error("Invalid runtime configuration while halting: %s", exc.format())
    except Exception:  # noqa: BLE001
        logger.exception("Could not resolve runtime configuration while halting")
    return DEFAULT_FATAL_EXIT_CODE


def terminate(message: str, location: Optional[ErrorLocation] = None) -> NoReturn:
    """Report ``message`` and end the process immediately."""

    location = location or ErrorLocation()
    exit_code = DEFAULT_FATAL_EXIT_CODE
    try:
        exit_code = _resolve_exit_code()
        log_fatal_event(message, location=location.describe(), exit_code=exit_code)
        text = f"Fatal error: {message}" if message else "Fatal error"
        if location.path:
            text = f"{text}: file {location.path}, line {location.line}"
        sys.stdout.flush()
        sys.stderr.write(text + "\n")
        sys.stderr.flush()
    finally:
        os._exit(exit_code)


def fatal_error(message: str = "", *, stacklevel: int = 1) -> NoReturn:
    """Unconditionally halt, reporting the caller's location."""

    terminate(message, caller_location(stacklevel))


def unimplemented(what: Optional[str] = None, *, stacklevel: int = 1) -> NoReturn:
    """Stub body for functionality that does not exist yet."""

    message = f"Unimplemented: {what}" if what else "Unimplemented"
    terminate(message, caller_location(stacklevel))


__all__ = [
    "UNEXPECTED_ABSENT",
    "caller_location",
    "fatal_error",
    "terminate",
    "unimplemented",
]
