"""Runtime assertions, preconditions and Bool-only contracts.

Assertions are evaluated only in ``debug`` builds, preconditions in
``debug`` and ``release`` builds, and neither in ``unchecked`` builds (see
:class:`fundamentals.config.BuildMode`).  A failed check halts the process
through :mod:`fundamentals.fatal`; there is no way to catch it.

Conditions may be passed as zero-argument callables so that they are not
evaluated at all when the check is disabled.
"""

from __future__ import annotations

from typing import Any, Callable, Union

from .config import get_config
from .errors import ContractViolationError
from .fatal import caller_location, terminate
from .observability.logging import get_logger

logger = get_logger(__name__)

CheckCondition = Union[bool, Callable[[], bool]]


def require_bool(value: Any, what: str = "condition") -> bool:
    """Return ``value`` if it is a real ``bool``; refuse truthy stand-ins."""

    if not isinstance(value, bool):
        raise ContractViolationError(
            f"The {what} must be a Bool, got {type(value).__name__}.",
            hint="Write an explicit comparison such as 'value == 1'.",
        )
    return value


def _evaluate(condition: CheckCondition, what: str) -> bool:
    value = condition() if callable(condition) else condition
    return require_bool(value, what)


def _compose(prefix: str, message: str) -> str:
    return f"{prefix}: {message}" if message else prefix


def assert_(condition: CheckCondition, message: str = "", *, stacklevel: int = 1) -> None:
    """Halt if ``condition`` is false. Checked in debug builds only."""

    if not get_config().assertions_enabled:
        return
    if not _evaluate(condition, "assertion condition"):
        terminate(_compose("Assertion failed", message), caller_location(stacklevel))


def assertion_failure(message: str = "", *, stacklevel: int = 1) -> None:
    """Report a failed assertion the caller already detected."""

    if not get_config().assertions_enabled:
        logger.debug("Assertion failure ignored outside debug builds: %s", message)
        return
    terminate(_compose("Assertion failed", message), caller_location(stacklevel))


def precondition(condition: CheckCondition, message: str = "", *, stacklevel: int = 1) -> None:
    """Halt if ``condition`` is false. Skipped only in unchecked builds."""

    if not get_config().preconditions_enabled:
        return
    if not _evaluate(condition, "precondition"):
        terminate(_compose("Precondition failed", message), caller_location(stacklevel))


def precondition_failure(message: str = "", *, stacklevel: int = 1) -> None:
    """Report a violated precondition, for example an unreachable branch."""

    if not get_config().preconditions_enabled:
        logger.debug("Precondition failure ignored in unchecked build: %s", message)
        return
    terminate(_compose("Precondition failed", message), caller_location(stacklevel))


__all__ = [
    "CheckCondition",
    "assert_",
    "assertion_failure",
    "precondition",
    "precondition_failure",
    "require_bool",
]
