"""Unified error model for the fundamentals library.

Only recoverable failures live here. Forced unwrap of an absent optional,
failed preconditions and other invalid program states are not exceptions
at all; see :mod:`fundamentals.fatal`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    function: Optional[str] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.function:
            return f"{self.path}:{self.line} in {self.function}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        return "unknown location"


class FundamentalsError(Exception):
    """Base class for all recoverable errors raised by the library."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line)
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ContractViolationError(FundamentalsError, TypeError):
    """Raised when a value is used in a context its type does not support."""

    code = "FND001"


class ConfigError(FundamentalsError, ValueError):
    """Raised when runtime configuration values are invalid."""

    code = "FND002"


__all__ = [
    "FundamentalsError",
    "ContractViolationError",
    "ConfigError",
    "ErrorLocation",
]
