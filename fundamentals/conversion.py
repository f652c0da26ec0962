"""Failable conversions that return optionals instead of raising."""

from __future__ import annotations

import re

from .operators import INT_MAX, INT_MIN
from .optional import ABSENT, Optional, Present

_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def parse_int(text: str) -> Optional[int]:
    """Convert ``text`` to an integer, or ``ABSENT`` when it is not one.

    Only an optional sign followed by ASCII digits is accepted: no
    surrounding whitespace, digit separators or empty strings.  Values
    outside the signed 64-bit range are absent too.
    """

    if not isinstance(text, str) or _INT_PATTERN.fullmatch(text) is None:
        return ABSENT
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return ABSENT
    return Present(value)


def parse_float(text: str) -> Optional[float]:
    if not isinstance(text, str) or _FLOAT_PATTERN.fullmatch(text) is None:
        return ABSENT
    value = float(text)
    return Present(value)


__all__ = ["parse_float", "parse_int"]
