"""Arithmetic and comparison operators with explicit contracts.

Integer arithmetic models a signed 64-bit integer: the checked operators
halt on overflow, and the ``wrapping_*`` operators opt in to two's
complement wrap-around.  The remainder operator truncates toward zero, so
the sign of the result follows the dividend.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Sequence, Union

from .errors import ContractViolationError
from .fatal import fatal_error

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Tuple comparison is defined for tuples with fewer than seven elements.
MAX_TUPLE_ARITY = 6

Number = Union[int, float]


def _require_number(value: Any, operator: str) -> Number:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ContractViolationError(
            f"Operator '{operator}' cannot be applied to {type(value).__name__}.",
        )
    return value


def _require_int(value: Any, operator: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolationError(
            f"Operator '{operator}' requires Int operands, got {type(value).__name__}.",
        )
    return value


def _checked(result: int, operator: str) -> int:
    if not INT_MIN <= result <= INT_MAX:
        fatal_error(f"Arithmetic overflow in '{operator}'", stacklevel=3)
    return result


def _wrap(result: int) -> int:
    return (result - INT_MIN) % 2**64 + INT_MIN


def add(a: int, b: int) -> int:
    return _checked(_require_int(a, "+") + _require_int(b, "+"), "+")


def subtract(a: int, b: int) -> int:
    return _checked(_require_int(a, "-") - _require_int(b, "-"), "-")


def multiply(a: int, b: int) -> int:
    return _checked(_require_int(a, "*") * _require_int(b, "*"), "*")


def divide(a: Number, b: Number) -> Number:
    """Integer division truncates toward zero; float division is IEEE."""

    if isinstance(a, int) and isinstance(b, int) and not isinstance(a, bool) and not isinstance(b, bool):
        if b == 0:
            fatal_error("Division by zero", stacklevel=2)
        quotient = abs(a) // abs(b)
        return _checked(quotient if (a < 0) == (b < 0) else -quotient, "/")
    a = _require_number(a, "/")
    b = _require_number(b, "/")
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def wrapping_add(a: int, b: int) -> int:
    return _wrap(_require_int(a, "&+") + _require_int(b, "&+"))


def wrapping_subtract(a: int, b: int) -> int:
    return _wrap(_require_int(a, "&-") - _require_int(b, "&-"))


def wrapping_multiply(a: int, b: int) -> int:
    return _wrap(_require_int(a, "&*") * _require_int(b, "&*"))


def remainder(a: Number, b: Number) -> Number:
    """Return ``a - b * trunc(a / b)``.

    The result has the sign of ``a`` and ignores the sign of ``b``, so
    ``remainder(a, b) == remainder(a, -b)``.  An integer remainder by zero
    halts; a float remainder by zero or of an infinite dividend is NaN.
    """

    a = _require_number(a, "%")
    b = _require_number(b, "%")
    if isinstance(a, int) and isinstance(b, int):
        if b == 0:
            fatal_error("Division by zero in remainder operation", stacklevel=2)
        magnitude = abs(a) % abs(b)
        return -magnitude if a < 0 else magnitude
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def unary_minus(value: Number) -> Number:
    value = _require_number(value, "-")
    if isinstance(value, int):
        return _checked(-value, "-")
    return -value


def unary_plus(value: Number) -> Number:
    return _require_number(value, "+")


def concat(left: str, right: str) -> str:
    """String ``+``: both operands must already be strings."""

    if not isinstance(left, str) or not isinstance(right, str):
        raise ContractViolationError(
            f"Cannot concatenate {type(left).__name__} and {type(right).__name__}.",
            hint="Convert values to strings explicitly before joining them.",
        )
    return left + right


def _check_arity(left: Sequence[Any], right: Sequence[Any]) -> None:
    if len(left) != len(right):
        raise ContractViolationError(
            f"Cannot compare tuples of {len(left)} and {len(right)} elements.",
        )
    if len(left) > MAX_TUPLE_ARITY:
        raise ContractViolationError(
            f"Tuple comparison supports at most {MAX_TUPLE_ARITY} elements, got {len(left)}.",
            hint="Implement the comparison for larger tuples yourself.",
        )


def _orderable(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if isinstance(left, numbers.Real) and isinstance(right, numbers.Real):
        return True
    if isinstance(left, str) and isinstance(right, str):
        return True
    if isinstance(left, tuple) and isinstance(right, tuple):
        return len(left) == len(right) and all(_orderable(x, y) for x, y in zip(left, right))
    if not (isinstance(left, type(right)) or isinstance(right, type(left))):
        return False
    return type(left).__lt__ is not object.__lt__


def compare_tuples(left: Sequence[Any], right: Sequence[Any]) -> int:
    """Lexicographic three-way comparison: -1, 0 or 1.

    Every element pair must support ordering, even pairs after the one
    that decides the result.  ``bool`` elements never do.
    """

    _check_arity(left, right)
    for index, (lhs, rhs) in enumerate(zip(left, right)):
        if not _orderable(lhs, rhs):
            raise ContractViolationError(
                f"Element {index} ({type(lhs).__name__}, {type(rhs).__name__}) does not support '<'.",
                hint="Bool values can be compared for equality but not ordered.",
            )
    for lhs, rhs in zip(left, right):
        if lhs == rhs:
            continue
        return -1 if lhs < rhs else 1
    return 0


def tuples_equal(left: Sequence[Any], right: Sequence[Any]) -> bool:
    _check_arity(left, right)
    return all(lhs == rhs for lhs, rhs in zip(left, right))


def tuple_lt(left: Sequence[Any], right: Sequence[Any]) -> bool:
    return compare_tuples(left, right) < 0


def tuple_le(left: Sequence[Any], right: Sequence[Any]) -> bool:
    return compare_tuples(left, right) <= 0


def tuple_gt(left: Sequence[Any], right: Sequence[Any]) -> bool:
    return compare_tuples(left, right) > 0


def tuple_ge(left: Sequence[Any], right: Sequence[Any]) -> bool:
    return compare_tuples(left, right) >= 0


def tuple_ne(left: Sequence[Any], right: Sequence[Any]) -> bool:
    return not tuples_equal(left, right)


__all__ = [
    "INT_MAX",
    "INT_MIN",
    "MAX_TUPLE_ARITY",
    "add",
    "compare_tuples",
    "concat",
    "divide",
    "multiply",
    "remainder",
    "subtract",
    "tuple_ge",
    "tuple_gt",
    "tuple_le",
    "tuple_lt",
    "tuple_ne",
    "tuples_equal",
    "unary_minus",
    "unary_plus",
    "wrapping_add",
    "wrapping_multiply",
    "wrapping_subtract",
]
