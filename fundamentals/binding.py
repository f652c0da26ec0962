"""Conditional binding chains.

``bind`` evaluates optional clauses and Boolean conditions from left to
right, the way a multi-clause ``if let`` does::

    result = bind(
        parse_int("4"),
        lambda: parse_int("42"),
        when(lambda first, second: first < second and second < 100),
    )
    if result:
        first, second = result

The chain stops at the first absent optional or false condition, and
clauses after it are never evaluated.  Bound values are fresh Python
references: rebinding them never touches the optional they came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from .checks import require_bool
from .errors import ContractViolationError
from .observability.logging import get_logger
from .optional import ImplicitlyUnwrappedOptional
from .optional import Optional as OptionalValue

logger = get_logger(__name__)


@dataclass(frozen=True)
class Condition:
    """A Boolean clause; ``predicate`` receives every value bound before it."""

    predicate: Callable[..., bool]
    description: Optional[str] = None


def when(predicate: Callable[..., bool], description: Optional[str] = None) -> Condition:
    return Condition(predicate=predicate, description=description)


Clause = Union[
    OptionalValue[Any],
    ImplicitlyUnwrappedOptional[Any],
    Callable[[], Any],
    Condition,
    bool,
]


@dataclass(frozen=True)
class BindResult:
    """Outcome of a binding chain.

    Truth-testing a result answers whether the whole chain succeeded, so it
    can drive an ``if`` directly.  Iterating yields the bound values.
    """

    succeeded: bool
    values: Tuple[Any, ...] = ()
    failed_at: Optional[int] = None

    def __bool__(self) -> bool:
        return self.succeeded

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]


def _resolve_optional(clause: Any, index: int) -> Union[OptionalValue[Any], ImplicitlyUnwrappedOptional[Any]]:
    if isinstance(clause, (OptionalValue, ImplicitlyUnwrappedOptional)):
        return clause
    if callable(clause):
        produced = clause()
        if isinstance(produced, (OptionalValue, ImplicitlyUnwrappedOptional)):
            return produced
        raise ContractViolationError(
            f"Binding clause {index} produced {type(produced).__name__}, not an optional.",
            hint="Only optional values can be conditionally bound.",
        )
    raise ContractViolationError(
        f"Binding clause {index} is a {type(clause).__name__}, not an optional.",
        hint="Only optional values can be conditionally bound.",
    )


def bind(*clauses: Clause) -> BindResult:
    """Evaluate ``clauses`` left to right, short-circuiting on failure."""

    values = []
    for index, clause in enumerate(clauses):
        if isinstance(clause, Condition):
            what = clause.description or f"binding condition {index}"
            if not require_bool(clause.predicate(*values), what):
                logger.debug("Binding chain stopped at condition %d", index)
                return BindResult(succeeded=False, failed_at=index)
            continue
        if isinstance(clause, bool):
            if not clause:
                logger.debug("Binding chain stopped at condition %d", index)
                return BindResult(succeeded=False, failed_at=index)
            continue
        value, present = _resolve_optional(clause, index).conditional_bind()
        if not present:
            logger.debug("Binding chain stopped at absent clause %d", index)
            return BindResult(succeeded=False, failed_at=index)
        values.append(value)
    return BindResult(succeeded=True, values=tuple(values))


def if_let(
    optional: Union[OptionalValue[Any], ImplicitlyUnwrappedOptional[Any]],
    then: Callable[[Any], Any],
    otherwise: Optional[Callable[[], Any]] = None,
) -> Any:
    """Run ``then`` with the payload when present, else ``otherwise``."""

    value, present = optional.conditional_bind()
    if present:
        return then(value)
    if otherwise is not None:
        return otherwise()
    return None


__all__ = [
    "BindResult",
    "Clause",
    "Condition",
    "bind",
    "if_let",
    "when",
]
