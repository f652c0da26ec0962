"""Guided walkthrough of the library, one section per topic.

Each section returns the lines it would print so that the CLI can write
them and tests can inspect them.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, TextIO

from .binding import bind, when
from .checks import assertion_failure, precondition, require_bool
from .config import get_config
from .conversion import parse_int
from .errors import ContractViolationError
from .observability.logging import get_logger
from .operators import concat, remainder, tuple_lt, tuples_equal, unary_minus, unary_plus
from .optional import ABSENT, ImplicitlyUnwrappedOptional, Optional as OptionalValue, Present, assign

logger = get_logger(__name__)


def optionals_section() -> List[str]:
    lines: List[str] = []
    possible_number = "123"
    converted_number = parse_int(possible_number)
    if converted_number != ABSENT:
        lines.append("convertedNumber contains some integer value.")

    survey_answer: OptionalValue[str] = ABSENT
    lines.append(f"surveyAnswer is {survey_answer!r}")

    actual = bind(parse_int(possible_number))
    if actual:
        (actual_number,) = actual
        lines.append(f'The string "{possible_number}" has an integer value of {actual_number}')
    else:
        lines.append(f'The string "{possible_number}" couldn\'t be converted to an integer')

    my_number = parse_int(possible_number)
    shadowed = bind(my_number)
    if shadowed:
        (my_number_value,) = shadowed
        lines.append(f"My number is {my_number_value}")

    numbers = bind(
        parse_int("4"),
        lambda: parse_int("42"),
        when(lambda first, second: first < second and second < 100),
    )
    if numbers:
        first, second = numbers
        lines.append(f"{first} < {second} < 100")

    name: OptionalValue[str] = ABSENT
    lines.append(concat(concat("Hello, ", name.coalesce_with(lambda: "friend")), "!"))

    possible_string: OptionalValue[str] = Present("An optional string.")
    lines.append(possible_string.force_unwrap())

    assumed_string = ImplicitlyUnwrappedOptional.some("An implicitly unwrapped optional string.")
    implicit_string = assign(assumed_string, str)
    lines.append(implicit_string)
    optional_string = assign(assumed_string)
    lines.append(f"optionalString is {optional_string!r}")
    if assumed_string != ABSENT:
        lines.append(assumed_string.force_unwrap())
    definite = bind(assumed_string)
    if definite:
        lines.append(definite[0])
    return lines


def operators_section() -> List[str]:
    lines = [
        f"9 % 4 = {remainder(9, 4)}",
        f"-9 % 4 = {remainder(-9, 4)}",
        f"9 % -4 = {remainder(9, -4)}",
        f"-(3) = {unary_minus(3)}, -(-3) = {unary_minus(-3)}, +(-6) = {unary_plus(-6)}",
        concat("hello, ", "world"),
        f'(1, "zebra") < (2, "apple") is {tuple_lt((1, "zebra"), (2, "apple"))}',
        f'(3, "apple") < (3, "bird") is {tuple_lt((3, "apple"), (3, "bird"))}',
        f'(4, "dog") == (4, "dog") is {tuples_equal((4, "dog"), (4, "dog"))}',
        f'("blue", -1) < ("purple", 1) is {tuple_lt(("blue", -1), ("purple", 1))}',
    ]
    try:
        tuple_lt(("blue", False), ("purple", True))
    except ContractViolationError as exc:
        lines.append(f'("blue", False) < ("purple", True) is rejected: {exc.message}')
    return lines


def booleans_section() -> List[str]:
    lines: List[str] = []
    turnips_are_delicious = False
    if require_bool(turnips_are_delicious):
        lines.append("Mmm, tasty turnips!")
    else:
        lines.append("Eww, turnips are horrible.")
    i = 1
    try:
        require_bool(i)
    except ContractViolationError as exc:
        lines.append(f"if i: rejected: {exc.message}")
    z = 1
    if require_bool(z == 1):
        lines.append("if z == 1: accepted")
    return lines


def checks_section(age: int = 3) -> List[str]:
    config = get_config()
    lines = [
        f"build mode: {config.build_mode}",
        f"assertions enabled: {config.assertions_enabled}",
        f"preconditions enabled: {config.preconditions_enabled}",
    ]
    precondition(lambda: age >= 0, "A person's age can't be less than zero.")
    if age > 10:
        lines.append("You can ride the roller-coaster or the ferris wheel.")
    elif age >= 0:
        lines.append("You can ride the ferris wheel.")
    else:
        assertion_failure("A person's age can't be less than zero.")
    return lines


SECTIONS: Dict[str, Callable[[], List[str]]] = {
    "optionals": optionals_section,
    "operators": operators_section,
    "booleans": booleans_section,
    "checks": checks_section,
}


def run_tour(sections: Optional[Iterable[str]] = None, out: Optional[TextIO] = None) -> List[str]:
    """Run ``sections`` (all by default), writing their lines to ``out``."""

    names = list(sections) if sections else list(SECTIONS)
    unknown = [name for name in names if name not in SECTIONS]
    if unknown:
        raise KeyError(f"Unknown tour section(s): {', '.join(unknown)}")
    produced: List[str] = []
    for name in names:
        logger.info("Running tour section '%s'", name)
        produced.append(f"== {name}")
        produced.extend(SECTIONS[name]())
    if out is not None:
        for line in produced:
            out.write(line + "\n")
    return produced


__all__ = [
    "SECTIONS",
    "booleans_section",
    "checks_section",
    "operators_section",
    "optionals_section",
    "run_tour",
]
