"""Optional values: a value of some type, or no value at all.

An :class:`Optional` is always exactly one of two states:

* :class:`Present` wraps an inner value. ``Present(None)`` is a present
  optional whose payload happens to be ``None``; it is never confused with
  absence.
* :data:`ABSENT` is the single absent value.

Access to the payload is always explicit.  :meth:`Optional.coalesce`
supplies a fallback, :meth:`Optional.conditional_bind` and
:func:`fundamentals.binding.bind` extract it only when present, and
:meth:`Optional.force_unwrap` extracts it or halts the process.  Forced
unwrap of an absent value is an invalid program state, so it goes through
:mod:`fundamentals.fatal` rather than raising.

:class:`ImplicitlyUnwrappedOptional` has the same representation.  Python
cannot insert an unwrap based on the static type of the destination, so
the boundary is marked by an explicit :meth:`~ImplicitlyUnwrappedOptional.as_plain`
call, or by :func:`assign` which makes the same decision from a target type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, NoReturn, Tuple, TypeVar, Union

from .checks import require_bool
from .errors import ContractViolationError
from .fatal import UNEXPECTED_ABSENT, caller_location, terminate

T = TypeVar("T")
U = TypeVar("U")


class Optional(Generic[T]):
    """Base of the two optional states; never instantiated directly."""

    __slots__ = ()

    @staticmethod
    def some(value: T) -> "Present[T]":
        return Present(value)

    @staticmethod
    def none() -> "AbsentType":
        return ABSENT

    @staticmethod
    def from_nullable(value: Any) -> "Optional[Any]":
        """Wrap ``value`` treating ``None`` as absence.

        This is the bridge for ordinary Python APIs that signal "no value"
        with ``None``.
        """

        return ABSENT if value is None else Present(value)

    def is_present(self) -> bool:
        raise NotImplementedError

    def conditional_bind(self) -> Tuple[Any, bool]:
        raise NotImplementedError

    def coalesce(self, fallback: T) -> T:
        raise NotImplementedError

    def coalesce_with(self, fallback: Callable[[], T]) -> T:
        raise NotImplementedError

    def force_unwrap(self) -> T:
        return self._unwrap_or_halt(UNEXPECTED_ABSENT, stacklevel=2)

    def expect(self, message: str) -> T:
        """Forced unwrap that halts with ``message`` when absent."""

        return self._unwrap_or_halt(message, stacklevel=2)

    def _unwrap_or_halt(self, message: str, stacklevel: int) -> T:
        raise NotImplementedError

    def map(self, transform: Callable[[T], U]) -> "Optional[U]":
        raise NotImplementedError

    def flat_map(self, transform: Callable[[T], "Optional[U]"]) -> "Optional[U]":
        raise NotImplementedError

    def filter(self, predicate: Callable[[T], bool]) -> "Optional[T]":
        raise NotImplementedError

    def to_nullable(self) -> Any:
        value, _ = self.conditional_bind()
        return value

    def __bool__(self) -> NoReturn:
        raise ContractViolationError(
            "An optional cannot be used as a Bool.",
            hint="Compare against ABSENT or call is_present() instead.",
        )


@dataclass(frozen=True, repr=False)
class Present(Optional[T]):
    """An optional holding ``value``."""

    value: T

    def is_present(self) -> bool:
        return True

    def conditional_bind(self) -> Tuple[T, bool]:
        return self.value, True

    def coalesce(self, fallback: T) -> T:
        return self.value

    def coalesce_with(self, fallback: Callable[[], T]) -> T:
        return self.value

    def _unwrap_or_halt(self, message: str, stacklevel: int) -> T:
        return self.value

    def map(self, transform: Callable[[T], U]) -> "Optional[U]":
        return Present(transform(self.value))

    def flat_map(self, transform: Callable[[T], "Optional[U]"]) -> "Optional[U]":
        result = transform(self.value)
        if not isinstance(result, Optional):
            raise ContractViolationError(
                f"flat_map transform must return an Optional, got {type(result).__name__}.",
                hint="Use map() for transforms that return plain values.",
            )
        return result

    def filter(self, predicate: Callable[[T], bool]) -> "Optional[T]":
        if require_bool(predicate(self.value), "filter predicate"):
            return self
        return ABSENT

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


class AbsentType(Optional[Any]):
    """The absent optional. Use the :data:`ABSENT` singleton."""

    __slots__ = ()
    _instance: "AbsentType | None" = None

    def __new__(cls) -> "AbsentType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_present(self) -> bool:
        return False

    def conditional_bind(self) -> Tuple[None, bool]:
        return None, False

    def coalesce(self, fallback: T) -> T:
        return fallback

    def coalesce_with(self, fallback: Callable[[], T]) -> T:
        return fallback()

    def _unwrap_or_halt(self, message: str, stacklevel: int) -> NoReturn:
        terminate(message, caller_location(stacklevel))

    def map(self, transform: Callable[[Any], U]) -> "Optional[U]":
        return self

    def flat_map(self, transform: Callable[[Any], "Optional[U]"]) -> "Optional[U]":
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> "Optional[Any]":
        return self

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AbsentType):
            return True
        if isinstance(other, Present):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(AbsentType)

    def __repr__(self) -> str:
        return "Absent"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = AbsentType()

OptionalLike = Union[Optional[T], "ImplicitlyUnwrappedOptional[T]"]


class ImplicitlyUnwrappedOptional(Generic[T]):
    """An optional that may be used wherever a plain value is expected.

    The wrapped state is an ordinary :class:`Optional`; nothing else is
    stored.  :meth:`as_plain` is the unwrap a compiler would insert at a
    plain-typed use site and halts exactly like :meth:`Optional.force_unwrap`.
    :meth:`as_optional` is used where an optional-typed destination keeps
    the state untouched.
    """

    __slots__ = ("_optional",)

    def __init__(self, optional: "OptionalLike[T]" = ABSENT) -> None:
        if isinstance(optional, ImplicitlyUnwrappedOptional):
            optional = optional.as_optional()
        if not isinstance(optional, Optional):
            raise ContractViolationError(
                f"Cannot build an implicitly unwrapped optional from {type(optional).__name__}.",
                hint="Wrap the value first, for example Present(value).",
            )
        object.__setattr__(self, "_optional", optional)

    @classmethod
    def some(cls, value: T) -> "ImplicitlyUnwrappedOptional[T]":
        return cls(Present(value))

    @classmethod
    def none(cls) -> "ImplicitlyUnwrappedOptional[Any]":
        return cls(ABSENT)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def as_plain(self) -> T:
        return self._optional._unwrap_or_halt(UNEXPECTED_ABSENT, stacklevel=2)

    def as_optional(self) -> Optional[T]:
        return self._optional

    def is_present(self) -> bool:
        return self._optional.is_present()

    def conditional_bind(self) -> Tuple[Any, bool]:
        return self._optional.conditional_bind()

    def coalesce(self, fallback: T) -> T:
        return self._optional.coalesce(fallback)

    def coalesce_with(self, fallback: Callable[[], T]) -> T:
        return self._optional.coalesce_with(fallback)

    def force_unwrap(self) -> T:
        return self._optional._unwrap_or_halt(UNEXPECTED_ABSENT, stacklevel=2)

    def __bool__(self) -> NoReturn:
        raise ContractViolationError(
            "An implicitly unwrapped optional cannot be used as a Bool.",
            hint="Compare against ABSENT or call is_present() instead.",
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ImplicitlyUnwrappedOptional):
            return self._optional == other._optional
        if isinstance(other, Optional):
            return self._optional == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._optional)

    def __repr__(self) -> str:
        return f"ImplicitlyUnwrappedOptional({self._optional!r})"


def _is_optional_target(target: Any) -> bool:
    return isinstance(target, type) and issubclass(target, Optional)


def assign(value: Any, target: Any = None) -> Any:
    """Convert ``value`` for a destination typed as ``target``.

    ``target=None`` stands for an inferred destination, which keeps an
    implicitly unwrapped optional as an ordinary optional.  An optional
    target (:class:`Optional` or :class:`ImplicitlyUnwrappedOptional`)
    preserves the present/absent state.  Any other target requires a plain
    value: implicitly unwrapped optionals are unwrapped (halting when
    absent) while ordinary optionals are rejected because they need an
    explicit unwrap.
    """

    if target is None:
        if isinstance(value, ImplicitlyUnwrappedOptional):
            return value.as_optional()
        return value

    if _is_optional_target(target) or target is ImplicitlyUnwrappedOptional:
        if isinstance(value, ImplicitlyUnwrappedOptional):
            optional = value.as_optional()
        elif isinstance(value, Optional):
            optional = value
        else:
            raise ContractViolationError(
                f"Cannot assign a plain {type(value).__name__} to an optional destination.",
                hint="Wrap the value explicitly with Present(value).",
            )
        if target is ImplicitlyUnwrappedOptional:
            return ImplicitlyUnwrappedOptional(optional)
        return optional

    if isinstance(value, ImplicitlyUnwrappedOptional):
        result = value.as_optional()._unwrap_or_halt(UNEXPECTED_ABSENT, stacklevel=2)
    elif isinstance(value, Optional):
        raise ContractViolationError(
            f"Value of optional type must be unwrapped to a value of type {getattr(target, '__name__', target)}.",
            hint="Use force_unwrap(), coalesce() or bind() to unwrap it.",
        )
    else:
        result = value

    if isinstance(target, type) and not isinstance(result, target):
        raise ContractViolationError(
            f"Cannot assign a value of type {type(result).__name__} to {target.__name__}."
        )
    return result


__all__ = [
    "ABSENT",
    "AbsentType",
    "ImplicitlyUnwrappedOptional",
    "Optional",
    "OptionalLike",
    "Present",
    "assign",
]
