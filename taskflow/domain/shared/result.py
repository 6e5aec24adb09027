"""Result type for operations that fail in expected ways.

Services return ``Ok(value)`` or ``Err(error)`` instead of raising, so
callers (HTTP handlers, CLI commands) decide how each failure is shown.

Example usage:
    >>> def parse_hours(raw: str) -> Result[float, str]:
    ...     try:
    ...         return Ok(float(raw))
    ...     except ValueError:
    ...         return Err(f"Not a number: {raw}")
    ...
    >>> unwrap_or(parse_hours("2.5"), 0.0)
    2.5
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E


Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True for an ``Ok``."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True for an ``Err``."""
    return isinstance(result, Err)


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Transform the value of an ``Ok``; pass an ``Err`` through untouched."""
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a second fallible step after a successful first one."""
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the ``Ok`` value, or ``default`` for an ``Err``."""
    if isinstance(result, Ok):
        return result.value
    return default
