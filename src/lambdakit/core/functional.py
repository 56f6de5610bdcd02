"""Function adapters: composition, argument swapping, filtering, sorting, validators.

Small first-class-function helpers. Everything here is stateless and returns
new functions or immutable tuples; no input is mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Callable, TypeVar

from lambdakit.core.errors import ValidationError
from lambdakit.core.result import Err, Ok, Result, from_bool

T = TypeVar("T")
R = TypeVar("R")

Validator = Callable[[T], Result[T]]


def identity(x: T) -> T:
    return x


def compose(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """Chain callables left to right: ``compose(f, g, h)(x) == h(g(f(x)))``.

    The first callable receives the original arguments; with no callables the
    result is :func:`identity`.
    """
    if not funcs:
        return identity

    first, *rest = funcs

    def composed(*args: Any, **kwargs: Any) -> Any:
        result = first(*args, **kwargs)
        for f in rest:
            result = f(result)
        return result

    return composed


def flip(func: Callable[..., R]) -> Callable[..., R]:
    """Swap the first two positional arguments of ``func``.

    >>> flip(lambda a, b: a - b)(1, 10)
    9
    """

    def flipped(a: Any, b: Any, *args: Any, **kwargs: Any) -> R:
        return func(b, a, *args, **kwargs)

    flipped.__name__ = f"flipped_{getattr(func, '__name__', 'func')}"
    return flipped


def where(predicate: Callable[[T], bool]) -> Callable[[Iterable[T]], tuple[T, ...]]:
    """Filtering adapter: ``where(is_even)([1, 2, 3, 4]) == (2, 4)``."""

    def apply(items: Iterable[T]) -> tuple[T, ...]:
        return tuple(item for item in items if predicate(item))

    return apply


def order_by(
    key: Callable[[T], Any], *, descending: bool = False
) -> Callable[[Iterable[T]], tuple[T, ...]]:
    """Sorting adapter returning a new tuple (stable sort)."""

    def apply(items: Iterable[T]) -> tuple[T, ...]:
        return tuple(sorted(items, key=key, reverse=descending))

    return apply


# =============================================================================
# VALIDATOR FACTORIES
# =============================================================================


def make_validator(
    predicate: Callable[[T], bool],
    message: str,
    *,
    field: str | None = None,
    constraint: str | None = None,
) -> Validator[T]:
    """Build a validator from a predicate.

    The returned function maps a value to ``Ok(value)`` when the predicate
    holds and to ``Err(ValidationError)`` otherwise. A predicate that raises
    propagates its exception.

    Example:
        >>> is_adult = make_validator(lambda age: age >= 18, "must be 18 or older", field="age")
        >>> is_adult(21)
        Ok(21)
        >>> is_adult(15).is_err()
        True
    """

    def validate(value: T) -> Result[T]:
        return from_bool(
            predicate(value),
            value,
            ValidationError(message, field=field, value=value, constraint=constraint),
        )

    return validate


def all_of(*validators: Validator[T]) -> Validator[T]:
    """Combine validators; the first ``Err`` wins and later ones are skipped."""

    def validate(value: T) -> Result[T]:
        result: Result[T] = Ok(value)
        for validator in validators:
            result = result.flat_map(validator)
            if isinstance(result, Err):
                break
        return result

    return validate


__all__ = [
    "Validator",
    "identity",
    "compose",
    "flip",
    "where",
    "order_by",
    "make_validator",
    "all_of",
]
