"""
Ok / Err: the value lambdakit hands back when something might be missing.

A ``MemoCache`` lookup can miss, a supplier can come back empty, a validator
can reject its input. Each of those returns ``Err`` carrying an exception that
names the reason; a present value comes back as ``Ok``. Nothing in lambdakit
returns a bare ``None`` to mean "absent", so a stored ``None``-like value and
an empty slot are never mixed up.

Manifesto:
    - **Absence has a reason:** ``Err.error`` says which key missed and where
    - **Chain, don't nest:** ``map`` / ``flat_map`` skip over an ``Err``
    - **Raise on demand:** ``unwrap()`` on an ``Err`` raises its own exception

Architecture:
    ::

        Result[T] = Ok[T] | Err[T]

        cache.get(key)                ──▶ Ok(value) | Err(CacheMissError)
        cache.get_or_compute(key, s)  ──▶ Ok(value) | Err(NoValueError | supplier's Err)
        validator(value)              ──▶ Ok(value) | Err(ValidationError)

        try_result(f)        captures f()'s outcome
        from_optional(v, e)  None → Err(e)
        from_bool(c, v, e)   falsy c → Err(e)

Examples:
    >>> from lambdakit.core.cache import MemoCache
    >>> from lambdakit.core.result import Ok, Err
    >>> users = MemoCache(name="users")
    >>> users.get_or_compute("user-42", lambda: "User-42").map(str.lower)
    Ok('user-42')
    >>> users.get("user-7").unwrap_or("guest")
    'guest'
    >>> match users.get("user-42"):
    ...     case Ok(name):
    ...         print(f"hello {name}")
    ...     case Err(error):
    ...         print(f"no user: {error}")
    hello User-42

Guardrails:
    ❌ DON'T: ``unwrap()`` a lookup that may miss
    ✅ DO: ``unwrap_or`` a default, or ``match`` on Ok / Err

Tags:
    result, absence, cache-lookup, validation, lambdakit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, overload


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Wraps a value that is there: a cache hit, a computed entry, a value that
    passed validation.

    Examples:
        >>> Ok("User-42").map(len)
        Ok(7)
        >>> Ok(21).flat_map(lambda age: Ok(age) if age >= 18 else Err(ValueError(age)))
        Ok(21)
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """``Ok(f(value))``."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Hand the value to the next Result-returning step (validators chain this way)."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        return self

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        return self

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """Peek at the value (logging, counters) and pass ``self`` through."""
        f(self.value)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    No value, plus the exception naming why.

    ``map``/``flat_map``/``inspect`` pass the same ``Err`` through untouched;
    ``or_else`` and ``unwrap_or_else`` are the places to recover.

    Examples:
        >>> miss = Err(KeyError("user-7"))
        >>> miss.map(str.upper) is miss
        True
        >>> miss.or_else(lambda e: Ok("guest"))
        Ok('guest')
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise ``self.error`` as-is."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return self  # type: ignore[return-value]

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Swap the reason, e.g. wrap a low-level error in a lambdakit one."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        return f(self.error)

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for CLI / JSON output; lambdakit errors use their own ``to_dict``."""
        error = self.error
        if hasattr(error, "to_dict"):
            return {"ok": False, "error": error.to_dict()}
        return {
            "ok": False,
            "error": {"error_type": type(error).__name__, "message": str(error)},
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Run ``f`` once; its return value becomes ``Ok``, an ``Exception`` it
    raises becomes ``Err``. ``BaseException`` (Ctrl-C, exit) is not caught.

    Examples:
        >>> try_result(lambda: int("42"))
        Ok(42)
        >>> try_result(lambda: int("forty-two")).is_err()
        True
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


@overload
def from_optional(value: None, error: Exception) -> Err[Any]: ...


@overload
def from_optional(value: T, error: Exception) -> Ok[T]: ...


def from_optional(value: T | None, error: Exception) -> Result[T]:
    """
    Adapt a ``None``-for-missing API (``dict.get``, ``re.match``) to a Result.

    Examples:
        >>> names = {"user-42": "Ada"}
        >>> from_optional(names.get("user-42"), KeyError("user-42"))
        Ok('Ada')
        >>> from_optional(names.get("user-7"), KeyError("user-7")).is_err()
        True
    """
    if value is None:
        return Err(error)
    return Ok(value)


def from_bool(condition: bool, ok_value: T, error: Exception) -> Result[T]:
    """``Ok(ok_value)`` if ``condition`` holds, else ``Err(error)``; backs ``make_validator``."""
    if condition:
        return Ok(ok_value)
    return Err(error)


__all__ = [
    "Result",
    "Ok",
    "Err",
    "try_result",
    "from_optional",
    "from_bool",
]
