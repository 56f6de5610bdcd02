"""Bounded retry with a fixed delay.

Invokes a zero-argument operation until it succeeds or ``max_attempts``
failures have been seen, blocking the calling thread for a fixed ``delay``
between attempts. Every ``Exception`` is treated the same way; the last one
is re-raised unchanged when attempts run out.

STATE MACHINE
─────────────
::

    ATTEMPTING ──success──────────────────────────▶ SUCCEEDED
        │
        ├──failure, attempts < max_attempts──▶ WAITING ──sleep(delay)──▶ ATTEMPTING
        │
        └──failure, attempts == max_attempts──▶ EXHAUSTED (re-raise)

Example:
    >>> from lambdakit.execution.retry import retry
    >>> retry(lambda: "ok", max_attempts=3, delay=0)
    'ok'

Usage:
    @with_retry(max_attempts=5, delay=0.5)
    def fetch_report():
        return call_api()
"""

from __future__ import annotations

import functools
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, TypeVar

from lambdakit.core.errors import InvalidConfigError
from lambdakit.core.logging import get_logger

T = TypeVar("T")

DEFAULT_RETRY_DELAY = 1.0

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class RetryState(str, Enum):
    """Lifecycle of one retry invocation."""

    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (RetryState.SUCCEEDED, RetryState.EXHAUSTED)


def _validate(max_attempts: Any, delay: Any) -> None:
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise InvalidConfigError(
            "max_attempts", max_attempts, "max_attempts must be a positive integer"
        )
    if (
        isinstance(delay, bool)
        or not isinstance(delay, (int, float))
        or not math.isfinite(delay)
        or delay < 0
    ):
        raise InvalidConfigError(
            "delay", delay, "delay must be a finite, non-negative number of seconds"
        )


@dataclass
class RetryExecutor:
    """Runs an operation under a fixed attempt ceiling and delay.

    State is per ``run()`` call: ``attempts``, ``last_error``, ``errors`` and
    ``state`` are reset at the start of each run and remain inspectable after
    it returns or raises.

    Attributes:
        max_attempts: Attempt ceiling (positive int)
        delay: Seconds to block between attempts
        on_retry: Called as ``on_retry(attempt, error, delay)`` before each wait
            (if it raises, the run stops and the operation's error is re-raised
            with the callback's exception as ``__cause__``)
        sleep: Blocking sleep function; ``None`` means ``time.sleep``

    Example:
        >>> executor = RetryExecutor(max_attempts=3, delay=0)
        >>> executor.run(lambda: 42)
        42
        >>> executor.attempts, executor.calls, executor.state.value
        (0, 1, 'succeeded')
    """

    max_attempts: int = 3
    delay: float = DEFAULT_RETRY_DELAY
    on_retry: Callable[[int, Exception, float], None] | None = None
    sleep: Callable[[float], None] | None = None
    attempts: int = field(default=0, init=False)
    state: RetryState = field(default=RetryState.ATTEMPTING, init=False)
    last_error: Exception | None = field(default=None, init=False)
    errors: list[tuple[int, Exception, datetime]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        _validate(self.max_attempts, self.delay)

    def _reset(self) -> None:
        self.attempts = 0
        self.state = RetryState.ATTEMPTING
        self.last_error = None
        self.errors = []

    def run(self, operation: Callable[[], T], *, name: str | None = None) -> T:
        """Execute ``operation`` with retry logic.

        Args:
            operation: Zero-argument callable.
            name: Label used in log events (defaults to the callable's qualname).

        Returns:
            The first successful result of ``operation()``.

        Raises:
            The last exception raised by ``operation`` once ``max_attempts``
            failures have occurred.
        """
        self._reset()
        sleep = self.sleep or time.sleep
        name = name or getattr(operation, "__qualname__", repr(operation))

        while True:
            self.state = RetryState.ATTEMPTING
            try:
                result = operation()
            except Exception as e:
                self.attempts += 1
                self.last_error = e
                self.errors.append((self.attempts, e, utcnow()))

                if self.attempts >= self.max_attempts:
                    self.state = RetryState.EXHAUSTED
                    logger.error(
                        "retry_exhausted",
                        operation=name,
                        attempts=self.attempts,
                        error=repr(e),
                    )
                    raise

                self.state = RetryState.WAITING
                logger.warning(
                    "retry_attempt_failed",
                    operation=name,
                    attempt=self.attempts,
                    max_attempts=self.max_attempts,
                    delay=self.delay,
                    error=repr(e),
                )
                if self.on_retry:
                    try:
                        self.on_retry(self.attempts, e, self.delay)
                    except Exception as callback_error:
                        self.state = RetryState.EXHAUSTED
                        logger.error(
                            "retry_callback_failed",
                            operation=name,
                            attempt=self.attempts,
                            error=repr(callback_error),
                        )
                        raise e from callback_error
                sleep(self.delay)
            else:
                self.state = RetryState.SUCCEEDED
                if self.attempts:
                    logger.info(
                        "retry_succeeded",
                        operation=name,
                        failed_attempts=self.attempts,
                    )
                return result

    @property
    def calls(self) -> int:
        """Number of times the operation was invoked in the last run."""
        return self.attempts + (1 if self.state is RetryState.SUCCEEDED else 0)


def retry(
    operation: Callable[[], T],
    max_attempts: int,
    delay: float = DEFAULT_RETRY_DELAY,
) -> T:
    """Invoke ``operation`` until it succeeds or ``max_attempts`` failures occur.

    Args:
        operation: Zero-argument callable.
        max_attempts: Positive attempt ceiling.
        delay: Seconds to block between attempts (default ``DEFAULT_RETRY_DELAY``).

    Raises:
        InvalidConfigError: ``max_attempts`` or ``delay`` is invalid; the
            operation is not invoked.
        Exception: The last failure of ``operation``, unchanged.
    """
    return RetryExecutor(max_attempts=max_attempts, delay=delay).run(operation)


def with_retry(
    max_attempts: int = 3,
    delay: float = DEFAULT_RETRY_DELAY,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator factory adding bounded retry to a function.

    Arguments are validated when the decorator is created.

    Example:
        >>> @with_retry(max_attempts=3, delay=0)
        ... def flaky_operation():
        ...     return "done"
        >>> flaky_operation()
        'done'
    """
    _validate(max_attempts, delay)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            executor = RetryExecutor(max_attempts=max_attempts, delay=delay, on_retry=on_retry)
            return executor.run(lambda: func(*args, **kwargs), name=func.__qualname__)

        return wrapper

    return decorator


__all__ = [
    "DEFAULT_RETRY_DELAY",
    "RetryState",
    "RetryExecutor",
    "retry",
    "with_retry",
]
