"""
Resource scope: acquire, use, always release.

``scoped`` wraps any acquire/release pair (open/close, connect/disconnect,
lock/unlock) in a context manager so that release runs on every exit path.
``using`` is the same thing as a plain higher-order function, for code that
prefers passing the body as a callable.

Architecture:
    ::

        scoped(acquire, release)
            resource = acquire()          ── raises → propagates, release NOT called
            try:
                yield resource            ── body raises → propagates unchanged
            finally:
                release(resource)         ── always

        using(acquire, release, body) == with scoped(...) as r: return body(r)

Examples:
    >>> events = []
    >>> with scoped(lambda: events.append("open") or "conn",
    ...             lambda conn: events.append(f"close {conn}")) as conn:
    ...     events.append(f"use {conn}")
    >>> events
    ['open', 'use conn', 'close conn']

Guardrails:
    ❌ DON'T: Release inside the body as well (double release)
    ✅ DO: Let the scope own the release

Tags:
    resource-management, context-manager, try-finally, lambdakit
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from lambdakit.core.logging import get_logger

R = TypeVar("R")
T = TypeVar("T")

logger = get_logger(__name__)


@contextmanager
def scoped(acquire: Callable[[], R], release: Callable[[R], object]) -> Iterator[R]:
    """Acquire a resource for the duration of a ``with`` block.

    Args:
        acquire: Zero-argument factory returning the resource.
        release: Called with the resource when the block exits, however it exits.
    """
    resource = acquire()
    logger.debug("resource_acquired", resource=type(resource).__name__)
    try:
        yield resource
    finally:
        release(resource)
        logger.debug("resource_released", resource=type(resource).__name__)


def using(
    acquire: Callable[[], R],
    release: Callable[[R], object],
    body: Callable[[R], T],
) -> T:
    """Run ``body(resource)`` inside :func:`scoped` and return its result."""
    with scoped(acquire, release) as resource:
        return body(resource)


__all__ = ["scoped", "using"]
