"""
Memoizing lookup cache.

Maps a key to a lazily-computed value. The value is computed by a
caller-supplied *supplier* (miss-handler) on the first miss and stored; every
later lookup for that key is served from memory without calling a supplier.

Manifesto:
    Expensive lookups (a database fetch, a remote call) are often repeated
    with the same identifier. Memoizing them is the simplest possible cache:

    - **Compute once:** A populated key is never recomputed or overwritten
    - **Explicit absence:** Lookups return ``Result``, never a bare ``None``
    - **Failures are not cached:** An absent or raising supplier stores nothing
    - **No policy:** No eviction, no TTL, no size bound, no invalidation

Architecture:
    ::

        MemoCache[K, V]
        ├── get(key)                    → Ok(value) | Err(CacheMissError)
        ├── get_or_compute(key, supplier)
        │     hit  → Ok(value)                       (supplier not called)
        │     miss → supplier()
        │            ├── Ok(v) | v      → store, Ok(v)
        │            ├── Err(e)         → Err(e)     (nothing stored)
        │            ├── None           → Err(NoValueError)
        │            └── raises         → propagates (nothing stored)
        ├── contains(key) / len() / keys()
        └── stats  (hits, misses, computations)

        memoize(func) → wrapper(key) == cache.get_or_compute(key, lambda: func(key))

Examples:
    >>> from lambdakit.core.cache import MemoCache
    >>> cache: MemoCache[str, str] = MemoCache()
    >>> cache.get("user-42").is_err()
    True
    >>> cache.get_or_compute("user-42", lambda: "User-42")
    Ok('User-42')
    >>> cache.get_or_compute("user-42", lambda: "never called")
    Ok('User-42')
    >>> cache.stats.computations
    1

Guardrails:
    ❌ DON'T: Share one cache between threads (no locking)
    ✅ DO: Keep one cache per thread or guard it externally

    ❌ DON'T: Use for data that must be refreshed (entries never expire)
    ✅ DO: Create a new cache when a fresh view is needed

Tags:
    cache, memoization, lazy-evaluation, supplier, lambdakit
"""

from __future__ import annotations

import functools
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar

from lambdakit.core.errors import CacheMissError, NoValueError
from lambdakit.core.logging import get_logger
from lambdakit.core.result import Err, Ok, Result

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

logger = get_logger(__name__)


@dataclass
class CacheStats:
    """Counters for cache observability.

    Attributes:
        hits: Lookups answered from the store
        misses: Lookups that found no entry
        computations: Supplier invocations
    """

    hits: int = 0
    misses: int = 0
    computations: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"hits": self.hits, "misses": self.misses, "computations": self.computations}


def _as_result(key: Hashable, produced: Any) -> Result[Any]:
    """Normalize a supplier's return value to a Result."""
    if isinstance(produced, (Ok, Err)):
        return produced
    if produced is None:
        return Err(NoValueError(key))
    return Ok(produced)


class MemoCache(Generic[K, V]):
    """
    Unbounded memoizing cache keyed by identifier.

    Single-threaded: under sequential access the supplier runs at most once
    per key that was successfully populated.

    Example:
        users = MemoCache[int, User]()
        user = users.get_or_compute(42, lambda: fetch_user(42)).unwrap()
    """

    def __init__(self, name: str = "memo") -> None:
        self.name = name
        self._store: dict[K, V] = {}
        self.stats = CacheStats()

    def get(self, key: K) -> Result[V]:
        """Return ``Ok(value)`` if cached, else ``Err(CacheMissError)``."""
        if key in self._store:
            self.stats.hits += 1
            return Ok(self._store[key])
        self.stats.misses += 1
        return Err(CacheMissError(key))

    def get_or_compute(self, key: K, supplier: Callable[[], Result[V] | V | None]) -> Result[V]:
        """Return the cached value, computing and storing it on first miss.

        Args:
            key: Lookup key (hashable).
            supplier: Zero-argument miss-handler. May return ``Ok``/``Err``,
                a plain value, or ``None`` for "no value".

        Returns:
            ``Ok(value)`` when cached or computed, otherwise the supplier's
            ``Err`` (``Err(NoValueError)`` for a ``None`` return).

        Raises:
            Whatever ``supplier`` raises, unchanged. Nothing is stored.
        """
        if key in self._store:
            self.stats.hits += 1
            return Ok(self._store[key])

        self.stats.misses += 1
        self.stats.computations += 1
        logger.debug("cache_miss", cache=self.name, key=str(key))

        result = _as_result(key, supplier())

        match result:
            case Ok(value):
                self._store[key] = value
                logger.debug("cache_populated", cache=self.name, key=str(key))
            case Err(error):
                logger.debug(
                    "cache_supplier_no_value",
                    cache=self.name,
                    key=str(key),
                    error=str(error),
                )
        return result

    def contains(self, key: K) -> bool:
        """Check whether ``key`` is populated (does not touch stats)."""
        return key in self._store

    def keys(self) -> list[K]:
        """Populated keys in insertion order."""
        return list(self._store)

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._store))

    def __repr__(self) -> str:
        return f"MemoCache(name={self.name!r}, size={len(self._store)})"


def memoize(
    func: Callable[[K], Result[V] | V | None],
    cache: MemoCache[K, V] | None = None,
) -> Callable[[K], Result[V]]:
    """
    Function factory: wrap a single-argument lookup in a memoizing cache.

    The wrapper returns ``Result[V]`` exactly like
    :meth:`MemoCache.get_or_compute` and exposes its cache as ``.cache``.

    Example:
        >>> calls = []
        >>> def fetch(user_id):
        ...     calls.append(user_id)
        ...     return f"User-{user_id}"
        >>> get_user = memoize(fetch)
        >>> get_user(42).unwrap(), get_user(42).unwrap(), len(calls)
        ('User-42', 'User-42', 1)
    """
    store: MemoCache[K, V] = cache if cache is not None else MemoCache(
        name=getattr(func, "__qualname__", "memo")
    )

    @functools.wraps(func)
    def wrapper(key: K) -> Result[V]:
        return store.get_or_compute(key, lambda: func(key))

    wrapper.cache = store  # type: ignore[attr-defined]
    return wrapper


__all__ = [
    "CacheStats",
    "MemoCache",
    "memoize",
]
