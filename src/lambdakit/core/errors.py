"""
Structured error types for lambdakit.

Every error raised by lambdakit itself extends ``LambdakitError`` and carries a
category, a structured context, and an optional chained cause. Errors raised
by *caller-supplied* functions (cache suppliers, retried operations, resource
bodies) are never wrapped: they reach the caller exactly as raised.

Manifesto:
    - **Typed hierarchy:** One subclass per failure domain (cache, config,
      validation) so callers can ``except`` precisely
    - **Rich context:** Errors carry the key, operation, or field involved
    - **Never swallow:** Original exceptions are preserved as ``cause``

Architecture:
    ::

        LambdakitError  (category, context, cause)
        ├── CacheError            (CACHE)
        │   ├── CacheMissError    key not present
        │   └── NoValueError      supplier produced no value
        ├── ValidationError       (VALIDATION)  field / value / constraint
        └── ConfigError           (CONFIG)
            └── InvalidConfigError  key / value

Examples:
    >>> error = CacheMissError("user-42")
    >>> error.key
    'user-42'
    >>> error.category.value
    'CACHE'
    >>> InvalidConfigError("max_attempts", 0).to_dict()["context"]
    {'key': 'max_attempts', 'value': '0'}

Tags:
    error-handling, exception-hierarchy, error-context, lambdakit
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and log routing.

    Attributes:
        CACHE: Lookup misses and suppliers that produced nothing
        VALIDATION: Values rejected by a validator
        CONFIG: Invalid settings or call parameters
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    CACHE = "CACHE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only non-None fields are emitted by ``to_dict()``; anything without a
    dedicated field goes into ``metadata``.

    Examples:
        >>> ErrorContext(operation="get_or_compute", key="user-42").to_dict()
        {'operation': 'get_or_compute', 'key': 'user-42'}
    """

    operation: str | None = None
    key: str | None = None
    attempt: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for name in ("operation", "key", "attempt"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class LambdakitError(Exception):
    """
    Base exception for all lambdakit errors.

    Subclasses set ``default_category`` so that callers rarely need to pass a
    category explicitly.

    Args:
        message: Human-readable description
        category: Overrides the subclass default category
        context: Structured metadata (see :class:`ErrorContext`)
        cause: Underlying exception, chained as ``__cause__``

    Examples:
        >>> err = LambdakitError("boom").with_context(operation="demo", user="alice")
        >>> err.to_dict()["context"]
        {'operation': 'demo', 'user': 'alice'}
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> LambdakitError:
        """Add context to this error (fluent API)."""
        for name, value in kwargs.items():
            if name != "metadata" and hasattr(self.context, name):
                setattr(self.context, name, value)
            else:
                self.context.metadata[name] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CACHE ERRORS
# =============================================================================


class CacheError(LambdakitError):
    """Base class for memoizing-cache errors."""

    default_category = ErrorCategory.CACHE


class CacheMissError(CacheError):
    """No entry is cached under ``key``."""

    def __init__(self, key: Hashable, message: str | None = None):
        self.key = key
        super().__init__(
            message or f"No cached value for key {key!r}",
            context=ErrorContext(operation="get", key=str(key)),
        )


class NoValueError(CacheError):
    """The supplier for ``key`` returned no value (``None``)."""

    def __init__(self, key: Hashable, message: str | None = None):
        self.key = key
        super().__init__(
            message or f"Supplier produced no value for key {key!r}",
            context=ErrorContext(operation="get_or_compute", key=str(key)),
        )


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(LambdakitError):
    """A value was rejected by a validator."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(LambdakitError):
    """Configuration or call-parameter error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context=ErrorContext(key=key, metadata={"value": repr(value)}),
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "LambdakitError",
    "CacheError",
    "CacheMissError",
    "NoValueError",
    "ValidationError",
    "ConfigError",
    "InvalidConfigError",
]
