"""lambdakit.core -- synchronous, single-threaded primitives.

Architecture::

    errors.py      Structured error hierarchy (LambdakitError, CacheMissError, ...)
    result.py      Result[T] envelope (Ok / Err / try_result / from_optional)
    cache.py       MemoCache + memoize (compute-once lookup cache)
    functional.py  compose, flip, where, order_by, validator factories
    scope.py       scoped / using (acquire, use, always release)
    logging.py     structlog configuration
    settings.py    pydantic-settings defaults (LAMBDAKIT_ env prefix)
"""

from lambdakit.core.cache import CacheStats, MemoCache, memoize
from lambdakit.core.errors import (
    CacheError,
    CacheMissError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    LambdakitError,
    NoValueError,
    ValidationError,
)
from lambdakit.core.functional import all_of, compose, flip, identity, make_validator, order_by, where
from lambdakit.core.result import Err, Ok, Result, from_bool, from_optional, try_result
from lambdakit.core.scope import scoped, using

__all__ = [
    # cache
    "CacheStats",
    "MemoCache",
    "memoize",
    # errors
    "CacheError",
    "CacheMissError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "LambdakitError",
    "NoValueError",
    "ValidationError",
    # functional
    "all_of",
    "compose",
    "flip",
    "identity",
    "make_validator",
    "order_by",
    "where",
    # result
    "Err",
    "Ok",
    "Result",
    "from_bool",
    "from_optional",
    "try_result",
    # scope
    "scoped",
    "using",
]
