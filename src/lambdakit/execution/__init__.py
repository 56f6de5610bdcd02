"""lambdakit.execution -- running caller-supplied operations.

Resilience
  retry.py  ─ bounded retry with a fixed, blocking delay
              (RetryExecutor, retry, with_retry, RetryState)
"""

from lambdakit.execution.retry import (
    DEFAULT_RETRY_DELAY,
    RetryExecutor,
    RetryState,
    retry,
    with_retry,
)

__all__ = [
    "DEFAULT_RETRY_DELAY",
    "RetryExecutor",
    "RetryState",
    "retry",
    "with_retry",
]
