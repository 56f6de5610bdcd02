"""lambdakit -- functional-programming building blocks.

A memoizing lookup cache, a bounded retry executor, and the small adapters
(composition, validators, resource scopes) they are usually combined with.

Quick start::

    from lambdakit import MemoCache, retry

    users = MemoCache[str, str]()
    users.get_or_compute("user-42", lambda: fetch_user("user-42"))

    report = retry(fetch_report, max_attempts=3, delay=0.5)
"""

from lambdakit.core.cache import MemoCache, memoize
from lambdakit.core.result import Err, Ok, Result
from lambdakit.execution.retry import RetryExecutor, retry, with_retry

__version__ = "0.1.0"

__all__ = [
    "MemoCache",
    "memoize",
    "Ok",
    "Err",
    "Result",
    "RetryExecutor",
    "retry",
    "with_retry",
    "__version__",
]
