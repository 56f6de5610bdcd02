#!/usr/bin/env python3
"""Bounded Retry — Re-run a failing operation up to a fixed ceiling.

WHY BOUNDED RETRY
─────────────────
Transient failures (a dropped connection, a busy service) usually go away
if you simply try again.  Retrying forever hides real outages, so every
retry here has a hard attempt ceiling and a fixed delay between attempts.

ATTEMPT TIMELINE (max_attempts=3, delay=d)
──────────────────────────────────────────
    call 1 ── fail ── wait d ── call 2 ── fail ── wait d ── call 3
                                                             │
                                          success ◀──────────┤
                                          re-raise last error ◀┘

    The operation is called at most max_attempts times and the delay is
    applied between attempts only, never after the final one.

STATES
──────
    ATTEMPTING → WAITING → ATTEMPTING → … → SUCCEEDED | EXHAUSTED

Run: python examples/02_bounded_retry.py

See Also:
    01_memo_cache — cache the value once the retry succeeds
"""
from lambdakit import RetryExecutor, retry, with_retry
from lambdakit.core import InvalidConfigError


class Flaky:
    """Fails ``failures`` times with ConnectionError, then succeeds."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            print(f"    Call {self.calls}: failing...")
            raise ConnectionError(f"connection reset (call {self.calls})")
        print(f"    Call {self.calls}: success!")
        return "success"


def main():
    print("=" * 60)
    print("Bounded Retry Examples")
    print("=" * 60)

    # === 1. Succeeds within the ceiling ===
    print("\n[1] Fails Twice, Succeeds on Third Call")

    op = Flaky(failures=2)
    print(f"  Result: {retry(op, max_attempts=3, delay=0.05)}")
    print(f"  Calls made: {op.calls}")

    # === 2. Exhausted ===
    print("\n[2] Ceiling Reached")

    op = Flaky(failures=5)
    try:
        retry(op, max_attempts=3, delay=0.05)
    except ConnectionError as e:
        print(f"  Last error re-raised: {e!r}")
    print(f"  Calls made: {op.calls}")

    # === 3. RetryExecutor for inspection ===
    print("\n[3] RetryExecutor State")

    delays = []
    executor = RetryExecutor(
        max_attempts=4,
        delay=0.5,
        sleep=delays.append,
        on_retry=lambda attempt, error, delay: print(
            f"    on_retry: attempt={attempt} error={error} next wait={delay}s"
        ),
    )
    executor.run(Flaky(failures=2))
    print(f"  State: {executor.state.value}")
    print(f"  Failed attempts: {executor.attempts}")
    print(f"  Recorded waits: {delays}")

    # === 4. with_retry decorator ===
    print("\n[4] with_retry Decorator")

    fetches = 0

    @with_retry(max_attempts=3, delay=0.05)
    def fetch_price(symbol):
        nonlocal fetches
        fetches += 1
        if fetches < 2:
            raise TimeoutError("quote service timed out")
        return {"symbol": symbol, "price": 150.0}

    print(f"  Result: {fetch_price('AAPL')}")
    print(f"  Fetches made: {fetches}")

    # === 5. Invalid configuration ===
    print("\n[5] Invalid Configuration")

    for kwargs in ({"max_attempts": 0}, {"max_attempts": 3, "delay": -1}):
        try:
            retry(lambda: None, **kwargs)
        except InvalidConfigError as e:
            print(f"  {kwargs} → {e}")

    print("\n" + "=" * 60)
    print("[OK] Bounded Retry Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
