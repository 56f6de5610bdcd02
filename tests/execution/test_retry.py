"""Tests for the bounded retry executor."""

import math
import time

import pytest

from lambdakit.core.errors import InvalidConfigError
from lambdakit.execution.retry import (
    DEFAULT_RETRY_DELAY,
    RetryExecutor,
    RetryState,
    retry,
    with_retry,
)


class TestRetryFunction:
    """Tests for retry()."""

    def test_success_first_try(self, no_sleep):
        """Successful operation is invoked once with no waiting."""
        calls = []

        def op():
            calls.append(1)
            return "ok"

        assert retry(op, max_attempts=3) == "ok"
        assert len(calls) == 1
        assert no_sleep.delays == []

    def test_single_attempt_always_failing(self, flaky, no_sleep):
        """max_attempts=1: one call, failure propagates, no sleep."""
        op = flaky(failures=10)
        with pytest.raises(ConnectionError):
            retry(op, max_attempts=1)
        assert op.calls == 1
        assert no_sleep.delays == []

    def test_succeeds_on_third_of_five(self, flaky, no_sleep):
        """Fails twice, succeeds on the 3rd call."""
        op = flaky(failures=2, value="third time lucky")
        assert retry(op, max_attempts=5, delay=0.25) == "third time lucky"
        assert op.calls == 3
        assert no_sleep.delays == [0.25, 0.25]

    def test_always_failing_three_attempts(self, flaky, no_sleep):
        """Exactly three calls, then the last failure propagates."""
        op = flaky(failures=100)
        with pytest.raises(ConnectionError) as exc_info:
            retry(op, max_attempts=3, delay=0.1)
        assert op.calls == 3
        assert exc_info.value is op.raised[-1]
        assert no_sleep.delays == [0.1, 0.1]

    def test_failure_not_wrapped(self, no_sleep):
        """The original exception type and instance surface unchanged."""

        class QuotaError(Exception):
            pass

        error = QuotaError("quota")

        def op():
            raise error

        with pytest.raises(QuotaError) as exc_info:
            retry(op, max_attempts=2)
        assert exc_info.value is error

    def test_default_delay(self, flaky, no_sleep):
        op = flaky(failures=1)
        retry(op, max_attempts=2)
        assert no_sleep.delays == [DEFAULT_RETRY_DELAY]

    def test_base_exceptions_not_retried(self, no_sleep):
        """KeyboardInterrupt is not an Exception and is never retried."""
        calls = []

        def op():
            calls.append(1)
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            retry(op, max_attempts=5)
        assert len(calls) == 1

    @pytest.mark.parametrize("max_attempts", [0, -1, 1.5, "3", True, None])
    def test_invalid_max_attempts(self, max_attempts):
        """Invalid ceilings are rejected before the operation runs."""
        calls = []
        with pytest.raises(InvalidConfigError) as exc_info:
            retry(lambda: calls.append(1), max_attempts=max_attempts)
        assert exc_info.value.key == "max_attempts"
        assert calls == []

    @pytest.mark.parametrize("delay", [-0.1, "1", None, math.nan, math.inf, -math.inf])
    def test_invalid_delay(self, delay):
        """Negative, non-numeric and non-finite delays are rejected up front."""
        calls = []
        with pytest.raises(InvalidConfigError) as exc_info:
            retry(lambda: calls.append(1), max_attempts=2, delay=delay)
        assert exc_info.value.key == "delay"
        assert calls == []

    def test_integer_delay_accepted(self, flaky, no_sleep):
        op = flaky(failures=1)
        retry(op, max_attempts=2, delay=2)
        assert no_sleep.delays == [2]


class TestRetryExecutor:
    """Tests for RetryExecutor state tracking."""

    def test_default_configuration(self):
        executor = RetryExecutor()
        assert executor.max_attempts == 3
        assert executor.delay == DEFAULT_RETRY_DELAY
        assert executor.state is RetryState.ATTEMPTING

    def test_state_succeeded(self, flaky, recording_sleep):
        executor = RetryExecutor(max_attempts=5, delay=0.5, sleep=recording_sleep)
        assert executor.run(flaky(failures=2)) == "success"
        assert executor.state is RetryState.SUCCEEDED
        assert executor.attempts == 2
        assert executor.calls == 3
        assert isinstance(executor.last_error, ConnectionError)
        assert [attempt for attempt, _, _ in executor.errors] == [1, 2]
        assert recording_sleep.delays == [0.5, 0.5]

    def test_state_exhausted(self, flaky, recording_sleep):
        executor = RetryExecutor(max_attempts=3, delay=0, sleep=recording_sleep)
        op = flaky(failures=5)
        with pytest.raises(ConnectionError):
            executor.run(op)
        assert executor.state is RetryState.EXHAUSTED
        assert executor.attempts == 3
        assert executor.calls == 3
        assert executor.last_error is op.raised[-1]

    def test_state_waiting_during_sleep(self, flaky):
        """The executor is WAITING while the delay elapses."""
        seen = []
        executor = RetryExecutor(max_attempts=3, delay=0)
        executor.sleep = lambda _: seen.append(executor.state)
        executor.run(flaky(failures=2))
        assert seen == [RetryState.WAITING, RetryState.WAITING]

    def test_state_reset_between_runs(self, flaky, recording_sleep):
        executor = RetryExecutor(max_attempts=3, delay=0, sleep=recording_sleep)
        executor.run(flaky(failures=2))
        executor.run(lambda: "again")
        assert executor.attempts == 0
        assert executor.errors == []
        assert executor.last_error is None

    def test_on_retry_callback(self, flaky, recording_sleep):
        """on_retry is called before each wait with (attempt, error, delay)."""
        retry_calls = []
        executor = RetryExecutor(
            max_attempts=4,
            delay=0.2,
            sleep=recording_sleep,
            on_retry=lambda attempt, error, delay: retry_calls.append((attempt, str(error), delay)),
        )
        executor.run(flaky(failures=2))
        assert retry_calls == [(1, "failure 1", 0.2), (2, "failure 2", 0.2)]

    def test_on_retry_not_called_on_exhaustion(self, flaky, recording_sleep):
        retry_calls = []
        executor = RetryExecutor(
            max_attempts=1,
            sleep=recording_sleep,
            on_retry=lambda *args: retry_calls.append(args),
        )
        with pytest.raises(ConnectionError):
            executor.run(flaky(failures=1))
        assert retry_calls == []

    def test_on_retry_failure_stops_run(self, flaky, recording_sleep):
        """A raising callback ends the run; the operation's error surfaces."""

        def broken_callback(attempt, error, delay):
            raise RuntimeError("metrics sink down")

        op = flaky(failures=3)
        executor = RetryExecutor(max_attempts=5, sleep=recording_sleep, on_retry=broken_callback)
        with pytest.raises(ConnectionError) as exc_info:
            executor.run(op)
        assert exc_info.value is op.raised[0]
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert op.calls == 1
        assert executor.state is RetryState.EXHAUSTED
        assert recording_sleep.delays == []

    def test_default_sleep_resolved_at_run_time(self, flaky, monkeypatch):
        """With no injected sleep, time.sleep is looked up when run() starts."""
        executor = RetryExecutor(max_attempts=2, delay=0.3)
        delays = []
        monkeypatch.setattr(time, "sleep", delays.append)
        executor.run(flaky(failures=1))
        assert delays == [0.3]

    def test_invalid_config_at_construction(self):
        with pytest.raises(InvalidConfigError):
            RetryExecutor(max_attempts=0)

    def test_terminal_states(self):
        assert RetryState.SUCCEEDED.is_terminal
        assert RetryState.EXHAUSTED.is_terminal
        assert not RetryState.ATTEMPTING.is_terminal
        assert not RetryState.WAITING.is_terminal


class TestWithRetryDecorator:
    """Tests for @with_retry decorator."""

    def test_decorator_retries(self, no_sleep):
        call_count = 0

        @with_retry(max_attempts=5, delay=0.01)
        def flaky_op(x, y=1):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ValueError("temp")
            return x + y

        assert flaky_op(1, y=2) == 3
        assert call_count == 3
        assert no_sleep.delays == [0.01, 0.01]

    def test_decorator_exhausts(self, no_sleep):
        @with_retry(max_attempts=2, delay=0)
        def always_fails():
            raise ValueError("permanent error")

        with pytest.raises(ValueError, match="permanent error"):
            always_fails()

    def test_decorator_validates_eagerly(self):
        with pytest.raises(InvalidConfigError):
            with_retry(max_attempts=0)
        with pytest.raises(InvalidConfigError):
            with_retry(delay=math.nan)

    def test_decorator_preserves_function_metadata(self):
        @with_retry()
        def documented_function():
            """This is a docstring."""
            return "result"

        assert documented_function.__name__ == "documented_function"
        assert "docstring" in documented_function.__doc__


@pytest.mark.slow
def test_real_sleep_blocks():
    """Without an injected sleep the executor really blocks."""
    calls = []

    def op():
        calls.append(time.monotonic())
        if len(calls) < 2:
            raise ConnectionError("once")
        return "done"

    assert retry(op, max_attempts=2, delay=0.05) == "done"
    assert calls[1] - calls[0] >= 0.04
