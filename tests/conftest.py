"""
Shared pytest fixtures and configuration for lambdakit tests.

This module provides:
- Settings/log-context cleanup for test isolation
- A recording sleep so retry tests never block
- Call-counting supplier and flaky-operation factories
"""

import time
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

from lambdakit.core.logging import clear_context
from lambdakit.core.settings import get_settings


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_and_context() -> Generator[None, None, None]:
    """Drop cached settings, log configuration and bound context around each test."""
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Helpers
# =============================================================================


class RecordingSleep:
    """Stand-in for ``time.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class CountingSupplier:
    """Zero-argument supplier returning a fixed value and counting calls."""

    def __init__(self, value: Any) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> Any:
        self.calls += 1
        return self.value


class FlakyOperation:
    """Raises ``error_type`` on the first ``failures`` calls, then returns ``value``."""

    def __init__(
        self,
        failures: int,
        value: Any = "success",
        error_type: type[Exception] = ConnectionError,
    ) -> None:
        self.failures = failures
        self.value = value
        self.error_type = error_type
        self.calls = 0
        self.raised: list[Exception] = []

    def __call__(self) -> Any:
        self.calls += 1
        if self.calls <= self.failures:
            error = self.error_type(f"failure {self.calls}")
            self.raised.append(error)
            raise error
        return self.value


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def counting_supplier() -> Callable[[Any], CountingSupplier]:
    return CountingSupplier


@pytest.fixture
def flaky() -> Callable[..., FlakyOperation]:
    return FlakyOperation


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> RecordingSleep:
    """Patch ``time.sleep``, which the retry executor resolves at run time."""
    sleeper = RecordingSleep()
    monkeypatch.setattr(time, "sleep", sleeper)
    return sleeper


@pytest.fixture
def temp_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so a stray .env is never read."""
    monkeypatch.chdir(tmp_path)
    return tmp_path / ".env"
