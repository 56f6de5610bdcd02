"""Tests for core.settings module.

Covers:
- LambdakitSettings defaults
- LAMBDAKIT_ environment variable override
- Field validation
- get_settings caching
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from lambdakit.core.settings import LambdakitSettings, get_settings


class TestDefaults:
    def test_defaults(self, temp_env_file):
        s = LambdakitSettings()
        assert s.log_level == "INFO"
        assert s.json_logs is None
        assert s.retry_max_attempts == 3
        assert s.retry_delay_seconds == 1.0


class TestEnvOverride:
    def test_retry_from_env(self, temp_env_file, monkeypatch):
        monkeypatch.setenv("LAMBDAKIT_RETRY_MAX_ATTEMPTS", "7")
        monkeypatch.setenv("LAMBDAKIT_RETRY_DELAY_SECONDS", "0.25")
        s = LambdakitSettings()
        assert s.retry_max_attempts == 7
        assert s.retry_delay_seconds == 0.25

    def test_json_logs_from_env(self, temp_env_file, monkeypatch):
        monkeypatch.setenv("LAMBDAKIT_JSON_LOGS", "true")
        assert LambdakitSettings().json_logs is True

    def test_unprefixed_ignored(self, temp_env_file, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "9")
        assert LambdakitSettings().retry_max_attempts == 3

    def test_dotenv_file(self, temp_env_file):
        temp_env_file.write_text("LAMBDAKIT_LOG_LEVEL=DEBUG\nUNRELATED=1\n")
        assert LambdakitSettings().log_level == "DEBUG"


class TestValidation:
    def test_zero_attempts_rejected(self, temp_env_file, monkeypatch):
        monkeypatch.setenv("LAMBDAKIT_RETRY_MAX_ATTEMPTS", "0")
        with pytest.raises(PydanticValidationError):
            LambdakitSettings()

    def test_negative_delay_rejected(self):
        with pytest.raises(PydanticValidationError):
            LambdakitSettings(retry_delay_seconds=-1)


class TestGetSettings:
    def test_cached(self, temp_env_file):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, temp_env_file, monkeypatch):
        get_settings()
        monkeypatch.setenv("LAMBDAKIT_LOG_LEVEL", "WARNING")
        get_settings.cache_clear()
        assert get_settings().log_level == "WARNING"
