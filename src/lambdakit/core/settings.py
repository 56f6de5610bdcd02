"""Process-wide settings for lambdakit.

Settings are read from ``LAMBDAKIT_``-prefixed environment variables and an
optional ``.env`` file. They supply the *defaults* used by the CLI and the
examples; library calls such as ``retry(op, max_attempts=5)`` always take
explicit arguments and never consult settings behind the caller's back.

Examples:
    >>> from lambdakit.core.settings import LambdakitSettings
    >>> LambdakitSettings().retry_max_attempts
    3

Tags:
    settings, configuration, pydantic, environment, lambdakit
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LambdakitSettings(BaseSettings):
    """Settings shared by the CLI and examples.

    Fields
    ──────
    log_level            : structlog log level
    json_logs            : Force JSON (True) or console (False) rendering; auto if unset
    retry_max_attempts   : Default attempt ceiling for the retry executor
    retry_delay_seconds  : Default fixed pause between attempts
    """

    model_config = SettingsConfigDict(
        env_prefix="LAMBDAKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    # ── Retry defaults ───────────────────────────────────────────
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_delay_seconds: float = Field(default=1.0, ge=0.0)


@lru_cache(maxsize=1)
def get_settings() -> LambdakitSettings:
    """Return the process-wide settings instance."""
    return LambdakitSettings()


__all__ = ["LambdakitSettings", "get_settings"]
