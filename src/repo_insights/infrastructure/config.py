"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# GitHub returns at most 100 items per page on list endpoints.
DEFAULT_COMMITS_PAGE_SIZE = 100
# Stats jobs usually finish within a minute; 15 x 5s covers that window.
DEFAULT_STATS_MAX_ATTEMPTS = 15
DEFAULT_STATS_RETRY_DELAY_SECONDS = 5.0


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr
    github_api_base: str = "https://api.github.com"
    admin_secret: SecretStr
    database_path: str = "data/projects.db"
    commits_page_size: int = DEFAULT_COMMITS_PAGE_SIZE
    stats_max_attempts: int = DEFAULT_STATS_MAX_ATTEMPTS
    stats_retry_delay_seconds: float = DEFAULT_STATS_RETRY_DELAY_SECONDS
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    @field_validator("github_token", "admin_secret")
    @classmethod
    def _must_not_be_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("commits_page_size", "stats_max_attempts")
    @classmethod
    def _must_be_positive(cls, v: int) -> int:
        if v < 1:
            msg = "must be at least 1"
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
