"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Without a key every analysis goes through the heuristic fallback.
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o"
    openai_timeout_seconds: float = 60.0
    openai_json_mode: bool = True
    github_token: SecretStr | None = None
    github_timeout_seconds: float = 30.0
    max_stored_analyses: int = 1_000
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
