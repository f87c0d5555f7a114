"""Tests for environment-driven settings."""

from __future__ import annotations

from repo_grader.infrastructure.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("OPENAI_API_KEY", "GITHUB_TOKEN", "OPENAI_MODEL", "MAX_STORED_ANALYSES"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.openai_api_key is None
    assert settings.github_token is None
    assert settings.openai_model == "gpt-4o"
    assert settings.max_stored_analyses == 1000


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    monkeypatch.setenv("MAX_STORED_ANALYSES", "5")
    monkeypatch.setenv("OPENAI_JSON_MODE", "false")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key is not None
    assert settings.openai_api_key.get_secret_value() == "sk-live"
    assert settings.max_stored_analyses == 5
    assert settings.openai_json_mode is False
