"""Tests for the OpenAI adapter, with the SDK client replaced by a stub."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from repo_grader.domain.exceptions import LlmError
from repo_grader.infrastructure.openai_adapter import OpenAIAdapter


class _FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, object]] = []

    async def create(self, **kwargs: object) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _adapter(completions: _FakeCompletions, *, json_mode: bool = True) -> OpenAIAdapter:
    adapter = OpenAIAdapter(api_key="sk-test", model="gpt-4o", json_mode=json_mode)
    adapter._client = SimpleNamespace(  # type: ignore[assignment]
        chat=SimpleNamespace(completions=completions)
    )
    return adapter


def test_complete_sends_single_user_message() -> None:
    completions = _FakeCompletions(content='{"overallScore": 1}')

    text = asyncio.run(_adapter(completions).complete("rate this repo"))

    assert text == '{"overallScore": 1}'
    assert completions.calls == [
        {
            "model": "gpt-4o",
            "messages": [{"role": "user", "content": "rate this repo"}],
            "response_format": {"type": "json_object"},
        }
    ]


def test_json_mode_can_be_disabled() -> None:
    completions = _FakeCompletions(content="{}")

    asyncio.run(_adapter(completions, json_mode=False).complete("p"))

    assert "response_format" not in completions.calls[0]


def test_empty_reply_raises() -> None:
    with pytest.raises(LlmError, match="empty"):
        asyncio.run(_adapter(_FakeCompletions(content="")).complete("p"))


def test_sdk_errors_are_wrapped() -> None:
    completions = _FakeCompletions(error=ConnectionError("reset by peer"))

    with pytest.raises(LlmError, match="reset by peer"):
        asyncio.run(_adapter(completions).complete("p"))
