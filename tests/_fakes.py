"""Shared builders and stub adapters for the test-suite."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from repo_grader.domain.entities import (
    ContentItem,
    FetchedRepository,
    RepositorySignals,
)
from repo_grader.domain.value_objects import RepoRef


def make_signals(**overrides: Any) -> RepositorySignals:
    base = RepositorySignals(
        primary_language="Python",
        stars=12,
        forks=3,
        commit_count=10,
        file_count=4,
        has_readme=False,
        has_gitignore=False,
        has_license=False,
        has_tests=False,
        has_cicd=False,
    )
    return replace(base, **overrides)


def make_repository(**overrides: Any) -> FetchedRepository:
    newest = datetime(2024, 3, 11, tzinfo=timezone.utc)
    fields: dict[str, Any] = {
        "owner": "octocat",
        "repo": "hello-world",
        "description": "A friendly demo project",
        "updated_at": "2024-03-11T09:00:00Z",
        "signals": make_signals(),
        "languages": {"Python": 9000, "Shell": 120},
        "commit_dates": [newest - timedelta(days=i) for i in range(10)],
        "contents": [ContentItem("main.py", "file")],
    }
    fields.update(overrides)
    return FetchedRepository(**fields)


class StubFetcher:
    """RepoFetcher returning a canned repository (or raising)."""

    def __init__(
        self,
        repository: FetchedRepository | None = None,
        error: Exception | None = None,
    ) -> None:
        self.repository = repository or make_repository()
        self.error = error
        self.calls: list[RepoRef] = []

    async def fetch_repository(self, ref: RepoRef) -> FetchedRepository:
        self.calls.append(ref)
        if self.error is not None:
            raise self.error
        return replace(self.repository, owner=ref.owner, repo=ref.repo)


class StubLlm:
    """LlmGateway replying with fixed text (or raising)."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


AI_REPLY = """Here is my evaluation:
```json
{
  "overallScore": 92,
  "dimensions": {
    "codeQuality": 90,
    "documentation": 88,
    "structure": 95,
    "gitPractices": 85,
    "testCoverage": 91
  },
  "summary": "A well-maintained project with strong tests.",
  "roadmap": [
    "Add architecture docs",
    "Publish coverage reports",
    "Tag releases",
    "Add a CONTRIBUTING guide"
  ]
}
```
Let me know if you need more detail."""
