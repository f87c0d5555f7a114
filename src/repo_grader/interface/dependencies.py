"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging
from functools import lru_cache

import httpx

from repo_grader.infrastructure.config import Settings, get_settings
from repo_grader.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_grader.infrastructure.memory_store import InMemoryAnalysisStore
from repo_grader.infrastructure.openai_adapter import OpenAIAdapter
from repo_grader.services.ai_analyzer import AiAnalyzer
from repo_grader.services.analyze_repo import AnalyzeRepoUseCase

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None
_store: InMemoryAnalysisStore | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter, _store  # noqa: PLW0603

    settings = get_settings()
    # Renamed or transferred repositories answer with a 301 to the new location.
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.github_timeout_seconds),
        follow_redirects=True,
    )
    if settings.openai_api_key:
        _openai_adapter = OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
            timeout=settings.openai_timeout_seconds,
            json_mode=settings.openai_json_mode,
        )
    else:
        logger.warning("OPENAI_API_KEY is not set — analyses will use heuristic scoring")
    # The store outlives restarts of the HTTP client, never the process.
    if _store is None:
        _store = InMemoryAnalysisStore(max_records=settings.max_stored_analyses)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> AnalyzeRepoUseCase:
    """Build the use case with injected adapters."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"
    assert _store is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(client=_http_client, token=token)

    return AnalyzeRepoUseCase(
        repo_fetcher=github_adapter,
        analyzer=AiAnalyzer(_openai_adapter),
        store=_store,
    )
