"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI

from repo_grader.interface.dependencies import get_use_case, shutdown, startup
from repo_grader.interface.error_handlers import register_error_handlers
from repo_grader.interface.routes import router
from repo_grader.services.analyze_repo import AnalyzeRepoUseCase


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared GitHub / OpenAI clients and the analysis store."""
    await startup()
    yield
    await shutdown()


def create_app(
    use_case_factory: Callable[[], AnalyzeRepoUseCase] | None = None,
) -> FastAPI:
    """Build and wire the grading API.

    ``use_case_factory`` replaces the default wiring from
    :mod:`repo_grader.interface.dependencies`; the lifespan then has no
    clients to manage.
    """
    app = FastAPI(
        title="GitHub Repo Grader",
        version="1.0.0",
        description=(
            "Takes a public GitHub repository and returns a quality score, "
            "per-dimension metrics, a short summary and an improvement roadmap."
        ),
        lifespan=None if use_case_factory else _lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)
    if use_case_factory is not None:
        app.dependency_overrides[get_use_case] = use_case_factory

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
