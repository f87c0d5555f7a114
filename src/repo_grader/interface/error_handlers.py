"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"error": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_grader.domain.exceptions import (
    NetworkError,
    NotFoundError,
    RepoGraderError,
    RepositoryNotFoundError,
    ValidationError,
)
from repo_grader.domain.value_objects import MISSING_OWNER_OR_REPO

logger = logging.getLogger(__name__)

_GENERIC_FAILURE = "Failed to analyze repository"

# Subclasses (e.g. InvalidGitHubUrlError) are covered by their base entry.
_EXCEPTION_STATUS: list[tuple[type[RepoGraderError], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (RepositoryNotFoundError, 500),
    (NetworkError, 500),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc) or _GENERIC_FAILURE)

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Rejected malformed request body: %s", exc.errors())
        return _error_json(400, MISSING_OWNER_OR_REPO)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, str(exc) or _GENERIC_FAILURE)
