"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoGraderError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class ValidationError(RepoGraderError):
    """A required request field is missing or blank."""


class InvalidGitHubUrlError(ValidationError):
    """The supplied URL does not point to a valid GitHub repository."""


class NotFoundError(RepoGraderError):
    """No stored analysis exists for the requested id."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoGraderError):
    """The repository does not exist or is not accessible (404 / 403)."""


class NetworkError(RepoGraderError):
    """Any other failure talking to the GitHub API."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoGraderError):
    """Any error originating from the LLM provider."""


class UnparsableResponseError(RepoGraderError):
    """The LLM output does not contain an analysis in the expected shape."""
