"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_grader.domain.entities import FetchedRepository
from repo_grader.domain.value_objects import RepoRef


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data."""

    async def fetch_repository(self, ref: RepoRef) -> FetchedRepository:
        """Return metadata, languages, recent commits and derived signals."""
        ...
