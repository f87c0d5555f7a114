"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

import httpx

from repo_grader.domain.entities import ContentItem, FetchedRepository
from repo_grader.domain.exceptions import NetworkError, RepositoryNotFoundError
from repo_grader.domain.value_objects import RepoRef
from repo_grader.services.signals import derive_signals

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_COMMITS_PER_PAGE = 100


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API."""

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-grader/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_repository(self, ref: RepoRef) -> FetchedRepository:
        """Fetch metadata, then languages, commits and contents concurrently."""
        metadata = await self.fetch_metadata(ref)
        languages_url = metadata.get("languages_url") or (
            f"{_GITHUB_API}/repos/{ref.owner}/{ref.repo}/languages"
        )
        tasks = [
            asyncio.ensure_future(self.fetch_languages(languages_url)),
            asyncio.ensure_future(self.fetch_commits(ref)),
            asyncio.ensure_future(self.fetch_contents(ref)),
        ]
        try:
            languages, (commit_count, commit_dates), contents = await asyncio.gather(*tasks)
        except BaseException:
            # Stop the requests still in flight.
            for task in tasks:
                task.cancel()
            raise
        logger.debug(
            "Fetched %s: %d commits, %d top-level items",
            ref.full_name,
            commit_count,
            len(contents),
        )
        return FetchedRepository(
            owner=ref.owner,
            repo=ref.repo,
            description=metadata.get("description"),
            updated_at=metadata.get("updated_at") or "",
            signals=derive_signals(metadata, contents, commit_count),
            languages=languages,
            commit_dates=commit_dates,
            contents=contents,
        )

    async def fetch_metadata(self, ref: RepoRef) -> dict[str, Any]:
        """GET /repos/{owner}/{repo} → raw metadata."""
        resp = await self._get(f"{_GITHUB_API}/repos/{ref.owner}/{ref.repo}")
        if resp.status_code in (403, 404):
            raise RepositoryNotFoundError("Repository not found or is private")
        data = self._json(self._ok(resp))
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected repository payload for {ref.full_name}")
        return data

    async def fetch_languages(self, languages_url: str) -> dict[str, int]:
        """GET {languages_url} → {lang: bytes}."""
        data = self._json(self._ok(await self._get(languages_url)))
        if not isinstance(data, dict):
            return {}
        return {str(lang): int(size) for lang, size in data.items()}

    async def fetch_commits(self, ref: RepoRef) -> tuple[int, list[datetime]]:
        """GET /repos/{owner}/{repo}/commits → (commit count, author dates).

        The count covers every returned commit; the dates skip commits whose
        author date is missing or unparsable.
        """
        resp = await self._get(
            f"{_GITHUB_API}/repos/{ref.owner}/{ref.repo}/commits",
            params={"per_page": str(_COMMITS_PER_PAGE)},
        )
        # 409 Conflict: "Git Repository is empty."
        if resp.status_code == 409:
            return 0, []
        data = self._json(self._ok(resp))
        if not isinstance(data, list):
            return 0, []

        commits = data[:_COMMITS_PER_PAGE]
        dates: list[datetime] = []
        for item in commits:
            raw = (((item or {}).get("commit") or {}).get("author") or {}).get("date")
            if not raw:
                continue
            try:
                dates.append(_parse_timestamp(raw))
            except ValueError:
                logger.debug("Skipping commit with unparsable date %r", raw)
        return len(commits), dates

    async def fetch_contents(self, ref: RepoRef) -> list[ContentItem]:
        """GET /repos/{owner}/{repo}/contents → top-level listing."""
        resp = await self._get(f"{_GITHUB_API}/repos/{ref.owner}/{ref.repo}/contents")
        # The repository itself exists at this point, so 404 means "empty".
        if resp.status_code == 404:
            return []
        data = self._json(self._ok(resp))
        if not isinstance(data, list):
            return []
        return [
            ContentItem(name=str(item.get("name", "")), type=str(item.get("type", "")))
            for item in data
        ]

    async def _get(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request, translating transport errors."""
        try:
            return await self._client.get(url, headers=self._api_headers, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Network error fetching {url}: {exc}") from exc

    @staticmethod
    def _ok(resp: httpx.Response) -> httpx.Response:
        if resp.status_code != 200:
            raise NetworkError(
                f"GitHub API returned HTTP {resp.status_code} for {resp.request.url}"
            )
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkError(
                f"GitHub API returned invalid JSON for {resp.request.url}"
            ) from exc


def _parse_timestamp(raw: str) -> datetime:
    """Parse GitHub's ISO-8601 timestamps (``2024-01-31T12:00:00Z``)."""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)
