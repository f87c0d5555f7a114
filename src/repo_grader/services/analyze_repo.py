"""Analyze-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the ports (:class:`RepoFetcher`, :class:`AnalysisStore`) and the AI
analyzer.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Callable

from repo_grader.domain.entities import (
    AnalysisOutcome,
    AnalysisRecord,
    Category,
    FetchedRepository,
    RepositorySnapshot,
)
from repo_grader.domain.exceptions import NotFoundError, ValidationError
from repo_grader.domain.ports.analysis_store import AnalysisStore
from repo_grader.domain.ports.repo_fetcher import RepoFetcher
from repo_grader.domain.value_objects import RepoRef
from repo_grader.services.ai_analyzer import AiAnalyzer

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_analysis_id(ref: RepoRef, created_at: datetime) -> str:
    """``{owner}-{repo}-{epoch ms}-{nonce}``; the nonce keeps same-ms ids apart."""
    millis = int(created_at.timestamp() * 1000)
    return f"{ref.owner}-{ref.repo}-{millis}-{secrets.token_hex(4)}"


def assemble_record(
    ref: RepoRef,
    repository: FetchedRepository,
    outcome: AnalysisOutcome,
    created_at: datetime,
) -> AnalysisRecord:
    """Merge an analysis outcome with the repository snapshot."""
    signals = repository.signals
    return AnalysisRecord(
        id=make_analysis_id(ref, created_at),
        repo_url=ref.html_url,
        owner=ref.owner,
        repo=ref.repo,
        score=outcome.overall_score,
        category=Category.from_score(outcome.overall_score),
        summary=outcome.summary,
        roadmap=outcome.roadmap,
        metrics=outcome.dimensions,
        repo_data=RepositorySnapshot(
            language=signals.primary_language,
            stars=signals.stars,
            forks=signals.forks,
            last_updated=repository.updated_at,
            total_commits=signals.commit_count,
            file_count=signals.file_count,
        ),
        timestamp=created_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        analysis_source=outcome.source,
    )


class AnalyzeRepoUseCase:
    """Orchestrates fetch → analyze → assemble → store, and lookups.

    Parameters
    ----------
    repo_fetcher:
        Adapter that reads repository data from GitHub.
    analyzer:
        AI analyzer (falls back to heuristics internally).
    store:
        Where finished records are kept.
    clock:
        Source of the creation timestamp.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        analyzer: AiAnalyzer,
        store: AnalysisStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._fetcher = repo_fetcher
        self._analyzer = analyzer
        self._store = store
        self._clock = clock

    # ── Public entry points ─────────────────────────────────────────────

    async def execute(self, owner: str | None, repo: str | None) -> AnalysisRecord:
        """Analyze ``owner/repo`` and store the resulting record."""
        ref = RepoRef.of(owner, repo)
        logger.info("Analyzing %s", ref.full_name)

        repository = await self._fetcher.fetch_repository(ref)
        outcome = await self._analyzer.analyze(repository)

        record = assemble_record(ref, repository, outcome, self._clock())
        self._store.put(record)
        logger.info(
            "Stored analysis %s (score=%d, category=%s, source=%s)",
            record.id,
            record.score,
            record.category.value,
            record.analysis_source.value,
        )
        return record

    def get_analysis(self, analysis_id: str | None) -> AnalysisRecord:
        """Return a stored record by id."""
        analysis_id = (analysis_id or "").strip()
        if not analysis_id:
            raise ValidationError("ID is required")
        record = self._store.get(analysis_id)
        if record is None:
            raise NotFoundError("Analysis not found")
        return record
