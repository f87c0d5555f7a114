"""Port: analysis store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_grader.domain.entities import AnalysisRecord


class AnalysisStore(Protocol):
    """Key-value storage of analysis records, keyed by record id."""

    def get(self, analysis_id: str) -> AnalysisRecord | None:
        """Return the stored record, or ``None`` when the id is unknown."""
        ...

    def put(self, record: AnalysisRecord) -> None:
        """Store *record* under ``record.id`` (last write wins)."""
        ...
