"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from repo_grader.domain.entities import AnalysisRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /api/analyze``.

    Either ``owner`` + ``repo`` or a full repository ``url`` may be given.
    """

    owner: str | None = None
    repo: str | None = None
    url: str | None = None


class AnalyzeResponse(BaseModel):
    """Successful response from ``POST /api/analyze``."""

    id: str


class MetricsOut(_CamelModel):
    code_quality: int
    documentation: int
    structure: int
    git_practices: int
    test_coverage: int


class RepoDataOut(_CamelModel):
    language: str
    stars: int
    forks: int
    last_updated: str
    total_commits: int
    file_count: int


class AnalysisRecordOut(_CamelModel):
    """A stored analysis as returned by ``GET /api/analyze``."""

    id: str
    repo_url: str
    owner: str
    repo: str
    score: int
    category: str
    summary: str
    roadmap: list[str]
    metrics: MetricsOut
    repo_data: RepoDataOut
    timestamp: str
    analysis_source: str

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> AnalysisRecordOut:
        m = record.metrics
        d = record.repo_data
        return cls(
            id=record.id,
            repo_url=record.repo_url,
            owner=record.owner,
            repo=record.repo,
            score=record.score,
            category=record.category.value,
            summary=record.summary,
            roadmap=list(record.roadmap),
            metrics=MetricsOut(
                code_quality=m.code_quality,
                documentation=m.documentation,
                structure=m.structure,
                git_practices=m.git_practices,
                test_coverage=m.test_coverage,
            ),
            repo_data=RepoDataOut(
                language=d.language,
                stars=d.stars,
                forks=d.forks,
                last_updated=d.last_updated,
                total_commits=d.total_commits,
                file_count=d.file_count,
            ),
            timestamp=record.timestamp,
            analysis_source=record.analysis_source.value,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    error: str
