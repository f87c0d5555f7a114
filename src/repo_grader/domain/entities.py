"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(value: float) -> int:
    """Round *value* half-up and clamp it into ``[MIN_SCORE, MAX_SCORE]``."""
    return max(MIN_SCORE, min(MAX_SCORE, math.floor(value + 0.5)))


class Category(str, Enum):
    """Ordinal experience label derived from the overall score."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def from_score(cls, score: int) -> Category:
        if score >= 80:
            return cls.ADVANCED
        if score >= 60:
            return cls.INTERMEDIATE
        return cls.BEGINNER


class AnalysisSource(str, Enum):
    """Which path produced an :class:`AnalysisOutcome`."""

    AI = "ai"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class ContentItem:
    """A single entry from the top-level contents listing."""

    name: str
    type: str  # "file", "dir", "symlink" or "submodule"


@dataclass(frozen=True, slots=True)
class RepositorySignals:
    """Boolean / numeric facts derived from the GitHub API responses."""

    primary_language: str
    stars: int
    forks: int
    commit_count: int
    file_count: int
    has_readme: bool
    has_gitignore: bool
    has_license: bool
    has_tests: bool
    has_cicd: bool


@dataclass(frozen=True, slots=True)
class FetchedRepository:
    """Everything the fetcher learned about one repository."""

    owner: str
    repo: str
    description: str | None
    updated_at: str
    signals: RepositorySignals
    languages: dict[str, int] = field(default_factory=dict)
    commit_dates: list[datetime] = field(default_factory=list)
    contents: list[ContentItem] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class DimensionScores:
    """Per-dimension quality scores, each in ``[0, 100]``."""

    code_quality: int
    documentation: int
    structure: int
    git_practices: int
    test_coverage: int


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """Scores, summary and roadmap produced by the model or the fallback."""

    overall_score: int
    dimensions: DimensionScores
    summary: str
    roadmap: tuple[str, ...]
    source: AnalysisSource


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """Subset of repository signals kept alongside a stored analysis."""

    language: str
    stars: int
    forks: int
    last_updated: str
    total_commits: int
    file_count: int


@dataclass(frozen=True, slots=True)
class AnalysisRecord:
    """The stored result of one submission."""

    id: str
    repo_url: str
    owner: str
    repo: str
    score: int
    category: Category
    summary: str
    roadmap: tuple[str, ...]
    metrics: DimensionScores
    repo_data: RepositorySnapshot
    timestamp: str
    analysis_source: AnalysisSource
