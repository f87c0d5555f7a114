"""Heuristic fallback scorer — deterministic scoring from repository signals.

Used whenever the model call fails or its output cannot be parsed.  Pure
function of :class:`RepositorySignals`, no I/O.
"""

from __future__ import annotations

from repo_grader.domain.entities import (
    MAX_SCORE,
    AnalysisOutcome,
    AnalysisSource,
    Category,
    DimensionScores,
    RepositorySignals,
)

BASE_SCORE = 50
MAX_ROADMAP_ITEMS = 6

README_ACTION = "Add comprehensive README.md with setup instructions"
TESTS_ACTION = "Implement unit and integration tests"
CICD_ACTION = "Set up CI/CD pipeline with GitHub Actions"
LICENSE_ACTION = "Add an appropriate open-source license"
GENERIC_ACTIONS: tuple[str, ...] = (
    "Improve code documentation and comments",
    "Follow consistent Git commit message conventions",
)


def overall_score(signals: RepositorySignals) -> int:
    """Base score plus fixed bonuses, capped at ``MAX_SCORE``."""
    score = BASE_SCORE
    if signals.has_readme:
        score += 10
    if signals.has_gitignore:
        score += 5
    if signals.has_license:
        score += 5
    if signals.has_tests:
        score += 15
    if signals.has_cicd:
        score += 10
    if signals.commit_count > 50:
        score += 5
    return min(score, MAX_SCORE)


def dimension_scores(signals: RepositorySignals) -> DimensionScores:
    return DimensionScores(
        code_quality=70 if signals.has_tests else 50,
        documentation=80 if signals.has_readme else 30,
        structure=70 if signals.file_count > 5 else 50,
        git_practices=75 if signals.commit_count > 20 else 55,
        test_coverage=70 if signals.has_tests else 20,
    )


def roadmap(signals: RepositorySignals) -> tuple[str, ...]:
    """Suggestions for the gaps present, followed by the generic ones."""
    gaps = [
        (not signals.has_readme, README_ACTION),
        (not signals.has_tests, TESTS_ACTION),
        (not signals.has_cicd, CICD_ACTION),
        (not signals.has_license, LICENSE_ACTION),
    ]
    items = [action for missing, action in gaps if missing]
    items.extend(GENERIC_ACTIONS)
    return tuple(items[:MAX_ROADMAP_ITEMS])


def score_fallback(signals: RepositorySignals) -> AnalysisOutcome:
    """Produce a complete :class:`AnalysisOutcome` without calling a model."""
    score = overall_score(signals)
    category = Category.from_score(score)
    docs = (
        "Good documentation present."
        if signals.has_readme
        else "Documentation needs improvement."
    )
    tests = "Has test coverage." if signals.has_tests else "Missing test coverage."
    summary = (
        f"Repository shows {category.value.lower()} level development practices. "
        f"{docs} {tests}"
    )
    return AnalysisOutcome(
        overall_score=score,
        dimensions=dimension_scores(signals),
        summary=summary,
        roadmap=roadmap(signals),
        source=AnalysisSource.FALLBACK,
    )
