"""Prompt construction for the repository review model call."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from repo_grader.domain.entities import FetchedRepository

_SECONDS_PER_DAY = 86_400

# ── Prompt template ─────────────────────────────────────────────────────────

REVIEW_PROMPT = """\
You are an expert code reviewer evaluating a GitHub repository. Analyze the \
following repository data and provide a comprehensive evaluation.

Repository: {full_name}
Description: {description}
Primary Language: {language}
Stars: {stars}
Forks: {forks}
Total Commits: {commits}

Repository Metrics:
- Has README: {has_readme}
- Has .gitignore: {has_gitignore}
- Has License: {has_license}
- Has Tests: {has_tests}
- Has CI/CD: {has_cicd}
- File Count: {file_count}
- Average Days Between Commits: {avg_days:.1f}

Languages Used: {languages}

Based on this data, provide:

1. A numerical score from 0-100 evaluating overall repository quality
2. Scores for these dimensions (0-100 each):
   - Code Quality & Readability
   - Documentation & Clarity
   - Project Structure & Organization
   - Git Practices & Consistency
   - Test Coverage & Maintainability

3. A 2-3 sentence summary of the repository's strengths and weaknesses
4. A list of 4-6 specific, actionable improvements the developer should make

Format your response as JSON:
{{
  "overallScore": <number>,
  "dimensions": {{
    "codeQuality": <number>,
    "documentation": <number>,
    "structure": <number>,
    "gitPractices": <number>,
    "testCoverage": <number>
  }},
  "summary": "<string>",
  "roadmap": ["<action 1>", "<action 2>", ...]
}}

Be honest but constructive. Focus on practical improvements.
"""


def average_days_between_commits(dates: Sequence[datetime]) -> float:
    """Span between newest and oldest commit divided by ``count`` days.

    Returns ``0.0`` for fewer than two commits.
    """
    if len(dates) < 2:
        return 0.0
    span = (max(dates) - min(dates)).total_seconds()
    return span / (len(dates) * _SECONDS_PER_DAY)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_prompt(repository: FetchedRepository) -> str:
    """Render the review prompt for *repository*."""
    signals = repository.signals
    return REVIEW_PROMPT.format(
        full_name=repository.full_name,
        description=repository.description or "No description",
        language=signals.primary_language,
        stars=signals.stars,
        forks=signals.forks,
        commits=signals.commit_count,
        has_readme=_yes_no(signals.has_readme),
        has_gitignore=_yes_no(signals.has_gitignore),
        has_license=_yes_no(signals.has_license),
        has_tests=_yes_no(signals.has_tests),
        has_cicd=_yes_no(signals.has_cicd),
        file_count=signals.file_count,
        avg_days=average_days_between_commits(repository.commit_dates),
        languages=", ".join(repository.languages),
    )
