"""Signal derivation — turn raw GitHub listings into boolean / numeric facts.

Matching is done on top-level item names only; nothing is fetched
recursively, so a ``tests`` directory nested under ``src/`` is not seen.
"""

from __future__ import annotations

from typing import Any, Sequence

from repo_grader.domain.entities import ContentItem, RepositorySignals

_TEST_MARKERS: tuple[str, ...] = ("test", "spec")
_CI_NAMES: frozenset[str] = frozenset({".github", ".gitlab-ci.yml"})


def has_readme(items: Sequence[ContentItem]) -> bool:
    return any(item.name.lower().startswith("readme") for item in items)


def has_license(items: Sequence[ContentItem]) -> bool:
    return any(item.name.lower().startswith("license") for item in items)


def has_gitignore(items: Sequence[ContentItem]) -> bool:
    return any(item.name.lower() == ".gitignore" for item in items)


def has_tests(items: Sequence[ContentItem]) -> bool:
    for item in items:
        name = item.name.lower()
        if name == "__tests__" or any(marker in name for marker in _TEST_MARKERS):
            return True
    return False


def has_cicd(items: Sequence[ContentItem]) -> bool:
    return any(item.name.lower() in _CI_NAMES for item in items)


def count_files(items: Sequence[ContentItem]) -> int:
    """Number of top-level entries of type ``file``."""
    return sum(1 for item in items if item.type == "file")


def derive_signals(
    metadata: dict[str, Any],
    contents: Sequence[ContentItem],
    commit_count: int,
) -> RepositorySignals:
    """Combine repository metadata and the contents listing into signals."""
    return RepositorySignals(
        primary_language=metadata.get("language") or "Unknown",
        stars=int(metadata.get("stargazers_count") or 0),
        forks=int(metadata.get("forks_count") or 0),
        commit_count=commit_count,
        file_count=count_files(contents),
        has_readme=has_readme(contents),
        has_gitignore=has_gitignore(contents),
        has_license=has_license(contents),
        has_tests=has_tests(contents),
        has_cicd=has_cicd(contents),
    )
