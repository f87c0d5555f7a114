"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_grader.domain.exceptions import InvalidGitHubUrlError, ValidationError

_GITHUB_URL_RE = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)

MISSING_OWNER_OR_REPO = "Owner and repo are required"


@dataclass(frozen=True, slots=True)
class RepoRef:
    """A validated ``owner/repo`` pair identifying a GitHub repository."""

    owner: str
    repo: str

    @classmethod
    def of(cls, owner: str | None, repo: str | None) -> RepoRef:
        """Build a reference, rejecting missing or blank parts."""
        owner = (owner or "").strip()
        repo = (repo or "").strip()
        if not owner or not repo:
            raise ValidationError(MISSING_OWNER_OR_REPO)
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from a URL like
    ``https://github.com/psf/requests``.  Rejects anything that does not match
    the expected pattern.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.match(url)
        if not match:
            raise InvalidGitHubUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"], raw=url)

    def to_ref(self) -> RepoRef:
        return RepoRef(owner=self.owner, repo=self.repo)
