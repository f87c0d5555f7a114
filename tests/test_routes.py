"""Tests for the HTTP endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from repo_grader.domain.exceptions import NetworkError, RepositoryNotFoundError
from repo_grader.infrastructure.memory_store import InMemoryAnalysisStore
from repo_grader.interface.app import create_app
from repo_grader.services.ai_analyzer import AiAnalyzer
from repo_grader.services.analyze_repo import AnalyzeRepoUseCase
from tests._fakes import AI_REPLY, StubFetcher, StubLlm


class _Harness:
    def __init__(self) -> None:
        self.fetcher = StubFetcher()
        self.llm = StubLlm(reply=AI_REPLY)
        self.store = InMemoryAnalysisStore()

    def use_case(self) -> AnalyzeRepoUseCase:
        return AnalyzeRepoUseCase(
            repo_fetcher=self.fetcher,
            analyzer=AiAnalyzer(self.llm),
            store=self.store,
        )


@pytest.fixture
def harness() -> _Harness:
    return _Harness()


@pytest.fixture
def client(harness: _Harness) -> TestClient:
    return TestClient(create_app(harness.use_case))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_submit_then_lookup(client: TestClient, harness: _Harness) -> None:
    response = client.post("/api/analyze", json={"owner": "octocat", "repo": "hello-world"})
    assert response.status_code == 201
    analysis_id = response.json()["id"]

    response = client.get("/api/analyze", params={"id": analysis_id})
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == analysis_id
    assert data["repoUrl"] == "https://github.com/octocat/hello-world"
    assert data["score"] == 92
    assert data["category"] == "Advanced"
    assert data["analysisSource"] == "ai"
    assert set(data["metrics"]) == {
        "codeQuality",
        "documentation",
        "structure",
        "gitPractices",
        "testCoverage",
    }
    assert set(data["repoData"]) == {
        "language",
        "stars",
        "forks",
        "lastUpdated",
        "totalCommits",
        "fileCount",
    }
    assert data["roadmap"][0] == "Add architecture docs"


def test_submit_by_url(client: TestClient, harness: _Harness) -> None:
    response = client.post("/api/analyze", json={"url": "https://github.com/psf/requests.git"})

    assert response.status_code == 201
    assert harness.fetcher.calls[0].full_name == "psf/requests"


def test_invalid_url_is_rejected(client: TestClient, harness: _Harness) -> None:
    response = client.post("/api/analyze", json={"url": "https://gitlab.com/a/b"})

    assert response.status_code == 400
    assert "Invalid GitHub URL" in response.json()["error"]
    assert harness.fetcher.calls == []


@pytest.mark.parametrize("body", [{"repo": "hello-world"}, {"owner": "octocat"}, {}])
def test_missing_owner_or_repo(client: TestClient, harness: _Harness, body: dict) -> None:
    response = client.post("/api/analyze", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Owner and repo are required"}
    assert harness.fetcher.calls == []
    assert harness.llm.prompts == []


def test_malformed_body(client: TestClient) -> None:
    response = client.post("/api/analyze", json=["octocat", "hello-world"])

    assert response.status_code == 400
    assert response.json() == {"error": "Owner and repo are required"}


def test_unknown_repository(client: TestClient, harness: _Harness) -> None:
    harness.fetcher.error = RepositoryNotFoundError("Repository not found or is private")

    response = client.post("/api/analyze", json={"owner": "octocat", "repo": "nope"})

    assert response.status_code == 500
    assert "not found" in response.json()["error"]
    assert len(harness.store) == 0


def test_network_failure(client: TestClient, harness: _Harness) -> None:
    harness.fetcher.error = NetworkError("GitHub API returned HTTP 502")

    response = client.post("/api/analyze", json={"owner": "octocat", "repo": "hello-world"})

    assert response.status_code == 500
    assert response.json() == {"error": "GitHub API returned HTTP 502"}


def test_unexpected_failure_uses_message() -> None:
    harness = _Harness()
    harness.fetcher.error = RuntimeError("")
    client = TestClient(create_app(harness.use_case), raise_server_exceptions=False)

    response = client.post("/api/analyze", json={"owner": "octocat", "repo": "hello-world"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze repository"}


def test_llm_failure_is_invisible(client: TestClient, harness: _Harness) -> None:
    harness.llm.reply = "no json here"

    response = client.post("/api/analyze", json={"owner": "octocat", "repo": "hello-world"})
    assert response.status_code == 201

    data = client.get("/api/analyze", params={"id": response.json()["id"]}).json()
    assert data["analysisSource"] == "fallback"
    assert data["score"] == 50
    assert data["category"] == "Beginner"


def test_lookup_errors(client: TestClient) -> None:
    missing = client.get("/api/analyze")
    assert missing.status_code == 400
    assert missing.json() == {"error": "ID is required"}

    unknown = client.get("/api/analyze", params={"id": "octocat-nope-1"})
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Analysis not found"}


def test_injected_use_case_runs_without_startup(harness: _Harness) -> None:
    with TestClient(create_app(harness.use_case)) as client:
        response = client.post("/api/analyze", json={"owner": "octocat", "repo": "hello-world"})

    assert response.status_code == 201
    assert harness.store.get(response.json()["id"]) is not None
