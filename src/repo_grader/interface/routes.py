"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from repo_grader.domain.value_objects import GitHubUrl
from repo_grader.interface.dependencies import get_use_case
from repo_grader.interface.schemas import (
    AnalysisRecordOut,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
)
from repo_grader.services.analyze_repo import AnalyzeRepoUseCase

router = APIRouter(prefix="/api")


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Owner / repo missing or URL invalid"},
        500: {"model": ErrorResponse, "description": "Repository fetch failed"},
    },
)
async def submit_analysis(
    body: AnalyzeRequest,
    use_case: AnalyzeRepoUseCase = Depends(get_use_case),
) -> AnalyzeResponse:
    """Analyze a public GitHub repository and return the stored record id."""
    owner, repo = body.owner, body.repo
    if body.url and not (owner and repo):
        parsed = GitHubUrl.from_string(body.url)
        owner, repo = parsed.owner, parsed.repo
    record = await use_case.execute(owner, repo)
    return AnalyzeResponse(id=record.id)


@router.get(
    "/analyze",
    response_model=AnalysisRecordOut,
    response_model_by_alias=True,
    responses={
        400: {"model": ErrorResponse, "description": "id missing"},
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
)
async def get_analysis(
    id: str | None = None,  # noqa: A002
    use_case: AnalyzeRepoUseCase = Depends(get_use_case),
) -> AnalysisRecordOut:
    """Return a previously stored analysis."""
    return AnalysisRecordOut.from_record(use_case.get_analysis(id))
