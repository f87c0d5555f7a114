"""Parse the model's free-form reply into an :class:`AnalysisOutcome`.

The reply is expected to contain a JSON object, possibly wrapped in prose or
markdown fences.  The span from the first ``{`` to the last ``}`` is
extracted, decoded and validated against an explicit schema; anything that
does not fit raises :class:`UnparsableResponseError`.
"""

from __future__ import annotations

import json
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from repo_grader.domain.entities import (
    AnalysisOutcome,
    AnalysisSource,
    DimensionScores,
    clamp_score,
)
from repo_grader.domain.exceptions import UnparsableResponseError
from repo_grader.services.fallback_scorer import MAX_ROADMAP_ITEMS

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class _Dimensions(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    codeQuality: float
    documentation: float
    structure: float
    gitPractices: float
    testCoverage: float


class _LlmAnalysis(BaseModel):
    """Schema of the JSON object the model is asked to return."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, str_strip_whitespace=True)

    overallScore: float
    dimensions: _Dimensions
    summary: str = Field(min_length=1)
    roadmap: list[str]

    @field_validator("roadmap")
    @classmethod
    def _non_empty_roadmap(cls, v: list[str]) -> list[str]:
        items = [item.strip() for item in v if item and item.strip()]
        if not items:
            msg = "roadmap must contain at least one action"
            raise ValueError(msg)
        return items[:MAX_ROADMAP_ITEMS]


def extract_json(text: str) -> str:
    """Return the greedy ``{...}`` span of *text*."""
    match = _JSON_OBJECT_RE.search(text)
    if not match:
        raise UnparsableResponseError("Failed to parse AI response: no JSON object found.")
    return match.group(0)


def parse_analysis(text: str) -> AnalysisOutcome:
    """Decode and validate a model reply into an AI-sourced outcome."""
    raw = extract_json(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise UnparsableResponseError(f"AI response is not valid JSON: {exc}") from exc

    try:
        parsed = _LlmAnalysis.model_validate(data)
    except ValidationError as exc:
        raise UnparsableResponseError(
            f"AI response does not match the analysis schema: {exc.error_count()} error(s)"
        ) from exc

    dims = parsed.dimensions
    return AnalysisOutcome(
        overall_score=clamp_score(parsed.overallScore),
        dimensions=DimensionScores(
            code_quality=clamp_score(dims.codeQuality),
            documentation=clamp_score(dims.documentation),
            structure=clamp_score(dims.structure),
            git_practices=clamp_score(dims.gitPractices),
            test_coverage=clamp_score(dims.testCoverage),
        ),
        summary=parsed.summary.strip(),
        roadmap=tuple(parsed.roadmap),
        source=AnalysisSource.AI,
    )
