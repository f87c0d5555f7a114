"""AI analyzer — one model call, with the heuristic scorer as the only recovery."""

from __future__ import annotations

import logging

from repo_grader.domain.entities import AnalysisOutcome, FetchedRepository
from repo_grader.domain.ports.llm_gateway import LlmGateway
from repo_grader.services.fallback_scorer import score_fallback
from repo_grader.services.prompt import build_prompt
from repo_grader.services.response_parser import parse_analysis

logger = logging.getLogger(__name__)


class AiAnalyzer:
    """Score a fetched repository with an LLM.

    Parameters
    ----------
    llm_gateway:
        Adapter used for the completion call.  ``None`` disables the model
        entirely and every analysis is scored heuristically.
    """

    def __init__(self, llm_gateway: LlmGateway | None) -> None:
        self._llm = llm_gateway

    async def analyze(self, repository: FetchedRepository) -> AnalysisOutcome:
        """Return the model's analysis, or the fallback on any failure."""
        if self._llm is None:
            logger.info("No LLM configured — scoring %s heuristically", repository.full_name)
            return score_fallback(repository.signals)

        prompt = build_prompt(repository)
        try:
            raw = await self._llm.complete(prompt)
            return parse_analysis(raw)
        except Exception as exc:
            logger.warning(
                "AI analysis of %s failed (%s: %s) — using heuristic fallback",
                repository.full_name,
                type(exc).__name__,
                exc,
            )
            return score_fallback(repository.signals)
