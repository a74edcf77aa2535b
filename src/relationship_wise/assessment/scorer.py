"""Assessment submission: pair answers with questions, score, persist."""

import asyncio
import math
from typing import Any

import structlog

from relationship_wise.assessment.llm_analyzer import AssessmentAnalyzer
from relationship_wise.errors import BadRequestError, ExternalServiceError
from relationship_wise.models.assessment import (
    NO_ANSWER,
    AnsweredQuestion,
    AssessmentAnalysis,
    AssessmentResult,
)
from relationship_wise.models.catalog import Assessment
from relationship_wise.storage.memory import MemoryStore

logger = structlog.get_logger()


def pair_answers(assessment: Assessment, answers: dict[str, Any]) -> list[AnsweredQuestion]:
    """Pair every question with its answer, using NO_ANSWER for gaps.

    ``None`` and blank strings count as unanswered; ``0`` and ``False`` do not.
    """
    paired = []
    for question in assessment.questions:
        answer = answers.get(question.id)
        if answer is None or (isinstance(answer, str) and not answer.strip()):
            answer = NO_ANSWER
        paired.append(AnsweredQuestion(question=question, answer=answer))
    return paired


def _to_score(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return max(0.0, min(100.0, float(value)))


def coerce_analysis(raw: Any) -> AssessmentAnalysis:
    """Coerce an untrusted analysis reply into ``AssessmentAnalysis``.

    Non-numeric scores are dropped and the rest clamped to 0-100. A missing or
    mistyped recommendations list is replaced by the default list.
    """
    if not isinstance(raw, dict):
        return AssessmentAnalysis()

    analysis = AssessmentAnalysis()
    scores = raw.get("scores")
    if isinstance(scores, dict):
        for category, value in scores.items():
            score = _to_score(value)
            if score is not None:
                analysis.scores[str(category)] = score

    recommendations = raw.get("recommendations")
    if isinstance(recommendations, list):
        cleaned = [r.strip() for r in recommendations if isinstance(r, str) and r.strip()]
        if cleaned or not recommendations:
            analysis.recommendations = cleaned
    return analysis


class AssessmentScorer:
    """Scores a submission with the analyzer and stores a new result row.

    Every submission becomes its own ``AssessmentResult``; earlier results
    for the same assessment are never overwritten.

    Args:
        store: Entity store.
        analyzer: Assessment analyzer.
        timeout_seconds: Upper bound on one model call.
    """

    def __init__(
        self,
        store: MemoryStore,
        analyzer: AssessmentAnalyzer,
        timeout_seconds: float = 30.0,
    ):
        self.store = store
        self.analyzer = analyzer
        self.timeout_seconds = timeout_seconds

    async def submit(
        self,
        user_id: str,
        assessment_id: str,
        answers: dict[str, Any] | None,
    ) -> AssessmentResult:
        """Score ``answers`` for ``assessment_id`` on behalf of ``user_id``.

        Raises:
            BadRequestError: No answers given.
            NotFoundError: Unknown assessment.
            ExternalServiceError: The analyzer failed or timed out.
        """
        if not isinstance(answers, dict) or not answers:
            raise BadRequestError("Answers are required")

        assessment = self.store.get_assessment(assessment_id)
        answered = pair_answers(assessment, answers)

        try:
            raw = await asyncio.wait_for(
                self.analyzer.analyze(answered), timeout=self.timeout_seconds
            )
        except Exception as e:
            logger.exception(
                "assessment_scoring_failed",
                assessment_id=assessment_id,
                error_type=type(e).__name__,
            )
            raise ExternalServiceError("Failed to submit assessment. Please try again.") from e

        analysis = coerce_analysis(raw)
        result = self.store.create_assessment_result({
            "user_id": user_id,
            "assessment_id": assessment_id,
            "answers": dict(answers),
            "scores": analysis.scores,
            "recommendations": analysis.recommendations,
        })
        logger.info(
            "assessment_scored",
            assessment_id=assessment_id,
            result_id=result.id,
            categories=sorted(result.scores),
        )
        return result
