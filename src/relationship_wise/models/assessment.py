"""Assessment submission models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from relationship_wise.models.catalog import Question

NO_ANSWER = "No answer"

DEFAULT_RECOMMENDATIONS: list[str] = [
    "Continue learning with our modules",
    "Practice active listening",
    "Work on emotional awareness",
]


class AnsweredQuestion(BaseModel):
    """A catalog question paired with the caller's answer (or NO_ANSWER)."""

    question: Question
    answer: Any = NO_ANSWER

    def prompt_line(self) -> str:
        return f"{self.question.category} - {self.question.question}: {self.answer}"


class AssessmentAnalysis(BaseModel):
    """Validated shape of the scoring model's reply."""

    scores: dict[str, float] = Field(default_factory=dict)
    recommendations: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RECOMMENDATIONS)
    )


class AssessmentResult(BaseModel):
    """One scored submission. Resubmitting creates a new row."""

    id: str
    user_id: str
    assessment_id: str
    answers: dict[str, Any]
    scores: dict[str, float] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=datetime.now)
