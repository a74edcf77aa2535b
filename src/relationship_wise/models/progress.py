"""User progress model."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class UserProgress(BaseModel):
    """Progress for one (user, skill) pair."""

    id: str
    user_id: str
    module_id: str | None = None
    skill_type: str  # communication, social_cues, empathy, ...
    progress: int = Field(default=0, ge=0, le=100)
    completed_exercises: list[str] = Field(default_factory=list)
    last_activity: datetime = Field(default_factory=datetime.now)

    @field_validator("completed_exercises")
    @classmethod
    def _dedupe_exercises(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))
