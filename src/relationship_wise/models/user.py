"""User account model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserPreferences(BaseModel):
    """Free-form learner preferences; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    communication_style: str | None = None
    learning_goals: list[str] = Field(default_factory=list)
    completed_modules: list[str] = Field(default_factory=list)


class User(BaseModel):
    id: str
    email: str
    password_hash: str
    name: str
    age: int
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: datetime = Field(default_factory=datetime.now)

    def public(self) -> dict:
        """Serializable view without the password hash."""
        return self.model_dump(mode="json", exclude={"password_hash"})

    def coaching_context(self) -> dict:
        """Age and preferences passed to the coaching model."""
        return {"age": self.age, "preferences": self.preferences.model_dump()}
