"""Request and response bodies for the REST API."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field

from relationship_wise.models.chat import ChatSession
from relationship_wise.models.user import UserPreferences


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    age: int = Field(gt=0, lt=150)
    preferences: UserPreferences | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class ChatCreateRequest(BaseModel):
    title: str = Field(min_length=1)


class ChatMessageRequest(BaseModel):
    # Presence is checked by the coaching turn so an empty message is a 400.
    message: str | None = None


class ChatTurnResponse(BaseModel):
    session: ChatSession
    suggestions: list[str]
    feedback: str


class ProgressRequest(BaseModel):
    skill_type: str = Field(min_length=1)
    module_id: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    completed_exercises: list[str] | None = None


class AssessmentSubmitRequest(BaseModel):
    answers: dict[str, Any] | None = None
