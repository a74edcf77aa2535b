"""Read-only catalog models: learning modules and assessments."""

from enum import StrEnum

from pydantic import BaseModel, Field


class Difficulty(StrEnum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class QuestionType(StrEnum):
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"
    TEXT = "text"


class Exercise(BaseModel):
    question: str
    type: QuestionType


class Lesson(BaseModel):
    title: str
    content: str
    exercises: list[Exercise] = Field(default_factory=list)


class ModuleContent(BaseModel):
    lessons: list[Lesson] = Field(default_factory=list)


class LearningModule(BaseModel):
    """A learning module; ``duration`` is in minutes, ``exercises`` a count."""

    id: str
    title: str
    description: str
    difficulty: Difficulty
    duration: int
    exercises: int
    content: ModuleContent = Field(default_factory=ModuleContent)
    image_url: str | None = None


class Question(BaseModel):
    id: str
    question: str
    type: QuestionType
    options: list[str] | None = None
    category: str


class Assessment(BaseModel):
    id: str
    title: str
    description: str
    duration: int
    questions: list[Question] = Field(default_factory=list)
