"""Chat session models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a coaching conversation.

    ``seq`` is assigned by the store when the message is appended and is
    strictly increasing within a session, starting at 1.
    """

    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    seq: int = 0


class ChatSession(BaseModel):
    """Coaching conversation owned by one user."""

    id: str
    user_id: str
    title: str
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def last_seq(self) -> int:
        return self.messages[-1].seq if self.messages else 0

    def transcript(self) -> list[dict[str, str]]:
        """Messages in the {"role", "content"} shape the chat API expects."""
        return [{"role": m.role.value, "content": m.content} for m in self.messages]
