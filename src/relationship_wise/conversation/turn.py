"""Coaching turn orchestration: user message in, coach reply persisted."""

import asyncio
from typing import Any

import structlog
from pydantic import BaseModel, Field

from relationship_wise.access import owned_chat_session
from relationship_wise.conversation.coach import CoachingModel
from relationship_wise.errors import BadRequestError, ExternalServiceError, NotFoundError
from relationship_wise.models.chat import ChatMessage, ChatSession, MessageRole
from relationship_wise.storage.memory import MemoryStore

logger = structlog.get_logger()

FALLBACK_RESPONSE = (
    "I'm here to help with your relationship skills. What would you like to work on?"
)
FALLBACK_SUGGESTIONS: list[str] = ["Give me an example", "Different scenario", "I need help"]


class CoachReply(BaseModel):
    """Validated coach reply."""

    response: str = FALLBACK_RESPONSE
    suggestions: list[str] = Field(default_factory=lambda: list(FALLBACK_SUGGESTIONS))
    feedback: str = ""


class CoachingTurnResult(BaseModel):
    session: ChatSession
    suggestions: list[str]
    feedback: str


def coerce_reply(raw: Any) -> CoachReply:
    """Coerce an untrusted model reply into ``CoachReply``.

    Missing or mistyped fields fall back to defaults instead of failing.
    """
    if not isinstance(raw, dict):
        return CoachReply()

    reply = CoachReply()
    response = raw.get("response")
    if isinstance(response, str) and response.strip():
        reply.response = response.strip()

    suggestions = raw.get("suggestions")
    if isinstance(suggestions, list):
        cleaned = [s.strip() for s in suggestions if isinstance(s, str) and s.strip()]
        if cleaned:
            reply.suggestions = cleaned

    feedback = raw.get("feedback")
    if isinstance(feedback, str):
        reply.feedback = feedback.strip()
    return reply


class CoachingTurn:
    """Runs one user/coach exchange on a chat session.

    Nothing is written unless the coach reply arrives: the user message and
    the assistant message are appended together after the model call, so a
    failed call never leaves an unanswered user message in the session.
    Concurrent turns on one session each append their own pair to the end of
    the log.

    Args:
        store: Entity store.
        coach: Coaching model.
        timeout_seconds: Upper bound on one model call.
    """

    def __init__(self, store: MemoryStore, coach: CoachingModel, timeout_seconds: float = 30.0):
        self.store = store
        self.coach = coach
        self.timeout_seconds = timeout_seconds

    async def send(self, user_id: str, session_id: str, message: str | None) -> CoachingTurnResult:
        """Send ``message`` to the coach in session ``session_id``.

        Raises:
            BadRequestError: Message empty or whitespace.
            NotFoundError: Session missing or owned by another user.
            ExternalServiceError: The coaching model failed or timed out.
        """
        if not message or not message.strip():
            raise BadRequestError("Message is required")

        session = owned_chat_session(self.store, user_id, session_id)

        try:
            context = self.store.get_user(user_id).coaching_context()
        except NotFoundError:
            context = None

        user_message = ChatMessage(role=MessageRole.USER, content=message)
        transcript = session.transcript() + [
            {"role": MessageRole.USER.value, "content": message}
        ]

        try:
            raw = await asyncio.wait_for(
                self.coach.respond(transcript, context), timeout=self.timeout_seconds
            )
        except Exception as e:
            logger.exception(
                "coaching_turn_failed",
                session_id=session_id,
                error_type=type(e).__name__,
            )
            raise ExternalServiceError("Failed to process message. Please try again.") from e

        reply = coerce_reply(raw)
        assistant_message = ChatMessage(role=MessageRole.ASSISTANT, content=reply.response)
        updated = self.store.append_chat_messages(session_id, [user_message, assistant_message])

        logger.info(
            "coaching_turn_completed",
            session_id=session_id,
            message_count=len(updated.messages),
            suggestion_count=len(reply.suggestions),
        )
        return CoachingTurnResult(
            session=updated, suggestions=reply.suggestions, feedback=reply.feedback
        )
