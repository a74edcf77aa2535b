"""Coaching model: turns a chat transcript into a structured coach reply."""

import structlog

from relationship_wise.conversation.prompts import build_coach_prompt
from relationship_wise.llm.client import JsonChatClient

logger = structlog.get_logger()

MAX_TRANSCRIPT_MESSAGES = 30


def _truncate_transcript(transcript: list[dict[str, str]]) -> list[dict[str, str]]:
    """Limit transcript to the last N messages to control token usage."""
    if len(transcript) <= MAX_TRANSCRIPT_MESSAGES:
        return transcript
    omitted = len(transcript) - MAX_TRANSCRIPT_MESSAGES
    context_note = {
        "role": "system",
        "content": f"[Context: This is a continued conversation. "
                   f"{omitted} earlier messages have been omitted.]",
    }
    return [context_note] + transcript[-MAX_TRANSCRIPT_MESSAGES:]


class CoachingModel:
    """Asks the language model for the next coaching reply.

    The raw JSON object is returned unvalidated; ``CoachingTurn`` coerces it.

    Args:
        llm: JSON chat client.
        max_tokens: Completion token limit.
    """

    def __init__(self, llm: JsonChatClient, max_tokens: int = 800):
        self.llm = llm
        self.max_tokens = max_tokens

    async def respond(
        self,
        transcript: list[dict[str, str]],
        context: dict | None = None,
    ) -> dict:
        """Generate a reply to the last user message in ``transcript``.

        Args:
            transcript: Ordered {"role": "user"|"assistant", "content": ...} dicts.
            context: Optional {"age", "preferences"} of the learner.
        """
        messages = [
            {"role": "system", "content": build_coach_prompt(context)},
            *_truncate_transcript(transcript),
        ]
        result = await self.llm.complete_json(messages, max_tokens=self.max_tokens)
        logger.debug("coach_reply_received", keys=sorted(result))
        return result
