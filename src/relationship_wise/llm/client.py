"""JSON-mode chat completion client shared by the coaching and scoring models."""

import json

import structlog
from openai import AsyncOpenAI, OpenAIError

from relationship_wise.errors import ExternalServiceError

logger = structlog.get_logger()


class JsonChatClient:
    """Thin wrapper around ``AsyncOpenAI`` that only returns JSON objects.

    Any API error, empty reply or reply that is not a JSON object raises
    ``ExternalServiceError``. Shape defaults are the caller's job.

    Args:
        api_key: OpenAI API key.
        model: Chat model name.
        timeout: Per-request HTTP timeout in seconds.
        max_retries: Retries the OpenAI client performs on transient errors.
        client: Pre-built client (tests inject a mock here).
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_retries: int = 2,
        client: AsyncOpenAI | None = None,
    ):
        self.client = client or AsyncOpenAI(
            api_key=api_key, timeout=timeout, max_retries=max_retries
        )
        self.model = model

    async def complete_json(
        self,
        messages: list[dict[str, str]],
        max_tokens: int = 800,
        temperature: float | None = None,
    ) -> dict:
        """Send ``messages`` and parse the reply as a JSON object."""
        kwargs: dict = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.error("llm_request_failed", model=self.model, error=str(e))
            raise ExternalServiceError("Language model request failed") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error("llm_empty_response", model=self.model)
            raise ExternalServiceError("Language model returned an empty response")

        try:
            result = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("llm_invalid_json", model=self.model, content=content[:200])
            raise ExternalServiceError("Language model returned invalid JSON") from e

        if not isinstance(result, dict):
            logger.error("llm_unexpected_json", model=self.model, type=type(result).__name__)
            raise ExternalServiceError("Language model returned unexpected JSON")

        logger.debug("llm_request_complete", model=self.model)
        return result
