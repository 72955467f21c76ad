"""Async client for an OpenAI-compatible completion API (OpenRouter by default)."""

from __future__ import annotations

import logging

import openai

from paintgen.config.defaults import (
    DEFAULT_APP_TITLE,
    DEFAULT_BASE_URL,
    DEFAULT_HTTP_REFERER,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
)
from paintgen.errors.exceptions import ConfigError, TerminalError
from paintgen.types import (
    ContentPart,
    GenerationResponse,
    ImageURL,
    Message,
    Role,
    TokenUsage,
)

logger = logging.getLogger(__name__)

_OPENROUTER_KEY_PREFIX = "sk-or-v1-"


class GenerationClient:
    """Sends chat completion requests, one round trip per call.

    The underlying SDK's own retries are disabled; retries belong to
    ``RequestDispatcher``.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        http_referer: str = DEFAULT_HTTP_REFERER,
        app_title: str = DEFAULT_APP_TITLE,
        timeout: float = 60.0,
    ) -> None:
        if not api_key:
            raise ConfigError("AI_API_KEY is not set")
        if base_url == DEFAULT_BASE_URL and not api_key.startswith(_OPENROUTER_KEY_PREFIX):
            logger.warning(
                "API key does not look like an OpenRouter key (expected prefix '%s')",
                _OPENROUTER_KEY_PREFIX,
            )
        self._model = model
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            timeout=timeout,
            default_headers={"HTTP-Referer": http_referer, "X-Title": app_title},
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[Message],
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> GenerationResponse:
        """Send one request and return the generated text."""
        response = await self._client.chat.completions.create(
            model=model or self._model,
            messages=[m.model_dump(mode="json", exclude_none=True) for m in messages],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return self._parse_response(response)

    async def close(self) -> None:
        await self._client.close()

    @staticmethod
    def _parse_response(response: openai.types.chat.ChatCompletion) -> GenerationResponse:
        if not response.choices:
            raise TerminalError("Generation service returned no choices", error_type="empty_response")

        choice = response.choices[0]
        usage = response.usage
        return GenerationResponse(
            content=choice.message.content or "",
            model=response.model,
            token_usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
                total_tokens=usage.total_tokens if usage else 0,
            ),
            finish_reason=choice.finish_reason,
        )


def text_message(role: Role, text: str) -> Message:
    return Message(role=role, content=text)


def create_image_message(
    image_b64: str,
    text_prompt: str,
    mime_type: str = "image/jpeg",
) -> Message:
    """Build a user message carrying a prompt and one inline image."""
    return Message(
        role=Role.USER,
        content=[
            ContentPart(type="text", text=text_prompt),
            ContentPart(
                type="image_url",
                image_url=ImageURL(url=f"data:{mime_type};base64,{image_b64}"),
            ),
        ],
    )
