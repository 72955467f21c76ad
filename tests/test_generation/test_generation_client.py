"""Tests for the generation client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from paintgen.errors.exceptions import ConfigError, TerminalError
from paintgen.generation.client import GenerationClient, create_image_message, text_message
from paintgen.types import Role


def _completion(content: str | None = "A calm seascape.", choices: bool = True) -> MagicMock:
    response = MagicMock()
    response.model = "openai/gpt-4o"
    response.usage.prompt_tokens = 10
    response.usage.completion_tokens = 5
    response.usage.total_tokens = 15
    if choices:
        choice = MagicMock()
        choice.message.content = content
        choice.finish_reason = "stop"
        response.choices = [choice]
    else:
        response.choices = []
    return response


class TestMessages:
    def test_text_message(self):
        msg = text_message(Role.SYSTEM, "You are a curator.")
        assert msg.model_dump(mode="json") == {"role": "system", "content": "You are a curator."}

    def test_image_message(self):
        msg = create_image_message("abc123", "Describe", mime_type="image/png")
        data = msg.model_dump(mode="json", exclude_none=True)
        assert data["role"] == "user"
        assert data["content"][0] == {"type": "text", "text": "Describe"}
        assert data["content"][1]["type"] == "image_url"
        assert data["content"][1]["image_url"]["url"] == "data:image/png;base64,abc123"

    def test_image_message_defaults_to_jpeg(self):
        msg = create_image_message("xyz", "Describe")
        assert msg.content[1].image_url.url.startswith("data:image/jpeg;base64,")


class TestGenerationClient:
    def test_requires_api_key(self):
        with pytest.raises(ConfigError):
            GenerationClient(api_key=None)

    def test_warns_on_non_openrouter_key(self, caplog):
        with caplog.at_level("WARNING"):
            GenerationClient(api_key="sk-plain")
        assert "OpenRouter" in caplog.text

    def test_no_warning_for_openrouter_key(self, caplog):
        with caplog.at_level("WARNING"):
            GenerationClient(api_key="sk-or-v1-test")
        assert caplog.text == ""

    async def test_complete_sends_messages(self):
        client = GenerationClient(api_key="sk-or-v1-test", model="test/model")
        create = AsyncMock(return_value=_completion())
        client._client.chat.completions.create = create

        result = await client.complete(
            [text_message(Role.USER, "Hello")], max_tokens=300, temperature=0.9
        )

        assert result.content == "A calm seascape."
        assert result.token_usage.total_tokens == 15
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "test/model"
        assert kwargs["messages"] == [{"role": "user", "content": "Hello"}]
        assert kwargs["max_tokens"] == 300
        assert kwargs["temperature"] == 0.9

    async def test_model_override(self):
        client = GenerationClient(api_key="sk-or-v1-test")
        create = AsyncMock(return_value=_completion())
        client._client.chat.completions.create = create
        await client.complete([text_message(Role.USER, "Hi")], model="other/model")
        assert create.await_args.kwargs["model"] == "other/model"

    def test_parse_response_empty_choices(self):
        with pytest.raises(TerminalError) as exc_info:
            GenerationClient._parse_response(_completion(choices=False))
        assert exc_info.value.error_type == "empty_response"

    def test_parse_response_none_content(self):
        result = GenerationClient._parse_response(_completion(content=None))
        assert result.content == ""
