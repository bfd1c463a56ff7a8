"""Tests for the Gemini and Claude text model clients."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from reel_buzz.api.base import get_text_model
from reel_buzz.api.claude_client import ClaudeClient
from reel_buzz.api.gemini_client import GeminiClient
from reel_buzz.errors import AIClientError


def gemini_response(*texts):
    response = MagicMock()
    parts = [MagicMock(text=text) for text in texts]
    response.candidates = [MagicMock(content=MagicMock(parts=parts))]
    return response


def mock_async_client(mock_cls, response):
    client = MagicMock()
    client.post = AsyncMock(return_value=response)
    mock_cls.return_value.__aenter__.return_value = client
    return client


class TestGeminiClient:
    def test_models_to_try(self):
        client = GeminiClient(api_key="k", model="primary", fallback_model="backup")
        assert client.models_to_try() == ["primary", "backup"]
        assert client.models_to_try("explicit") == ["explicit"]

    def test_same_fallback_is_not_repeated(self):
        client = GeminiClient(api_key="k", model="m", fallback_model="m")
        assert client.models_to_try() == ["m"]

    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = GeminiClient(api_key="")
        with pytest.raises(AIClientError, match="GEMINI_API_KEY"):
            await client.generate("hi")

    @pytest.mark.asyncio
    async def test_generate_joins_text_parts(self):
        client = GeminiClient(api_key="k", model="m", fallback_model="f")
        client._client = MagicMock()
        client._client.aio.models.generate_content = AsyncMock(
            return_value=gemini_response("Hello ", "world")
        )

        assert await client.generate("prompt", temperature=0.2, max_tokens=10) == "Hello world"
        kwargs = client._client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].temperature == 0.2
        assert kwargs["config"].max_output_tokens == 10

    @pytest.mark.asyncio
    async def test_falls_back_to_second_model(self):
        client = GeminiClient(api_key="k", model="m", fallback_model="f")
        client._client = MagicMock()
        client._client.aio.models.generate_content = AsyncMock(
            side_effect=[RuntimeError("overloaded"), gemini_response("ok")]
        )

        assert await client.generate("prompt") == "ok"
        calls = client._client.aio.models.generate_content.call_args_list
        assert [c.kwargs["model"] for c in calls] == ["m", "f"]

    @pytest.mark.asyncio
    async def test_all_models_fail(self):
        client = GeminiClient(api_key="k", model="m", fallback_model="f")
        client._client = MagicMock()
        client._client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("down"))

        with pytest.raises(AIClientError, match="Failed to call Gemini API: down"):
            await client.generate("prompt")

    def test_empty_candidates(self):
        client = GeminiClient(api_key="k")
        response = MagicMock(candidates=[])
        with pytest.raises(AIClientError, match="No response candidates"):
            client.get_text_response(response)


class TestClaudeClient:
    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = ClaudeClient(api_key="")
        with pytest.raises(AIClientError, match="ANTHROPIC_API_KEY"):
            await client.generate("hi")

    @pytest.mark.asyncio
    @patch("reel_buzz.api.claude_client.httpx.AsyncClient")
    async def test_generate_returns_first_text_block(self, mock_cls):
        response = MagicMock(status_code=200)
        response.json.return_value = {
            "content": [{"type": "tool_use"}, {"type": "text", "text": "Buzz!"}]
        }
        http = mock_async_client(mock_cls, response)

        client = ClaudeClient(api_key="sk-test", model="claude-test")
        assert await client.generate("prompt", temperature=0.5, max_tokens=100) == "Buzz!"

        kwargs = http.post.call_args.kwargs
        assert kwargs["headers"]["x-api-key"] == "sk-test"
        assert kwargs["headers"]["anthropic-version"] == "2023-06-01"
        assert kwargs["json"]["model"] == "claude-test"
        assert kwargs["json"]["max_tokens"] == 100
        assert kwargs["json"]["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    @patch("reel_buzz.api.claude_client.httpx.AsyncClient")
    async def test_http_error(self, mock_cls):
        response = MagicMock(status_code=401)
        response.json.return_value = {"error": {"message": "bad key"}}
        mock_async_client(mock_cls, response)

        with pytest.raises(AIClientError, match="Claude API error: 401"):
            await ClaudeClient(api_key="sk").generate("prompt")

    @pytest.mark.asyncio
    @patch("reel_buzz.api.claude_client.httpx.AsyncClient")
    async def test_no_text_content(self, mock_cls):
        response = MagicMock(status_code=200)
        response.json.return_value = {"content": []}
        mock_async_client(mock_cls, response)

        with pytest.raises(AIClientError, match="No text content"):
            await ClaudeClient(api_key="sk").generate("prompt")


class TestGetTextModel:
    def test_gemini_by_default(self, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "gemini")
        assert isinstance(get_text_model(), GeminiClient)

    def test_claude_when_configured(self, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "claude")
        assert isinstance(get_text_model(), ClaudeClient)
