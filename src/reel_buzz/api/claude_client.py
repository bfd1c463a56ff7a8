"""Anthropic Claude Messages API client."""

import json
from typing import Any

import httpx

from reel_buzz.config.settings import get_settings
from reel_buzz.errors import AIClientError


class ClaudeClient:
    """Client for single-prompt text generation with Claude."""

    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the Claude client.

        Args:
            api_key: Anthropic API key. Defaults to settings.
            model: Model to use. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = model or settings.claude_model
        self.timeout = timeout or settings.api_timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
        }

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        model: str | None = None,
    ) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The prompt to send as a single user message.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the response.
            model: Explicit model to use.

        Returns:
            Text of the first text content block.

        Raises:
            AIClientError: If no key is configured or the call fails.
        """
        if not self.api_key:
            raise AIClientError("ANTHROPIC_API_KEY environment variable is not set")

        payload: dict[str, Any] = {
            "model": model or self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.API_URL, headers=self._headers(), json=payload)

            if response.status_code >= 400:
                try:
                    detail = json.dumps(response.json())
                except ValueError:
                    detail = response.text
                raise AIClientError(f"Claude API error: {response.status_code} - {detail}")

            data = response.json()
            for block in data.get("content") or []:
                if block.get("type") == "text":
                    return block.get("text", "")
            raise AIClientError("No text content in Claude response")
        except (AIClientError, httpx.HTTPError, ValueError) as e:
            raise AIClientError(f"Failed to call Claude API: {e}") from e
