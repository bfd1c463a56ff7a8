"""Text model protocol shared by the analyzers and generators."""

from typing import Protocol

from reel_buzz.config.settings import get_settings


class TextModel(Protocol):
    """Anything that turns a prompt into text."""

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str: ...


def get_text_model() -> TextModel:
    """Return the client for the configured AI provider."""
    settings = get_settings()
    if settings.ai_provider == "claude":
        from reel_buzz.api.claude_client import ClaudeClient

        return ClaudeClient()

    from reel_buzz.api.gemini_client import GeminiClient

    return GeminiClient()
