"""External API clients."""

from reel_buzz.api.base import TextModel, get_text_model
from reel_buzz.api.claude_client import ClaudeClient
from reel_buzz.api.gemini_client import GeminiClient

__all__ = [
    "ClaudeClient",
    "GeminiClient",
    "TextModel",
    "get_text_model",
]
