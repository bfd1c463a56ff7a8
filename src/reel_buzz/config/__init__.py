"""Runtime configuration loaded from environment variables and ``.env``."""

from reel_buzz.config.settings import (
    DEFAULT_CLAUDE_MODEL,
    DEFAULT_GEMINI_FALLBACK_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_WHISPER_MODEL,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_CLAUDE_MODEL",
    "DEFAULT_GEMINI_FALLBACK_MODEL",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_WHISPER_MODEL",
    "Settings",
    "get_settings",
]
