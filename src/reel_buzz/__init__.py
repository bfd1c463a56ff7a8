"""Reel Buzz - AI-powered buzz analysis and content generation for Instagram Reels."""

from typing import Any

from reel_buzz.ai.buzz_analyzer import BuzzAnalyzer
from reel_buzz.ai.caption_generator import CaptionGenerator
from reel_buzz.ai.script_generator import ScriptGenerator
from reel_buzz.ai.threads_generator import ThreadsGenerator
from reel_buzz.instagram.downloader import InstagramDownloader
from reel_buzz.transcribe.whisper import WhisperClient

__version__ = "0.1.0"
__all__ = [
    "BuzzAnalyzer",
    "CaptionGenerator",
    "InstagramDownloader",
    "ScriptGenerator",
    "ThreadsGenerator",
    "WhisperClient",
    "__version__",
    "create_app",
]


def create_app() -> Any:
    """Lazy import to avoid circular imports."""
    from reel_buzz.web.app import create_app as _create_app

    return _create_app()
