"""Buzz analysis and content generation."""

from reel_buzz.ai.buzz_analyzer import BuzzAnalyzer, to_simplified_format
from reel_buzz.ai.caption_generator import (
    CaptionGenerator,
    format_instagram_caption,
    validate_instagram_caption,
)
from reel_buzz.ai.script_generator import ScriptGenerator, format_script, validate_script
from reel_buzz.ai.threads_generator import (
    ThreadsGenerator,
    format_threads_post,
    validate_threads_post,
)

__all__ = [
    # Analysis
    "BuzzAnalyzer",
    "to_simplified_format",
    # Captions
    "CaptionGenerator",
    "format_instagram_caption",
    "validate_instagram_caption",
    # Threads
    "ThreadsGenerator",
    "format_threads_post",
    "validate_threads_post",
    # Scripts
    "ScriptGenerator",
    "format_script",
    "validate_script",
]
