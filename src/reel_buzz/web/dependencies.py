"""Dependency injection for the API."""

from functools import lru_cache

from reel_buzz.ai.buzz_analyzer import BuzzAnalyzer
from reel_buzz.ai.caption_generator import CaptionGenerator
from reel_buzz.ai.script_generator import ScriptGenerator
from reel_buzz.ai.threads_generator import ThreadsGenerator
from reel_buzz.instagram.downloader import InstagramDownloader


@lru_cache
def get_buzz_analyzer() -> BuzzAnalyzer:
    """Get the shared buzz analyzer.

    Uses lru_cache so the text model client is created once and reused
    across requests.
    """
    return BuzzAnalyzer()


@lru_cache
def get_caption_generator() -> CaptionGenerator:
    return CaptionGenerator()


@lru_cache
def get_threads_generator() -> ThreadsGenerator:
    return ThreadsGenerator()


@lru_cache
def get_script_generator() -> ScriptGenerator:
    return ScriptGenerator()


@lru_cache
def get_instagram_downloader() -> InstagramDownloader:
    return InstagramDownloader()
