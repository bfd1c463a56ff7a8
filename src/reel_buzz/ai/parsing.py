"""Helpers for pulling structured data out of model output."""

import json
import re
from typing import Any
from urllib.parse import urlparse

from reel_buzz.errors import ResponseParseError

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def extract_json_object(text: str, missing_message: str = "No JSON found in response") -> dict[str, Any]:
    """Parse the outermost JSON object embedded in model output.

    Args:
        text: Raw model output, possibly wrapped in prose or code fences.
        missing_message: Error message when no object is present.

    Returns:
        The parsed object.

    Raises:
        ResponseParseError: If no object is found or it is not valid JSON.
    """
    match = _OBJECT_PATTERN.search(text)
    if not match:
        raise ResponseParseError(missing_message)
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ResponseParseError("Expected a JSON object")
    return parsed


def extract_json_array(text: str) -> list[Any]:
    """Parse the outermost JSON array embedded in model output.

    Raises:
        ResponseParseError: If no array is found or it is not valid JSON.
    """
    match = _ARRAY_PATTERN.search(text)
    if not match:
        raise ResponseParseError("No JSON array found in response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON: {e}") from e
    return parsed if isinstance(parsed, list) else []


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into the closed range [low, high]."""
    return max(low, min(high, value))


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def topic_from_request(
    topic: str | None = None,
    url: str | None = None,
    content: str | None = None,
) -> str:
    """Derive a generation topic from whichever input was supplied.

    The explicit topic wins. A URL contributes its last path segment with
    dashes turned into spaces, or its hostname when the path is empty.
    Content contributes its first 200 characters.
    """
    if topic:
        return topic

    if url:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            return url
        segments = [segment for segment in parsed.path.split("/") if segment]
        if segments:
            return segments[-1].replace("-", " ")
        return parsed.hostname or url

    if content:
        return content[:200]

    return "General topic"
