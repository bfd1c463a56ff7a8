"""Instagram URL validation and parsing."""

import re
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel

MediaType = Literal["reel", "post", "clip", "igtv"]

INSTAGRAM_DOMAINS = frozenset(
    {
        "instagram.com",
        "www.instagram.com",
        "instagr.am",
        "www.instagr.am",
        "ig.me",
        "www.ig.me",
    }
)

PATH_TYPES: dict[str, MediaType] = {
    "reel": "reel",
    "p": "post",
    "tv": "igtv",
    "clip": "clip",
}

TYPE_PATHS: dict[str, str] = {media_type: path for path, media_type in PATH_TYPES.items()}

_MEDIA_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class UrlValidation(BaseModel):
    """Result of validating an Instagram URL."""

    is_valid: bool
    type: MediaType | None = None
    media_id: str | None = None
    error: str | None = None


def _extract_media_info(path: str) -> tuple[MediaType, str] | None:
    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        return None

    path_type, media_id = parts[0].lower(), parts[1]
    media_type = PATH_TYPES.get(path_type)
    if media_type is None or not _MEDIA_ID_PATTERN.match(media_id):
        return None
    return media_type, media_id


def validate_instagram_url(url: str | None) -> UrlValidation:
    """Validate an Instagram post, Reel, clip or IGTV URL.

    Args:
        url: URL such as ``https://www.instagram.com/reel/ABC123/``.

    Returns:
        Validation result carrying the media type and ID when valid.
    """
    if not url or not isinstance(url, str):
        return UrlValidation(is_valid=False, error="URL must be a non-empty string")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return UrlValidation(is_valid=False, error="Invalid URL format")
    if not parsed.scheme or not hostname:
        return UrlValidation(is_valid=False, error="Invalid URL format")

    if hostname.lower() not in INSTAGRAM_DOMAINS:
        return UrlValidation(
            is_valid=False,
            error="URL must be from Instagram domain (instagram.com, instagr.am, ig.me)",
        )

    media_info = _extract_media_info(parsed.path)
    if media_info is None:
        return UrlValidation(is_valid=False, error="Could not extract valid media ID from URL")

    media_type, media_id = media_info
    return UrlValidation(is_valid=True, type=media_type, media_id=media_id)


def format_instagram_url(media_id: str, media_type: MediaType = "post") -> str:
    """Build the canonical URL for a media ID."""
    path = TYPE_PATHS.get(media_type, "p")
    return f"https://www.instagram.com/{path}/{media_id}/"
