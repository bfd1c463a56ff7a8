"""Instagram media resolution and download."""

import logging
import secrets
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from reel_buzz.config.settings import get_settings
from reel_buzz.errors import DownloadError
from reel_buzz.instagram import ytdlp
from reel_buzz.instagram.validator import validate_instagram_url

logger = logging.getLogger(__name__)

RAPIDAPI_HOST = "instagram-scraper-api2.p.rapidapi.com"
RAPIDAPI_URL = f"https://{RAPIDAPI_HOST}/v1/post_info"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

CONTENT_TYPE_EXTENSIONS = {
    "video/mp4": ".mp4",
    "video/webm": ".webm",
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def random_suffix(length: int = 9) -> str:
    """Random lowercase alphanumeric string for request IDs and temp names."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


class DownloadRequest(BaseModel):
    url: str
    quality: Literal["high", "medium", "low"] = "high"
    format: Literal["mp4", "webm"] = "mp4"


class DownloadResult(BaseModel):
    """Outcome of resolving an Instagram media URL."""

    success: bool
    media_url: str | None = None
    file_name: str | None = None
    media_type: str | None = None
    size: int | None = None
    title: str | None = None
    author: str | None = None
    thumbnail: str | None = None
    duration: float | None = None
    description: str | None = None
    error: str | None = None
    timestamp: str = Field(default_factory=_timestamp)


class MediaData(BaseModel):
    media_url: str
    title: str | None = None
    author: str | None = None
    thumbnail: str | None = None
    duration: float | None = None
    description: str | None = None


def _first(items: Any) -> dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _object(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _payload(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DownloadError(f"Unexpected Instagram API response: expected an object, got {type(data).__name__}")
    return _object(data.get("data"))


def extract_media_url(data: dict[str, Any]) -> str:
    """Find the video URL in a scraper response.

    Raises:
        DownloadError: If no known location holds a video URL.
    """
    nested = _payload(data)
    video_url = (
        nested.get("video_url")
        or _first(nested.get("items")).get("video_url")
        or _first(_first(data.get("items")).get("video_versions")).get("url")
        or data.get("video_url")
    )
    if not video_url:
        raise DownloadError("No video URL found in Instagram API response")
    return video_url


def extract_metadata(data: dict[str, Any]) -> dict[str, Any]:
    """Pull title, author, thumbnail, duration and caption from a scraper response."""
    nested = _payload(data)
    item = _first(nested.get("items")) or _first(data.get("items")) or nested or {}

    caption = _object(item.get("caption"))
    user = _object(item.get("user"))
    owner = _object(item.get("owner"))
    candidates = _object(item.get("image_versions2")).get("candidates")

    return {
        "title": item.get("title") or caption.get("text") or None,
        "author": user.get("username") or owner.get("username") or user.get("full_name") or None,
        "thumbnail": item.get("thumbnail_url") or _first(candidates).get("url") or None,
        "duration": item.get("video_duration") or None,
        "description": caption.get("text") or None,
    }


class InstagramDownloader:
    """Resolves Instagram URLs to downloadable media."""

    def __init__(self, rapidapi_key: str | None = None, timeout: float | None = None):
        """Initialize the downloader.

        Args:
            rapidapi_key: RapidAPI key for the Instagram scraper. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        settings = get_settings()
        self.rapidapi_key = rapidapi_key if rapidapi_key is not None else settings.rapidapi_key
        self.timeout = timeout or settings.api_timeout_seconds

    async def validate(self, request: DownloadRequest) -> DownloadResult:
        if not request.url:
            return DownloadResult(success=False, error="URL is required")

        validation = validate_instagram_url(request.url)
        if not validation.is_valid:
            return DownloadResult(success=False, error=validation.error or "Invalid Instagram URL")

        return DownloadResult(success=True)

    async def download(self, request: DownloadRequest) -> DownloadResult:
        """Validate the URL and resolve its media URL and metadata.

        Failures are reported in the result, never raised.
        """
        validation = await self.validate(request)
        if not validation.success:
            return validation

        try:
            media = await self.fetch_media(request.url)
        except DownloadError as e:
            logger.warning(f"Download failed for {request.url}: {e}")
            return DownloadResult(success=False, error=f"Download failed: {e}")

        return DownloadResult(
            success=True,
            media_url=media.media_url,
            file_name=self.generate_file_name(request),
            media_type="video/mp4",
            title=media.title,
            author=media.author,
            thumbnail=media.thumbnail,
            duration=media.duration,
            description=media.description,
        )

    async def get_media_info(self, url: str) -> DownloadResult:
        validation = validate_instagram_url(url)
        if not validation.is_valid:
            return DownloadResult(success=False, error=validation.error or "Invalid Instagram URL")

        return DownloadResult(
            success=True,
            media_type="video/mp4" if validation.type == "reel" else "image/jpeg",
        )

    def generate_file_name(self, request: DownloadRequest) -> str:
        validation = validate_instagram_url(request.url)
        media_id = validation.media_id or "unknown"
        media_type = validation.type or "media"
        return f"instagram_{media_type}_{media_id}_{int(time.time() * 1000)}.{request.format}"

    async def fetch_media(self, url: str) -> MediaData:
        """Resolve media through RapidAPI when configured, otherwise yt-dlp.

        Raises:
            DownloadError: If the media cannot be resolved.
        """
        if self.rapidapi_key:
            return await self._fetch_from_rapidapi(url)

        result = await ytdlp.fetch_metadata(url)
        if not result.success or not result.url:
            raise DownloadError(result.error or "No video URL found in yt-dlp output")
        return MediaData(
            media_url=result.url,
            title=result.title,
            author=result.uploader,
            thumbnail=result.thumbnail,
            duration=result.duration,
            description=result.description,
        )

    async def _fetch_from_rapidapi(self, url: str) -> MediaData:
        headers = {
            "x-rapidapi-key": self.rapidapi_key or "",
            "x-rapidapi-host": RAPIDAPI_HOST,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    RAPIDAPI_URL,
                    params={"code_or_id_or_url": url},
                    headers=headers,
                )

            if response.status_code >= 400:
                raise DownloadError(
                    f"RapidAPI request failed with status {response.status_code}: "
                    f"{response.reason_phrase}"
                )

            data = response.json()
            return MediaData(media_url=extract_media_url(data), **extract_metadata(data))
        except httpx.TimeoutException as e:
            raise DownloadError("Request timeout: Instagram API took too long to respond") from e
        except (DownloadError, httpx.HTTPError, ValueError) as e:
            raise DownloadError(f"Failed to fetch Instagram media: {e}") from e


async def download_media_file(url: str, directory: str | None = None) -> Path:
    """Fetch a media URL into a temporary file.

    The extension follows the response content type, defaulting to ``.mp4``.

    Raises:
        DownloadError: If the server does not answer with a success status.
    """
    settings = get_settings()
    target_dir = Path(directory or settings.temp_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=settings.media_download_timeout_seconds, follow_redirects=True) as client:
        response = await client.get(url, headers={"User-Agent": USER_AGENT})

    if response.status_code >= 400:
        raise DownloadError(f"HTTP {response.status_code}")

    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    extension = CONTENT_TYPE_EXTENSIONS.get(content_type, ".mp4")
    path = target_dir / f"{int(time.time() * 1000)}-{random_suffix()}{extension}"
    path.write_bytes(response.content)

    logger.info(f"Saved {len(response.content)} bytes from {url} to {path}")
    return path
