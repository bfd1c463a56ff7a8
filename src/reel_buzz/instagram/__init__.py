"""Instagram URL handling and media download."""

from reel_buzz.instagram.downloader import (
    DownloadRequest,
    DownloadResult,
    InstagramDownloader,
    download_media_file,
)
from reel_buzz.instagram.validator import (
    UrlValidation,
    format_instagram_url,
    validate_instagram_url,
)

__all__ = [
    "DownloadRequest",
    "DownloadResult",
    "InstagramDownloader",
    "UrlValidation",
    "download_media_file",
    "format_instagram_url",
    "validate_instagram_url",
]
