"""Instagram media lookup and download through yt-dlp."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any

import yt_dlp
from pydantic import BaseModel

from reel_buzz.config.settings import get_settings

logger = logging.getLogger(__name__)


class YtDlpResult(BaseModel):
    """Metadata extracted by yt-dlp."""

    success: bool
    url: str | None = None
    title: str | None = None
    uploader: str | None = None
    thumbnail: str | None = None
    duration: float | None = None
    description: str | None = None
    error: str | None = None


class YtDlpDownloadResult(YtDlpResult):
    """Metadata plus the location of the downloaded file."""

    file_path: str | None = None
    file_size: int | None = None


def _info_fields(info: dict[str, Any]) -> dict[str, Any]:
    formats = info.get("formats") or [{}]
    return {
        "url": info.get("url") or formats[0].get("url"),
        "title": info.get("title"),
        "uploader": info.get("uploader") or info.get("uploader_id"),
        "thumbnail": info.get("thumbnail"),
        "duration": info.get("duration"),
        "description": info.get("description"),
    }


def _extract_info(url: str, opts: dict[str, Any], download: bool) -> dict[str, Any]:
    with yt_dlp.YoutubeDL(opts) as ydl:
        info = ydl.extract_info(url, download=download)
    return ydl.sanitize_info(info)


async def fetch_metadata(url: str, timeout: float | None = None) -> YtDlpResult:
    """Look up media metadata without downloading.

    Args:
        url: Instagram media URL.
        timeout: Seconds to wait. Defaults to settings.

    Returns:
        Result with ``success=False`` and an error message on failure.
    """
    timeout = timeout or get_settings().ytdlp_timeout_seconds
    opts = {"quiet": True, "no_warnings": True, "skip_download": True}

    loop = asyncio.get_running_loop()
    try:
        info = await asyncio.wait_for(
            loop.run_in_executor(None, _extract_info, url, opts, False),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        return YtDlpResult(success=False, error=f"yt-dlp timeout after {timeout:g} seconds")
    except yt_dlp.utils.YoutubeDLError as e:
        logger.warning(f"yt-dlp metadata lookup failed for {url}: {e}")
        return YtDlpResult(success=False, error=f"yt-dlp execution failed: {e}")

    return YtDlpResult(success=True, **_info_fields(info))


async def download_file(
    url: str,
    output_dir: str | None = None,
    timeout: float | None = None,
) -> YtDlpDownloadResult:
    """Download media to ``output_dir``, preferring mp4.

    The file is named ``<id>_<ms>.<ext>``. If yt-dlp picks another name,
    the first file in the directory containing the media ID is used.
    """
    settings = get_settings()
    timeout = timeout or settings.ytdlp_download_timeout_seconds
    directory = Path(output_dir or settings.download_dir).resolve()
    directory.mkdir(parents=True, exist_ok=True)

    timestamp = int(time.time() * 1000)
    opts = {
        "quiet": True,
        "no_warnings": True,
        "format": "best[ext=mp4]/best",
        "noplaylist": True,
        "outtmpl": str(directory / f"%(id)s_{timestamp}.%(ext)s"),
    }

    loop = asyncio.get_running_loop()
    try:
        info = await asyncio.wait_for(
            loop.run_in_executor(None, _extract_info, url, opts, True),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        return YtDlpDownloadResult(
            success=False, error=f"yt-dlp download timeout after {timeout:g} seconds"
        )
    except yt_dlp.utils.YoutubeDLError as e:
        logger.warning(f"yt-dlp download failed for {url}: {e}")
        return YtDlpDownloadResult(success=False, error=f"yt-dlp download failed: {e}")

    video_id = info.get("id") or "unknown"
    file_path = directory / f"{video_id}_{timestamp}.{info.get('ext') or 'mp4'}"
    if not file_path.exists():
        file_path = next((p for p in sorted(directory.iterdir()) if video_id in p.name), None)
        if file_path is None:
            return YtDlpDownloadResult(success=False, error="Download completed but file not found")

    logger.info(f"Downloaded {url} to {file_path}")
    return YtDlpDownloadResult(
        success=True,
        file_path=str(file_path),
        file_size=file_path.stat().st_size,
        **_info_fields(info),
    )
