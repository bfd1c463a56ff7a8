"""Reel download and transcription router."""

import logging
import shutil
import time
from pathlib import Path
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.responses import JSONResponse

from reel_buzz.config.settings import get_settings
from reel_buzz.errors import DownloadError
from reel_buzz.instagram.downloader import (
    DownloadRequest,
    InstagramDownloader,
    download_media_file,
    random_suffix,
)
from reel_buzz.transcribe.formatter import OUTPUT_FORMATS, format_transcription
from reel_buzz.transcribe.whisper import WhisperClient
from reel_buzz.web.dependencies import get_instagram_downloader
from reel_buzz.web.schemas.requests import TranscribeUrlRequest, read_json, validate_body
from reel_buzz.web.schemas.responses import APIException, error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reels", tags=["reels"])

QUALITIES = ("high", "medium", "low")
FORMATS = ("mp4", "webm")

SUPPORTED_AUDIO_TYPES = (
    "audio/mpeg",
    "audio/wav",
    "audio/mp4",
    "audio/m4a",
    "audio/aac",
    "audio/ogg",
    "audio/webm",
)
SUPPORTED_VIDEO_TYPES = (
    "video/mp4",
    "video/quicktime",
    "video/x-msvideo",
    "video/x-matroska",
)
SUPPORTED_TYPES = SUPPORTED_AUDIO_TYPES + SUPPORTED_VIDEO_TYPES

MAX_FILE_SIZE = 500 * 1024 * 1024
WHISPER_MAX_SIZE = 25 * 1024 * 1024


def generate_request_id() -> str:
    return f"req_{int(time.time() * 1000)}_{random_suffix()}"


def parse_download_request(body: Any) -> DownloadRequest:
    """Check a download body field by field.

    Raises:
        ValueError: Naming the first invalid field.
    """
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")

    url = body.get("url")
    if not url or not isinstance(url, str):
        raise ValueError("URL field is required and must be a string")

    quality = body.get("quality")
    if quality and quality not in QUALITIES:
        raise ValueError("Quality must be one of: high, medium, low")

    media_format = body.get("format")
    if media_format and media_format not in FORMATS:
        raise ValueError("Format must be one of: mp4, webm")

    return DownloadRequest(url=url, quality=quality or "high", format=media_format or "mp4")


def whisper_language(language: str | None) -> str | None:
    """Map the ``auto`` language hint to None so Whisper detects it."""
    if not language or language == "auto":
        return None
    return language


def _remove(path: Path | None) -> None:
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to clean up temp file {path}: {e}")


# --- Download ---------------------------------------------------------------


@router.post("/download")
async def download_reel(
    request: Request,
    downloader: InstagramDownloader = Depends(get_instagram_downloader),
) -> JSONResponse:
    """Resolve an Instagram Reel URL to its media URL and metadata."""
    request_id = generate_request_id()

    try:
        body = await request.json()
    except ValueError:
        return error_response("Invalid JSON in request body", 400, requestId=request_id)

    try:
        download_request = parse_download_request(body)
    except ValueError as e:
        return error_response(str(e), 400, requestId=request_id)

    try:
        result = await downloader.download(download_request)
    except Exception as e:
        logger.exception("Reel download error")
        return error_response(f"Internal server error: {e}", 500, requestId=request_id)

    if not result.success:
        return error_response(result.error or "Download failed", 400, requestId=request_id)

    data = {
        "url": result.media_url,
        "title": result.title,
        "description": result.description,
        "thumbnail": result.thumbnail,
        "duration": result.duration,
        "author": result.author,
        "mediaUrl": result.media_url,
        "fileName": result.file_name,
        "mediaType": result.media_type,
        "size": result.size,
    }
    return success_response(data, requestId=request_id)


@router.get("/download")
async def download_reel_docs() -> dict[str, Any]:
    """Describe the Reel download endpoint."""
    return {
        "endpoint": "/api/reels/download",
        "method": "POST",
        "description": "Resolve an Instagram Reel or post URL to its media URL and metadata",
        "request": {
            "url": "string - Instagram post, reel or TV URL (required)",
            "quality": "string (high|medium|low) - Optional (default: high)",
            "format": "string (mp4|webm) - Optional (default: mp4)",
        },
        "response": {
            "status": "success | error",
            "data": {
                "url": "string - Direct media URL",
                "title": "string",
                "description": "string",
                "thumbnail": "string",
                "duration": "number - Seconds",
                "author": "string",
                "mediaUrl": "string",
                "fileName": "string",
                "mediaType": "string",
                "size": "number | null",
            },
            "requestId": "string",
        },
    }


# --- Transcribe from URL ----------------------------------------------------


@router.post("/transcribe-url")
async def transcribe_url(request: Request) -> JSONResponse:
    """Download a media URL and transcribe it with Whisper."""
    body = await read_json(request)
    req = validate_body(TranscribeUrlRequest, body, "URL is required")

    settings = get_settings()
    if not settings.openai_api_key:
        return error_response("OpenAI API key is not configured", 500)

    temp_path: Path | None = None
    try:
        try:
            temp_path = await download_media_file(req.url)
        except (DownloadError, httpx.HTTPError, OSError) as e:
            return error_response(f"Failed to download video: {e}", 400)

        client = WhisperClient(
            api_key=settings.openai_api_key,
            model=settings.whisper_model,
            language=whisper_language(req.language),
            temperature=0,
            response_format="verbose_json",
        )
        transcription = await client.transcribe_video(temp_path, verbose=False)

        data = {
            "text": transcription.text,
            "transcription": transcription.text,
            "language": transcription.language,
            "duration": transcription.duration,
            "confidence": 0.95,
            "formatted": format_transcription(transcription, "text"),
        }
    except Exception as e:
        logger.exception("Transcription error")
        return error_response(str(e), 500)
    finally:
        _remove(temp_path)

    return success_response(data)


@router.get("/transcribe-url")
async def transcribe_url_docs() -> dict[str, Any]:
    """Describe the URL transcription endpoint."""
    return {
        "endpoint": "/api/reels/transcribe-url",
        "method": "POST",
        "description": "Transcribe Instagram Reel video from URL",
        "request": {
            "url": "string - Video URL (required)",
            "language": "string - Language code ('en', 'ja', 'auto') - Optional",
        },
        "response": {
            "status": "success | error",
            "data": {
                "text": "string - Transcribed text",
                "language": "string - Detected language",
                "duration": "number - Video duration in seconds",
                "confidence": "number - Confidence score (0-1)",
                "formatted": "string - Plain text rendering",
            },
        },
    }


# --- Transcribe upload ------------------------------------------------------


async def save_upload(request: Request) -> tuple[Path, UploadFile, str, bool, str | None]:
    """Validate a multipart upload and write the file under the temp directory.

    Returns:
        Saved path, the upload, output format, verbose flag and language.
    """
    try:
        form = await request.form()
    except Exception as e:
        raise APIException(400, "Failed to parse form data") from e

    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise APIException(400, "File is required")

    content_type = upload.content_type or ""
    if content_type not in SUPPORTED_TYPES:
        raise APIException(
            400,
            f"Unsupported file type: {content_type}. Supported types: {', '.join(SUPPORTED_TYPES)}",
        )

    if upload.size is not None and upload.size > MAX_FILE_SIZE:
        raise APIException(400, f"File too large. Maximum size is {MAX_FILE_SIZE // 1024 // 1024}MB")
    if upload.size is not None and upload.size > WHISPER_MAX_SIZE:
        logger.warning(
            f"File size ({upload.size / 1024 / 1024:.1f}MB) exceeds Whisper API limit "
            f"({WHISPER_MAX_SIZE // 1024 // 1024}MB). This may cause issues."
        )

    output_format = form.get("format") or "text"
    if output_format not in OUTPUT_FORMATS:
        raise APIException(400, "Invalid format parameter")

    verbose = form.get("verbose") == "true"
    language = form.get("language")
    if not isinstance(language, str):
        language = None

    temp_dir = Path(get_settings().temp_dir)
    suffix = Path(upload.filename or "").suffix
    path = temp_dir / f"{int(time.time() * 1000)}-{random_suffix(6)}{suffix}"
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as out:
            shutil.copyfileobj(upload.file, out)
    except OSError as e:
        path.unlink(missing_ok=True)
        raise APIException(400, "Failed to save uploaded file") from e

    return path, upload, output_format, verbose, language


@router.post("/transcribe")
async def transcribe_upload(request: Request) -> JSONResponse:
    """Transcribe an uploaded audio or video file."""
    started = time.perf_counter()
    path, upload, output_format, verbose, language = await save_upload(request)

    try:
        settings = get_settings()
        if not settings.openai_api_key:
            return error_response("OpenAI API key is not configured", 500)

        file_size = upload.size if upload.size is not None else path.stat().st_size
        client = WhisperClient(
            api_key=settings.openai_api_key,
            model=settings.whisper_model,
            language=whisper_language(language),
            temperature=0,
            response_format="verbose_json",
        )

        try:
            if upload.content_type in SUPPORTED_VIDEO_TYPES:
                transcription = await client.transcribe_video(path, verbose)
            else:
                transcription = await client.transcribe_audio(path, verbose)
        except Exception as e:
            raise RuntimeError(f"Transcription failed: {e}") from e

        data: dict[str, Any] = {
            "text": transcription.text,
            "language": transcription.language,
            "duration": transcription.duration,
            "format": output_format,
            "formatted": format_transcription(transcription, output_format),
        }
        if verbose:
            data["segments"] = [s.to_dict() for s in transcription.segments or []]
    except Exception as e:
        logger.exception("Transcription error")
        return error_response(str(e), 500)
    finally:
        _remove(path)

    return success_response(
        data,
        metadata={"fileSize": file_size, "processingTime": f"{time.perf_counter() - started:.2f}s"},
    )


@router.get("/transcribe")
async def transcribe_upload_docs() -> dict[str, Any]:
    """Describe the upload transcription endpoint."""
    return {
        "endpoint": "/api/reels/transcribe",
        "method": "POST",
        "description": "Transcribe an uploaded audio or video file with Whisper",
        "request": {
            "contentType": "multipart/form-data",
            "file": f"file - Required. Types: {', '.join(SUPPORTED_TYPES)}. Max 500MB",
            "format": f"string ({'|'.join(OUTPUT_FORMATS)}) - Optional (default: text)",
            "verbose": "'true' to include timestamped segments - Optional",
            "language": "string - ISO language code or 'auto' - Optional",
        },
        "response": {
            "status": "success | error",
            "data": {
                "text": "string",
                "language": "string",
                "duration": "number",
                "format": "string",
                "formatted": "Formatted transcript (string, list or object by format)",
                "segments": "array - Only when verbose is true",
            },
            "metadata": {"fileSize": "number", "processingTime": "string"},
        },
    }
