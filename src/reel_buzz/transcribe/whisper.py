"""OpenAI Whisper transcription of audio and video files."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Literal

import httpx
from pydantic import Field

from reel_buzz.ai.models import CamelModel
from reel_buzz.config.settings import get_settings
from reel_buzz.errors import TranscriptionError

logger = logging.getLogger(__name__)

WHISPER_API_URL = "https://api.openai.com/v1/audio/transcriptions"
VIDEO_EXTENSIONS = frozenset({".mp4", ".mov", ".avi", ".mkv"})

ResponseFormat = Literal["json", "text", "verbose_json"]


class TranscriptionSegment(CamelModel):
    """A timed segment from a verbose Whisper response."""

    id: int = 0
    seek: int = 0
    start: float = 0
    end: float = 0
    text: str = ""
    tokens: list[int] = Field(default_factory=list)
    temperature: float = 0
    avg_logprob: float = 0
    compression_ratio: float = 0
    no_speech_prob: float = 0


class TranscriptionResult(CamelModel):
    text: str
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptionSegment] | None = None


class WhisperClient:
    """Client for the Whisper transcription API."""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        language: str | None = None,
        temperature: float = 0,
        response_format: ResponseFormat = "json",
        ffmpeg_binary: str | None = None,
        temp_dir: str | None = None,
        timeout: float = 300,
    ):
        """Initialize the Whisper client.

        Args:
            api_key: OpenAI API key.
            model: Whisper model name. Defaults to settings.
            language: ISO language hint; None lets Whisper detect it.
            temperature: Sampling temperature.
            response_format: Default response format.
            ffmpeg_binary: ffmpeg executable for audio extraction. Defaults to settings.
            temp_dir: Directory for extracted audio. Defaults to settings.
            timeout: Upload timeout in seconds.

        Raises:
            TranscriptionError: If no API key is given.
        """
        if not api_key:
            raise TranscriptionError("OPENAI_API_KEY is required for Whisper API")

        settings = get_settings()
        self.api_key = api_key
        self.model = model or settings.whisper_model
        self.language = language
        self.temperature = temperature
        self.response_format = response_format
        self.ffmpeg_binary = ffmpeg_binary or settings.ffmpeg_binary
        self.temp_dir = Path(temp_dir or settings.temp_dir)
        self.timeout = timeout

    async def extract_audio_from_video(self, video_path: str | Path, output_path: str | Path) -> Path:
        """Extract the audio track of a video to an mp3 file with ffmpeg."""
        video_path, output_path = Path(video_path), Path(output_path)
        if not video_path.exists():
            raise TranscriptionError(f"Video file not found: {video_path}")

        try:
            process = await asyncio.create_subprocess_exec(
                self.ffmpeg_binary,
                "-i",
                str(video_path),
                "-q:a",
                "0",
                "-map",
                "a",
                str(output_path),
                "-y",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate()

            if process.returncode != 0:
                raise TranscriptionError(
                    f"ffmpeg exited with code {process.returncode}: "
                    f"{stderr.decode(errors='replace').strip()[-500:]}"
                )
            if not output_path.exists():
                raise TranscriptionError("Failed to extract audio from video")
        except (TranscriptionError, OSError) as e:
            raise TranscriptionError(f"Failed to extract audio: {e}") from e

        return output_path

    async def transcribe_audio(self, audio_path: str | Path, verbose: bool = False) -> TranscriptionResult:
        """Upload an audio file to Whisper.

        Args:
            audio_path: Path to the audio file.
            verbose: Request ``verbose_json`` to get timed segments.

        Raises:
            TranscriptionError: If the file is missing or the API call fails.
        """
        audio_path = Path(audio_path)
        if not audio_path.exists():
            raise TranscriptionError(f"Audio file not found: {audio_path}")

        response_format = "verbose_json" if verbose else self.response_format
        data: dict[str, Any] = {
            "model": self.model,
            "temperature": str(self.temperature),
            "response_format": response_format,
        }
        if self.language:
            data["language"] = self.language

        try:
            files = {"file": (audio_path.name, audio_path.read_bytes(), "audio/mpeg")}
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    WHISPER_API_URL,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    data=data,
                    files=files,
                )

            if response.status_code >= 400:
                try:
                    message = (response.json().get("error") or {}).get("message")
                except ValueError:
                    message = None
                raise TranscriptionError(f"Whisper API error: {message or response.reason_phrase}")

            if response_format == "text":
                return TranscriptionResult(text=response.text.strip())

            result = response.json()
            return TranscriptionResult(
                text=result.get("text", ""),
                language=result.get("language"),
                duration=result.get("duration"),
                segments=result.get("segments"),
            )
        except (TranscriptionError, httpx.HTTPError, OSError, ValueError) as e:
            raise TranscriptionError(f"Failed to transcribe audio: {e}") from e

    async def transcribe_video(self, video_path: str | Path, verbose: bool = False) -> TranscriptionResult:
        """Extract a video's audio and transcribe it.

        The intermediate audio file is always removed.
        """
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        audio_path = self.temp_dir / f"audio-{int(time.time() * 1000)}.mp3"

        try:
            await self.extract_audio_from_video(video_path, audio_path)
            return await self.transcribe_audio(audio_path, verbose)
        finally:
            try:
                audio_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Failed to clean up temp file {audio_path}: {e}")

    async def transcribe_multiple(
        self,
        file_paths: list[str | Path],
        verbose: bool = False,
    ) -> list[TranscriptionResult]:
        """Transcribe files in order; a failed file yields an empty result."""
        results = []
        for file_path in file_paths:
            path = Path(file_path)
            try:
                if path.suffix.lower() in VIDEO_EXTENSIONS:
                    results.append(await self.transcribe_video(path, verbose))
                else:
                    results.append(await self.transcribe_audio(path, verbose))
            except TranscriptionError as e:
                logger.error(f"Error transcribing {path}: {e}")
                results.append(TranscriptionResult(text=""))
        return results


def create_whisper_client(language: str | None = None) -> WhisperClient:
    """Create a client from settings.

    Args:
        language: Overrides the configured language hint.
    """
    settings = get_settings()
    return WhisperClient(
        api_key=settings.openai_api_key,
        model=settings.whisper_model,
        language=language or settings.whisper_language,
        temperature=settings.whisper_temperature,
    )
