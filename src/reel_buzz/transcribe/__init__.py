"""Whisper transcription and transcript formatting."""

from reel_buzz.transcribe.formatter import OUTPUT_FORMATS, format_transcription
from reel_buzz.transcribe.whisper import (
    TranscriptionResult,
    TranscriptionSegment,
    WhisperClient,
    create_whisper_client,
)

__all__ = [
    "OUTPUT_FORMATS",
    "TranscriptionResult",
    "TranscriptionSegment",
    "WhisperClient",
    "create_whisper_client",
    "format_transcription",
]
