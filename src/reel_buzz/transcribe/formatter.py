"""Rendering of Whisper transcriptions as text, Markdown, SRT and scripts."""

import math
import re
from typing import Any, Literal

from reel_buzz.ai.models import CamelModel
from reel_buzz.transcribe.whisper import TranscriptionResult

OutputFormat = Literal["text", "markdown", "srt", "script", "complete"]
OUTPUT_FORMATS: tuple[str, ...] = ("text", "markdown", "srt", "script", "complete")

SECONDS_PER_SENTENCE = 10

_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+")


class ScriptEntry(CamelModel):
    timestamp: str
    duration: float
    text: str


class FormattedTranscript(CamelModel):
    """Every rendering of a transcription at once."""

    raw: str
    markdown: str
    srt: str
    script: list[ScriptEntry]
    duration: float | None = None
    language: str | None = None
    summary: str | None = None


def format_time(seconds: float) -> str:
    """Format seconds as ``MM:SS``, or ``HH:MM:SS`` past the first hour."""
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)

    parts = [f"{minutes:02d}", f"{secs:02d}"]
    if hours > 0:
        parts.insert(0, f"{hours:02d}")
    return ":".join(parts)


def format_srt_time(seconds: float) -> str:
    """Format seconds as an SRT timestamp, ``HH:MM:SS,mmm``."""
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)
    millis = math.floor((seconds % 1) * 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def format_as_text(transcription: TranscriptionResult) -> str:
    return transcription.text.strip()


def format_as_markdown(transcription: TranscriptionResult, include_timestamps: bool = False) -> str:
    lines = []
    if transcription.language:
        lines.append(f"**Language**: {transcription.language}\n")
    if transcription.duration:
        lines.append(f"**Duration**: {format_time(transcription.duration)}\n")

    lines.append("## Transcript\n")
    if include_timestamps and transcription.segments:
        lines += [f"**{format_time(s.start)}** {s.text}" for s in transcription.segments]
    else:
        lines.append(transcription.text)

    return "\n".join(lines)


def _render_srt(entries: list[tuple[float, float, str]]) -> str:
    return "\n".join(
        f"{index}\n{format_srt_time(start)} --> {format_srt_time(end)}\n{text}\n"
        for index, (start, end, text) in enumerate(entries, start=1)
    )


def format_as_srt(transcription: TranscriptionResult, words_per_line: int = 10) -> str:
    """Render SRT subtitles, splitting each segment into chunks of words.

    Chunk times are interpolated across the segment by word position.
    Without segments, subtitles are derived from sentences of the text.
    """
    if not transcription.segments:
        return create_subtitles_from_text(transcription.text)

    entries = []
    for segment in transcription.segments:
        words = segment.text.split()
        span = segment.end - segment.start
        for i in range(0, len(words), words_per_line):
            end_index = min(i + words_per_line, len(words))
            entries.append(
                (
                    segment.start + (i / len(words)) * span,
                    segment.start + (end_index / len(words)) * span,
                    " ".join(words[i:end_index]),
                )
            )
    return _render_srt(entries)


def format_as_script(transcription: TranscriptionResult) -> list[ScriptEntry]:
    if not transcription.segments:
        return [
            ScriptEntry(
                timestamp="00:00:00",
                duration=transcription.duration or 0,
                text=transcription.text,
            )
        ]

    return [
        ScriptEntry(
            timestamp=format_time(segment.start),
            duration=segment.end - segment.start,
            text=segment.text.strip(),
        )
        for segment in transcription.segments
    ]


def create_subtitles_from_text(text: str) -> str:
    """Build SRT subtitles from plain text, 10 seconds per sentence."""
    sentences = _SENTENCE_PATTERN.findall(text) or [text]
    entries = []

    for index, sentence in enumerate(sentences):
        words = sentence.split()
        if not words:
            continue
        time_per_word = SECONDS_PER_SENTENCE / len(words)
        current = index * SECONDS_PER_SENTENCE

        for i in range(0, len(words), 10):
            chunk = words[i : i + 10]
            end = current + len(chunk) * time_per_word
            entries.append((current, end, " ".join(chunk)))
            current = end

    return _render_srt(entries)


def generate_summary(text: str, max_length: int = 300) -> str:
    """Take leading sentences while they fit in ``max_length``."""
    summary = ""
    for sentence in _SENTENCE_PATTERN.findall(text):
        if len(summary + sentence) > max_length:
            break
        summary += sentence
    return summary.strip() or text[:max_length]


def format_complete(
    transcription: TranscriptionResult,
    include_markdown_timestamps: bool = True,
    include_script: bool = True,
    include_summary: bool = True,
    summary_max_length: int = 300,
) -> FormattedTranscript:
    return FormattedTranscript(
        raw=format_as_text(transcription),
        markdown=format_as_markdown(transcription, include_markdown_timestamps),
        srt=format_as_srt(transcription),
        script=format_as_script(transcription) if include_script else [],
        duration=transcription.duration,
        language=transcription.language,
        summary=generate_summary(transcription.text, summary_max_length) if include_summary else None,
    )


def format_transcription(transcription: TranscriptionResult, output_format: str = "text") -> Any:
    """Render a transcription in the requested format as JSON-ready data.

    Unknown formats fall back to plain text.
    """
    if output_format == "markdown":
        return format_as_markdown(transcription, include_timestamps=True)
    if output_format == "srt":
        return format_as_srt(transcription)
    if output_format == "script":
        return [entry.to_dict() for entry in format_as_script(transcription)]
    if output_format == "complete":
        return format_complete(transcription).to_dict()
    return format_as_text(transcription)
