"""Tests for the Whisper client and transcript formatting."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from reel_buzz.errors import TranscriptionError
from reel_buzz.transcribe.formatter import (
    create_subtitles_from_text,
    format_as_markdown,
    format_as_script,
    format_as_srt,
    format_srt_time,
    format_time,
    format_transcription,
    generate_summary,
)
from reel_buzz.transcribe.whisper import (
    WHISPER_API_URL,
    TranscriptionResult,
    TranscriptionSegment,
    WhisperClient,
    create_whisper_client,
)


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "clip.mp3"
    path.write_bytes(b"ID3audio")
    return path


@pytest.fixture
def mock_http():
    """Patch ``httpx.AsyncClient`` for the Whisper client; yields the inner client."""
    client = MagicMock()
    client.post = AsyncMock()
    with patch("reel_buzz.transcribe.whisper.httpx.AsyncClient") as client_cls:
        client_cls.return_value.__aenter__ = AsyncMock(return_value=client)
        client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
        yield client


def _response(status_code=200, payload=None, text="", reason="OK"):
    response = MagicMock(status_code=status_code, text=text, reason_phrase=reason)
    response.json.return_value = payload or {}
    return response


class TestWhisperClient:
    def test_requires_api_key(self):
        with pytest.raises(TranscriptionError, match="OPENAI_API_KEY is required"):
            WhisperClient(api_key="")

    @pytest.mark.asyncio
    async def test_transcribe_audio(self, audio_file, mock_http, tmp_path):
        mock_http.post.return_value = _response(
            payload={
                "text": "Hello there",
                "language": "english",
                "duration": 3.2,
                "segments": [{"id": 0, "start": 0, "end": 3.2, "text": " Hello there", "avg_logprob": -0.2}],
            }
        )
        client = WhisperClient(api_key="sk-test", model="whisper-1", language="en", temp_dir=str(tmp_path))

        result = await client.transcribe_audio(audio_file, verbose=True)

        assert result.text == "Hello there"
        assert result.language == "english"
        assert result.segments[0].avg_logprob == -0.2
        args, kwargs = mock_http.post.call_args
        assert args[0] == WHISPER_API_URL
        assert kwargs["headers"] == {"Authorization": "Bearer sk-test"}
        assert kwargs["data"]["response_format"] == "verbose_json"
        assert kwargs["data"]["language"] == "en"
        assert kwargs["files"]["file"][0] == "clip.mp3"

    @pytest.mark.asyncio
    async def test_text_format(self, audio_file, mock_http, tmp_path):
        mock_http.post.return_value = _response(text="  plain words \n")
        client = WhisperClient(api_key="sk-test", response_format="text", temp_dir=str(tmp_path))

        result = await client.transcribe_audio(audio_file)

        assert result.text == "plain words"
        assert "language" not in mock_http.post.call_args.kwargs["data"]

    @pytest.mark.asyncio
    async def test_api_error(self, audio_file, mock_http, tmp_path):
        mock_http.post.return_value = _response(
            status_code=400, payload={"error": {"message": "Invalid file format."}}, reason="Bad Request"
        )
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))

        with pytest.raises(TranscriptionError, match="Whisper API error: Invalid file format."):
            await client.transcribe_audio(audio_file)

    @pytest.mark.asyncio
    async def test_network_error(self, audio_file, mock_http, tmp_path):
        mock_http.post.side_effect = httpx.ConnectError("connection refused")
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))

        with pytest.raises(TranscriptionError, match="Failed to transcribe audio: connection refused"):
            await client.transcribe_audio(audio_file)

    @pytest.mark.asyncio
    async def test_missing_audio(self, tmp_path):
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))
        with pytest.raises(TranscriptionError, match="Audio file not found"):
            await client.transcribe_audio(tmp_path / "nope.mp3")

    @pytest.mark.asyncio
    async def test_transcribe_video_removes_audio(self, tmp_path):
        video = tmp_path / "reel.mp4"
        video.write_bytes(b"video")
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path / "work"))
        extracted = []

        async def fake_extract(video_path, output_path):
            output_path.write_bytes(b"audio")
            extracted.append(output_path)
            return output_path

        with (
            patch.object(client, "extract_audio_from_video", side_effect=fake_extract),
            patch.object(
                client, "transcribe_audio", AsyncMock(return_value=TranscriptionResult(text="hi"))
            ) as transcribe,
        ):
            result = await client.transcribe_video(video)

        assert result.text == "hi"
        transcribe.assert_awaited_once_with(extracted[0], False)
        assert not extracted[0].exists()

    @pytest.mark.asyncio
    async def test_extract_audio_missing_video(self, tmp_path):
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))
        with pytest.raises(TranscriptionError, match="Video file not found"):
            await client.extract_audio_from_video(tmp_path / "missing.mp4", tmp_path / "out.mp3")

    @pytest.mark.asyncio
    async def test_transcribe_video_ffmpeg_failure(self, tmp_path):
        video = tmp_path / "reel.mp4"
        video.write_bytes(b"video")
        work = tmp_path / "work"
        client = WhisperClient(api_key="sk-test", temp_dir=str(work))

        async def failing_ffmpeg(*args, **kwargs):
            # ffmpeg may leave a partial output behind before failing
            with open(args[-2], "wb") as f:
                f.write(b"partial")
            process = MagicMock(returncode=1)
            process.communicate = AsyncMock(return_value=(None, b"Invalid data found when processing input"))
            return process

        with patch(
            "reel_buzz.transcribe.whisper.asyncio.create_subprocess_exec", side_effect=failing_ffmpeg
        ) as spawn:
            with pytest.raises(TranscriptionError, match="Failed to extract audio: ffmpeg exited with code 1"):
                await client.transcribe_video(video)

        assert spawn.call_args.args[:3] == (client.ffmpeg_binary, "-i", str(video))
        assert list(work.iterdir()) == []

    @pytest.mark.asyncio
    async def test_extract_audio_ffmpeg_missing(self, tmp_path):
        video = tmp_path / "reel.mp4"
        video.write_bytes(b"video")
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))

        with patch(
            "reel_buzz.transcribe.whisper.asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("ffmpeg")),
        ):
            with pytest.raises(TranscriptionError, match="Failed to extract audio"):
                await client.extract_audio_from_video(video, tmp_path / "out.mp3")

    @pytest.mark.asyncio
    async def test_transcribe_multiple(self, audio_file, mock_http, tmp_path):
        mock_http.post.return_value = _response(payload={"text": "ok"})
        client = WhisperClient(api_key="sk-test", temp_dir=str(tmp_path))

        results = await client.transcribe_multiple([audio_file, tmp_path / "missing.wav"])

        assert [r.text for r in results] == ["ok", ""]


class TestTimeFormatting:
    def test_format_time(self):
        assert format_time(0) == "00:00"
        assert format_time(65.9) == "01:05"
        assert format_time(3725) == "01:02:05"

    def test_format_srt_time(self):
        assert format_srt_time(0) == "00:00:00,000"
        assert format_srt_time(3661.5) == "01:01:01,500"


class TestFormatters:
    @pytest.fixture
    def verbose(self):
        return TranscriptionResult(
            text="Hi there. Welcome back!",
            language="en",
            duration=65,
            segments=[
                TranscriptionSegment(start=0, end=4, text=" one two three"),
                TranscriptionSegment(start=4, end=6, text=" four"),
            ],
        )

    def test_markdown_with_timestamps(self, verbose):
        assert format_as_markdown(verbose, include_timestamps=True) == (
            "**Language**: en\n\n**Duration**: 01:05\n\n## Transcript\n\n"
            "**00:00**  one two three\n**00:04**  four"
        )

    def test_markdown_plain(self):
        result = TranscriptionResult(text="Just text")
        assert format_as_markdown(result) == "## Transcript\n\nJust text"

    def test_srt_splits_segments(self, verbose):
        srt = format_as_srt(verbose, words_per_line=2)
        assert srt == (
            "1\n00:00:00,000 --> 00:00:02,666\none two\n\n"
            "2\n00:00:02,666 --> 00:00:04,000\nthree\n\n"
            "3\n00:00:04,000 --> 00:00:06,000\nfour\n"
        )

    def test_subtitles_from_text(self):
        assert create_subtitles_from_text("Hello world. Bye!") == (
            "1\n00:00:00,000 --> 00:00:10,000\nHello world.\n\n"
            "2\n00:00:10,000 --> 00:00:20,000\nBye!\n"
        )

    def test_srt_without_segments_uses_sentences(self):
        result = TranscriptionResult(text="Hello world. Bye!")
        assert format_as_srt(result) == create_subtitles_from_text("Hello world. Bye!")

    def test_script_entries(self, verbose):
        entries = format_as_script(verbose)
        assert [(e.timestamp, e.duration, e.text) for e in entries] == [
            ("00:00", 4, "one two three"),
            ("00:04", 2, "four"),
        ]

    def test_script_without_segments(self):
        entries = format_as_script(TranscriptionResult(text="All of it", duration=12))
        assert len(entries) == 1
        assert entries[0].timestamp == "00:00:00"
        assert entries[0].duration == 12

    def test_summary(self):
        assert generate_summary("One. Two. Three.", max_length=10) == "One. Two."
        assert generate_summary("no punctuation here", max_length=5) == "no pu"

    def test_format_transcription(self, verbose):
        assert format_transcription(verbose) == "Hi there. Welcome back!"
        assert format_transcription(verbose, "unknown") == "Hi there. Welcome back!"
        assert format_transcription(verbose, "script")[0] == {
            "timestamp": "00:00",
            "duration": 4.0,
            "text": "one two three",
        }

        complete = format_transcription(verbose, "complete")
        assert complete["raw"] == "Hi there. Welcome back!"
        assert complete["language"] == "en"
        assert complete["summary"] == "Hi there. Welcome back!"
        assert complete["script"][1]["text"] == "four"


class TestCreateWhisperClient:
    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("WHISPER_LANGUAGE", "ja")
        monkeypatch.setenv("WHISPER_TEMPERATURE", "0.2")

        client = create_whisper_client()

        assert client.api_key == "sk-env"
        assert client.model == "whisper-1"
        assert client.language == "ja"
        assert client.temperature == 0.2

    def test_language_override(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        assert create_whisper_client(language="en").language == "en"

    def test_missing_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")
        with pytest.raises(TranscriptionError):
            create_whisper_client()
