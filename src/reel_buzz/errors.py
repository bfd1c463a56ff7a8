"""Error types raised by the AI, download and transcription layers."""


class ReelBuzzError(Exception):
    """Base error for all reel_buzz exceptions."""


class AIClientError(ReelBuzzError):
    """Raised when a text model provider call fails or is misconfigured."""


class ResponseParseError(ReelBuzzError):
    """Raised when model output cannot be turned into the expected structure."""


class GenerationError(ReelBuzzError):
    """Raised by analyzers and generators, wrapping the underlying failure."""

    def __init__(self, prefix: str, cause: BaseException | str) -> None:
        self.prefix = prefix
        super().__init__(f"{prefix}: {cause}")


class DownloadError(ReelBuzzError):
    """Raised when media cannot be fetched."""


class TranscriptionError(ReelBuzzError):
    """Raised when audio extraction or Whisper transcription fails."""
