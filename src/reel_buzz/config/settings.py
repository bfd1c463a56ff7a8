"""Application settings and configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings

DEFAULT_GEMINI_MODEL = "gemini-3-pro-preview"
DEFAULT_GEMINI_FALLBACK_MODEL = "gemini-2.5-flash"
DEFAULT_CLAUDE_MODEL = "claude-opus-4-1-20250805"
DEFAULT_WHISPER_MODEL = "whisper-1"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Gemini API
    gemini_api_key: str = Field(
        default="",
        description="Google AI API key for Gemini",
        validation_alias=AliasChoices("GOOGLE_AI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = Field(
        default=DEFAULT_GEMINI_MODEL,
        description="Primary Gemini model",
        validation_alias="GEMINI_MODEL",
    )
    gemini_fallback_model: str = Field(
        default=DEFAULT_GEMINI_FALLBACK_MODEL,
        description="Gemini model tried when the primary model fails",
        validation_alias="GEMINI_FALLBACK_MODEL",
    )

    # Anthropic Claude API
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key for Claude",
        validation_alias="ANTHROPIC_API_KEY",
    )
    claude_model: str = Field(
        default=DEFAULT_CLAUDE_MODEL,
        description="Claude model to use",
        validation_alias="CLAUDE_MODEL",
    )

    # Which text model backs the analyzers and generators
    ai_provider: Literal["gemini", "claude"] = Field(
        default="gemini",
        description="Text generation provider (gemini or claude)",
        validation_alias="AI_PROVIDER",
    )

    # OpenAI Whisper API
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key for Whisper transcription",
        validation_alias="OPENAI_API_KEY",
    )
    whisper_model: str = Field(
        default=DEFAULT_WHISPER_MODEL,
        description="Whisper model to use",
        validation_alias="WHISPER_MODEL",
    )
    whisper_language: str | None = Field(
        default=None,
        description="Default transcription language (ISO-639-1), detected when unset",
        validation_alias="WHISPER_LANGUAGE",
    )
    whisper_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for Whisper",
        validation_alias="WHISPER_TEMPERATURE",
    )

    # RapidAPI Instagram scraper
    rapidapi_key: str | None = Field(
        default=None,
        description="RapidAPI key for the Instagram scraper API",
        validation_alias="RAPIDAPI_KEY",
    )

    # Media tooling
    ytdlp_timeout_seconds: int = Field(
        default=30,
        description="Timeout for yt-dlp metadata lookups",
        validation_alias="YTDLP_TIMEOUT_SECONDS",
    )
    ytdlp_download_timeout_seconds: int = Field(
        default=120,
        description="Timeout for yt-dlp file downloads",
        validation_alias="YTDLP_DOWNLOAD_TIMEOUT_SECONDS",
    )
    media_download_timeout_seconds: int = Field(
        default=120,
        description="Timeout for fetching a resolved media URL before transcription",
        validation_alias="MEDIA_DOWNLOAD_TIMEOUT_SECONDS",
    )
    ffmpeg_binary: str = Field(
        default="ffmpeg",
        description="Path or name of the ffmpeg executable",
        validation_alias="FFMPEG_BINARY",
    )

    # Local storage
    temp_dir: str = Field(
        default=".tmp",
        description="Directory for temporary media files",
        validation_alias="TEMP_DIR",
    )
    download_dir: str = Field(
        default="downloads/videos",
        description="Directory for files downloaded with yt-dlp",
        validation_alias="DOWNLOAD_DIR",
    )

    # Timeouts
    api_timeout_seconds: int = Field(
        default=30,
        description="Outbound API request timeout",
        validation_alias="API_TIMEOUT_SECONDS",
    )

    # API Server
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
        validation_alias="API_HOST",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
        validation_alias="API_PORT",
    )
    api_debug: bool = Field(
        default=False,
        description="Enable debug mode",
        validation_alias="API_DEBUG",
    )

    # Authentication
    api_key_header: str = Field(
        default="X-API-Key",
        description="Header for API key",
        validation_alias="API_KEY_HEADER",
    )
    api_keys: str = Field(
        default="",
        description="Comma-separated valid API keys",
        validation_alias="API_KEYS",
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable rate limiting",
        validation_alias="RATE_LIMIT_ENABLED",
    )
    rate_limit_rpm: int = Field(
        default=60,
        description="Requests per minute per API key",
        validation_alias="RATE_LIMIT_RPM",
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated allowed CORS origins (* for all)",
        validation_alias="CORS_ORIGINS",
    )

    @model_validator(mode="after")
    def normalize_values(self) -> "Settings":
        """Strip secrets and fall back to defaults for blank optional values."""
        self.gemini_api_key = self.gemini_api_key.strip()
        self.anthropic_api_key = self.anthropic_api_key.strip()
        self.openai_api_key = self.openai_api_key.strip()
        if self.rapidapi_key is not None:
            self.rapidapi_key = self.rapidapi_key.strip() or None
        if self.whisper_language is not None:
            self.whisper_language = self.whisper_language.strip() or None

        self.gemini_model = self.gemini_model.strip() or DEFAULT_GEMINI_MODEL
        self.gemini_fallback_model = (
            self.gemini_fallback_model.strip() or DEFAULT_GEMINI_FALLBACK_MODEL
        )
        self.claude_model = self.claude_model.strip() or DEFAULT_CLAUDE_MODEL
        self.whisper_model = self.whisper_model.strip() or DEFAULT_WHISPER_MODEL
        self.ffmpeg_binary = self.ffmpeg_binary.strip() or "ffmpeg"
        self.temp_dir = self.temp_dir.strip() or ".tmp"
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
