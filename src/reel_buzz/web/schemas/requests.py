"""Request schemas for the API.

Bodies use camelCase keys. Each model's validator enforces the
cross-field rules of its endpoint; the router maps any validation
failure to that endpoint's 400 message.
"""

from typing import Any

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from reel_buzz.ai.models import (
    AccountInfo,
    BuzzSummary,
    EngagementMetrics,
    ScriptStyle,
    ThreadsTone,
    Transcription,
)
from reel_buzz.ai.parsing import topic_from_request
from reel_buzz.web.schemas.responses import APIException

MAX_ANALYSIS_LENGTH = 10000
MAX_TOPIC_LENGTH = 500
SCRIPT_DURATIONS = (15, 30, 60, 90)


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


async def read_json(request: Request) -> Any:
    """Decode the request body as JSON, raising a 400 when it is not JSON."""
    try:
        return await request.json()
    except ValueError as e:
        raise APIException(400, "Invalid JSON in request body") from e


def validate_body(model: type[RequestModel], body: Any, message: str) -> Any:
    """Validate a decoded JSON body, raising a 400 with ``message`` on failure."""
    if not isinstance(body, dict):
        raise APIException(400, message)
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise APIException(400, message) from e


class BuzzAnalysisRequest(RequestModel):
    """Body of ``POST /api/analyze/buzz``."""

    content: str | None = None
    transcription: str | None = None
    likes: int | float | None = None
    comments: int | float | None = None
    shares: int | float | None = None
    views: int | float | None = None
    hashtags: list[str] | None = None
    content_type: str | None = None
    analysis_mode: str | None = None
    account_info: AccountInfo | None = None

    @model_validator(mode="after")
    def check_text(self) -> "BuzzAnalysisRequest":
        if not self.content and not self.transcription:
            raise ValueError("content or transcription is required")
        if len(self.text) > MAX_ANALYSIS_LENGTH:
            raise ValueError("text exceeds 10000 characters")
        return self

    @property
    def text(self) -> str:
        """Text to analyze; transcription is preferred over content."""
        return self.transcription or self.content or ""

    @property
    def normalized_content_type(self) -> str:
        if self.content_type in ("reel", "story"):
            return self.content_type
        return "post"

    def engagement_metrics(self) -> EngagementMetrics:
        return EngagementMetrics(
            likes=self.likes, comments=self.comments, shares=self.shares, views=self.views
        )


class TopicRequest(RequestModel):
    """Fields shared by the topic-based generation endpoints."""

    topic: str | None = None
    url: str | None = None
    content: str | None = None

    @property
    def has_topic_input(self) -> bool:
        has_topic = bool(self.topic) and len(self.topic or "") <= MAX_TOPIC_LENGTH
        return has_topic or bool(self.url) or bool(self.content)

    def resolved_topic(self) -> str:
        return topic_from_request(self.topic, self.url, self.content)


class CaptionRequest(TopicRequest):
    """Body of ``POST /api/generate/caption``."""

    image_type: str | None = None
    tone: str | None = None
    include_hashtags: bool | None = None
    max_length: float | None = None

    @model_validator(mode="after")
    def check_inputs(self) -> "CaptionRequest":
        if not self.has_topic_input:
            raise ValueError("topic, url or content is required")
        if self.max_length and self.max_length <= 0:
            raise ValueError("maxLength must be positive")
        return self


class AnalyzedReelRequest(TopicRequest):
    """Generation request accepting a transcription plus buzz analysis, or a topic."""

    transcription: Transcription | None = None
    buzz_analysis: BuzzSummary | None = None
    target_audience: str | None = None
    generate_variations: bool = False
    variation_count: int | None = Field(default=None)

    @property
    def uses_analysis(self) -> bool:
        return bool(self.transcription and self.transcription.text) and self.buzz_analysis is not None

    @property
    def variation_total(self) -> int:
        return min(max(self.variation_count or 3, 1), 3)

    @model_validator(mode="after")
    def check_inputs(self) -> "AnalyzedReelRequest":
        if not self.uses_analysis and not self.has_topic_input:
            raise ValueError("transcription and buzzAnalysis, or topic/url/content, is required")
        return self


class ThreadsRequest(AnalyzedReelRequest):
    """Body of ``POST /api/generate/threads``."""

    tone: ThreadsTone | None = None
    style: str | None = None
    max_length: int | None = None
    include_hashtags: bool | None = None
    include_call_to_action: bool | None = None


class ScriptRequest(AnalyzedReelRequest):
    """Body of ``POST /api/generate/script``."""

    duration: int | None = None
    style: ScriptStyle | None = None
    tone: str | None = None
    include_subtitles: bool | None = None
    complexity: str | None = None
    platform: str | None = None

    @model_validator(mode="after")
    def check_duration(self) -> "ScriptRequest":
        if self.duration and self.duration not in SCRIPT_DURATIONS:
            raise ValueError("duration must be 15, 30, 60 or 90")
        return self


class TranscribeUrlRequest(RequestModel):
    """Body of ``POST /api/reels/transcribe-url``."""

    url: str = Field(min_length=1)
    language: str | None = None
