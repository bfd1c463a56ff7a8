"""Data models for buzz analysis and generated content.

Models serialize with camelCase keys so API responses keep the field names
clients already consume (``buzzScore``, ``keyHooks`` ...). Python code uses
the snake_case attribute names.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Inputs -----------------------------------------------------------------


class Transcription(CamelModel):
    """Transcribed speech of a Reel."""

    text: str
    language: str | None = None
    duration: int | float | None = None
    confidence: float | None = None


class EngagementMetrics(CamelModel):
    """Current engagement numbers for a post."""

    likes: int | float | None = None
    comments: int | float | None = None
    shares: int | float | None = None
    views: int | float | None = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.likes, self.comments, self.shares, self.views))


class AccountInfo(CamelModel):
    """Context about the posting account."""

    follower_count: int | None = None
    avg_engagement_rate: float | None = None
    niche: str | None = None


class BuzzAnalysisOptions(BaseModel):
    """Options for the detailed buzz analysis."""

    content_type: str = "reel"
    current_metrics: EngagementMetrics | None = None
    account_info: AccountInfo | None = None
    include_competitor_analysis: bool = False


# --- Buzz analysis ----------------------------------------------------------


class KeyHook(CamelModel):
    """A phrase that grabs attention."""

    text: str = ""
    timestamp: str | None = None
    hook_type: str = ""
    strength: int | float | None = None


class TrendingTopic(CamelModel):
    """A topic the content rides on."""

    topic: str = ""
    relevance: int | float | None = None
    trend_strength: str | None = None


class ContentStructure(CamelModel):
    opening_strength: int | float = 5
    retention_factors: list[str] = Field(default_factory=list)
    call_to_action_present: bool = False
    pacing: str = "good"


class TargetAudience(CamelModel):
    primary_demographic: str = "General audience"
    age_range: str = "18-35"
    interests: list[str] = Field(default_factory=list)


class Recommendation(CamelModel):
    priority: str = "medium"
    category: str | None = None
    suggestion: str = ""
    expected_impact: str | None = None


class CompetitorAnalysis(CamelModel):
    similar_content_performance: str = ""
    differentiation_factors: list[str] = Field(default_factory=list)


class PredictedMetrics(CamelModel):
    estimated_views: str = "N/A"
    estimated_engagement_rate: str = "N/A"
    virality_probability: int | float = 50


class BuzzAnalysis(CamelModel):
    """Full buzz analysis of a transcription."""

    buzz_score: int | float
    sentiment: str = "neutral"
    viral_potential: str = "medium"
    key_hooks: list[KeyHook] = Field(default_factory=list)
    trending_topics: list[TrendingTopic] = Field(default_factory=list)
    content_structure: ContentStructure = Field(default_factory=ContentStructure)
    target_audience: TargetAudience = Field(default_factory=TargetAudience)
    recommendations: list[Recommendation] = Field(default_factory=list)
    competitor_analysis: CompetitorAnalysis | None = None
    predicted_metrics: PredictedMetrics = Field(default_factory=PredictedMetrics)


class SimplifiedBuzzAnalysis(CamelModel):
    """Compact buzz analysis with localized buzz factors."""

    buzz_score: int | float
    factors: list[str]
    sentiment: str
    key_themes: list[str]
    recommendations: list[str]


class BasicBuzzAnalysis(CamelModel):
    """General-content buzz analysis."""

    buzz_score: int | float
    sentiment: str = "neutral"
    key_themes: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    analysis: str = ""


def _item_text(item: Any, *keys: str) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in keys:
            value = item.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


def _as_models(items: list[Any], model: type[CamelModel], text_field: str) -> list[Any]:
    parsed = []
    for item in items:
        if isinstance(item, model):
            parsed.append(item)
            continue
        if isinstance(item, str):
            item = {text_field: item}
        if not isinstance(item, dict):
            continue
        try:
            parsed.append(model.model_validate(item))
        except ValidationError:
            continue
    return parsed


class BuzzSummary(CamelModel):
    """Buzz analysis as supplied to the content generators.

    Accepts the full analysis, the simplified shape or anything close to
    them. Only the buzz score is checked, and it must be a JSON number;
    the accessors below read the loosely typed fields.
    """

    buzz_score: StrictInt | StrictFloat
    sentiment: str | None = None
    viral_potential: str | None = None
    key_themes: list[Any] = Field(default_factory=list)
    key_hooks: list[Any] = Field(default_factory=list)
    trending_topics: list[Any] = Field(default_factory=list)
    recommendations: list[Any] = Field(default_factory=list)
    analysis: str | None = None
    target_audience: Any = None

    @property
    def sentiment_label(self) -> str:
        return self.sentiment or "neutral"

    def theme_texts(self) -> list[str]:
        return [t for t in (_item_text(i, "theme", "topic", "text") for i in self.key_themes) if t]

    def recommendation_texts(self) -> list[str]:
        """Recommendations as plain text; objects contribute their ``suggestion``."""
        texts = (_item_text(i, "suggestion", "text") for i in self.recommendations)
        return [t for t in texts if t]

    def hooks(self) -> list[KeyHook]:
        return _as_models(self.key_hooks, KeyHook, "text")

    def topics(self) -> list[TrendingTopic]:
        return _as_models(self.trending_topics, TrendingTopic, "topic")

    def audience(self) -> TargetAudience | None:
        if isinstance(self.target_audience, TargetAudience):
            return self.target_audience
        if not isinstance(self.target_audience, dict):
            return None
        try:
            return TargetAudience.model_validate(self.target_audience)
        except ValidationError:
            return None


class ContentValidation(CamelModel):
    """Platform-rule check of a generated piece of content."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] | None = None


# --- Captions ---------------------------------------------------------------

CaptionStyle = Literal[
    "storytelling", "educational", "promotional", "conversational", "inspirational", "humorous"
]


class CaptionOptions(BaseModel):
    style: CaptionStyle = "conversational"
    max_length: int = 2200
    hashtag_count: int = 25
    include_emojis: bool = True
    include_call_to_action: bool = True
    target_audience: str = "general Instagram users"
    brand_voice: str = "authentic and engaging"
    include_posting_time: bool = False


class InstagramCaption(CamelModel):
    caption: str
    hook: str
    hashtags: list[str]
    call_to_action: str = ""
    character_count: int
    hashtag_count: int
    estimated_engagement: Literal["low", "medium", "high", "very-high"] = "medium"
    style: CaptionStyle
    emoji_suggestions: list[str] | None = None
    posting_time_suggestion: str | None = None


class TopicCaption(CamelModel):
    caption: str
    hashtags: list[str] = Field(default_factory=list)
    call_to_action: str = ""
    estimated_engagement: str = "medium"


# --- Threads ----------------------------------------------------------------

ThreadsTone = Literal["professional", "casual", "funny", "inspirational", "educational"]


class ThreadsOptions(BaseModel):
    tone: ThreadsTone = "casual"
    max_length: int = 500
    include_hashtags: bool = True
    include_call_to_action: bool = True
    target_audience: str = "general Instagram users"


class ThreadsPost(CamelModel):
    text: str
    hashtags: list[str] = Field(default_factory=list)
    character_count: int
    estimated_engagement: Literal["low", "medium", "high"] = "medium"
    tone: str
    call_to_action: str | None = None


class TopicThread(CamelModel):
    thread: list[str]
    hashtags: list[str] = Field(default_factory=list)
    call_to_action: str = ""


# --- Reel scripts -----------------------------------------------------------

ScriptDuration = Literal[15, 30, 60, 90]
ScriptStyle = Literal["educational", "entertaining", "motivational", "tutorial", "storytelling"]


class ScriptOptions(BaseModel):
    duration: int = 30
    style: ScriptStyle = "entertaining"
    tone: str = "casual"
    target_audience: str = "general Instagram users"
    include_subtitles: bool = True
    complexity: str = "moderate"


class ScriptEmphasis(CamelModel):
    text: str = ""
    type: str = "emphasize"


class ScriptHook(CamelModel):
    text: str
    duration: int | float = 3
    visual_suggestion: str = "Eye-catching opening visual"
    on_screen_text: str | None = None


class ScriptSection(CamelModel):
    timestamp: str = "0:00-0:05"
    duration: int | float = 5
    type: str = "main"
    voiceover: str = ""
    visual_description: str = "Visual content"
    broll_suggestion: str | None = None
    emphasis: list[ScriptEmphasis] = Field(default_factory=list)
    on_screen_text: str | None = None


class ScriptCallToAction(CamelModel):
    text: str
    duration: int | float = 5
    visual_suggestion: str = "Strong closing visual"


class ScriptMetadata(CamelModel):
    total_word_count: int = 0
    estimated_pace: str = "150 words per minute"
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    equipment_needed: list[str] = Field(default_factory=lambda: ["smartphone camera"])
    target_audience: str = "General audience"


class MusicSuggestion(CamelModel):
    mood: str = "upbeat"
    tempo: Literal["slow", "medium", "fast"] = "medium"
    genres: list[str] = Field(default_factory=lambda: ["pop"])


class ReelScript(CamelModel):
    title: str
    duration: int | float
    hook: ScriptHook
    sections: list[ScriptSection]
    call_to_action: ScriptCallToAction
    metadata: ScriptMetadata = Field(default_factory=ScriptMetadata)
    music_suggestion: MusicSuggestion = Field(default_factory=MusicSuggestion)
    broll_list: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    caption: str = ""
    pacing_notes: list[str] = Field(default_factory=list)


class PacingBeat(CamelModel):
    time_range: str = ""
    description: str = ""
    voiceover: str | None = None


class TopicScript(CamelModel):
    script: str
    pacing: list[PacingBeat] = Field(default_factory=list)
    music_suggestion: str = ""
    transition_tips: list[str] = Field(default_factory=list)
