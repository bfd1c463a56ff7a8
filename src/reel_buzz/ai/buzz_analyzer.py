"""Buzz potential analysis of Instagram Reel transcriptions."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from reel_buzz.ai import prompts
from reel_buzz.ai.models import (
    BasicBuzzAnalysis,
    BuzzAnalysis,
    BuzzAnalysisOptions,
    EngagementMetrics,
    KeyHook,
    SimplifiedBuzzAnalysis,
    TrendingTopic,
)
from reel_buzz.ai.parsing import clamp, extract_json_array, extract_json_object
from reel_buzz.api.base import TextModel, get_text_model
from reel_buzz.errors import GenerationError, ResponseParseError

logger = logging.getLogger(__name__)

MAX_TRANSCRIPTION_LENGTH = 10000

HOOK_TYPE_LABELS = {
    "emotional": "感情的なフック",
    "curiosity": "好奇心を刺激",
    "shocking": "驚きの要素",
    "relatable": "共感できる内容",
    "educational": "教育的価値",
    "humorous": "ユーモア",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _require_text(transcription: str) -> None:
    if not transcription or not transcription.strip():
        raise ValueError("Transcription text cannot be empty")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_buzz_analysis(text: str) -> BuzzAnalysis:
    """Parse a detailed analysis response, filling defaults for missing parts.

    Raises:
        ResponseParseError: If the response has no usable JSON or buzz score.
    """
    try:
        parsed = extract_json_object(text)
        score = parsed.get("buzzScore")
        if not _is_number(score):
            raise ResponseParseError("Missing or invalid buzzScore")

        data: dict[str, Any] = {
            "buzzScore": clamp(score, 0, 100),
            "sentiment": parsed.get("sentiment") or "neutral",
            "viralPotential": parsed.get("viralPotential") or "medium",
        }
        for key in ("keyHooks", "trendingTopics", "recommendations"):
            value = parsed.get(key)
            data[key] = value if isinstance(value, list) else []
        for key in ("contentStructure", "targetAudience", "predictedMetrics", "competitorAnalysis"):
            if parsed.get(key):
                data[key] = parsed[key]

        return BuzzAnalysis.model_validate(data)
    except (ResponseParseError, ValidationError) as e:
        raise GenerationError("Failed to parse buzz analysis response", e) from e


def to_simplified_format(analysis: BuzzAnalysis) -> SimplifiedBuzzAnalysis:
    """Condense a full analysis into localized buzz factors and top themes."""
    factors = [HOOK_TYPE_LABELS.get(hook.hook_type, hook.hook_type) for hook in analysis.key_hooks[:5]]
    key_themes = [topic.topic for topic in analysis.trending_topics[:3]]
    recommendations = [
        rec.suggestion for rec in analysis.recommendations if rec.priority in ("high", "medium")
    ][:5]

    return SimplifiedBuzzAnalysis(
        buzz_score=analysis.buzz_score,
        factors=factors,
        sentiment=analysis.sentiment,
        key_themes=key_themes,
        recommendations=recommendations,
    )


class BuzzAnalyzer:
    """Scores transcriptions and content for viral potential."""

    def __init__(self, model: TextModel | None = None):
        """Initialize the analyzer.

        Args:
            model: Text model to query. Defaults to the configured provider.
        """
        self.model = model or get_text_model()

    async def analyze_buzz_potential(
        self,
        transcription: str,
        options: BuzzAnalysisOptions | None = None,
    ) -> BuzzAnalysis:
        """Run the detailed analysis of a Reel transcription.

        Args:
            transcription: Transcribed speech, up to 10,000 characters.
            options: Content type, metrics and account context.

        Returns:
            The full buzz analysis with defaults applied.

        Raises:
            ValueError: If the transcription is empty or too long.
            GenerationError: If the model call or parsing fails.
        """
        _require_text(transcription)
        if len(transcription) > MAX_TRANSCRIPTION_LENGTH:
            raise ValueError("Transcription text too long (max 10000 characters)")

        options = options or BuzzAnalysisOptions()
        prompt = prompts.build_buzz_analysis_prompt(transcription, options)

        try:
            response = await self.model.generate(prompt, temperature=0.3, max_tokens=4096)
            analysis = parse_buzz_analysis(response)
        except Exception as e:
            logger.error(f"Buzz analysis failed: {e}")
            raise GenerationError("Buzz analysis failed", e) from e

        logger.info(f"Buzz analysis complete: score={analysis.buzz_score}")
        return analysis

    async def quick_buzz_score(self, transcription: str) -> int:
        """Ask only for a 0-100 score."""
        _require_text(transcription)

        try:
            response = await self.model.generate(
                prompts.build_quick_score_prompt(transcription),
                temperature=0.2,
                max_tokens=10,
            )
            match = _LEADING_INT.match(response)
            if not match:
                raise ResponseParseError("Invalid score returned")
            return int(clamp(int(match.group(1)), 0, 100))
        except Exception as e:
            raise GenerationError("Quick buzz score failed", e) from e

    async def extract_key_hooks(self, transcription: str, max_hooks: int = 5) -> list[KeyHook]:
        """Pull the most compelling phrases from a transcription."""
        _require_text(transcription)

        try:
            response = await self.model.generate(
                prompts.build_key_hooks_prompt(transcription, max_hooks),
                temperature=0.4,
                max_tokens=1024,
            )
            hooks = extract_json_array(response)
            return [KeyHook.model_validate(hook) for hook in hooks[:max_hooks]]
        except Exception as e:
            raise GenerationError("Hook extraction failed", e) from e

    async def identify_trending_topics(self, transcription: str) -> list[TrendingTopic]:
        """Find topics that are currently viral or emerging."""
        _require_text(transcription)

        try:
            response = await self.model.generate(
                prompts.build_trending_topics_prompt(transcription),
                temperature=0.3,
                max_tokens=1024,
            )
            return [TrendingTopic.model_validate(topic) for topic in extract_json_array(response)]
        except Exception as e:
            raise GenerationError("Trending topic identification failed", e) from e

    async def analyze_transcript_simplified(
        self,
        transcription: str,
        content_type: str = "reel",
    ) -> SimplifiedBuzzAnalysis:
        analysis = await self.analyze_buzz_potential(
            transcription,
            BuzzAnalysisOptions(content_type=content_type),
        )
        return to_simplified_format(analysis)

    async def analyze_basic(
        self,
        content: str,
        metrics: EngagementMetrics | None = None,
    ) -> BasicBuzzAnalysis:
        """Analyze arbitrary post content, optionally with its current metrics."""
        response = await self.model.generate(
            prompts.build_basic_buzz_prompt(content, metrics),
            temperature=0.3,
            max_tokens=4096,
        )

        try:
            parsed = extract_json_object(response, "Could not extract JSON from response")
            score = parsed.get("buzzScore")
            if not _is_number(score):
                raise ResponseParseError("Missing or invalid buzzScore")
            return BasicBuzzAnalysis(
                buzz_score=clamp(score, 0, 100),
                sentiment=parsed.get("sentiment") or "neutral",
                key_themes=parsed.get("keyThemes") or [],
                recommendations=parsed.get("recommendations") or [],
                analysis=parsed.get("analysis") or "",
            )
        except (ResponseParseError, ValidationError) as e:
            raise GenerationError("Failed to parse buzz analysis response", e) from e
