"""Instagram caption generation from Reel transcriptions and buzz analysis."""

import logging
import re

from pydantic import ValidationError

from reel_buzz.ai import prompts
from reel_buzz.ai.models import (
    BuzzSummary,
    CaptionOptions,
    CaptionStyle,
    ContentValidation,
    InstagramCaption,
    TopicCaption,
    Transcription,
)
from reel_buzz.ai.parsing import extract_json_object
from reel_buzz.api.base import TextModel, get_text_model
from reel_buzz.errors import GenerationError, ResponseParseError

logger = logging.getLogger(__name__)

INSTAGRAM_CAPTION_LIMIT = 2200
MAX_HASHTAGS = 30
ENGAGEMENT_LEVELS = ("low", "medium", "high", "very-high")
VARIATION_STYLES: tuple[CaptionStyle, ...] = ("conversational", "storytelling", "educational")

_HASHTAG_PATTERN = re.compile(r"#\w+")


def parse_caption_response(response: str, style: CaptionStyle) -> InstagramCaption:
    """Parse a caption response into an InstagramCaption.

    Raises:
        GenerationError: If required fields are missing or malformed.
    """
    try:
        parsed = extract_json_object(response)

        caption = parsed.get("caption")
        if not caption or not isinstance(caption, str):
            raise ResponseParseError("Missing or invalid caption field")
        hook = parsed.get("hook")
        if not hook or not isinstance(hook, str):
            raise ResponseParseError("Missing or invalid hook field")
        hashtags = parsed.get("hashtags")
        if not isinstance(hashtags, list):
            raise ResponseParseError("Missing or invalid hashtags field")

        engagement = parsed.get("estimatedEngagement")
        emojis = parsed.get("emojiSuggestions")
        return InstagramCaption(
            caption=caption,
            hook=hook,
            hashtags=[tag if tag.startswith("#") else f"#{tag}" for tag in hashtags],
            call_to_action=parsed.get("callToAction") or "",
            character_count=len(caption),
            hashtag_count=len(hashtags),
            estimated_engagement=engagement if engagement in ENGAGEMENT_LEVELS else "medium",
            style=style,
            emoji_suggestions=emojis if isinstance(emojis, list) else None,
            posting_time_suggestion=parsed.get("postingTimeSuggestion") or None,
        )
    except (ResponseParseError, ValidationError, AttributeError) as e:
        raise GenerationError("Failed to parse caption response", e) from e


def format_instagram_caption(caption: InstagramCaption, hashtags_on_new_line: bool = True) -> str:
    """Join caption text and hashtags into postable text."""
    formatted = caption.caption
    if caption.hashtags:
        separator = "\n\n" if hashtags_on_new_line else " "
        formatted += separator + " ".join(caption.hashtags)
    return formatted


def validate_instagram_caption(caption: InstagramCaption) -> ContentValidation:
    """Check a caption against Instagram's limits."""
    errors: list[str] = []
    warnings: list[str] = []

    if not caption.caption:
        errors.append("Caption text is required")
    elif len(caption.caption) > INSTAGRAM_CAPTION_LIMIT:
        errors.append(f"Caption exceeds 2,200 characters ({len(caption.caption)})")

    if caption.character_count != len(caption.caption):
        errors.append("Character count mismatch")

    if caption.hashtags:
        for index, tag in enumerate(caption.hashtags, start=1):
            if not tag.startswith("#"):
                errors.append(f"Hashtag {index} missing '#' prefix")
            if len(tag) > 100:
                errors.append(f"Hashtag {index} exceeds 100 characters")
            if " " in tag:
                errors.append(f"Hashtag {index} contains spaces")

        if len(caption.hashtags) > MAX_HASHTAGS:
            errors.append(f"Too many hashtags ({len(caption.hashtags)}, max 30)")
        if len(caption.hashtags) < 10:
            warnings.append(
                f"Consider using more hashtags for better reach (current: {len(caption.hashtags)})"
            )
    else:
        warnings.append("No hashtags provided - this may limit discoverability")

    if not caption.hook:
        warnings.append("No opening hook provided")
    if not caption.call_to_action:
        warnings.append("No call-to-action provided")

    return ContentValidation(valid=not errors, errors=errors, warnings=warnings)


def extract_hashtags(text: str) -> list[str]:
    return _HASHTAG_PATTERN.findall(text)


def calculate_optimal_posting_time(buzz: BuzzSummary) -> str:
    """Suggest a posting window from the target demographic."""
    demographic = ""
    audience = buzz.audience()
    if audience is not None:
        demographic = audience.primary_demographic.lower()

    if "professional" in demographic or "business" in demographic:
        return "Weekdays 12pm-1pm or 6pm-8pm (when professionals check social media)"
    if "student" in demographic or "young" in demographic:
        return "Weekdays 3pm-5pm or 8pm-10pm (after school/evening leisure time)"
    if "parent" in demographic or "family" in demographic:
        return "Weekdays 10am-12pm or 8pm-9pm (morning routine or after kids' bedtime)"
    return "Weekdays 11am-1pm or 7pm-9pm (peak Instagram engagement times)"


class CaptionGenerator:
    """Writes Instagram captions with the configured text model."""

    def __init__(self, model: TextModel | None = None):
        self.model = model or get_text_model()

    async def generate_instagram_caption(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        options: CaptionOptions | None = None,
    ) -> InstagramCaption:
        """Generate a caption for a Reel.

        Args:
            transcription: Transcribed speech of the Reel.
            buzz: Buzz analysis of the Reel.
            options: Style, length and hashtag settings.

        Returns:
            The caption, truncated to ``options.max_length`` if needed.

        Raises:
            ValueError: If the inputs or options are invalid.
            GenerationError: If the model call or parsing fails.
        """
        if not transcription.text or not transcription.text.strip():
            raise ValueError("Transcription text cannot be empty")
        if buzz is None:
            raise ValueError("Valid buzz analysis is required")

        options = options or CaptionOptions()
        if options.max_length > INSTAGRAM_CAPTION_LIMIT:
            raise ValueError("Instagram caption max length is 2,200 characters")
        if not 10 <= options.hashtag_count <= MAX_HASHTAGS:
            raise ValueError("Hashtag count must be between 10 and 30")

        prompt = prompts.build_caption_prompt(transcription, buzz, options)

        try:
            response = await self.model.generate(prompt, temperature=0.8, max_tokens=4096)
            caption = parse_caption_response(response, options.style)
        except Exception as e:
            logger.error(f"Caption generation failed: {e}")
            raise GenerationError("Failed to generate Instagram caption", e) from e

        if len(caption.caption) > options.max_length:
            caption.caption = caption.caption[: options.max_length - 3] + "..."
            caption.character_count = len(caption.caption)

        return caption

    async def generate_caption_variations(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        count: int = 3,
        options: CaptionOptions | None = None,
    ) -> list[InstagramCaption]:
        """Generate one caption per style, in order, for up to three styles."""
        if not 1 <= count <= 3:
            raise ValueError("Variation count must be between 1 and 3")

        options = options or CaptionOptions()
        variations = []
        for style in VARIATION_STYLES[:count]:
            variations.append(
                await self.generate_instagram_caption(
                    transcription, buzz, options.model_copy(update={"style": style})
                )
            )
        return variations

    async def generate_from_topic(
        self,
        topic: str,
        image_type: str = "portrait",
        tone: str = "casual",
        include_hashtags: bool = True,
    ) -> TopicCaption:
        """Write a short caption for a topic with no transcription."""
        response = await self.model.generate(
            prompts.build_topic_caption_prompt(topic, image_type, tone, include_hashtags),
            temperature=0.8,
        )

        try:
            parsed = extract_json_object(response, "Could not extract JSON from response")
            return TopicCaption.model_validate(parsed)
        except (ResponseParseError, ValidationError) as e:
            raise GenerationError("Failed to parse caption generation response", e) from e
