"""Threads post generation from Reel transcriptions and buzz analysis."""

import logging

from pydantic import ValidationError

from reel_buzz.ai import prompts
from reel_buzz.ai.models import (
    BuzzSummary,
    ContentValidation,
    ThreadsOptions,
    ThreadsPost,
    ThreadsTone,
    TopicThread,
    Transcription,
)
from reel_buzz.ai.parsing import extract_json_object
from reel_buzz.api.base import TextModel, get_text_model
from reel_buzz.errors import GenerationError, ResponseParseError

logger = logging.getLogger(__name__)

THREADS_POST_LIMIT = 500
MAX_POST_HASHTAGS = 5
VARIATION_TONES: tuple[ThreadsTone, ...] = ("casual", "professional", "inspirational")


def format_threads_post(post: ThreadsPost) -> str:
    """Render a post with its hashtags and call-to-action."""
    formatted = post.text
    if post.hashtags:
        formatted += "\n\n" + " ".join(post.hashtags)
    if post.call_to_action:
        formatted += "\n\n" + post.call_to_action
    return formatted


def validate_threads_post(post: ThreadsPost) -> ContentValidation:
    errors: list[str] = []

    if not post.text:
        errors.append("Post text is required")
    elif len(post.text) > THREADS_POST_LIMIT:
        errors.append(f"Post text exceeds 500 characters ({len(post.text)})")

    if post.character_count != len(post.text):
        errors.append("Character count mismatch")

    for index, tag in enumerate(post.hashtags, start=1):
        if not tag.startswith("#"):
            errors.append(f"Hashtag {index} missing '#' prefix")
        if len(tag) > 50:
            errors.append(f"Hashtag {index} exceeds 50 characters")
    if len(post.hashtags) > 10:
        errors.append(f"Too many hashtags ({len(post.hashtags)}, max 10)")

    return ContentValidation(valid=not errors, errors=errors)


class ThreadsGenerator:
    """Writes Threads posts with the configured text model."""

    def __init__(self, model: TextModel | None = None):
        self.model = model or get_text_model()

    async def generate_threads_post(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        options: ThreadsOptions | None = None,
    ) -> ThreadsPost:
        """Generate a single Threads post.

        Raises:
            GenerationError: If the model call fails or returns no post text.
        """
        options = options or ThreadsOptions()
        prompt = prompts.build_threads_prompt(transcription, buzz, options)

        try:
            response = await self.model.generate(prompt, temperature=0.8, max_tokens=2048)
            parsed = extract_json_object(response, "No JSON found in AI response")

            text = parsed.get("text")
            if not text or not isinstance(text, str):
                raise ResponseParseError("Invalid response: missing or invalid text field")
            if len(text) > options.max_length:
                text = text[: options.max_length - 3] + "..."

            hashtags = parsed.get("hashtags")
            engagement = parsed.get("estimatedEngagement")
            cta = parsed.get("callToAction")
            return ThreadsPost(
                text=text,
                hashtags=hashtags[:MAX_POST_HASHTAGS]
                if options.include_hashtags and isinstance(hashtags, list)
                else [],
                character_count=len(text),
                estimated_engagement=engagement if engagement in ("low", "medium", "high") else "medium",
                tone=options.tone,
                call_to_action=cta if options.include_call_to_action and cta else None,
            )
        except Exception as e:
            logger.error(f"Threads generation failed: {e}")
            raise GenerationError("Failed to generate Threads post", e) from e

    async def generate_threads_variations(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        count: int = 3,
        options: ThreadsOptions | None = None,
    ) -> list[ThreadsPost]:
        """Generate posts in casual, professional and inspirational tones."""
        if not 1 <= count <= 3:
            raise ValueError("Count must be between 1 and 3")

        options = options or ThreadsOptions()
        return [
            await self.generate_threads_post(
                transcription, buzz, options.model_copy(update={"tone": tone})
            )
            for tone in VARIATION_TONES[:count]
        ]

    async def generate_from_topic(
        self,
        topic: str,
        tone: str = "casual",
        style: str = "storytelling",
    ) -> TopicThread:
        """Write a multi-part thread about a topic."""
        response = await self.model.generate(
            prompts.build_topic_thread_prompt(topic, tone, style),
            temperature=0.8,
        )

        try:
            parsed = extract_json_object(response, "Could not extract JSON from response")
            return TopicThread.model_validate(parsed)
        except (ResponseParseError, ValidationError) as e:
            raise GenerationError("Failed to parse thread generation response", e) from e
