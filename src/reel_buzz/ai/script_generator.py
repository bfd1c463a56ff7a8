"""Instagram Reel script generation.

Scripts are built from a successful Reel's transcription and buzz analysis:
a 3 second hook, ~5 second main sections and a closing call-to-action,
paced at roughly 2.5 spoken words per second.
"""

import logging
from typing import Any

from pydantic import ValidationError

from reel_buzz.ai import prompts
from reel_buzz.ai.models import (
    BuzzSummary,
    ContentValidation,
    ReelScript,
    ScriptOptions,
    ScriptStyle,
    TopicScript,
    Transcription,
)
from reel_buzz.ai.parsing import extract_json_object
from reel_buzz.api.base import TextModel, get_text_model
from reel_buzz.errors import GenerationError, ResponseParseError

logger = logging.getLogger(__name__)

WORDS_PER_SECOND = 2.5
VARIATION_STYLES: tuple[ScriptStyle, ...] = ("entertaining", "educational", "motivational")


def expected_word_count(duration: int | float) -> int:
    return int(duration * WORDS_PER_SECOND)


def _section(raw: Any) -> dict[str, Any]:
    s = raw if isinstance(raw, dict) else {}
    return {
        "timestamp": s.get("timestamp") or "0:00-0:05",
        "duration": s.get("duration") or 5,
        "type": s.get("type") or "main",
        "voiceover": s.get("voiceover") or "",
        "visualDescription": s.get("visualDescription") or "Visual content",
        "brollSuggestion": s.get("brollSuggestion"),
        "emphasis": s.get("emphasis") if isinstance(s.get("emphasis"), list) else [],
        "onScreenText": s.get("onScreenText"),
    }


def _list_or(value: Any, default: list[Any]) -> list[Any]:
    return value if isinstance(value, list) else default


def parse_script_response(response: str, duration: int) -> ReelScript:
    """Parse a script response, filling defaults for optional parts.

    Raises:
        GenerationError: If the title, hook, sections or call-to-action is missing.
    """
    try:
        parsed = extract_json_object(response)

        title = parsed.get("title")
        if not title or not isinstance(title, str):
            raise ResponseParseError("Missing or invalid title")
        hook = parsed.get("hook")
        if not isinstance(hook, dict) or not hook.get("text"):
            raise ResponseParseError("Missing or invalid hook")
        sections = parsed.get("sections")
        if not isinstance(sections, list) or not sections:
            raise ResponseParseError("Missing or invalid sections")
        cta = parsed.get("callToAction")
        if not isinstance(cta, dict) or not cta.get("text"):
            raise ResponseParseError("Missing or invalid callToAction")

        metadata = parsed.get("metadata") if isinstance(parsed.get("metadata"), dict) else {}
        music = parsed.get("musicSuggestion") if isinstance(parsed.get("musicSuggestion"), dict) else {}

        return ReelScript.model_validate(
            {
                "title": title,
                "duration": parsed.get("duration") or duration,
                "hook": {
                    "text": hook["text"],
                    "duration": hook.get("duration") or 3,
                    "visualSuggestion": hook.get("visualSuggestion") or "Eye-catching opening visual",
                    "onScreenText": hook.get("onScreenText"),
                },
                "sections": [_section(s) for s in sections],
                "callToAction": {
                    "text": cta["text"],
                    "duration": cta.get("duration") or 5,
                    "visualSuggestion": cta.get("visualSuggestion") or "Strong closing visual",
                },
                "metadata": {
                    "totalWordCount": metadata.get("totalWordCount") or 0,
                    "estimatedPace": metadata.get("estimatedPace") or "150 words per minute",
                    "difficulty": metadata.get("difficulty")
                    if metadata.get("difficulty") in ("easy", "medium", "hard")
                    else "medium",
                    "equipmentNeeded": _list_or(metadata.get("equipmentNeeded"), ["smartphone camera"]),
                    "targetAudience": metadata.get("targetAudience") or "General audience",
                },
                "musicSuggestion": {
                    "mood": music.get("mood") or "upbeat",
                    "tempo": music.get("tempo") if music.get("tempo") in ("slow", "medium", "fast") else "medium",
                    "genres": _list_or(music.get("genres"), ["pop"]),
                },
                "brollList": _list_or(parsed.get("brollList"), []),
                "hashtags": _list_or(parsed.get("hashtags"), []),
                "caption": parsed.get("caption") or "",
                "pacingNotes": _list_or(parsed.get("pacingNotes"), []),
            }
        )
    except (ResponseParseError, ValidationError) as e:
        raise GenerationError("Failed to parse script response", e) from e


def format_script(script: ReelScript) -> str:
    """Render a script as a Markdown shooting document."""
    lines = [
        f"# {script.title}",
        "",
        f"**Duration:** {script.duration}s",
        f"**Style:** {script.metadata.difficulty} | **Pace:** {script.metadata.estimated_pace}",
        "",
        "## Hook (0:00-0:03)",
        f"**Voiceover:** {script.hook.text}",
        f"**Visual:** {script.hook.visual_suggestion}",
    ]
    if script.hook.on_screen_text:
        lines.append(f"**On-Screen Text:** {script.hook.on_screen_text}")
    lines += ["", "## Main Content", ""]

    for index, section in enumerate(script.sections, start=1):
        lines.append(f"### Section {index} ({section.timestamp})")
        lines.append(f"**Voiceover:** {section.voiceover}")
        lines.append(f"**Visual:** {section.visual_description}")
        if section.broll_suggestion:
            lines.append(f"**B-Roll:** {section.broll_suggestion}")
        if section.on_screen_text:
            lines.append(f"**On-Screen Text:** {section.on_screen_text}")
        if section.emphasis:
            emphasis = ", ".join(f"{e.text} ({e.type})" for e in section.emphasis)
            lines.append(f"**Emphasis:** {emphasis}")
        lines.append("")

    lines += [
        f"## Call to Action (Last {script.call_to_action.duration}s)",
        f"**Voiceover:** {script.call_to_action.text}",
        f"**Visual:** {script.call_to_action.visual_suggestion}",
        "",
        "## Music Suggestion",
        f"**Mood:** {script.music_suggestion.mood}",
        f"**Tempo:** {script.music_suggestion.tempo}",
        f"**Genres:** {', '.join(script.music_suggestion.genres)}",
        "",
    ]

    if script.broll_list:
        lines.append("## B-Roll Shots Needed")
        lines += [f"{i}. {shot}" for i, shot in enumerate(script.broll_list, start=1)]
        lines.append("")

    if script.pacing_notes:
        lines.append("## Pacing Notes")
        lines += [f"{i}. {note}" for i, note in enumerate(script.pacing_notes, start=1)]
        lines.append("")

    lines += [
        "## Caption",
        script.caption,
        "",
        "## Hashtags",
        " ".join(script.hashtags),
        "",
        "## Equipment Needed",
    ]
    lines += [f"{i}. {item}" for i, item in enumerate(script.metadata.equipment_needed, start=1)]

    return "\n".join(lines) + "\n"


def validate_script(script: ReelScript) -> ContentValidation:
    """Check structure, timing and pacing of a script."""
    errors: list[str] = []
    warnings: list[str] = []

    if not script.title:
        errors.append("Script title is required")
    if not script.hook.text:
        errors.append("Hook is required")
    if not script.sections:
        errors.append("At least one content section is required")
    if not script.call_to_action.text:
        errors.append("Call to action is required")

    total_time = (
        script.hook.duration
        + sum(section.duration for section in script.sections)
        + script.call_to_action.duration
    )
    if abs(total_time - script.duration) > 2:
        errors.append(
            f"Total section time ({total_time}s) doesn't match script duration ({script.duration}s)"
        )

    word_count = script.metadata.total_word_count
    if word_count == 0:
        warnings.append("Word count is 0, script may be incomplete")

    expected = expected_word_count(script.duration)
    if abs(word_count - expected) > expected * 0.3:
        warnings.append(
            f"Word count ({word_count}) significantly differs from expected ({expected}) "
            f"for {script.duration}s"
        )

    if len(script.hashtags) > 30:
        warnings.append(f"Too many hashtags ({len(script.hashtags)}), Instagram recommends 3-5")

    return ContentValidation(valid=not errors, errors=errors, warnings=warnings)


class ScriptGenerator:
    """Writes Reel scripts with the configured text model."""

    def __init__(self, model: TextModel | None = None):
        self.model = model or get_text_model()

    async def generate_reel_script(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        options: ScriptOptions | None = None,
    ) -> ReelScript:
        """Generate a new script inspired by an analyzed Reel.

        Args:
            transcription: Transcription of the source Reel.
            buzz: Buzz analysis of the source Reel.
            options: Target duration, style and audience.

        Raises:
            ValueError: If the transcription or analysis is missing.
            GenerationError: If the model call or parsing fails.
        """
        if transcription is None or not transcription.text or not transcription.text.strip():
            raise ValueError("Transcription text is required")
        if buzz is None:
            raise ValueError("Valid buzz analysis is required")

        options = options or ScriptOptions()
        prompt = prompts.build_script_prompt(transcription, buzz, options)

        try:
            response = await self.model.generate(prompt, temperature=0.7, max_tokens=8192)
            script = parse_script_response(response, options.duration)
        except Exception as e:
            logger.error(f"Script generation failed: {e}")
            raise GenerationError("Failed to generate Reel script", e) from e

        logger.info(f"Generated {script.duration}s script '{script.title}' with {len(script.sections)} sections")
        return script

    async def generate_script_variations(
        self,
        transcription: Transcription,
        buzz: BuzzSummary,
        count: int = 3,
        options: ScriptOptions | None = None,
    ) -> list[ReelScript]:
        if not 1 <= count <= 3:
            raise ValueError("Count must be between 1 and 3")

        options = options or ScriptOptions()
        return [
            await self.generate_reel_script(
                transcription, buzz, options.model_copy(update={"style": style})
            )
            for style in VARIATION_STYLES[:count]
        ]

    async def generate_from_topic(
        self,
        topic: str,
        duration: int = 30,
        style: str = "entertaining",
    ) -> TopicScript:
        """Write a paced script for a topic with no source Reel."""
        response = await self.model.generate(
            prompts.build_topic_script_prompt(topic, duration, style),
            temperature=0.7,
        )

        try:
            parsed = extract_json_object(response, "Could not extract JSON from response")
            return TopicScript.model_validate(parsed)
        except (ResponseParseError, ValidationError) as e:
            raise GenerationError("Failed to parse reel script response", e) from e
