"""Content generation router: captions, Threads posts and Reel scripts.

The Threads and script endpoints accept two request shapes. A
transcription plus buzz analysis produces a structured post or script;
otherwise a topic is derived from ``topic``, ``url`` or ``content`` and a
shorter topic-based result is returned.
"""

import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from reel_buzz.ai.caption_generator import CaptionGenerator
from reel_buzz.ai.models import ScriptOptions, ThreadsOptions
from reel_buzz.ai.parsing import count_words
from reel_buzz.ai.script_generator import ScriptGenerator, format_script, validate_script
from reel_buzz.ai.threads_generator import (
    ThreadsGenerator,
    format_threads_post,
    validate_threads_post,
)
from reel_buzz.web.dependencies import (
    get_caption_generator,
    get_script_generator,
    get_threads_generator,
)
from reel_buzz.web.schemas.requests import (
    CaptionRequest,
    ScriptRequest,
    ThreadsRequest,
    read_json,
    validate_body,
)
from reel_buzz.web.schemas.responses import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate", tags=["generate"])

INVALID_CAPTION_BODY = "Invalid request body. Required: topic, url, or content (at least one)"
INVALID_THREADS_BODY = (
    "Invalid request body. Required: (transcription + buzzAnalysis) OR (topic/url/content)"
)
INVALID_SCRIPT_BODY = (
    "Invalid request body. Required: (transcription + buzzAnalysis) OR (topic/url/content). "
    "Duration must be 15, 30, 60, or 90 seconds."
)

READING_WORDS_PER_MINUTE = 200


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def estimated_read_time(parts: list[str]) -> str:
    """Reading time of a thread at 200 words per minute, rounded up."""
    words = sum(len(part.split(" ")) for part in parts)
    seconds = math.ceil(words / READING_WORDS_PER_MINUTE * 60)
    return f"{math.ceil(seconds / 60)} minutes"


def speaking_pace(word_count: int, duration: int) -> int:
    """Words per minute for a script read in ``duration`` seconds."""
    if duration <= 0:
        return 0
    return math.floor(word_count / (duration / 60) + 0.5)


# --- Caption ----------------------------------------------------------------


@router.post("/caption")
async def generate_caption(
    request: Request,
    generator: CaptionGenerator = Depends(get_caption_generator),
) -> JSONResponse:
    """Generate an Instagram caption for a topic."""
    body = await read_json(request)
    req = validate_body(CaptionRequest, body, INVALID_CAPTION_BODY)

    image_type = req.image_type or "portrait"
    tone = req.tone or "casual"

    try:
        result = await generator.generate_from_topic(
            req.resolved_topic(),
            image_type=image_type,
            tone=tone,
            include_hashtags=req.include_hashtags is not False,
        )
    except Exception as e:
        logger.exception("Caption generation error")
        return error_response(str(e), 500)

    data = result.to_dict()
    data["metadata"] = {
        "characterCount": len(result.caption),
        "wordCount": count_words(result.caption),
        "hashtagCount": len(result.hashtags),
        "imageType": image_type,
        "tone": tone,
    }
    return success_response(data)


@router.get("/caption")
async def generate_caption_docs() -> dict[str, Any]:
    """Describe the caption generation endpoint."""
    return {
        "endpoint": "/api/generate/caption",
        "method": "POST",
        "description": "Generate engaging Instagram captions optimized for engagement",
        "request": {
            "topic": "string (1-500 chars) - Optional (if url or content provided)",
            "url": "string - Optional URL to extract topic from",
            "content": "string - Optional content to use as topic",
            "imageType": "string (portrait|landscape|carousel|reel) - Optional (default: portrait)",
            "tone": "string (professional|casual|funny|inspirational) - Optional (default: casual)",
            "includeHashtags": "boolean - Optional (default: true)",
            "maxLength": "number - Optional max character length",
            "targetAudience": "string - Optional audience description for personalization",
        },
        "response": {
            "status": "success | error",
            "data": {
                "caption": "string - The generated caption",
                "hashtags": "string[] - Recommended hashtags",
                "callToAction": "string - Engagement call-to-action",
                "estimatedEngagement": "string (low|medium|high)",
                "metadata": {
                    "characterCount": "number",
                    "wordCount": "number",
                    "hashtagCount": "number",
                    "imageType": "string",
                    "tone": "string",
                },
            },
        },
        "examples": {
            "request": {
                "topic": "New product launch for sustainable coffee",
                "imageType": "carousel",
                "tone": "inspirational",
                "includeHashtags": True,
                "targetAudience": "eco-conscious millennials",
            },
        },
        "tips": [
            "Include question in CTA for higher engagement",
            "Use 3-5 relevant hashtags for feed posts",
            "Use line breaks to improve readability",
        ],
    }


# --- Threads ----------------------------------------------------------------


async def _threads_from_analysis(generator: ThreadsGenerator, req: ThreadsRequest) -> dict[str, Any]:
    options = ThreadsOptions(
        **_drop_none(
            {
                "tone": req.tone,
                "max_length": req.max_length or 500,
                "include_hashtags": req.include_hashtags is not False,
                "include_call_to_action": req.include_call_to_action is not False,
                "target_audience": req.target_audience,
            }
        )
    )

    variations = None
    if req.generate_variations:
        variations = await generator.generate_threads_variations(
            req.transcription, req.buzz_analysis, req.variation_total, options
        )
        post = variations[0]
    else:
        post = await generator.generate_threads_post(req.transcription, req.buzz_analysis, options)

    data: dict[str, Any] = {
        "post": post.to_dict(),
        "formattedPost": format_threads_post(post),
    }
    if variations is not None:
        data["variations"] = [v.to_dict() for v in variations]
    data["metadata"] = {
        "tone": post.tone,
        "estimatedEngagement": post.estimated_engagement,
        "characterCount": post.character_count,
        "hashtagCount": len(post.hashtags),
        "usedTranscription": True,
        "usedBuzzAnalysis": True,
        "validationResult": validate_threads_post(post).to_dict(),
    }
    return data


async def _threads_from_topic(generator: ThreadsGenerator, req: ThreadsRequest) -> dict[str, Any]:
    result = await generator.generate_from_topic(
        req.resolved_topic(),
        tone=req.tone or "casual",
        style=req.style or "storytelling",
    )
    return {
        "thread": result.thread,
        "hashtags": result.hashtags,
        "callToAction": result.call_to_action,
        "characterCount": sum(len(part) for part in result.thread),
        "totalParts": len(result.thread),
        "estimatedReadTime": estimated_read_time(result.thread),
    }


@router.post("/threads")
async def generate_threads(
    request: Request,
    generator: ThreadsGenerator = Depends(get_threads_generator),
) -> JSONResponse:
    """Generate a Threads post from an analyzed Reel, or a thread from a topic."""
    body = await read_json(request)
    req = validate_body(ThreadsRequest, body, INVALID_THREADS_BODY)

    try:
        if req.uses_analysis:
            data = await _threads_from_analysis(generator, req)
        else:
            data = await _threads_from_topic(generator, req)
    except Exception as e:
        logger.exception("Threads generation error")
        return error_response(str(e), 500)

    return success_response(data)


@router.get("/threads")
async def generate_threads_docs() -> dict[str, Any]:
    """Describe the Threads generation endpoint."""
    return {
        "endpoint": "/api/generate/threads",
        "method": "POST",
        "description": "Generate Threads posts from a transcribed Reel and its buzz analysis",
        "request": {
            "transcription": {
                "text": "string - Required for analysis-based generation",
                "language": "string - Optional",
                "duration": "number - Optional",
                "confidence": "number - Optional",
            },
            "buzzAnalysis": {
                "buzzScore": "number (0-100) - Required with transcription",
                "sentiment": "string - Optional",
                "keyThemes": "string[] - Optional",
                "recommendations": "string[] - Optional",
                "analysis": "string - Optional",
            },
            "topic": "string (1-500 chars) - Used when transcription/buzzAnalysis are absent",
            "url": "string - Optional URL to extract topic from",
            "content": "string - Optional content to use as topic",
            "tone": "string (professional|casual|funny|inspirational|educational) - Optional (default: casual)",
            "style": "string (technical|storytelling|quick-tips) - Optional, topic mode only",
            "includeHashtags": "boolean - Optional (default: true)",
            "includeCallToAction": "boolean - Optional (default: true)",
            "maxLength": "number - Optional (default: 500)",
            "targetAudience": "string - Optional",
            "generateVariations": "boolean - Optional (default: false)",
            "variationCount": "number (1-3) - Optional (default: 3)",
        },
        "response": {
            "analysis": {
                "post": "ThreadsPost - text, hashtags, characterCount, estimatedEngagement, tone, callToAction",
                "formattedPost": "string - Post text ready to publish",
                "variations": "ThreadsPost[] - When generateVariations is true",
                "metadata": "object - tone, counts, validationResult",
            },
            "topic": {
                "thread": "string[] - Thread parts",
                "hashtags": "string[]",
                "callToAction": "string",
                "characterCount": "number",
                "totalParts": "number",
                "estimatedReadTime": "string",
            },
        },
        "examples": [
            {
                "name": "From analyzed Reel",
                "request": {
                    "transcription": {"text": "Three habits that changed my mornings..."},
                    "buzzAnalysis": {"buzzScore": 82, "sentiment": "positive"},
                    "tone": "inspirational",
                },
            },
            {
                "name": "From topic",
                "request": {"topic": "Remote work productivity", "style": "quick-tips"},
            },
        ],
    }


# --- Script -----------------------------------------------------------------


async def _script_from_analysis(generator: ScriptGenerator, req: ScriptRequest) -> dict[str, Any]:
    options = ScriptOptions(
        **_drop_none(
            {
                "duration": req.duration or 30,
                "style": req.style or "entertaining",
                "tone": req.tone or "casual",
                "target_audience": req.target_audience,
                "include_subtitles": req.include_subtitles is not False,
                "complexity": req.complexity or "moderate",
            }
        )
    )

    variations = None
    if req.generate_variations:
        variations = await generator.generate_script_variations(
            req.transcription, req.buzz_analysis, req.variation_total, options
        )
        script = variations[0]
    else:
        script = await generator.generate_reel_script(req.transcription, req.buzz_analysis, options)

    data: dict[str, Any] = {
        "script": script.to_dict(),
        "formattedScript": format_script(script),
    }
    if variations is not None:
        data["variations"] = [v.to_dict() for v in variations]
    data["metadata"] = _drop_none(
        {
            "duration": script.duration,
            "style": options.style,
            "platform": req.platform,
            "estimatedWordCount": script.metadata.total_word_count,
            "estimatedSpeakingPace": script.metadata.estimated_pace,
            "usedTranscription": True,
            "usedBuzzAnalysis": True,
            "validationResult": validate_script(script).to_dict(),
        }
    )
    return data


async def _script_from_topic(generator: ScriptGenerator, req: ScriptRequest) -> dict[str, Any]:
    duration = req.duration or 30
    style = req.style or "entertaining"
    platform = req.platform or "instagram"

    result = await generator.generate_from_topic(
        req.resolved_topic(),
        duration=duration,
        style="entertaining" if style == "storytelling" else style,
    )

    word_count = count_words(result.script)
    return {
        "legacyScript": result.script,
        "pacing": [beat.to_dict() for beat in result.pacing],
        "musicSuggestion": result.music_suggestion,
        "transitionTips": result.transition_tips,
        "metadata": {
            "duration": duration,
            "style": style,
            "platform": platform,
            "estimatedWordCount": word_count,
            "estimatedSpeakingPace": f"{speaking_pace(word_count, duration)} words per minute",
            "usedTranscription": False,
            "usedBuzzAnalysis": False,
        },
    }


@router.post("/script")
async def generate_script(
    request: Request,
    generator: ScriptGenerator = Depends(get_script_generator),
) -> JSONResponse:
    """Generate a Reel script from an analyzed Reel, or a paced script from a topic."""
    body = await read_json(request)
    req = validate_body(ScriptRequest, body, INVALID_SCRIPT_BODY)

    try:
        if req.uses_analysis:
            data = await _script_from_analysis(generator, req)
        else:
            data = await _script_from_topic(generator, req)
    except Exception as e:
        logger.exception("Reel script generation error")
        return error_response(str(e), 500)

    return success_response(data)


@router.get("/script")
async def generate_script_docs() -> dict[str, Any]:
    """Describe the Reel script generation endpoint."""
    return {
        "endpoint": "/api/generate/script",
        "method": "POST",
        "description": "Generate professional Reel scripts with detailed pacing and timing",
        "request": {
            "transcription": "object { text, language?, duration?, confidence? } - With buzzAnalysis",
            "buzzAnalysis": "object { buzzScore, sentiment?, keyHooks?, keyThemes?, ... } - With transcription",
            "topic": "string (1-500 chars) - Used when transcription/buzzAnalysis are absent",
            "url": "string - Optional URL to extract topic from",
            "content": "string - Optional content to use as topic",
            "duration": "number (15|30|60|90) - Optional (default: 30)",
            "style": "string (educational|entertaining|motivational|tutorial|storytelling) - Optional",
            "tone": "string - Optional (default: casual)",
            "targetAudience": "string - Optional",
            "includeSubtitles": "boolean - Optional (default: true)",
            "complexity": "string (simple|moderate|advanced) - Optional (default: moderate)",
            "platform": "string - Optional (default: instagram)",
            "generateVariations": "boolean - Optional (default: false)",
            "variationCount": "number (1-3) - Optional (default: 3)",
        },
        "response": {
            "analysis": {
                "script": "ReelScript - title, hook, sections, callToAction, metadata, musicSuggestion",
                "formattedScript": "string - Markdown rendering of the script",
                "variations": "ReelScript[] - When generateVariations is true",
                "metadata": "object - duration, style, word count, pace, validationResult",
            },
            "topic": {
                "legacyScript": "string",
                "pacing": "array of { timeRange, description, voiceover? }",
                "musicSuggestion": "string",
                "transitionTips": "string[]",
                "metadata": "object - duration, style, platform, word count, pace",
            },
        },
        "examples": [
            {
                "name": "From analyzed Reel",
                "request": {
                    "transcription": {"text": "Here is how I meal prep for the whole week..."},
                    "buzzAnalysis": {"buzzScore": 76, "sentiment": "positive"},
                    "duration": 60,
                    "style": "tutorial",
                },
            },
            {
                "name": "From topic",
                "request": {"topic": "Morning routine tips", "duration": 30},
            },
        ],
    }
