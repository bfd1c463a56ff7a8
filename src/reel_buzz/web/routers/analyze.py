"""Buzz analysis router."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from reel_buzz.ai.buzz_analyzer import BuzzAnalyzer, to_simplified_format
from reel_buzz.ai.models import BuzzAnalysisOptions
from reel_buzz.web.dependencies import get_buzz_analyzer
from reel_buzz.web.schemas.requests import BuzzAnalysisRequest, read_json, validate_body
from reel_buzz.web.schemas.responses import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyze", tags=["analyze"])

INVALID_BODY = "Invalid request body. Required: content or transcription (string, 1-10000 chars)"


async def run_analysis(analyzer: BuzzAnalyzer, req: BuzzAnalysisRequest, mode: str) -> Any:
    """Dispatch to the analyzer method matching ``mode``.

    Unknown modes run the full analysis.
    """
    text = req.text
    content_type = req.normalized_content_type

    if mode == "quick":
        return {"buzzScore": await analyzer.quick_buzz_score(text), "analysisMode": "quick"}

    if mode == "hooks-only":
        hooks = await analyzer.extract_key_hooks(text, 5)
        return {"keyHooks": [h.to_dict() for h in hooks], "analysisMode": "hooks-only"}

    if mode == "trends-only":
        topics = await analyzer.identify_trending_topics(text)
        return {"trendingTopics": [t.to_dict() for t in topics], "analysisMode": "trends-only"}

    if mode == "simplified":
        if req.transcription:
            result = await analyzer.analyze_transcript_simplified(req.transcription, content_type)
        else:
            full = await analyzer.analyze_buzz_potential(
                text, BuzzAnalysisOptions(content_type=content_type)
            )
            result = to_simplified_format(full)
        return result.to_dict()

    if req.transcription:
        options = BuzzAnalysisOptions(
            content_type=content_type,
            current_metrics=req.engagement_metrics(),
            account_info=req.account_info,
            include_competitor_analysis=True,
        )
        analysis = await analyzer.analyze_buzz_potential(req.transcription, options)
        return analysis.to_dict()

    metrics = req.engagement_metrics()
    basic = await analyzer.analyze_basic(req.content or "", metrics)
    data = basic.to_dict()
    if req.content_type is not None:
        data["contentType"] = req.content_type
    data["engagementMetrics"] = metrics.to_dict()
    return data


@router.post("/buzz")
async def analyze_buzz(
    request: Request,
    analyzer: BuzzAnalyzer = Depends(get_buzz_analyzer),
) -> JSONResponse:
    """Score content or a transcription for viral potential."""
    body = await read_json(request)
    req = validate_body(BuzzAnalysisRequest, body, INVALID_BODY)
    mode = req.analysis_mode or "full"

    try:
        data = await run_analysis(analyzer, req, mode)
    except Exception as e:
        logger.exception("Buzz analysis error")
        return error_response(str(e), 500)

    return success_response(data, analysisMode=mode)


@router.get("/buzz")
async def analyze_buzz_docs() -> dict[str, Any]:
    """Describe the buzz analysis endpoint."""
    return {
        "endpoint": "/api/analyze/buzz",
        "method": "POST",
        "description": "Analyze Instagram content for buzz potential and viral factors",
        "version": "2.0",
        "features": [
            "AI-powered buzz analysis",
            "Transcription-based analysis",
            "Key hooks identification",
            "Trending topics detection",
            "Viral potential scoring",
            "Multiple analysis modes",
        ],
        "request": {
            "content": "string (1-10000 chars) - Required if transcription not provided",
            "transcription": "string (1-10000 chars) - Required if content not provided (recommended for Reels)",
            "analysisMode": "string (full|quick|hooks-only|trends-only|simplified) - Optional, default: full",
            "likes": "number - Optional",
            "comments": "number - Optional",
            "shares": "number - Optional",
            "views": "number - Optional",
            "hashtags": "string[] - Optional",
            "contentType": "string (photo|carousel|reel|story) - Optional",
            "accountInfo": {
                "followerCount": "number - Optional",
                "avgEngagementRate": "number - Optional",
                "niche": "string - Optional",
            },
        },
        "response": {
            "full": {
                "buzzScore": "number (0-100)",
                "sentiment": "string (positive|negative|neutral)",
                "viralPotential": "string (low|medium|high|very-high)",
                "keyHooks": "array of hooks with strength ratings",
                "trendingTopics": "array of trending topics",
                "contentStructure": "object with opening strength, retention factors, CTA, pacing",
                "targetAudience": "object with demographics and interests",
                "recommendations": "array of prioritized suggestions",
                "predictedMetrics": "object with estimated views, engagement, virality probability",
            },
            "quick": {"buzzScore": "number (0-100)"},
            "hooksOnly": {"keyHooks": "array of key hooks"},
            "trendsOnly": {"trendingTopics": "array of trending topics"},
            "simplified": {
                "buzzScore": "number (0-100)",
                "factors": "array of buzz factor strings",
                "sentiment": "string (positive|negative|neutral)",
                "keyThemes": "array of key theme strings",
                "recommendations": "array of recommendation strings",
            },
        },
        "examples": [
            {
                "name": "Full Analysis with Transcription",
                "request": {
                    "transcription": "Check this out! You won't believe what happens next...",
                    "contentType": "reel",
                    "views": 50000,
                    "likes": 5000,
                    "analysisMode": "full",
                },
            },
            {
                "name": "Quick Buzz Score",
                "request": {
                    "transcription": "Amazing life hack everyone needs to know!",
                    "analysisMode": "quick",
                },
            },
            {
                "name": "Simplified Analysis",
                "request": {
                    "transcription": "AIを活用した時短術を紹介します。驚きの結果が...",
                    "contentType": "reel",
                    "analysisMode": "simplified",
                },
            },
        ],
    }
