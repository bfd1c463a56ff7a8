"""Health check router."""

from typing import Any

from fastapi import APIRouter

from reel_buzz.config.settings import get_settings

# Import version directly to avoid circular import
__version__ = "0.1.0"

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        Service status, version and which upstream providers have keys.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "version": __version__,
        "aiProvider": settings.ai_provider,
        "providers": {
            "gemini": bool(settings.gemini_api_key),
            "claude": bool(settings.anthropic_api_key),
            "whisper": bool(settings.openai_api_key),
            "rapidapi": bool(settings.rapidapi_key),
        },
    }
