"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from reel_buzz.config.settings import get_settings
from reel_buzz.web.middleware.auth import APIKeyAuthMiddleware
from reel_buzz.web.middleware.rate_limit import RateLimitMiddleware
from reel_buzz.web.routers import analyze_router, generate_router, health_router, reels_router
from reel_buzz.web.schemas.responses import APIException, error_response

# Import version directly to avoid circular import
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    settings = get_settings()
    logger.info(f"Reel Buzz API v{__version__} starting up")
    logger.info(f"Debug mode: {settings.api_debug}, AI provider: {settings.ai_provider}")
    if not settings.api_keys:
        logger.warning("No API keys configured - running without authentication")
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set - transcription endpoints will fail")
    yield


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    return error_response(exc.message, exc.status_code, **exc.extra)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    settings = get_settings()

    app = FastAPI(
        title="Reel Buzz API",
        description="Instagram Reel transcription, buzz analysis and content generation API",
        version=__version__,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        lifespan=lifespan,
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last runs first: auth sets request.state.api_key for the rate limiter
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(APIKeyAuthMiddleware)

    app.add_exception_handler(APIException, api_exception_handler)

    app.include_router(health_router)
    app.include_router(analyze_router)
    app.include_router(generate_router)
    app.include_router(reels_router)

    return app
