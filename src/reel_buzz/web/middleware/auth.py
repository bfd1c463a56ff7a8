"""API key authentication middleware."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from reel_buzz.config.settings import get_settings
from reel_buzz.web.schemas.responses import error_body

logger = logging.getLogger(__name__)


class APIKeyAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a configured API key."""

    PUBLIC_PATHS = {"/api/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in self.PUBLIC_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        settings = get_settings()
        valid_keys = {k.strip() for k in settings.api_keys.split(",") if k.strip()}

        # No keys configured: open access (local development)
        if not valid_keys:
            return await call_next(request)

        api_key = request.headers.get(settings.api_key_header)
        if not api_key:
            return JSONResponse(
                status_code=401,
                content=error_body(f"Missing {settings.api_key_header} header"),
            )

        if api_key not in valid_keys:
            logger.warning(f"Rejected request to {request.url.path} with invalid API key")
            return JSONResponse(status_code=401, content=error_body("Invalid API key"))

        # Rate limiting buckets are keyed on this
        request.state.api_key = api_key
        return await call_next(request)
