"""Rate limiting middleware using a token bucket per API key."""

import logging
import time
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from reel_buzz.config.settings import get_settings
from reel_buzz.web.schemas.responses import error_body

logger = logging.getLogger(__name__)


@dataclass
class TokenBucket:
    """Token bucket refilled continuously at ``refill_rate`` tokens per second."""

    capacity: float
    refill_rate: float
    tokens: float = field(init=False)
    last_refill: float = field(default_factory=time.monotonic)

    def __post_init__(self) -> None:
        self.tokens = self.capacity

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.last_refill) * self.refill_rate)
        self.last_refill = now

    def consume(self, tokens: float = 1) -> bool:
        """Take ``tokens`` from the bucket. Returns False when not enough are left."""
        self._refill()
        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def time_until_available(self, tokens: float = 1) -> float:
        if self.tokens >= tokens:
            return 0.0
        return (tokens - self.tokens) / self.refill_rate


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Answer 429 once a client has spent its requests-per-minute budget."""

    EXEMPT_PATHS = {"/api/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app: Any, rpm: int | None = None) -> None:
        super().__init__(app)
        settings = get_settings()
        self.rpm = rpm or settings.rate_limit_rpm
        self.enabled = settings.rate_limit_enabled
        self._buckets: dict[str, TokenBucket] = defaultdict(
            lambda: TokenBucket(capacity=float(self.rpm), refill_rate=self.rpm / 60.0)
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not self.enabled or request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        client_id = getattr(request.state, "api_key", None)
        if client_id is None:
            client_id = request.client.host if request.client else "anonymous"
        bucket = self._buckets[client_id]

        if not bucket.consume(1):
            retry_after = bucket.time_until_available(1)
            logger.info(f"Rate limit hit on {request.url.path}")
            response = JSONResponse(
                status_code=429,
                content=error_body(
                    f"Rate limit exceeded. Try again in {retry_after:.1f}s",
                    retryAfterSeconds=round(retry_after, 1),
                ),
            )
            response.headers["Retry-After"] = str(int(retry_after) + 1)
            return response

        return await call_next(request)
