"""Middleware for the API."""

from reel_buzz.web.middleware.auth import APIKeyAuthMiddleware
from reel_buzz.web.middleware.rate_limit import RateLimitMiddleware

__all__ = ["APIKeyAuthMiddleware", "RateLimitMiddleware"]
