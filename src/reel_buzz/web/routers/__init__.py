"""API routers."""

from reel_buzz.web.routers.analyze import router as analyze_router
from reel_buzz.web.routers.generate import router as generate_router
from reel_buzz.web.routers.health import router as health_router
from reel_buzz.web.routers.reels import router as reels_router

__all__ = ["analyze_router", "generate_router", "health_router", "reels_router"]
