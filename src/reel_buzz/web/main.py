"""Command line entry point for the Reel Buzz API server.

``reel-buzz-api`` serves ``reel_buzz.web.main:app`` with uvicorn. Host,
port and reload default to settings and can be overridden per run.
"""

import argparse
import logging

import uvicorn

from reel_buzz.config.settings import get_settings
from reel_buzz.web.app import create_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error")

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

app = create_app()


def _port(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("port must be an integer") from exc
    if parsed < 1 or parsed > 65535:
        raise argparse.ArgumentTypeError("port must be in range [1, 65535]")
    return parsed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments; unset options fall back to settings."""
    parser = argparse.ArgumentParser(
        description="Serve the Reel Buzz transcription, analysis and generation API.",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: API_HOST).")
    parser.add_argument("--port", type=_port, default=None, help="Bind port (default: API_PORT).")
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reload on code changes (default: API_DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Server log level (default: debug when API_DEBUG, else info).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the API server."""
    args = parse_args(argv)
    settings = get_settings()
    log_level = args.log_level or ("debug" if settings.api_debug else "info")

    logging.getLogger().setLevel(log_level.upper())

    uvicorn.run(
        "reel_buzz.web.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=settings.api_debug if args.reload is None else args.reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
