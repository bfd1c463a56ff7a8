"""Response envelope shared by every endpoint.

Success: ``{"status": "success", "data": ..., "timestamp": ...}``
Error:   ``{"status": "error", "error": "...", "timestamp": ...}``

Some endpoints add top-level keys such as ``analysisMode`` or ``requestId``.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def utc_timestamp() -> str:
    """Current time as ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class APIException(Exception):
    """Raised inside handlers to return an error envelope."""

    def __init__(self, status_code: int, message: str, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.extra = extra or {}


def success_body(data: Any, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "success", "data": data}
    body.update(extra)
    body["timestamp"] = utc_timestamp()
    return body


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "error", "error": message}
    body.update(extra)
    body["timestamp"] = utc_timestamp()
    return body


def success_response(data: Any, status_code: int = 200, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(success_body(data, **extra)))


def error_response(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message, **extra))
