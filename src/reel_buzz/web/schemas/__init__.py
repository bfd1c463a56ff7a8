"""Request and response schemas for the API."""

from reel_buzz.web.schemas.requests import (
    BuzzAnalysisRequest,
    CaptionRequest,
    ScriptRequest,
    ThreadsRequest,
    TranscribeUrlRequest,
    read_json,
    validate_body,
)
from reel_buzz.web.schemas.responses import (
    APIException,
    error_body,
    error_response,
    success_response,
    utc_timestamp,
)

__all__ = [
    "BuzzAnalysisRequest",
    "CaptionRequest",
    "ScriptRequest",
    "ThreadsRequest",
    "TranscribeUrlRequest",
    "read_json",
    "validate_body",
    "APIException",
    "error_body",
    "error_response",
    "success_response",
    "utc_timestamp",
]
