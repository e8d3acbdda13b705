"""
errors.py — Error taxonomy for yt-scribe.

Every failure in the extraction pipeline is a PipelineError tagged with one
ErrorKind.  The kind carries its own HTTP status, so the FastAPI error
handler can translate pipeline failures directly into the correct response
code without a separate mapping table.

Kinds:
    INVALID_URL        (400)  input could not be resolved to a video ID
    RATE_LIMITED       (429)  YouTube challenged or throttled the scraper
    VIDEO_UNAVAILABLE  (404)  video missing, private, removed, or no API key
    NO_TRANSCRIPT      (404)  no caption track exists, matches, or has text
    SERVER_ERROR       (500)  upstream failure status or unexpected shape
"""

from __future__ import annotations

from enum import Enum


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """
    The fixed set of pipeline failure kinds.

    Subclassing str lets a kind be dropped straight into a JSON payload
    (ErrorKind.NO_TRANSCRIPT == "NO_TRANSCRIPT").
    """

    INVALID_URL = "INVALID_URL"
    RATE_LIMITED = "RATE_LIMITED"
    VIDEO_UNAVAILABLE = "VIDEO_UNAVAILABLE"
    NO_TRANSCRIPT = "NO_TRANSCRIPT"
    SERVER_ERROR = "SERVER_ERROR"

    @property
    def http_status(self) -> int:
        """Status code the boundary layer should answer with."""
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_URL: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.VIDEO_UNAVAILABLE: 404,
    ErrorKind.NO_TRANSCRIPT: 404,
    ErrorKind.SERVER_ERROR: 500,
}


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    """
    The one exception raised by every pipeline stage.

    It has no subclasses; callers branch on `kind`.

    Attributes:
        kind:        The ErrorKind classifying the failure.
        message:     Human-readable description, passed to the caller verbatim.
        http_status: Suggested HTTP status code for the API layer.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_dict(self) -> dict:
        """The JSON error body sent by the API: {"error": kind, "message": ...}."""
        return {"error": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"PipelineError({self.kind.value}, {self.message!r})"
