"""
api.py — FastAPI REST API for yt-scribe.

Endpoints:
    GET /api/transcript   — Fetch a transcript (url or videoId, optional lang).
    GET /api/metadata     — Fetch display metadata (title, author, thumbnail).
    GET /health           — Simple health-check for load balancers / monitoring.

Run with:
    yt-scribe serve
    # or: uvicorn yt_scribe.api:app

The global exception handler catches any PipelineError and converts it to
{"error": KIND, "message": ...} with the status code that kind maps to.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from yt_scribe.errors import PipelineError
from yt_scribe.metadata import fetch_video_metadata
from yt_scribe.pipeline import resolve_transcript
from yt_scribe.resolver import parse_video_id

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="YT-Scribe",
    description="Extract timestamped YouTube transcripts from any video URL.",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """
    Translate any PipelineError into an HTTP error response.

    Endpoints just let the error propagate; the kind decides the status and
    the message is passed through verbatim.
    """
    logger.warning("%s %s failed: %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# Plain `def` endpoints: the pipeline does blocking I/O, so FastAPI runs
# them in its threadpool.
@app.get("/api/transcript")
def get_transcript(
    url: str = Query(default="", description="A YouTube URL or bare video ID."),
    video_id: str = Query(default="", alias="videoId", description="A bare video ID (used when url is empty)."),
    lang: str = Query(default="", description="Exact language code, e.g. 'en' or 'pt-BR'. Empty prefers human-made captions."),
) -> JSONResponse:
    """
    Fetch the transcript for a single YouTube video.

    The response includes the chosen track, every available language (for
    switching), and the segments with start/duration in milliseconds.
    """
    # Raises INVALID_URL (400) before any network call.
    resolved = parse_video_id(url or video_id)
    result = resolve_transcript(resolved, lang or None)
    return JSONResponse(content=result.to_dict())


@app.get("/api/metadata")
def get_metadata(
    url: str = Query(default="", description="A YouTube URL or bare video ID."),
    video_id: str = Query(default="", alias="videoId", description="A bare video ID (used when url is empty)."),
) -> JSONResponse:
    """Title, author and thumbnail for a video, via oEmbed."""
    resolved = parse_video_id(url or video_id)
    metadata = fetch_video_metadata(resolved)
    return JSONResponse(content=metadata.to_dict())


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """
    Minimal health-check endpoint.

    Returns HTTP 200 with {"status": "ok"}.
    """
    return {"status": "ok"}
