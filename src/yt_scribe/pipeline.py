"""
pipeline.py — The transcript extraction pipeline.

This is the heart of yt-scribe.  One request runs five stages in order,
each of which can end the request with a PipelineError:

    1. Resolve the input to a video ID    → resolver.parse_video_id()
    2. Scrape an innertube API key         → credentials.fetch_api_key()
    3. List the caption tracks             → catalog.fetch_catalog()
    4. Pick one track                      → selector.select_track()
    5. Fetch and parse its timed text      → timedtext.fetch_segments()

Nothing is retried and nothing is cached; each call starts from scratch.
"""

from __future__ import annotations

import logging

import requests

from yt_scribe.catalog import fetch_catalog
from yt_scribe.credentials import fetch_api_key
from yt_scribe.errors import PipelineError
from yt_scribe.formatters import FORMATS, render
from yt_scribe.metadata import fetch_video_metadata
from yt_scribe.models import TranscriptResult
from yt_scribe.resolver import parse_video_id, resolve_video_id
from yt_scribe.selector import select_track
from yt_scribe.timedtext import fetch_segments

logger = logging.getLogger(__name__)


def resolve_identifier(raw: str | None) -> str | None:
    """
    Validate user input without touching the network.

    Returns:
        The 11-character video ID, or None if the input isn't a YouTube reference.
    """
    return resolve_video_id(raw)


def resolve_transcript(
    raw: str,
    language: str | None = None,
    *,
    session: requests.Session | None = None,
) -> TranscriptResult:
    """
    Run the full pipeline for one video.

    Args:
        raw:      A YouTube URL or bare video ID.
        language: Optional exact language code.  When omitted, a human-made
                  track is preferred over an auto-generated one.
        session:  Optional requests session for all outbound calls.  A
                  private session is opened (and closed) otherwise.

    Returns:
        A TranscriptResult with at least one segment.

    Raises:
        PipelineError: With the kind of whichever stage failed first.
    """
    video_id = parse_video_id(raw)

    if session is None:
        with requests.Session() as own_session:
            return _run(video_id, language, own_session)
    return _run(video_id, language, session)


def _run(video_id: str, language: str | None, session: requests.Session) -> TranscriptResult:
    api_key = fetch_api_key(video_id, session=session)
    tracks = fetch_catalog(video_id, api_key, session=session)
    track = select_track(tracks, language)
    logger.debug(
        "Selected %s track %r for %s",
        "auto-generated" if track.is_auto_generated else "manual",
        track.language_code,
        video_id,
    )
    segments = fetch_segments(track, session=session)

    return TranscriptResult(
        video_id=video_id,
        language_code=track.language_code,
        language_name=track.name,
        is_auto_generated=track.is_auto_generated,
        tracks=tuple(tracks),
        segments=tuple(segments),
    )


def extract(
    url_or_id: str,
    language: str | None = None,
    fmt: str = "text",
) -> str:
    """
    One-call interface: resolve input → fetch transcript → render output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        language:  Optional exact language code (e.g. "de").
        fmt:       "text", "srt" or "json".

    Returns:
        The rendered transcript.  JSON output also carries the video's title
        and author when the oEmbed lookup succeeds; a failed lookup only
        drops those two fields.

    Raises:
        ValueError:    If fmt is not a known format.
        PipelineError: On any extraction failure.
    """
    # Validate before doing any network work.
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")

    result = resolve_transcript(url_or_id, language)
    metadata = None
    if fmt == "json":
        try:
            metadata = fetch_video_metadata(result.video_id)
        except PipelineError as exc:
            logger.warning("Exporting %s without title/author: %s", result.video_id, exc.message)
    return render(result, fmt, metadata)
