"""
resolver.py — Turn free-form user input into an 11-character video ID.

Accepted shapes:
    - dQw4w9WgXcQ                                   (bare ID)
    - https://www.youtube.com/watch?v=dQw4w9WgXcQ    (watch URL, any extra params)
    - https://m.youtube.com/watch?v=dQw4w9WgXcQ      (mobile site)
    - https://youtu.be/dQw4w9WgXcQ                   (short link)
    - https://www.youtube.com/embed/dQw4w9WgXcQ      (also /v/, /shorts/, /live/)

Anything else gets one permissive regex scan before giving up.  No network
access happens here; the ID is never checked against YouTube.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.upstream import (
    BARE_ID_PATTERN,
    FALLBACK_ID_PATTERN,
    MAIN_HOSTS,
    PATH_ID_PATTERN,
    SHORT_LINK_HOST,
)


def _from_url(text: str) -> str | None:
    """Structured URL parsing; None when the input isn't a recognised YouTube URL."""
    try:
        parts = urlsplit(text)
        host = (parts.hostname or "").removeprefix("www.")
    except ValueError:
        # urlsplit rejects malformed netlocs (e.g. unbalanced IPv6 brackets).
        return None

    if host == SHORT_LINK_HOST:
        first_segment = parts.path.lstrip("/").split("/")[0]
        return first_segment or None

    if host in MAIN_HOSTS:
        v_values = parse_qs(parts.query).get("v")
        if v_values:
            return v_values[0]
        match = PATH_ID_PATTERN.match(parts.path)
        if match:
            return match.group(1)

    return None


def resolve_video_id(raw: str | None) -> str | None:
    """
    Extract a YouTube video ID from a URL or validate a bare ID.

    First match wins: bare ID, then structured URL parsing, then a regex
    scan for "v=", "/" or "youtu.be/" followed by 11 ID characters.

    This never raises.

    Args:
        raw: Whatever the user typed or pasted.

    Returns:
        The video ID, or None if the input isn't a recognisable reference.
    """
    if not raw:
        return None
    text = raw.strip()

    if BARE_ID_PATTERN.match(text):
        return text

    video_id = _from_url(text)
    if video_id:
        return video_id

    match = FALLBACK_ID_PATTERN.search(text)
    return match.group(1) if match else None


def parse_video_id(raw: str | None) -> str:
    """
    Like resolve_video_id(), but raise instead of returning None.

    Raises:
        PipelineError(INVALID_URL): If no video ID can be found.
    """
    video_id = resolve_video_id(raw)
    if video_id is None:
        raise PipelineError(ErrorKind.INVALID_URL, "Please provide a valid YouTube URL.")
    return video_id
