"""
timedtext.py — Fetch a caption track's timed-text document and parse it.

The plain timed-text dialect is a flat list of cues:

    <transcript>
      <text start="0.42" dur="2.1">Hello &amp;amp; welcome</text>
      ...
    </transcript>

It is scanned with a regex rather than an XML parser because YouTube's
output is not reliably well-formed.  Cue text has nested markup stripped,
a fixed set of entities decoded, and whitespace trimmed; cues that end up
empty are dropped.
"""

from __future__ import annotations

import logging
import math
from urllib.parse import unquote_plus, urlsplit, urlunsplit

import requests

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.models import CaptionTrack, TranscriptSegment
from yt_scribe.upstream import (
    ALTERNATE_FORMAT_PATTERN,
    FORMAT_PARAM,
    MARKUP_PATTERN,
    TEXT_ELEMENT_PATTERN,
    TIMEDTEXT_TIMEOUT,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

# Applied in order; "&amp;" first, as the upstream double-escapes cue text.
_ENTITY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&apos;", "'"),
    ("\\n", " "),
    ("\n", " "),
)


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def timedtext_url(base_url: str) -> str:
    """
    Drop any format override from a track URL so the plain XML dialect is served.

    Only the format pair is removed; every other pair keeps its original
    encoding, since track URLs are signed.  URLs without the parameter are
    returned untouched.
    """
    parts = urlsplit(base_url)
    pairs = parts.query.split("&")
    kept = [pair for pair in pairs if unquote_plus(pair.split("=", 1)[0]) != FORMAT_PARAM]
    if len(kept) == len(pairs):
        return base_url
    return urlunsplit(parts._replace(query="&".join(kept)))


def fetch_timedtext(base_url: str, session: requests.Session | None = None) -> str:
    """
    Download the timed-text document for a track.

    Raises:
        PipelineError(SERVER_ERROR): Network failure or non-2xx status.
    """
    http = session or requests
    try:
        resp = http.get(
            timedtext_url(base_url),
            headers={"User-Agent": USER_AGENT},
            timeout=TIMEDTEXT_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise PipelineError(
            ErrorKind.SERVER_ERROR, f"Could not download the transcript: {exc}"
        ) from exc

    if not resp.ok:
        raise PipelineError(
            ErrorKind.SERVER_ERROR,
            f"YouTube returned status {resp.status_code} for the transcript.",
        )
    return resp.text


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def decode_entities(text: str) -> str:
    """Decode the entities YouTube emits in cue text; newlines become spaces."""
    for entity, replacement in _ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    return text


def _seconds_to_ms(value: str) -> int:
    """Seconds string to whole milliseconds, rounding half up ("1.5" -> 1500)."""
    return int(math.floor(float(value) * 1000 + 0.5))


def parse_timedtext(document: str) -> list[TranscriptSegment]:
    """
    Parse a timed-text XML document into segments, in document order.

    Cues whose text is empty after cleaning, or whose start/dur aren't
    non-negative numbers, are skipped.  An empty return value is not an
    error here; fetch_segments() decides that.
    """
    segments: list[TranscriptSegment] = []
    for match in TEXT_ELEMENT_PATTERN.finditer(document):
        raw_start, raw_dur, raw_text = match.groups()
        try:
            start_ms = _seconds_to_ms(raw_start)
            duration_ms = _seconds_to_ms(raw_dur)
        except (ValueError, OverflowError):
            logger.debug("Skipping cue with bad timing: start=%r dur=%r", raw_start, raw_dur)
            continue
        if start_ms < 0 or duration_ms < 0:
            logger.debug("Skipping cue with negative timing: start=%r dur=%r", raw_start, raw_dur)
            continue

        text = decode_entities(MARKUP_PATTERN.sub("", raw_text)).strip()
        if text:
            segments.append(TranscriptSegment(text=text, start_ms=start_ms, duration_ms=duration_ms))
    return segments


def fetch_segments(
    track: CaptionTrack,
    session: requests.Session | None = None,
) -> list[TranscriptSegment]:
    """
    Fetch and parse the transcript for one caption track.

    Returns:
        A non-empty list of TranscriptSegment, in document order.

    Raises:
        PipelineError(NO_TRANSCRIPT): The document parsed to zero segments.
        PipelineError(SERVER_ERROR):  Network failure, bad status, or the
            document is in an unsupported format.
    """
    document = fetch_timedtext(track.base_url, session=session)
    segments = parse_timedtext(document)

    if not segments:
        if ALTERNATE_FORMAT_PATTERN.search(document):
            raise PipelineError(
                ErrorKind.SERVER_ERROR,
                "YouTube served the transcript in an unsupported timed-text format.",
            )
        raise PipelineError(
            ErrorKind.NO_TRANSCRIPT,
            "Transcript was found but contained no text segments.",
        )

    logger.debug("Parsed %d segment(s) from %s track", len(segments), track.language_code)
    return segments
