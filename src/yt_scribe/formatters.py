"""
formatters.py — Render transcripts as plain text, SRT or JSON.

Also parses SRT back into segments, so exported subtitle files can be read
again without going back to YouTube.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable

from yt_scribe.metadata import VideoMetadata
from yt_scribe.models import TranscriptResult, TranscriptSegment

FORMATS = ("text", "srt", "json")

# HH:MM:SS,mmm --> HH:MM:SS,mmm  (hours may exceed two digits)
_SRT_TIMING = re.compile(
    r"^(\d+):(\d{2}):(\d{2}),(\d{3})\s*-->\s*(\d+):(\d{2}):(\d{2}),(\d{3})"
)
_SRT_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def ms_to_timestamp(ms: int) -> str:
    """
    Human-readable timestamp: "M:SS", or "H:MM:SS" from one hour on.

    >>> ms_to_timestamp(92_500)
    '1:32'
    """
    hours, rem = divmod(ms // 1000, 3600)
    mins, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def ms_to_srt_timestamp(ms: int) -> str:
    """SRT timestamp with millisecond precision, e.g. "00:01:32,500"."""
    total_secs, millis = divmod(ms, 1000)
    hours, rem = divmod(total_secs, 3600)
    mins, secs = divmod(rem, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d},{millis:03d}"


def _srt_fields_to_ms(hours: str, mins: str, secs: str, millis: str) -> int:
    return ((int(hours) * 60 + int(mins)) * 60 + int(secs)) * 1000 + int(millis)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def format_text(segments: Iterable[TranscriptSegment]) -> str:
    """One segment per line, no timestamps."""
    return "\n".join(segment.text for segment in segments)


def format_srt(segments: Iterable[TranscriptSegment]) -> str:
    """
    Render segments as SubRip cues numbered from 1.

    Each cue ends at start + duration; zero-duration segments give
    zero-length cues.
    """
    cues = []
    for index, segment in enumerate(segments, start=1):
        start = ms_to_srt_timestamp(segment.start_ms)
        end = ms_to_srt_timestamp(segment.end_ms)
        cues.append(f"{index}\n{start} --> {end}\n{segment.text}\n")
    return "\n".join(cues)


def format_json(result: TranscriptResult, metadata: VideoMetadata | None = None) -> str:
    """
    Serialise a TranscriptResult as pretty-printed JSON.

    Each segment also gets a human "timestamp" label for display.  When
    `metadata` is given, the video's title and author head the document.
    """
    payload: dict = {"video_id": result.video_id}
    if metadata is not None:
        payload["title"] = metadata.title
        payload["author"] = metadata.author
    payload.update(
        language=result.language_code,
        language_name=result.language_name,
        is_generated=result.is_auto_generated,
        segment_count=len(result.segments),
        segments=[
            {**segment.to_dict(), "timestamp": ms_to_timestamp(segment.start_ms)}
            for segment in result.segments
        ],
    )
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render(result: TranscriptResult, fmt: str, metadata: VideoMetadata | None = None) -> str:
    """
    Render a result in one of FORMATS.

    `metadata` is only used by the JSON format.

    Raises:
        ValueError: If fmt is not a known format.
    """
    if fmt == "text":
        return format_text(result.segments)
    if fmt == "srt":
        return format_srt(result.segments)
    if fmt == "json":
        return format_json(result, metadata)
    raise ValueError(f"Unknown format {fmt!r}; expected one of {', '.join(FORMATS)}")


# ---------------------------------------------------------------------------
# SRT parsing
# ---------------------------------------------------------------------------

def parse_srt(content: str) -> list[TranscriptSegment]:
    """
    Parse SubRip text into segments.

    The cue number line is optional.  Multi-line cue text is joined with
    single spaces.

    Raises:
        ValueError: If a cue has no valid timing line, or ends before it starts.
    """
    content = content.replace("\r\n", "\n").strip()
    if not content:
        return []

    segments: list[TranscriptSegment] = []
    for block in _SRT_BLOCK_SEPARATOR.split(content):
        lines = block.strip().split("\n")
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        if not lines:
            continue

        match = _SRT_TIMING.match(lines[0].strip())
        if not match:
            raise ValueError(f"Malformed SRT timing line: {lines[0]!r}")
        start_ms = _srt_fields_to_ms(*match.group(1, 2, 3, 4))
        end_ms = _srt_fields_to_ms(*match.group(5, 6, 7, 8))
        if end_ms < start_ms:
            raise ValueError(f"SRT cue ends before it starts: {lines[0]!r}")

        text = " ".join(line.strip() for line in lines[1:] if line.strip())
        segments.append(
            TranscriptSegment(text=text, start_ms=start_ms, duration_ms=end_ms - start_ms)
        )
    return segments
