"""
yt_scribe — Timestamped YouTube transcripts from any video URL.

Public API:
    resolve_transcript()    Run the whole pipeline: input → TranscriptResult.
    resolve_identifier()    Validate input offline: URL/ID → video ID or None.
    extract()               One-call interface (URL → rendered text/SRT/JSON).
    select_track()          The caption-track selection policy.
    parse_timedtext()       Parse a timed-text XML document into segments.
    format_text(), format_srt(), format_json(), parse_srt()
                            Output renderers (and SRT reader).
    fetch_video_metadata()  Title/author lookup via oEmbed.

Errors:
    PipelineError           The single exception type; its `kind` is an ErrorKind
                            (INVALID_URL, RATE_LIMITED, VIDEO_UNAVAILABLE,
                            NO_TRANSCRIPT, SERVER_ERROR).

Usage:
    from yt_scribe import resolve_transcript
    result = resolve_transcript("https://youtu.be/dQw4w9WgXcQ")
    print(result.segments[0].text)
"""

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.formatters import format_json, format_srt, format_text, parse_srt
from yt_scribe.metadata import VideoMetadata, fetch_video_metadata
from yt_scribe.models import CaptionTrack, TranscriptResult, TranscriptSegment
from yt_scribe.pipeline import extract, resolve_identifier, resolve_transcript
from yt_scribe.selector import select_track
from yt_scribe.timedtext import parse_timedtext

__all__ = [
    "resolve_transcript",
    "resolve_identifier",
    "extract",
    "select_track",
    "parse_timedtext",
    "format_text",
    "format_srt",
    "format_json",
    "parse_srt",
    "fetch_video_metadata",
    "VideoMetadata",
    "CaptionTrack",
    "TranscriptSegment",
    "TranscriptResult",
    "ErrorKind",
    "PipelineError",
]
