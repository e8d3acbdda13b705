"""
selector.py — Pick one caption track from a video's catalog.

The choice is deterministic:
    - a requested language must match a track's language code exactly;
    - otherwise the first human-authored track wins;
    - otherwise (every track is auto-generated) the first track.
"""

from __future__ import annotations

from collections.abc import Sequence

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.models import CaptionTrack


def select_track(
    tracks: Sequence[CaptionTrack],
    language: str | None = None,
) -> CaptionTrack:
    """
    Choose the caption track to fetch.

    Args:
        tracks:   The catalog, in upstream order.  Must not be empty.
        language: Optional language code (case-sensitive, e.g. "en", "pt-BR").

    Returns:
        The selected CaptionTrack.

    Raises:
        PipelineError(NO_TRANSCRIPT): The requested language isn't in the
            catalog (message lists the available codes), or the catalog is empty.
    """
    if not tracks:
        raise PipelineError(ErrorKind.NO_TRANSCRIPT, "No captions are available for this video.")

    if language:
        for track in tracks:
            if track.language_code == language:
                return track
        available = ", ".join(track.language_code for track in tracks)
        raise PipelineError(
            ErrorKind.NO_TRANSCRIPT,
            f"No transcript in '{language}'. Available: {available}",
        )

    return next((track for track in tracks if not track.is_auto_generated), tracks[0])
