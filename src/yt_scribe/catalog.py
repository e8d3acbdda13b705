"""
catalog.py — List a video's caption tracks via the internal player API.

One POST to /youtubei/v1/player, authenticated with the scraped key and
posing as the Android app, returns a large JSON document.  We only care
about two parts of it:

    playabilityStatus.status / .reason
    captions.playerCaptionsTracklistRenderer.captionTracks[]

Each raw track is turned into a CaptionTrack here, including resolving the
name field, which comes either as a plain string, {"simpleText": ...} or
{"runs": [{"text": ...}, ...]}.
"""

from __future__ import annotations

import logging

import requests

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.models import CaptionTrack
from yt_scribe.upstream import (
    ASR_KIND,
    INNERTUBE_CLIENT,
    PLAYER_API_TIMEOUT,
    PLAYER_API_URL,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

# Playability statuses that mean "exists but you can't have it".
_UNAVAILABLE_STATUSES = ("ERROR", "LOGIN_REQUIRED")


def _unexpected_shape() -> PipelineError:
    return PipelineError(
        ErrorKind.SERVER_ERROR, "YouTube API returned an unexpected response shape."
    )


# ---------------------------------------------------------------------------
# Player API request
# ---------------------------------------------------------------------------

def fetch_player_response(
    video_id: str,
    api_key: str,
    session: requests.Session | None = None,
) -> dict:
    """
    Call the innertube player endpoint for one video.

    Returns:
        The decoded JSON object.

    Raises:
        PipelineError(SERVER_ERROR): Network failure, non-2xx status, or a
            body that isn't a JSON object.
    """
    http = session or requests
    try:
        resp = http.post(
            PLAYER_API_URL,
            params={"key": api_key},
            headers={"User-Agent": USER_AGENT},
            json={
                "context": {"client": dict(INNERTUBE_CLIENT)},
                "videoId": video_id,
            },
            timeout=PLAYER_API_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise PipelineError(
            ErrorKind.SERVER_ERROR, f"Could not reach the YouTube API: {exc}"
        ) from exc

    if not resp.ok:
        raise PipelineError(
            ErrorKind.SERVER_ERROR, f"YouTube API returned status {resp.status_code}."
        )

    try:
        data = resp.json()
    except ValueError as exc:
        raise PipelineError(
            ErrorKind.SERVER_ERROR, "YouTube API returned a response that is not JSON."
        ) from exc

    if not isinstance(data, dict):
        raise _unexpected_shape()
    return data


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def track_display_name(name: object, fallback: str) -> str:
    """
    Resolve a caption track's name field to a plain string.

    Handles a bare string, {"simpleText": "..."} and {"runs": [{"text": "..."}]};
    anything else (including missing) gives `fallback`.
    """
    if isinstance(name, str) and name:
        return name
    if isinstance(name, dict):
        simple_text = name.get("simpleText")
        if isinstance(simple_text, str) and simple_text:
            return simple_text
        runs = name.get("runs")
        if isinstance(runs, list) and runs and isinstance(runs[0], dict):
            text = runs[0].get("text")
            if isinstance(text, str) and text:
                return text
    return fallback


def _to_caption_track(raw: object) -> CaptionTrack:
    """
    Build a CaptionTrack from one catalog entry.

    Raises:
        PipelineError(SERVER_ERROR): The entry isn't an object, or its
            languageCode / baseUrl aren't non-empty strings.
    """
    if not isinstance(raw, dict):
        raise _unexpected_shape()
    language_code = raw.get("languageCode")
    base_url = raw.get("baseUrl")
    if not isinstance(language_code, str) or not language_code:
        raise _unexpected_shape()
    if not isinstance(base_url, str) or not base_url:
        raise _unexpected_shape()

    return CaptionTrack(
        language_code=language_code,
        name=track_display_name(raw.get("name"), language_code),
        is_auto_generated=raw.get("kind") == ASR_KIND,
        base_url=base_url,
    )


def _reason(status: dict, default: str) -> str:
    reason = status.get("reason")
    return reason if isinstance(reason, str) and reason else default


def check_playability(data: dict) -> None:
    """
    Raise if the player response says the video can't be played.

    A missing playabilityStatus is treated as playable.

    Raises:
        PipelineError(VIDEO_UNAVAILABLE): With YouTube's own reason text
            when it gives one.
    """
    status = data.get("playabilityStatus")
    if not isinstance(status, dict) or not status:
        return

    state = status.get("status")
    if state in _UNAVAILABLE_STATUSES:
        raise PipelineError(ErrorKind.VIDEO_UNAVAILABLE, _reason(status, "Video unavailable"))
    if state != "OK":
        raise PipelineError(ErrorKind.VIDEO_UNAVAILABLE, _reason(status, "Video is unplayable."))


def extract_caption_tracks(data: dict) -> list[CaptionTrack]:
    """
    Pull the caption catalog out of a player response, in upstream order.

    Missing levels mean "no captions"; levels of the wrong type mean the
    response shape changed upstream.

    Raises:
        PipelineError(VIDEO_UNAVAILABLE): Playability status is not OK.
        PipelineError(NO_TRANSCRIPT):     No caption tracks at all.
        PipelineError(SERVER_ERROR):      A level or track entry has the wrong type.
    """
    check_playability(data)

    captions = data.get("captions") or {}
    if not isinstance(captions, dict):
        raise _unexpected_shape()
    renderer = captions.get("playerCaptionsTracklistRenderer") or {}
    if not isinstance(renderer, dict):
        raise _unexpected_shape()
    raw_tracks = renderer.get("captionTracks") or []
    if not isinstance(raw_tracks, list):
        raise _unexpected_shape()

    if not raw_tracks:
        raise PipelineError(
            ErrorKind.NO_TRANSCRIPT, "No captions are available for this video."
        )

    return [_to_caption_track(raw) for raw in raw_tracks]


def fetch_catalog(
    video_id: str,
    api_key: str,
    session: requests.Session | None = None,
) -> list[CaptionTrack]:
    """
    Fetch and parse the caption catalog for a video.

    Raises:
        PipelineError: SERVER_ERROR, VIDEO_UNAVAILABLE or NO_TRANSCRIPT.
    """
    data = fetch_player_response(video_id, api_key, session=session)
    tracks = extract_caption_tracks(data)
    logger.debug(
        "Video %s has %d caption track(s): %s",
        video_id,
        len(tracks),
        ", ".join(track.language_code for track in tracks),
    )
    return tracks
