"""
metadata.py — Fetch display metadata (title, author) for a video.

The transcript pipeline knows nothing about a video beyond its captions.
This module fills that gap for display purposes via YouTube's public oEmbed
endpoint, which needs no scraping and no API key.  It is independent of
the pipeline: a failure here never affects transcript extraction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.upstream import (
    OEMBED_TIMEOUT,
    OEMBED_URL,
    THUMBNAIL_URL,
    USER_AGENT,
    WATCH_URL,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VideoMetadata:
    """
    Display metadata for a single YouTube video.

    Attributes:
        video_id:      The 11-character YouTube video identifier.
        title:         The video title ("Unknown Title" if oEmbed omits it).
        author:        The channel name ("Unknown" if oEmbed omits it).
        thumbnail_url: The high-quality default thumbnail for the video.
    """
    video_id: str
    title: str
    author: str
    thumbnail_url: str

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "title": self.title,
            "author": self.author,
            "thumbnail": self.thumbnail_url,
        }


def fetch_video_metadata(
    video_id: str,
    session: requests.Session | None = None,
) -> VideoMetadata:
    """
    Look up a video's title and author through oEmbed.

    Args:
        video_id: The 11-character YouTube video ID.
        session:  Optional requests session.

    Returns:
        A VideoMetadata instance.

    Raises:
        PipelineError(VIDEO_UNAVAILABLE): oEmbed couldn't be reached, answered
            with an error status, or didn't return a JSON object.  oEmbed
            answers private and deleted videos with 401/404, so all of these
            are reported as "not found".
    """
    http = session or requests
    try:
        resp = http.get(
            OEMBED_URL,
            params={"url": f"{WATCH_URL}?v={video_id}", "format": "json"},
            headers={"User-Agent": USER_AGENT},
            timeout=OEMBED_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.debug("oEmbed lookup failed for %s: %s", video_id, exc)
        raise PipelineError(
            ErrorKind.VIDEO_UNAVAILABLE,
            "Video not found. It may be private, removed, or the URL is incorrect.",
        ) from exc

    if not isinstance(data, dict):
        raise PipelineError(
            ErrorKind.VIDEO_UNAVAILABLE,
            "Video not found. It may be private, removed, or the URL is incorrect.",
        )

    return VideoMetadata(
        video_id=video_id,
        title=data.get("title") or "Unknown Title",
        author=data.get("author_name") or "Unknown",
        thumbnail_url=THUMBNAIL_URL.format(video_id=video_id),
    )
