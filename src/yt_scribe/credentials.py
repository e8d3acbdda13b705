"""
credentials.py — Scrape a short-lived innertube API key from the watch page.

The key is embedded in the page's bootstrap config and is needed to call the
internal player API.  It is treated as opaque: returned verbatim, never parsed
and never logged.
"""

from __future__ import annotations

import logging

import requests

from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.upstream import (
    ACCEPT_LANGUAGE,
    API_KEY_PATTERN,
    BOT_CHALLENGE_MARKER,
    CONSENT_COOKIE,
    USER_AGENT,
    WATCH_PAGE_TIMEOUT,
    WATCH_URL,
)

logger = logging.getLogger(__name__)


def fetch_watch_page(video_id: str, session: requests.Session | None = None) -> str:
    """
    GET the public watch page for a video, posing as a desktop browser.

    The HTTP status is not checked: YouTube answers missing videos with a
    normal-looking page, so the content decides what happened.

    Raises:
        PipelineError(SERVER_ERROR): On timeout or connection failure.
    """
    http = session or requests
    try:
        resp = http.get(
            WATCH_URL,
            params={"v": video_id},
            headers={
                "User-Agent": USER_AGENT,
                "Accept-Language": ACCEPT_LANGUAGE,
                "Cookie": CONSENT_COOKIE,
            },
            timeout=WATCH_PAGE_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise PipelineError(
            ErrorKind.SERVER_ERROR, f"Could not load the YouTube watch page: {exc}"
        ) from exc
    return resp.text


def extract_api_key(html: str) -> str:
    """
    Pull the innertube key out of watch-page HTML.

    Raises:
        PipelineError(RATE_LIMITED):      The page is a captcha challenge.
        PipelineError(VIDEO_UNAVAILABLE): No key in the page.
    """
    # A challenge page is YouTube throttling us, not a property of the video,
    # so it is checked before looking for the key.
    if BOT_CHALLENGE_MARKER in html:
        raise PipelineError(
            ErrorKind.RATE_LIMITED, "YouTube rate limit reached. Please try again later."
        )

    match = API_KEY_PATTERN.search(html)
    if not match:
        raise PipelineError(
            ErrorKind.VIDEO_UNAVAILABLE,
            "Could not extract API key. The video may be unavailable.",
        )
    return match.group(1)


def fetch_api_key(video_id: str, session: requests.Session | None = None) -> str:
    """
    Fetch the watch page for `video_id` and return its innertube API key.

    Args:
        video_id: The 11-character YouTube video ID.
        session:  Optional requests session to send the request through.

    Returns:
        The API key string, exactly as found in the page.

    Raises:
        PipelineError: RATE_LIMITED, VIDEO_UNAVAILABLE or SERVER_ERROR.
    """
    html = fetch_watch_page(video_id, session=session)
    api_key = extract_api_key(html)
    logger.debug("Scraped innertube API key for %s", video_id)
    return api_key
