"""
upstream.py — Everything yt-scribe knows about YouTube's internals.

YouTube's watch page markup, its internal player API ("innertube"), and the
timed-text endpoint are all undocumented and change without notice.  Every
URL, header, client identity and scraping pattern the pipeline relies on
lives here, so adapting to upstream drift touches this one file.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

WATCH_URL = "https://www.youtube.com/watch"
PLAYER_API_URL = "https://www.youtube.com/youtubei/v1/player"
OEMBED_URL = "https://www.youtube.com/oembed"
THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"

# Hosts recognised by the identifier resolver (compared after stripping "www.").
SHORT_LINK_HOST = "youtu.be"
MAIN_HOSTS = frozenset({"youtube.com", "m.youtube.com"})

# ---------------------------------------------------------------------------
# Request identity
# ---------------------------------------------------------------------------

# A desktop browser UA for the watch page; YouTube serves stripped-down or
# challenge pages to unknown agents.
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Pre-accepted consent cookies.  Without them EU visitors get the consent
# interstitial instead of the watch page.
CONSENT_COOKIE = "SOCS=CAESEwgDEgk2MTkxMjkyNjEaAmVuIAEaBgiA_LyaBg; CONSENT=PENDING+987"

# The player API is called as the Android app: the WEB client returns caption
# URLs that need extra signing.
INNERTUBE_CLIENT = {
    "clientName": "ANDROID",
    "clientVersion": "20.10.38",
}

# ---------------------------------------------------------------------------
# Timeouts (seconds)
# ---------------------------------------------------------------------------

WATCH_PAGE_TIMEOUT = 15
PLAYER_API_TIMEOUT = 15
TIMEDTEXT_TIMEOUT = 10
OEMBED_TIMEOUT = 10

# ---------------------------------------------------------------------------
# Scraping patterns
# ---------------------------------------------------------------------------

# A bare video ID is exactly 11 characters from the base64url alphabet.
BARE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Path shapes on the main site that carry the ID as the second segment.
PATH_ID_PATTERN = re.compile(r"^/(?:embed|v|shorts|live)/([A-Za-z0-9_-]{11})")

# Last-resort scan of the raw input.
FALLBACK_ID_PATTERN = re.compile(r"(?:v=|/|youtu\.be/)([A-Za-z0-9_-]{11})")

# Present on the "unusual traffic" page YouTube shows to throttled clients.
BOT_CHALLENGE_MARKER = 'class="g-recaptcha"'

# The innertube key embedded in the watch page's ytcfg bootstrap data.
API_KEY_PATTERN = re.compile(r'"INNERTUBE_API_KEY"\s*:\s*"([a-zA-Z0-9_-]+)"')

# One caption cue of the plain timed-text XML dialect:
#   <text start="1.5" dur="2.25">Hello &amp; welcome</text>
TEXT_ELEMENT_PATTERN = re.compile(
    r'<text\s+start="([^"]*?)"\s+dur="([^"]*?)"[^>]*?>([\s\S]*?)</text>'
)

# Any markup nested inside a cue (<i>, <font ...>, ...).
MARKUP_PATTERN = re.compile(r"<[^>]*>")

# Signatures of timed-text formats other than the plain dialect: srv3
# (<p t="..." d="...">) and json3.
ALTERNATE_FORMAT_PATTERN = re.compile(r'<p\s+t="|^\s*\{')

# Query parameter that switches the timed-text endpoint to another format.
FORMAT_PARAM = "fmt"

# Caption track "kind" for automatic speech recognition.
ASR_KIND = "asr"
