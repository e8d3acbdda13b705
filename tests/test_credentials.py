"""
test_credentials.py — Tests for scraping the innertube API key.

The watch page is faked with a MagicMock session so no network is needed.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from yt_scribe.credentials import extract_api_key, fetch_api_key
from yt_scribe.errors import ErrorKind, PipelineError
from yt_scribe.upstream import CONSENT_COOKIE, WATCH_PAGE_TIMEOUT

_WATCH_HTML = """
<html><script>ytcfg.set({"INNERTUBE_API_KEY": "AIzaSyA-test_KEY123", "INNERTUBE_CLIENT_NAME": "WEB"});</script></html>
"""

_CAPTCHA_HTML = """
<html><form><div class="g-recaptcha" data-sitekey="x"></div>
"INNERTUBE_API_KEY":"AIzaShouldNotBeUsed"</form></html>
"""


def _session_returning(html: str) -> MagicMock:
    """A fake requests.Session whose get() returns `html`."""
    session = MagicMock()
    session.get.return_value = MagicMock(text=html, status_code=200, ok=True)
    return session


class TestExtractApiKey:
    """Tests for pattern-matching the key out of page HTML."""

    def test_key_found(self) -> None:
        assert extract_api_key(_WATCH_HTML) == "AIzaSyA-test_KEY123"

    def test_key_without_spaces(self) -> None:
        assert extract_api_key('"INNERTUBE_API_KEY":"abc_DEF-123"') == "abc_DEF-123"

    def test_captcha_is_rate_limited(self) -> None:
        """A challenge page wins even if it happens to contain a key."""
        with pytest.raises(PipelineError) as excinfo:
            extract_api_key(_CAPTCHA_HTML)
        assert excinfo.value.kind is ErrorKind.RATE_LIMITED

    def test_missing_key_is_video_unavailable(self) -> None:
        with pytest.raises(PipelineError) as excinfo:
            extract_api_key("<html><body>This video isn't available anymore</body></html>")
        assert excinfo.value.kind is ErrorKind.VIDEO_UNAVAILABLE


class TestFetchApiKey:
    """Tests for the watch-page request itself."""

    def test_request_shape(self) -> None:
        """The page is requested with consent cookie, English, and a timeout."""
        session = _session_returning(_WATCH_HTML)

        assert fetch_api_key("dQw4w9WgXcQ", session=session) == "AIzaSyA-test_KEY123"

        session.get.assert_called_once()
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"v": "dQw4w9WgXcQ"}
        assert kwargs["headers"]["Cookie"] == CONSENT_COOKIE
        assert kwargs["headers"]["Accept-Language"].startswith("en")
        assert "Mozilla" in kwargs["headers"]["User-Agent"]
        assert kwargs["timeout"] == WATCH_PAGE_TIMEOUT

    def test_error_status_still_inspects_content(self) -> None:
        """A 404 page without a key is VIDEO_UNAVAILABLE, not SERVER_ERROR."""
        session = MagicMock()
        session.get.return_value = MagicMock(text="<html>404</html>", status_code=404, ok=False)

        with pytest.raises(PipelineError) as excinfo:
            fetch_api_key("dQw4w9WgXcQ", session=session)
        assert excinfo.value.kind is ErrorKind.VIDEO_UNAVAILABLE

    def test_timeout_is_server_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(PipelineError) as excinfo:
            fetch_api_key("dQw4w9WgXcQ", session=session)
        assert excinfo.value.kind is ErrorKind.SERVER_ERROR
        assert isinstance(excinfo.value.__cause__, requests.Timeout)
