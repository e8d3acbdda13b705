"""
test_errors.py — Tests for the error taxonomy and its HTTP mapping.
"""

from __future__ import annotations

import pytest

from yt_scribe.errors import ErrorKind, PipelineError


class TestErrorKind:
    """Each kind maps to a fixed boundary status."""

    @pytest.mark.parametrize(("kind", "status"), [
        (ErrorKind.INVALID_URL, 400),
        (ErrorKind.RATE_LIMITED, 429),
        (ErrorKind.VIDEO_UNAVAILABLE, 404),
        (ErrorKind.NO_TRANSCRIPT, 404),
        (ErrorKind.SERVER_ERROR, 500),
    ])
    def test_http_status(self, kind: ErrorKind, status: int) -> None:
        assert kind.http_status == status

    def test_kinds_compare_equal_to_their_names(self) -> None:
        assert ErrorKind.NO_TRANSCRIPT == "NO_TRANSCRIPT"
        assert len(ErrorKind) == 5


class TestPipelineError:
    """PipelineError carries kind, message and status."""

    def test_attributes(self) -> None:
        exc = PipelineError(ErrorKind.RATE_LIMITED, "slow down")
        assert exc.kind is ErrorKind.RATE_LIMITED
        assert exc.message == "slow down"
        assert str(exc) == "slow down"
        assert exc.http_status == 429

    def test_to_dict_preserves_message_verbatim(self) -> None:
        exc = PipelineError(ErrorKind.VIDEO_UNAVAILABLE, "Sign in to confirm your age")
        assert exc.to_dict() == {
            "error": "VIDEO_UNAVAILABLE",
            "message": "Sign in to confirm your age",
        }
