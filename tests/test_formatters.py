"""
test_formatters.py — Tests for text / SRT / JSON output and SRT parsing.
"""

from __future__ import annotations

import json

import pytest

from yt_scribe.formatters import (
    format_json,
    format_srt,
    format_text,
    ms_to_srt_timestamp,
    ms_to_timestamp,
    parse_srt,
    render,
)
from yt_scribe.metadata import VideoMetadata
from yt_scribe.models import CaptionTrack, TranscriptResult, TranscriptSegment

_SEGMENTS = (
    TranscriptSegment(text="Hello world", start_ms=0, duration_ms=1500),
    TranscriptSegment(text="Second line", start_ms=1500, duration_ms=2000),
    TranscriptSegment(text="An hour in", start_ms=3_725_042, duration_ms=0),
)

_RESULT = TranscriptResult(
    video_id="dQw4w9WgXcQ",
    language_code="en",
    language_name="English",
    is_auto_generated=False,
    tracks=(CaptionTrack("en", "English", False, "https://yt/tt?lang=en"),),
    segments=_SEGMENTS,
)

_METADATA = VideoMetadata(
    video_id="dQw4w9WgXcQ",
    title="Never Gonna Give You Up",
    author="Rick Astley",
    thumbnail_url="https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
)


class TestTimestamps:
    """Human and SRT timestamp rendering."""

    @pytest.mark.parametrize(("ms", "label"), [
        (0, "0:00"),
        (92_500, "1:32"),
        (3_599_999, "59:59"),
        (3_725_042, "1:02:05"),
    ])
    def test_human(self, ms: int, label: str) -> None:
        assert ms_to_timestamp(ms) == label

    @pytest.mark.parametrize(("ms", "label"), [
        (0, "00:00:00,000"),
        (1500, "00:00:01,500"),
        (3_725_042, "01:02:05,042"),
    ])
    def test_srt(self, ms: int, label: str) -> None:
        assert ms_to_srt_timestamp(ms) == label


class TestFormatText:
    """Plain text: one line per segment."""

    def test_joins_lines(self) -> None:
        assert format_text(_SEGMENTS) == "Hello world\nSecond line\nAn hour in"

    def test_empty(self) -> None:
        assert format_text([]) == ""


class TestFormatSrt:
    """SRT rendering and reading it back."""

    def test_cue_layout(self) -> None:
        srt = format_srt(_SEGMENTS[:2])
        assert srt == (
            "1\n00:00:00,000 --> 00:00:01,500\nHello world\n"
            "\n"
            "2\n00:00:01,500 --> 00:00:03,500\nSecond line\n"
        )

    def test_zero_duration_is_zero_length_cue(self) -> None:
        assert "01:02:05,042 --> 01:02:05,042" in format_srt(_SEGMENTS)

    def test_round_trip(self) -> None:
        """Rendering and re-parsing recovers text and exact millisecond timing."""
        assert parse_srt(format_srt(_SEGMENTS)) == list(_SEGMENTS)

    def test_parse_crlf_and_multiline_text(self) -> None:
        content = "1\r\n00:00:01,000 --> 00:00:02,250\r\nfirst line\r\nsecond line\r\n\r\n"
        assert parse_srt(content) == [
            TranscriptSegment(text="first line second line", start_ms=1000, duration_ms=1250),
        ]

    def test_parse_without_cue_numbers(self) -> None:
        content = "00:00:01,000 --> 00:00:02,000\nhi\n"
        assert parse_srt(content)[0].text == "hi"

    def test_parse_empty(self) -> None:
        assert parse_srt("  \n") == []

    def test_parse_bad_timing(self) -> None:
        with pytest.raises(ValueError):
            parse_srt("1\n00:00:01 --> 00:00:02\nhi\n")

    def test_parse_end_before_start(self) -> None:
        with pytest.raises(ValueError):
            parse_srt("1\n00:00:05,000 --> 00:00:02,000\nhi\n")


class TestFormatJson:
    """JSON output shape."""

    def test_structure(self) -> None:
        data = json.loads(format_json(_RESULT))

        assert data["video_id"] == "dQw4w9WgXcQ"
        assert data["language"] == "en"
        assert data["is_generated"] is False
        assert data["segment_count"] == 3
        assert data["segments"][1] == {
            "text": "Second line",
            "start_ms": 1500,
            "duration_ms": 2000,
            "timestamp": "0:01",
        }
        assert data["segments"][2]["timestamp"] == "1:02:05"
        assert "title" not in data
        assert "author" not in data

    def test_with_metadata(self) -> None:
        data = json.loads(format_json(_RESULT, _METADATA))

        assert data["title"] == "Never Gonna Give You Up"
        assert data["author"] == "Rick Astley"
        assert list(data)[:3] == ["video_id", "title", "author"]
        assert data["segment_count"] == 3

    def test_non_ascii_kept_verbatim(self) -> None:
        meta = VideoMetadata("dQw4w9WgXcQ", "Führung – 講演", "Zoë", "https://i.ytimg.com/x.jpg")
        assert "Führung – 講演" in format_json(_RESULT, meta)


class TestRender:
    """Dispatch by format name."""

    def test_each_format(self) -> None:
        assert render(_RESULT, "text") == format_text(_SEGMENTS)
        assert render(_RESULT, "srt") == format_srt(_SEGMENTS)
        assert render(_RESULT, "json") == format_json(_RESULT)

    def test_metadata_only_affects_json(self) -> None:
        assert render(_RESULT, "json", _METADATA) == format_json(_RESULT, _METADATA)
        assert render(_RESULT, "text", _METADATA) == format_text(_SEGMENTS)
        assert render(_RESULT, "srt", _METADATA) == format_srt(_SEGMENTS)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            render(_RESULT, "docx")
