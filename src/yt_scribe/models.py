"""
models.py — Data structures passed between pipeline stages.

All three are frozen dataclasses: they are built fresh for every request
and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CaptionTrack:
    """
    One caption track offered for a video.

    Attributes:
        language_code:     YouTube's language tag (e.g. "en", "pt-BR").
        name:              Display label, already resolved from the rich-text
                           name field (falls back to language_code).
        is_auto_generated: True for speech-recognition ("asr") tracks.
        base_url:          Timed-text URL for this track's document.
    """
    language_code: str
    name: str
    is_auto_generated: bool
    base_url: str

    def to_dict(self) -> dict:
        return {
            "code": self.language_code,
            "name": self.name,
            "is_generated": self.is_auto_generated,
        }


@dataclass(frozen=True)
class TranscriptSegment:
    """A single caption cue: cleaned text plus timing in milliseconds."""
    text: str
    start_ms: int
    duration_ms: int

    @property
    def end_ms(self) -> int:
        return self.start_ms + self.duration_ms

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "start_ms": self.start_ms,
            "duration_ms": self.duration_ms,
        }


@dataclass(frozen=True)
class TranscriptResult:
    """
    Everything returned for one successful transcript request.

    `tracks` is the full catalog so a caller can offer language switching;
    `segments` is never empty.
    """
    video_id: str
    language_code: str
    language_name: str
    is_auto_generated: bool
    tracks: tuple[CaptionTrack, ...]
    segments: tuple[TranscriptSegment, ...]

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "language": self.language_code,
            "language_name": self.language_name,
            "is_generated": self.is_auto_generated,
            "available_languages": [track.to_dict() for track in self.tracks],
            "segment_count": len(self.segments),
            "segments": [segment.to_dict() for segment in self.segments],
        }
