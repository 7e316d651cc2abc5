"""Media description and request parameter models.

MediaInfo and its streams are built once by the introspector and never
mutated afterwards. CustomParameters holds caller-supplied strings exactly
as given; each field is validated on its own and never joined with others.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
from fractions import Fraction


@dataclass(frozen=True)
class VideoStream:
    """A video stream reported by ffprobe."""

    index: int
    codec: str
    width: int
    height: int
    frame_rate: str  # raw "num/den" expression, e.g. "30000/1001"
    pixel_format: str
    bitrate: int = 0

    @property
    def fps(self) -> float:
        """Frame rate as a float, or 0.0 if the expression is unusable."""
        ratio = frame_rate_ratio(self.frame_rate)
        return float(ratio) if ratio is not None else 0.0

    @property
    def aspect_ratio(self) -> float | None:
        if self.height <= 0:
            return None
        return self.width / self.height


@dataclass(frozen=True)
class AudioStream:
    """An audio stream reported by ffprobe."""

    index: int
    codec: str
    sample_rate: int
    channels: int
    bitrate: int = 0
    language: str = ""  # empty means undefined


@dataclass(frozen=True)
class MediaInfo:
    """Container-level description of a media file with its streams."""

    filename: str
    format_name: str
    duration: timedelta
    size: int
    bitrate: int
    video_streams: tuple[VideoStream, ...] = ()
    audio_streams: tuple[AudioStream, ...] = ()

    @property
    def duration_seconds(self) -> float:
        return self.duration.total_seconds()

    @property
    def has_audio(self) -> bool:
        return bool(self.audio_streams)

    @property
    def has_video(self) -> bool:
        return bool(self.video_streams)


@dataclass(frozen=True)
class CustomParameters:
    """Optional encoding overrides supplied by the caller.

    Empty string and None both mean "not specified".
    """

    video_codec: str | None = None
    audio_codec: str | None = None
    video_bitrate: str | None = None
    audio_bitrate: str | None = None
    resolution: str | None = None
    framerate: str | None = None

    def is_set(self) -> bool:
        """True if any field carries a value."""
        return any(getattr(self, f.name) for f in fields(self))

    def specified(self) -> dict[str, str]:
        """Map of field name to value for the fields that were given."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)
        }


@dataclass(frozen=True)
class AudioExtractionParameters:
    """Optional overrides for audio extraction."""

    codec: str | None = None
    bitrate: str | None = None
    sample_rate: str | None = None
    channels: str | None = None


def frame_rate_ratio(expression: str) -> Fraction | None:
    """Parse an ffprobe frame-rate expression ("num/den" or plain number).

    Returns:
        Exact ratio, or None for empty, malformed or zero-denominator input.
    """
    if not expression:
        return None
    num, sep, den = expression.partition("/")
    try:
        if not sep:
            return Fraction(num)
        denominator = int(den)
        if denominator == 0:
            return None
        return Fraction(int(num), denominator)
    except ValueError:
        return None
