"""Plans consumed by the command builder.

A plan holds every value that will reach the ffmpeg argument vector, already
resolved (codecs chosen, bitrates decided). The builder re-checks each value
before using it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConvertPlan:
    """Resolved settings for a container conversion."""

    input_path: Path
    output_path: Path
    video_codec: str
    audio_codec: str
    video_bitrate: str | None = None
    audio_bitrate: str | None = None
    resolution: str | None = None
    framerate: str | None = None

    @property
    def is_stream_copy(self) -> bool:
        return self.video_codec == "copy" and self.audio_codec == "copy"


@dataclass(frozen=True)
class ExtractPlan:
    """Resolved settings for an audio extraction."""

    input_path: Path
    output_path: Path
    codec: str
    bitrate: str | None = None
    sample_rate: str | None = None
    channels: str | None = None
    compression_level: str | None = None  # FLAC only
