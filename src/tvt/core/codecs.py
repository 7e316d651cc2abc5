"""Codec registry for conversion and audio extraction.

This module is the single source of truth for:
- Per-container default encoders
- Container stream-copy compatibility
- Preset and audio-quality tier tuning values
- Output extension to audio encoder mapping
"""

from __future__ import annotations

from dataclasses import dataclass

from tvt.domain.enums import Preset

# =============================================================================
# Container Defaults
# =============================================================================


@dataclass(frozen=True)
class ContainerDefaults:
    """Encoders used for a container when the caller names none."""

    video: str
    audio: str


CONTAINER_DEFAULTS: dict[str, ContainerDefaults] = {
    "mp4": ContainerDefaults("libx264", "aac"),
    "mov": ContainerDefaults("libx264", "aac"),
    "mkv": ContainerDefaults("libx264", "aac"),
    "webm": ContainerDefaults("libvpx-vp9", "libopus"),
    "avi": ContainerDefaults("libx264", "libmp3lame"),
}

FALLBACK_DEFAULTS = ContainerDefaults("libx264", "aac")

# Containers the convert operation may produce.
VIDEO_CONTAINERS: frozenset[str] = frozenset(CONTAINER_DEFAULTS)


def get_container_defaults(container: str) -> ContainerDefaults:
    """Return default encoders for a container (libx264/aac if unknown)."""
    return CONTAINER_DEFAULTS.get(container.lower(), FALLBACK_DEFAULTS)


# =============================================================================
# Stream Copy Compatibility
# =============================================================================
# Source codec names (as reported by ffprobe) that each container can hold
# without re-encoding. Matching is a case-insensitive substring test, so
# "h264" also covers profiles such as "h264_high".


@dataclass(frozen=True)
class CopyCompatibility:
    video: frozenset[str]
    audio: frozenset[str]
    accepts_any: bool = False


COPY_COMPATIBILITY: dict[str, CopyCompatibility] = {
    "mp4": CopyCompatibility(
        video=frozenset({"h264", "hevc"}), audio=frozenset({"aac", "mp3"})
    ),
    "mov": CopyCompatibility(
        video=frozenset({"h264", "hevc"}), audio=frozenset({"aac", "mp3"})
    ),
    "webm": CopyCompatibility(
        video=frozenset({"vp8", "vp9", "av1"}), audio=frozenset({"vorbis", "opus"})
    ),
    "mkv": CopyCompatibility(video=frozenset(), audio=frozenset(), accepts_any=True),
    "avi": CopyCompatibility(
        video=frozenset({"h264", "xvid", "divx"}), audio=frozenset({"mp3", "ac3"})
    ),
}


def _matches(codec: str, accepted: frozenset[str]) -> bool:
    codec = codec.lower()
    return any(name in codec for name in accepted)


def is_copy_compatible(video_codec: str, audio_codec: str, container: str) -> bool:
    """Check whether source codecs can be stream-copied into a container.

    Args:
        video_codec: Codec name of the first source video stream.
        audio_codec: Codec name of the first source audio stream.
        container: Target container extension (e.g., "mp4").

    Returns:
        True if both codecs are acceptable; False for unknown containers.
    """
    compat = COPY_COMPATIBILITY.get(container.lower())
    if compat is None:
        return False
    if compat.accepts_any:
        return True
    return _matches(video_codec, compat.video) and _matches(
        audio_codec, compat.audio
    )


# =============================================================================
# Preset Tuning
# =============================================================================


@dataclass(frozen=True)
class PresetBitrates:
    video: str
    audio: str


PRESET_BITRATES: dict[Preset, PresetBitrates] = {
    Preset.LOW: PresetBitrates(video="1M", audio="128k"),
    Preset.MEDIUM: PresetBitrates(video="2M", audio="192k"),
    Preset.HIGH: PresetBitrates(video="4M", audio="256k"),
}


# =============================================================================
# Audio Extraction
# =============================================================================

AUDIO_EXTENSION_CODECS: dict[str, str] = {
    "mp3": "libmp3lame",
    "aac": "aac",
    "m4a": "aac",
    "wav": "pcm_s16le",
    "flac": "flac",
    "ogg": "libvorbis",
}

# Output formats the extract operation may produce.
AUDIO_FORMATS: frozenset[str] = frozenset(AUDIO_EXTENSION_CODECS)

# Encoders that ignore a target bitrate.
LOSSLESS_AUDIO_CODECS: frozenset[str] = frozenset({"flac", "pcm_s16le"})

AUDIO_QUALITY_BITRATES: dict[Preset, str] = {
    Preset.LOW: "128k",
    Preset.MEDIUM: "192k",
    Preset.HIGH: "320k",
}

FLAC_COMPRESSION_LEVELS: dict[Preset, str] = {
    Preset.LOW: "0",
    Preset.MEDIUM: "5",
    Preset.HIGH: "8",
}
