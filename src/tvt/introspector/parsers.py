"""Pure parsing functions for ffprobe JSON output.

These functions turn ffprobe's report into tvt domain objects. They do no
I/O, so they are tested directly against fixture reports.
"""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any

import pydantic

from tvt.domain.models import AudioStream, MediaInfo, VideoStream
from tvt.exceptions import ProbeError, ProbeFailure
from tvt.introspector.schema import FFprobeReport, FFprobeStream

logger = logging.getLogger(__name__)

# ffprobe's tag for "language not specified"
UNDEFINED_LANGUAGE = "und"


def normalize_language(tag: str) -> str:
    """Return the language tag, or "" when it is missing or undefined."""
    tag = tag.strip()
    return "" if tag.lower() == UNDEFINED_LANGUAGE else tag


def parse_video_stream(stream: FFprobeStream) -> VideoStream:
    return VideoStream(
        index=stream.index,
        codec=stream.codec_name,
        width=stream.width,
        height=stream.height,
        frame_rate=stream.r_frame_rate,
        pixel_format=stream.pix_fmt,
        bitrate=stream.bit_rate,
    )


def parse_audio_stream(stream: FFprobeStream) -> AudioStream:
    return AudioStream(
        index=stream.index,
        codec=stream.codec_name,
        sample_rate=stream.sample_rate,
        channels=stream.channels,
        bitrate=stream.bit_rate,
        language=normalize_language(stream.tags.language),
    )


def parse_ffprobe_output(filename: str, output: str | dict[str, Any]) -> MediaInfo:
    """Build a MediaInfo from an ffprobe report.

    Streams other than video and audio (subtitles, data, attachments) are
    skipped. Report order is preserved within each stream kind.

    Args:
        filename: Path recorded in the resulting MediaInfo.
        output: Raw JSON text from ffprobe, or the already-decoded object.

    Returns:
        MediaInfo describing the file.

    Raises:
        ProbeError: UNPARSEABLE if the text is not JSON or does not match
            the expected report structure.
    """
    try:
        data = json.loads(output) if isinstance(output, str) else output
    except json.JSONDecodeError as e:
        raise ProbeError(
            f"Invalid ffprobe output for {filename}: {e}", ProbeFailure.UNPARSEABLE
        ) from e

    try:
        report = FFprobeReport.model_validate(data)
    except pydantic.ValidationError as e:
        raise ProbeError(
            f"Unexpected ffprobe report structure for {filename}: "
            f"{e.error_count()} problem(s), first: {e.errors()[0]['msg']}",
            ProbeFailure.UNPARSEABLE,
        ) from e

    video_streams: list[VideoStream] = []
    audio_streams: list[AudioStream] = []
    for stream in report.streams:
        if stream.codec_type == "video":
            video_streams.append(parse_video_stream(stream))
        elif stream.codec_type == "audio":
            audio_streams.append(parse_audio_stream(stream))
        else:
            logger.debug(
                "Skipping %s stream %d in %s",
                stream.codec_type or "unknown",
                stream.index,
                filename,
            )

    return MediaInfo(
        filename=filename,
        format_name=report.format.format_name,
        duration=timedelta(seconds=report.format.duration),
        size=report.format.size,
        bitrate=report.format.bit_rate,
        video_streams=tuple(video_streams),
        audio_streams=tuple(audio_streams),
    )
