"""Formatters for MediaInfo.

Human-readable and JSON renderings shared by the info command and the
conversion summary.
"""

import json
from pathlib import Path
from typing import Any

from tvt.core.formatting import (
    channel_layout_name,
    format_bitrate,
    format_bytes,
    format_clock,
)
from tvt.domain.models import AudioStream, MediaInfo, VideoStream


def format_human(info: MediaInfo, detailed: bool = False) -> str:
    """Format media information for terminal or file output.

    Args:
        info: The media description to format.
        detailed: Include raw values, stream indexes, aspect ratio, channel
            layout and a technical summary.

    Returns:
        Multi-line report.
    """
    lines: list[str] = []

    lines.append("File Information:")
    lines.append(f"   Name: {Path(info.filename).name}")
    lines.append(f"   {'Full Path' if detailed else 'Path'}: {info.filename}")
    lines.append(f"   Format: {info.format_name.upper()}")
    lines.append(f"   Duration: {format_clock(info.duration)}")
    lines.append(f"   Size: {format_bytes(info.size)}")
    if info.bitrate > 0:
        lines.append(f"   Overall Bitrate: {format_bitrate(info.bitrate)}")
    if detailed:
        lines.append(f"   Duration (seconds): {info.duration_seconds:.3f}")
        lines.append(f"   Size (bytes): {info.size}")
        if info.bitrate > 0:
            lines.append(f"   Bitrate (bps): {info.bitrate}")
    lines.append("")

    if info.video_streams:
        lines.append("Video Streams:")
        for number, stream in enumerate(info.video_streams, start=1):
            lines.extend(_video_stream_lines(number, stream, detailed))
            lines.append("")

    if info.audio_streams:
        lines.append("Audio Streams:")
        for number, stream in enumerate(info.audio_streams, start=1):
            lines.extend(_audio_stream_lines(number, stream, detailed))
            lines.append("")

    if detailed:
        lines.append("Technical Summary:")
        total = len(info.video_streams) + len(info.audio_streams)
        lines.append(f"   Total Streams: {total}")
        lines.append(f"   Video Streams: {len(info.video_streams)}")
        lines.append(f"   Audio Streams: {len(info.audio_streams)}")
        if info.video_streams and info.duration_seconds > 0:
            frames = int(info.duration_seconds * info.video_streams[0].fps)
            lines.append(f"   Estimated Total Frames: {frames}")

    return "\n".join(lines).rstrip("\n")


def _video_stream_lines(
    number: int, stream: VideoStream, detailed: bool
) -> list[str]:
    lines = [f"   Stream {number}:"]
    if detailed:
        lines.append(f"     Stream Index: {stream.index}")
    lines.append(f"     Codec: {stream.codec}")
    lines.append(f"     Resolution: {stream.width}x{stream.height}")
    lines.append(f"     Frame Rate: {stream.frame_rate}")
    lines.append(f"     Pixel Format: {stream.pixel_format}")
    if stream.bitrate > 0:
        lines.append(f"     Bitrate: {format_bitrate(stream.bitrate)}")
        if detailed:
            lines.append(f"     Bitrate (bps): {stream.bitrate}")
    if detailed:
        if stream.aspect_ratio is not None:
            lines.append(f"     Aspect Ratio: {stream.aspect_ratio:.2f}:1")
        lines.append(f"     Total Pixels: {stream.width * stream.height}")
    return lines


def _audio_stream_lines(
    number: int, stream: AudioStream, detailed: bool
) -> list[str]:
    lines = [f"   Stream {number}:"]
    if detailed:
        lines.append(f"     Stream Index: {stream.index}")
    lines.append(f"     Codec: {stream.codec}")
    lines.append(f"     Sample Rate: {stream.sample_rate} Hz")
    lines.append(f"     Channels: {stream.channels}")
    if stream.bitrate > 0:
        lines.append(f"     Bitrate: {format_bitrate(stream.bitrate)}")
        if detailed:
            lines.append(f"     Bitrate (bps): {stream.bitrate}")
    if stream.language:
        lines.append(f"     Language: {stream.language}")
    elif detailed:
        lines.append("     Language: (undefined)")
    if detailed:
        lines.append(f"     Channel Layout: {channel_layout_name(stream.channels)}")
    return lines


def format_json(info: MediaInfo) -> str:
    """Format media information as indented JSON."""
    return json.dumps(media_info_to_dict(info), indent=2)


def media_info_to_dict(info: MediaInfo) -> dict[str, Any]:
    """Convert MediaInfo to a JSON-serializable dictionary."""
    return {
        "filename": info.filename,
        "format": info.format_name,
        "duration_seconds": info.duration_seconds,
        "size": info.size,
        "bitrate": info.bitrate,
        "video_streams": [
            {
                "index": s.index,
                "codec": s.codec,
                "width": s.width,
                "height": s.height,
                "frame_rate": s.frame_rate,
                "pixel_format": s.pixel_format,
                "bitrate": s.bitrate,
            }
            for s in info.video_streams
        ],
        "audio_streams": [
            {
                "index": s.index,
                "codec": s.codec,
                "sample_rate": s.sample_rate,
                "channels": s.channels,
                "bitrate": s.bitrate,
                "language": s.language or None,
            }
            for s in info.audio_streams
        ],
    }
