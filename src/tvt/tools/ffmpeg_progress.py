"""FFmpeg stats-line parsing.

With "-stats_period" ffmpeg periodically writes a stats line to stderr:

    frame= 1234 fps= 30 q=28.0 size=  1024kB time=00:01:23.45 bitrate=... speed=2.0x

Only the elapsed output time and the speed multiplier drive progress; the
frame and fps fields are kept when present but never required, so audio-only
jobs (which have no frame counter) are tracked too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

TIME_PATTERN = re.compile(r"time=(\d{2}):(\d{2}):(\d{2})\.(\d{2})")
SPEED_PATTERN = re.compile(r"speed=\s*([0-9.]+)x")
FRAME_PATTERN = re.compile(r"frame=\s*(\d+)")
FPS_PATTERN = re.compile(r"fps=\s*([\d.]+)")


@dataclass(frozen=True)
class FFmpegProgress:
    """Values parsed from one stats line."""

    out_time_us: int  # Output time in microseconds
    speed: float = 0.0
    frame: int | None = None
    fps: float | None = None

    @property
    def out_time_seconds(self) -> float:
        return self.out_time_us / 1_000_000


@dataclass(frozen=True)
class ProgressSnapshot:
    """Progress of a running job relative to the input duration."""

    percent: float
    elapsed_seconds: float
    speed: float
    eta_seconds: float | None = None


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def parse_stats_line(line: str) -> FFmpegProgress | None:
    """Parse an ffmpeg stderr stats line.

    Args:
        line: One line of ffmpeg stderr.

    Returns:
        Parsed FFmpegProgress, or None when the line carries no
        "time=HH:MM:SS.cc" token. Lines that do not match are not errors.
    """
    time_match = TIME_PATTERN.search(line)
    if not time_match:
        return None

    hours, minutes, seconds, centiseconds = (int(g) for g in time_match.groups())
    out_time_us = (
        hours * 3600 + minutes * 60 + seconds
    ) * 1_000_000 + centiseconds * 10_000

    speed = 0.0
    speed_match = SPEED_PATTERN.search(line)
    if speed_match:
        speed = _to_float(speed_match.group(1)) or 0.0

    frame_match = FRAME_PATTERN.search(line)
    fps_match = FPS_PATTERN.search(line)
    return FFmpegProgress(
        out_time_us=out_time_us,
        speed=speed,
        frame=int(frame_match.group(1)) if frame_match else None,
        fps=_to_float(fps_match.group(1)) if fps_match else None,
    )


def compute_progress(
    progress: FFmpegProgress, total_seconds: float
) -> ProgressSnapshot:
    """Relate a stats line to the total input duration.

    The percentage is clamped to [0, 100] and is 0 when the duration is
    unknown. An ETA is produced only when the speed is positive and the
    elapsed time is still below the total.
    """
    elapsed = progress.out_time_seconds
    if total_seconds <= 0:
        percent = 0.0
    else:
        percent = min(100.0, max(0.0, elapsed / total_seconds * 100))

    eta = None
    if progress.speed > 0 and elapsed < total_seconds:
        eta = (total_seconds - elapsed) / progress.speed

    return ProgressSnapshot(
        percent=percent,
        elapsed_seconds=elapsed,
        speed=progress.speed,
        eta_seconds=eta,
    )
