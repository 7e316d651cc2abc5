"""External tool support: discovery of ffmpeg/ffprobe and stats parsing."""

from tvt.tools.discovery import ToolInfo, detect_tool, find_tool, require_tool
from tvt.tools.ffmpeg_progress import (
    FFmpegProgress,
    ProgressSnapshot,
    compute_progress,
    parse_stats_line,
)

__all__ = [
    "FFmpegProgress",
    "ProgressSnapshot",
    "ToolInfo",
    "compute_progress",
    "detect_tool",
    "find_tool",
    "parse_stats_line",
    "require_tool",
]
