"""Execution of built ffmpeg commands."""

from tvt.executor.progress import ProgressRenderer, render_progress_line
from tvt.executor.runner import FFmpegRunner, RunMode, RunResult

__all__ = [
    "FFmpegRunner",
    "ProgressRenderer",
    "RunMode",
    "RunResult",
    "render_progress_line",
]
