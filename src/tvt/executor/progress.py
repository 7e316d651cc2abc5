"""Single-line progress bar for tracked ffmpeg runs."""

from __future__ import annotations

import sys
from typing import TextIO

from tvt.core.formatting import format_eta
from tvt.tools.ffmpeg_progress import ProgressSnapshot

BAR_WIDTH = 30
FILLED = "█"
EMPTY = "░"


def render_progress_line(snapshot: ProgressSnapshot, bar_width: int = BAR_WIDTH) -> str:
    """Render "[bar] 50.0% - 2.0x speed (ETA: 2s)" for a snapshot."""
    filled = min(bar_width, int(snapshot.percent / 100 * bar_width))
    bar = FILLED * filled + EMPTY * (bar_width - filled)
    line = f"[{bar}] {snapshot.percent:.1f}% - {snapshot.speed:.1f}x speed"
    if snapshot.eta_seconds is not None:
        line += f" (ETA: {format_eta(snapshot.eta_seconds)})"
    return line


class ProgressRenderer:
    """Redraws one terminal line in place using carriage returns.

    The line is cleared by finish(), which callers invoke before writing
    any final status message.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        enabled: bool = True,
        bar_width: int = BAR_WIDTH,
    ) -> None:
        self._stream = stream
        self._enabled = enabled
        self._bar_width = bar_width
        self._last_len = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    @property
    def has_output(self) -> bool:
        return self._last_len > 0

    def update(self, snapshot: ProgressSnapshot) -> None:
        if not self._enabled:
            return
        line = render_progress_line(snapshot, self._bar_width)
        # Pad so a shorter line fully covers the previous one
        padding = " " * max(0, self._last_len - len(line))
        self.stream.write(f"\r{line}{padding}")
        self.stream.flush()
        self._last_len = max(self._last_len, len(line))

    def finish(self) -> None:
        """Clear the progress line if anything was drawn."""
        if not self._enabled or not self._last_len:
            return
        self.stream.write("\r" + " " * self._last_len + "\r")
        self.stream.flush()
        self._last_len = 0
