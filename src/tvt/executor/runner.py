"""FFmpeg process runner with optional progress tracking.

Runs exactly one ffmpeg process per call, in one of two modes:

- PASS_THROUGH: ffmpeg's stderr goes straight to the terminal; nothing is
  parsed.
- TRACKED: stderr is read line by line on a background thread and handed
  to the calling thread through a queue. Stats lines become progress
  snapshots; the last non-stats lines are kept as diagnostics for errors.

Both modes honour an optional timeout and a cancellation event. On expiry
or cancellation the child is killed and ExecutionError (returncode -1) is
raised.
"""

from __future__ import annotations

import logging
import queue
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import threading
import time
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from tvt.exceptions import ExecutionError, ToolNotAvailableError
from tvt.executor.progress import ProgressRenderer
from tvt.tools.discovery import require_tool
from tvt.tools.ffmpeg_progress import (
    ProgressSnapshot,
    compute_progress,
    parse_stats_line,
)

logger = logging.getLogger(__name__)


class RunMode(Enum):
    PASS_THROUGH = "pass_through"
    TRACKED = "tracked"


@dataclass
class RunResult:
    """Outcome of a successful ffmpeg run."""

    returncode: int
    elapsed_seconds: float
    last_progress: ProgressSnapshot | None = None
    diagnostics: list[str] = field(default_factory=list)


class _Stopped(Exception):
    """Internal signal: the deadline passed or the run was cancelled."""

    def __init__(self, why: str) -> None:
        self.why = why
        super().__init__(why)


class FFmpegRunner:
    """Spawn ffmpeg with a built argument vector and wait for it.

    The argument vector never includes the binary; the runner prepends the
    resolved ffmpeg path (and "-stats_period" in tracked mode).
    """

    DEFAULT_STATS_PERIOD: float = 0.2
    POLL_INTERVAL: float = 0.1
    STDERR_DRAIN_TIMEOUT: float = 5.0
    DIAGNOSTIC_TAIL: int = 20

    def __init__(
        self,
        ffmpeg_path: Path | None = None,
        timeout: float | None = None,
        stats_period: float = DEFAULT_STATS_PERIOD,
    ) -> None:
        """Initialize the runner.

        Args:
            ffmpeg_path: Configured ffmpeg path; PATH is searched otherwise.
            timeout: Maximum seconds a run may take. None means no limit.
            stats_period: Seconds between ffmpeg stats lines in tracked mode.
        """
        self._configured_path = ffmpeg_path
        self._tool_path: Path | None = None
        self._timeout = timeout
        self._stats_period = stats_period

    @property
    def tool_path(self) -> Path:
        """Path to ffmpeg, resolved on first use.

        Raises:
            ExecutionError: If ffmpeg is not available.
        """
        if self._tool_path is None:
            try:
                self._tool_path = require_tool("ffmpeg", self._configured_path)
            except ToolNotAvailableError as e:
                raise ExecutionError(str(e)) from e
        return self._tool_path

    def build_command(self, args: Sequence[str], mode: RunMode) -> list[str]:
        cmd = [str(self.tool_path)]
        if mode is RunMode.TRACKED:
            cmd.extend(["-stats_period", f"{self._stats_period:g}"])
        cmd.extend(args)
        return cmd

    def run(
        self,
        args: Sequence[str],
        mode: RunMode = RunMode.TRACKED,
        *,
        total_seconds: float = 0.0,
        renderer: ProgressRenderer | None = None,
        on_progress: Callable[[ProgressSnapshot], None] | None = None,
        cancel: threading.Event | None = None,
    ) -> RunResult:
        """Run ffmpeg to completion.

        Args:
            args: Argument vector from the command builder.
            mode: PASS_THROUGH or TRACKED.
            total_seconds: Input duration used to compute percentages.
            renderer: Progress bar to draw on (tracked mode only).
            on_progress: Called with each progress snapshot (tracked mode).
            cancel: Set this event to stop the run early.

        Returns:
            RunResult for a zero exit status.

        Raises:
            ExecutionError: If ffmpeg is missing, cannot start, exits
                non-zero, times out, or is cancelled.
        """
        cmd = self.build_command(args, mode)
        logger.debug(
            "Executing command: %s",
            " ".join(cmd),
            extra={"command": "ffmpeg", "mode": mode.value},
        )
        deadline = (
            time.monotonic() + self._timeout if self._timeout is not None else None
        )
        if mode is RunMode.PASS_THROUGH:
            return self._run_pass_through(cmd, deadline, cancel)
        return self._run_tracked(
            cmd, deadline, cancel, total_seconds, renderer, on_progress
        )

    def _spawn(self, cmd: list[str], **kwargs: Any) -> subprocess.Popen:
        try:
            return subprocess.Popen(  # nosec B603 - args come from the builder
                cmd, stdin=subprocess.DEVNULL, **kwargs
            )
        except OSError as e:
            logger.error("Failed to start ffmpeg: %s", e)
            raise ExecutionError(f"Failed to start ffmpeg: {e}") from e

    def _check_stop(
        self, deadline: float | None, cancel: threading.Event | None
    ) -> None:
        if cancel is not None and cancel.is_set():
            raise _Stopped("cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise _Stopped(f"timed out after {self._timeout:g}s")

    def _wait(
        self,
        process: subprocess.Popen,
        deadline: float | None,
        cancel: threading.Event | None,
    ) -> int:
        while True:
            self._check_stop(deadline, cancel)
            try:
                return process.wait(timeout=self.POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                continue

    def _kill(self, process: subprocess.Popen, why: str) -> ExecutionError:
        logger.warning("ffmpeg %s; killing process %d", why, process.pid)
        process.kill()
        process.wait()
        return ExecutionError(f"ffmpeg {why}", returncode=-1)

    def _run_pass_through(
        self,
        cmd: list[str],
        deadline: float | None,
        cancel: threading.Event | None,
    ) -> RunResult:
        start = time.monotonic()
        process = self._spawn(cmd)
        try:
            rc = self._wait(process, deadline, cancel)
        except _Stopped as stop:
            raise self._kill(process, stop.why) from None

        elapsed = time.monotonic() - start
        if rc != 0:
            logger.error("ffmpeg exited with code %d", rc)
            raise ExecutionError(f"ffmpeg exited with code {rc}", returncode=rc)
        return RunResult(returncode=rc, elapsed_seconds=elapsed)

    def _run_tracked(
        self,
        cmd: list[str],
        deadline: float | None,
        cancel: threading.Event | None,
        total_seconds: float,
        renderer: ProgressRenderer | None,
        on_progress: Callable[[ProgressSnapshot], None] | None,
    ) -> RunResult:
        start = time.monotonic()
        # Text mode reads "\r"-terminated stats lines as separate lines
        process = self._spawn(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )

        lines: queue.Queue[str | None] = queue.Queue()

        def read_stderr() -> None:
            try:
                assert process.stderr is not None
                for raw in process.stderr:
                    lines.put(raw)
            except (ValueError, OSError) as e:
                # Pipe closed under us after a kill
                logger.debug("Stderr reader stopped: %s", e)
            finally:
                lines.put(None)

        reader = threading.Thread(target=read_stderr, daemon=True)
        reader.start()

        diagnostics: deque[str] = deque(maxlen=self.DIAGNOSTIC_TAIL)
        last: ProgressSnapshot | None = None

        def handle(raw: str) -> None:
            nonlocal last
            text = raw.strip()
            if not text:
                return
            progress = parse_stats_line(text)
            if progress is None:
                diagnostics.append(text)
                return
            last = compute_progress(progress, total_seconds)
            if renderer is not None:
                renderer.update(last)
            if on_progress is not None:
                try:
                    on_progress(last)
                except Exception as e:
                    logger.warning("Progress callback error: %s", e)

        try:
            while True:
                self._check_stop(deadline, cancel)
                try:
                    raw = lines.get(timeout=self.POLL_INTERVAL)
                except queue.Empty:
                    continue
                if raw is None:
                    break  # stderr closed
                handle(raw)
            rc = self._wait(process, deadline, cancel)
        except _Stopped as stop:
            error = self._kill(process, stop.why)
            reader.join(timeout=2.0)
            if renderer is not None:
                renderer.finish()
            error.diagnostics = list(diagnostics)
            raise error from None

        reader.join(timeout=self.STDERR_DRAIN_TIMEOUT)
        while True:
            try:
                raw = lines.get_nowait()
            except queue.Empty:
                break
            if raw is not None:
                handle(raw)

        if renderer is not None:
            renderer.finish()

        elapsed = time.monotonic() - start
        if rc != 0:
            logger.error(
                "ffmpeg exited with code %d: %s",
                rc,
                diagnostics[-1] if diagnostics else "(no output)",
            )
            raise ExecutionError(
                f"ffmpeg exited with code {rc}",
                returncode=rc,
                diagnostics=list(diagnostics),
            )

        logger.debug(
            "Command completed",
            extra={
                "command": "ffmpeg",
                "elapsed_seconds": round(elapsed, 3),
                "returncode": rc,
            },
        )
        return RunResult(
            returncode=rc,
            elapsed_seconds=elapsed,
            last_progress=last,
            diagnostics=list(diagnostics),
        )
