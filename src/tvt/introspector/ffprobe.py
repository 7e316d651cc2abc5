"""FFprobe-based implementation of the MediaProbe protocol."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from tvt.core.subprocess_utils import run_command
from tvt.domain.models import MediaInfo
from tvt.exceptions import ProbeError, ProbeFailure, ToolNotAvailableError
from tvt.introspector.parsers import parse_ffprobe_output
from tvt.tools.discovery import require_tool

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 60.0


class FFprobeIntrospector:
    """Describe media files by running ffprobe once per file.

    Each call is a single synchronous invocation; nothing is retried.
    """

    def __init__(
        self,
        ffprobe_path: Path | None = None,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Configured path to ffprobe. PATH is searched when
                it is None or does not point at a file.
            timeout: Seconds to wait for ffprobe before giving up.

        Raises:
            ProbeError: PROBER_MISSING if ffprobe cannot be found.
        """
        try:
            self._ffprobe_path = require_tool("ffprobe", ffprobe_path)
        except ToolNotAvailableError as e:
            raise ProbeError(str(e), ProbeFailure.PROBER_MISSING) from e
        self._timeout = timeout

    @property
    def ffprobe_path(self) -> Path:
        return self._ffprobe_path

    def build_args(self, path: Path) -> list[str]:
        """Argument vector for a quiet JSON report of format and streams."""
        return [
            str(self._ffprobe_path),
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(path),
        ]

    def analyze_media(self, path: Path) -> MediaInfo:
        """Extract container and stream metadata from a media file.

        Args:
            path: Path to the media file. The caller is expected to have
                validated it already.

        Returns:
            MediaInfo describing the file.

        Raises:
            ProbeError: If the file is missing, ffprobe cannot run, exits
                non-zero, times out, or produces an unparseable report.
        """
        path = Path(path)
        if not path.exists():
            raise ProbeError(f"File not found: {path}", ProbeFailure.NOT_FOUND)

        try:
            stdout, stderr, rc = run_command(
                self.build_args(path), timeout=self._timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                f"ffprobe timed out for {path} after {e.timeout}s",
                ProbeFailure.TIMED_OUT,
            ) from e
        except OSError as e:
            raise ProbeError(
                f"Could not run ffprobe at {self._ffprobe_path}: {e}",
                ProbeFailure.PROBER_MISSING,
            ) from e

        if rc != 0:
            detail = stderr.strip() or f"exit code {rc}"
            raise ProbeError(
                f"ffprobe failed for {path}: {detail}", ProbeFailure.NON_ZERO_EXIT
            )

        info = parse_ffprobe_output(str(path), stdout)
        logger.debug(
            "Analyzed %s: %s, %.2fs, %d video / %d audio stream(s)",
            path,
            info.format_name,
            info.duration_seconds,
            len(info.video_streams),
            len(info.audio_streams),
        )
        return info
