"""Per-invocation state shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

from tvt.config.models import TranscoderConfig
from tvt.executor.progress import ProgressRenderer
from tvt.executor.runner import FFmpegRunner, RunMode
from tvt.introspector.ffprobe import FFprobeIntrospector
from tvt.security.policy import SecurityPolicy


@dataclass
class CLIContext:
    """Built once by the root group and handed to every command."""

    config: TranscoderConfig
    policy: SecurityPolicy
    verbose: bool = False
    quiet: bool = False

    def make_probe(self) -> FFprobeIntrospector:
        """Create the ffprobe wrapper.

        Raises:
            ProbeError: If ffprobe cannot be found.
        """
        return FFprobeIntrospector(
            ffprobe_path=self.config.tools.ffprobe,
            timeout=self.config.transcode.probe_timeout_seconds,
        )

    def make_runner(self, timeout: float | None = None) -> FFmpegRunner:
        """Create the ffmpeg runner; a CLI timeout beats the configured one."""
        if timeout is None:
            timeout = self.config.transcode.timeout_seconds
        return FFmpegRunner(
            ffmpeg_path=self.config.tools.ffmpeg,
            timeout=timeout,
            stats_period=self.config.transcode.stats_period,
        )

    @property
    def run_mode(self) -> RunMode:
        return RunMode.PASS_THROUGH if self.verbose else RunMode.TRACKED

    def make_renderer(self, json_output: bool = False) -> ProgressRenderer:
        return ProgressRenderer(enabled=not (self.quiet or json_output))
