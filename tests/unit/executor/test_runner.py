"""Unit tests for FFmpegRunner."""

import io
import subprocess
import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tvt.exceptions import ExecutionError, ToolNotAvailableError
from tvt.executor.runner import FFmpegRunner, RunMode

FFMPEG = Path("/usr/bin/ffmpeg")
ARGS = ["-i", "in.mp4", "-c:v", "copy", "-c:a", "copy", "-y", "out.mkv"]


def _process(returncode: int = 0, stderr: str = "", finishes: bool = True):
    """Build a Popen stand-in.

    wait(timeout=...) returns the exit code when the process "finishes" and
    raises TimeoutExpired otherwise; a bare wait() (after kill) returns -9.
    """
    process = MagicMock()
    process.pid = 4242
    # Universal newlines, like a text-mode pipe
    process.stderr = io.StringIO(stderr, newline=None)

    def wait(timeout=None):
        if timeout is None:
            return -9 if not finishes else returncode
        if finishes:
            return returncode
        raise subprocess.TimeoutExpired("ffmpeg", timeout)

    process.wait.side_effect = wait
    return process


@pytest.fixture(autouse=True)
def ffmpeg_on_path():
    with patch("tvt.executor.runner.require_tool", return_value=FFMPEG):
        yield


class TestBuildCommand:
    def test_tracked_adds_stats_period(self):
        runner = FFmpegRunner(stats_period=0.5)
        assert runner.build_command(ARGS, RunMode.TRACKED) == [
            str(FFMPEG),
            "-stats_period",
            "0.5",
            *ARGS,
        ]

    def test_pass_through_is_verbatim(self):
        assert FFmpegRunner().build_command(ARGS, RunMode.PASS_THROUGH) == [
            str(FFMPEG),
            *ARGS,
        ]

    def test_missing_ffmpeg(self):
        with patch(
            "tvt.executor.runner.require_tool",
            side_effect=ToolNotAvailableError("ffmpeg"),
        ):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner().run(ARGS)
        assert exc_info.value.returncode is None
        assert isinstance(exc_info.value.__cause__, ToolNotAvailableError)


class TestPassThrough:
    """Tests for pass-through mode."""

    def test_success(self):
        with patch(
            "tvt.executor.runner.subprocess.Popen", return_value=_process(0)
        ) as mock_popen:
            result = FFmpegRunner().run(ARGS, RunMode.PASS_THROUGH)

        assert result.returncode == 0
        assert result.last_progress is None
        cmd = mock_popen.call_args.args[0]
        assert cmd == [str(FFMPEG), *ARGS]
        assert mock_popen.call_args.kwargs["stdin"] == subprocess.DEVNULL
        assert "stderr" not in mock_popen.call_args.kwargs

    def test_non_zero_exit(self):
        with patch("tvt.executor.runner.subprocess.Popen", return_value=_process(1)):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner().run(ARGS, RunMode.PASS_THROUGH)
        assert exc_info.value.returncode == 1

    def test_start_failure(self):
        with patch(
            "tvt.executor.runner.subprocess.Popen",
            side_effect=FileNotFoundError("no such file"),
        ):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner().run(ARGS, RunMode.PASS_THROUGH)
        assert exc_info.value.returncode is None

    def test_timeout_kills_process(self):
        process = _process(finishes=False)
        with patch("tvt.executor.runner.subprocess.Popen", return_value=process):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner(timeout=0.05).run(ARGS, RunMode.PASS_THROUGH)
        assert exc_info.value.returncode == -1
        assert "timed out" in exc_info.value.message
        process.kill.assert_called_once()


class TestTracked:
    """Tests for tracked mode."""

    STDERR = (
        "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mp4':\n"
        "frame=  150 fps= 75 q=-1.0 size=512kB time=00:00:05.00 "
        "bitrate= 838.9kbits/s speed=2.0x\n"
        "frame=  300 fps= 75 q=-1.0 Lsize=1024kB time=00:00:10.00 "
        "bitrate= 838.9kbits/s speed=2.0x\n"
    )

    def test_progress_reported(self):
        snapshots = []
        renderer = MagicMock()
        with patch(
            "tvt.executor.runner.subprocess.Popen",
            return_value=_process(0, self.STDERR),
        ) as mock_popen:
            result = FFmpegRunner().run(
                ARGS,
                total_seconds=10.0,
                renderer=renderer,
                on_progress=snapshots.append,
            )

        assert [s.percent for s in snapshots] == [50.0, 100.0]
        assert snapshots[0].eta_seconds == pytest.approx(2.5)
        assert result.last_progress == snapshots[-1]
        assert result.diagnostics == [
            "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mp4':"
        ]
        assert renderer.update.call_count == 2
        renderer.finish.assert_called_once()

        kwargs = mock_popen.call_args.kwargs
        assert kwargs["stderr"] == subprocess.PIPE
        assert kwargs["stdout"] == subprocess.DEVNULL
        assert kwargs["text"] is True
        assert mock_popen.call_args.args[0][1:3] == ["-stats_period", "0.2"]

    def test_carriage_return_lines(self):
        """Test stats lines separated by CR, as ffmpeg writes them."""
        stderr = "time=00:00:02.00 speed=1.0x\rtime=00:00:04.00 speed=1.0x\r"
        snapshots = []
        with patch(
            "tvt.executor.runner.subprocess.Popen",
            return_value=_process(0, stderr),
        ):
            FFmpegRunner().run(ARGS, total_seconds=8.0, on_progress=snapshots.append)
        assert [s.percent for s in snapshots] == [25.0, 50.0]

    def test_failure_carries_diagnostics(self):
        stderr = "in.mp4: Invalid data found when processing input\n"
        renderer = MagicMock()
        with patch(
            "tvt.executor.runner.subprocess.Popen",
            return_value=_process(1, stderr),
        ):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner().run(ARGS, total_seconds=10.0, renderer=renderer)

        assert exc_info.value.returncode == 1
        assert exc_info.value.diagnostics == [
            "in.mp4: Invalid data found when processing input"
        ]
        renderer.finish.assert_called_once()

    def test_callback_errors_do_not_abort(self):
        def explode(snapshot):
            raise RuntimeError("callback bug")

        with patch(
            "tvt.executor.runner.subprocess.Popen",
            return_value=_process(0, self.STDERR),
        ):
            result = FFmpegRunner().run(ARGS, total_seconds=10.0, on_progress=explode)
        assert result.returncode == 0

    def test_cancel(self):
        cancel = threading.Event()
        cancel.set()
        process = _process(finishes=False)
        renderer = MagicMock()
        with patch("tvt.executor.runner.subprocess.Popen", return_value=process):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner().run(
                    ARGS, total_seconds=10.0, renderer=renderer, cancel=cancel
                )
        assert exc_info.value.returncode == -1
        assert "cancelled" in exc_info.value.message
        process.kill.assert_called_once()
        renderer.finish.assert_called_once()

    def test_timeout(self):
        process = _process(finishes=False, stderr=self.STDERR)
        with patch("tvt.executor.runner.subprocess.Popen", return_value=process):
            with pytest.raises(ExecutionError) as exc_info:
                FFmpegRunner(timeout=0.05).run(ARGS, total_seconds=10.0)
        assert exc_info.value.returncode == -1
        process.kill.assert_called_once()
