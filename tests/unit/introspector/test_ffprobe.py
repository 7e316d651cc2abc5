"""Unit tests for FFprobeIntrospector."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from tvt.exceptions import ProbeError, ProbeFailure, ToolNotAvailableError
from tvt.introspector.ffprobe import FFprobeIntrospector

FFPROBE = Path("/usr/bin/ffprobe")


@pytest.fixture
def introspector():
    with patch("tvt.introspector.ffprobe.require_tool", return_value=FFPROBE):
        yield FFprobeIntrospector(timeout=5.0)


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    path = tmp_path / "movie.mp4"
    path.write_bytes(b"\x00")
    return path


class TestFFprobeIntrospector:
    """Tests for FFprobeIntrospector.analyze_media."""

    def test_missing_ffprobe(self):
        with patch(
            "tvt.introspector.ffprobe.require_tool",
            side_effect=ToolNotAvailableError("ffprobe"),
        ):
            with pytest.raises(ProbeError) as exc_info:
                FFprobeIntrospector()
        assert exc_info.value.reason == ProbeFailure.PROBER_MISSING

    def test_build_args(self, introspector):
        assert introspector.build_args(Path("a.mp4")) == [
            "/usr/bin/ffprobe",
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            "a.mp4",
        ]

    def test_success(self, introspector, media_file, ffprobe_json):
        with patch(
            "tvt.introspector.ffprobe.run_command",
            return_value=(ffprobe_json("h264_aac_mp4"), "", 0),
        ) as mock_run:
            info = introspector.analyze_media(media_file)

        assert info.filename == str(media_file)
        assert info.video_streams[0].codec == "h264"
        assert mock_run.call_args.kwargs["timeout"] == 5.0

    def test_file_not_found(self, introspector, tmp_path):
        with patch("tvt.introspector.ffprobe.run_command") as mock_run:
            with pytest.raises(ProbeError) as exc_info:
                introspector.analyze_media(tmp_path / "missing.mp4")
        assert exc_info.value.reason == ProbeFailure.NOT_FOUND
        mock_run.assert_not_called()

    def test_non_zero_exit(self, introspector, media_file):
        with patch(
            "tvt.introspector.ffprobe.run_command",
            return_value=("", "Invalid data found when processing input", 1),
        ):
            with pytest.raises(ProbeError) as exc_info:
                introspector.analyze_media(media_file)
        assert exc_info.value.reason == ProbeFailure.NON_ZERO_EXIT
        assert "Invalid data" in exc_info.value.message

    def test_timeout(self, introspector, media_file):
        with patch(
            "tvt.introspector.ffprobe.run_command",
            side_effect=subprocess.TimeoutExpired(["ffprobe"], 5.0),
        ):
            with pytest.raises(ProbeError) as exc_info:
                introspector.analyze_media(media_file)
        assert exc_info.value.reason == ProbeFailure.TIMED_OUT

    def test_cannot_execute(self, introspector, media_file):
        with patch(
            "tvt.introspector.ffprobe.run_command",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(ProbeError) as exc_info:
                introspector.analyze_media(media_file)
        assert exc_info.value.reason == ProbeFailure.PROBER_MISSING

    def test_unparseable_report(self, introspector, media_file):
        with patch(
            "tvt.introspector.ffprobe.run_command", return_value=("garbage", "", 0)
        ):
            with pytest.raises(ProbeError) as exc_info:
                introspector.analyze_media(media_file)
        assert exc_info.value.reason == ProbeFailure.UNPARSEABLE
