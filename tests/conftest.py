"""Shared test fixtures for the terminal video transcoder."""

import logging
from pathlib import Path

import pytest

from tvt.config.loader import clear_config_cache
from tvt.domain.models import MediaInfo
from tvt.introspector.parsers import parse_ffprobe_output
from tvt.security.policy import DEFAULT_POLICY, SecurityPolicy

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_TVT_ENV_VARS = (
    "TVT_FFMPEG_PATH",
    "TVT_FFPROBE_PATH",
    "TVT_LOG_LEVEL",
    "TVT_LOG_FILE",
    "TVT_TIMEOUT",
    "TVT_DEFAULT_PRESET",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point TVT_CONFIG_PATH at an empty temp location for every test."""
    config_path = tmp_path / "tvt-config" / "config.toml"
    monkeypatch.setenv("TVT_CONFIG_PATH", str(config_path))
    for var in _TVT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield config_path
    clear_config_cache()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def policy() -> SecurityPolicy:
    return DEFAULT_POLICY


@pytest.fixture
def ffprobe_json():
    """Return a loader for JSON reports under tests/fixtures/ffprobe."""

    def load(name: str) -> str:
        return (FIXTURES_DIR / "ffprobe" / f"{name}.json").read_text()

    return load


@pytest.fixture
def h264_aac_info(ffprobe_json) -> MediaInfo:
    """An mp4 with h264 video, aac audio and a subtitle track."""
    return parse_ffprobe_output("movie.mp4", ffprobe_json("h264_aac_mp4"))


@pytest.fixture
def video_only_info(ffprobe_json) -> MediaInfo:
    return parse_ffprobe_output("silent.mkv", ffprobe_json("no_audio"))


@pytest.fixture
def vp9_opus_info(ffprobe_json) -> MediaInfo:
    return parse_ffprobe_output("clip.webm", ffprobe_json("vp9_opus_webm"))


class FakeProbe:
    """MediaProbe stand-in returning a fixed MediaInfo."""

    def __init__(self, info: MediaInfo) -> None:
        self.info = info
        self.calls: list[Path] = []

    def analyze_media(self, path: Path) -> MediaInfo:
        self.calls.append(path)
        return self.info


@pytest.fixture
def fake_probe(h264_aac_info: MediaInfo) -> FakeProbe:
    return FakeProbe(h264_aac_info)


@pytest.fixture
def probe_factory():
    """Return the FakeProbe class for tests needing a specific MediaInfo."""
    return FakeProbe
