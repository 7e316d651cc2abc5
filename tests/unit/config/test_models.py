"""Unit tests for configuration models."""

import pytest

from tvt.config.models import (
    LoggingConfig,
    SecurityConfig,
    TranscodeConfig,
    TranscoderConfig,
)


def test_defaults():
    config = TranscoderConfig()
    assert config.logging.level == "warning"
    assert config.transcode.stats_period == 0.2
    assert config.transcode.probe_timeout_seconds == 60.0
    assert config.security.max_parameter_length == 50


def test_log_level_case_insensitive():
    assert LoggingConfig(level="DEBUG").level == "DEBUG"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"level": "trace"},
        {"format": "xml"},
        {"max_bytes": -1},
    ],
)
def test_invalid_logging(kwargs):
    with pytest.raises(ValueError):
        LoggingConfig(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"default_preset": "ultra"},
        {"default_audio_quality": "lossless"},
        {"timeout_seconds": 0},
        {"stats_period": 0},
        {"probe_timeout_seconds": -5},
    ],
)
def test_invalid_transcode(kwargs):
    with pytest.raises(ValueError):
        TranscodeConfig(**kwargs)


def test_invalid_security():
    with pytest.raises(ValueError):
        SecurityConfig(max_parameter_length=0)
