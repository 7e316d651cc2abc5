"""Unit tests for parameter and path validators."""

from pathlib import Path

import pytest

from tvt.domain.enums import CodecKind, Preset
from tvt.domain.models import AudioExtractionParameters, CustomParameters
from tvt.exceptions import ValidationError, ValidationReason
from tvt.security.policy import (
    AUDIO_CODECS,
    PARAMETER_DENIED_CHARACTERS,
    VIDEO_CODECS,
    SecurityPolicy,
)
from tvt.security.validation import (
    validate_bitrate,
    validate_channels,
    validate_codec,
    validate_custom_parameters,
    validate_extraction_parameters,
    validate_file_format,
    validate_file_path,
    validate_framerate,
    validate_preset,
    validate_resolution,
    validate_sample_rate,
)

DENIED = sorted(PARAMETER_DENIED_CHARACTERS)


def _reason(func, *args) -> ValidationReason:
    with pytest.raises(ValidationError) as exc_info:
        func(*args)
    return exc_info.value.reason


class TestDeniedCharacters:
    """Every injection character is rejected by every free-text validator."""

    @pytest.mark.parametrize("char", DENIED)
    def test_codec(self, policy, char):
        """Test codec names containing a denied character."""
        assert (
            _reason(validate_codec, policy, f"libx264{char}", CodecKind.VIDEO)
            == ValidationReason.INVALID_CHARACTER
        )

    @pytest.mark.parametrize("char", DENIED)
    def test_bitrate(self, policy, char):
        """Test bitrates containing a denied character."""
        assert (
            _reason(validate_bitrate, policy, f"2M{char}")
            == ValidationReason.INVALID_CHARACTER
        )

    @pytest.mark.parametrize("char", DENIED)
    def test_resolution(self, policy, char):
        """Test resolutions containing a denied character."""
        assert (
            _reason(validate_resolution, policy, f"1920x1080{char}")
            == ValidationReason.INVALID_CHARACTER
        )

    @pytest.mark.parametrize("char", DENIED)
    def test_framerate(self, policy, char):
        """Test frame rates containing a denied character."""
        assert (
            _reason(validate_framerate, policy, f"{char}30")
            == ValidationReason.INVALID_CHARACTER
        )

    @pytest.mark.parametrize("char", DENIED)
    def test_file_path(self, policy, char):
        """Test paths containing a denied character."""
        assert (
            _reason(validate_file_path, policy, f"clip{char}name.mp4")
            == ValidationReason.INVALID_CHARACTER
        )


class TestValidateCodec:
    """Tests for validate_codec."""

    @pytest.mark.parametrize("codec", sorted(VIDEO_CODECS))
    def test_video_whitelist_members_pass(self, policy, codec):
        """Test that each whitelisted video codec is accepted."""
        validate_codec(policy, codec, CodecKind.VIDEO)

    @pytest.mark.parametrize("codec", sorted(AUDIO_CODECS))
    def test_audio_whitelist_members_pass(self, policy, codec):
        """Test that each whitelisted audio codec is accepted."""
        validate_codec(policy, codec, CodecKind.AUDIO)

    @pytest.mark.parametrize(
        "codec", [" libx264", "libx264 ", "LIBX264", "libx26", "h264", ""]
    )
    def test_near_misses_rejected(self, policy, codec):
        """Test that only exact whitelist members are accepted."""
        assert (
            _reason(validate_codec, policy, codec, CodecKind.VIDEO)
            == ValidationReason.NOT_ALLOWED
        )

    def test_video_codec_not_allowed_for_audio(self, policy):
        """Test that the whitelist is chosen by stream kind."""
        assert (
            _reason(validate_codec, policy, "libx264", CodecKind.AUDIO)
            == ValidationReason.NOT_ALLOWED
        )

    def test_too_long(self, policy):
        """Test the parameter length limit."""
        assert (
            _reason(validate_codec, policy, "a" * 51, CodecKind.VIDEO)
            == ValidationReason.TOO_LONG
        )


class TestValidateBitrate:
    """Tests for validate_bitrate."""

    @pytest.mark.parametrize("value", ["2M", "128k", "192K", "1.5M", "5000", "4m"])
    def test_valid(self, policy, value):
        validate_bitrate(policy, value)

    def test_empty_means_unspecified(self, policy):
        validate_bitrate(policy, "")

    @pytest.mark.parametrize("value", ["2G", "M", "1.2.3M", "-5k", "2 M", "1.k"])
    def test_invalid_grammar(self, policy, value):
        assert _reason(validate_bitrate, policy, value) == (
            ValidationReason.INVALID_FORMAT
        )


class TestValidateResolution:
    """Tests for validate_resolution."""

    @pytest.mark.parametrize("value", ["1920x1080", "1x1", "7680x4320", "640x480"])
    def test_valid(self, policy, value):
        validate_resolution(policy, value)

    @pytest.mark.parametrize("value", ["99999x1", "7681x100", "100x4321", "0x0"])
    def test_out_of_range(self, policy, value):
        assert (
            _reason(validate_resolution, policy, value)
            == ValidationReason.OUT_OF_RANGE
        )

    @pytest.mark.parametrize("value", ["1920X1080", "1920x", "x1080", "1920*1080"])
    def test_invalid_format(self, policy, value):
        assert (
            _reason(validate_resolution, policy, value)
            == ValidationReason.INVALID_FORMAT
        )


class TestValidateFramerate:
    """Tests for validate_framerate."""

    @pytest.mark.parametrize("value", ["30", "29.97", "120", "0.5"])
    def test_valid(self, policy, value):
        validate_framerate(policy, value)

    @pytest.mark.parametrize("value", ["121", "0", "0.0", "120.01"])
    def test_out_of_range(self, policy, value):
        assert (
            _reason(validate_framerate, policy, value)
            == ValidationReason.OUT_OF_RANGE
        )

    @pytest.mark.parametrize("value", ["-5", "abc", "30fps", "30/1"])
    def test_invalid_format(self, policy, value):
        assert (
            _reason(validate_framerate, policy, value)
            == ValidationReason.INVALID_FORMAT
        )

    def test_custom_policy_raises_limit(self):
        """Test that the bound comes from the policy."""
        validate_framerate(SecurityPolicy(max_framerate=240.0), "240")


class TestClosedSets:
    """Tests for sample rate, channel count and preset validators."""

    @pytest.mark.parametrize("value", ["8000", "44100", "48000", "96000"])
    def test_sample_rate_valid(self, policy, value):
        validate_sample_rate(policy, value)

    @pytest.mark.parametrize("value", ["44000", "48k", "0"])
    def test_sample_rate_invalid(self, policy, value):
        assert (
            _reason(validate_sample_rate, policy, value)
            == ValidationReason.NOT_ALLOWED
        )

    @pytest.mark.parametrize("value", ["1", "2", "6", "8"])
    def test_channels_valid(self, policy, value):
        validate_channels(policy, value)

    @pytest.mark.parametrize("value", ["3", "0", "stereo"])
    def test_channels_invalid(self, policy, value):
        assert (
            _reason(validate_channels, policy, value) == ValidationReason.NOT_ALLOWED
        )

    def test_preset_resolves(self):
        assert validate_preset("high") is Preset.HIGH

    @pytest.mark.parametrize("value", ["ultra", "HIGH", ""])
    def test_preset_unknown(self, value):
        assert _reason(validate_preset, value) == ValidationReason.NOT_ALLOWED


class TestValidateFilePath:
    """Tests for validate_file_path."""

    @pytest.mark.parametrize(
        "value",
        [
            "clip.mp4",
            "/home/user/videos/clip.mp4",
            "videos/../clip.mp4",
            "my video.mp4",
            "foo..bar.mp4",
        ],
    )
    def test_valid(self, policy, value):
        validate_file_path(policy, value)

    def test_accepts_path_objects(self, policy):
        validate_file_path(policy, Path("videos") / "clip.mkv")

    @pytest.mark.parametrize(
        "value", ["../../etc/passwd", "..", "a/../../b.mp4", "videos/../../x.mp4"]
    )
    def test_traversal(self, policy, value):
        assert _reason(validate_file_path, policy, value) == ValidationReason.TRAVERSAL

    def test_empty(self, policy):
        assert (
            _reason(validate_file_path, policy, "") == ValidationReason.INVALID_FORMAT
        )

    def test_too_long(self, policy):
        assert (
            _reason(validate_file_path, policy, "a" * 252 + ".mp4")
            == ValidationReason.TOO_LONG
        )

    def test_max_length_accepted(self, policy):
        validate_file_path(policy, "a" * 251 + ".mp4")

    @pytest.mark.parametrize("value", ["clip\x00.mp4", "clip\x1b.mp4", "clip\x7f.mp4"])
    def test_control_characters(self, policy, value):
        assert (
            _reason(validate_file_path, policy, value)
            == ValidationReason.INVALID_CHARACTER
        )

    def test_leading_dash(self, policy):
        """Test that a path cannot be mistaken for an ffmpeg option."""
        assert (
            _reason(validate_file_path, policy, "-f.mp4")
            == ValidationReason.INVALID_CHARACTER
        )


class TestValidateFileFormat:
    """Tests for validate_file_format."""

    @pytest.mark.parametrize("value", ["clip.mp4", "CLIP.MKV", "song.flac", "a.m4a"])
    def test_valid(self, policy, value):
        validate_file_format(policy, value)

    def test_not_allowed(self, policy):
        assert (
            _reason(validate_file_format, policy, "clip.exe")
            == ValidationReason.NOT_ALLOWED
        )

    def test_no_extension(self, policy):
        assert (
            _reason(validate_file_format, policy, "clip")
            == ValidationReason.INVALID_FORMAT
        )


class TestValidateParameterSets:
    """Tests for the request-level validators."""

    def test_custom_parameters_valid(self, policy):
        validate_custom_parameters(
            policy,
            CustomParameters(
                video_codec="libx265",
                audio_codec="libopus",
                video_bitrate="3M",
                audio_bitrate="160k",
                resolution="1280x720",
                framerate="24",
            ),
        )

    def test_custom_parameters_unset_is_valid(self, policy):
        validate_custom_parameters(policy, CustomParameters())

    def test_custom_parameters_names_field(self, policy):
        with pytest.raises(ValidationError) as exc_info:
            validate_custom_parameters(
                policy, CustomParameters(video_codec="libx264", audio_bitrate="lots")
            )
        assert exc_info.value.field == "audio bitrate"
        assert exc_info.value.message.startswith("invalid audio bitrate:")
        assert exc_info.value.reason == ValidationReason.INVALID_FORMAT

    def test_extraction_parameters_valid(self, policy):
        validate_extraction_parameters(
            policy,
            AudioExtractionParameters(
                codec="flac", bitrate="320k", sample_rate="44100", channels="2"
            ),
        )

    def test_extraction_parameters_names_field(self, policy):
        with pytest.raises(ValidationError) as exc_info:
            validate_extraction_parameters(
                policy, AudioExtractionParameters(sample_rate="12345")
            )
        assert exc_info.value.field == "sample rate"
        assert exc_info.value.reason == ValidationReason.NOT_ALLOWED

    def test_extraction_rejects_video_codec(self, policy):
        with pytest.raises(ValidationError) as exc_info:
            validate_extraction_parameters(
                policy, AudioExtractionParameters(codec="libx264")
            )
        assert exc_info.value.field == "codec"
