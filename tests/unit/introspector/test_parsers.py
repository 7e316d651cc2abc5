"""Unit tests for ffprobe report parsing."""

import json
from datetime import timedelta

import pytest

from tvt.exceptions import ProbeError, ProbeFailure
from tvt.introspector.parsers import normalize_language, parse_ffprobe_output


class TestNormalizeLanguage:
    def test_undefined_becomes_empty(self):
        assert normalize_language("und") == ""
        assert normalize_language("UND") == ""

    def test_real_tag_kept(self):
        assert normalize_language(" eng ") == "eng"


class TestParseFFprobeOutput:
    """Tests for parse_ffprobe_output against fixture reports."""

    def test_container_fields(self, h264_aac_info):
        """Test that format-level values are reproduced exactly."""
        assert h264_aac_info.filename == "movie.mp4"
        assert h264_aac_info.format_name == "mov,mp4,m4a,3gp,3g2,mj2"
        assert h264_aac_info.duration == timedelta(seconds=125.5)
        assert h264_aac_info.size == 73400320
        assert h264_aac_info.bitrate == 4692000

    def test_video_stream_fields(self, h264_aac_info):
        (video,) = h264_aac_info.video_streams
        assert video.index == 0
        assert video.codec == "h264"
        assert (video.width, video.height) == (1920, 1080)
        assert video.frame_rate == "30000/1001"
        assert video.pixel_format == "yuv420p"
        assert video.bitrate == 4500000

    def test_audio_stream_fields(self, h264_aac_info):
        (audio,) = h264_aac_info.audio_streams
        assert audio.index == 1
        assert audio.codec == "aac"
        assert audio.sample_rate == 48000
        assert audio.channels == 2
        assert audio.bitrate == 192000
        assert audio.language == "eng"

    def test_subtitle_streams_skipped(self, h264_aac_info):
        assert len(h264_aac_info.video_streams) == 1
        assert len(h264_aac_info.audio_streams) == 1

    def test_not_available_values_become_zero(self, vp9_opus_info):
        """Test that "N/A" numbers are reported as 0."""
        assert vp9_opus_info.duration == timedelta(0)
        assert vp9_opus_info.bitrate == 0
        assert vp9_opus_info.video_streams[0].bitrate == 0

    def test_stream_order_preserved(self, vp9_opus_info):
        channels = [s.channels for s in vp9_opus_info.audio_streams]
        assert channels == [6, 2]
        assert vp9_opus_info.audio_streams[0].language == "fre"
        assert vp9_opus_info.audio_streams[1].language == ""

    def test_video_only(self, video_only_info):
        assert video_only_info.has_video
        assert not video_only_info.has_audio

    def test_accepts_decoded_dict(self, ffprobe_json):
        data = json.loads(ffprobe_json("h264_aac_mp4"))
        info = parse_ffprobe_output("movie.mp4", data)
        assert info.size == 73400320

    def test_synthetic_values_round_trip(self):
        """Test that known values survive parsing without loss."""
        report = {
            "format": {
                "format_name": "matroska,webm",
                "duration": "3600.250000",
                "size": "123456789",
                "bit_rate": "274321",
            },
            "streams": [
                {
                    "index": 3,
                    "codec_type": "audio",
                    "codec_name": "flac",
                    "sample_rate": "96000",
                    "channels": 8,
                    "bit_rate": 4608000,
                    "tags": {"language": "jpn"},
                }
            ],
        }
        info = parse_ffprobe_output("/media/a.mkv", report)
        assert info.duration_seconds == 3600.25
        assert info.size == 123456789
        assert info.bitrate == 274321
        audio = info.audio_streams[0]
        assert (audio.index, audio.codec, audio.sample_rate) == (3, "flac", 96000)
        assert (audio.channels, audio.bitrate, audio.language) == (8, 4608000, "jpn")

    def test_invalid_json(self):
        with pytest.raises(ProbeError) as exc_info:
            parse_ffprobe_output("a.mp4", "{not json")
        assert exc_info.value.reason == ProbeFailure.UNPARSEABLE

    @pytest.mark.parametrize(
        "report",
        [
            {"streams": []},
            {"format": {}},
            {"format": {}, "streams": {"index": 0}},
            [],
        ],
    )
    def test_wrong_structure(self, report):
        with pytest.raises(ProbeError) as exc_info:
            parse_ffprobe_output("a.mp4", json.dumps(report))
        assert exc_info.value.reason == ProbeFailure.UNPARSEABLE

    def test_missing_tags_and_nulls(self):
        report = {
            "format": {"format_name": "wav", "duration": "1.0"},
            "streams": [
                {"codec_type": "audio", "codec_name": "pcm_s16le", "tags": None}
            ],
        }
        info = parse_ffprobe_output("a.wav", report)
        assert info.audio_streams[0].language == ""
        assert info.size == 0
