from pathlib import Path

import pytest

from hexmux.common.probe.ffprobe_helpers import (
    build_capabilities_cmds,
    build_probe_cmd,
    parse_capabilities,
    parse_media_descriptor,
)
from hexmux.domain.entities.media import Resolution

from conftest import CODECS_TEXT, FORMATS_TEXT, PROBE_TEXT


def test_build_commands():
    assert build_capabilities_cmds("/opt/ffmpeg") == [["/opt/ffmpeg", "-formats"], ["/opt/ffmpeg", "-codecs"]]
    f = Path("/media/in/clip.mp4")
    cmd = build_probe_cmd("ffprobe", f)
    assert cmd == ["ffprobe", str(f)]


def test_parse_capabilities_modules_formats_and_codecs():
    caps = parse_capabilities(FORMATS_TEXT + CODECS_TEXT)
    assert {"libmp3lame", "libx264", "gpl", "version3"} <= caps.modules
    assert "debug" not in caps.modules

    # formats: comma separated ids, D/E scope honored
    assert caps.can_decode("mov") and caps.can_decode("mj2")
    assert caps.can_encode("mp4") and caps.can_decode("mp4")
    assert caps.can_encode("mp3") and caps.can_decode("mp3")
    assert caps.can_encode("avi") and caps.can_decode("avi")
    assert not caps.can_encode("3dostr")

    # codecs: flag columns, legend lines skipped
    assert caps.can_encode("h264") and caps.can_decode("h264")
    assert caps.can_decode("vp6") and not caps.can_encode("vp6")
    assert caps.can_encode("mjpeg") and not caps.can_decode("mjpeg")
    assert "=" not in caps.encode and "=" not in caps.decode


def test_parse_capabilities_empty_text():
    caps = parse_capabilities("")
    assert not caps.modules and not caps.decode and not caps.encode


def test_parse_media_descriptor_full_report():
    d = parse_media_descriptor(PROBE_TEXT)

    assert d.tags.filename == "/media/in/clip.mp4"
    assert d.tags.title == "Sample Clip"
    assert d.tags.artist == "Some Artist"
    assert d.tags.album == "Demo Reel"
    assert d.tags.track == "3"
    assert d.tags.date == "2021"
    assert d.synced is True
    assert d.duration.raw == "00:00:30.04"
    assert d.duration.seconds == 30

    v = d.video
    assert v.container == "mov"
    assert v.bitrate == 1205
    assert v.stream == pytest.approx(0.0)
    assert v.codec == "h264"
    assert v.resolution == Resolution(w=1280, h=720)
    assert v.aspect.string == "16:9"
    assert v.pixel == pytest.approx(1.0)
    assert v.pixel_string == "1:1"
    assert v.resolution_square is None
    assert v.fps == pytest.approx(30.0)

    a = d.audio
    assert a.codec == "aac"
    assert a.sample_rate == 44100
    assert a.bitrate == "128"
    assert a.stream == pytest.approx(0.1)
    assert a.channels.raw == "stereo"
    assert a.channels.value == 2


def test_aspect_falls_back_to_resolution_and_pixel_defaults_to_square():
    text = (
        "Input #0, avi, from 'old.avi':\n"
        "  Duration: 00:01:00.00, start: 0.040000, bitrate: 900 kb/s\n"
        "    Stream #0.0: Video: mpeg4, yuv420p, 640x480, 25 tbr\n"
        "    Stream #0.1: Audio: mp3, 22050 Hz, mono, s16, 64 kb/s\n"
    )
    d = parse_media_descriptor(text)
    assert d.synced is False
    assert d.video.aspect.string == "4:3"
    assert d.video.pixel == 1.0
    assert d.video.pixel_string == "1:1"
    assert d.video.stream == pytest.approx(0.0)
    assert d.audio.stream == pytest.approx(0.1)
    assert d.audio.channels.value == 1


def test_anamorphic_source_gets_square_resolution():
    text = "    Stream #0:0: Video: mpeg2video, yuv420p, 720x576 [SAR 16:15 DAR 4:3], 25 fps\n"
    v = parse_media_descriptor(text).video
    assert v.pixel_string == "16:15"
    assert v.resolution_square == Resolution(w=768, h=576)
    assert v.aspect.string == "4:3"


def test_surround_layout_is_kept_raw_without_a_value():
    text = "    Stream #0:1: Audio: ac3, 48000 Hz, 5.1(side), fltp, 384 kb/s\n"
    ch = parse_media_descriptor(text).audio.channels
    assert ch.raw == "5.1(side)"
    assert ch.value == 0


def test_missing_fields_yield_defaults():
    d = parse_media_descriptor("garbage that is not a probe report")
    assert d.tags.title == ""
    assert d.duration.seconds == 0
    assert d.video.resolution.is_empty
    assert d.video.aspect is None
    assert d.video.pixel == 0.0
    assert d.video.resolution_square is None
    assert d.audio.codec == ""
    assert d.audio.channels.value == 0


def test_parse_capabilities_reads_encoder_and_decoder_lists():
    caps = parse_capabilities(CODECS_TEXT)
    assert caps.can_encode("libx264")
    assert caps.can_encode("libmp3lame")
    assert caps.can_decode("mp3float")
    assert not caps.can_encode("mp3float")
    assert "encoders:" not in caps.encode
