# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

from hexmux.common.probe.ffprobe_helpers import parse_capabilities, parse_media_descriptor
from hexmux.domain.ports.engine import EngineResult
from hexmux.services.filesystem.local_file_ops import LocalFileOps
from hexmux.services.transform.session import TransformSession

BANNER = """ffmpeg version 6.1.1 Copyright (c) 2000-2023 the FFmpeg developers
  built with gcc 13 (GCC)
  configuration: --prefix=/usr --enable-gpl --enable-libmp3lame --enable-libx264 --enable-version3 --disable-debug
  libavutil      58. 29.100 / 58. 29.100
"""

FORMATS_TEXT = BANNER + """File formats:
 D. = Demuxing supported
 .E = Muxing supported
 --
 D  3dostr          3DO STR
  E 3g2             3GP2 (3GPP2 file format)
 DE avi             AVI (Audio Video Interleaved)
 D  mov,mp4,m4a,3gp,3g2,mj2 QuickTime / MOV
  E mp3             MP3 (MPEG audio layer 3)
  E mp4             MP4 (MPEG-4 Part 14)
 DE wav             WAV / WAVE (Waveform Audio)
"""

CODECS_TEXT = BANNER + """Codecs:
 D..... = Decoding supported
 .E.... = Encoding supported
 ..V... = Video codec
 -------
 DEV.LS h264                 H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10 (encoders: libx264 )
 DEA.L. aac                  AAC (Advanced Audio Coding)
 DEA.L. mp3                  MP3 (MPEG audio layer 3) (decoders: mp3float mp3 ) (encoders: libmp3lame )
 D.V.L. vp6                  On2 VP6
 .EV.L. mjpeg                Motion JPEG
"""

PROBE_TEXT = """ffprobe version 6.1.1 Copyright (c) 2007-2023 the FFmpeg developers
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from '/media/in/clip.mp4':
  Metadata:
    major_brand     : isom
    title           : Sample Clip
    artist          : Some Artist
    album_artist    : Not The Artist
    album           : Demo Reel
    track           : 3
    date            : 2021
  Duration: 00:00:30.04, start: 0.000000, bitrate: 1205 kb/s
  Stream #0:0[0x1](und): Video: h264 (High) (avc1 / 0x31637661), yuv420p(tv, bt709, progressive), 1280x720 [SAR 1:1 DAR 16:9], 1071 kb/s, 30 fps, 30 tbr, 15360 tbn (default)
    Metadata:
      handler_name    : VideoHandler
  Stream #0:1[0x2](und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, stereo, fltp, 128 kb/s (default)
    Metadata:
      handler_name    : SoundHandler
"""


class FakeEngine:
    """Records every invocation and answers with scripted text."""

    def __init__(self, probe_text: str = PROBE_TEXT, on_transcode: Optional[Callable[[List[str]], None]] = None):
        self.calls: List[List[str]] = []
        self.probe_text = probe_text
        self.on_transcode = on_transcode

    def invoke(self, args: Sequence[str]) -> EngineResult:
        args = list(args)
        self.calls.append(args)
        if "-formats" in args:
            return EngineResult(output=FORMATS_TEXT)
        if "-codecs" in args:
            return EngineResult(output=CODECS_TEXT)
        if Path(args[0]).name.startswith("ffprobe"):
            return EngineResult(output=self.probe_text)
        if self.on_transcode:
            self.on_transcode(args)
        return EngineResult(output="")

    @property
    def transcode_calls(self) -> List[List[str]]:
        return [c for c in self.calls if "-i" in c]


@pytest.fixture()
def capabilities():
    return parse_capabilities(FORMATS_TEXT + CODECS_TEXT)


@pytest.fixture()
def descriptor():
    return parse_media_descriptor(PROBE_TEXT)


@pytest.fixture()
def source_file(tmp_path) -> Path:
    p = tmp_path / "clip.mp4"
    p.write_bytes(b"not really a video")
    return p


@pytest.fixture()
def watermark_file(tmp_path) -> Path:
    p = tmp_path / "logo.png"
    p.write_bytes(b"png-ish")
    return p


@pytest.fixture()
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def session(source_file, capabilities, descriptor, engine) -> TransformSession:
    return TransformSession(
        source_file,
        capabilities,
        descriptor,
        engine=engine,
        files=LocalFileOps(),
        ffmpeg_bin="/usr/bin/ffmpeg",
    )
