# tests/services/test_ffprobe_adapter.py
from __future__ import annotations

import pytest

from hexmux.domain.errors import EngineError, InputPathError
from hexmux.services.probe.ffprobe_adapter import FFprobeAdapter

from conftest import FakeEngine


def _adapter(engine):
    return FFprobeAdapter(engine=engine, ffmpeg_bin="/usr/bin/ffmpeg", ffprobe_bin="/usr/bin/ffprobe")


def test_probe_capabilities_runs_both_listings():
    engine = FakeEngine()
    caps = _adapter(engine).probe_capabilities()
    assert engine.calls == [["/usr/bin/ffmpeg", "-formats"], ["/usr/bin/ffmpeg", "-codecs"]]
    assert caps.can_encode("h264")
    assert caps.has_module("libmp3lame")


def test_probe_file_parses_report(source_file):
    engine = FakeEngine()
    d = _adapter(engine).probe_file(source_file)
    assert engine.calls == [["/usr/bin/ffprobe", str(source_file)]]
    assert d.video.resolution.w == 1280
    assert d.duration.seconds == 30


def test_probe_file_requires_a_path():
    with pytest.raises(InputPathError) as ei:
        _adapter(FakeEngine()).probe_file("")
    assert ei.value.code == "empty_input_filepath"


def test_probe_all_returns_both_results(source_file):
    engine = FakeEngine()
    caps, d = _adapter(engine).probe_all(source_file, workers=2)
    assert caps.can_decode("mov")
    assert d.audio.codec == "aac"
    assert len(engine.calls) == 3


def test_probe_all_propagates_engine_failure(source_file):
    class _Broken(FakeEngine):
        def invoke(self, args):
            if "-codecs" in args:
                raise EngineError("ffmpeg returned non-zero exit code", output="boom", returncode=1)
            return super().invoke(args)

    with pytest.raises(EngineError) as ei:
        _adapter(_Broken()).probe_all(source_file)
    assert ei.value.output == "boom"
