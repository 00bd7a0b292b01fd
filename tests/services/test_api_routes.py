# tests/services/test_api_routes.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from hexmux.domain.errors import EngineError
from hexmux.services.api.app import create_app
from hexmux.services.api.deps import get_operation_service
from hexmux.services.filesystem.local_file_ops import LocalFileOps
from hexmux.services.operations.service import OperationService
from hexmux.services.probe.ffprobe_adapter import FFprobeAdapter

from conftest import FakeEngine


class _FailingEngine(FakeEngine):
    def invoke(self, args):
        if "-i" in args:
            self.calls.append(list(args))
            raise EngineError("/usr/bin/ffmpeg returned non-zero exit code", output="Invalid data", returncode=1)
        return super().invoke(args)


def _client_for(engine: FakeEngine):
    app = create_app()
    probe = FFprobeAdapter(engine=engine, ffmpeg_bin="/usr/bin/ffmpeg", ffprobe_bin="/usr/bin/ffprobe")
    svc = OperationService(engine=engine, files=LocalFileOps(), probe=probe)
    app.dependency_overrides[get_operation_service] = lambda: svc
    return app


@pytest.fixture()
def api_client():
    app = _client_for(FakeEngine())
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def test_healthz(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200, r.text
    assert r.json()["ok"] is True


def test_capabilities_endpoint(api_client):
    r = api_client.get("/api/probe/capabilities")
    assert r.status_code == 200, r.text
    body = r.json()
    assert "libx264" in body["modules"]
    assert "h264" in body["encode"]
    assert body["decode"] == sorted(body["decode"])


def test_probe_endpoint(api_client, source_file):
    r = api_client.post("/api/probe", json={"path": str(source_file)})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["video"]["resolution"] == {"w": 1280, "h": 720}
    assert body["video"]["aspect"]["string"] == "16:9"
    assert body["audio"]["channels"] == {"raw": "stereo", "value": 2}
    assert body["duration"]["seconds"] == 30


def test_probe_missing_file_maps_to_422(api_client, tmp_path):
    r = api_client.post("/api/probe", json={"path": str(tmp_path / "missing.mp4")})
    assert r.status_code == 422, r.text
    assert r.json()["detail"]["code"] == "fileinput_not_exist"


def test_audio_operation(api_client, source_file, tmp_path):
    dest = tmp_path / "clip.mp3"
    r = api_client.post("/api/operations/audio", json={"source": str(source_file), "destination": str(dest)})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["operation"] == "audio"
    assert body["output"] == str(dest)
    assert body["command"][-1] == str(dest)


def test_frames_request_rejects_two_intervals(api_client, source_file, tmp_path):
    r = api_client.post(
        "/api/operations/frames",
        json={"source": str(source_file), "folder": str(tmp_path), "every_frames": 2, "every_seconds": 3},
    )
    assert r.status_code == 422, r.text


def test_watermark_bad_position_is_schema_error(api_client, source_file, watermark_file):
    r = api_client.post(
        "/api/operations/watermark",
        json={"source": str(source_file), "watermark": str(watermark_file), "position": "TOP"},
    )
    assert r.status_code == 422, r.text


def test_watermark_operation(api_client, source_file, watermark_file):
    r = api_client.post(
        "/api/operations/watermark",
        json={"source": str(source_file), "watermark": str(watermark_file), "position": "NE", "margin_left": 4},
    )
    assert r.status_code == 200, r.text
    assert "overlay=0+4:0" in r.json()["command"]


def test_engine_failure_maps_to_502(source_file, tmp_path):
    app = _client_for(_FailingEngine())
    with TestClient(app) as client:
        r = client.post(
            "/api/operations/audio",
            json={"source": str(source_file), "destination": str(tmp_path / "a.mp3")},
        )
    assert r.status_code == 502, r.text
    detail = r.json()["detail"]
    assert detail["code"] == "engine_error"
    assert detail["output"] == "Invalid data"


def test_healthz_reports_tool_lookup(api_client, monkeypatch):
    import hexmux.services.engine.subprocess_engine as eng_mod

    monkeypatch.setattr(eng_mod.shutil, "which", lambda name: None, raising=True)
    body = api_client.get("/healthz").json()
    assert body["ffmpeg"]["path"] == "ffmpeg"
    assert body["ffmpeg"]["found"] is False
