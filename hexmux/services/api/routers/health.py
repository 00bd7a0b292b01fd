# hexmux/services/api/routers/health.py
from __future__ import annotations
import os

from fastapi import APIRouter

from hexmux.common.settings import get_settings
from hexmux.services.engine.subprocess_engine import resolve_binary

router = APIRouter()


def _tool(candidate: str) -> dict:
    path = resolve_binary(candidate)
    return {"path": path, "found": os.path.isfile(path) and os.access(path, os.X_OK)}


@router.get("/healthz")
def healthz():
    s = get_settings()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "ffmpeg": _tool(s.ffmpeg_bin),
        "ffprobe": _tool(s.ffprobe_bin),
    }
