# hexmux/services/probe/ffprobe_adapter.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Tuple

from hexmux.common.logging import get_logger
from hexmux.common.probe.ffprobe_helpers import (
    build_capabilities_cmds,
    build_probe_cmd,
    parse_capabilities,
    parse_media_descriptor,
)
from hexmux.common.settings import get_settings
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import MediaDescriptor
from hexmux.domain.errors import InputPathError
from hexmux.domain.ports.engine import EnginePort
from hexmux.domain.ports.probe import MediaProbePort
from hexmux.services.engine.subprocess_engine import SubprocessEngine, resolve_binary

logger = get_logger()


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort on top of an EnginePort.
    Safe for use from worker threads (I/O-bound, no shared state).
    """

    def __init__(
        self,
        engine: Optional[EnginePort] = None,
        ffmpeg_bin: Optional[str] = None,
        ffprobe_bin: Optional[str] = None,
    ):
        cfg = get_settings()
        self.engine = engine or SubprocessEngine()
        self.ffmpeg_bin = resolve_binary(ffmpeg_bin or cfg.ffmpeg_bin)
        self.ffprobe_bin = resolve_binary(ffprobe_bin or cfg.ffprobe_bin)

    # ---- Port API -------------------------------------------------------------
    def probe_capabilities(self) -> CapabilitySet:
        text = "\n".join(self.engine.invoke(cmd).output for cmd in build_capabilities_cmds(self.ffmpeg_bin))
        return parse_capabilities(text)

    def probe_file(self, path: Path) -> MediaDescriptor:
        if not path:
            raise InputPathError(path, code="empty_input_filepath", message="No path provided to probe_file().")
        result = self.engine.invoke(build_probe_cmd(self.ffprobe_bin, path))
        descriptor = parse_media_descriptor(result.output)
        logger.debug(
            "probed %s: %s %s, %ss",
            path, descriptor.video.codec or "-", descriptor.video.resolution, descriptor.duration.seconds,
        )
        return descriptor

    def probe_all(self, path: Path, *, workers: Optional[int] = None) -> Tuple[CapabilitySet, MediaDescriptor]:
        """
        Run the capability probe and the file probe concurrently; they share no
        data. Either failure propagates unchanged.
        """
        max_workers = workers or get_settings().engine.probe_workers
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="probe") as pool:
            caps_fut = pool.submit(self.probe_capabilities)
            desc_fut = pool.submit(self.probe_file, path)
            return caps_fut.result(), desc_fut.result()
