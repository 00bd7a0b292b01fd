# hexmux/services/operations/service.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from hexmux.common.logging import get_logger
from hexmux.common.settings import get_settings
from hexmux.domain.dataclasses.reports import OperationReport
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import MediaDescriptor
from hexmux.domain.ports.engine import EnginePort
from hexmux.domain.ports.files import FileOpsPort
from hexmux.services.engine.subprocess_engine import SubprocessEngine
from hexmux.services.filesystem.local_file_ops import LocalFileOps
from hexmux.services.probe.ffprobe_adapter import FFprobeAdapter
from hexmux.services.transform import presets
from hexmux.services.transform.presets import FrameOptions
from hexmux.services.transform.session import TransformSession, load_session, validate_source

logger = get_logger()


class OperationService:
    """
    Entry points for callers: probe a file, open a session on it, or run one
    of the composed operations end to end. Every external call goes through
    the injected engine / file ports.
    """

    def __init__(
        self,
        engine: Optional[EnginePort] = None,
        files: Optional[FileOpsPort] = None,
        probe: Optional[FFprobeAdapter] = None,
    ):
        self.cfg = get_settings()
        self.engine = engine or SubprocessEngine()
        self.files = files or LocalFileOps()
        self.probe = probe or FFprobeAdapter(engine=self.engine)

    # --- probing -------------------------------------------------------------

    def probe_capabilities(self) -> CapabilitySet:
        return self.probe.probe_capabilities()

    def probe_file(self, path: Any) -> MediaDescriptor:
        return self.probe.probe_file(validate_source(path, self.files))

    def load_session(self, path: Any) -> TransformSession:
        source = validate_source(path, self.files)
        capabilities, descriptor = self.probe.probe_all(source)
        return load_session(
            source,
            capabilities,
            descriptor,
            engine=self.engine,
            files=self.files,
            ffmpeg_bin=self.probe.ffmpeg_bin,
        )

    # --- operations ----------------------------------------------------------

    def _run(self, operation: str, source: Any, fn) -> OperationReport:
        rep = OperationReport(operation=operation)
        rep.start()
        session = self.load_session(source)
        rep.source = str(session.file_path)
        result = fn(session)
        if isinstance(result, list):
            rep.files = result
        else:
            rep.output = result
        rep.command = session.assemble()
        rep.stop()
        logger.info("%s finished for %s", operation, rep.source)
        return rep

    def extract_frames(self, source: Any, folder: str | Path, **options: Any) -> OperationReport:
        opts = FrameOptions.from_settings(**options)
        return self._run("frames", source, lambda s: presets.extract_frames(s, folder, opts))

    def extract_audio(self, source: Any, destination: str | Path) -> OperationReport:
        return self._run("audio", source, lambda s: presets.extract_audio(s, destination))

    def watermark(
        self,
        source: Any,
        watermark_path: str | Path,
        output: Optional[str | Path] = None,
        **placement: Any,
    ) -> OperationReport:
        return self._run("watermark", source, lambda s: presets.watermark(s, watermark_path, output, **placement))
