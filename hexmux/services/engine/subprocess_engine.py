# hexmux/services/engine/subprocess_engine.py
from __future__ import annotations

import shlex
import shutil
import subprocess
from typing import Optional, Sequence

from hexmux.common.logging import get_logger
from hexmux.common.settings import get_settings
from hexmux.domain.errors import EngineError
from hexmux.domain.ports.engine import EnginePort, EngineResult

logger = get_logger()


def resolve_binary(candidate: str) -> str:
    """Absolute path for a bare tool name when it is on PATH (nicer errors); otherwise unchanged."""
    if candidate and "/" not in candidate:
        return shutil.which(candidate) or candidate
    return candidate


class SubprocessEngine(EnginePort):
    """
    Infrastructure adapter implementing EnginePort with `subprocess.run`.
    stderr is folded into stdout: ffmpeg and ffprobe write their reports there.
    Safe to share between threads (no mutable state).
    """

    def __init__(self, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        self.timeout_sec = int(timeout_sec if timeout_sec is not None else cfg.engine.timeout_sec)

    def invoke(self, args: Sequence[str]) -> EngineResult:
        if not args:
            raise EngineError("No command provided to invoke().")
        cmd = [str(a) for a in args]
        logger.debug("engine cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self.timeout_sec or None,
                check=False,  # we handle rc manually to attach the output
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("engine timed out after %ss: %s", self.timeout_sec, cmd[0])
            out = e.output.decode("utf-8", "replace") if isinstance(e.output, bytes) else e.output
            raise EngineError(f"{cmd[0]} timed out after {self.timeout_sec}s", output=out) from e
        except OSError as e:
            raise EngineError(f"Failed to execute {cmd[0]} (OS error).", output=str(e)) from e

        if proc.returncode != 0:
            logger.warning("engine exited with rc=%s: %s", proc.returncode, cmd[0])
            raise EngineError(
                f"{cmd[0]} returned non-zero exit code",
                output=proc.stdout,
                returncode=proc.returncode,
            )

        return EngineResult(output=proc.stdout or "", returncode=proc.returncode)
