from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class EngineResult:
    output: str           # stdout and stderr, merged in the order the engine wrote them
    returncode: int = 0


class EnginePort(Protocol):
    """Runs one ffmpeg/ffprobe invocation; raises EngineError on non-zero exit or timeout."""
    def invoke(self, args: Sequence[str]) -> EngineResult: ...
