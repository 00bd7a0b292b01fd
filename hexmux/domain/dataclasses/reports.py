# hexmux/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - helpers: start(), stop(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OperationReport(BaseReport):
    operation: str = ""
    source: str = ""
    output: Optional[str] = None        # file written (audio, watermark)
    files: List[str] = field(default_factory=list)  # frame names (frames)
    command: List[str] = field(default_factory=list)  # argument vector handed to ffmpeg
