from __future__ import annotations
from pathlib import Path
from typing import List, Protocol

class FileOpsPort(Protocol):
    def file_exists(self, path: Path) -> bool: ...
    def ensure_dir(self, path: Path) -> None: ...
    def remove_file(self, path: Path) -> None: ...
    def list_dir(self, path: Path) -> List[str]: ...
