from __future__ import annotations

from pathlib import Path
from typing import List

from hexmux.domain.ports.files import FileOpsPort


class LocalFileOps(FileOpsPort):
    """
    Local filesystem implementation for FileOpsPort.
    """

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def ensure_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_file(self, path: Path) -> None:
        Path(path).unlink(missing_ok=True)

    def list_dir(self, path: Path) -> List[str]:
        p = Path(path)
        if not p.is_dir():
            return []
        return sorted(child.name for child in p.iterdir() if child.is_file())
