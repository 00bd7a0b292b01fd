from __future__ import annotations
from pathlib import Path
from typing import Protocol
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import MediaDescriptor

class MediaProbePort(Protocol):
    def probe_capabilities(self) -> CapabilitySet: ...
    def probe_file(self, path: Path) -> MediaDescriptor: ...
