# hexmux/domain/entities/capabilities.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class CapabilitySet:
    """
    What the installed ffmpeg build can do, as parsed from its banner and
    `-formats` / `-codecs` listings. Built once per environment.
    """
    modules: FrozenSet[str] = field(default_factory=frozenset)
    decode: FrozenSet[str] = field(default_factory=frozenset)
    encode: FrozenSet[str] = field(default_factory=frozenset)

    def can_encode(self, name: str) -> bool:
        return name in self.encode

    def can_decode(self, name: str) -> bool:
        return name in self.decode

    def has_module(self, name: str) -> bool:
        return name in self.modules
