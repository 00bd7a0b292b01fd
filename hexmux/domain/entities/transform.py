# hexmux/domain/entities/transform.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Union

from hexmux.domain.errors import CommandAlreadyExistsError

Scalar = Union[str, int, float]


@dataclass(frozen=True)
class SizeOption:
    spec: str
    keep_pixel_aspect_ratio: bool = True
    keep_aspect_ratio: bool = True
    padding_color: str = "black"


@dataclass(frozen=True)
class WatermarkOption:
    path: Path
    overlay: str  # filter coordinates, e.g. "main_w-overlay_w-10:main_h-overlay_h-10"


@dataclass
class VideoOptions:
    disabled: bool = False
    format: Optional[str] = None
    codec: Optional[str] = None
    bitrate: Optional[Scalar] = None
    framerate: Optional[Scalar] = None
    start_time: Optional[int] = None
    duration: Optional[int] = None
    aspect: Optional[float] = None
    size: Optional[SizeOption] = None
    watermark: Optional[WatermarkOption] = None


@dataclass
class AudioOptions:
    disabled: bool = False
    codec: Optional[str] = None
    frequency: Optional[Scalar] = None
    channels: Optional[int] = None
    quality: Optional[Scalar] = None
    bitrate: Optional[Scalar] = None


@dataclass
class CommandLine:
    """
    Ordered engine flags and their arguments.
    A flag may appear only once; pushing it again is a programming error.
    """
    tokens: List[str] = field(default_factory=list)
    flags: Set[str] = field(default_factory=set)

    def add(self, flag: str, argument: Optional[Scalar] = None) -> None:
        if flag in self.flags:
            raise CommandAlreadyExistsError(flag)
        self.flags.add(flag)
        self.tokens.append(flag)
        if argument is not None:
            self.tokens.append(str(argument))

    def __contains__(self, flag: object) -> bool:
        return flag in self.flags

    def copy(self) -> "CommandLine":
        return CommandLine(tokens=list(self.tokens), flags=set(self.flags))
