# hexmux/domain/entities/media.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Resolution:
    w: int = 0
    h: int = 0

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def __str__(self) -> str:
        return f"{self.w}x{self.h}"


@dataclass(frozen=True)
class AspectRatio:
    """A reduced ratio such as 16:9, with its float value."""
    x: int
    y: int
    string: str
    value: float

    @classmethod
    def from_pair(cls, x: int, y: int) -> "AspectRatio":
        return cls(x=x, y=y, string=f"{x}:{y}", value=x / y)


@dataclass(frozen=True)
class Tags:
    filename: str = ""
    title: str = ""
    artist: str = ""
    album: str = ""
    track: str = ""
    date: str = ""


@dataclass(frozen=True)
class Duration:
    raw: str = ""
    seconds: int = 0


@dataclass(frozen=True)
class VideoStream:
    container: str = ""
    bitrate: int = 0                 # kb/s
    stream: float = 0.0              # "0.1" / "0:1" -> 0.1
    codec: str = ""
    resolution: Resolution = field(default_factory=Resolution)
    # resolution corrected to square pixels; only set when pixel aspect != 1
    resolution_square: Optional[Resolution] = None
    aspect: Optional[AspectRatio] = None
    pixel: float = 0.0
    pixel_string: str = ""
    rotate: int = 0
    fps: float = 0.0


@dataclass(frozen=True)
class Channels:
    raw: str = ""
    value: int = 0


@dataclass(frozen=True)
class AudioStream:
    codec: str = ""
    bitrate: str = ""
    sample_rate: int = 0
    stream: float = 0.0
    channels: Channels = field(default_factory=Channels)


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Normalized, framework-free metadata for one input file, produced from the
    ffprobe text report. Every field has a default; nothing here is required.
    """
    tags: Tags = field(default_factory=Tags)
    synced: bool = False
    duration: Duration = field(default_factory=Duration)
    video: VideoStream = field(default_factory=VideoStream)
    audio: AudioStream = field(default_factory=AudioStream)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
