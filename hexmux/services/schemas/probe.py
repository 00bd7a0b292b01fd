# hexmux/services/schemas/probe.py
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field


class ProbeRequest(BaseModel):
    path: str = Field(..., min_length=1, examples=["/media/in/clip.mp4"])


class CapabilitiesRead(BaseModel):
    modules: List[str] = Field(default_factory=list)
    decode: List[str] = Field(default_factory=list)
    encode: List[str] = Field(default_factory=list)


class ResolutionRead(BaseModel):
    w: int = 0
    h: int = 0


class AspectRead(BaseModel):
    x: int
    y: int
    string: str = Field(..., examples=["16:9"])
    value: float


class VideoRead(BaseModel):
    container: str = ""
    bitrate: int = 0
    stream: float = 0.0
    codec: str = ""
    resolution: ResolutionRead
    resolution_square: Optional[ResolutionRead] = None
    aspect: Optional[AspectRead] = None
    pixel: float = 0.0
    pixel_string: str = ""
    rotate: int = 0
    fps: float = 0.0


class ChannelsRead(BaseModel):
    raw: str = ""
    value: int = 0


class AudioRead(BaseModel):
    codec: str = ""
    bitrate: str = ""
    sample_rate: int = 0
    stream: float = 0.0
    channels: ChannelsRead


class TagsRead(BaseModel):
    filename: str = ""
    title: str = ""
    artist: str = ""
    album: str = ""
    track: str = ""
    date: str = ""


class DurationRead(BaseModel):
    raw: str = Field("", examples=["00:00:30.04"])
    seconds: int = 0


class MediaDescriptorRead(BaseModel):
    tags: TagsRead
    synced: bool = False
    duration: DurationRead
    video: VideoRead
    audio: AudioRead
