# hexmux/services/schemas/operations.py
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

Position = Literal["NE", "NC", "NW", "SE", "SC", "SW", "C", "CE", "CW"]


class FramesRequest(BaseModel):
    source: str = Field(..., min_length=1)
    folder: str = Field(..., min_length=1)
    start_time: Optional[int | str] = Field(None, examples=[5, "00:00:05"])
    duration_time: Optional[int | str] = None
    frame_rate: Optional[int] = Field(None, ge=1)
    size: Optional[str] = Field(None, examples=["640x?", "?x360", "50%", "640x360"])
    number: Optional[int] = Field(None, ge=1)
    every_frames: Optional[int] = Field(None, ge=1)
    every_seconds: Optional[int] = Field(None, ge=1)
    every_percentage: Optional[float] = Field(None, gt=0, le=100)
    keep_pixel_aspect_ratio: Optional[bool] = None
    keep_aspect_ratio: Optional[bool] = None
    padding_color: Optional[str] = None
    file_name: Optional[str] = Field(None, examples=["shot_%s_%t.jpg"])

    @model_validator(mode="after")
    def _one_interval(self):
        active = [n for n in ("every_frames", "every_seconds", "every_percentage") if getattr(self, n) is not None]
        if len(active) > 1:
            raise ValueError(f"only one of every_frames/every_seconds/every_percentage may be set, got {active}")
        return self

    def frame_options(self) -> dict:
        return self.model_dump(exclude={"source", "folder"}, exclude_none=True)


class AudioRequest(BaseModel):
    source: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1, examples=["/media/out/clip.mp3"])


class WatermarkRequest(BaseModel):
    source: str = Field(..., min_length=1)
    watermark: str = Field(..., min_length=1, examples=["/media/logo.png"])
    output: Optional[str] = None
    position: Optional[Position] = None
    margin_top: Optional[int] = None
    margin_bottom: Optional[int] = None
    margin_left: Optional[int] = None
    margin_right: Optional[int] = None

    def placement(self) -> dict:
        return self.model_dump(include={"position", "margin_top", "margin_bottom", "margin_left", "margin_right"})


class OperationResponse(BaseModel):
    operation: str
    started_at: datetime
    finished_at: datetime
    source: str
    output: Optional[str] = None
    files: List[str] = Field(default_factory=list)
    command: List[str] = Field(default_factory=list)
