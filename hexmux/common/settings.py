# hexmux/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hexmux.common.strings.splitters import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)

    @field_validator("cors_allow_credentials", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)


class EngineConfig(BaseModel):
    # seconds before a running ffmpeg/ffprobe process is killed; 0 disables
    timeout_sec: int = Field(120, ge=0)
    probe_workers: int = Field(2, ge=1, le=8)


class FrameDefaults(BaseModel):
    extension: str = Field("jpg", pattern="^(jpg|jpeg|png|bmp|webp)$")
    padding_color: str = "black"
    keep_pixel_aspect_ratio: bool = True
    keep_aspect_ratio: bool = True

    @field_validator("keep_pixel_aspect_ratio", "keep_aspect_ratio", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class AudioProfile(BaseModel):
    """Fixed output profile used by audio-only extraction."""
    frequency: int = 44100
    channels: int = 2
    bitrate: int = 192  # kb/s
    format: str = "mp3"


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "hexmux"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- External binaries --------
    ffmpeg_bin: str = Field("ffmpeg", description="ffmpeg executable (name on PATH or absolute path)")
    ffprobe_bin: str = Field("ffprobe", description="ffprobe executable (name on PATH or absolute path)")

    # -------- Watermark --------
    watermark_position: str = Field("SW", pattern="^(NE|NC|NW|SE|SC|SW|C|CE|CW)$")

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    engine: EngineConfig = EngineConfig()
    frames: FrameDefaults = FrameDefaults()
    audio_profile: AudioProfile = AudioProfile()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from hexmux.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
