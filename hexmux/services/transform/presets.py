# hexmux/services/transform/presets.py
"""
Composed operations. Each one resets the session, pushes its own option
sequence and runs ffmpeg once.
"""
from __future__ import annotations

import re
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional

from hexmux.common.logging import get_logger
from hexmux.common.settings import get_settings
from hexmux.domain.errors import ExtractFrameOptionsError
from hexmux.domain.policies.durations import duration_to_seconds
from hexmux.domain.policies.geometry import Dimension, compute_dimension
from hexmux.services.transform.session import TransformSession

logger = get_logger()


@dataclass
class FrameOptions:
    start_time: Optional[int | str] = None
    duration_time: Optional[int | str] = None
    frame_rate: Optional[int] = None
    size: Optional[str] = None
    number: Optional[int] = None
    # at most one sampling interval may be set
    every_frames: Optional[int] = None
    every_seconds: Optional[int] = None
    every_percentage: Optional[float] = None
    keep_pixel_aspect_ratio: bool = True
    keep_aspect_ratio: bool = True
    padding_color: str = "black"
    file_name: Optional[str] = None
    extension: str = "jpg"

    @classmethod
    def from_settings(cls, **overrides) -> "FrameOptions":
        """Documented defaults (from Settings.frames) with caller options merged over them."""
        frames = get_settings().frames
        base = cls(
            keep_pixel_aspect_ratio=frames.keep_pixel_aspect_ratio,
            keep_aspect_ratio=frames.keep_aspect_ratio,
            padding_color=frames.padding_color,
            extension=frames.extension,
        )
        return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def _check_sampling(opts: FrameOptions) -> None:
    active = {
        name: value
        for name, value in (
            ("every_frames", opts.every_frames),
            ("every_seconds", opts.every_seconds),
            ("every_percentage", opts.every_percentage),
        )
        if value is not None
    }
    if len(active) >= 2:
        raise ExtractFrameOptionsError(", ".join(sorted(active)))
    for name, value in active.items():
        if value <= 0:
            raise ExtractFrameOptionsError(f"{name}={value}")
    if opts.every_percentage is not None and opts.every_percentage > 100:
        raise ExtractFrameOptionsError(f"every_percentage={opts.every_percentage}")


def _resolve_file_name(session: TransformSession, opts: FrameOptions, dimension: Dimension) -> str:
    """<stem>_%d.<ext>; tokens: %t timestamp (ms), %s output size, %x width, %y height."""
    if not opts.file_name:
        name = session.file_path.stem
    else:
        name = opts.file_name
        for token, value in (
            ("%t", str(int(time.time() * 1000))),
            ("%s", dimension.size),
            ("%x", str(dimension.width)),
            ("%y", str(dimension.height)),
        ):
            name = name.replace(token, value)
        name = Path(name).stem
    return f"{name}_%d.{opts.extension}"


def extract_frames(session: TransformSession, folder: str | Path, options: Optional[FrameOptions] = None) -> List[str]:
    """
    Dump still frames into `folder`. Returns the names of the produced files
    (everything in the folder matching the resolved name pattern).
    """
    opts = options or FrameOptions.from_settings()
    _check_sampling(opts)

    start_time = duration_to_seconds(opts.start_time, None) if opts.start_time is not None else None
    duration_time = duration_to_seconds(opts.duration_time, None) if opts.duration_time is not None else None
    resolution = session.descriptor.video.resolution
    size = opts.size or f"{resolution.w}x{resolution.h}"

    dimension = compute_dimension(
        session.descriptor,
        size,
        keep_pixel_aspect_ratio=opts.keep_pixel_aspect_ratio,
        keep_aspect_ratio=opts.keep_aspect_ratio,
    )

    every_percentage_interval: Optional[int] = None
    if opts.every_percentage is not None:
        every_percentage_interval = int(session.descriptor.duration.seconds / 100 * opts.every_percentage)
        if every_percentage_interval < 1:
            raise ExtractFrameOptionsError(
                f"every_percentage={opts.every_percentage} of {session.descriptor.duration.seconds}s"
            )

    file_name = _resolve_file_name(session, opts, dimension)
    folder = Path(folder)
    session.files.ensure_dir(folder)

    session.reset()
    if start_time:
        session.add_command("-ss", start_time)
    if duration_time:
        session.add_command("-t", duration_time)
    if opts.frame_rate:
        session.add_command("-r", opts.frame_rate)

    session.add_command("-s", dimension.size)
    if dimension.aspect is not None:
        session.add_complex_aspect(dimension.aspect, opts.padding_color)

    if opts.number:
        session.add_command("-vframes", opts.number)
    if opts.every_frames:
        session.add_command("-vsync", 0)
        session.add_filter_complex(f"select=not(mod(n\\,{opts.every_frames}))")
    if opts.every_seconds:
        session.add_command("-vsync", 0)
        session.add_filter_complex(f"select=not(mod(t\\,{opts.every_seconds}))")
    if every_percentage_interval is not None:
        session.add_command("-vsync", 0)
        session.add_filter_complex(f"select=not(mod(t\\,{every_percentage_interval}))")

    session.set_output(folder / file_name)
    session.execute()

    pattern = re.compile(re.escape(file_name).replace("%d", r"\d+") + "$")
    frames = [f for f in session.files.list_dir(folder) if pattern.match(f)]
    logger.info("extracted %d frame(s) from %s into %s", len(frames), session.file_path, folder)
    return frames


def extract_audio(session: TransformSession, destination: str | Path) -> str:
    """Audio-only copy of the source using the configured profile (44.1 kHz stereo 192k mp3)."""
    profile = get_settings().audio_profile
    destination = Path(destination)
    if session.files.file_exists(destination):
        session.files.remove_file(destination)

    session.reset()
    session.add_command("-vn")
    session.add_command("-ar", profile.frequency)
    session.add_command("-ac", profile.channels)
    session.add_command("-ab", f"{profile.bitrate}k")
    session.add_command("-f", profile.format)
    session.set_output(destination)
    session.execute()
    return str(destination)


def default_watermark_output(source: Path, watermark_path: Path) -> Path:
    return source.parent / f"{source.stem}_watermarked_{watermark_path.stem}{source.suffix}"


def watermark(
    session: TransformSession,
    watermark_path: str | Path,
    output: Optional[str | Path] = None,
    *,
    position: Optional[str] = None,
    margin_top: Optional[int] = None,
    margin_bottom: Optional[int] = None,
    margin_left: Optional[int] = None,
    margin_right: Optional[int] = None,
) -> str:
    """Burn an image into the source; output defaults to <stem>_watermarked_<wm stem><ext>."""
    session.reset()
    session.set_watermark(
        watermark_path,
        position=position,
        margin_top=margin_top,
        margin_bottom=margin_bottom,
        margin_left=margin_left,
        margin_right=margin_right,
        inline=True,
    )
    out = Path(output) if output else default_watermark_output(session.file_path, Path(watermark_path))
    session.set_output(out)
    session.add_command("-strict", "-2")
    session.execute()
    return str(out)
