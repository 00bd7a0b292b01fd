# hexmux/services/transform/session.py
"""
TransformSession: one compilation cycle against one source file.

Setters record typed options (validated eagerly against the CapabilitySet),
`compile()` turns them into the ffmpeg argument vector. Argument order is a
contract, because ffmpeg options are positional:

    ffmpeg -i <input> [-i <input> ...] <flags in insertion order>
           [-filter_complex "<fragment>, <fragment>, ..."] [<output>]

A session belongs to one caller. Reuse it for another operation only after
`reset()`.
"""
from __future__ import annotations

import os
import re
import shlex
from pathlib import Path
from typing import Any, List, Optional, Sequence

from hexmux.common.logging import get_logger
from hexmux.common.settings import get_settings
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import AspectRatio, MediaDescriptor
from hexmux.domain.entities.transform import (
    AudioOptions,
    CommandLine,
    Scalar,
    SizeOption,
    VideoOptions,
    WatermarkOption,
)
from hexmux.domain.enums.anchor import Anchor
from hexmux.domain.enums.audio_layout import AudioLayout
from hexmux.domain.errors import (
    AudioChannelInvalidError,
    CodecNotSupportedError,
    DimensionError,
    FormatNotSupportedError,
    InputPathError,
    InvalidWatermarkError,
    InvalidWatermarkPositionError,
    ValidationError,
)
from hexmux.domain.policies.durations import duration_to_seconds
from hexmux.domain.policies.geometry import compute_dimension, margin_to_overlay
from hexmux.domain.ports.engine import EnginePort, EngineResult
from hexmux.domain.ports.files import FileOpsPort
from hexmux.services.engine.subprocess_engine import SubprocessEngine, resolve_binary
from hexmux.services.filesystem.local_file_ops import LocalFileOps

logger = get_logger()

_RATIO_RE = re.compile(r"(\d+):(\d+)")
_LEADING_INT_RE = re.compile(r"\s*(\d+)")


def _leading_int(value: Any, field: str) -> int:
    """Integer prefix of a number or string ("800k" -> 800)."""
    if isinstance(value, bool):
        raise ValidationError(value, code=f"invalid_{field}", message=f"Invalid {field}: {value!r}")
    if isinstance(value, (int, float)) and value >= 0:
        return int(value)
    m = _LEADING_INT_RE.match(str(value))
    if not m:
        raise ValidationError(value, code=f"invalid_{field}", message=f"Invalid {field}: {value!r}")
    return int(m.group(1))


def _format_ratio(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def aspect_filter(aspect: AspectRatio, padding_color: str = "") -> str:
    """scale to square pixels, then pad to the x:y display aspect (centered)."""
    suffix = f":{padding_color}" if padding_color else ""
    r = f"{aspect.x}/{aspect.y}"
    return f"scale=iw*sar:ih, pad=max(iw\\,ih*({r})):ow/({r}):(ow-iw)/2:(oh-ih)/2{suffix}"


def validate_source(path: Any, files: Optional[FileOpsPort] = None) -> Path:
    """Reject an empty, non-path, or missing source before anything is probed."""
    if path is None or path == "":
        raise InputPathError(path, code="empty_input_filepath", message="The input file path is empty")
    if not isinstance(path, (str, os.PathLike)):
        raise InputPathError(
            path, code="input_filepath_must_be_string", message=f"The input file path must be a string: {path!r}"
        )
    p = Path(path)
    if not (files or LocalFileOps()).file_exists(p):
        raise InputPathError(p)
    return p


class TransformSession:
    def __init__(
        self,
        file_path: str | Path,
        capabilities: CapabilitySet,
        descriptor: MediaDescriptor,
        *,
        engine: Optional[EnginePort] = None,
        files: Optional[FileOpsPort] = None,
        ffmpeg_bin: Optional[str] = None,
    ) -> None:
        cfg = get_settings()
        self.file_path = Path(file_path)
        self.capabilities = capabilities
        self.descriptor = descriptor
        self.engine = engine or SubprocessEngine()
        self.files = files or LocalFileOps()
        self.ffmpeg_bin = resolve_binary(ffmpeg_bin or cfg.ffmpeg_bin)
        self.watermark_position = cfg.watermark_position
        self.reset()

    # -------------------------
    # State
    # -------------------------
    def reset(self) -> "TransformSession":
        """Back to a fresh session on the same source: no options, flags, extra inputs or filters."""
        self.video = VideoOptions()
        self.audio = AudioOptions()
        self.commands = CommandLine()
        self.inputs: List[str] = [str(self.file_path)]
        self.filters_complex: List[str] = []
        self.output: Optional[str] = None
        return self

    def add_command(self, flag: str, argument: Optional[Scalar] = None) -> "TransformSession":
        self.commands.add(flag, argument)
        return self

    def add_input(self, path: str | Path) -> "TransformSession":
        self.inputs.append(str(path))
        return self

    def add_filter_complex(self, fragment: str) -> "TransformSession":
        self.filters_complex.append(fragment)
        return self

    def add_complex_aspect(self, aspect: AspectRatio, padding_color: str = "") -> "TransformSession":
        self.add_filter_complex(aspect_filter(aspect, padding_color))
        self.add_command("-aspect", aspect.string)
        return self

    def set_output(self, path: str | Path | None) -> "TransformSession":
        self.output = str(path) if path is not None else None
        return self

    # -------------------------
    # Video
    # -------------------------
    def set_disable_video(self) -> "TransformSession":
        self.video.disabled = True
        return self

    def set_video_format(self, fmt: str) -> "TransformSession":
        if not self.capabilities.can_encode(fmt):
            raise FormatNotSupportedError(fmt)
        self.video.format = fmt
        return self

    def set_video_codec(self, codec: str) -> "TransformSession":
        if not self.capabilities.can_encode(codec):
            raise CodecNotSupportedError(codec)
        self.video.codec = codec
        return self

    def set_video_bitrate(self, bitrate: Scalar) -> "TransformSession":
        self.video.bitrate = _leading_int(bitrate, "bitrate")
        return self

    def set_video_frame_rate(self, framerate: Scalar) -> "TransformSession":
        self.video.framerate = _leading_int(framerate, "framerate")
        return self

    def set_video_start_time(self, time: Scalar) -> "TransformSession":
        self.video.start_time = duration_to_seconds(time)
        return self

    def set_video_duration(self, duration: Scalar) -> "TransformSession":
        self.video.duration = duration_to_seconds(duration)
        return self

    def set_video_aspect_ratio(self, ratio: Scalar) -> "TransformSession":
        """
        "16:9", 1.777 or "1.777" are taken literally; anything else falls back
        to the source's display aspect.
        """
        value: Optional[float] = None
        if isinstance(ratio, (int, float)) and not isinstance(ratio, bool):
            value = float(ratio)
        else:
            s = str(ratio).strip()
            m = _RATIO_RE.fullmatch(s)
            if m and int(m.group(2)) > 0:
                value = int(m.group(1)) / int(m.group(2))
            else:
                try:
                    value = float(s)
                except ValueError:
                    value = None
        if value is None or value <= 0:
            source_aspect = self.descriptor.video.aspect
            if source_aspect is None:
                raise DimensionError(f"aspect ratio {ratio!r} (source has none)")
            value = source_aspect.value
        self.video.aspect = value
        return self

    def set_video_size(
        self,
        size: str,
        *,
        keep_pixel_aspect_ratio: bool = True,
        keep_aspect_ratio: bool = True,
        padding_color: str = "black",
    ) -> "TransformSession":
        self.video.size = SizeOption(
            spec=size,
            keep_pixel_aspect_ratio=keep_pixel_aspect_ratio,
            keep_aspect_ratio=keep_aspect_ratio,
            padding_color=padding_color,
        )
        return self

    def set_watermark(
        self,
        watermark_path: str | Path,
        *,
        position: Optional[str] = None,
        margin_top: Optional[int] = None,
        margin_bottom: Optional[int] = None,
        margin_left: Optional[int] = None,
        margin_right: Optional[int] = None,
        inline: bool = False,
    ) -> "TransformSession":
        """
        Overlay an image. Deferred to compile() by default; `inline` folds the
        input and overlay filter into the session immediately.
        """
        if not watermark_path or not self.files.file_exists(Path(watermark_path)):
            raise InvalidWatermarkError(watermark_path)
        position = position or self.watermark_position
        if position not in Anchor.__members__:
            raise InvalidWatermarkPositionError(position)

        overlay = margin_to_overlay(
            Anchor(position),
            margin_top=margin_top or 0,
            margin_bottom=margin_bottom or 0,
            margin_left=margin_left or 0,
            margin_right=margin_right or 0,
        )
        if not inline:
            self.video.watermark = WatermarkOption(path=Path(watermark_path), overlay=overlay)
            return self
        self.add_input(watermark_path)
        self.add_filter_complex(f"overlay={overlay}")
        return self

    # -------------------------
    # Audio
    # -------------------------
    def set_disable_audio(self) -> "TransformSession":
        self.audio.disabled = True
        return self

    def set_audio_codec(self, codec: str) -> "TransformSession":
        if not self.capabilities.can_encode(codec):
            raise CodecNotSupportedError(codec)
        if codec == "mp3" and self.capabilities.has_module("libmp3lame"):
            codec = "libmp3lame"
        self.audio.codec = codec
        return self

    def set_audio_frequency(self, frequency: Scalar) -> "TransformSession":
        self.audio.frequency = _leading_int(frequency, "frequency")
        return self

    def set_audio_channels(self, layout: str) -> "TransformSession":
        try:
            self.audio.channels = AudioLayout(layout).channels
        except ValueError as e:
            raise AudioChannelInvalidError(layout) from e
        return self

    def set_audio_bitrate(self, bitrate: Scalar) -> "TransformSession":
        self.audio.bitrate = _leading_int(bitrate, "bitrate")
        return self

    def set_audio_quality(self, quality: Scalar) -> "TransformSession":
        self.audio.quality = quality
        return self

    # -------------------------
    # Compilation
    # -------------------------
    def _video_flags(self, commands: CommandLine, inputs: List[str], filters: List[str]) -> None:
        v = self.video
        if v.disabled:
            commands.add("-vn")
            return
        if v.format is not None:
            commands.add("-f", v.format)
        if v.codec is not None:
            commands.add("-vcodec", v.codec)
        if v.bitrate is not None:
            commands.add("-b", f"{v.bitrate}kb")
        if v.framerate is not None:
            commands.add("-r", v.framerate)
        if v.start_time is not None:
            commands.add("-ss", v.start_time)
        if v.duration is not None:
            commands.add("-t", v.duration)

        if v.watermark is not None:
            inputs.append(str(v.watermark.path))
            filters.append(f"overlay={v.watermark.overlay}")

        if v.size is not None:
            dimension = compute_dimension(
                self.descriptor,
                v.size.spec,
                keep_pixel_aspect_ratio=v.size.keep_pixel_aspect_ratio,
                keep_aspect_ratio=v.size.keep_aspect_ratio,
            )
            if dimension.aspect is not None:
                filters.append(aspect_filter(dimension.aspect, v.size.padding_color))
                commands.add("-aspect", dimension.aspect.string)
            commands.add("-s", dimension.size)

        if v.aspect is not None and "-aspect" not in commands:
            commands.add("-aspect", _format_ratio(v.aspect))

    def _audio_flags(self, commands: CommandLine) -> None:
        a = self.audio
        if a.disabled:
            commands.add("-an")
            return
        if a.codec is not None:
            commands.add("-acodec", a.codec)
        if a.frequency is not None:
            commands.add("-ar", a.frequency)
        if a.channels is not None:
            commands.add("-ac", a.channels)
        if a.quality is not None:
            commands.add("-aq", a.quality)
        if a.bitrate is not None:
            commands.add("-ab", f"{a.bitrate}k")

    def compile(self) -> List[str]:
        """
        Full argument vector for the recorded options. Works on copies: the
        session's own flags, inputs and filters are left untouched.
        """
        return self._compile(self.output)

    def _compile(self, output: Optional[str]) -> List[str]:
        commands = self.commands.copy()
        inputs = list(self.inputs)
        filters = list(self.filters_complex)
        self._video_flags(commands, inputs, filters)
        self._audio_flags(commands)
        return self._assemble(commands, inputs, filters, output)

    def assemble(self) -> List[str]:
        """Argument vector of the current raw state (flags/inputs/filters added directly)."""
        return self._assemble(self.commands, self.inputs, self.filters_complex, self.output)

    def _assemble(
        self,
        commands: CommandLine,
        inputs: Sequence[str],
        filters: Sequence[str],
        output: Optional[str],
    ) -> List[str]:
        args: List[str] = [self.ffmpeg_bin]
        for inp in inputs:
            args += ["-i", inp]
        args += commands.tokens
        if filters:
            args += ["-filter_complex", ", ".join(filters)]
        if output:
            args.append(output)
        return args

    @staticmethod
    def command_line(args: Sequence[str]) -> str:
        return " ".join(shlex.quote(a) for a in args)

    # -------------------------
    # Execution
    # -------------------------
    def execute(self, args: Optional[Sequence[str]] = None) -> EngineResult:
        args = list(args) if args is not None else self.assemble()
        logger.info("running: %s", self.command_line(args))
        return self.engine.invoke(args)

    def save(self, destination: str | Path) -> str:
        """Compile the recorded options into `destination` and run ffmpeg."""
        args = self._compile(str(destination))
        self.set_output(destination)
        self.execute(args)
        return str(self.output)


def load_session(
    path: str | Path,
    capabilities: CapabilitySet,
    descriptor: MediaDescriptor,
    *,
    engine: Optional[EnginePort] = None,
    files: Optional[FileOpsPort] = None,
    ffmpeg_bin: Optional[str] = None,
) -> TransformSession:
    """A fresh session on a validated source, seeded with already-probed metadata."""
    source = validate_source(path, files)
    return TransformSession(
        source, capabilities, descriptor, engine=engine, files=files, ffmpeg_bin=ffmpeg_bin
    )
