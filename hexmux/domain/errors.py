# hexmux/domain/errors.py
from __future__ import annotations

from typing import Any, Optional


class HexmuxError(Exception):
    """Root of every error raised by hexmux."""


class ValidationError(HexmuxError):
    """
    Input rejected before anything reaches the engine.

    Subclasses set `code` and a `template`; the offending value is kept on
    the instance so callers (API, logs) can render a precise message.
    """
    code: str = "validation_error"
    template: str = "Invalid value: {value}"

    def __init__(self, value: Any = None, *, code: Optional[str] = None, message: Optional[str] = None):
        self.value = value
        if code:
            self.code = code
        self.message = message or self.template.format(value=value)
        super().__init__(self.message)


class InputPathError(ValidationError):
    code = "fileinput_not_exist"
    template = "The input file does not exist: {value}"


class FormatNotSupportedError(ValidationError):
    code = "format_not_supported"
    template = "The format '{value}' is not supported by the installed ffmpeg"


class CodecNotSupportedError(ValidationError):
    code = "codec_not_supported"
    template = "The codec '{value}' is not supported by the installed ffmpeg"


class InvalidWatermarkError(ValidationError):
    code = "invalid_watermark"
    template = "The watermark file does not exist: {value}"


class InvalidWatermarkPositionError(ValidationError):
    code = "invalid_watermark_position"
    template = "Invalid watermark position: {value}"


class SizeFormatError(ValidationError):
    code = "size_format"
    template = "Invalid size format '{value}' (expected Nx?, ?xN, N% or WxH)"


class DimensionError(ValidationError):
    code = "invalid_dimension"
    template = "Cannot compute dimensions from {value}"


class CommandAlreadyExistsError(ValidationError):
    code = "command_already_exists"
    template = "The command '{value}' was already added to this session"


class ExtractFrameOptionsError(ValidationError):
    code = "extract_frame_invalid_everyN_options"
    template = "Invalid frame sampling options: {value}"


class AudioChannelInvalidError(ValidationError):
    code = "audio_channel_is_invalid"
    template = "Invalid audio channel layout: {value}"


class EngineError(HexmuxError):
    """
    The external engine failed (non-zero exit, timeout, or could not start).
    `output` carries the engine's raw diagnostic text, uninterpreted.
    """

    def __init__(self, message: str, *, output: Optional[str] = None, returncode: Optional[int] = None):
        self.message = message
        self.output = output
        self.returncode = returncode
        super().__init__(message)

    def __str__(self) -> str:
        if self.returncode is not None:
            return f"{self.message} (rc={self.returncode})"
        return self.message
