# hexmux/common/probe/ffprobe_helpers.py
"""
Builders for the probe invocations and parsers for their text output.

ffmpeg/ffprobe print free-form, version-dependent diagnostics, so parsing is
lenient: every field is looked up through a named pattern and a miss simply
yields the field's default. Nothing in here raises on unexpected input.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Set

from hexmux.common.logging import get_logger
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import (
    AspectRatio,
    AudioStream,
    Channels,
    Duration,
    MediaDescriptor,
    Resolution,
    Tags,
    VideoStream,
)
from hexmux.domain.policies.durations import duration_to_seconds
from hexmux.domain.policies.geometry import aspect_from_resolution, square_resolution

logger = get_logger()


def build_capabilities_cmds(ffmpeg_bin: str = "ffmpeg") -> List[List[str]]:
    """
    The two listings the capability set is built from. No -hide_banner: the
    `configuration:` line of the banner carries the enabled modules.
    """
    return [[ffmpeg_bin, "-formats"], [ffmpeg_bin, "-codecs"]]


def build_probe_cmd(ffprobe_bin: str, input_path: str | Path) -> List[str]:
    """Plain text report (stream lines, metadata tags) for one file."""
    return [ffprobe_bin, str(input_path)]


# ---- capabilities -----------------------------------------------------------

_CONFIGURATION_RE = re.compile(r"configuration:(.*)")
_ENABLE_RE = re.compile(r"--enable-([a-zA-Z0-9\-]+)")
# `-formats`:  " DE mp4             MP4 (MPEG-4 Part 14)"
_FORMAT_LINE_RE = re.compile(r"^\s*(DE|D|E)\s+(\S+)\s+(\S.*)$")
# `-codecs`:   " DEV.LS h264                 H.264 / AVC / MPEG-4 AVC"
_CODEC_LINE_RE = re.compile(r"^\s*([D.])([E.])[VASDT.][I.][L.][S.]\s+(\S+)\s+(\S.*)$")
# trailing implementation lists: "(decoders: mp3float mp3 ) (encoders: libmp3lame )"
_IMPL_LIST_RE = re.compile(r"\((encoders|decoders): ([^)]*)\)")


def parse_capabilities(text: str) -> CapabilitySet:
    modules: Set[str] = set()
    decode: Set[str] = set()
    encode: Set[str] = set()

    for m in _CONFIGURATION_RE.finditer(text or ""):
        modules.update(_ENABLE_RE.findall(m.group(1)))

    for line in (text or "").splitlines():
        fm = _FORMAT_LINE_RE.match(line)
        if fm:
            scope, ids = fm.group(1), fm.group(2)
            names = [n for n in ids.split(",") if n]
            if "D" in scope:
                decode.update(names)
            if "E" in scope:
                encode.update(names)
            continue
        cm = _CODEC_LINE_RE.match(line)
        if cm and cm.group(3) != "=":  # legend lines look like " D..... = Decoding supported"
            if cm.group(1) == "D":
                decode.add(cm.group(3))
            if cm.group(2) == "E":
                encode.add(cm.group(3))
            for kind, names in _IMPL_LIST_RE.findall(cm.group(4)):
                (encode if kind == "encoders" else decode).update(names.split())

    logger.debug("capabilities: %d modules, %d decoders, %d encoders", len(modules), len(decode), len(encode))
    return CapabilitySet(modules=frozenset(modules), decode=frozenset(decode), encode=frozenset(encode))


# ---- per-file report --------------------------------------------------------

_M = re.MULTILINE
_PATTERNS: Dict[str, re.Pattern[str]] = {
    "filename": re.compile(r"from '(.*)'"),
    "title": re.compile(r"^\s*(?:INAM|title)\s*:\s(.+)$", _M),
    "artist": re.compile(r"^\s*artist\s*:\s(.+)$", _M),
    "album": re.compile(r"^\s*album\s*:\s(.+)$", _M),
    "track": re.compile(r"^\s*track\s*:\s(.+)$", _M),
    "date": re.compile(r"^\s*date\s*:\s(.+)$", _M),
    "synced": re.compile(r"start: (0\.000000)"),
    "duration": re.compile(r"Duration: (\d+:\d{2}:\d{2}\.\d+)"),
    "container": re.compile(r"Input #0, ([a-zA-Z0-9]+),"),
    "video_bitrate": re.compile(r"bitrate: (\d+) kb/s"),
    "video_line": re.compile(r"^.*Stream #.*: Video: .*$", _M),
    "video_stream": re.compile(r"Stream #(\d+(?:[.:]\d+)?)[^:\s]*: Video"),
    "video_codec": re.compile(r"Video: (\w+)"),
    "resolution": re.compile(r"\b(\d{2,5}x\d{2,5})\b"),
    "pixel": re.compile(r"[SP]AR (\d+:\d+)"),
    "aspect": re.compile(r"DAR (\d+:\d+)"),
    "fps": re.compile(r"(\d+(?:\.\d+)?) (?:fps|tb\(r\))"),
    "rotate": re.compile(r"rotate\s+:\s(\d{2,3})"),
    "audio_line": re.compile(r"^.*Stream #.*: Audio: .*$", _M),
    "audio_stream": re.compile(r"Stream #(\d+(?:[.:]\d+)?)[^:\s]*: Audio"),
    "audio_codec": re.compile(r"Audio: (\w+)"),
    "sample_rate": re.compile(r"(\d+) Hz", re.IGNORECASE),
    "channels": re.compile(r"Audio:.*?\d+ Hz, ([^,]+)"),
    "audio_bitrate": re.compile(r"Audio:.* (\d+) kb/s"),
}

_CHANNEL_VALUES = {"mono": 1, "stereo": 2}


def _find(name: str, text: str) -> Optional[str]:
    """Group 1 (or the whole match) of a named pattern, or None when absent."""
    m = _PATTERNS[name].search(text)
    if m is None:
        return None
    return m.group(1) if m.groups() else m.group(0)


def _parse_int(x: Optional[str], default: int = 0) -> int:
    try:
        return int(x) if x is not None else default
    except ValueError:
        return default


def _parse_float(x: Optional[str], default: float = 0.0) -> float:
    try:
        return float(x) if x is not None else default
    except ValueError:
        return default


def _parse_stream_index(x: Optional[str]) -> float:
    # old builds print "#0.1", current ones "#0:1"
    return _parse_float(x.replace(":", ".") if x else None)


def _parse_ratio(x: Optional[str]) -> Optional[tuple[int, int]]:
    if not x or ":" not in x:
        return None
    a, b = x.split(":", 1)
    num, den = _parse_int(a), _parse_int(b)
    if num <= 0 or den <= 0:  # e.g. "DAR 0:1" for unknown
        return None
    return num, den


def _parse_resolution(x: Optional[str]) -> Resolution:
    if not x:
        return Resolution()
    w, h = x.split("x", 1)
    return Resolution(w=_parse_int(w), h=_parse_int(h))


def _parse_video(text: str) -> VideoStream:
    line = _find("video_line", text) or ""
    # codec-level fields are read from the video stream line first
    scope = line or text

    resolution = _parse_resolution(_find("resolution", scope))

    dar = _parse_ratio(_find("aspect", scope))
    if dar is not None:
        aspect: Optional[AspectRatio] = AspectRatio.from_pair(*dar)
    else:
        aspect = aspect_from_resolution(resolution.w, resolution.h)

    sar_raw = _find("pixel", scope)
    sar = _parse_ratio(sar_raw)
    if sar is not None:
        pixel_string, pixel = sar_raw or "", sar[0] / sar[1]
    elif resolution.w != 0:
        pixel_string, pixel = "1:1", 1.0
    else:
        pixel_string, pixel = "", 0.0

    return VideoStream(
        container=_find("container", text) or "",
        bitrate=_parse_int(_find("video_bitrate", text)),
        stream=_parse_stream_index(_find("video_stream", text)),
        codec=_find("video_codec", scope) or "",
        resolution=resolution,
        resolution_square=square_resolution(resolution, pixel),
        aspect=aspect,
        pixel=pixel,
        pixel_string=pixel_string,
        rotate=_parse_int(_find("rotate", text)),
        fps=_parse_float(_find("fps", scope)),
    )


def _parse_audio(text: str) -> AudioStream:
    line = _find("audio_line", text) or ""
    scope = line or text
    raw_channels = (_find("channels", scope) or "").strip()
    return AudioStream(
        codec=_find("audio_codec", scope) or "",
        bitrate=_find("audio_bitrate", scope) or "",
        sample_rate=_parse_int(_find("sample_rate", scope)),
        stream=_parse_stream_index(_find("audio_stream", text)),
        channels=Channels(raw=raw_channels, value=_CHANNEL_VALUES.get(raw_channels, 0)),
    )


def parse_media_descriptor(text: str) -> MediaDescriptor:
    """
    Turn an ffprobe text report into a MediaDescriptor. Safe to call in unit
    tests with fixture text; missing fields fall back to their defaults.
    """
    text = text or ""
    raw_duration = _find("duration", text) or ""
    return MediaDescriptor(
        tags=Tags(
            filename=_find("filename", text) or "",
            title=(_find("title", text) or "").strip(),
            artist=(_find("artist", text) or "").strip(),
            album=(_find("album", text) or "").strip(),
            track=(_find("track", text) or "").strip(),
            date=(_find("date", text) or "").strip(),
        ),
        synced=_find("synced", text) is not None,
        duration=Duration(
            raw=raw_duration,
            seconds=duration_to_seconds(raw_duration) if raw_duration else 0,
        ),
        video=_parse_video(text),
        audio=_parse_audio(text),
    )
