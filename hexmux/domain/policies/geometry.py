# hexmux/domain/policies/geometry.py
"""
Pure numeric rules behind every size, aspect and overlay argument we hand to
ffmpeg. Nothing here touches the filesystem or the engine.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from hexmux.domain.entities.media import AspectRatio, MediaDescriptor, Resolution
from hexmux.domain.enums.anchor import Anchor
from hexmux.domain.errors import DimensionError, InvalidWatermarkPositionError, SizeFormatError

_FIXED_WIDTH_RE = re.compile(r"(\d+)x\?")
_FIXED_HEIGHT_RE = re.compile(r"\?x(\d+)")
_PERCENTAGE_RE = re.compile(r"(\d+)%")
_CLASSIC_RE = re.compile(r"(\d+)x(\d+)")


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int
    # reduced output aspect; only computed when keep_aspect_ratio is requested
    aspect: Optional[AspectRatio] = None

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"


def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return a


def reduce_ratio(a: int, b: int) -> Tuple[int, int]:
    """Reduce a:b by their greatest common divisor. Negative or 0:0 input is rejected."""
    if a < 0 or b < 0 or (a == 0 and b == 0):
        raise DimensionError(f"{a}:{b}")
    g = gcd(a, b)
    return a // g, b // g


def make_even(v: int) -> int:
    return v - 1 if v % 2 else v


def _round(x: float) -> int:
    # half-up, not banker's rounding
    return int(math.floor(x + 0.5))


def aspect_from_resolution(w: int, h: int) -> Optional[AspectRatio]:
    if w <= 0 or h <= 0:
        return None
    x, y = reduce_ratio(w, h)
    return AspectRatio.from_pair(x, y)


def square_resolution(resolution: Resolution, pixel: float) -> Optional[Resolution]:
    """
    Correct a stored resolution to square pixels.
    None when no correction applies (pixel aspect 1, or unknown/0).
    """
    if pixel in (0, 1) or pixel < 0:
        return None
    if pixel > 1:
        return Resolution(w=int(resolution.w * pixel), h=resolution.h)
    return Resolution(w=resolution.w, h=int(resolution.h / pixel))


def _reference(descriptor: MediaDescriptor, keep_pixel_aspect_ratio: bool) -> Resolution:
    video = descriptor.video
    if keep_pixel_aspect_ratio and video.resolution_square is not None:
        return video.resolution_square
    return video.resolution


def _require(ref: Resolution, spec: str) -> Resolution:
    if ref.is_empty:
        raise DimensionError(f"source resolution {ref} for size '{spec}'")
    return ref


def compute_dimension(
    descriptor: MediaDescriptor,
    size_spec: str,
    *,
    keep_pixel_aspect_ratio: bool = False,
    keep_aspect_ratio: bool = False,
) -> Dimension:
    """
    Resolve a size string against the source video.

    Forms, tried in this order:
      "640x?"   fixed width, height follows the source aspect
      "?x360"   fixed height, width follows the source aspect
      "50%"     percentage of the source resolution
      "640x360" explicit
    Both sides are rounded then forced even (encoders want even macroblocks).
    """
    spec = (size_spec or "").strip()
    aspect = descriptor.video.aspect
    ref = _reference(descriptor, keep_pixel_aspect_ratio)

    if m := _FIXED_WIDTH_RE.fullmatch(spec):
        width = int(m.group(1))
        if aspect is not None:
            height = _round(width / aspect.x * aspect.y)
        else:
            ref = _require(ref, spec)
            height = _round(ref.h / (ref.w / width)) if width else 0
    elif m := _FIXED_HEIGHT_RE.fullmatch(spec):
        height = int(m.group(1))
        if aspect is not None:
            width = _round(height / aspect.y * aspect.x)
        else:
            ref = _require(ref, spec)
            width = _round(ref.w / (ref.h / height)) if height else 0
    elif m := _PERCENTAGE_RE.fullmatch(spec):
        ref = _require(ref, spec)
        ratio = int(m.group(1)) / 100
        width = _round(ref.w * ratio)
        height = _round(ref.h * ratio)
    elif m := _CLASSIC_RE.fullmatch(spec):
        width = int(m.group(1))
        height = int(m.group(2))
    else:
        raise SizeFormatError(size_spec)

    width = make_even(width)
    height = make_even(height)
    if width <= 0 or height <= 0:
        raise DimensionError(f"'{size_spec}' -> {width}x{height}")

    out_aspect = None
    if keep_aspect_ratio:
        x, y = reduce_ratio(width, height)
        out_aspect = AspectRatio.from_pair(x, y)
    return Dimension(width=width, height=height, aspect=out_aspect)


# ---- overlay placement -------------------------------------------------------

_ANCHOR_BASES = {
    Anchor.NE: ("0", "0"),
    Anchor.NC: ("main_w/2-overlay_w/2", "0"),
    Anchor.NW: ("main_w-overlay_w", "0"),
    Anchor.SE: ("0", "main_h-overlay_h"),
    Anchor.SC: ("main_w/2-overlay_w/2", "main_h-overlay_h"),
    Anchor.SW: ("main_w-overlay_w", "main_h-overlay_h"),
    Anchor.CE: ("0", "main_h/2-overlay_h/2"),
    Anchor.C: ("main_w/2-overlay_w/2", "main_h/2-overlay_h/2"),
    Anchor.CW: ("main_w-overlay_w", "main_h/2-overlay_h/2"),
}


def _offset(value: int) -> str:
    if not value:
        return ""
    return f"+{value}" if value > 0 else str(value)


def margin_to_overlay(
    anchor: Anchor | str,
    margin_top: int = 0,
    margin_bottom: int = 0,
    margin_left: int = 0,
    margin_right: int = 0,
) -> str:
    """
    Overlay filter coordinates ("x:y") for an anchor plus margins.
    Left/top margins move the overlay by +value, right/bottom by -value.
    """
    try:
        base_x, base_y = _ANCHOR_BASES[Anchor(anchor)]
    except ValueError as e:
        raise InvalidWatermarkPositionError(anchor) from e
    x = base_x + _offset(margin_left) + _offset(-margin_right)
    y = base_y + _offset(margin_top) + _offset(-margin_bottom)
    return f"{x}:{y}"
