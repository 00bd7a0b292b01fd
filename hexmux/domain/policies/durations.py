# hexmux/domain/policies/durations.py
from __future__ import annotations

import re
from typing import Any, Optional, TypeVar

D = TypeVar("D")

_CLOCK_RE = re.compile(r"(\d+):(\d{2}):(\d{2})")
_DIGITS_RE = re.compile(r"\d+")


def duration_to_seconds(value: Any, default: Optional[D] = 0) -> int | Optional[D]:
    """
    Normalize a time value to whole seconds.

    - "HH:MM:SS" (fractional part ignored) -> total seconds
    - a non-negative integer (int, integral float, or a string of digits) -> itself
    - anything else -> `default`
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value >= 0 else default
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 0 else default
    if isinstance(value, str):
        s = value.strip()
        m = _CLOCK_RE.match(s)
        if m:
            hours, minutes, seconds = (int(g) for g in m.groups())
            return hours * 3600 + minutes * 60 + seconds
        if _DIGITS_RE.fullmatch(s):
            return int(s)
    return default
