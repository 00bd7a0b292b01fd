from __future__ import annotations
from enum import StrEnum

class AudioLayout(StrEnum):
    mono = "mono"
    stereo = "stereo"
    surround_21 = "2.1"
    quad = "quad"
    surround_50 = "5.0"
    surround_51 = "5.1"
    surround_61 = "6.1"
    surround_71 = "7.1"

    @property
    def channels(self) -> int:
        return _CHANNEL_COUNTS[self]


_CHANNEL_COUNTS = {
    AudioLayout.mono: 1,
    AudioLayout.stereo: 2,
    AudioLayout.surround_21: 3,
    AudioLayout.quad: 4,
    AudioLayout.surround_50: 5,
    AudioLayout.surround_51: 6,
    AudioLayout.surround_61: 7,
    AudioLayout.surround_71: 8,
}
