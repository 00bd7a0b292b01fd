from hexmux.domain.enums.anchor import Anchor
from hexmux.domain.enums.audio_layout import AudioLayout
__all__ = [
    "Anchor",
    "AudioLayout",
]
