from __future__ import annotations
from enum import StrEnum

class Anchor(StrEnum):
    """Watermark placement on the main video (corners, edge centers, center)."""
    NE = "NE"
    NC = "NC"
    NW = "NW"
    SE = "SE"
    SC = "SC"
    SW = "SW"
    C = "C"
    CE = "CE"
    CW = "CW"
