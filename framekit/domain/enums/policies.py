from __future__ import annotations
from enum import StrEnum


class AspectSource(StrEnum):
    """Where the probe takes aspect_ratio from."""
    display = "display"   # DAR a:b when the Video: line carries it, else pixels
    pixel = "pixel"       # always width / height


class PadOffsetRounding(StrEnum):
    integer = "integer"
    fractional = "fractional"
