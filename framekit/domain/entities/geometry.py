# framekit/domain/entities/geometry.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from framekit.domain.enums.resize_mode import MODIFIER_CHARS, ResizeMode
from framekit.domain.errors import ConfigurationError

_GEOMETRY_RE = re.compile(r"^(\d*)x(\d*)$")


@dataclass(frozen=True)
class GeometrySpec:
    """
    Parsed form of a "WxH[modifier]" geometry string.

    A missing half is stored as None. The modifier is read once here; nothing
    downstream looks at the raw string again.
    """
    target_width: Optional[int]
    target_height: Optional[int]
    mode: ResizeMode = ResizeMode.keep_aspect
    pad_color: str = "black"

    @classmethod
    def parse(cls, text: str, *, pad_color: str = "black") -> "GeometrySpec":
        raw = (text or "").strip()
        if not raw:
            raise ConfigurationError("geometry must not be empty")

        modifier = raw[-1] if raw[-1] in MODIFIER_CHARS else ""
        body = raw[:-1] if modifier else raw
        m = _GEOMETRY_RE.match(body)
        if not m:
            raise ConfigurationError(f"unparsable geometry {text!r}; expected '<width>x<height>[!#<>]'")

        width = int(m.group(1)) if m.group(1) else None
        height = int(m.group(2)) if m.group(2) else None
        mode = ResizeMode.from_modifier(modifier)

        if width is None and height is None:
            raise ConfigurationError(f"geometry {text!r} has neither width nor height")
        if width == 0 or height == 0:
            raise ConfigurationError(f"geometry {text!r} has a zero dimension")
        if mode is ResizeMode.exact and (width is None or height is None):
            raise ConfigurationError(f"exact geometry {text!r} needs both width and height")
        if mode is ResizeMode.pad and width is None:
            raise ConfigurationError(f"pad geometry {text!r} needs a width")
        if not (pad_color or "").strip():
            raise ConfigurationError("pad_color must not be empty")

        return cls(target_width=width, target_height=height, mode=mode, pad_color=pad_color.strip())

    @property
    def width_driven(self) -> bool:
        return self.target_width is not None

    def __str__(self) -> str:
        w = "" if self.target_width is None else str(self.target_width)
        h = "" if self.target_height is None else str(self.target_height)
        return f"{w}x{h}{self.mode.modifier}"
