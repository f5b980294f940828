# framekit/domain/entities/resolved.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

# ffmpeg flag name (without the dash) -> value, None for bare switches
Flags = Dict[str, Optional[str]]


@dataclass(frozen=True)
class Skip:
    """Returned instead of parameters when an enlarge/shrink-only condition is not met."""
    reason: str


@dataclass(frozen=True)
class ResolvedParameters:
    """
    Everything the planner decided for one output request.

    width/height stay None when the source had no usable geometry; in that
    case only the format flags are filled in.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    video_filter: Optional[str] = None     # scale/pad/crop chain, pad mode only
    seek_seconds: Optional[float] = None
    frame_count: Optional[int] = None
    container: Optional[str] = None

    @property
    def size(self) -> Optional[str]:
        if self.width is None or self.height is None:
            return None
        return f"{self.width}x{self.height}"

    def input_flags(self) -> Flags:
        flags: Flags = {}
        if self.seek_seconds is not None:
            flags["ss"] = _fmt_number(self.seek_seconds)
        return flags

    def output_flags(self) -> Flags:
        flags: Flags = {}
        if self.video_filter:
            flags["vf"] = self.video_filter
        elif self.size:
            flags["s"] = self.size
        if self.frame_count is not None:
            flags["vframes"] = str(self.frame_count)
        if self.container:
            flags["f"] = self.container
        return flags


PlanResult = Union[ResolvedParameters, Skip]


def _fmt_number(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)
