# framekit/domain/entities/media_metadata.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class MediaMetadata:
    """
    What a probe could recover about a source file. Every field is optional:
    a missing video stream or a garbled report just leaves fields as None.
    Built once per source file and never mutated afterwards.
    """
    dimensions: Optional[Tuple[int, int]] = None
    aspect_ratio: Optional[float] = None
    frame_rate: Optional[float] = None
    duration: Optional[Tuple[int, int, float]] = None   # (hours, minutes, seconds)
    total_frames: Optional[int] = None

    @property
    def width(self) -> Optional[int]:
        return self.dimensions[0] if self.dimensions else None

    @property
    def height(self) -> Optional[int]:
        return self.dimensions[1] if self.dimensions else None

    @property
    def has_geometry(self) -> bool:
        return self.dimensions is not None and bool(self.aspect_ratio)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.duration is None:
            return None
        h, m, s = self.duration
        return h * 3600 + m * 60 + s

    @property
    def size(self) -> Optional[str]:
        return f"{self.dimensions[0]}x{self.dimensions[1]}" if self.dimensions else None

    @property
    def length(self) -> Optional[str]:
        if self.duration is None:
            return None
        h, m, s = self.duration
        return f"{h:02d}:{m:02d}:{s:05.2f}"

    def as_attachment_meta(self) -> Dict[str, Any]:
        """Mapping handed to the attachment: size/aspect/length/fps/frames, absent keys omitted."""
        out: Dict[str, Any] = {
            "size": self.size,
            "aspect": self.aspect_ratio,
            "length": self.length,
            "fps": self.frame_rate,
            "frames": self.total_frames,
        }
        return {k: v for k, v in out.items() if v is not None}
