# framekit/domain/policies/geometry_planner.py
from __future__ import annotations

import math
from typing import Iterable, Optional

from framekit.domain.entities.geometry import GeometrySpec
from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.entities.resolved import PlanResult, ResolvedParameters, Skip
from framekit.domain.enums.file_format import ImageFormats, normalize_format
from framekit.domain.enums.policies import PadOffsetRounding
from framekit.domain.enums.resize_mode import ResizeMode

STILL_IMAGE_FORMATS = frozenset(f.value for f in ImageFormats)
IMAGE_CONTAINER = "image2"


def even(n: float) -> int:
    """Truncate to the nearest lower even integer (yuv420 needs even sizes)."""
    return int(n) // 2 * 2


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class GeometryPlanner:
    """
    Turns a GeometrySpec plus probed MediaMetadata into ffmpeg parameters.

    Pure: no I/O, no state beyond the policies passed in, so one instance can
    be shared across threads.

    Sizing is width driven: the output width is the target width and the
    height follows the source aspect ratio. A spec with only a height ("x480")
    is height driven instead, and enlarge/shrink-only then compare heights.
    """

    def __init__(
        self,
        *,
        pad_offset_rounding: PadOffsetRounding = PadOffsetRounding.integer,
        image_formats: Optional[Iterable[str]] = None,
    ) -> None:
        self.pad_offset_rounding = PadOffsetRounding(pad_offset_rounding)
        self.image_formats = (
            frozenset(f.lower().lstrip(".") for f in image_formats) if image_formats is not None else STILL_IMAGE_FORMATS
        )

    # ---------------- public ----------------

    def resolve(
        self,
        spec: Optional[GeometrySpec],
        meta: MediaMetadata,
        format: Optional[str] = None,
        time_offset: float = 3.0,
    ) -> PlanResult:
        fields: dict = {}

        if spec is not None and meta.has_geometry:
            sized = self._size(spec, meta)
            if isinstance(sized, Skip):
                return sized
            fields.update(sized)

        fmt = normalize_format(format)
        if fmt in self.image_formats:
            fields.update(seek_seconds=float(time_offset), frame_count=1, container=IMAGE_CONTAINER)

        return ResolvedParameters(**fields)

    def is_still_image(self, format: Optional[str]) -> bool:
        return normalize_format(format) in self.image_formats

    # ---------------- internals ----------------

    def _size(self, spec: GeometrySpec, meta: MediaMetadata) -> dict | Skip:
        src_w, src_h = meta.dimensions  # type: ignore[misc]
        aspect = float(meta.aspect_ratio)  # type: ignore[arg-type]
        mode = spec.mode

        if mode is ResizeMode.exact:
            return {"width": even(spec.target_width), "height": even(spec.target_height)}

        if mode is ResizeMode.pad:
            return self._pad_or_crop(spec, aspect)

        if mode is ResizeMode.enlarge_only:
            source, target = self._compared(spec, src_w, src_h)
            if not source < target:
                return Skip(f"source {source}px is not smaller than target {target}px (enlarge only)")
        elif mode is ResizeMode.shrink_only:
            source, target = self._compared(spec, src_w, src_h)
            if not source > target:
                return Skip(f"source {source}px is not larger than target {target}px (shrink only)")

        width, height = self._keep_aspect(spec, aspect)
        return {"width": even(width), "height": even(height)}

    @staticmethod
    def _compared(spec: GeometrySpec, src_w: int, src_h: int) -> tuple[int, int]:
        if spec.width_driven:
            return src_w, spec.target_width  # type: ignore[return-value]
        return src_h, spec.target_height  # type: ignore[return-value]

    @staticmethod
    def _keep_aspect(spec: GeometrySpec, aspect: float) -> tuple[int, int]:
        if spec.width_driven:
            width = int(spec.target_width)  # type: ignore[arg-type]
            return width, round_half_up(width / aspect)
        height = int(spec.target_height)  # type: ignore[arg-type]
        return round_half_up(height * aspect), height

    def _pad_or_crop(self, spec: GeometrySpec, aspect: float) -> dict:
        width = int(spec.target_width)  # type: ignore[arg-type]
        height = round_half_up(width / aspect)
        target_height = int(spec.target_height or 0)
        pad_y = (target_height - height) / 2

        # scale height is explicit so the filter chain follows the planner's aspect, not ffmpeg's pixel aspect
        if pad_y > 0:
            offset = self._format_offset(pad_y)
            vf = f"scale={width}:{height},pad={width}:{target_height}:0:{offset}:{spec.pad_color}"
            return {"width": even(width), "height": even(target_height), "video_filter": vf}

        # padding only ever adds space; an oversized frame is cropped instead
        vf = f"scale={width}:{height},crop={width}:{height}"
        return {"width": even(width), "height": even(height), "video_filter": vf}

    def _format_offset(self, pad_y: float) -> str:
        if self.pad_offset_rounding is PadOffsetRounding.fractional and not pad_y.is_integer():
            return str(pad_y)
        return str(int(pad_y))
