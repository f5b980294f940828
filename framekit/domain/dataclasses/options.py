# framekit/domain/dataclasses/options.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from framekit.domain.enums.policies import AspectSource, PadOffsetRounding
from framekit.domain.errors import ConfigurationError

PassthroughFlags = Mapping[str, Optional[Any]]


@dataclass(frozen=True)
class ProcessorOptions:
    """
    Construction-time options for one FfmpegProcessor.

    Every field left as None falls back to the matching settings default
    (see `with_defaults`); a value set here always wins, one field at a time.
    """
    geometry: Optional[str] = None
    format: Optional[str] = None
    strict: Optional[bool] = None
    time_offset: Optional[float] = None
    pad_color: Optional[str] = None
    normalize_audio: Optional[bool] = None
    aspect_source: Optional[AspectSource] = None
    pad_offset_rounding: Optional[PadOffsetRounding] = None
    # raw ffmpeg flags, name without the dash -> value (None for bare switches)
    input_options: PassthroughFlags = field(default_factory=dict)
    output_options: PassthroughFlags = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProcessorOptions":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"unknown processor options: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    def with_defaults(self, defaults: Any) -> "ProcessorOptions":
        """
        Fill unset fields from `defaults` (a TranscodeDefaults or anything with
        the same attribute names). Passthrough flag maps are never defaulted.
        """
        filled = {}
        for name in ("strict", "time_offset", "pad_color", "normalize_audio", "aspect_source", "pad_offset_rounding"):
            if getattr(self, name) is None:
                filled[name] = getattr(defaults, name)
        out = replace(self, **filled)
        out._validate()
        try:
            return replace(
                out,
                aspect_source=AspectSource(out.aspect_source),
                pad_offset_rounding=PadOffsetRounding(out.pad_offset_rounding),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def _validate(self) -> None:
        if self.time_offset is not None and self.time_offset < 0:
            raise ConfigurationError(f"time_offset must be >= 0, got {self.time_offset}")
        for name in ("input_options", "output_options"):
            flags = getattr(self, name)
            if not isinstance(flags, Mapping):
                raise ConfigurationError(f"{name} must be a mapping of flag -> value")
            for key in flags:
                if not str(key).strip() or str(key).startswith("-"):
                    raise ConfigurationError(f"{name}: flag names go without the leading dash, got {key!r}")
