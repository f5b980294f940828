# framekit/services/schemas/media.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from framekit.domain.dataclasses.options import ProcessorOptions
from framekit.domain.dataclasses.reports import ProbeReport, TranscodeOutcome, TranscodeStatus
from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.enums.policies import AspectSource, PadOffsetRounding


class MetadataOut(BaseModel):
    size: Optional[str] = Field(None, examples=["1920x1080"])
    aspect: Optional[float] = None
    length: Optional[str] = Field(None, examples=["00:01:31.66"])
    fps: Optional[float] = None
    frames: Optional[int] = None

    @classmethod
    def from_meta(cls, meta: MediaMetadata) -> "MetadataOut":
        return cls(**meta.as_attachment_meta())


class ProbeRequest(BaseModel):
    path: str = Field(..., examples=["uploads/clip.mp4"])


class ProbeBatchRequest(BaseModel):
    paths: List[str] = Field(..., min_length=1, max_length=1000)
    workers: Optional[int] = Field(None, ge=1, le=64)  # actual cap is settings.max_probe_workers


class ProbeBatchResponse(BaseModel):
    started_at: datetime
    finished_at: datetime
    planned: int
    probed_ok: int
    missing_files: int
    errors: int
    error_details: List[str] = Field(default_factory=list)
    results: Dict[str, MetadataOut] = Field(default_factory=dict)

    @classmethod
    def from_report(cls, rep: ProbeReport, root_prefix: str = "") -> "ProbeBatchResponse":
        def _rel(p: str) -> str:
            return p[len(root_prefix):].lstrip("/") if root_prefix and p.startswith(root_prefix) else p

        return cls(
            started_at=rep.started_at,
            finished_at=rep.finished_at,
            planned=rep.planned,
            probed_ok=rep.probed_ok,
            missing_files=rep.missing_files,
            errors=rep.errors,
            error_details=[f"{_rel(subject)}: {msg}" for subject, msg in rep.error_details],
            results={_rel(k): MetadataOut.from_meta(v) for k, v in rep.results.items()},
        )


class TranscodeRequest(BaseModel):
    path: str = Field(..., examples=["uploads/clip.mp4"])
    geometry: Optional[str] = Field(None, examples=["320x240#", "640x>"])
    format: Optional[str] = Field(None, examples=["jpg", "mp4"])
    strict: Optional[bool] = None
    time_offset: Optional[float] = Field(None, ge=0)
    pad_color: Optional[str] = None
    normalize_audio: Optional[bool] = None
    aspect_source: Optional[AspectSource] = None
    pad_offset_rounding: Optional[PadOffsetRounding] = None
    input_options: Dict[str, Optional[str]] = Field(default_factory=dict)
    output_options: Dict[str, Optional[str]] = Field(default_factory=dict)
    out_name: Optional[str] = Field(None, pattern=r"^[\w.\-]+$")

    def to_options(self) -> ProcessorOptions:
        return ProcessorOptions.from_mapping(self.model_dump(exclude={"path", "out_name"}))


class TranscodeResponse(BaseModel):
    status: TranscodeStatus
    output_path: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    meta: MetadataOut
    error_details: List[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, out: TranscodeOutcome, root_prefix: str = "") -> "TranscodeResponse":
        path = str(out.output_path) if out.output_path else None
        if path and root_prefix and path.startswith(root_prefix):
            path = path[len(root_prefix):].lstrip("/")
        return cls(
            status=out.status,
            output_path=path,
            width=out.width,
            height=out.height,
            meta=MetadataOut(**out.meta),
            error_details=[msg for _, msg in out.error_details],
        )
