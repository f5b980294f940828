# framekit/services/api/routers/media.py
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status

from framekit.common.path.safe import resolve_under
from framekit.common.settings import get_settings
from framekit.domain.errors import ConfigurationError, ToolNotFoundError
from framekit.domain.ports.probe import MediaProbePort
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.api.deps import get_media_probe, get_process_runner
from framekit.services.probe.probe_service import ProbeService
from framekit.services.schemas.media import (
    MetadataOut,
    ProbeBatchRequest,
    ProbeBatchResponse,
    ProbeRequest,
    TranscodeRequest,
    TranscodeResponse,
)
from framekit.services.transcode.transcode_service import TranscodeService

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/media", tags=["media"])


def _source_path(rel: str) -> Path:
    root = get_settings().media_root
    try:
        p = resolve_under(root, rel)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if not p.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"not found: {rel}")
    return p


def _root_prefix() -> str:
    return str(get_settings().media_root.expanduser().resolve())


@router.post("/probe", response_model=MetadataOut)
def probe_media(
    req: ProbeRequest,
    probe: MediaProbePort = Depends(get_media_probe),
) -> MetadataOut:
    src = _source_path(req.path)
    try:
        meta = probe.probe(src)
    except ToolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return MetadataOut.from_meta(meta)


@router.post("/probe_batch", response_model=ProbeBatchResponse)
def probe_batch(
    req: ProbeBatchRequest,
    probe: MediaProbePort = Depends(get_media_probe),
) -> ProbeBatchResponse:
    root = get_settings().media_root
    paths = []
    for rel in req.paths:
        try:
            paths.append(resolve_under(root, rel))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    rep = ProbeService(probe).probe_many(paths, workers=req.workers)
    return ProbeBatchResponse.from_report(rep, root_prefix=_root_prefix())


@router.post("/transcode", response_model=TranscodeResponse)
def transcode_media(
    req: TranscodeRequest,
    runner: ProcessRunnerPort = Depends(get_process_runner),
) -> TranscodeResponse:
    src = _source_path(req.path)
    try:
        outcome = TranscodeService(runner).run(src, req.to_options(), out_name=req.out_name)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ToolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return TranscodeResponse.from_outcome(outcome, root_prefix=_root_prefix())
