# framekit/services/transcode/transcode_service.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from framekit.common.logging import get_logger
from framekit.common.path.safe import resolve_under
from framekit.common.settings import get_settings
from framekit.domain.dataclasses.options import ProcessorOptions
from framekit.domain.dataclasses.reports import TranscodeOutcome, TranscodeStatus
from framekit.domain.entities.resolved import Skip
from framekit.domain.errors import ConfigurationError, TranscodeError
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.attachments.memory import InMemoryAttachment
from framekit.services.transcode.ffmpeg_processor import FfmpegProcessor

logger = get_logger(__name__)


def _safe_replace(tmp_path: Path, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    os.replace(tmp_path, out_path)


class TranscodeService:
    """
    Runs one FfmpegProcessor and files the result under settings.output_root.

    ConfigurationError and ToolNotFoundError propagate; TranscodeError (strict
    mode) is reported as a failed outcome.
    """

    # Test hook (monkeypatch in tests)
    processor_cls = FfmpegProcessor

    def __init__(self, runner: Optional[ProcessRunnerPort] = None) -> None:
        self.cfg = get_settings()
        self.runner = runner

    def run(self, source: Path, options: ProcessorOptions, *, out_name: Optional[str] = None) -> TranscodeOutcome:
        outcome = TranscodeOutcome()
        outcome.start()
        final_override = self._output_path(out_name) if out_name else None
        # temp files are created next to the output tree so the final move is a rename
        self.cfg.temp_root.mkdir(parents=True, exist_ok=True)

        attachment = InMemoryAttachment()
        proc = self.processor_cls(source, options, runner=self.runner, attachment=attachment, settings=self.cfg)
        outcome.meta = attachment.meta

        try:
            produced = proc.make()
        except TranscodeError as e:
            outcome.status = TranscodeStatus.failed
            outcome.add_error(str(source), str(e))
            outcome.stop()
            return outcome

        if produced is None:
            # make() returns None for a skip or for a swallowed tool failure
            outcome.status = TranscodeStatus.skipped if isinstance(proc.plan(), Skip) else TranscodeStatus.failed
            outcome.stop()
            return outcome

        final = final_override or self.cfg.output_root / f"{Path(source).stem}{produced.suffix}"
        try:
            _safe_replace(produced, final)
        except OSError:
            produced.unlink(missing_ok=True)
            raise
        logger.info("wrote %s (%s)", final, options.geometry or "source size")

        outcome.status = TranscodeStatus.produced
        outcome.output_path = final
        if proc.planner.is_still_image(proc.format):
            outcome.width, outcome.height = self._image_size_or_none(final)
        else:
            params = proc.plan()
            outcome.width = getattr(params, "width", None)
            outcome.height = getattr(params, "height", None)
        outcome.stop()
        return outcome

    def _output_path(self, name: str) -> Path:
        """`name` must be a plain file name directly under output_root."""
        root = self.cfg.output_root.expanduser().resolve()
        try:
            final = resolve_under(root, name)
        except ValueError as e:
            raise ConfigurationError(f"invalid output name {name!r}: {e}") from e
        if not name.strip(".") or final.parent != root:
            raise ConfigurationError(f"invalid output name {name!r}: must be a file name under {root}")
        return final

    @staticmethod
    def _image_size_or_none(path: Path) -> tuple[Optional[int], Optional[int]]:
        try:
            with Image.open(path) as im:
                return im.size
        except (OSError, UnidentifiedImageError):
            return None, None
