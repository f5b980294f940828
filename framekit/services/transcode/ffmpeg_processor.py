# framekit/services/transcode/ffmpeg_processor.py
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, List, Mapping, Optional

from framekit.common.logging import get_logger
from framekit.common.settings import Settings, get_settings
from framekit.domain.dataclasses.options import ProcessorOptions
from framekit.domain.entities.geometry import GeometrySpec
from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.entities.resolved import PlanResult, ResolvedParameters, Skip
from framekit.domain.enums.file_format import KNOWN_FORMATS, normalize_format
from framekit.domain.errors import ConfigurationError, ToolExecutionError, ToolNotFoundError, TranscodeError
from framekit.domain.policies.geometry_planner import GeometryPlanner
from framekit.domain.ports.attachment import AttachmentPort
from framekit.domain.ports.probe import MediaProbePort
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.probe.ffmpeg_probe import FFmpegProbe
from framekit.services.process.subprocess_runner import SubprocessRunner
from framekit.services.transcode.audio_normalizer import AudioNormalizer
from framekit.services.transcode.command_assembler import CommandAssembler

logger = get_logger(__name__)


class FfmpegProcessor:
    """
    Transcodes one source file into a thumbnail or a re-encoded video.

    The source is probed once, in the constructor, and the metadata is handed
    to the attachment (if any) straight away. `make()` then runs

        resolve -> [extract audio -> normalize] -> ffmpeg -> cleanup

    and returns the path of the new file, or None when nothing was produced
    (enlarge/shrink-only skip, or a tool failure with strict=False).

    Bad geometry/format/options raise ConfigurationError here, never later.
    """

    def __init__(
        self,
        source: Path | str,
        options: ProcessorOptions | Mapping[str, Any] | None = None,
        *,
        runner: Optional[ProcessRunnerPort] = None,
        probe: Optional[MediaProbePort] = None,
        attachment: Optional[AttachmentPort] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.cfg = settings or get_settings()
        if options is None:
            options = ProcessorOptions()
        elif not isinstance(options, ProcessorOptions):
            options = ProcessorOptions.from_mapping(options)
        self.options = options.with_defaults(self.cfg.transcode)

        self.source = Path(source).expanduser().resolve()
        self.basename = self.source.stem
        self.format = normalize_format(self.options.format)
        if self.format is not None and self.format not in KNOWN_FORMATS | set(self.cfg.transcode.image_formats):
            raise ConfigurationError(f"unrecognized output format {self.options.format!r}")

        self.geometry: Optional[GeometrySpec] = None
        if self.options.geometry:
            self.geometry = GeometrySpec.parse(self.options.geometry, pad_color=self.options.pad_color or "black")

        self.runner = runner or SubprocessRunner()
        self.planner = GeometryPlanner(
            pad_offset_rounding=self.options.pad_offset_rounding,
            image_formats=self.cfg.transcode.image_formats,
        )
        self.assembler = CommandAssembler(
            input_options=self.options.input_options,
            output_options=self.options.output_options,
        )

        prober = probe or FFmpegProbe(self.runner, ffmpeg_bin=self.cfg.ffmpeg.bin, aspect_source=self.options.aspect_source)
        self.meta: MediaMetadata = prober.probe(self.source)
        if attachment is not None:
            attachment.instance_write("meta", self.meta.as_attachment_meta())

    # ---- planning -------------------------------------------------------------
    @property
    def strict(self) -> bool:
        return bool(self.options.strict)

    def plan(self) -> PlanResult:
        return self.planner.resolve(
            self.geometry,
            self.meta,
            self.format,
            time_offset=float(self.options.time_offset or 0),
        )

    def build_args(self, params: ResolvedParameters, dest: Path, *, audio: Optional[Path] = None) -> List[str]:
        return self.assembler.build(params, self.source, dest, audio=audio)

    # ---- main -----------------------------------------------------------------
    def make(self) -> Optional[Path]:
        params = self.plan()
        if isinstance(params, Skip):
            logger.info("skipping %s: %s", self.source.name, params.reason)
            return None

        dst = self._new_destination()
        try:
            self._run(params, dst)
        except ToolNotFoundError:
            dst.unlink(missing_ok=True)
            raise
        except ToolExecutionError as e:
            dst.unlink(missing_ok=True)
            if self.strict:
                raise TranscodeError(f"error while processing video for {self.basename}: {e}") from e
            logger.warning("ffmpeg failed for %s, no output produced: %s", self.basename, e)
            return None
        except BaseException:
            dst.unlink(missing_ok=True)
            raise
        return dst

    # ---- internals ------------------------------------------------------------
    def _run(self, params: ResolvedParameters, dst: Path) -> None:
        timeout = self.cfg.ffmpeg.timeout_sec
        if not self.options.normalize_audio:
            args = self.build_args(params, dst)
            logger.info("[ffmpeg] %s", " ".join(args))
            self.runner.run(self.cfg.ffmpeg.bin, args, timeout=timeout)
            return

        normalizer = AudioNormalizer(
            self.runner,
            ffmpeg_bin=self.cfg.ffmpeg.bin,
            normalize_bin=self.cfg.ffmpeg.normalize_bin,
            timeout_sec=timeout,
            tmp_dir=self.cfg.temp_root,
        )
        with normalizer.normalized(self.source, basename=self.basename) as wav:
            args = self.build_args(params, dst, audio=wav)
            logger.info("[ffmpeg] %s", " ".join(args))
            self.runner.run(self.cfg.ffmpeg.bin, args, timeout=timeout)

    def _new_destination(self) -> Path:
        suffix = f".{self.format}" if self.format else self.source.suffix
        tmp_dir = self.cfg.temp_root if self.cfg.temp_root.exists() else None
        with tempfile.NamedTemporaryFile("wb", prefix=f"{self.basename}-", suffix=suffix, delete=False, dir=tmp_dir) as tf:
            return Path(tf.name)
