# framekit/services/probe/ffmpeg_probe.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from framekit.common.logging import get_logger
from framekit.common.settings import get_settings
from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.enums.policies import AspectSource
from framekit.domain.policies.diagnostic_parser import parse_diagnostics
from framekit.domain.ports.probe import MediaProbePort
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.process.subprocess_runner import SubprocessRunner

logger = get_logger(__name__)


class FFmpegProbe(MediaProbePort):
    """
    MediaProbePort that reads the banner `ffmpeg -i <file>` prints.

    ffmpeg exits 1 here ("At least one output file must be specified"), so the
    exit status is ignored; only a tool that cannot be started is an error.
    Safe for use from a thread pool.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunnerPort] = None,
        *,
        ffmpeg_bin: Optional[str] = None,
        timeout_sec: Optional[float] = None,
        aspect_source: Optional[AspectSource] = None,
    ) -> None:
        cfg = get_settings()
        self.runner = runner or SubprocessRunner()
        self.ffmpeg_bin = ffmpeg_bin or cfg.ffmpeg.bin
        self.timeout_sec = timeout_sec or cfg.ffmpeg.probe_timeout_sec
        self.aspect_source = AspectSource(aspect_source or cfg.transcode.aspect_source)

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path | str) -> MediaMetadata:
        src = Path(path).expanduser().resolve()
        result = self.runner.run(
            self.ffmpeg_bin,
            ["-hide_banner", "-i", str(src)],
            timeout=self.timeout_sec,
            check=False,
        )
        meta = parse_diagnostics(result.output, aspect_source=self.aspect_source)
        if meta.dimensions is None:
            logger.info("no video stream found in %s", src)
        return meta
