# framekit/services/transcode/audio_normalizer.py
from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from framekit.common.logging import get_logger
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.transcode.command_assembler import CommandAssembler

logger = get_logger(__name__)


class AudioNormalizer:
    """
    Pulls the audio track out as 16-bit PCM wav and runs `normalize-audio` on it.
    The wav only lives inside `normalized()`; it is removed on every exit path.
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        *,
        ffmpeg_bin: str,
        normalize_bin: str,
        timeout_sec: Optional[float] = None,
        tmp_dir: Optional[Path] = None,
    ) -> None:
        self.runner = runner
        self.ffmpeg_bin = ffmpeg_bin
        self.normalize_bin = normalize_bin
        self.timeout_sec = timeout_sec
        self.tmp_dir = tmp_dir

    @contextmanager
    def normalized(self, source: Path, *, basename: str = "audio") -> Iterator[Path]:
        tmp_dir = self.tmp_dir if self.tmp_dir and self.tmp_dir.exists() else None
        with tempfile.NamedTemporaryFile("wb", prefix=f"{basename}-", suffix=".wav", delete=False, dir=tmp_dir) as tf:
            wav = Path(tf.name)
        try:
            self.runner.run(
                self.ffmpeg_bin,
                CommandAssembler.extract_audio_args(source, wav),
                timeout=self.timeout_sec,
            )
            self.runner.run(self.normalize_bin, [str(wav)], timeout=self.timeout_sec)
            logger.debug("normalized audio for %s into %s", source, wav)
            yield wav
        finally:
            wav.unlink(missing_ok=True)
