# framekit/services/api/deps.py
from __future__ import annotations

from framekit.domain.ports.probe import MediaProbePort
from framekit.domain.ports.process_runner import ProcessRunnerPort
from framekit.services.probe.ffmpeg_probe import FFmpegProbe
from framekit.services.process.subprocess_runner import SubprocessRunner


def get_process_runner() -> ProcessRunnerPort:
    """
    Provide a ProcessRunnerPort implementation via DI.
    Tests override this with a scripted fake.
    """
    return SubprocessRunner()


def get_media_probe() -> MediaProbePort:
    return FFmpegProbe(get_process_runner())
