# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from framekit.common import settings as settings_mod
from framekit.domain.errors import ToolExecutionError, ToolNotFoundError
from framekit.domain.ports.process_runner import CommandResult

# A realistic `ffmpeg -i` banner (stderr)
FFMPEG_BANNER_1080P = (
    "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'clip.mp4':\n"
    "  Metadata:\n"
    "    major_brand     : isom\n"
    "  Duration: 00:01:31.66, start: 0.000000, bitrate: 10404 kb/s\n"
    "  Stream #0:0(und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, 1920x1080 [SAR 1:1 DAR 16:9], "
    "10301 kb/s, 30 fps, 30 tbr, 600 tbn, 60 tbc (default)\n"
    "  Stream #0:1(und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, stereo, fltp, 96 kb/s (default)\n"
    "At least one output file must be specified\n"
)

FFMPEG_BANNER_VGA = (
    "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'vga.mov':\n"
    "  Duration: 00:00:10.00, start: 0.000000, bitrate: 2000 kb/s\n"
    "  Stream #0:0: Video: mjpeg, yuvj420p, 640x480, 1800 kb/s, 25 fps, 25 tbr, 600 tbn\n"
    "At least one output file must be specified\n"
)


class FakeRunner:
    """
    ProcessRunnerPort test double. Records every call; per-executable
    handlers decide the result. Unknown executables succeed with empty output.
    """

    def __init__(self, handlers: Optional[Dict[str, Callable[[Sequence[str]], CommandResult]]] = None):
        self.calls: List[dict] = []
        self.handlers = dict(handlers or {})

    def run(self, executable: str, args: Sequence[str], *, timeout=None, check: bool = True) -> CommandResult:
        argv = [executable, *args]
        self.calls.append({"executable": executable, "args": list(args), "timeout": timeout, "check": check})
        handler = self.handlers.get(executable)
        result = handler(list(args)) if handler else CommandResult(argv=argv, returncode=0)
        if check and result.returncode != 0:
            raise ToolExecutionError("fake tool failed", argv=argv, stderr=result.stderr, rc=result.returncode)
        return result

    def calls_to(self, executable: str) -> List[dict]:
        return [c for c in self.calls if c["executable"] == executable]


def banner_handler(banner: str, *, on_transcode: Optional[Callable[[List[str]], CommandResult]] = None):
    """ffmpeg handler: `-i <src>` only -> banner with rc 1, anything else -> on_transcode."""
    def _handler(args: List[str]) -> CommandResult:
        if args[:2] == ["-hide_banner", "-i"] and len(args) == 3:
            return CommandResult(argv=["ffmpeg", *args], returncode=1, stderr=banner)
        if on_transcode is not None:
            return on_transcode(args)
        return CommandResult(argv=["ffmpeg", *args], returncode=0)
    return _handler


def missing_tool_handler(args: List[str]) -> CommandResult:
    raise ToolNotFoundError("ffmpeg not found on PATH", argv=args)


@pytest.fixture()
def media_root(tmp_path, monkeypatch) -> Path:
    """Point settings at a throwaway media root and reset the settings cache."""
    root = tmp_path / "media"
    root.mkdir()
    monkeypatch.setenv("FRAMEKIT_MEDIA_ROOT", str(root))
    monkeypatch.setenv("FRAMEKIT_APP_ENV", "test")
    settings_mod.get_settings.cache_clear()
    yield root
    settings_mod.get_settings.cache_clear()


@pytest.fixture()
def source_video(media_root) -> Path:
    p = media_root / "uploads" / "clip.mp4"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"not really a video")
    return p
