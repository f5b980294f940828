# framekit/domain/policies/diagnostic_parser.py
"""
Parser for the text report `ffmpeg -i <file>` prints on stderr, e.g.

    Duration: 00:01:31.66, start: 0.000000, bitrate: 10404 kb/s
      Stream #0:0(und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, 1920x1080 [SAR 1:1 DAR 16:9], 30 fps, 30 tbr

Each extractor looks at one line and returns the fields it found (or None).
Updates are applied in line order, later ones overwriting earlier ones.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from framekit.domain.entities.media_metadata import MediaMetadata
from framekit.domain.enums.policies import AspectSource


Update = Dict[str, Any]
Extractor = Callable[[str], Optional[Update]]

_FPS_RE = re.compile(r"(\d+(?:\.\d+)?)\s+fps,")
_VIDEO_RE = re.compile(r"Video:(.*)")
# leading digit must be non-zero so codec tags like 0x31637661 never count as a size
_SIZE_RE = re.compile(r"(?<![\w.])([1-9]\d*)x([1-9]\d*)(?![\w.])")
_DAR_RE = re.compile(r"DAR\s+(\d+):(\d+)")
_DURATION_RE = re.compile(r"Duration:\s*(\d+):(\d+):(\d+(?:\.\d+)?)")
_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split on \\n, \\r or \\r\\n; progress output from ffmpeg uses bare \\r."""
    return _LINE_SPLIT_RE.split(text or "")


def extract_frame_rate(line: str) -> Optional[Update]:
    m = _FPS_RE.search(line)
    if not m:
        return None
    # integer part only: "29.97 fps," -> 29
    return {"frame_rate": float(int(float(m.group(1))))}


def make_video_extractor(aspect_source: AspectSource = AspectSource.display) -> Extractor:
    def extract_video(line: str) -> Optional[Update]:
        m = _VIDEO_RE.search(line)
        if not m:
            return None
        descriptor = m.group(1)

        size = None
        for field in descriptor.split(","):
            sm = _SIZE_RE.search(field)
            if sm:
                size = (int(sm.group(1)), int(sm.group(2)))
                break
        if size is None:
            return None

        width, height = size
        aspect = width / height
        if aspect_source is AspectSource.display:
            dm = _DAR_RE.search(descriptor)
            if dm and int(dm.group(1)) and int(dm.group(2)):
                aspect = int(dm.group(1)) / int(dm.group(2))
        return {"dimensions": size, "aspect_ratio": aspect}

    return extract_video


def extract_duration(line: str) -> Optional[Update]:
    m = _DURATION_RE.search(line)
    if not m:
        return None
    return {"duration": (int(m.group(1)), int(m.group(2)), float(m.group(3)))}


def default_extractors(aspect_source: AspectSource = AspectSource.display) -> List[Extractor]:
    return [extract_frame_rate, make_video_extractor(aspect_source), extract_duration]


def parse_diagnostics(
    text: str,
    *,
    aspect_source: AspectSource = AspectSource.display,
    extractors: Optional[Iterable[Extractor]] = None,
) -> MediaMetadata:
    """Fold the extractors over every line of `text`. Never raises on odd input."""
    fns = list(extractors) if extractors is not None else default_extractors(aspect_source)
    fields: Update = {}
    for line in split_lines(text):
        for fn in fns:
            update = fn(line)
            if update:
                fields.update(update)

    # ffmpeg prints Duration before the stream lines, so frames are derived at the end
    fps = fields.get("frame_rate")
    duration = fields.get("duration")
    if fps and duration:
        h, m, s = duration
        fields["total_frames"] = int(round((h * 3600 + m * 60 + s) * fps))

    return MediaMetadata(**fields)
