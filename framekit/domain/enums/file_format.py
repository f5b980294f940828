# framekit/domain/enums/file_format.py
from __future__ import annotations

from enum import StrEnum


class VideoFormats(StrEnum):
    MP4 = "mp4"
    MKV = "mkv"
    MOV = "mov"
    AVI = "avi"
    WEBM = "webm"
    M4V = "m4v"
    MPEG = "mpeg"
    MPG = "mpg"
    TS = "ts"
    FLV = "flv"
    OGV = "ogv"
    THREE_GP = "3gp"


class ImageFormats(StrEnum):
    JPG = "jpg"
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    BMP = "bmp"


KNOWN_FORMATS = frozenset(f.value for f in VideoFormats) | frozenset(f.value for f in ImageFormats)


def normalize_format(fmt: str | None) -> str | None:
    """Lowercase and strip a leading dot; '' and None both mean 'keep source format'."""
    f = (fmt or "").strip().lower().lstrip(".")
    return f or None
