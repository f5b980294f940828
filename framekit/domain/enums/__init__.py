from framekit.domain.enums.file_format import VideoFormats, ImageFormats
from framekit.domain.enums.policies import AspectSource, PadOffsetRounding
from framekit.domain.enums.resize_mode import ResizeMode
__all__ = [
    "VideoFormats",
    "ImageFormats",
    "AspectSource",
    "PadOffsetRounding",
    "ResizeMode",
]
