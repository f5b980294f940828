from __future__ import annotations
from enum import StrEnum


class ResizeMode(StrEnum):
    exact = "exact"
    keep_aspect = "keep_aspect"
    pad = "pad"
    enlarge_only = "enlarge_only"
    shrink_only = "shrink_only"

    @classmethod
    def from_modifier(cls, ch: str) -> "ResizeMode":
        """Map the trailing modifier of a geometry string ('' for none)."""
        return _MODIFIERS.get(ch, cls.keep_aspect)

    @property
    def modifier(self) -> str:
        return next((ch for ch, mode in _MODIFIERS.items() if mode is self), "")


_MODIFIERS = {
    "!": ResizeMode.exact,
    "#": ResizeMode.pad,
    "<": ResizeMode.enlarge_only,
    ">": ResizeMode.shrink_only,
}
MODIFIER_CHARS = frozenset(_MODIFIERS)
