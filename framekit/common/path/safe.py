# framekit/common/path/safe.py
from __future__ import annotations

from pathlib import Path


def resolve_under(root: Path | str, rel: Path | str) -> Path:
    """
    Resolve a client-supplied relative path against `root`.
    Raises ValueError for absolute paths or anything that lands outside root
    (symlinks are followed before the check).
    """
    r = Path(root).expanduser().resolve()
    rel_s = str(rel).strip()
    if not rel_s:
        raise ValueError("empty path")
    if Path(rel_s).is_absolute():
        raise ValueError(f"path {rel_s} must be relative to the media root")
    p = (r / rel_s).resolve()
    if not p.is_relative_to(r):
        raise ValueError(f"path {p} escapes root {r}")
    return p
