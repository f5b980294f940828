from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional

from framekit.domain.ports.attachment import AttachmentPort


class InMemoryAttachment(AttachmentPort):
    """Dict-backed attachment; what the API and tests hand to FfmpegProcessor."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def instance_write(self, attr: str, value: Mapping[str, Any]) -> None:
        with self._lock:
            self._data[attr] = dict(value)

    def instance_read(self, attr: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            v = self._data.get(attr)
            return dict(v) if v is not None else None

    @property
    def meta(self) -> Dict[str, Any]:
        return self.instance_read("meta") or {}
