from __future__ import annotations
from typing import Any, Mapping, Protocol


class AttachmentPort(Protocol):
    """The storage side that keeps probed metadata next to the uploaded file."""

    def instance_write(self, attr: str, value: Mapping[str, Any]) -> None: ...
