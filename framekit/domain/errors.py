# framekit/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


class FramekitError(Exception):
    """Base class for everything framekit raises on purpose."""


class ConfigurationError(FramekitError, ValueError):
    """Malformed geometry, unknown format or invalid processor options."""


@dataclass(eq=False)
class ToolExecutionError(FramekitError):
    """An external tool exited non-zero or timed out."""
    message: str
    argv: Sequence[str] = ()
    stderr: Optional[str] = None
    rc: Optional[int] = None

    def __str__(self) -> str:
        parts = [self.message]
        if self.rc is not None:
            parts.append(f"(exit status {self.rc})")
        return " ".join(parts)


class ToolNotFoundError(ToolExecutionError):
    """The executable could not be started at all. Never swallowed."""


class TranscodeError(FramekitError):
    """User-visible failure of a transcode run in strict mode."""
