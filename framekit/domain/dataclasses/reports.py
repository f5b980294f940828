# framekit/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from framekit.domain.entities.media_metadata import MediaMetadata


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject/path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Probe report (batch probing)
# ---------------------------------------------------------------------------
@dataclass
class ProbeReport(BaseReport):
    planned: int = 0
    probed_ok: int = 0
    missing_files: int = 0
    errors: int = 0
    # path -> metadata for every file that probed fine
    results: Dict[str, MediaMetadata] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Single transcode outcome
# ---------------------------------------------------------------------------
class TranscodeStatus(StrEnum):
    produced = "produced"
    skipped = "skipped"
    failed = "failed"


@dataclass
class TranscodeOutcome(BaseReport):
    status: TranscodeStatus = TranscodeStatus.failed
    output_path: Optional[Path] = None
    width: Optional[int] = None
    height: Optional[int] = None
    meta: Dict[str, Any] = field(default_factory=dict)
