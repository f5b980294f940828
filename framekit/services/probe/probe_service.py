# framekit/services/probe/probe_service.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Optional

from framekit.common.logging import get_logger
from framekit.common.settings import get_settings
from framekit.domain.dataclasses.reports import ProbeReport
from framekit.domain.ports.probe import MediaProbePort
from framekit.services.probe.ffmpeg_probe import FFmpegProbe

logger = get_logger(__name__)


class ProbeService:
    """Probes many files at once on a bounded thread pool."""

    def __init__(self, probe: Optional[MediaProbePort] = None) -> None:
        self.cfg = get_settings()
        self.probe = probe or FFmpegProbe()

    def probe_many(self, paths: Iterable[Path | str], *, workers: Optional[int] = None) -> ProbeReport:
        rep = ProbeReport()
        rep.start()

        files = [Path(p) for p in paths]
        rep.planned = len(files)

        existing = []
        for f in files:
            if f.is_file():
                existing.append(f)
            else:
                rep.missing_files += 1
                rep.add_error(str(f), "file not found")
        if not existing:
            rep.stop()
            return rep

        # Thread cap: at least 1, no more than cfg
        max_workers_cfg = int(getattr(self.cfg, "max_probe_workers", 4) or 4)
        max_workers = max(1, min(int(workers or 1), max_workers_cfg))

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {pool.submit(self.probe.probe, f): f for f in existing}
            for fut in as_completed(futures):
                f = futures[fut]
                try:
                    meta = fut.result()
                except Exception as e:
                    logger.warning("probe failed for %s: %s", f, e)
                    rep.errors += 1
                    rep.add_error(str(f), str(e))
                    continue
                rep.probed_ok += 1
                rep.results[str(f)] = meta

        rep.stop()
        return rep
