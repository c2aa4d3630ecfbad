"""Processing pipeline orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..config import APP_CONFIG, STORAGE_PATHS
from ..core import ExportSummary
from ..services import ArchiveParser, FormatExporter
from ..utils.io import ensure_directory, safe_filename

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JobPipeline:
    """Parse an uploaded archive and write every export format for it."""

    parser: ArchiveParser
    exporter: FormatExporter
    output_root: Path | None = None

    def run(
        self,
        *,
        archive_path: Path | str,
        job_id: str,
        sort: bool = False,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> ExportSummary:
        logger.info("Starting pipeline for job %s", job_id)
        created_at = datetime.now(timezone.utc)

        timeline = self.parser.parse(Path(archive_path))
        if sort:
            timeline = timeline.sorted_chronologically()
        points = timeline.points()
        if on_progress:
            on_progress(50)

        output_root = self.output_root or STORAGE_PATHS.outputs
        output_dir = ensure_directory(output_root / safe_filename(job_id))
        written = self.exporter.write_all(points, output_dir, stem=APP_CONFIG.output_stem)
        if on_progress:
            on_progress(100)

        completed_at = datetime.now(timezone.utc)
        logger.info("Job %s finished; generated %s", job_id, ", ".join(p.name for p in written))

        return ExportSummary(
            job_id=job_id,
            created_at=created_at,
            completed_at=completed_at,
            generated_files=[path.name for path in written],
            segment_count=len(timeline.segments),
            visit_count=len(timeline.visits),
            point_count=len(points),
            distance_meters=sum(segment.distance_meters for segment in timeline.segments),
        )

    @classmethod
    def default(cls) -> "JobPipeline":
        return cls(parser=ArchiveParser(), exporter=FormatExporter())
