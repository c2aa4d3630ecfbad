"""RQ task definitions for asynchronous export jobs."""

from __future__ import annotations

import logging
from pathlib import Path

from rq import get_current_job

from .core.exceptions import ProcessingError
from .pipelines import JobPipeline

logger = logging.getLogger(__name__)


def process_job(*, job_id: str, archive_path: str, sort: bool = False) -> dict:
    """Parse the uploaded archive and write its GPX, KML and CSV exports."""

    job = get_current_job()

    def report(progress: int) -> None:
        if job:
            job.meta["progress"] = progress
            job.save_meta()

    report(0)
    try:
        summary = JobPipeline.default().run(
            archive_path=Path(archive_path),
            job_id=job_id,
            sort=sort,
            on_progress=report,
        )
    except ProcessingError as exc:
        logger.warning("Job %s failed: %s", job_id, exc)
        if job:
            job.meta["error"] = exc.as_dict()
            job.save_meta()
        raise

    return summary.as_dict()
