"""REST API blueprint."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory
from rq.exceptions import NoSuchJobError
from rq.job import Job

from ..config import APP_CONFIG, STORAGE_PATHS
from ..services import ArchiveParser
from ..utils.io import ensure_directory, safe_filename

api_bp = Blueprint("api", __name__)

_TRUTHY = {"1", "true", "yes", "on"}


@api_bp.post("/jobs")
def create_job():
    """Create an export job from an uploaded Takeout archive."""

    archive = request.files.get("archive")
    if archive is None or not archive.filename:
        return jsonify({"error": "archive field is required"}), 400
    if not _allowed(archive.filename, APP_CONFIG.allowed_archive_extensions):
        return jsonify({"error": f"Invalid archive file: {archive.filename}"}), 400

    job_id = str(uuid.uuid4())
    job_dir = ensure_directory(STORAGE_PATHS.uploads / job_id)
    archive_path = job_dir / (safe_filename(archive.filename) or "takeout.zip")
    archive.save(archive_path)

    created_at = datetime.now(timezone.utc).isoformat()
    job = _queue().enqueue(
        "timeline_export.tasks.process_job",
        kwargs={
            "job_id": job_id,
            "archive_path": str(archive_path),
            "sort": request.form.get("sort", "").strip().lower() in _TRUTHY,
        },
        job_id=job_id,
        meta={"created_at": created_at},
    )

    response = {
        "job_id": job.id,
        "status": job.get_status(refresh=False),
        "created_at": created_at,
    }

    return jsonify(response), 202


@api_bp.get("/jobs/<job_id>")
def job_status(job_id: str):
    try:
        job = Job.fetch(job_id, connection=_connection())
    except NoSuchJobError:
        return jsonify({"error": "Job not found"}), 404

    payload: dict[str, object] = {
        "job_id": job.id,
        "status": job.get_status(refresh=True),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_finished:
        payload["result"] = job.result or {}
        return jsonify(payload), 200
    if job.is_failed:
        payload["error"] = job.meta.get("error", job.exc_info)
        return jsonify(payload), 500

    payload["progress"] = job.meta.get("progress", 0)
    return jsonify(payload), 200


@api_bp.get("/jobs/<job_id>/files/<filename>")
def download_file(job_id: str, filename: str):
    """Serve one of the files generated for a finished job."""

    directory = (STORAGE_PATHS.outputs / safe_filename(job_id)).resolve()
    if not directory.is_dir():
        abort(404)
    return send_from_directory(directory, safe_filename(filename), as_attachment=True)


@api_bp.post("/timeline/summary")
def timeline_summary():
    """Parse an uploaded archive in-request and report what it contains."""

    archive = request.files.get("archive")
    if archive is None or not archive.filename:
        return jsonify({"error": "archive field is required"}), 400

    timeline = ArchiveParser().parse(archive.stream)
    segments = timeline.segments
    return jsonify(
        {
            "segments": len(segments),
            "visits": len(timeline.visits),
            "points": len(timeline.points()),
            "distance_meters": round(sum(s.distance_meters for s in segments), 1),
        }
    ), 200


def _allowed(filename: str, extensions: tuple[str, ...]) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in extensions


def _queue():
    return current_app.extensions["rq"]["queue"]


def _connection():
    return current_app.extensions["rq"]["connection"]
