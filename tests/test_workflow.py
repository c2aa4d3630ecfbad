from __future__ import annotations

import csv
from pathlib import Path

import pytest

from conftest import SEMANTIC_DIR, activity_segment, month, write_archive
from timeline_export import tasks
from timeline_export.config import StoragePaths
from timeline_export.core import MalformedFieldError
from timeline_export.pipelines import JobPipeline
from timeline_export.workflow import export_takeout_archive, load_timeline, main


def read_csv_rows(csv_path: Path):
    with csv_path.open(newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def test_load_timeline_flattens_segments_in_order(takeout_zip: Path):
    timeline = load_timeline(takeout_zip)

    points = timeline.points()
    assert len(points) == 3
    assert [p.timestamp for p in points] == [1700000000000, 1700000000000, 1701400000000]


def test_export_takeout_archive_writes_three_files(takeout_zip: Path, tmp_path: Path):
    written = export_takeout_archive(takeout_zip, tmp_path / "exports")

    assert [path.name for path in written] == ["timeline.gpx", "timeline.kml", "timeline.csv"]
    rows = read_csv_rows(tmp_path / "exports" / "timeline.csv")
    assert [row["lat"] for row in rows] == ["40.712802", "40.713802", "51.5072"]


def test_export_skips_visits(tmp_path: Path):
    archive = tmp_path / "visits_only.zip"
    write_archive(
        archive,
        {
            f"{SEMANTIC_DIR}/2023/2023_JUNE.json": {
                "timelineObjects": [
                    {
                        "placeVisit": {
                            "duration": {"startTimestampMs": "1", "endTimestampMs": "2"},
                            "location": {"latitudeE7": 1, "longitudeE7": 2},
                        }
                    }
                ]
            }
        },
    )

    export_takeout_archive(archive, tmp_path)

    assert read_csv_rows(tmp_path / "timeline.csv") == []


def test_job_pipeline_reports_counts(takeout_zip: Path, tmp_path: Path):
    pipeline = JobPipeline.default()
    pipeline.output_root = tmp_path

    summary = pipeline.run(archive_path=takeout_zip, job_id="job-1")

    assert summary.generated_files == ["timeline.gpx", "timeline.kml", "timeline.csv"]
    assert (tmp_path / "job-1" / "timeline.kml").exists()
    payload = summary.as_dict()
    assert payload["timeline"]["segments"] == 2
    assert payload["timeline"]["visits"] == 1
    assert payload["timeline"]["points"] == 3
    assert payload["timeline"]["distance_meters"] > 0


def test_process_job_runs_without_worker(takeout_zip: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setattr(
        "timeline_export.pipelines.job_pipeline.STORAGE_PATHS",
        StoragePaths(uploads=tmp_path / "uploads", outputs=tmp_path / "outputs"),
    )

    result = tasks.process_job(job_id="abc", archive_path=str(takeout_zip), sort=True)

    assert result["job_id"] == "abc"
    assert (tmp_path / "outputs" / "abc" / "timeline.gpx").exists()


def test_process_job_propagates_processing_errors(tmp_path: Path):
    archive = tmp_path / "bad.zip"
    write_archive(
        archive,
        {f"{SEMANTIC_DIR}/2023/2023_JULY.json": month(activity_segment(end="later"))},
    )

    with pytest.raises(MalformedFieldError):
        tasks.process_job(job_id="bad", archive_path=str(archive))


def test_main_returns_error_code_for_corrupt_archive(tmp_path: Path):
    archive = tmp_path / "corrupt.zip"
    archive.write_bytes(b"garbage")

    assert main([str(archive), "--output-dir", str(tmp_path)]) == 1
    assert not (tmp_path / "timeline.gpx").exists()


def test_main_writes_files(takeout_zip: Path, tmp_path: Path, capsys):
    assert main([str(takeout_zip), "--output-dir", str(tmp_path / "cli"), "--stem", "trip"]) == 0

    printed = capsys.readouterr().out.splitlines()
    assert [Path(line).name for line in printed] == ["trip.gpx", "trip.kml", "trip.csv"]


def test_job_pipeline_reports_progress(takeout_zip: Path, tmp_path: Path):
    seen: list[int] = []
    pipeline = JobPipeline.default()
    pipeline.output_root = tmp_path

    pipeline.run(archive_path=takeout_zip, job_id="job-2", on_progress=seen.append)

    assert seen == [50, 100]
