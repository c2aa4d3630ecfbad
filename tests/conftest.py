from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path
from typing import Mapping, Union

import pytest

SEMANTIC_DIR = "Takeout/Location History/Semantic Location History"

EntryContent = Union[dict, list, str, bytes]


def write_archive(target, entries: Mapping[str, EntryContent]) -> None:
    """Write ``entries`` into a ZIP at ``target`` in the given order."""

    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            if name.endswith("/"):
                archive.writestr(zipfile.ZipInfo(name), b"")
            elif isinstance(content, (dict, list)):
                archive.writestr(name, json.dumps(content))
            else:
                archive.writestr(name, content)


def archive_bytes(entries: Mapping[str, EntryContent]) -> bytes:
    buffer = io.BytesIO()
    write_archive(buffer, entries)
    return buffer.getvalue()


def activity_segment(start="1700000000000", end="1700000600000", waypoints=(), activity="WALKING"):
    segment: dict = {"duration": {"startTimestampMs": start, "endTimestampMs": end}}
    if activity is not None:
        segment["activityType"] = activity
    if waypoints is not None:
        segment["waypointPath"] = {
            "waypoints": [{"latE7": lat, "lngE7": lng} for lat, lng in waypoints]
        }
    return {"activitySegment": segment}


def place_visit(start="1700000600000", end="1700004200000", location=None):
    visit: dict = {"duration": {"startTimestampMs": start, "endTimestampMs": end}}
    if location is not None:
        visit["location"] = location
    return {"placeVisit": visit}


def month(*objects) -> dict:
    return {"timelineObjects": list(objects)}


@pytest.fixture()
def takeout_zip(tmp_path: Path) -> Path:
    path = tmp_path / "takeout.zip"
    write_archive(
        path,
        {
            f"{SEMANTIC_DIR}/2023/": b"",
            f"{SEMANTIC_DIR}/2023/2023_NOVEMBER.json": month(
                activity_segment(waypoints=[(407128020, -740059700), (407138020, -740069700)]),
                place_visit(
                    location={
                        "name": "Coffee Shop",
                        "latitudeE7": 407140000,
                        "longitudeE7": -740070000,
                    }
                ),
            ),
            f"{SEMANTIC_DIR}/2023/2023_DECEMBER.json": month(
                activity_segment(
                    start="1701400000000",
                    end="1701400900000",
                    waypoints=[(515072000, -1276000)],
                    activity="CYCLING",
                ),
            ),
            "Takeout/Location History/Records.json": {"locations": []},
        },
    )
    return path
