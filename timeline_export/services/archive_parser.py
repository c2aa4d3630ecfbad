"""Read Semantic Location History out of a Google Takeout archive."""

from __future__ import annotations

import io
import json
import logging
import os
import re
import zipfile
import zlib
from contextlib import ExitStack
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Mapping, Union

from ..core import (
    ArchiveFormatError,
    EntryParseError,
    MalformedFieldError,
    MovementEvent,
    Point,
    Segment,
    Timeline,
    TimelineEvent,
    Visit,
    VisitEvent,
)
from ..utils import decode_e7
from ..utils.io import is_seekable, spool_stream

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Range datetime can represent: 0001-01-01 through 9999-12-31 UTC.
MIN_TIMESTAMP_MS = -62_135_596_800_000
MAX_TIMESTAMP_MS = 253_402_300_799_999

ArchiveSource = Union[str, "os.PathLike[str]", bytes, bytearray, BinaryIO]


class ArchiveParser:
    """Turn a Takeout ZIP into a :class:`Timeline`.

    Only regular entries whose path contains :attr:`folder_marker` and whose
    name ends with :attr:`extension` are read, in the order the container
    lists them. An entry without a ``timelineObjects`` array contributes
    nothing; invalid JSON or a non-numeric timestamp aborts the whole parse.
    """

    folder_marker: str = "Semantic Location History"
    extension: str = ".json"
    objects_key: str = "timelineObjects"

    def parse(self, source: ArchiveSource) -> Timeline:
        timeline = Timeline.from_events(self.iter_events(source))
        logger.info(
            "Parsed %d segment(s) and %d visit(s)",
            len(timeline.segments),
            len(timeline.visits),
        )
        return timeline

    def iter_events(self, source: ArchiveSource) -> Iterator[TimelineEvent]:
        with ExitStack() as stack:
            archive = self._open(source, stack)
            entries = self._select_entries(archive)
            logger.info("Found %d semantic location file(s)", len(entries))
            for info in entries:
                document = self._load_entry(archive, info)
                yield from self._iter_entry_events(document, info.filename)

    def _open(self, source: ArchiveSource, stack: ExitStack) -> zipfile.ZipFile:
        if isinstance(source, (bytes, bytearray)):
            target: Any = io.BytesIO(bytes(source))
        elif isinstance(source, (str, os.PathLike)):
            target = Path(source)
            if not target.is_file():
                raise ArchiveFormatError(
                    f"Archive not found: {target}", details={"path": str(target)}
                )
        elif is_seekable(source):
            target = source
        else:
            target = stack.enter_context(spool_stream(source))

        try:
            return stack.enter_context(zipfile.ZipFile(target, "r"))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError) as exc:
            raise ArchiveFormatError(f"Unable to open archive: {exc}") from exc

    def _select_entries(self, archive: zipfile.ZipFile) -> list[zipfile.ZipInfo]:
        return [
            info
            for info in archive.infolist()
            if not info.is_dir()
            and self.folder_marker in info.filename
            and info.filename.endswith(self.extension)
        ]

    def _load_entry(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> Any:
        try:
            raw = archive.read(info)
        except (
            zipfile.BadZipFile,
            zlib.error,
            OSError,
            EOFError,
            RuntimeError,
            NotImplementedError,
        ) as exc:
            # RuntimeError: encrypted entry; NotImplementedError: unknown compression.
            raise ArchiveFormatError(
                f"Unable to read archive entry {info.filename}: {exc}",
                details={"entry": info.filename},
            ) from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise EntryParseError(
                f"Entry {info.filename} is not valid UTF-8", entry=info.filename
            ) from exc
        except json.JSONDecodeError as exc:
            raise EntryParseError(
                f"Entry {info.filename} is not valid JSON: {exc.msg}",
                entry=info.filename,
                details={"line": exc.lineno, "column": exc.colno},
            ) from exc

    def _iter_entry_events(self, document: Any, entry: str) -> Iterator[TimelineEvent]:
        objects = document.get(self.objects_key) if isinstance(document, dict) else None
        if not isinstance(objects, list):
            logger.debug("Skipping %s: no %s array", entry, self.objects_key)
            return

        for item in objects:
            event = classify_timeline_object(item, entry=entry)
            if event is not None:
                yield event


def classify_timeline_object(item: Any, *, entry: str | None = None) -> TimelineEvent | None:
    """Map one ``timelineObjects`` element to a typed event.

    Returns ``None`` for shapes other than ``activitySegment`` and
    ``placeVisit``.
    """

    if not isinstance(item, dict):
        return None
    if "activitySegment" in item:
        return MovementEvent(_parse_segment(_as_mapping(item["activitySegment"]), entry))
    if "placeVisit" in item:
        return VisitEvent(_parse_visit(_as_mapping(item["placeVisit"]), entry))
    return None


def _parse_segment(payload: Mapping[str, Any], entry: str | None) -> Segment:
    start, end = _parse_duration(payload, entry)

    points: list[Point] = []
    path = payload.get("waypointPath")
    if isinstance(path, dict):
        for waypoint in path.get("waypoints") or ():
            waypoint = _as_mapping(waypoint)
            # Waypoints carry no time of their own.
            points.append(
                Point(
                    latitude=decode_e7(_require_int(waypoint, "latE7", entry)),
                    longitude=decode_e7(_require_int(waypoint, "lngE7", entry)),
                    timestamp=start,
                )
            )

    activity = payload.get("activityType")
    return Segment(
        start_time=start,
        end_time=end,
        points=tuple(points),
        activity_label=str(activity) if activity is not None else None,
    )


def _parse_visit(payload: Mapping[str, Any], entry: str | None) -> Visit:
    start, end = _parse_duration(payload, entry)

    location = payload.get("location")
    if not isinstance(location, dict):
        return Visit(start_time=start, end_time=end)

    name = location.get("name")
    latitude = longitude = None
    if location.get("latitudeE7") is not None and location.get("longitudeE7") is not None:
        latitude = decode_e7(_require_int(location, "latitudeE7", entry))
        longitude = decode_e7(_require_int(location, "longitudeE7", entry))

    return Visit(
        start_time=start,
        end_time=end,
        label=str(name) if name is not None else None,
        latitude=latitude,
        longitude=longitude,
    )


def _parse_duration(payload: Mapping[str, Any], entry: str | None) -> tuple[int, int]:
    duration = _as_mapping(payload.get("duration"))
    return (
        _require_timestamp(duration, "startTimestampMs", entry),
        _require_timestamp(duration, "endTimestampMs", entry),
    )


def _require_timestamp(payload: Mapping[str, Any], key: str, entry: str | None) -> int:
    value = _require_int(payload, key, entry)
    if not MIN_TIMESTAMP_MS <= value <= MAX_TIMESTAMP_MS:
        where = f" in {entry}" if entry else ""
        raise MalformedFieldError(
            f"Field '{key}'{where} is outside the representable date range: {value}",
            field=key,
            entry=entry,
        )
    return value


def _require_int(payload: Mapping[str, Any], key: str, entry: str | None) -> int:
    value = payload.get(key)
    if isinstance(value, bool):
        value = None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value):
        return int(value)
    where = f" in {entry}" if entry else ""
    raise MalformedFieldError(
        f"Field '{key}'{where} must be an integer, got {value!r}",
        field=key,
        entry=entry,
    )


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_archive(source: ArchiveSource) -> Timeline:
    """Parse ``source`` with a default :class:`ArchiveParser`."""

    return ArchiveParser().parse(source)
