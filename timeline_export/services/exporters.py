"""Render point sequences as GPX, KML and CSV documents."""

from __future__ import annotations

import csv
import io
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from ..core import Point
from ..utils import ensure_directory, format_coordinate, format_utc_iso8601

logger = logging.getLogger(__name__)

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
CREATOR = "TimelineExport"
DOCUMENT_NAME = "Timeline"
CSV_HEADER = ("timestamp", "lat", "lon")

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

Renderer = Callable[[Sequence[Point]], str]


def render_gpx(points: Sequence[Point]) -> str:
    """Return a GPX 1.1 document with one track and one track segment."""

    gpx = ET.Element("gpx", version="1.1", creator=CREATOR, xmlns=GPX_NAMESPACE)
    track = ET.SubElement(gpx, "trk")
    ET.SubElement(track, "name").text = DOCUMENT_NAME
    segment = ET.SubElement(track, "trkseg")

    for point in points:
        trkpt = ET.SubElement(
            segment,
            "trkpt",
            lat=format_coordinate(point.latitude),
            lon=format_coordinate(point.longitude),
        )
        ET.SubElement(trkpt, "time").text = format_utc_iso8601(point.timestamp)

    return _serialize(gpx)


def render_kml(points: Sequence[Point]) -> str:
    """Return a KML document holding the points as a single LineString.

    KML orders coordinates longitude first.
    """

    kml = ET.Element("kml", xmlns=KML_NAMESPACE)
    document = ET.SubElement(kml, "Document")
    ET.SubElement(document, "name").text = DOCUMENT_NAME
    placemark = ET.SubElement(document, "Placemark")
    line = ET.SubElement(placemark, "LineString")
    ET.SubElement(line, "coordinates").text = " ".join(
        f"{format_coordinate(p.longitude)},{format_coordinate(p.latitude)},0" for p in points
    )

    return _serialize(kml)


def render_csv(points: Sequence[Point]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for point in points:
        writer.writerow(
            (
                format_utc_iso8601(point.timestamp),
                format_coordinate(point.latitude),
                format_coordinate(point.longitude),
            )
        )
    return buffer.getvalue()


def _serialize(root: ET.Element) -> str:
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


@dataclass(frozen=True, slots=True)
class OutputFormat:
    name: str
    extension: str
    render: Renderer


def _default_formats() -> dict[str, OutputFormat]:
    formats = (
        OutputFormat("gpx", "gpx", render_gpx),
        OutputFormat("kml", "kml", render_kml),
        OutputFormat("csv", "csv", render_csv),
    )
    return {fmt.name: fmt for fmt in formats}


@dataclass(slots=True)
class FormatExporter:
    """Render and write points in every registered format.

    The renderers are pure; only :meth:`write_all` touches the filesystem,
    and the destination is always chosen by the caller.
    """

    formats: dict[str, OutputFormat] = field(default_factory=_default_formats)

    def render(self, name: str, points: Sequence[Point]) -> str:
        try:
            output_format = self.formats[name]
        except KeyError as exc:
            raise ValueError(f"Unsupported export format: {name}") from exc
        return output_format.render(points)

    def render_all(self, points: Sequence[Point]) -> dict[str, str]:
        return {name: fmt.render(points) for name, fmt in self.formats.items()}

    def write_all(
        self,
        points: Sequence[Point],
        output_dir: Path | str,
        *,
        stem: str = "timeline",
    ) -> list[Path]:
        directory = ensure_directory(output_dir)
        written: list[Path] = []
        for fmt in self.formats.values():
            target = directory / f"{stem}.{fmt.extension}"
            target.write_text(fmt.render(points), encoding="utf-8")
            written.append(target)
        logger.info("Wrote %d point(s) to %s", len(points), ", ".join(p.name for p in written))
        return written
