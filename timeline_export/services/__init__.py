"""Service layer exports."""

from .archive_parser import ArchiveParser, classify_timeline_object, parse_archive
from .exporters import FormatExporter, OutputFormat, render_csv, render_gpx, render_kml

__all__ = [
    "ArchiveParser",
    "classify_timeline_object",
    "parse_archive",
    "FormatExporter",
    "OutputFormat",
    "render_csv",
    "render_gpx",
    "render_kml",
]
