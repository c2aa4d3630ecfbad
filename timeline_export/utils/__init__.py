"""Utility helpers for the timeline exporter."""

from .geo import decode_e7, haversine_distance
from .formatting import format_coordinate, format_utc_iso8601
from .io import ensure_directory, safe_filename, spool_stream

__all__ = [
    "decode_e7",
    "haversine_distance",
    "format_coordinate",
    "format_utc_iso8601",
    "ensure_directory",
    "safe_filename",
    "spool_stream",
]
