"""Core domain primitives for the timeline exporter."""

from .models import (
    ExportSummary,
    MovementEvent,
    Point,
    Segment,
    Timeline,
    TimelineEvent,
    Visit,
    VisitEvent,
    flatten_segments,
)
from .exceptions import (
    ArchiveFormatError,
    EntryParseError,
    MalformedFieldError,
    ProcessingError,
)

__all__ = [
    "ExportSummary",
    "MovementEvent",
    "Point",
    "Segment",
    "Timeline",
    "TimelineEvent",
    "Visit",
    "VisitEvent",
    "flatten_segments",
    "ArchiveFormatError",
    "EntryParseError",
    "MalformedFieldError",
    "ProcessingError",
]
