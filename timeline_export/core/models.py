"""Domain models used throughout the timeline exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Sequence, Union

from ..utils.geo import haversine_distance


@dataclass(frozen=True, slots=True)
class Point:
    """A single geo-tagged sample.

    ``timestamp`` is expressed in milliseconds since the Unix epoch.
    """

    latitude: float
    longitude: float
    timestamp: int


@dataclass(frozen=True, slots=True)
class Segment:
    """Continuous movement between two stays."""

    start_time: int
    end_time: int
    points: tuple[Point, ...] = ()
    activity_label: str | None = None

    @property
    def duration_ms(self) -> int:
        return max(0, self.end_time - self.start_time)

    @property
    def distance_meters(self) -> float:
        """Length of the waypoint path, following waypoint order."""

        return sum(
            haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)
            for a, b in zip(self.points, self.points[1:])
        )


@dataclass(frozen=True, slots=True)
class Visit:
    """A stationary dwell at one place.

    Coordinates are either both present or both ``None``.
    """

    start_time: int
    end_time: int
    label: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True, slots=True)
class MovementEvent:
    segment: Segment


@dataclass(frozen=True, slots=True)
class VisitEvent:
    visit: Visit


TimelineEvent = Union[MovementEvent, VisitEvent]


@dataclass(frozen=True, slots=True)
class Timeline:
    """Segments and visits in the order they were found in the archive."""

    segments: tuple[Segment, ...] = ()
    visits: tuple[Visit, ...] = ()

    @classmethod
    def from_events(cls, events: Iterable[TimelineEvent]) -> "Timeline":
        segments: list[Segment] = []
        visits: list[Visit] = []
        for event in events:
            if isinstance(event, MovementEvent):
                segments.append(event.segment)
            else:
                visits.append(event.visit)
        return cls(segments=tuple(segments), visits=tuple(visits))

    def points(self) -> list[Point]:
        """Concatenate segment points in segment order; visits add nothing."""

        return list(flatten_segments(self.segments))

    def sorted_chronologically(self) -> "Timeline":
        """Return a copy with segments and visits ordered by start time."""

        return Timeline(
            segments=tuple(sorted(self.segments, key=lambda s: s.start_time)),
            visits=tuple(sorted(self.visits, key=lambda v: v.start_time)),
        )

    def is_empty(self) -> bool:
        return not self.segments and not self.visits


@dataclass(slots=True)
class ExportSummary:
    """Information returned to API callers after job completion."""

    job_id: str
    created_at: datetime
    completed_at: datetime
    generated_files: Sequence[str]
    segment_count: int = 0
    visit_count: int = 0
    point_count: int = 0
    distance_meters: float = 0.0
    extra: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "generated_files": list(self.generated_files),
            "timeline": {
                "segments": self.segment_count,
                "visits": self.visit_count,
                "points": self.point_count,
                "distance_meters": round(self.distance_meters, 1),
            },
            **self.extra,
        }


def flatten_segments(segments: Iterable[Segment]) -> Iterator[Point]:
    """Yield all points from a sequence of segments."""

    for segment in segments:
        yield from segment.points
