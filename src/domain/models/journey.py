from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint
from .line import TransportMode
from .stop import Stop


class SegmentType(str, Enum):
    TRANSIT = "transit"
    WALKING = "walking"


@dataclass(frozen=True, slots=True)
class JourneySegment:
    segment_type: SegmentType
    transport_mode: TransportMode
    origin: Stop
    destination: Stop
    duration_minutes: int
    intermediate_stops: tuple[Stop, ...] = ()
    line_id: str | None = None
    line_name: str | None = None
    line_color: str | None = None  # hex without '#'
    path: tuple[GeoPoint, ...] = ()

    @property
    def all_stops(self) -> tuple[Stop, ...]:
        return (self.origin, *self.intermediate_stops, self.destination)

    @property
    def stop_count(self) -> int:
        """Stops travelled through, not counting the origin."""

        return len(self.intermediate_stops) + 1


@dataclass(frozen=True, slots=True)
class Journey:
    origin: Stop
    destination: Stop
    segments: tuple[JourneySegment, ...] = field(default_factory=tuple)
    # Solver path cost. Segment durations use their own heuristics and do
    # not have to add up to this value.
    total_duration_minutes: float = 0.0
    total_walking_minutes: int = 0
    transfer_count: int = 0

    @property
    def all_coordinates(self) -> tuple[GeoPoint, ...]:
        return tuple(p for segment in self.segments for p in segment.path)
