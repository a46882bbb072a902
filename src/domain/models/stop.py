from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    id: str
    name: str
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class Correspondence:
    """Known walking link from one stop to a nearby stop."""

    from_stop_id: str
    to_stop_id: str
    walk_time_s: int
    distance_m: int
    to_stop_name: str | None = None

    @property
    def walk_time_minutes(self) -> float:
        return max(0, self.walk_time_s) / 60.0
