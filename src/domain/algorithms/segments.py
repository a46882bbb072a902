from __future__ import annotations

import logging
from typing import Mapping, Sequence

from src.domain.models import (
    Journey,
    JourneySegment,
    Line,
    SegmentType,
    Stop,
    TransitNode,
    TransportMode,
)

from .geo_utils import haversine_distance_m, travel_minutes

logger = logging.getLogger(__name__)


def ride_duration_minutes(stop_count: int, *, minutes_per_stop: int = 2) -> int:
    return max(1, stop_count * minutes_per_stop)


def walking_duration_minutes(
    origin: Stop, destination: Stop, *, walking_speed_kmh: float = 4.5
) -> int:
    distance_m = haversine_distance_m(origin.location, destination.location)
    return max(1, int(travel_minutes(distance_m, walking_speed_kmh)))


def reconstruct_segments(
    path: Sequence[TransitNode],
    *,
    stops: Mapping[str, Stop],
    lines: Mapping[str, Line],
    minutes_per_stop: int = 2,
    walking_speed_kmh: float = 4.5,
) -> list[JourneySegment]:
    """Group a node path into ride segments and walking transfers.

    Consecutive nodes on the same line form one ride. A line change at a
    different stop also yields a walking segment between the two stops; a
    line change at the same stop does not. Segments carry no geometry yet.
    """

    segments: list[JourneySegment] = []
    current_line: str | None = None
    ride_stops: list[Stop] = []
    prev_stop: Stop | None = None

    def close_ride() -> None:
        if current_line is None or len(ride_stops) < 2:
            return
        segments.append(
            _ride_segment(
                lines.get(current_line),
                current_line,
                ride_stops,
                minutes_per_stop=minutes_per_stop,
            )
        )

    for i, node in enumerate(path):
        stop = stops.get(node.stop_id)
        if stop is None:
            logger.warning("Stop %s missing from stop cache; skipped", node.stop_id)
            continue

        if i == 0 or node.line_id != current_line:
            close_ride()

            if (
                prev_stop is not None
                and current_line is not None
                and node.line_id is not None
                and prev_stop.id != stop.id
            ):
                segments.append(
                    JourneySegment(
                        segment_type=SegmentType.WALKING,
                        transport_mode=TransportMode.WALKING,
                        origin=prev_stop,
                        destination=stop,
                        duration_minutes=walking_duration_minutes(
                            prev_stop, stop, walking_speed_kmh=walking_speed_kmh
                        ),
                    )
                )

            current_line = node.line_id
            ride_stops = [stop]
        else:
            ride_stops.append(stop)

        prev_stop = stop

    close_ride()
    return segments


def _ride_segment(
    line: Line | None,
    line_id: str,
    ride_stops: Sequence[Stop],
    *,
    minutes_per_stop: int,
) -> JourneySegment:
    mode = line.type.transport_mode if line else TransportMode.METRO
    logger.debug(
        "Ride on %s from %s to %s (%d stops)",
        line.name if line else line_id,
        ride_stops[0].name,
        ride_stops[-1].name,
        len(ride_stops),
    )
    return JourneySegment(
        segment_type=SegmentType.TRANSIT,
        transport_mode=mode,
        origin=ride_stops[0],
        destination=ride_stops[-1],
        intermediate_stops=tuple(ride_stops[1:-1]),
        duration_minutes=ride_duration_minutes(
            len(ride_stops), minutes_per_stop=minutes_per_stop
        ),
        line_id=line_id,
        line_name=line.name if line else None,
        line_color=line.color if line else None,
    )


def build_journey(
    *,
    origin: Stop,
    destination: Stop,
    segments: Sequence[JourneySegment],
    path_cost: float,
) -> Journey:
    walking = [s for s in segments if s.segment_type is SegmentType.WALKING]
    return Journey(
        origin=origin,
        destination=destination,
        segments=tuple(segments),
        total_duration_minutes=float(path_cost),
        total_walking_minutes=sum(s.duration_minutes for s in walking),
        transfer_count=len(walking),
    )
