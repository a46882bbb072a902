from __future__ import annotations

import math
from typing import Sequence

from src.domain.models import GeoPoint

EARTH_RADIUS_M = 6371000.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(s))


def travel_minutes(distance_m: float, speed_kmh: float) -> float:
    """Minutes needed to cover `distance_m` at a constant `speed_kmh`."""

    return (distance_m / 1000.0) / speed_kmh * 60.0


def nearest_index(points: Sequence[GeoPoint], target: GeoPoint) -> int:
    """Index of the point closest to target (linear scan, first one wins ties)."""

    best_i = 0
    best_d = float("inf")
    for i, p in enumerate(points):
        d = haversine_distance_m(p, target)
        if d < best_d:
            best_d = d
            best_i = i
    return best_i


def interpolate_points(
    points: Sequence[GeoPoint], target_count: int
) -> tuple[GeoPoint, ...]:
    """Densify a polyline by linear interpolation between consecutive points.

    Each of the n-1 spans gets the same number of points, so the result has
    about `target_count` points and always ends on the input's last point.
    Polylines with fewer than 2 points, or already at least `target_count`
    long, are returned unchanged.
    """

    if len(points) < 2 or target_count <= len(points):
        return tuple(points)

    span_count = len(points) - 1
    per_span = max(1, (target_count - 1) // span_count)

    out: list[GeoPoint] = []
    for start, end in zip(points, points[1:]):
        for j in range(per_span):
            out.append(start.interpolate(end, j / per_span))
    out.append(points[-1])
    return tuple(out)
