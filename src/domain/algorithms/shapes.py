from __future__ import annotations

from typing import Sequence

from src.domain.models import GeoPoint

from .geo_utils import interpolate_points, nearest_index


def extract_shape_segment(
    shape: Sequence[GeoPoint],
    *,
    origin: GeoPoint,
    destination: GeoPoint,
    min_points: int = 10,
    target_points: int = 20,
) -> tuple[GeoPoint, ...]:
    """Return the part of a line shape between two stops, origin first.

    Both stops are snapped to their nearest shape point. When the shape runs
    in the opposite direction the range is reversed. Short results are
    densified to max(target_points, 3 * len) points for smoother drawing.
    """

    if len(shape) < 2:
        return (origin, destination)

    i0 = nearest_index(shape, origin)
    i1 = nearest_index(shape, destination)

    if i0 <= i1:
        seg: tuple[GeoPoint, ...] = tuple(shape[i0 : i1 + 1])
    else:
        seg = tuple(reversed(shape[i1 : i0 + 1]))

    if len(seg) < 2:
        # Both stops snapped to the same shape point.
        seg = (origin, destination)

    if len(seg) < min_points:
        seg = interpolate_points(seg, max(target_points, len(seg) * 3))
    return seg


def walking_path(
    origin: GeoPoint, destination: GeoPoint, *, point_count: int = 15
) -> tuple[GeoPoint, ...]:
    return interpolate_points((origin, destination), point_count)
