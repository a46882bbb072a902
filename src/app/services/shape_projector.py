from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from src.app.ports.output import INetworkDataProvider
from src.app.settings import PlannerSettings
from src.domain.algorithms.shapes import extract_shape_segment, walking_path
from src.domain.exceptions import NetworkDataError
from src.domain.models import GeoPoint, JourneySegment, Line, SegmentType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShapeProjector:
    """Attaches map geometry to journey segments.

    Holds a per-route shape cache, so create one per planning call: a line
    ridden in several segments is fetched only once.
    """

    network: INetworkDataProvider
    settings: PlannerSettings = field(default_factory=PlannerSettings)

    _shapes: dict[str, tuple[GeoPoint, ...]] = field(default_factory=dict, init=False, repr=False)

    async def project(
        self, segments: Sequence[JourneySegment], lines: Mapping[str, Line]
    ) -> list[JourneySegment]:
        out: list[JourneySegment] = []
        for segment in segments:
            if segment.segment_type is SegmentType.WALKING:
                path = walking_path(
                    segment.origin.location,
                    segment.destination.location,
                    point_count=self.settings.walking_path_points,
                )
            else:
                line = lines.get(segment.line_id) if segment.line_id else None
                path = await self._transit_path(segment, line)
            out.append(dataclasses.replace(segment, path=path))
        return out

    async def _transit_path(
        self, segment: JourneySegment, line: Line | None
    ) -> tuple[GeoPoint, ...]:
        fallback = tuple(stop.location for stop in segment.all_stops)
        route_id = line.primary_route_id if line else None
        if route_id is None:
            return fallback

        shape = await self._shape(route_id)
        if len(shape) < 2:
            return fallback

        return extract_shape_segment(
            shape,
            origin=segment.origin.location,
            destination=segment.destination.location,
            min_points=self.settings.shape_min_points,
            target_points=self.settings.shape_target_points,
        )

    async def _shape(self, route_id: str) -> tuple[GeoPoint, ...]:
        cached = self._shapes.get(route_id)
        if cached is not None:
            return cached

        try:
            shape = tuple(await self.network.fetch_route_shape(route_id))
        except NetworkDataError as exc:
            logger.warning("Shape for route %s unavailable: %s", route_id, exc)
            shape = ()

        self._shapes[route_id] = shape
        return shape
