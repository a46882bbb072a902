from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_journey_planner
from src.adapters.api.schemas.journeys import (
    GeoPointSchema,
    JourneyRequestSchema,
    JourneySchema,
    JourneySegmentSchema,
    StopSchema,
)
from src.app.services.journey_planner import JourneyPlanner
from src.domain.exceptions import NetworkDataError, StopNotFound
from src.domain.models import GeoPoint, Journey, JourneySegment, Stop

router = APIRouter(tags=["journeys"])


def _point(p: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(lat=p.lat, lon=p.lon)


def _stop(stop: Stop) -> StopSchema:
    return StopSchema(id=stop.id, name=stop.name, location=_point(stop.location))


def _segment(segment: JourneySegment) -> JourneySegmentSchema:
    return JourneySegmentSchema(
        type=segment.segment_type.value,
        transport_mode=segment.transport_mode.value,
        transport_mode_name=segment.transport_mode.display_name,
        transport_mode_icon=segment.transport_mode.icon,
        line_id=segment.line_id,
        line_name=segment.line_name,
        line_color=segment.line_color,
        origin=_stop(segment.origin),
        destination=_stop(segment.destination),
        intermediate_stops=[_stop(s) for s in segment.intermediate_stops],
        duration_minutes=segment.duration_minutes,
        stop_count=segment.stop_count,
        path=[_point(p) for p in segment.path],
    )


def _journey_to_schema(journey: Journey) -> JourneySchema:
    return JourneySchema(
        origin=_stop(journey.origin),
        destination=_stop(journey.destination),
        segments=[_segment(s) for s in journey.segments],
        total_duration_minutes=journey.total_duration_minutes,
        total_walking_minutes=journey.total_walking_minutes,
        transfer_count=journey.transfer_count,
    )


@router.post("/journeys", response_model=JourneySchema)
async def plan_journey(
    req: JourneyRequestSchema,
    planner: JourneyPlanner = Depends(get_journey_planner),
) -> JourneySchema:
    try:
        journey = await planner.find_route(req.origin_stop_id, req.destination_stop_id)
    except StopNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NetworkDataError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    if journey is None:
        raise HTTPException(status_code=404, detail="No route found")
    return _journey_to_schema(journey)
