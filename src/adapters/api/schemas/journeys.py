from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class StopSchema(BaseModel):
    id: str
    name: str
    location: GeoPointSchema


class JourneySegmentSchema(BaseModel):
    type: Literal["transit", "walking"]
    transport_mode: str
    transport_mode_name: str
    transport_mode_icon: str
    line_id: str | None = None
    line_name: str | None = None
    line_color: str | None = None
    origin: StopSchema
    destination: StopSchema
    intermediate_stops: list[StopSchema] = []
    duration_minutes: int
    stop_count: int
    path: list[GeoPointSchema] = []


class JourneySchema(BaseModel):
    origin: StopSchema
    destination: StopSchema
    segments: list[JourneySegmentSchema] = []

    total_duration_minutes: float
    total_walking_minutes: int
    transfer_count: int


class JourneyRequestSchema(BaseModel):
    origin_stop_id: str = Field(..., min_length=1)
    destination_stop_id: str = Field(..., min_length=1)
