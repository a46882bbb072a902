from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator
from urllib.parse import quote

import httpx

from src.app.ports.output import ILineCatalog, INetworkDataProvider
from src.domain.exceptions import NetworkDataError
from src.domain.models import Correspondence, GeoPoint, Line, LineType, Stop

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://redcercanias.com/api/v1/gtfs"


@dataclass(slots=True)
class HttpTransitApi(ILineCatalog, INetworkDataProvider):
    """GTFS-style REST API client for lines, stops, correspondences and shapes.

    Env vars:
      - TRANSIT_API_BASE_URL: API root (default: public redcercanias endpoint)
      - TRANSIT_API_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - TRANSIT_API_TIMEOUT_S: request timeout (default 10)

    Notes:
      - Every failure (HTTP status, transport, undecodable body) is raised as
        NetworkDataError.
      - Pass `client` to use a caller-managed connection pool. Otherwise one
        client is created on first use and kept until `aclose()`.
    """

    base_url: str | None = None
    headers_raw: str | None = None
    timeout_s: float = 10.0
    client: httpx.AsyncClient | None = None
    transport: httpx.AsyncBaseTransport | None = None

    _owned_client: httpx.AsyncClient | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("TRANSIT_API_BASE_URL") or DEFAULT_BASE_URL
        if self.headers_raw is None:
            self.headers_raw = os.getenv("TRANSIT_API_HEADERS")
        if os.getenv("TRANSIT_API_TIMEOUT_S"):
            self.timeout_s = float(os.environ["TRANSIT_API_TIMEOUT_S"])

    def _headers(self) -> dict[str, str]:
        raw = (self.headers_raw or "").strip()
        if not raw:
            return {}
        headers: dict[str, str] = {}
        for part in raw.split(";"):
            part = part.strip()
            if ":" not in part:
                continue
            k, v = part.split(":", 1)
            k = k.strip()
            if k:
                headers[k] = v.strip()
        return headers

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        if self._owned_client is None or self._owned_client.is_closed:
            self._owned_client = httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            )
        yield self._owned_client

    async def aclose(self) -> None:
        """Close the client this instance created; a passed-in client is left open."""

        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None

    async def _get_json(self, path: str) -> Any:
        url = f"{(self.base_url or '').rstrip('/')}{path}"
        try:
            async with self._client() as client:
                resp = await client.get(url, headers=self._headers())
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as exc:
            raise NetworkDataError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise NetworkDataError(f"GET {path} returned invalid JSON") from exc

    async def list_lines(self) -> tuple[Line, ...]:
        payload = await self._get_json("/routes")
        lines = tuple(
            line for line in (_parse_line(row) for row in _as_list(payload)) if line
        )
        logger.info("Fetched %d lines", len(lines))
        return lines

    async def fetch_stops_for_route(self, route_id: str) -> list[Stop]:
        payload = await self._get_json(f"/routes/{_segment(route_id)}/stops")
        stops = [s for s in (_parse_stop(row) for row in _as_list(payload)) if s]
        logger.debug("Fetched %d stops for route %s", len(stops), route_id)
        return stops

    async def fetch_correspondences(self, stop_id: str) -> list[Correspondence]:
        payload = await self._get_json(f"/stops/{_segment(stop_id)}/correspondences")
        rows = payload.get("correspondences") if isinstance(payload, dict) else None
        out: list[Correspondence] = []
        for row in _as_list(rows):
            to_stop_id = _text(row.get("to_stop_id"))
            if not to_stop_id:
                continue
            try:
                walk_time_s = int(row.get("walk_time_s") or 0)
                distance_m = int(row.get("distance_m") or 0)
            except (TypeError, ValueError):
                continue
            out.append(
                Correspondence(
                    from_stop_id=stop_id,
                    to_stop_id=to_stop_id,
                    walk_time_s=walk_time_s,
                    distance_m=distance_m,
                    to_stop_name=_text(row.get("to_stop_name")),
                )
            )
        logger.debug("Fetched %d correspondences for stop %s", len(out), stop_id)
        return out

    async def fetch_route_shape(self, route_id: str) -> list[GeoPoint]:
        payload = await self._get_json(f"/routes/{_segment(route_id)}/shape")
        rows = payload.get("shape") if isinstance(payload, dict) else None
        tmp: list[tuple[int, GeoPoint]] = []
        for row in _as_list(rows):
            try:
                seq = int(row.get("sequence") or 0)
                point = GeoPoint(lat=float(row["lat"]), lon=float(row["lon"]))
            except (TypeError, ValueError, KeyError):
                continue
            tmp.append((seq, point))

        tmp.sort(key=lambda x: x[0])
        logger.debug("Fetched %d shape points for route %s", len(tmp), route_id)
        return [p for _, p in tmp]


def _segment(value: str) -> str:
    return quote(value, safe="")


def _text(value: Any) -> str | None:
    """JSON scalar as stripped text; None for missing, blank or non-scalar values."""

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return str(value).strip() or None


def _as_list(payload: Any) -> list[dict[str, Any]]:
    if not isinstance(payload, list):
        return []
    return [row for row in payload if isinstance(row, dict)]


def _parse_stop(row: dict[str, Any]) -> Stop | None:
    stop_id = _text(row.get("id"))
    if not stop_id:
        return None
    try:
        location = GeoPoint(lat=float(row["lat"]), lon=float(row["lon"]))
    except (TypeError, ValueError, KeyError):
        return None
    return Stop(id=stop_id, name=_text(row.get("name")) or stop_id, location=location)


def _parse_line(row: dict[str, Any]) -> Line | None:
    route_id = _text(row.get("id"))
    if not route_id:
        return None
    color = (_text(row.get("color")) or "").lstrip("#") or None
    return Line(
        id=route_id,
        name=_text(row.get("short_name")) or route_id,
        long_name=_text(row.get("long_name")),
        type=LineType.from_agency_id(_text(row.get("agency_id"))),
        color=color,
        route_ids=(route_id,),
    )
