from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Correspondence, GeoPoint, Stop


class INetworkDataProvider(ABC):
    """Port for per-route and per-stop network data.

    Implementations raise NetworkDataError when a resource cannot be fetched.
    """

    @abstractmethod
    async def fetch_stops_for_route(self, route_id: str) -> list[Stop]:
        """Return the ordered stop sequence served by a route."""

    @abstractmethod
    async def fetch_correspondences(self, stop_id: str) -> list[Correspondence]:
        """Return walking links from a stop to nearby stops."""

    @abstractmethod
    async def fetch_route_shape(self, route_id: str) -> list[GeoPoint]:
        """Return the published shape of a route, in sequence order."""
