from __future__ import annotations

from functools import lru_cache

from src.adapters.transit_api import HttpTransitApi
from src.app.services.journey_planner import JourneyPlanner
from src.app.settings import PlannerSettings


@lru_cache(maxsize=1)
def get_transit_api() -> HttpTransitApi:
    # Shared so every request and graph build reuses one connection pool.
    return HttpTransitApi()


@lru_cache(maxsize=1)
def get_journey_planner() -> JourneyPlanner:
    # One planner per process so the transit graph is built once and reused.
    api = get_transit_api()
    return JourneyPlanner(
        line_catalog=api,
        network=api,
        settings=PlannerSettings.from_env(),
    )


async def close_transit_api() -> None:
    """Release the shared HTTP client, if one was ever created."""

    if get_transit_api.cache_info().currsize:
        await get_transit_api().aclose()
