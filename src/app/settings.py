from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


@dataclass(frozen=True, slots=True)
class PlannerSettings:
    """Tuning knobs for graph building and journey reconstruction."""

    transfer_penalty_minutes: float = 3.0
    ride_speed_kmh: float = 30.0
    walking_speed_kmh: float = 4.5
    min_ride_minutes: float = 1.0
    minutes_per_stop: int = 2
    shape_min_points: int = 10
    shape_target_points: int = 20
    walking_path_points: int = 15
    fetch_concurrency: int = 8

    @staticmethod
    def from_env() -> "PlannerSettings":
        """Build settings from PLANNER_* environment variables.

        Env vars:
          - PLANNER_TRANSFER_PENALTY_MIN (default 3.0)
          - PLANNER_RIDE_SPEED_KMH (default 30)
          - PLANNER_WALKING_SPEED_KMH (default 4.5)
          - PLANNER_MIN_RIDE_MIN (default 1.0)
          - PLANNER_MINUTES_PER_STOP (default 2)
          - PLANNER_FETCH_CONCURRENCY (default 8)
        """

        defaults = PlannerSettings()
        return PlannerSettings(
            transfer_penalty_minutes=_env_float(
                "PLANNER_TRANSFER_PENALTY_MIN", defaults.transfer_penalty_minutes
            ),
            ride_speed_kmh=_env_float("PLANNER_RIDE_SPEED_KMH", defaults.ride_speed_kmh),
            walking_speed_kmh=_env_float(
                "PLANNER_WALKING_SPEED_KMH", defaults.walking_speed_kmh
            ),
            min_ride_minutes=_env_float(
                "PLANNER_MIN_RIDE_MIN", defaults.min_ride_minutes
            ),
            minutes_per_stop=_env_int(
                "PLANNER_MINUTES_PER_STOP", defaults.minutes_per_stop
            ),
            fetch_concurrency=max(
                1, _env_int("PLANNER_FETCH_CONCURRENCY", defaults.fetch_concurrency)
            ),
        )
