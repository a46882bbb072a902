from __future__ import annotations

import pytest

from src.app.settings import PlannerSettings
from src.domain.exceptions import NetworkDataError, RoutingError, StopNotFound
from src.domain.models import Line, LineType, TransportMode

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("agency_id", "expected"),
    [
        ("METRO_LIGERO", LineType.METRO_LIGERO),
        ("metro_ligero", LineType.METRO_LIGERO),
        ("TMB_METRO", LineType.METRO),
        ("METRO_MADRID", LineType.METRO),
        ("FGC", LineType.FGC),
        ("TRANVIA_ZARAGOZA", LineType.TRAM),
        ("TRAM_BCN", LineType.TRAM),
        ("RENFE", LineType.CERCANIAS),
        ("", LineType.CERCANIAS),
        (None, LineType.CERCANIAS),
    ],
)
def test_line_type_from_agency_id(agency_id: str | None, expected: LineType) -> None:
    assert LineType.from_agency_id(agency_id) is expected


def test_line_type_transport_modes() -> None:
    assert LineType.METRO.transport_mode is TransportMode.METRO
    assert LineType.TRAM.transport_mode is TransportMode.TRANVIA
    assert LineType.FGC.transport_mode is TransportMode.CERCANIAS


def test_every_transport_mode_has_display_metadata() -> None:
    for mode in TransportMode:
        assert mode.display_name
        assert mode.icon
    assert TransportMode.WALKING.icon == "figure.walk"


def test_primary_route_id() -> None:
    assert Line(id="L1", name="1", route_ids=("r1", "r2")).primary_route_id == "r1"
    assert Line(id="L1", name="1").primary_route_id is None


def test_routing_errors_share_a_base() -> None:
    assert issubclass(NetworkDataError, RoutingError)
    err = StopNotFound("S9")
    assert isinstance(err, RoutingError)
    assert str(err) == "Stop not found: S9"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLANNER_TRANSFER_PENALTY_MIN", "5")
    monkeypatch.setenv("PLANNER_RIDE_SPEED_KMH", "45.0")
    monkeypatch.setenv("PLANNER_MINUTES_PER_STOP", "3")
    monkeypatch.setenv("PLANNER_FETCH_CONCURRENCY", "0")
    monkeypatch.setenv("PLANNER_WALKING_SPEED_KMH", " ")

    settings = PlannerSettings.from_env()

    assert settings.transfer_penalty_minutes == 5.0
    assert settings.ride_speed_kmh == 45.0
    assert settings.minutes_per_stop == 3
    assert settings.fetch_concurrency == 1
    assert settings.walking_speed_kmh == 4.5


def test_settings_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PLANNER_TRANSFER_PENALTY_MIN",
        "PLANNER_RIDE_SPEED_KMH",
        "PLANNER_WALKING_SPEED_KMH",
        "PLANNER_MIN_RIDE_MIN",
        "PLANNER_MINUTES_PER_STOP",
        "PLANNER_FETCH_CONCURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)

    assert PlannerSettings.from_env() == PlannerSettings()
