from __future__ import annotations

import asyncio

import pytest

from src.app.services.journey_planner import JourneyPlanner
from src.app.services.shape_projector import ShapeProjector
from src.domain.exceptions import NetworkDataError, StopNotFound
from src.domain.models import GeoPoint, SegmentType, TransportMode

from .fakes import FakeNetwork, line, scenario_network, stop_at

pytestmark = pytest.mark.unit


def _planner(net: FakeNetwork) -> JourneyPlanner:
    return JourneyPlanner(line_catalog=net, network=net)


@pytest.mark.anyio
async def test_ride_walk_ride_scenario_costs_twenty_minutes() -> None:
    net = scenario_network()

    journey = await _planner(net).find_route("A", "E")

    assert journey is not None
    assert journey.total_duration_minutes == pytest.approx(20.0)
    assert [s.segment_type for s in journey.segments] == [
        SegmentType.TRANSIT,
        SegmentType.WALKING,
        SegmentType.TRANSIT,
    ]
    ride1, walk, ride2 = journey.segments
    assert (ride1.line_id, ride1.origin.id, ride1.destination.id) == ("L1", "A", "C")
    assert (walk.origin.id, walk.destination.id) == ("C", "D")
    assert (ride2.line_id, ride2.origin.id, ride2.destination.id) == ("L2", "D", "E")
    assert ride2.transport_mode is TransportMode.CERCANIAS

    assert journey.transfer_count == 1
    assert journey.total_walking_minutes == walk.duration_minutes
    assert (journey.origin.id, journey.destination.id) == ("A", "E")


@pytest.mark.anyio
async def test_segments_get_geometry_without_shapes() -> None:
    journey = await _planner(scenario_network()).find_route("A", "E")

    assert journey is not None
    ride1, walk, ride2 = journey.segments
    # No published shapes: rides follow their stops, walks are interpolated.
    assert ride1.path == tuple(s.location for s in ride1.all_stops)
    assert ride2.path == (ride2.origin.location, ride2.destination.location)
    assert len(walk.path) == 15
    assert journey.all_coordinates == ride1.path + walk.path + ride2.path


@pytest.mark.anyio
async def test_ride_follows_published_shape() -> None:
    net = scenario_network()
    shape = [GeoPoint(lat=0.0005, lon=stop_at("X", m).location.lon) for m in range(0, 5001, 250)]
    net.shapes_by_line["R-L1"] = shape

    journey = await _planner(net).find_route("A", "C")

    assert journey is not None
    (ride,) = journey.segments
    assert ride.path == tuple(shape)
    assert net.shape_calls == ["R-L1"]


@pytest.mark.anyio
async def test_unknown_stop_raises_stop_not_found() -> None:
    planner = _planner(scenario_network())

    with pytest.raises(StopNotFound) as exc_info:
        await planner.find_route("A", "NOPE")
    assert exc_info.value.stop_id == "NOPE"

    with pytest.raises(StopNotFound):
        await planner.find_route("NOPE", "A")


@pytest.mark.anyio
async def test_disconnected_components_yield_no_route() -> None:
    net = scenario_network()
    net.add_line(line("L7"), [stop_at("P", 20000.0), stop_at("Q", 21000.0)])

    planner = _planner(net)

    assert await planner.find_route("A", "Q") is None
    assert await planner.find_route("Q", "A") is None


@pytest.mark.anyio
async def test_same_origin_and_destination_is_an_empty_journey() -> None:
    journey = await _planner(scenario_network()).find_route("B", "B")

    assert journey is not None
    assert journey.segments == ()
    assert journey.total_duration_minutes == 0.0


@pytest.mark.anyio
async def test_graph_is_built_once_even_for_concurrent_requests() -> None:
    net = scenario_network()
    planner = _planner(net)

    await asyncio.gather(
        planner.find_route("A", "E"),
        planner.find_route("E", "A"),
        planner.find_route("B", "D"),
    )

    assert sorted(net.route_calls) == ["R-L1", "R-L2"]

    await planner.build_graph()
    assert sorted(net.route_calls) == ["R-L1", "R-L1", "R-L2", "R-L2"]


@pytest.mark.anyio
async def test_origin_ties_resolve_to_first_line_id() -> None:
    net = FakeNetwork()
    a = stop_at("A", 0.0)
    b = stop_at("B", 1500.0)
    net.add_line(line("M2"), [a, b])
    net.add_line(line("M1"), [a, b])

    journey = await _planner(net).find_route("A", "B")

    assert journey is not None
    assert [s.line_id for s in journey.segments] == ["M1"]


@pytest.mark.anyio
async def test_shape_is_fetched_once_per_line_within_a_journey() -> None:
    net = scenario_network()

    journey = await _planner(net).find_route("A", "E")
    assert journey is not None
    assert sorted(net.shape_calls) == ["R-L1", "R-L2"]

    # One projector sees each line twice but fetches it once.
    projector = ShapeProjector(network=net)
    lines = {ln.id: ln for ln in net.lines}
    await projector.project(journey.segments + journey.segments, lines)

    assert sorted(net.shape_calls) == ["R-L1", "R-L1", "R-L2", "R-L2"]


@pytest.mark.anyio
async def test_shape_fetch_failure_falls_back_to_stops() -> None:
    class BrokenShapes(FakeNetwork):
        async def fetch_route_shape(self, route_id: str) -> list[GeoPoint]:
            self.shape_calls.append(route_id)
            raise NetworkDataError("shape service down")

    net = BrokenShapes()
    base = scenario_network()
    net.lines = base.lines
    net.stops_by_line = base.stops_by_line
    net.correspondences = base.correspondences

    journey = await _planner(net).find_route("A", "C")

    assert journey is not None
    (ride,) = journey.segments
    assert ride.path == tuple(s.location for s in ride.all_stops)
