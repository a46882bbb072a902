from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from src.app.ports.output import ILineCatalog, INetworkDataProvider
from src.app.settings import PlannerSettings
from src.domain.algorithms.dijkstra import PathResult, shortest_path
from src.domain.algorithms.segments import build_journey, reconstruct_segments
from src.domain.exceptions import StopNotFound
from src.domain.models import Journey, TransitGraph

from .graph_builder import TransitGraphBuilder
from .shape_projector import ShapeProjector

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JourneyPlanner:
    """Stop-to-stop journey planning over the rail/metro/tram network.

    The graph is built on first use and then shared read-only by every
    `find_route` call on this planner.
    """

    line_catalog: ILineCatalog
    network: INetworkDataProvider
    settings: PlannerSettings = field(default_factory=PlannerSettings)

    _graph: TransitGraph | None = field(default=None, init=False, repr=False)
    _build_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def _builder(self) -> TransitGraphBuilder:
        return TransitGraphBuilder(
            line_catalog=self.line_catalog,
            network=self.network,
            settings=self.settings,
        )

    async def build_graph(self) -> TransitGraph:
        """Rebuild the graph from scratch and use it for later calls."""

        async with self._build_lock:
            self._graph = await self._builder().build()
            return self._graph

    async def graph(self) -> TransitGraph:
        if self._graph is not None:
            return self._graph
        async with self._build_lock:
            if self._graph is None:
                self._graph = await self._builder().build()
            return self._graph

    async def find_route(
        self, origin_stop_id: str, destination_stop_id: str
    ) -> Journey | None:
        """Plan the cheapest journey between two stops.

        Raises StopNotFound when either stop is unknown to the network.
        Returns None when the stops are not connected.
        """

        graph = await self.graph()

        origin = graph.stops.get(origin_stop_id)
        if origin is None:
            raise StopNotFound(origin_stop_id)
        destination = graph.stops.get(destination_stop_id)
        if destination is None:
            raise StopNotFound(destination_stop_id)

        logger.info("Finding route: %s -> %s", origin.name, destination.name)

        best = self._best_path(graph, origin_stop_id, destination_stop_id)
        if best is None:
            logger.info("No route found: %s -> %s", origin.name, destination.name)
            return None

        segments = reconstruct_segments(
            [graph.node(i) for i in best.nodes],
            stops=graph.stops,
            lines=graph.lines,
            minutes_per_stop=self.settings.minutes_per_stop,
            walking_speed_kmh=self.settings.walking_speed_kmh,
        )
        projector = ShapeProjector(network=self.network, settings=self.settings)
        segments = await projector.project(segments, graph.lines)

        journey = build_journey(
            origin=origin,
            destination=destination,
            segments=segments,
            path_cost=best.cost,
        )
        logger.info(
            "Route found: %d segments, %.1f min, %d transfers",
            len(journey.segments),
            journey.total_duration_minutes,
            journey.transfer_count,
        )
        return journey

    def _best_path(
        self, graph: TransitGraph, origin_stop_id: str, destination_stop_id: str
    ) -> PathResult | None:
        goals = set(graph.nodes_at_stop(destination_stop_id))
        if not goals:
            return None

        # Fixed origin order (walking node first, then by line id) so exact
        # ties always resolve to the same line.
        origins = sorted(
            graph.nodes_at_stop(origin_stop_id),
            key=lambda i: (graph.node(i).line_id is not None, graph.node(i).line_id or ""),
        )

        best: PathResult | None = None
        for start in origins:
            result = shortest_path(graph, start, goals)
            if result is not None and (best is None or result.cost < best.cost):
                best = result
        return best
