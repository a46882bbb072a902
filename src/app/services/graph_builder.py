from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Sequence, TypeVar

from src.app.ports.output import ILineCatalog, INetworkDataProvider
from src.app.settings import PlannerSettings
from src.domain.algorithms.geo_utils import haversine_distance_m, travel_minutes
from src.domain.exceptions import NetworkDataError
from src.domain.models import (
    Correspondence,
    EdgeKind,
    Line,
    Stop,
    TransitEdge,
    TransitGraph,
    TransitNode,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class TransitGraphBuilder:
    """Builds a fresh routable graph from the line catalog.

    - Ride edges join consecutive stops of each line, in both directions.
    - Transfer edges join lines at the same stop, and stops linked by a
      walking correspondence.
    """

    line_catalog: ILineCatalog
    network: INetworkDataProvider
    settings: PlannerSettings = field(default_factory=PlannerSettings)

    async def build(self) -> TransitGraph:
        graph = TransitGraph()
        semaphore = asyncio.Semaphore(self.settings.fetch_concurrency)

        lines = [line for line in await self.line_catalog.list_lines() if line.route_ids]
        stop_lists = await asyncio.gather(
            *(
                self._limited(semaphore, self.network.fetch_stops_for_route(line.route_ids[0]))
                for line in lines
            ),
            return_exceptions=True,
        )

        failed = 0
        for line, result in zip(lines, stop_lists):
            if isinstance(result, NetworkDataError):
                failed += 1
                logger.warning("Skipping line %s: %s", line.id, result)
                continue
            if isinstance(result, BaseException):
                raise result
            self._add_ride_edges(graph, line, result)

        if lines and failed == len(lines):
            raise NetworkDataError(f"Stop sequences unavailable for all {failed} lines")

        await self._add_transfer_edges(graph, semaphore)
        graph.seal()

        logger.info(
            "Transit graph built: %d lines, %d stops, %d nodes, %d edges",
            len(graph.lines),
            len(graph.stops),
            graph.node_count,
            graph.edge_count,
        )
        return graph

    async def _limited(self, semaphore: asyncio.Semaphore, aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    def ride_weight(self, a: Stop, b: Stop) -> float:
        minutes = travel_minutes(
            haversine_distance_m(a.location, b.location), self.settings.ride_speed_kmh
        )
        return max(self.settings.min_ride_minutes, minutes)

    def _add_ride_edges(self, graph: TransitGraph, line: Line, stops: Sequence[Stop]) -> None:
        if len(stops) < 2:
            logger.debug("Line %s has %d stops; no ride edges", line.id, len(stops))
            return

        graph.add_line(line)
        for stop in stops:
            graph.add_stop(stop)

        for a, b in zip(stops, stops[1:]):
            if a.id == b.id:
                continue
            a_idx = graph.add_node(TransitNode(stop_id=a.id, line_id=line.id))
            b_idx = graph.add_node(TransitNode(stop_id=b.id, line_id=line.id))
            weight = self.ride_weight(a, b)
            for source, target in ((a_idx, b_idx), (b_idx, a_idx)):
                graph.add_edge(
                    TransitEdge(
                        source=source,
                        target=target,
                        weight=weight,
                        kind=EdgeKind.RIDE,
                        line_id=line.id,
                        line_name=line.name,
                        line_color=line.color,
                    )
                )

    async def _add_transfer_edges(
        self, graph: TransitGraph, semaphore: asyncio.Semaphore
    ) -> None:
        penalty = self.settings.transfer_penalty_minutes
        stop_ids = graph.stop_ids()

        for stop_id in stop_ids:
            here = graph.nodes_at_stop(stop_id)
            for source in here:
                for target in here:
                    if graph.node(source).line_id == graph.node(target).line_id:
                        continue
                    graph.add_edge(
                        TransitEdge(
                            source=source,
                            target=target,
                            weight=penalty,
                            kind=EdgeKind.TRANSFER,
                        )
                    )

        results = await asyncio.gather(
            *(
                self._limited(semaphore, self.network.fetch_correspondences(stop_id))
                for stop_id in stop_ids
            ),
            return_exceptions=True,
        )

        for stop_id, result in zip(stop_ids, results):
            if isinstance(result, NetworkDataError):
                logger.warning("No correspondences for stop %s: %s", stop_id, result)
                continue
            if isinstance(result, BaseException):
                raise result
            for correspondence in result:
                self._add_walking_transfer(graph, stop_id, correspondence)

    def _add_walking_transfer(
        self, graph: TransitGraph, stop_id: str, correspondence: Correspondence
    ) -> None:
        if correspondence.to_stop_id == stop_id:
            return
        targets = graph.nodes_at_stop(correspondence.to_stop_id)
        if not targets:
            return

        weight = correspondence.walk_time_minutes + self.settings.transfer_penalty_minutes
        for source in graph.nodes_at_stop(stop_id):
            for target in targets:
                graph.add_edge(
                    TransitEdge(
                        source=source,
                        target=target,
                        weight=weight,
                        kind=EdgeKind.TRANSFER,
                    )
                )
