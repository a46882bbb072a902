from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.domain.exceptions import GraphSealedError

from .line import Line
from .stop import Stop

# Edges must always cost something, otherwise Dijkstra ordering degenerates.
MIN_EDGE_WEIGHT = 1e-3


class EdgeKind(str, Enum):
    RIDE = "ride"
    TRANSFER = "transfer"


@dataclass(frozen=True, slots=True)
class TransitNode:
    """Being at `stop_id` while riding `line_id` (None when only walking)."""

    stop_id: str
    line_id: str | None = None


@dataclass(frozen=True, slots=True)
class TransitEdge:
    """Directed, weighted connection between two node indices of a graph.

    Weight is a cost in minutes. Line metadata is only set on ride edges.
    """

    source: int
    target: int
    weight: float
    kind: EdgeKind
    line_id: str | None = None
    line_name: str | None = None
    line_color: str | None = None


@dataclass(slots=True)
class TransitGraph:
    """Node arena plus adjacency list for one planning session.

    Nodes get a stable integer index on insertion; edges reference those
    indices. Stops and lines resolved while building are kept alongside so
    the graph is self-contained once sealed.
    """

    nodes: list[TransitNode] = field(default_factory=list)
    stops: dict[str, Stop] = field(default_factory=dict)
    lines: dict[str, Line] = field(default_factory=dict)

    _index: dict[TransitNode, int] = field(default_factory=dict, repr=False)
    _adjacency: list[list[TransitEdge]] = field(default_factory=list, repr=False)
    _by_stop: dict[str, list[int]] = field(default_factory=dict, repr=False)
    _edge_count: int = 0
    _sealed: bool = False

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def _check_mutable(self) -> None:
        if self._sealed:
            raise GraphSealedError("Transit graph is sealed")

    def add_stop(self, stop: Stop) -> None:
        self._check_mutable()
        self.stops[stop.id] = stop

    def add_line(self, line: Line) -> None:
        self._check_mutable()
        self.lines[line.id] = line

    def add_node(self, node: TransitNode) -> int:
        existing = self._index.get(node)
        if existing is not None:
            return existing

        self._check_mutable()
        index = len(self.nodes)
        self.nodes.append(node)
        self._index[node] = index
        self._adjacency.append([])
        self._by_stop.setdefault(node.stop_id, []).append(index)
        return index

    def add_edge(self, edge: TransitEdge) -> None:
        self._check_mutable()
        if not edge.weight >= MIN_EDGE_WEIGHT:
            raise ValueError(f"Edge weight must be >= {MIN_EDGE_WEIGHT}: {edge.weight}")
        for endpoint in (edge.source, edge.target):
            if not 0 <= endpoint < len(self.nodes):
                raise IndexError(f"Edge endpoint {endpoint} is not a graph node")

        self._adjacency[edge.source].append(edge)
        self._edge_count += 1

    def node(self, index: int) -> TransitNode:
        return self.nodes[index]

    def index_of(self, node: TransitNode) -> int | None:
        return self._index.get(node)

    def edges_from(self, index: int) -> list[TransitEdge]:
        return self._adjacency[index]

    def edges(self) -> list[TransitEdge]:
        return [edge for adjacent in self._adjacency for edge in adjacent]

    def nodes_at_stop(self, stop_id: str) -> list[int]:
        return list(self._by_stop.get(stop_id, ()))

    def stop_ids(self) -> list[str]:
        return list(self._by_stop)
