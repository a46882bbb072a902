from __future__ import annotations

import heapq
from collections.abc import Collection
from dataclasses import dataclass

from src.domain.models import TransitGraph


@dataclass(frozen=True, slots=True)
class PathResult:
    nodes: tuple[int, ...]  # node indices, start first
    cost: float


def shortest_path(
    graph: TransitGraph, start: int, goals: Collection[int]
) -> PathResult | None:
    """Cheapest path from `start` to whichever goal node is settled first.

    Plain Dijkstra over a binary heap with lazy deletion. The search stops as
    soon as a goal is popped, so the returned cost is minimal over all goals.
    Returns None when no goal is reachable.
    """

    goal_set = set(goals)
    if not goal_set:
        return None

    dist: dict[int, float] = {start: 0.0}
    prev: dict[int, int] = {}
    visited: set[int] = set()

    # (distance, insertion order, node); the counter keeps pops deterministic.
    counter = 0
    heap: list[tuple[float, int, int]] = [(0.0, counter, start)]

    while heap:
        current_dist, _, current = heapq.heappop(heap)
        if current in visited:
            continue
        visited.add(current)

        if current in goal_set:
            return PathResult(
                nodes=_reconstruct(prev, start, current), cost=current_dist
            )

        for edge in graph.edges_from(current):
            if edge.target in visited:
                continue
            alt = current_dist + edge.weight
            if alt < dist.get(edge.target, float("inf")):
                dist[edge.target] = alt
                prev[edge.target] = current
                counter += 1
                heapq.heappush(heap, (alt, counter, edge.target))

    return None


def _reconstruct(prev: dict[int, int], start: int, goal: int) -> tuple[int, ...]:
    out: list[int] = [goal]
    cur = goal
    while cur != start:
        cur = prev[cur]
        out.append(cur)
    out.reverse()
    return tuple(out)
