from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field

from src.domain.exceptions import NodeNotFound
from src.domain.models.graph import RoadGraph


@dataclass(slots=True)
class SearchState:
    """Per-query A* bookkeeping; never shared between queries."""

    g_score: dict[int, float] = field(default_factory=dict)
    came_from: dict[int, int] = field(default_factory=dict)
    closed: set[int] = field(default_factory=set)
    frontier: list[tuple[float, int]] = field(default_factory=list)

    def g(self, node_id: int) -> float:
        return self.g_score.get(node_id, math.inf)

    def push(self, node_id: int, f_score: float) -> None:
        # Duplicates are allowed; stale entries are skipped once the node closes.
        heapq.heappush(self.frontier, (f_score, node_id))

    def pop(self) -> int | None:
        while self.frontier:
            _, node_id = heapq.heappop(self.frontier)
            if node_id not in self.closed:
                return node_id
        return None


def shortest_path(graph: RoadGraph, source_id: int, target_id: int) -> list[int]:
    """Shortest path by planar Euclidean length from source to target.

    Returns the node ids in path order, or an empty list when the target is
    unreachable or both ends are the same node. Frontier ties are broken by the
    smaller node id.
    """

    if source_id not in graph:
        raise NodeNotFound(f"Unknown source node id: {source_id}")
    if target_id not in graph:
        raise NodeNotFound(f"Unknown target node id: {target_id}")
    if source_id == target_id:
        return []

    target_lon, target_lat = graph.coordinates(target_id)

    def heuristic(node_id: int) -> float:
        lon, lat = graph.coordinates(node_id)
        return math.hypot(lon - target_lon, lat - target_lat)

    state = SearchState()
    state.g_score[source_id] = 0.0
    state.push(source_id, heuristic(source_id))

    while True:
        current = state.pop()
        if current is None:
            return []
        if current == target_id:
            return _reconstruct(state.came_from, target_id)

        state.closed.add(current)
        current_g = state.g_score[current]

        for neighbor in graph.neighbor_ids(current):
            if neighbor in state.closed:
                continue
            candidate = current_g + graph.edge_length(current, neighbor)
            if candidate < state.g(neighbor):
                state.g_score[neighbor] = candidate
                state.came_from[neighbor] = current
                state.push(neighbor, candidate + heuristic(neighbor))


def _reconstruct(came_from: dict[int, int], target_id: int) -> list[int]:
    path = [target_id]
    cur = target_id
    while cur in came_from:
        cur = came_from[cur]
        path.append(cur)
    path.reverse()
    return path


def path_length(graph: RoadGraph, node_ids: list[int]) -> float:
    """Sum of consecutive edge lengths along a path."""

    return float(sum(graph.edge_length(u, v) for u, v in zip(node_ids, node_ids[1:])))
