from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

import networkx as nx

from src.domain.exceptions import NodeNotFound


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A map node. Two nodes are equal iff their ids match."""

    id: int
    lon: float = field(compare=False)
    lat: float = field(compare=False)
    name: str | None = field(default=None, compare=False)
    is_routable: bool = field(default=False, compare=False)


class RoadGraph:
    """Undirected road network keyed by node id.

    Backed by a ``networkx.Graph``: node attributes follow the OSMnx
    convention (``x`` = lon, ``y`` = lat) and every edge carries its planar
    Euclidean ``length``.
    """

    __slots__ = ("_graph",)

    def __init__(self, graph: nx.Graph | None = None) -> None:
        self._graph: nx.Graph = graph if graph is not None else nx.Graph()

    @property
    def nx_graph(self) -> nx.Graph:
        return self._graph

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self._graph)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def add_node(self, node: GraphNode) -> None:
        if node.id in self._graph:
            return
        self._graph.add_node(
            node.id,
            x=float(node.lon),
            y=float(node.lat),
            name=node.name,
            routable=bool(node.is_routable),
        )

    def add_edge(self, u_id: int, v_id: int) -> None:
        if u_id not in self._graph:
            raise NodeNotFound(f"Unknown node id: {u_id}")
        if v_id not in self._graph:
            raise NodeNotFound(f"Unknown node id: {v_id}")
        if u_id == v_id:
            return

        u = self._graph.nodes[u_id]
        v = self._graph.nodes[v_id]
        length = math.hypot(u["x"] - v["x"], u["y"] - v["y"])
        self._graph.add_edge(u_id, v_id, length=length)

    def mark_routable(self, node_id: int) -> None:
        if node_id not in self._graph:
            raise NodeNotFound(f"Unknown node id: {node_id}")
        self._graph.nodes[node_id]["routable"] = True

    def get_node(self, node_id: int) -> GraphNode | None:
        if node_id not in self._graph:
            return None
        data = self._graph.nodes[node_id]
        return GraphNode(
            id=node_id,
            lon=data["x"],
            lat=data["y"],
            name=data.get("name"),
            is_routable=bool(data.get("routable", False)),
        )

    def node(self, node_id: int) -> GraphNode:
        found = self.get_node(node_id)
        if found is None:
            raise NodeNotFound(f"Unknown node id: {node_id}")
        return found

    def nodes(self) -> Iterator[GraphNode]:
        for node_id in self._graph.nodes:
            yield self.node(node_id)

    def named_nodes(self) -> Iterator[GraphNode]:
        for node_id, name in self._graph.nodes(data="name"):
            if name:
                yield self.node(node_id)

    def neighbors(self, node_id: int) -> Iterator[GraphNode]:
        if node_id not in self._graph:
            raise NodeNotFound(f"Unknown node id: {node_id}")
        for other in self._graph.neighbors(node_id):
            yield self.node(other)

    def neighbor_ids(self, node_id: int) -> Iterator[int]:
        if node_id not in self._graph:
            raise NodeNotFound(f"Unknown node id: {node_id}")
        return iter(self._graph.neighbors(node_id))

    def edge_length(self, u_id: int, v_id: int) -> float:
        data = self._graph.get_edge_data(u_id, v_id)
        if data is None:
            raise NodeNotFound(f"No edge between {u_id} and {v_id}")
        return float(data["length"])

    def coordinates(self, node_id: int) -> tuple[float, float]:
        data = self._graph.nodes[node_id]
        return data["x"], data["y"]

    def clean(self) -> int:
        """Remove nodes without neighbors; returns how many were pruned.

        Does not guarantee connectivity, it only drops unreachable singletons.
        """

        isolated = list(nx.isolates(self._graph))
        self._graph.remove_nodes_from(isolated)
        return len(isolated)

    def freeze(self) -> None:
        nx.freeze(self._graph)
