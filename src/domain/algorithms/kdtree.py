from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from src.domain.algorithms.geo_utils import (
    HasLonLat,
    distance_squared,
    distance_squared_point_to_box,
)
from src.domain.exceptions import IndexNotBuiltError
from src.domain.models.geo import Axis, BoundingBox
from src.domain.models.graph import GraphNode


def axis_value(point: HasLonLat, axis: Axis) -> float:
    return point.lon if axis is Axis.LONGITUDE else point.lat


@dataclass(frozen=True, slots=True)
class _Target:
    lon: float
    lat: float


@dataclass(frozen=True, slots=True)
class SpatialIndexNode:
    point: GraphNode
    axis: Axis
    left: SpatialIndexNode | None = None
    right: SpatialIndexNode | None = None


class SpatialIndex:
    """2-d tree over graph nodes answering nearest-neighbour queries.

    Levels alternate between splitting on longitude (even depth) and latitude
    (odd depth). Built once; never mutated.
    """

    __slots__ = ("_root", "_bounds", "_size")

    def __init__(
        self,
        root: SpatialIndexNode | None,
        bounds: BoundingBox | None,
        size: int,
    ) -> None:
        self._root = root
        self._bounds = bounds
        self._size = size

    @classmethod
    def build(cls, nodes: Iterable[GraphNode]) -> SpatialIndex:
        points = list(nodes)
        if not points:
            return cls(root=None, bounds=None, size=0)

        bounds = BoundingBox.around([(p.lon, p.lat) for p in points])
        return cls(root=_build(points, 0), bounds=bounds, size=len(points))

    def __len__(self) -> int:
        return self._size

    @property
    def bounds(self) -> BoundingBox | None:
        return self._bounds

    def nearest(self, lon: float, lat: float) -> GraphNode:
        """Return the indexed node closest to (lon, lat).

        Among equidistant nodes the first one reached by the descent wins.
        """

        if self._root is None or self._bounds is None:
            raise IndexNotBuiltError("Spatial index is empty")

        target = _Target(lon=float(lon), lat=float(lat))
        best, _ = _nearest(self._root, self._bounds, target, None, float("inf"))
        if best is None:
            raise IndexNotBuiltError("Spatial index returned no candidate")
        return best


def _build(points: list[GraphNode], depth: int) -> SpatialIndexNode | None:
    if not points:
        return None

    axis = Axis.for_depth(depth)
    if len(points) == 1:
        return SpatialIndexNode(point=points[0], axis=axis)

    # Node id as secondary key keeps the build independent of input order.
    points.sort(key=lambda p: (axis_value(p, axis), p.id))
    median = len(points) // 2

    return SpatialIndexNode(
        point=points[median],
        axis=axis,
        left=_build(points[:median], depth + 1),
        right=_build(points[median + 1 :], depth + 1),
    )


def _nearest(
    node: SpatialIndexNode | None,
    box: BoundingBox,
    target: _Target,
    best: GraphNode | None,
    best_d2: float,
) -> tuple[GraphNode | None, float]:
    if node is None:
        return best, best_d2

    if best is not None and distance_squared_point_to_box(target, box) > best_d2:
        return best, best_d2

    d2 = distance_squared(node.point, target)
    if best is None or d2 < best_d2:
        best = node.point
        best_d2 = d2

    split = axis_value(node.point, node.axis)
    lower_box, upper_box = box.split(node.axis, split)

    if axis_value(target, node.axis) < split:
        near, near_box, far, far_box = node.left, lower_box, node.right, upper_box
    else:
        near, near_box, far, far_box = node.right, upper_box, node.left, lower_box

    best, best_d2 = _nearest(near, near_box, target, best, best_d2)
    best, best_d2 = _nearest(far, far_box, target, best, best_d2)
    return best, best_d2
