from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.algorithms.geo_utils import boxes_intersect
from src.domain.exceptions import TileInsertionError
from src.domain.models.geo import BoundingBox, Quadrant
from src.domain.models.tiles import Tile, TileManifest, tile_depth


@dataclass(slots=True)
class TileIndexNode:
    box: BoundingBox
    tile_id: str
    depth: int
    children: list[TileIndexNode | None] = field(
        default_factory=lambda: [None, None, None, None]
    )

    @property
    def is_leaf(self) -> bool:
        return all(child is None for child in self.children)

    def child(self, quadrant: Quadrant) -> TileIndexNode | None:
        return self.children[quadrant.value]

    def quadrant_for(self, box: BoundingBox) -> Quadrant:
        """Quadrant of this node that fully holds ``box``."""

        mid_lon = self.box.mid_lon
        mid_lat = self.box.mid_lat

        if box.lr_lon <= mid_lon:
            west = True
        elif box.ul_lon >= mid_lon:
            west = False
        else:
            raise TileInsertionError(
                f"Box {box} straddles longitude midpoint {mid_lon} of tile {self.tile_id}"
            )

        if box.lr_lat >= mid_lat:
            north = True
        elif box.ul_lat <= mid_lat:
            north = False
        else:
            raise TileInsertionError(
                f"Box {box} straddles latitude midpoint {mid_lat} of tile {self.tile_id}"
            )

        if north:
            return Quadrant.NW if west else Quadrant.NE
        return Quadrant.SW if west else Quadrant.SE

    def to_tile(self) -> Tile:
        return Tile(tile_id=self.tile_id, box=self.box, depth=self.depth)


class TileIndex:
    """Quadtree over pre-rendered tiles.

    Selection returns the leaf tiles intersecting a viewport at the coarsest
    level whose longitudinal distance per pixel satisfies the request.
    """

    __slots__ = ("_root", "tile_size", "_count")

    def __init__(self, tile_size: int = 256) -> None:
        self._root: TileIndexNode | None = None
        self.tile_size = tile_size
        self._count = 0

    @classmethod
    def from_manifest(cls, manifest: TileManifest) -> TileIndex:
        index = cls(tile_size=manifest.tile_size)
        for box, tile_id in manifest.iter_tiles():
            index.insert(box, tile_id)
        return index

    def __len__(self) -> int:
        return self._count

    @property
    def root(self) -> TileIndexNode | None:
        return self._root

    @property
    def bounds(self) -> BoundingBox | None:
        return self._root.box if self._root is not None else None

    def insert(self, box: BoundingBox, tile_id: str) -> None:
        if self._root is None:
            self._root = TileIndexNode(box=box, tile_id=tile_id, depth=tile_depth(tile_id))
            self._count = 1
            return

        if not self._root.box.contains_box(box):
            raise TileInsertionError(f"Box {box} lies outside the root tile")

        node = self._root
        while node.box != box:
            quadrant = node.quadrant_for(box)
            child = node.child(quadrant)
            if child is None:
                if box != node.box.quadrant(quadrant):
                    raise TileInsertionError(
                        f"Tile {tile_id} has no parent tile in quadrant "
                        f"{quadrant.name} of {node.tile_id}"
                    )
                node.children[quadrant.value] = TileIndexNode(
                    box=box, tile_id=tile_id, depth=node.depth + 1
                )
                self._count += 1
                return
            node = child

    def select_tiles(self, viewport: BoundingBox, max_dpp: float) -> list[Tile]:
        """Leaf tiles covering ``viewport``, sorted row-major.

        Rows run north to south (upper-left latitude descending), tiles within a
        row west to east (upper-left longitude ascending).
        """

        if self._root is None or not boxes_intersect(self._root.box, viewport):
            return []

        selected: list[Tile] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.is_leaf or node.box.width / self.tile_size <= max_dpp:
                selected.append(node.to_tile())
                continue
            for child in node.children:
                if child is not None and boxes_intersect(child.box, viewport):
                    stack.append(child)

        selected.sort(key=lambda t: (-t.box.ul_lat, t.box.ul_lon))
        return selected
