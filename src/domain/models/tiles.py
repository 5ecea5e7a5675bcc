from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator

from .geo import BoundingBox, Quadrant

ROOT_TILE_ID = "root"


def child_tile_id(parent_id: str, quadrant: Quadrant) -> str:
    if parent_id == ROOT_TILE_ID:
        return quadrant.digit
    return parent_id + quadrant.digit


def tile_depth(tile_id: str) -> int:
    """Depth of a tile id; the root is depth 0."""

    return 0 if tile_id == ROOT_TILE_ID else len(tile_id)


@dataclass(frozen=True, slots=True)
class Tile:
    """Metadata for one pre-rendered map tile."""

    tile_id: str
    box: BoundingBox
    depth: int

    def lon_dpp(self, tile_size: int) -> float:
        return self.box.width / tile_size


@dataclass(frozen=True, slots=True)
class TileManifest:
    """Fixed-depth quadrant decomposition of the map extent.

    Tile ids are "root" for the whole extent, then one quadrant digit per level
    (1=NW, 2=NE, 3=SW, 4=SE), e.g. "1", "14", "143".
    """

    root_box: BoundingBox
    tile_size: int = 256
    max_depth: int = 7

    def __post_init__(self) -> None:
        if self.tile_size <= 0:
            raise ValueError(f"Invalid tile size: {self.tile_size}")
        if self.max_depth < 0:
            raise ValueError(f"Invalid tile depth: {self.max_depth}")

    def iter_tiles(self) -> Iterator[tuple[BoundingBox, str]]:
        """Yield (box, tile_id) breadth first, parents before children."""

        queue: deque[tuple[BoundingBox, str, int]] = deque(
            [(self.root_box, ROOT_TILE_ID, 0)]
        )
        while queue:
            box, tile_id, depth = queue.popleft()
            yield box, tile_id
            if depth >= self.max_depth:
                continue
            for quadrant in Quadrant:
                queue.append(
                    (box.quadrant(quadrant), child_tile_id(tile_id, quadrant), depth + 1)
                )
