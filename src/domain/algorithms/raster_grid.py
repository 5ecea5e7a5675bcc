from __future__ import annotations

from src.domain.exceptions import TileGridError
from src.domain.models.geo import BoundingBox
from src.domain.models.tiles import Tile


def grid_shape(tiles: list[Tile]) -> tuple[int, int]:
    """(rows, columns) of a row-major tile selection.

    Raises TileGridError when the tiles do not form a complete rectangle.
    """

    if not tiles:
        raise TileGridError("Cannot lay out an empty tile selection")

    rows = len({t.box.ul_lat for t in tiles})
    if len(tiles) % rows != 0:
        raise TileGridError(
            f"{len(tiles)} tiles cannot be arranged into {rows} complete rows"
        )
    columns = len(tiles) // rows

    for r in range(rows):
        row = tiles[r * columns : (r + 1) * columns]
        if len({t.box.ul_lat for t in row}) != 1:
            raise TileGridError(f"Row {r} mixes tiles from different latitudes")
        lons = [t.box.ul_lon for t in row]
        if lons != sorted(lons):
            raise TileGridError(f"Row {r} is not ordered west to east")

    return rows, columns


def render_grid(tiles: list[Tile], columns: int) -> tuple[tuple[str, ...], ...]:
    return tuple(
        tuple(t.tile_id for t in tiles[i : i + columns])
        for i in range(0, len(tiles), columns)
    )


def raster_bounds(tiles: list[Tile]) -> BoundingBox:
    """Geographic extent of a row-major selection: first tile's UL to last tile's LR."""

    first = tiles[0].box
    last = tiles[-1].box
    return BoundingBox(
        ul_lon=first.ul_lon, ul_lat=first.ul_lat, lr_lon=last.lr_lon, lr_lat=last.lr_lat
    )


def project(
    lon: float, lat: float, box: BoundingBox, width: int, height: int
) -> tuple[float, float]:
    """Pixel position of (lon, lat) on a canvas spanning ``box``."""

    x = (lon - box.ul_lon) / box.width * width if box.width else 0.0
    y = (box.ul_lat - lat) / box.height * height if box.height else 0.0
    return x, y
