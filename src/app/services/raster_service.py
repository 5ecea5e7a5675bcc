from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, ImageDraw, UnidentifiedImageError

from src.app.ports.output import ITileStore
from src.app.services.map_database import MapDatabase
from src.domain.algorithms.raster_grid import (
    grid_shape,
    project,
    raster_bounds,
    render_grid,
)
from src.domain.exceptions import TileFetchError
from src.domain.models import BoundingBox, RasterResult, Route, Tile

logger = logging.getLogger(__name__)

BLANK_COLOR = (255, 255, 255, 255)


@dataclass(slots=True)
class RasterService:
    """Composes the selected tiles (and an optional route) into one PNG.

    Tiles are fetched one by one in row-major order. A tile that cannot be
    fetched or decoded leaves a blank square and marks the result unsuccessful.
    """

    database: MapDatabase
    tile_store: ITileStore
    stroke_width_px: int = 5
    stroke_color: tuple[int, int, int, int] = (108, 181, 230, 200)

    def render(
        self,
        *,
        ul_lon: float,
        ul_lat: float,
        lr_lon: float,
        lr_lat: float,
        width: int,
        height: int,
        route: Route | None = None,
    ) -> RasterResult:
        if width <= 0 or height <= 0 or ul_lon >= lr_lon or ul_lat <= lr_lat:
            return RasterResult.failed()

        # Resolution comes from the raw request, before clamping to the map.
        max_dpp = (lr_lon - ul_lon) / width
        viewport = BoundingBox(ul_lon=ul_lon, ul_lat=ul_lat, lr_lon=lr_lon, lr_lat=lr_lat)

        tiles = self.database.select_tiles(viewport, max_dpp)
        if not tiles:
            return RasterResult.failed()

        rows, columns = grid_shape(tiles)
        tile_size = self.database.tile_size
        canvas_w = columns * tile_size
        canvas_h = rows * tile_size

        canvas = Image.new("RGBA", (canvas_w, canvas_h), BLANK_COLOR)
        complete = self._paste_tiles(canvas, tiles, columns, tile_size)

        bounds = raster_bounds(tiles)
        if route is not None and not route.is_empty:
            self._draw_route(canvas, route, bounds)

        buf = BytesIO()
        canvas.save(buf, format="PNG")

        return RasterResult(
            raster_ul_lon=bounds.ul_lon,
            raster_ul_lat=bounds.ul_lat,
            raster_lr_lon=bounds.lr_lon,
            raster_lr_lat=bounds.lr_lat,
            raster_width=canvas_w,
            raster_height=canvas_h,
            depth=tiles[0].depth,
            render_grid=render_grid(tiles, columns),
            query_success=complete,
            image_png=buf.getvalue(),
        )

    def _paste_tiles(
        self, canvas: Image.Image, tiles: list[Tile], columns: int, tile_size: int
    ) -> bool:
        complete = True
        for i, tile in enumerate(tiles):
            row, col = divmod(i, columns)
            try:
                data = self.tile_store.get_tile(tile.tile_id)
                with Image.open(BytesIO(data)) as img:
                    img = img.convert("RGBA")
                    if img.size != (tile_size, tile_size):
                        img = img.resize((tile_size, tile_size))
                    canvas.paste(img, (col * tile_size, row * tile_size))
            except (TileFetchError, UnidentifiedImageError, OSError) as exc:
                logger.warning("Tile %s left blank: %s", tile.tile_id, exc)
                complete = False
        return complete

    def _draw_route(self, canvas: Image.Image, route: Route, bounds: BoundingBox) -> None:
        width, height = canvas.size
        coords = [project(n.lon, n.lat, bounds, width, height) for n in route.nodes]

        overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay, "RGBA")
        draw.line(
            coords, fill=self.stroke_color, width=self.stroke_width_px, joint="curve"
        )
        canvas.alpha_composite(overlay)
