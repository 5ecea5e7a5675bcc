from __future__ import annotations

from pydantic import BaseModel


class RasterSchema(BaseModel):
    raster_ul_lon: float
    raster_ul_lat: float
    raster_lr_lon: float
    raster_lr_lat: float
    raster_width: int
    raster_height: int
    depth: int
    render_grid: list[list[str]] = []
    query_success: bool
    b64_encoded_image_data: str | None = None
