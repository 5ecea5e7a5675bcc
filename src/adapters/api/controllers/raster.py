from __future__ import annotations

import base64

from fastapi import APIRouter, Depends, Query

from src.adapters.api.dependencies import get_active_route_state, get_raster_service
from src.adapters.api.route_state import ActiveRouteState
from src.adapters.api.schemas.raster import RasterSchema
from src.app.services.raster_service import RasterService

router = APIRouter(tags=["raster"])


@router.get("/raster", response_model=RasterSchema)
def get_raster(
    ullat: float = Query(..., ge=-90.0, le=90.0),
    ullon: float = Query(..., ge=-180.0, le=180.0),
    lrlat: float = Query(..., ge=-90.0, le=90.0),
    lrlon: float = Query(..., ge=-180.0, le=180.0),
    w: int = Query(..., gt=0, le=8192),
    h: int = Query(..., gt=0, le=8192),
    service: RasterService = Depends(get_raster_service),
    state: ActiveRouteState = Depends(get_active_route_state),
) -> RasterSchema:
    result = service.render(
        ul_lon=ullon,
        ul_lat=ullat,
        lr_lon=lrlon,
        lr_lat=lrlat,
        width=w,
        height=h,
        route=state.route,
    )

    encoded = None
    if result.query_success and result.image_png is not None:
        encoded = base64.b64encode(result.image_png).decode("ascii")

    return RasterSchema(
        raster_ul_lon=result.raster_ul_lon,
        raster_ul_lat=result.raster_ul_lat,
        raster_lr_lon=result.raster_lr_lon,
        raster_lr_lat=result.raster_lr_lat,
        raster_width=result.raster_width,
        raster_height=result.raster_height,
        depth=result.depth,
        render_grid=[list(row) for row in result.render_grid],
        query_success=result.query_success,
        b64_encoded_image_data=encoded,
    )
