from __future__ import annotations

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class NodeSchema(BaseModel):
    id: int
    lat: float
    lon: float
    name: str | None = None


class RouteSchema(BaseModel):
    found: bool
    node_ids: list[int] = []
    path: list[GeoPointSchema] = []

    total_distance: float = 0.0
    total_distance_m: float = 0.0


class ClearRouteSchema(BaseModel):
    cleared: bool = True
