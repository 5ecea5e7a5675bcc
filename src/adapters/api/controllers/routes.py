from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import (
    get_active_route_state,
    get_map_database,
    get_routing_service,
)
from src.adapters.api.route_state import ActiveRouteState
from src.adapters.api.schemas.routes import (
    ClearRouteSchema,
    GeoPointSchema,
    NodeSchema,
    RouteSchema,
)
from src.app.services.map_database import MapDatabase
from src.app.services.routing_service import RoutingService
from src.domain.exceptions import NodeNotFound
from src.domain.models import GeoPoint, GraphNode, Route

router = APIRouter(tags=["routes"])


def _route_to_schema(route: Route) -> RouteSchema:
    return RouteSchema(
        found=not route.is_empty,
        node_ids=list(route.node_ids),
        path=[GeoPointSchema(lat=p.lat, lon=p.lon) for p in route.points],
        total_distance=route.total_distance,
        total_distance_m=route.total_distance_m,
    )


def _node_to_schema(node: GraphNode) -> NodeSchema:
    return NodeSchema(id=node.id, lat=node.lat, lon=node.lon, name=node.name)


@router.get("/route", response_model=RouteSchema)
def find_route(
    start_lat: float = Query(..., ge=-90.0, le=90.0),
    start_lon: float = Query(..., ge=-180.0, le=180.0),
    end_lat: float = Query(..., ge=-90.0, le=90.0),
    end_lon: float = Query(..., ge=-180.0, le=180.0),
    service: RoutingService = Depends(get_routing_service),
    state: ActiveRouteState = Depends(get_active_route_state),
) -> RouteSchema:
    route = service.find_route(
        start=GeoPoint(lat=start_lat, lon=start_lon),
        end=GeoPoint(lat=end_lat, lon=end_lon),
    )
    if not route.is_empty:
        state.set(route)
    return _route_to_schema(route)


@router.get("/clear_route", response_model=ClearRouteSchema)
def clear_route(
    state: ActiveRouteState = Depends(get_active_route_state),
) -> ClearRouteSchema:
    state.clear()
    return ClearRouteSchema(cleared=True)


@router.get("/nodes/nearest", response_model=NodeSchema)
def nearest_node(
    lon: float = Query(..., ge=-180.0, le=180.0),
    lat: float = Query(..., ge=-90.0, le=90.0),
    database: MapDatabase = Depends(get_map_database),
) -> NodeSchema:
    return _node_to_schema(database.nearest_node(lon, lat))


@router.get("/nodes/{node_id}", response_model=NodeSchema)
def get_node(
    node_id: int,
    database: MapDatabase = Depends(get_map_database),
) -> NodeSchema:
    try:
        return _node_to_schema(database.node(node_id))
    except NodeNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
