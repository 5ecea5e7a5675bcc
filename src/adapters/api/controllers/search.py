from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from src.adapters.api.dependencies import get_map_database
from src.adapters.api.schemas.search import LocationSchema
from src.app.services.map_database import MapDatabase

router = APIRouter(tags=["search"])


@router.get("/search", response_model=list[str] | list[LocationSchema])
def search(
    term: str = Query(..., max_length=200),
    full: bool = Query(default=False),
    database: MapDatabase = Depends(get_map_database),
) -> list[str] | list[LocationSchema]:
    # full=true resolves one exact name to its locations; otherwise autocomplete.
    if full:
        return [
            LocationSchema(id=loc.id, lat=loc.lat, lon=loc.lon, name=loc.name)
            for loc in database.locations_by_name(term)
        ]
    return database.names_by_prefix(term)
