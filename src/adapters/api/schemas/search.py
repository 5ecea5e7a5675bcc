from __future__ import annotations

from pydantic import BaseModel


class LocationSchema(BaseModel):
    id: int
    lat: float
    lon: float
    name: str
