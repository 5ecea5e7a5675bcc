from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Location:
    id: int
    lat: float
    lon: float
    name: str
