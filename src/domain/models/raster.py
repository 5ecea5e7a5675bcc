from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RasterResult:
    """Outcome of composing the tiles for one viewport."""

    raster_ul_lon: float = 0.0
    raster_ul_lat: float = 0.0
    raster_lr_lon: float = 0.0
    raster_lr_lat: float = 0.0
    raster_width: int = 0
    raster_height: int = 0
    depth: int = 0
    render_grid: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    query_success: bool = False
    image_png: bytes | None = None

    @staticmethod
    def failed() -> "RasterResult":
        return RasterResult(query_success=False)
