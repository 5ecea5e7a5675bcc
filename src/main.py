from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.raster import router as raster_router
from src.adapters.api.controllers.routes import router as routes_router
from src.adapters.api.controllers.search import router as search_router
from src.adapters.api.dependencies import get_map_database, get_tile_store


def _env_bool(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in {"1", "true", "yes", "on"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Indices are built before serving so no request pays for them.
    if not _env_bool("STREETRASTER_LAZY_INIT"):
        get_map_database()
    yield
    if get_tile_store.cache_info().currsize:
        get_tile_store().close()


app = FastAPI(title="StreetRaster", lifespan=lifespan)
app.include_router(routes_router)
app.include_router(search_router)
app.include_router(raster_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the map frontend can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if _env_bool("STREETRASTER_REVEAL_ERRORS") or isinstance(
        exc, (FileNotFoundError, RuntimeError, ValueError)
    ):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
