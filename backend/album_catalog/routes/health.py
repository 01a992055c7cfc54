"""
Album Catalog Backend: Health Check Route
==========================================

What:  GET /health for container probes and monitoring.
How:   Pings the album repository; the service is only healthy when the
       catalog can actually be read.

Status levels:
    - healthy:   storage reachable (HTTP 200)
    - unhealthy: storage unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from album_catalog import __version__
from album_catalog.schemas.album import HealthResponse
from album_catalog.services.album_repository import AlbumRepository, get_album_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Storage unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    repository: AlbumRepository = Depends(get_album_repository),
):
    connected = await repository.ping()
    if not connected:
        logger.warning("Health check: album storage unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
