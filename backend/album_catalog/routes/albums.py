"""
Album Catalog Backend: JSON Album API
======================================

What:  GET /albums, GET /albums/{id} and POST /albums.
How:   Handlers resolve the repository through get_album_repository,
       delegate to AlbumService and let the global exception handlers in
       main.py render failures as {"message": ...}.

Response formats:
    - GET /albums returns a pretty-printed (indented) JSON array.
    - Single albums are returned as compact JSON.
"""

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from album_catalog.schemas.album import AlbumCreate, AlbumResponse, ErrorResponse
from album_catalog.services.album_repository import AlbumRepository, get_album_repository
from album_catalog.services.album_service import album_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Albums"])


class PrettyJSONResponse(JSONResponse):
    """JSONResponse rendered with 4-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=4,
        ).encode("utf-8")


@router.get(
    "/albums",
    response_model=List[AlbumResponse],
    response_class=PrettyJSONResponse,
    responses={
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Shows Albums as JSON",
    description="Returns every album in the catalog.",
)
async def list_albums(
    repository: AlbumRepository = Depends(get_album_repository),
) -> PrettyJSONResponse:
    albums = await album_service.list_albums(repository)
    return PrettyJSONResponse(content=jsonable_encoder(albums))


@router.get(
    "/albums/{album_id}",
    response_model=AlbumResponse,
    responses={
        404: {"description": "Unparsable id or album not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Get Album by ID",
)
async def get_album(
    album_id: str,
    repository: AlbumRepository = Depends(get_album_repository),
) -> AlbumResponse:
    """
    Look up one album.

    album_id is taken as a raw string so that a malformed id produces the
    catalog's own 404 "Can't parse ID" instead of FastAPI's 422.
    """
    return await album_service.get_album(repository, album_id)


@router.post(
    "/albums",
    status_code=201,
    response_model=AlbumResponse,
    responses={
        201: {"description": "Album created", "model": AlbumResponse},
        400: {"description": "Missing title, artist or review", "model": ErrorResponse},
        404: {"description": "Body could not be bound to an album", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Adds album to the DB",
    description="Post a JSON album; the stored album is returned with its id.",
    # The body is bound by hand (see below), so document it explicitly.
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": AlbumCreate.model_json_schema()},
            },
        },
    },
)
async def create_album(
    request: Request,
    repository: AlbumRepository = Depends(get_album_repository),
) -> AlbumResponse:
    """
    Create an album from a JSON body.

    The body is read manually so bind failures answer 404 "can't bind"
    rather than FastAPI's 422. Whether the shared validation rule applies
    is controlled by VALIDATE_JSON_ALBUMS.
    """
    payload = album_service.bind_album_json(await request.body())
    logger.info("Creating album from JSON: title=%r artist=%r", payload.title, payload.artist)

    return await album_service.create_album(
        repository,
        payload,
        validate=request.app.state.settings.validate_json_albums,
    )
