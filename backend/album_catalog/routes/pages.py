"""
Album Catalog Backend: HTML Page Routes
========================================

What:  The browser-facing side of the catalog.
           GET  /            → 301 to /welcome/
           GET  /welcome/    → album table
           GET  /albums/new  → empty creation form
           POST /albums/new  → create from form, 302 to /welcome/
How:   Same AlbumService as the JSON API. Failures are answered with the
       bare status code (no body); a form that cannot be bound is a 400.

Routing note:
    This router must be included before routes/albums.py so that
    /albums/new is not captured by /albums/{album_id}.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from album_catalog.exceptions import AlbumCatalogError, BindError
from album_catalog.services.album_repository import AlbumRepository, get_album_repository
from album_catalog.services.album_service import album_service

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"], include_in_schema=False)


def _bare_error(exc: AlbumCatalogError) -> Response:
    """Status-only response for HTML routes."""
    status = 400 if isinstance(exc, BindError) else exc.status_code
    return Response(status_code=status)


@router.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/welcome/", status_code=301)


@router.get("/welcome/", response_class=HTMLResponse)
async def album_index(
    request: Request,
    repository: AlbumRepository = Depends(get_album_repository),
) -> Response:
    try:
        albums = await album_service.list_albums(repository)
    except AlbumCatalogError as e:
        return _bare_error(e)
    return templates.TemplateResponse(request, "albums/index.html", {"albums": albums})


@router.get("/albums/new", response_class=HTMLResponse)
async def album_new_form(request: Request) -> Response:
    return templates.TemplateResponse(request, "albums/new.html", {})


@router.post("/albums/new", response_class=HTMLResponse)
async def album_new_submit(
    title: str = Form(default=""),
    artist: str = Form(default=""),
    review: Optional[str] = Form(default=None),
    repository: AlbumRepository = Depends(get_album_repository),
) -> Response:
    """
    Create an album from the HTML form.

    Fields arrive as strings; an empty review counts as not provided and
    is rejected by the validation rule, while "0" is a valid score.
    """
    try:
        payload = album_service.bind_album(
            {"title": title, "artist": artist, "review": review or None}
        )
        await album_service.create_album(repository, payload, validate=True)
    except AlbumCatalogError as e:
        logger.info("Form album rejected: %s", e.message)
        return _bare_error(e)

    return RedirectResponse(url="/welcome/", status_code=302)
