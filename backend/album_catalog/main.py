"""
Album Catalog Backend: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routers and the
       album repository; `app` is the module-level instance uvicorn serves.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging                  │
    │                                                     │
    │  Routes:      pages (HTML) │ albums (JSON) │ health │
    │                                                     │
    │  Exception Handlers:                                │
    │   Validation→400 │ Bind/Id/NotFound→404 │ DB→500    │
    │                                                     │
    │  app.state.album_repository ← SQL or in-memory      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the album schema if absent
    Shutdown: close the repository (disposes the engine pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from album_catalog import __version__
from album_catalog.config import Settings, settings
from album_catalog.exceptions import (
    AlbumCatalogError,
    BindError,
    DatabaseError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from album_catalog.middleware.logging import RequestLoggingMiddleware
from album_catalog.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from album_catalog.routes import albums, health, pages
from album_catalog.services import build_repository
from album_catalog.services.album_repository import AlbumRepository

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    The stdout handler carries RequestIDLogFilter, so every line written
    while a request is in flight shows its id, and "-" otherwise.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then schema creation. A schema failure aborts startup
    so the server never runs against a store it cannot write.
    Shutdown: release the repository.
    """
    config: Settings = app.state.settings
    repository: AlbumRepository = app.state.album_repository

    setup_logging(config.log_level)
    logger.info("Album Catalog starting up (storage=%s)...", config.storage_backend)

    await repository.initialize()

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info(
        "API docs: http://%s:%d/swagger/index.html", config.backend_host, config.backend_port
    )

    yield

    logger.info("Album Catalog shutting down...")
    await repository.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _message(exc: AlbumCatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map catalog exceptions to JSON error bodies for the API routes.

    Handler hierarchy:
        ValidationError    → 400 {"message": "<field> is required"}
        BindError          → 404 {"message": "can't bind"}
        InvalidIdError     → 404 {"message": "Can't parse ID"}
        NotFoundError      → 404 {"message": "album not found"}
        DatabaseError      → 500 {"message": "error occurred"}
        AlbumCatalogError  → its status_code (catch-all for custom errors)
        Exception          → 500 {"message": "error occurred"}

    HTML routes never reach these handlers; they answer with bare statuses.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return _message(exc)

    @app.exception_handler(BindError)
    async def handle_bind_error(request: Request, exc: BindError):
        logger.warning("Bind error: %s", exc.context)
        return _message(exc)

    @app.exception_handler(InvalidIdError)
    async def handle_invalid_id(request: Request, exc: InvalidIdError):
        return _message(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _message(exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return _message(exc)

    @app.exception_handler(AlbumCatalogError)
    async def handle_catalog_error(request: Request, exc: AlbumCatalogError):
        logger.error("Catalog error: %s | Context: %s", exc.message, exc.context)
        return _message(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"message": "error occurred"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    repository: Optional[AlbumRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:     Settings to use; defaults to the module-level singleton.
        repository: Album store to inject; defaults to the one selected by
                    config.storage_backend.
    """
    config = config or settings

    app = FastAPI(
        title="Albums API",
        description="Catalog of music albums with their title, artist and review.",
        version=__version__,
        docs_url="/swagger/index.html",
        redoc_url=None,
        openapi_url="/swagger/doc.json",
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.album_repository = repository or build_repository(config)

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # pages first: /albums/new must win over /albums/{album_id}
    app.include_router(pages.router)
    app.include_router(albums.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on BACKEND_HOST:BACKEND_PORT."""
    uvicorn.run(
        "album_catalog.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
