"""
Album Catalog Backend: Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions, one per failure category.
How:   Each exception carries a short user-facing message, an optional
       context dict (logged, never returned) and the HTTP status it maps to.
       Global handlers in main.py render JSON responses for API routes;
       HTML routes turn them into bare status responses.

Exception Hierarchy:
    AlbumCatalogError (base)     → 500
    ├── ValidationError          → 400 Bad Request
    ├── BindError                → 404 on the JSON API, 400 on the form
    ├── InvalidIdError           → 404 Not Found ("Can't parse ID")
    ├── NotFoundError            → 404 Not Found ("album not found")
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class AlbumCatalogError(Exception):
    """
    Base exception for all album catalog errors.

    Attributes:
        message:     User-facing description (safe to return in a response)
        context:     Extra debug info (logged but NOT returned to the client)
        status_code: HTTP status the error maps to
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AlbumCatalogError):
    """
    Raised when a bound album fails the shared validation rule.

    Example response:
        {"message": "title is required"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class BindError(AlbumCatalogError):
    """
    Raised when a request body or form cannot be parsed into an album.

    The JSON API answers with 404 "can't bind"; the HTML form path
    overrides the status to 400 when it renders the bare response.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "can't bind",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIdError(AlbumCatalogError):
    """Raised when an album id path segment is not a non-negative integer."""

    status_code = 404

    def __init__(self, raw_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="Can't parse ID", context=ctx)


class NotFoundError(AlbumCatalogError):
    """
    Raised when no album has the requested id.

    The repository reports absence through AlbumLookup.found; the service
    turns that flag into this exception.
    """

    status_code = 404

    def __init__(
        self,
        album_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if album_id is not None:
            ctx["album_id"] = album_id
        super().__init__(message="album not found", context=ctx)


class DatabaseError(AlbumCatalogError):
    """
    Raised when a storage operation fails.

    The client only ever sees "error occurred". The original driver error
    is kept in `context` for the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
