"""
Album Catalog Backend: Application Package
===========================================

What:  A small CRUD service for a catalog of music albums.
How:   HTML pages and a JSON API over a swappable album repository.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes (pages, albums, health)  │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │           AlbumService              │  ← bind, validate, map errors
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   AlbumRepository (SQL / memory)    │  ← persistence
    └─────────────────────────────────────┘

    The repository is created once per application and handed to each
    handler through FastAPI's dependency injection.
"""

__version__ = "1.0.0"
