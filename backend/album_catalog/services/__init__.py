# Services package init
"""
Album Catalog Backend: Services Layer
======================================

Service Inventory:
    - AlbumRepository (abstract): storage-access contract
    - SQLAlchemyAlbumRepository: async SQLAlchemy implementation
    - InMemoryAlbumRepository: process-local implementation
    - AlbumService: bind → validate → persist, id parsing, not-found mapping
"""

from album_catalog.config import Settings
from album_catalog.services.album_repository import AlbumRepository
from album_catalog.services.memory_repository import InMemoryAlbumRepository
from album_catalog.services.sql_repository import SQLAlchemyAlbumRepository


def build_repository(config: Settings) -> AlbumRepository:
    """Construct the repository selected by STORAGE_BACKEND."""
    if config.storage_backend == "memory":
        return InMemoryAlbumRepository()
    return SQLAlchemyAlbumRepository(
        database_url=config.database_url,
        # SQL echo is only useful while developing
        echo=config.log_level == "DEBUG",
    )
