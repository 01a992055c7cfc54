"""
Album Catalog Backend: Abstract Album Repository
=================================================

What:  The storage-access contract every album store implements.
How:   Concrete repositories inherit from AlbumRepository; handlers only
       ever see this interface through the `get_album_repository`
       dependency, so the backing store can be swapped (SQL database,
       in-memory) without touching routes or the service.

Error contract:
    Implementations wrap every driver failure in DatabaseError. A missing
    album is NOT an error at this layer: find_by_id reports it through
    AlbumLookup.found.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional

from fastapi import Request

from album_catalog.schemas.album import AlbumCreate, AlbumResponse


class AlbumLookup(NamedTuple):
    """Result of a lookup by id; `album` is None exactly when `found` is False."""
    album: Optional[AlbumResponse]
    found: bool


class AlbumRepository(ABC):
    """
    Abstract interface for album persistence.

    Implementations:
        - SQLAlchemyAlbumRepository: async SQLAlchemy over a SQLite file
        - InMemoryAlbumRepository: process-local dict, used for tests and
          STORAGE_BACKEND=memory
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backing schema if it does not exist yet (idempotent)."""
        ...

    @abstractmethod
    async def find_all(self) -> List[AlbumResponse]:
        """
        Return every stored album ordered by id.

        Raises:
            DatabaseError: the store could not be read.
        """
        ...

    @abstractmethod
    async def find_by_id(self, album_id: int) -> AlbumLookup:
        """
        Look up one album by exact id.

        Returns:
            AlbumLookup(album, True) on a match, AlbumLookup(None, False)
            when no row has that id.

        Raises:
            DatabaseError: the store could not be read.
        """
        ...

    @abstractmethod
    async def create(self, payload: AlbumCreate) -> AlbumResponse:
        """
        Persist a new album and return it with its assigned id.

        Absent fields are stored as empty text / a zero review; callers
        that need complete albums validate before calling.

        Raises:
            DatabaseError: the insert failed.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity probe for the health endpoint."""
        ...

    async def close(self) -> None:
        """Release held resources at shutdown. No-op by default."""
        return None


def get_album_repository(request: Request) -> AlbumRepository:
    """
    FastAPI dependency returning the application's repository.

    create_app() stores the repository on app.state; tests can replace it
    with app.dependency_overrides or by passing one to create_app().
    """
    return request.app.state.album_repository
