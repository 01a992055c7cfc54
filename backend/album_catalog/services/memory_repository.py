"""
Album Catalog Backend: In-Memory Album Repository
==================================================

What:  AlbumRepository that keeps albums in a process-local dict.
Who:   Selected with STORAGE_BACKEND=memory and used as the storage fake in
       the test suite.

Concurrency:
    Requests share one event loop, so plain dict reads are safe. Id
    assignment and insert happen under an asyncio.Lock so two concurrent
    creates never receive the same id.
"""

import asyncio
from typing import Dict, List

from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_repository import AlbumLookup, AlbumRepository


class InMemoryAlbumRepository(AlbumRepository):
    """Albums live only as long as the process; ids start at 1."""

    def __init__(self):
        self._albums: Dict[int, AlbumResponse] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        return None

    async def find_all(self) -> List[AlbumResponse]:
        return [self._albums[album_id] for album_id in sorted(self._albums)]

    async def find_by_id(self, album_id: int) -> AlbumLookup:
        album = self._albums.get(album_id)
        return AlbumLookup(album=album, found=album is not None)

    async def create(self, payload: AlbumCreate) -> AlbumResponse:
        async with self._lock:
            album = AlbumResponse(
                id=self._next_id,
                title=payload.title,
                artist=payload.artist,
                review=payload.review if payload.review is not None else 0.0,
            )
            self._albums[album.id] = album
            self._next_id += 1
        return album

    async def ping(self) -> bool:
        return True
