"""
Album Catalog Backend: SQL Album Repository
============================================

What:  AlbumRepository backed by async SQLAlchemy (aiosqlite by default).
How:   Owns one engine and session factory; every operation opens its own
       short-lived session, so concurrent requests never share a session.
       The schema is created with Base.metadata.create_all, which issues
       CREATE TABLE only for missing tables.

Isolation:
    No explicit transactions span requests. A read may or may not observe
    a concurrent insert, following SQLite's default isolation.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from album_catalog.database import Base, create_engine, create_session_factory
from album_catalog.exceptions import DatabaseError
from album_catalog.models.album import Album
from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_repository import AlbumLookup, AlbumRepository

logger = logging.getLogger(__name__)


class SQLAlchemyAlbumRepository(AlbumRepository):
    """
    Album store on a relational database.

    Args:
        database_url: Async SQLAlchemy URL; defaults to settings.database_url.
        engine:       An existing engine to reuse instead of building one.
        echo:         Log SQL statements (ignored when engine is given).
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[AsyncEngine] = None,
        echo: bool = False,
    ):
        self.engine = engine or create_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)

    async def initialize(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error("Schema setup failed: %s", str(e))
            raise DatabaseError(
                message="Error migrating database",
                context={"error_type": type(e).__name__},
            ) from e
        logger.info("Album schema ready on %s", self.engine.url.render_as_string(hide_password=True))

    async def find_all(self) -> List[AlbumResponse]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Album).order_by(Album.id))
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing albums: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        return [AlbumResponse.model_validate(row) for row in rows]

    async def find_by_id(self, album_id: int) -> AlbumLookup:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Album).where(Album.id == album_id)
                )
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching album %s: %s", album_id, str(e))
            raise DatabaseError(
                context={"album_id": album_id, "error_type": type(e).__name__},
            ) from e

        if row is None:
            return AlbumLookup(album=None, found=False)
        return AlbumLookup(album=AlbumResponse.model_validate(row), found=True)

    async def create(self, payload: AlbumCreate) -> AlbumResponse:
        album = Album(
            title=payload.title,
            artist=payload.artist,
            review=payload.review if payload.review is not None else 0.0,
        )
        try:
            async with self._session_factory() as session:
                session.add(album)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating album: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

        logger.info("Album %d created: %r by %r", album.id, album.title, album.artist)
        return AlbumResponse.model_validate(album)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()
