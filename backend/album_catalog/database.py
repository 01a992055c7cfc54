"""
Album Catalog Backend: Database Engine & Sessions
==================================================

What:  Async SQLAlchemy engine/session factories and the declarative Base.
How:   The SQL repository builds one engine per application from these
       helpers and opens a short-lived session for every operation.

Connection notes:
    aiosqlite runs each SQLite connection in its own worker thread, so the
    event loop never blocks on disk I/O. File databases get SQLAlchemy's
    default async queue pool; in-memory URLs get a static single connection.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from album_catalog.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which the SQL
    repository uses to create the schema at startup.
    """
    pass


def create_engine(database_url: str | None = None, echo: bool = False) -> AsyncEngine:
    """
    Build the async engine for the given URL (defaults to settings).

    echo logs every SQL statement; the caller turns it on for DEBUG.

    pool_pre_ping validates pooled connections before use so a replaced
    database file does not surface as a cryptic driver error.
    """
    return create_async_engine(
        database_url or settings.database_url,
        pool_pre_ping=True,
        echo=echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attribute access working after commit,
    which the repository relies on when it converts the new row into a
    response model.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
