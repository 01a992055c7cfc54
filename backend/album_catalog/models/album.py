"""
Album Catalog Backend: Album SQLAlchemy Model
==============================================

What:  ORM model for the `albums` table.
Who:   Used by SQLAlchemyAlbumRepository for reads/inserts and by
       Base.metadata.create_all when the schema is created at startup.

Table notes:
    - Integer autoincrement primary key, assigned by SQLite on insert.
    - Rows are never updated or deleted by the application.
    - No secondary indexes: listing is always a full scan ordered by id.
"""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from album_catalog.database import Base


class Album(Base):
    """A catalogued album with the owner's review score."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    artist: Mapped[str] = mapped_column(String(255), nullable=False)

    # Zero is a valid score; absence is handled before a row is built.
    review: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, title='{self.title}', artist='{self.artist}')>"
