"""
Album Catalog Backend: Album Service (Business Logic)
======================================================

What:  Binding, validation, id parsing and error mapping for album routes.
How:   Stateless; every call receives the AlbumRepository to work on, so
       the same service serves both the HTML pages and the JSON API.
Who:   Called by routes/pages.py and routes/albums.py.

Shared validation rule:
    title and artist must be non-empty after trimming whitespace, and a
    review must be present. A review of exactly 0 is a valid score.
"""

import logging
import re
from typing import Any, List

import pydantic

from album_catalog.exceptions import (
    BindError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_repository import AlbumRepository

logger = logging.getLogger(__name__)

# Ids are unsigned 64-bit on the wire; SQLite stores signed 64-bit integers.
MAX_WIRE_ID = 2**64 - 1
MAX_STORED_ID = 2**63 - 1

_ID_PATTERN = re.compile(r"[0-9]+")


class AlbumService:
    """
    Business logic layer for album operations.

    Responsibilities:
        - bind_album():     form mapping → AlbumCreate, lax (BindError on failure)
        - bind_album_json(): JSON body → AlbumCreate, strict
        - validate_album(): the shared validation rule
        - parse_album_id(): path segment → int (InvalidIdError on failure)
        - list_albums() / get_album() / create_album(): repository calls
    """

    def bind_album(self, data: Any) -> AlbumCreate:
        """
        Parse a form mapping into an AlbumCreate.

        Lax mode: form values are always strings, so "9.5" must become 9.5.

        Raises:
            BindError: data is not a mapping or a field has the wrong type.
        """
        try:
            return AlbumCreate.model_validate(data)
        except pydantic.ValidationError as e:
            logger.debug("Form bind failed: %s", e.errors())
            raise BindError(context={"errors": e.error_count()}) from e

    def bind_album_json(self, body: bytes) -> AlbumCreate:
        """
        Parse a raw JSON request body into an AlbumCreate.

        Strict mode: every field must already have its JSON type. true or
        "9.5" for review is a bind failure, while an integer review is
        accepted as a float.

        Raises:
            BindError: malformed JSON, not an object, or a mistyped field.
        """
        try:
            return AlbumCreate.model_validate_json(body, strict=True)
        except pydantic.ValidationError as e:
            logger.debug("JSON bind failed: %s", e.errors(include_url=False))
            raise BindError(context={"errors": e.error_count()}) from e

    def validate_album(self, payload: AlbumCreate) -> None:
        """
        Apply the shared validation rule.

        Raises:
            ValidationError: naming the first missing field.
        """
        if not payload.title.strip():
            raise ValidationError(message="title is required", field="title")
        if not payload.artist.strip():
            raise ValidationError(message="artist is required", field="artist")
        if payload.review is None:
            raise ValidationError(message="review is required", field="review")

    def parse_album_id(self, raw_id: str) -> int:
        """Digits only, no sign, no whitespace, at most 2**64 - 1."""
        if not _ID_PATTERN.fullmatch(raw_id):
            raise InvalidIdError(raw_id)
        album_id = int(raw_id)
        if album_id > MAX_WIRE_ID:
            raise InvalidIdError(raw_id)
        return album_id

    async def list_albums(self, repository: AlbumRepository) -> List[AlbumResponse]:
        return await repository.find_all()

    async def get_album(self, repository: AlbumRepository, raw_id: str) -> AlbumResponse:
        """
        Resolve a raw path segment to a stored album.

        Raises:
            InvalidIdError: raw_id is not a non-negative integer (→ 404)
            NotFoundError:  no album has that id (→ 404)
            DatabaseError:  storage failed (→ 500)
        """
        album_id = self.parse_album_id(raw_id)
        # Beyond SQLite's integer range nothing can match.
        if album_id > MAX_STORED_ID:
            raise NotFoundError(album_id=album_id)

        lookup = await repository.find_by_id(album_id)
        if not lookup.found:
            raise NotFoundError(album_id=album_id)
        return lookup.album

    async def create_album(
        self,
        repository: AlbumRepository,
        payload: AlbumCreate,
        validate: bool = True,
    ) -> AlbumResponse:
        """
        Validate (unless disabled) and persist a new album.

        Raises:
            ValidationError: validate is True and the rule fails
            DatabaseError:   storage failed
        """
        if validate:
            self.validate_album(payload)
        album = await repository.create(payload)
        logger.debug("Created album: %s", album.model_dump())
        return album


album_service = AlbumService()
