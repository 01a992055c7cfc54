"""
Album Catalog Backend: Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract.
How:   AlbumCreate is the bind target for both creation entry points;
       AlbumResponse is what the repository returns and the API serializes.

Design Decision:
    AlbumCreate is deliberately lenient (every field has a default) so that
    binding only fails on malformed values. Whether a field is *present*
    is the job of the shared validation rule in AlbumService.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumCreate(BaseModel):
    """
    What:  Album fields as sent by a client.
    Who:   Bound from the JSON body of POST /albums and from the form
           fields of POST /albums/new.

    review is Optional so "not provided" stays distinguishable from a
    legitimate score of 0.
    """
    title: str = Field(default="", max_length=255, description="Title of the album")
    artist: str = Field(default="", max_length=255, description="Artist (band) name")
    review: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        description="Review score for the album",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumResponse(BaseModel):
    """
    What:  A stored album, including the id assigned by storage.
    Who:   Returned by every repository read/create and by the JSON API.
    """
    id: int = Field(description="Identifier assigned by storage")
    title: str = Field(description="Title of the album")
    artist: str = Field(description="Artist (band) name")
    review: float = Field(description="Review score for the album")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    What:  Error body for the JSON API.

    Example:
        {"message": "album not found"}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Storage connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
