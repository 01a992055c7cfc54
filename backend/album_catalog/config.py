"""
Album Catalog Backend: Application Configuration
=================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are coerced
       and validated once, and exposed through the `settings` singleton.
Who:   Imported by the database layer, the app factory and the entry point.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running locally; the database
    file is created next to the working directory on first start.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # Async SQLAlchemy URL. The aiosqlite driver keeps the catalog in a
    # single database file.
    database_url: str = Field(
        default="sqlite+aiosqlite:///./albums.db",
        description="Async SQLAlchemy connection URL",
    )

    # Which AlbumRepository implementation the app builds at startup.
    # "memory" keeps albums in process and loses them on restart.
    storage_backend: Literal["database", "memory"] = Field(default="database")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="localhost")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Validation ────────────────────────────────────────────────────────
    # The HTML form always applies the album validation rule. The JSON
    # endpoint applies it too unless this is turned off, in which case
    # incomplete albums are stored with empty/zero defaults.
    validate_json_albums: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


settings = Settings()
