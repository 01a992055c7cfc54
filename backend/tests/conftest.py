"""
Album Catalog Backend: Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the test suite.
How:   Environment overrides are applied before any album_catalog import so
       the settings singleton and the module-level app pick them up.

Fixture overview:
    ├── test_settings:       Settings for an in-memory catalog
    ├── memory_repository:   Fresh InMemoryAlbumRepository
    ├── sql_repository:      SQLAlchemyAlbumRepository on a temp SQLite file
    ├── failing_repository:  Repository mock whose storage calls fail
    ├── client_for:          Client factory for apps on a given repository
    ├── test_client:         HTTPX AsyncClient bound to an app on memory storage
    └── sample_album_data:   A valid album payload
"""

import os
import tempfile
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before album_catalog is imported anywhere.
_test_dir = tempfile.mkdtemp(prefix="album_catalog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/albums.db"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from album_catalog.config import Settings  # noqa: E402
from album_catalog.exceptions import DatabaseError  # noqa: E402
from album_catalog.main import create_app  # noqa: E402
from album_catalog.services.album_repository import AlbumRepository  # noqa: E402
from album_catalog.services.memory_repository import InMemoryAlbumRepository  # noqa: E402
from album_catalog.services.sql_repository import SQLAlchemyAlbumRepository  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(storage_backend="memory", log_level="WARNING")


@pytest.fixture
def memory_repository():
    return InMemoryAlbumRepository()


@pytest_asyncio.fixture
async def sql_repository(tmp_path):
    """SQL repository on its own database file with the schema created."""
    repository = SQLAlchemyAlbumRepository(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'albums.db'}"
    )
    await repository.initialize()
    yield repository
    await repository.close()


@pytest.fixture
def failing_repository():
    """
    A repository whose every storage call raises DatabaseError.

    ping() reports the store as unreachable.
    """
    repository = AsyncMock(spec=AlbumRepository)
    repository.find_all.side_effect = DatabaseError(context={"error_type": "OperationalError"})
    repository.find_by_id.side_effect = DatabaseError(context={"error_type": "OperationalError"})
    repository.create.side_effect = DatabaseError(context={"error_type": "OperationalError"})
    repository.ping.return_value = False
    return repository


@pytest.fixture
def sample_album_data():
    return {"title": "Nevermind", "artist": "Nirvana", "review": 9.5}


def _client_for(app) -> AsyncClient:
    """AsyncClient that talks to `app` in-process (lifespan is not run)."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def client_for(test_settings):
    """
    Factory for clients on custom repositories.

    Usage:
        async with client_for(failing_repository) as client:
            ...
    """
    def factory(repository, config=None) -> AsyncClient:
        return _client_for(create_app(config=config or test_settings, repository=repository))
    return factory


@pytest_asyncio.fixture
async def test_client(test_settings, memory_repository):
    """
    HTTPX client for an app backed by `memory_repository`.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/albums")
            assert response.status_code == 200
    """
    app = create_app(config=test_settings, repository=memory_repository)
    async with _client_for(app) as client:
        yield client
