"""Shared fixtures for integration tests.

The application runs end to end (middleware, exception handlers, routers,
repositories) against a real MongoDB server. The docker fixture starts the
container for the session and each test gets an empty worker database
injected through the ``get_database`` dependency override.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pymongo.asynchronous.database import AsyncDatabase

from src.api.main import create_app
from src.core.config import Settings, get_settings
from src.core.types import Document
from src.infrastructure.database import get_database

# Import database and docker fixtures for parallel test execution
from tests.integration.fixtures.test_database_fixtures import (
    database_url,
    mongo_client,
    mongo_database,
    worker_database_name,
)
from tests.integration.fixtures.test_docker_fixtures import ensure_mongo_container

# Re-export fixtures for pytest discovery
__all__ = [
    "database_url",
    "ensure_mongo_container",
    "mongo_client",
    "mongo_database",
    "worker_database_name",
]

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"


@pytest.fixture
def images_root(tmp_path: Path) -> Path:
    """Provide an empty images root."""
    root = tmp_path / "images"
    root.mkdir()
    return root


@pytest.fixture
def api_settings(images_root: Path) -> Settings:
    """Settings for the application under test, built from the test env."""
    return Settings(images_dir=images_root, static_dir=STATIC_DIR)


@pytest.fixture
def test_app(
    api_settings: Settings, mongo_database: AsyncDatabase[Document]
) -> Generator[FastAPI]:
    """Create an application wired to the worker's test database."""
    application = create_app(api_settings)
    application.dependency_overrides[get_settings] = lambda: api_settings
    application.dependency_overrides[get_database] = lambda: mongo_database

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create test client for the application."""
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
