"""FastAPI dependency injection for the database and repositories.

The database handle lives on ``app.state`` (set by the lifespan handler), so
there is no import-time global to initialize in the right order. Tests
replace ``get_database`` through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from src.core.config import Settings, get_settings
from src.core.exceptions import DatabaseConnectionError
from src.core.types import Document
from src.infrastructure.database.price import PriceRepository
from src.infrastructure.database.repository import BaseRepository
from src.infrastructure.database.session import DatabaseClient


def get_database(request: Request) -> AsyncDatabase[Document]:
    """Provide the connected database handle.

    Raises:
        DatabaseConnectionError: If the application has no connected client.
    """
    client: DatabaseClient | None = getattr(request.app.state, "database_client", None)
    if client is None:
        msg = "Database client is not configured on the application"
        raise DatabaseConnectionError(msg)
    return client.database


Database = Annotated[AsyncDatabase[Document], Depends(get_database)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_project_repository(database: Database, settings: AppSettings) -> BaseRepository:
    """Repository for the projects collection."""
    return BaseRepository(database, settings.database_config.projects_collection)


def get_question_repository(database: Database, settings: AppSettings) -> BaseRepository:
    """Repository for the questions collection."""
    return BaseRepository(database, settings.database_config.questions_collection)


def get_price_repository(database: Database, settings: AppSettings) -> PriceRepository:
    """Repository for the price list collection."""
    return PriceRepository(database, settings.database_config.price_collection)


ProjectRepository = Annotated[BaseRepository, Depends(get_project_repository)]
QuestionRepository = Annotated[BaseRepository, Depends(get_question_repository)]
PriceItems = Annotated[PriceRepository, Depends(get_price_repository)]
