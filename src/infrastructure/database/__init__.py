"""MongoDB access layer.

- **session**: client lifecycle (connect, health check, close)
- **repository**: collection operations with error translation
- **price**: price list writes with timestamps
- **dependencies**: FastAPI dependency injection helpers
"""

from src.infrastructure.database.dependencies import (
    AppSettings,
    Database,
    PriceItems,
    ProjectRepository,
    QuestionRepository,
    get_database,
    get_price_repository,
    get_project_repository,
    get_question_repository,
)
from src.infrastructure.database.price import PriceRepository
from src.infrastructure.database.repository import BaseRepository, serialize_document
from src.infrastructure.database.session import DatabaseClient

__all__ = [
    "AppSettings",
    "BaseRepository",
    "Database",
    "DatabaseClient",
    "PriceItems",
    "PriceRepository",
    "ProjectRepository",
    "QuestionRepository",
    "get_database",
    "get_price_repository",
    "get_project_repository",
    "get_question_repository",
    "serialize_document",
]
