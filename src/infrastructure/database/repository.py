"""Base repository for MongoDB collections.

The repository is the only place that talks to a collection. It translates
driver failures into ``InternalError`` so handlers never see a pymongo
exception, and converts ``ObjectId`` values to strings so documents can be
serialized as JSON.
"""

from collections.abc import Mapping
from typing import Any

from bson import ObjectId
from loguru import logger
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.core.exceptions import InternalError
from src.core.observability import trace_operation
from src.core.types import Document, Projection, QueryFilter
from src.domain.pagination import PageWindow


def serialize_value(value: Any) -> Any:
    """Convert ObjectId values to strings, descending into lists and documents."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Document) -> Document:
    """Return a copy of the document with every ObjectId as a string.

    Nested documents and arrays are converted too, since any stored value can
    hold a reference.
    """
    return {key: serialize_value(value) for key, value in document.items()}


class BaseRepository:
    """Common read and write operations on one collection.

    Args:
        database: The connected database handle.
        collection_name: Name of the collection this repository manages.

    Example:
        class PriceRepository(BaseRepository):
            def __init__(self, database: AsyncDatabase[Document]) -> None:
                super().__init__(database, "Price")
    """

    def __init__(self, database: AsyncDatabase[Document], collection_name: str) -> None:
        self.collection: AsyncCollection[Document] = database[collection_name]
        self.collection_name = collection_name
        logger.debug("Initialized repository for {}", collection_name)

    def _failure(self, operation: str, error: PyMongoError) -> InternalError:
        """Build the error raised when a driver call fails."""
        logger.error(
            "Database {} failed on {}: {}",
            operation,
            self.collection_name,
            error,
        )
        return InternalError(
            f"Database {operation} failed",
            context={"collection": self.collection_name, "operation": operation},
            cause=error,
        )

    async def count(self, query: QueryFilter) -> int:
        """Count documents matching a filter.

        Args:
            query: MongoDB filter.

        Returns:
            int: Number of matching documents.
        """
        with trace_operation("mongo.count", collection=self.collection_name):
            try:
                return await self.collection.count_documents(query)
            except PyMongoError as e:
                raise self._failure("count", e) from e

    async def find(
        self,
        query: QueryFilter,
        projection: Projection | None = None,
        *,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        """Fetch documents in the store's natural order.

        Args:
            query: MongoDB filter.
            projection: Inclusion projection, or None for whole documents.
            skip: Number of documents to skip.
            limit: Maximum number of documents, 0 for no limit.

        Returns:
            list[Document]: Serialized documents.
        """
        logger.debug(
            "Fetching {} - skip: {}, limit: {}", self.collection_name, skip, limit
        )
        with trace_operation(
            "mongo.find", collection=self.collection_name, skip=skip, limit=limit
        ):
            try:
                cursor = self.collection.find(query, projection).skip(skip).limit(limit)
                documents = await cursor.to_list()
            except PyMongoError as e:
                raise self._failure("find", e) from e

        return [serialize_document(document) for document in documents]

    async def find_page(
        self,
        query: QueryFilter,
        projection: Projection | None,
        window: PageWindow,
    ) -> tuple[int, list[Document]]:
        """Count the filter and fetch one page window of it.

        Args:
            query: MongoDB filter.
            projection: Inclusion projection, or None for whole documents.
            window: Page window to fetch.

        Returns:
            tuple[int, list[Document]]: Total matches and the page's documents.
        """
        total = await self.count(query)
        documents = await self.find(
            query, projection, skip=window.skip, limit=window.limit
        )
        return total, documents

    async def insert(self, document: Mapping[str, Any]) -> str:
        """Insert a document.

        Args:
            document: Fields of the new document.

        Returns:
            str: The database-assigned identifier.
        """
        with trace_operation("mongo.insert", collection=self.collection_name):
            try:
                result = await self.collection.insert_one(dict(document))
            except PyMongoError as e:
                raise self._failure("insert", e) from e

        logger.info(
            "Created {} document with ID: {}", self.collection_name, result.inserted_id
        )
        return str(result.inserted_id)

    async def update_fields(
        self, document_id: ObjectId, fields: Mapping[str, Any]
    ) -> bool:
        """Set the given fields on one document.

        Existence is decided by the matched count, so an update that leaves
        the document unchanged still counts as found.

        Args:
            document_id: Identifier of the document to update.
            fields: Fields to set.

        Returns:
            bool: True if the document exists, False otherwise.
        """
        with trace_operation("mongo.update", collection=self.collection_name):
            try:
                result = await self.collection.update_one(
                    {"_id": document_id}, {"$set": dict(fields)}
                )
            except PyMongoError as e:
                raise self._failure("update", e) from e

        if result.matched_count == 0:
            logger.debug(
                "{} document not found for update - ID: {}",
                self.collection_name,
                document_id,
            )
            return False

        logger.info(
            "Updated {} document ID {} - fields: {}",
            self.collection_name,
            document_id,
            list(fields.keys()),
        )
        return True
