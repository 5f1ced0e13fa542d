"""MongoDB client lifecycle management.

One ``DatabaseClient`` is created per application in the lifespan handler,
connected before the server accepts requests, and stored on ``app.state``.
Request handlers receive the database handle through dependency injection
rather than a module-level global.

- **Fail fast**: the connect step pings the server and raises
  ``DatabaseConnectionError`` when it is unreachable
- **Timeouts**: server selection and per-operation timeouts come from settings
- **Health checks**: ``check_connection`` backs the /health endpoint
"""

from loguru import logger
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.core.config import DatabaseConfig
from src.core.exceptions import DatabaseConnectionError
from src.core.types import Document


class DatabaseClient:
    """Owns the process-wide MongoDB client.

    Args:
        config: Database configuration.

    Example:
        client = DatabaseClient(settings.database_config)
        database = await client.connect()
        ...
        await client.close()
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self._client: AsyncMongoClient[Document] | None = None
        self._database: AsyncDatabase[Document] | None = None

    @property
    def is_connected(self) -> bool:
        """Whether ``connect`` has completed successfully."""
        return self._database is not None

    @property
    def database(self) -> AsyncDatabase[Document]:
        """The connected database handle.

        Raises:
            DatabaseConnectionError: If called before ``connect`` succeeded.
        """
        if self._database is None:
            msg = "Database accessed before a connection was established"
            raise DatabaseConnectionError(msg)
        return self._database

    async def connect(self) -> AsyncDatabase[Document]:
        """Open the client and verify the server answers a ping.

        Returns:
            AsyncDatabase[Document]: The database handle.

        Raises:
            DatabaseConnectionError: If the URL is unusable or the server
                cannot be reached within the selection timeout.
        """
        client: AsyncMongoClient[Document] | None = None
        try:
            client = AsyncMongoClient(
                self.config.database_url,
                serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
                timeoutMS=self.config.operation_timeout_ms,
                tz_aware=True,
            )
            if self.config.database_name:
                database = client.get_database(self.config.database_name)
            else:
                database = client.get_default_database()
            await client.admin.command("ping")
        except PyMongoError as e:
            if client is not None:
                await client.close()
            msg = f"Could not connect to MongoDB: {e}"
            raise DatabaseConnectionError(msg, cause=e) from e

        self._client = client
        self._database = database
        logger.info("Database connected - database: {}", database.name)
        return database

    async def check_connection(self) -> tuple[bool, str | None]:
        """Check that the server still answers.

        Returns:
            tuple[bool, str | None]: Health flag and the error message when
                unhealthy.
        """
        if self._client is None:
            return False, "Database client is not connected"
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            return False, str(e)
        return True, None

    async def close(self) -> None:
        """Close the client and forget the handle."""
        if self._client is not None:
            await self._client.close()
            logger.info("Database client closed")
        self._client = None
        self._database = None
