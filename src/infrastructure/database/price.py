"""Repository for the price list collection."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId

from src.infrastructure.constants import CREATED_AT_FIELD, UPDATED_AT_FIELD
from src.infrastructure.database.repository import BaseRepository


class PriceRepository(BaseRepository):
    """Price items, stamped with ``createdAt``/``updatedAt`` on every write."""

    async def create_item(self, fields: Mapping[str, Any]) -> str:
        """Insert a price item with equal creation and update timestamps.

        Args:
            fields: Validated item fields.

        Returns:
            str: The new item's identifier.
        """
        now = datetime.now(UTC)
        return await self.insert(
            {**fields, CREATED_AT_FIELD: now, UPDATED_AT_FIELD: now}
        )

    async def update_item(self, item_id: ObjectId, fields: Mapping[str, Any]) -> bool:
        """Apply a partial update and refresh ``updatedAt``.

        Args:
            item_id: Identifier of the item.
            fields: Only the fields supplied by the client.

        Returns:
            bool: True if the item exists.
        """
        return await self.update_fields(
            item_id, {**fields, UPDATED_AT_FIELD: datetime.now(UTC)}
        )
