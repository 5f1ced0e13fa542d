"""Price list: localized reads and password-guarded writes.

Writes take their body from ``read_payload`` and validate it inside the
handler, after ``require_write_access`` has run, so a request without the
write secret is rejected before any field is looked at.
"""

from typing import Annotated, Any

from bson import ObjectId
from fastapi import APIRouter, Depends, Query, status
from loguru import logger

from src.api.dependencies import (
    AppSettings,
    RequestPayload,
    require_write_access,
    validate_payload,
)
from src.api.schemas.price import (
    MessageResponse,
    PriceItemCreate,
    PriceItemCreated,
    PriceItemUpdate,
)
from src.core.exceptions import NotFoundError, ValidationError
from src.domain.localization import price_query
from src.infrastructure.database import PriceItems

router = APIRouter(tags=["price"])


@router.get("/price")
async def list_price_items(
    repository: PriceItems,
    settings: AppSettings,
    lang: Annotated[
        str | None,
        Query(description="Language code; omit for the stored documents as-is"),
    ] = None,
) -> list[dict[str, Any]]:
    """List up to the configured cap of price items.

    Without ``lang`` the stored documents are returned verbatim. With
    ``lang`` only items titled in that language are returned, with
    ``title`` and ``services`` taken from the localized fields.

    Raises:
        NotFoundError: If no item matches.
    """
    cap = settings.pagination_config.price_list_cap

    if lang is None:
        items = await repository.find({}, limit=cap)
    else:
        query = price_query(lang)
        documents = await repository.find(query.filter, query.projection, limit=cap)
        items = [query.reshape(document) for document in documents]

    if not items:
        msg = "No price items found"
        raise NotFoundError(msg, context={"lang": lang} if lang else None)
    return items


@router.post(
    "/price",
    status_code=status.HTTP_201_CREATED,
    response_model=PriceItemCreated,
    dependencies=[Depends(require_write_access)],
)
async def create_price_item(
    repository: PriceItems, payload: RequestPayload
) -> PriceItemCreated:
    """Create a price item.

    Raises:
        ValidationError: Naming the first invalid field; nothing is written.
    """
    item = validate_payload(PriceItemCreate, payload)
    item_id = await repository.create_item(item.model_dump())
    return PriceItemCreated(message="Price item created", item_id=item_id)


@router.put(
    "/price/{item_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_write_access)],
)
async def update_price_item(
    item_id: str, repository: PriceItems, payload: RequestPayload
) -> MessageResponse:
    """Update the supplied fields of a price item.

    Blank and missing fields are left unchanged; ``updatedAt`` is refreshed
    even when nothing else changes.

    Raises:
        ValidationError: If the identifier is malformed or a field is invalid.
        NotFoundError: If no item has the identifier.
    """
    if not ObjectId.is_valid(item_id):
        msg = "Invalid price item identifier"
        raise ValidationError(msg, field="id", context={"item_id": item_id})

    supplied = PriceItemUpdate.supplied_fields(payload)
    update = validate_payload(PriceItemUpdate, supplied)
    fields = update.model_dump(include=set(supplied))

    if not await repository.update_item(ObjectId(item_id), fields):
        msg = "Price item not found"
        raise NotFoundError(msg, context={"item_id": item_id})

    logger.info("Price item {} updated - fields: {}", item_id, sorted(fields))
    return MessageResponse(message="Price item updated")
