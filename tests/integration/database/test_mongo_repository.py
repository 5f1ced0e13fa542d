"""Integration tests for the repositories against a live MongoDB server."""

from datetime import UTC, datetime

import pytest
import pytest_check as check
from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase

from src.core.types import Document
from src.domain.pagination import PageWindow
from src.infrastructure.database import BaseRepository, PriceRepository


@pytest.fixture
async def repository(mongo_database: AsyncDatabase[Document]) -> BaseRepository:
    await mongo_database["Items"].insert_many(
        [
            {"n": 0, "title-en": "zero", "note": "x"},
            {"n": 1, "title-ru": "один"},
            {"n": 2, "title-en": "two", "note": None},
            {"n": 3, "title-en": "three"},
        ]
    )
    return BaseRepository(mongo_database, "Items")


@pytest.mark.integration
class TestReads:
    """Filters, projections and windows evaluated by the server."""

    async def test_count_with_exists_filter(self, repository: BaseRepository) -> None:
        assert await repository.count({"title-en": {"$exists": True}}) == 3
        assert await repository.count({"title-en": {"$exists": False}}) == 1

    async def test_field_holding_null_exists(self, repository: BaseRepository) -> None:
        assert await repository.count({"note": {"$exists": True}}) == 2

    async def test_inclusion_projection_keeps_id(
        self, repository: BaseRepository
    ) -> None:
        documents = await repository.find({"n": 0}, {"title-en": 1})

        (document,) = documents
        assert set(document) == {"_id", "title-en"}
        assert isinstance(document["_id"], str)
        assert ObjectId.is_valid(document["_id"])

    async def test_skip_and_limit_follow_natural_order(
        self, repository: BaseRepository
    ) -> None:
        documents = await repository.find({}, skip=1, limit=2)

        assert [d["n"] for d in documents] == [1, 2]

    async def test_zero_limit_returns_everything(
        self, repository: BaseRepository
    ) -> None:
        assert len(await repository.find({})) == 4

    @pytest.mark.parametrize(("page", "limit"), [(1, 2), (2, 2), (5, 2)])
    async def test_find_page_total_ignores_window(
        self, repository: BaseRepository, page: int, limit: int
    ) -> None:
        query = {"title-en": {"$exists": True}}

        total, documents = await repository.find_page(
            query, {"title-en": 1}, PageWindow(page, limit)
        )

        assert total == 3
        assert [d["title-en"] for d in documents] == ["zero", "two", "three"][
            (page - 1) * limit : page * limit
        ]

    async def test_nested_object_ids_are_strings(
        self, repository: BaseRepository, mongo_database: AsyncDatabase[Document]
    ) -> None:
        ref = ObjectId()
        await mongo_database["Items"].insert_one(
            {"n": 9, "images": [ref], "owner": {"_id": ref}}
        )

        (document,) = await repository.find({"n": 9})

        assert document["images"] == [str(ref)]
        assert document["owner"] == {"_id": str(ref)}


@pytest.mark.integration
class TestWrites:
    """Inserts and updates."""

    async def test_insert_returns_server_id(
        self, repository: BaseRepository, mongo_database: AsyncDatabase[Document]
    ) -> None:
        item_id = await repository.insert({"n": 99})

        stored = await mongo_database["Items"].find_one({"_id": ObjectId(item_id)})
        assert stored is not None
        assert stored["n"] == 99

    async def test_update_without_changes_still_matches(
        self, repository: BaseRepository, mongo_database: AsyncDatabase[Document]
    ) -> None:
        stored = await mongo_database["Items"].find_one({"n": 3})
        assert stored is not None

        assert await repository.update_fields(stored["_id"], {"n": 3}) is True

    async def test_update_missing_document(self, repository: BaseRepository) -> None:
        assert await repository.update_fields(ObjectId(), {"n": 1}) is False


@pytest.mark.integration
class TestPriceRepository:
    """Timestamps written by the price repository."""

    @pytest.fixture
    def prices(self, mongo_database: AsyncDatabase[Document]) -> PriceRepository:
        return PriceRepository(mongo_database, "Price")

    async def test_create_sets_equal_timestamps(
        self, prices: PriceRepository, mongo_database: AsyncDatabase[Document]
    ) -> None:
        item_id = await prices.create_item({"title": "Kitchen", "price": 10.0})

        stored = await mongo_database["Price"].find_one({"_id": ObjectId(item_id)})
        assert stored is not None
        check.equal(stored["title"], "Kitchen")
        check.equal(stored["createdAt"], stored["updatedAt"])
        check.is_not_none(stored["createdAt"].tzinfo)

    async def test_update_sets_fields_and_refreshes_updated_at(
        self, prices: PriceRepository, mongo_database: AsyncDatabase[Document]
    ) -> None:
        created = datetime(2024, 1, 1, tzinfo=UTC)
        result = await mongo_database["Price"].insert_one(
            {
                "title": "Kitchen",
                "price": 1.0,
                "createdAt": created,
                "updatedAt": created,
            }
        )

        assert await prices.update_item(result.inserted_id, {"price": 2.0}) is True

        stored = await mongo_database["Price"].find_one({"_id": result.inserted_id})
        assert stored is not None
        check.equal(stored["price"], 2.0)
        check.equal(stored["title"], "Kitchen")
        check.equal(stored["createdAt"], created)
        check.greater(stored["updatedAt"], created)
