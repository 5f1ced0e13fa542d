"""Unit tests for BaseRepository and PriceRepository."""

from datetime import UTC, datetime
from typing import Any, cast

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect
from pytest_mock import MockerFixture

from src.core.exceptions import InternalError
from src.domain.pagination import PageWindow
from src.infrastructure.database import (
    BaseRepository,
    PriceRepository,
    serialize_document,
)
from tests.unit.fixtures.test_database_fixtures import FakeDatabase


@pytest.fixture
def repository(fake_database: FakeDatabase) -> BaseRepository:
    fake_database["Items"].seed(*({"n": i, "even": i % 2 == 0} for i in range(5)))
    return BaseRepository(cast("Any", fake_database), "Items")


@pytest.mark.unit
def test_serialize_document_stringifies_object_ids() -> None:
    object_id = ObjectId()

    assert serialize_document({"_id": object_id, "ref": object_id, "n": 1}) == {
        "_id": str(object_id),
        "ref": str(object_id),
        "n": 1,
    }


@pytest.mark.unit
def test_serialize_document_converts_nested_object_ids() -> None:
    image_id, author_id = ObjectId(), ObjectId()
    created = datetime(2024, 1, 1, tzinfo=UTC)

    serialized = serialize_document(
        {
            "images": [image_id, "cover.png"],
            "meta": {"author": author_id, "links": [{"ref": image_id}]},
            "createdAt": created,
        }
    )

    assert serialized == {
        "images": [str(image_id), "cover.png"],
        "meta": {"author": str(author_id), "links": [{"ref": str(image_id)}]},
        "createdAt": created,
    }


@pytest.mark.unit
class TestBaseRepositoryReads:
    """Counting and windowed reads."""

    async def test_count(self, repository: BaseRepository) -> None:
        assert await repository.count({"even": True}) == 3

    async def test_find_with_window(self, repository: BaseRepository) -> None:
        documents = await repository.find({}, skip=1, limit=2)

        assert [d["n"] for d in documents] == [1, 2]
        assert all(isinstance(d["_id"], str) for d in documents)

    async def test_find_with_projection(self, repository: BaseRepository) -> None:
        documents = await repository.find({"n": 0}, {"n": 1})

        assert set(documents[0]) == {"_id", "n"}

    @pytest.mark.parametrize(("page", "limit"), [(1, 2), (2, 2), (3, 2), (4, 2)])
    async def test_find_page_total_ignores_window(
        self, repository: BaseRepository, page: int, limit: int
    ) -> None:
        total, documents = await repository.find_page(
            {}, None, PageWindow(page, limit)
        )

        assert total == 5
        assert [d["n"] for d in documents] == list(range(5))[
            (page - 1) * limit : page * limit
        ]


@pytest.mark.unit
class TestBaseRepositoryWrites:
    """Inserts and updates."""

    async def test_insert_returns_string_id(
        self, repository: BaseRepository, fake_database: FakeDatabase
    ) -> None:
        item_id = await repository.insert({"n": 99})

        assert fake_database["Items"].get(ObjectId(item_id)) is not None

    async def test_update_existing(
        self, repository: BaseRepository, fake_database: FakeDatabase
    ) -> None:
        document_id = fake_database["Items"].documents[0]["_id"]

        assert await repository.update_fields(document_id, {"n": 0}) is True

    async def test_update_missing(self, repository: BaseRepository) -> None:
        assert await repository.update_fields(ObjectId(), {"n": 1}) is False


@pytest.mark.unit
class TestDriverFailures:
    """Driver errors become InternalError."""

    @pytest.fixture
    def failing(self, mocker: MockerFixture) -> BaseRepository:
        collection = mocker.Mock()
        collection.count_documents = mocker.AsyncMock(side_effect=AutoReconnect("down"))
        collection.find.side_effect = AutoReconnect("down")
        collection.insert_one = mocker.AsyncMock(side_effect=AutoReconnect("down"))
        collection.update_one = mocker.AsyncMock(side_effect=AutoReconnect("down"))
        database = mocker.MagicMock()
        database.__getitem__.return_value = collection
        return BaseRepository(database, "Items")

    async def test_count_failure(self, failing: BaseRepository) -> None:
        with pytest.raises(InternalError) as exc_info:
            await failing.count({})

        assert exc_info.value.context == {"collection": "Items", "operation": "count"}
        assert isinstance(exc_info.value.cause, AutoReconnect)

    async def test_find_failure(self, failing: BaseRepository) -> None:
        with pytest.raises(InternalError, match="find failed"):
            await failing.find({})

    async def test_insert_failure(self, failing: BaseRepository) -> None:
        with pytest.raises(InternalError, match="insert failed"):
            await failing.insert({})

    async def test_update_failure(self, failing: BaseRepository) -> None:
        with pytest.raises(InternalError, match="update failed"):
            await failing.update_fields(ObjectId(), {})


@pytest.mark.unit
class TestPriceRepository:
    """Timestamps on price writes."""

    @pytest.fixture
    def prices(self, fake_database: FakeDatabase) -> PriceRepository:
        return PriceRepository(cast("Any", fake_database), "Price")

    async def test_create_sets_equal_timestamps(
        self, prices: PriceRepository, fake_database: FakeDatabase
    ) -> None:
        item_id = await prices.create_item({"title": "Kitchen"})

        stored = fake_database["Price"].get(ObjectId(item_id))
        assert stored is not None
        assert stored["createdAt"] == stored["updatedAt"]
        assert stored["createdAt"].tzinfo is UTC

    async def test_update_refreshes_updated_at(
        self, prices: PriceRepository, fake_database: FakeDatabase
    ) -> None:
        created = datetime(2024, 1, 1, tzinfo=UTC)
        (item_id,) = fake_database["Price"].seed(
            {"title": "Kitchen", "createdAt": created, "updatedAt": created}
        )

        assert await prices.update_item(item_id, {}) is True

        stored = fake_database["Price"].get(item_id)
        assert stored is not None
        assert stored["title"] == "Kitchen"
        assert stored["createdAt"] == created
        assert stored["updatedAt"] > created
