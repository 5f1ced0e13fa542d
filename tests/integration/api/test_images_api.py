"""Integration tests for the image listing and static image serving."""

from pathlib import Path

import pytest
from httpx import AsyncClient


@pytest.fixture
def image_tree(images_root: Path) -> Path:
    (images_root / "a").mkdir()
    (images_root / "a" / "1.png").write_bytes(b"png-bytes")
    (images_root / "b").mkdir()
    (images_root / "b" / "2.jpg").write_bytes(b"jpg-bytes")
    (images_root / "stray.txt").write_text("not a folder")
    return images_root


@pytest.mark.integration
class TestImages:
    """GET /images and GET /images/{path}."""

    @pytest.mark.usefixtures("image_tree")
    async def test_lists_folders_and_files(self, client: AsyncClient) -> None:
        response = await client.get("/images")

        assert response.status_code == 200
        assert response.json() == {
            "a": [{"name": "1.png", "url": "/images/a/1.png"}],
            "b": [{"name": "2.jpg", "url": "/images/b/2.jpg"}],
        }

    @pytest.mark.usefixtures("image_tree")
    async def test_serves_listed_file(self, client: AsyncClient) -> None:
        response = await client.get("/images/a/1.png")

        assert response.status_code == 200
        assert response.content == b"png-bytes"

    async def test_empty_root(self, client: AsyncClient) -> None:
        response = await client.get("/images")

        assert response.status_code == 200
        assert response.json() == {}

    async def test_unreadable_root_is_internal_error(
        self, client: AsyncClient, images_root: Path
    ) -> None:
        images_root.rmdir()

        response = await client.get("/images")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["message"] == "Internal Server Error"
        assert "details" not in body or body["details"] is None


@pytest.mark.integration
class TestPriceForms:
    """GET /add-price and GET /edit-price."""

    @pytest.mark.parametrize("path", ["/add-price", "/edit-price"])
    async def test_serves_html_form(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert b"<form" in response.content
