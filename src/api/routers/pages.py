"""HTML forms for editing the price list."""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from src.api.constants import ADD_PRICE_PAGE, EDIT_PRICE_PAGE
from src.api.dependencies import AppSettings

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/add-price")
async def add_price_page(settings: AppSettings) -> FileResponse:
    return FileResponse(settings.static_dir / ADD_PRICE_PAGE, media_type="text/html")


@router.get("/edit-price")
async def edit_price_page(settings: AppSettings) -> FileResponse:
    return FileResponse(settings.static_dir / EDIT_PRICE_PAGE, media_type="text/html")
