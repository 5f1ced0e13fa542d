"""Image folder listing.

The files themselves are served by the ``/images`` static mount registered
in ``src.api.main``; this router only lists them.
"""

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from src.api.dependencies import AppSettings
from src.infrastructure.images import list_image_directories

router = APIRouter(tags=["images"])


@router.get("/images")
async def list_images(settings: AppSettings) -> dict[str, list[dict[str, str]]]:
    """Map each image folder to its files and their URLs."""
    return await run_in_threadpool(list_image_directories, settings.images_dir)
