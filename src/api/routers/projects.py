"""Projects listing."""

from typing import Annotated

from fastapi import APIRouter, Query
from loguru import logger

from src.api.dependencies import Pagination
from src.api.schemas.pagination import PageResponse
from src.domain.localization import project_query
from src.infrastructure.database import ProjectRepository

router = APIRouter(tags=["projects"])


@router.get("/projects", response_model=PageResponse)
async def list_projects(
    repository: ProjectRepository,
    window: Pagination,
    lang: Annotated[str | None, Query(description="Language code (en, ru)")] = None,
) -> PageResponse:
    """List projects that have a title in the requested language.

    Each result carries ``title`` (from ``title-<lang>``), ``description`` and
    ``images``. Unknown languages fall back to Russian.
    """
    query = project_query(lang)
    total, documents = await repository.find_page(
        query.filter, query.projection, window
    )
    logger.debug(
        "Listed projects - language: {}, total: {}, returned: {}",
        query.language,
        total,
        len(documents),
    )
    return PageResponse.build(window, total, [query.reshape(d) for d in documents])
