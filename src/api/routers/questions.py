"""Questions listing."""

from fastapi import APIRouter

from src.api.dependencies import Pagination
from src.api.schemas.pagination import PageResponse
from src.infrastructure.database import QuestionRepository

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=PageResponse)
async def list_questions(
    repository: QuestionRepository, window: Pagination
) -> PageResponse:
    """List questions in the store's natural order."""
    total, documents = await repository.find_page({}, None, window)
    return PageResponse.build(window, total, documents)
