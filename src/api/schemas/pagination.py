"""Response models for paginated listings."""

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from src.domain.pagination import PageWindow

CURSOR_FIELDS = ("next", "previous")


class PageCursor(BaseModel):
    """Query parameters that select a neighbouring page."""

    page: int = Field(..., ge=1, examples=[2])
    limit: int = Field(..., ge=1, examples=[20])

    @classmethod
    def from_window(cls, window: PageWindow | None) -> "PageCursor | None":
        """Build a cursor from a page window, passing None through."""
        if window is None:
            return None
        return cls(page=window.page, limit=window.limit)


class PageResponse(BaseModel):
    """One page of a listing with the total match count.

    ``next`` and ``previous`` are only present when such a page exists.
    """

    total: int = Field(..., ge=0, description="Documents matching the filter")
    results: list[dict[str, Any]] = Field(
        default_factory=list, description="Documents of this page"
    )
    next: PageCursor | None = Field(default=None, description="Following page")
    previous: PageCursor | None = Field(default=None, description="Preceding page")

    @model_serializer(mode="wrap")
    def _omit_missing_cursors(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        # Documents in results may hold nulls, so exclude_none is not an option
        data: dict[str, Any] = handler(self)
        for key in CURSOR_FIELDS:
            if data.get(key) is None:
                data.pop(key, None)
        return data

    @classmethod
    def build(
        cls, window: PageWindow, total: int, results: list[dict[str, Any]]
    ) -> "PageResponse":
        """Assemble a page and its cursor hints."""
        return cls(
            total=total,
            results=results,
            next=PageCursor.from_window(window.next_page(total)),
            previous=PageCursor.from_window(window.previous_page()),
        )
