"""Server-side page windows.

Every paginated listing pushes skip and limit down to the store and counts
the same filter separately, so ``total`` never depends on the window.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageWindow:
    """A validated ``page``/``limit`` pair, both at least 1."""

    page: int
    limit: int

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            msg = f"page and limit must be >= 1, got page={self.page}, limit={self.limit}"
            raise ValueError(msg)

    @property
    def skip(self) -> int:
        """Number of documents before this page."""
        return (self.page - 1) * self.limit

    def next_page(self, total: int) -> "PageWindow | None":
        """The following window, if any document lies beyond this one."""
        if self.page * self.limit < total:
            return PageWindow(self.page + 1, self.limit)
        return None

    def previous_page(self) -> "PageWindow | None":
        """The preceding window, unless this is the first page."""
        if self.page > 1:
            return PageWindow(self.page - 1, self.limit)
        return None
