"""Pagination value objects.

The upstream paginates with `page[number]` / `page[limit]` query parameters
and reports the position of the returned page under
`response.details.page` ({current, limit, hasMore}); totals, when requested,
appear under `response.details.totals.count`.

Usage:
    cursor = PaginationCursor(page=1, limit=100)
    params = cursor.as_query()      # {"page[number]": "1", "page[limit]": "100"}
    info = PaginationFields().read(payload)
    if info.has_more:
        cursor = cursor.next()
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from payrix.core.constants import PAGE_LIMIT_MAX

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class PaginationCursor:
    """Position of one page request.

    Attributes:
        page: 1-based page number.
        limit: Page size, 1-100.

    Raises:
        ValueError: If page < 1 or limit is outside 1-100.
    """

    page: int = 1
    limit: int = PAGE_LIMIT_MAX

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page}")
        if not 1 <= self.limit <= PAGE_LIMIT_MAX:
            raise ValueError(
                f"Page limit must be between 1 and {PAGE_LIMIT_MAX}, got {self.limit}"
            )

    def next(self) -> "PaginationCursor":
        return PaginationCursor(page=self.page + 1, limit=self.limit)

    def as_query(self) -> dict[str, str]:
        return {"page[number]": str(self.page), "page[limit]": str(self.limit)}


@dataclass(frozen=True, slots=True, kw_only=True)
class PageInfo:
    """Pagination metadata read from one response.

    Every attribute is None when the response did not carry it.
    """

    current: int | None = None
    limit: int | None = None
    has_more: bool | None = None
    total_count: int | None = None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true"):
            return True
        if lowered in ("0", "false"):
            return False
    return None


@dataclass(frozen=True, slots=True, kw_only=True)
class PaginationFields:
    """Names of the pagination metadata keys.

    Defaults match the live API; override when a mock or a future API
    version names them differently.
    """

    details: str = "details"
    page: str = "page"
    current: str = "current"
    limit: str = "limit"
    has_more: str = "hasMore"
    totals: str = "totals"
    count: str = "count"

    def read(self, payload: Any) -> PageInfo:
        """Extract pagination metadata from a success payload."""
        if not isinstance(payload, dict):
            return PageInfo()
        details = payload.get(self.details)
        if not isinstance(details, dict):
            return PageInfo()

        page = details.get(self.page)
        totals = details.get(self.totals)
        if not isinstance(page, dict):
            page = {}
        if not isinstance(totals, dict):
            totals = {}

        return PageInfo(
            current=_as_int(page.get(self.current)),
            limit=_as_int(page.get(self.limit)),
            has_more=_as_bool(page.get(self.has_more)),
            total_count=_as_int(totals.get(self.count)),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Page(Generic[T]):
    """One fetched page of decoded records.

    Attributes:
        items: Records in server order.
        cursor: Cursor the page was requested with.
        has_more: Whether the upstream reported further pages (None when the
            metadata was absent).
        total_count: Total matching records, when reported.
        current: Page number the upstream reported, when present.
    """

    items: list[T]
    cursor: PaginationCursor
    has_more: bool | None = None
    total_count: int | None = None
    current: int | None = None
