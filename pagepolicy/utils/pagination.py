from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class PaginationStyle(str, Enum):
    """Selectable pagination strategies."""

    PAGE_NUMBER = "page_number"
    LIMIT_OFFSET = "limit_offset"
    CURSOR = "cursor"


@dataclass(frozen=True)
class PageNumberRequest:
    """Page-number request. ``size`` is None when the client sent no size."""

    page: int | None = None
    size: int | None = None
    last: bool = False


@dataclass(frozen=True)
class LimitOffsetRequest:
    """Limit/offset request. ``limit`` is None when the client sent no limit."""

    limit: int | None = None
    offset: int = 0


@dataclass(frozen=True)
class CursorRequest:
    """Cursor request. ``position`` is None for the first page."""

    position: Any = None
    limit: int | None = None


PageRequest = Union[PageNumberRequest, LimitOffsetRequest, CursorRequest]


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """A single page of items plus navigation metadata.

    ``next`` and ``previous`` hold the query parameters that select the
    neighbouring page, or None when there is no such page. ``count`` is
    the total number of items, or None when the strategy does not expose it.
    """

    items: list[T]
    style: PaginationStyle
    page_size: int
    next: dict[str, str] | None = None
    previous: dict[str, str] | None = None
    count: int | None = None
    page: int | None = None
    total_pages: int | None = None
    offset: int | None = None
    limit: int | None = None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    def __len__(self) -> int:
        return len(self.items)
