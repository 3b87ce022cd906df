from pagepolicy.utils.exceptions import (
    PaginationError,
    PaginationConfigError,
    InvalidParameter,
    InvalidPage,
    InvalidOffset,
    InvalidCursor,
    InvalidPageSize,
)
from pagepolicy.utils.pagination import (
    PaginationStyle,
    PageRequest,
    PageNumberRequest,
    LimitOffsetRequest,
    CursorRequest,
    PageResult,
)
from pagepolicy.utils.settings import PaginationSettings, SettingsResolver
from pagepolicy.utils.types import (
    QueryParams,
    NavParams,
    OrderingKey,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    "PaginationError",
    "PaginationConfigError",
    "InvalidParameter",
    "InvalidPage",
    "InvalidOffset",
    "InvalidCursor",
    "InvalidPageSize",
    "PaginationStyle",
    "PageRequest",
    "PageNumberRequest",
    "LimitOffsetRequest",
    "CursorRequest",
    "PageResult",
    "PaginationSettings",
    "SettingsResolver",
    "QueryParams",
    "NavParams",
    "OrderingKey",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
