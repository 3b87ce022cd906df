from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for all pagepolicy errors."""


class PaginationConfigError(PaginationError):
    """Raised when a policy or result set is configured inconsistently."""


class InvalidParameter(PaginationError):
    """Raised when a client-supplied paging parameter cannot be honoured.

    Attributes:
        param: Query parameter name that was rejected
        value: Raw value as supplied by the client
    """

    default_message = "Invalid paging parameter."

    def __init__(self, message: str | None = None, *, param: str | None = None, value: Any = None) -> None:
        super().__init__(message or self.default_message)
        self.param = param
        self.value = value


class InvalidPage(InvalidParameter):
    """Raised when a page number is malformed or out of range."""

    default_message = "Invalid page."


class InvalidOffset(InvalidParameter):
    """Raised when an offset is malformed or negative."""

    default_message = "Invalid offset."


class InvalidCursor(InvalidParameter):
    """Raised when a cursor token cannot be decoded."""

    default_message = "Invalid cursor."


class InvalidPageSize(InvalidParameter):
    """Raised when a page size or limit is malformed or not positive."""

    default_message = "Invalid page size."
