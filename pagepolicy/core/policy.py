from __future__ import annotations

import logging
from typing import Any, Generic, Sequence, TypeVar

from pagepolicy.core.result_set import ResultSet, SequenceResultSet
from pagepolicy.core.strategies import compute, effective_size
from pagepolicy.cursors.codec import CursorCodec, CursorPosition, codec_from_settings
from pagepolicy.lifecycle.observability import track_pagination
from pagepolicy.utils.exceptions import (
    InvalidCursor,
    InvalidOffset,
    InvalidPage,
    InvalidPageSize,
    InvalidParameter,
)
from pagepolicy.utils.pagination import (
    CursorRequest,
    LimitOffsetRequest,
    PageNumberRequest,
    PageRequest,
    PageResult,
    PaginationStyle,
)
from pagepolicy.utils.settings import PaginationSettings, SettingsResolver
from pagepolicy.utils.types import OrderingKey, QueryParams, get_param

T = TypeVar("T")

logger = logging.getLogger(__name__)

_REQUEST_STYLES: dict[type, PaginationStyle] = {
    PageNumberRequest: PaginationStyle.PAGE_NUMBER,
    LimitOffsetRequest: PaginationStyle.LIMIT_OFFSET,
    CursorRequest: PaginationStyle.CURSOR,
}


def as_result_set(source: Any, key: OrderingKey | None = None) -> ResultSet:
    """Return ``source`` if it already is a ResultSet, else wrap the sequence."""
    if isinstance(source, ResultSet):
        return source
    return SequenceResultSet(source, key=key)


class PaginationPolicy(Generic[T]):
    """Maps raw query parameters and a result set to a PageResult.

    A policy holds only immutable configuration, so one instance can be
    shared across concurrent requests.

    Example:
        policy = PaginationPolicy(style="limit_offset", max_page_size=50)
        result = policy.paginate(items, {"limit": "10", "offset": "20"})

    Cursor pagination over a plain sequence needs ``ordering_key``, a
    function returning a unique, totally ordered key per item. Result
    sets that define their own order (``MongoResultSet``) do not::

        policy = PaginationPolicy(style="cursor", ordering_key=lambda item: item["id"])
        first = policy.paginate(items, {"limit": "10"})
        second = policy.paginate(items, first.next)

    Without it, cursor pagination of a sequence raises
    PaginationConfigError.
    """

    def __init__(
        self,
        settings: Any = None,
        *,
        codec: CursorCodec | None = None,
        **overrides: Any,
    ) -> None:
        self.settings: PaginationSettings = SettingsResolver.resolve(settings, **overrides)
        self.codec: CursorCodec = codec or codec_from_settings(
            self.settings.cursor_secret, self.settings.cursor_ttl
        )

    @property
    def style(self) -> PaginationStyle:
        return self.settings.style

    # --- Parsing ---

    def parse(self, params: QueryParams) -> PageRequest:
        """Build a PageRequest for the configured style from raw query params.

        Unrecognized parameters are ignored.

        Raises:
            InvalidPage, InvalidOffset, InvalidCursor, InvalidPageSize
        """
        if self.style is PaginationStyle.PAGE_NUMBER:
            return self._parse_page_number(params)
        if self.style is PaginationStyle.LIMIT_OFFSET:
            return self._parse_limit_offset(params)
        return self._parse_cursor(params)

    def _parse_page_number(self, params: QueryParams) -> PageNumberRequest:
        name = self.settings.page_number_param_name
        size = self._parse_size(params, self.settings.page_size_param_name)
        raw = get_param(params, name)
        if raw is None:
            return PageNumberRequest(size=size)
        if raw in self.settings.last_page_strings:
            return PageNumberRequest(size=size, last=True)
        page = _parse_int(raw, name, InvalidPage)
        if page < 1:
            logger.debug(f"Rejected {name}={raw!r}: below 1")
            raise InvalidPage("page must be >= 1", param=name, value=raw)
        return PageNumberRequest(page=page, size=size)

    def _parse_limit_offset(self, params: QueryParams) -> LimitOffsetRequest:
        name = self.settings.offset_param_name
        limit = self._parse_size(params, self.settings.limit_param_name)
        raw = get_param(params, name)
        if raw is None:
            return LimitOffsetRequest(limit=limit)
        offset = _parse_int(raw, name, InvalidOffset)
        if offset < 0:
            logger.debug(f"Rejected {name}={raw!r}: negative")
            raise InvalidOffset("offset must be >= 0", param=name, value=raw)
        return LimitOffsetRequest(limit=limit, offset=offset)

    def _parse_cursor(self, params: QueryParams) -> CursorRequest:
        limit = self._parse_size(params, self.settings.limit_param_name)
        token = get_param(params, self.settings.cursor_param_name)
        if token is None:
            return CursorRequest(limit=limit)
        return CursorRequest(position=self.decode_cursor(token), limit=limit)

    def _parse_size(self, params: QueryParams, name: str) -> int | None:
        raw = get_param(params, name)
        if raw is None:
            return None
        size = _parse_int(raw, name, InvalidPageSize)
        if size < 1:
            logger.debug(f"Rejected {name}={raw!r}: below 1")
            raise InvalidPageSize(f"{name} must be >= 1", param=name, value=raw)
        return effective_size(size, self.settings, name)

    # --- Cursors ---

    def encode_cursor(self, position: CursorPosition) -> str:
        return self.codec.encode(position)

    def decode_cursor(self, token: str) -> CursorPosition:
        """Decode a cursor token, reporting failures against the cursor param."""
        try:
            return self.codec.decode(token)
        except InvalidCursor as e:
            raise InvalidCursor(param=self.settings.cursor_param_name, value=token) from e

    # --- Pagination ---

    def paginate(
        self,
        result_set: ResultSet | Sequence[T],
        params: QueryParams | PageRequest | None = None,
    ) -> PageResult[T]:
        """Compute one page.

        Args:
            result_set: A ResultSet, or a sequence to wrap with the policy's
                ordering key
            params: Raw query params, an already parsed PageRequest, or None
                for the first page with default size

        Returns:
            The page of items with navigation metadata

        Raises:
            InvalidPage, InvalidOffset, InvalidCursor, InvalidPageSize: On
                bad client input
            PaginationConfigError: If the result set cannot serve the strategy
        """
        if isinstance(params, tuple(_REQUEST_STYLES)):
            request = params
        else:
            request = self.parse(params or {})

        style = _REQUEST_STYLES[type(request)]
        with track_pagination(style.value) as ctx:
            try:
                result = compute(
                    as_result_set(result_set, self.settings.ordering_key),
                    request,
                    self.settings,
                    self.codec,
                )
            except InvalidParameter as e:
                logger.debug(f"{style.value} pagination rejected {e.param}={e.value!r}: {e}")
                raise
            ctx["page_size"] = result.page_size
            ctx["item_count"] = len(result.items)
            ctx["has_next"] = result.has_next
            ctx["has_previous"] = result.has_previous
        return result


def _parse_int(raw: str, name: str, error: type[InvalidParameter]) -> int:
    try:
        return int(raw)
    except ValueError as e:
        logger.debug(f"Rejected {name}={raw!r}: not an integer")
        raise error(f"{name} must be an integer", param=name, value=raw) from e
