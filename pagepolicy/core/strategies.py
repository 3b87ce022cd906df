"""Pagination strategies.

Each strategy is a plain function with the same contract::

    strategy(result_set, request, settings, codec) -> PageResult

and is selected by the type of the request (see ``STRATEGIES``).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable

from pagepolicy.core.result_set import ResultSet
from pagepolicy.cursors.codec import CursorCodec, CursorPosition
from pagepolicy.utils.exceptions import (
    InvalidCursor,
    InvalidOffset,
    InvalidPage,
    InvalidPageSize,
    PaginationConfigError,
)
from pagepolicy.utils.pagination import (
    CursorRequest,
    LimitOffsetRequest,
    PageNumberRequest,
    PageRequest,
    PageResult,
    PaginationStyle,
)
from pagepolicy.utils.settings import PaginationSettings
from pagepolicy.utils.types import NavParams, merge_params

logger = logging.getLogger(__name__)


def effective_size(requested: int | None, settings: PaginationSettings, param: str) -> int:
    """Resolve the page size for a request.

    Args:
        requested: Client-supplied size, or None
        settings: Policy settings
        param: Parameter name, for error reporting

    Returns:
        ``default_page_size`` when nothing was requested, otherwise the
        requested size clamped to ``max_page_size``

    Raises:
        InvalidPageSize: If the requested size is below 1
    """
    if requested is None:
        return settings.default_page_size
    if requested < 1:
        raise InvalidPageSize(f"{param} must be >= 1", param=param, value=requested)
    return min(requested, settings.max_page_size)


def paginate_page_number(
    result_set: ResultSet,
    request: PageNumberRequest,
    settings: PaginationSettings,
    codec: CursorCodec | None = None,
) -> PageResult:
    """Return items ``[(page - 1) * size, page * size)``."""
    page_param = settings.page_number_param_name
    size_param = settings.page_size_param_name
    size = effective_size(request.size, settings, size_param)

    count = result_set.count()
    total_pages = math.ceil(count / size) if count > 0 else 0
    # An empty result set still has one (empty) page
    last_page = max(total_pages, 1)

    if request.last:
        page = last_page
    else:
        page = request.page if request.page is not None else 1
    if page < 1:
        raise InvalidPage("page must be >= 1", param=page_param, value=page)

    if page > last_page:
        if settings.out_of_range == "error":
            raise InvalidPage(
                f"Page {page} is out of range; the last page is {last_page}.",
                param=page_param,
                value=page,
            )
        items: list[Any] = []
    else:
        items = result_set.slice((page - 1) * size, page * size)

    base = merge_params(**{size_param: request.size and size})
    next_params = merge_params(base, **{page_param: page + 1}) if page < total_pages else None
    previous_params = (
        merge_params(base, **{page_param: min(page - 1, last_page)}) if page > 1 else None
    )

    return PageResult(
        items=items,
        style=PaginationStyle.PAGE_NUMBER,
        page_size=size,
        next=next_params,
        previous=previous_params,
        count=count if settings.include_count else None,
        page=page,
        total_pages=total_pages,
    )


def paginate_limit_offset(
    result_set: ResultSet,
    request: LimitOffsetRequest,
    settings: PaginationSettings,
    codec: CursorCodec | None = None,
) -> PageResult:
    """Return items ``[offset, offset + limit)``; past the end is an empty page."""
    limit_param = settings.limit_param_name
    offset_param = settings.offset_param_name
    limit = effective_size(request.limit, settings, limit_param)
    offset = request.offset
    if offset < 0:
        raise InvalidOffset("offset must be >= 0", param=offset_param, value=offset)

    count = result_set.count()
    items = result_set.slice(offset, offset + limit) if offset < count else []

    base = merge_params(**{limit_param: limit})
    next_params = None
    if offset + limit < count:
        next_params = merge_params(base, **{offset_param: offset + limit})
    previous_params = None
    if offset > 0:
        previous_offset = max(offset - limit, 0)
        previous_params = merge_params(base, **{offset_param: previous_offset or None})

    return PageResult(
        items=items,
        style=PaginationStyle.LIMIT_OFFSET,
        page_size=limit,
        next=next_params,
        previous=previous_params,
        count=count if settings.include_count else None,
        offset=offset,
        limit=limit,
    )


def paginate_cursor(
    result_set: ResultSet,
    request: CursorRequest,
    settings: PaginationSettings,
    codec: CursorCodec | None = None,
) -> PageResult:
    """Return the ``limit`` items strictly after (or before) the cursor key.

    The total count is never computed, so a live result set can change
    between requests without breaking traversal as long as the cursor
    key is still meaningful in the ordering.
    """
    if codec is None:
        raise PaginationConfigError("Cursor pagination requires a cursor codec")

    cursor_param = settings.cursor_param_name
    limit_param = settings.limit_param_name
    limit = effective_size(request.limit, settings, limit_param)
    position = request.position or CursorPosition()
    base = merge_params(**{limit_param: request.limit and limit})

    def link(key: Any, reverse: bool) -> NavParams:
        token = codec.encode(CursorPosition(key=key, reverse=reverse))
        return merge_params(base, **{cursor_param: token})

    def fetch(method: Callable[[Any, int], list[Any]], key: Any, n: int) -> list[Any]:
        try:
            return method(key, n)
        except TypeError as e:
            # Decoded key cannot be compared with the ordering keys
            logger.debug(f"Cursor key {key!r} does not fit the ordering: {e}")
            raise InvalidCursor(param=cursor_param, value=key) from e

    next_params: NavParams | None = None
    previous_params: NavParams | None = None

    if not position.reverse:
        rows = fetch(result_set.after, position.key, limit + 1)
        items = rows[:limit]
        if len(rows) > limit:
            next_params = link(result_set.key_of(items[-1]), reverse=False)
        if position.key is not None:
            if items:
                if result_set.before(result_set.key_of(items[0]), 1):
                    previous_params = link(result_set.key_of(items[0]), reverse=True)
            elif result_set.before(None, 1):
                # Nothing after the cursor: the previous page is the tail
                previous_params = link(None, reverse=True)
    else:
        rows = fetch(result_set.before, position.key, limit + 1)
        items = rows[-limit:]
        if len(rows) > limit:
            previous_params = link(result_set.key_of(items[0]), reverse=True)
        if items:
            if result_set.after(result_set.key_of(items[-1]), 1):
                next_params = link(result_set.key_of(items[-1]), reverse=False)
        elif result_set.after(None, 1):
            next_params = link(None, reverse=False)

    return PageResult(
        items=items,
        style=PaginationStyle.CURSOR,
        page_size=limit,
        next=next_params,
        previous=previous_params,
        limit=limit,
    )


Strategy = Callable[..., PageResult]

STRATEGIES: dict[type, Strategy] = {
    PageNumberRequest: paginate_page_number,
    LimitOffsetRequest: paginate_limit_offset,
    CursorRequest: paginate_cursor,
}


def compute(
    result_set: ResultSet,
    request: PageRequest,
    settings: PaginationSettings,
    codec: CursorCodec | None = None,
) -> PageResult:
    """Dispatch ``request`` to the strategy matching its type."""
    try:
        strategy = STRATEGIES[type(request)]
    except KeyError:
        raise PaginationConfigError(
            f"Unsupported page request type: {type(request).__name__}"
        )
    return strategy(result_set, request, settings, codec)
