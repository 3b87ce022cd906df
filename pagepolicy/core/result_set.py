from __future__ import annotations

import bisect
from typing import Any, Generic, Protocol, Sequence, TypeVar, runtime_checkable

from pagepolicy.utils.exceptions import PaginationConfigError
from pagepolicy.utils.types import OrderingKey

T = TypeVar("T")


@runtime_checkable
class ResultSet(Protocol[T]):
    """An ordered collection that a policy can page through.

    Positional strategies use ``count`` and ``slice``. The cursor strategy
    only uses ``key_of``, ``after`` and ``before``, so it never needs to
    know where in the collection a key sits.
    """

    def count(self) -> int: ...

    def slice(self, start: int, stop: int) -> list[T]: ...

    def key_of(self, item: T) -> Any: ...

    def after(self, key: Any, limit: int) -> list[T]: ...

    def before(self, key: Any, limit: int) -> list[T]: ...


class SequenceResultSet(Generic[T]):
    """ResultSet over an in-memory (or lazily sliceable) sequence.

    Without ``key`` the sequence is used as-is, in its own order, and is
    never copied; only positional access is supported. With ``key`` the
    items are sorted by it and keyset lookups use binary search. Keys
    must be unique.
    """

    def __init__(self, items: Sequence[T], key: OrderingKey | None = None) -> None:
        self._key = key
        if key is None:
            self._items: Sequence[T] = items
            self._keys: list[Any] | None = None
        else:
            self._items = sorted(items, key=key)
            self._keys = [key(item) for item in self._items]

    def count(self) -> int:
        return len(self._items)

    def slice(self, start: int, stop: int) -> list[T]:
        return list(self._items[start:stop])

    def key_of(self, item: T) -> Any:
        return self._require_key()(item)

    def after(self, key: Any, limit: int) -> list[T]:
        """Return up to ``limit`` items whose key is strictly greater than ``key``."""
        keys = self._require_keys()
        start = 0 if key is None else bisect.bisect_right(keys, key)
        return list(self._items[start:start + limit])

    def before(self, key: Any, limit: int) -> list[T]:
        """Return up to ``limit`` items whose key is strictly less than ``key``.

        The items nearest to ``key`` are chosen; they come back in
        ascending order.
        """
        keys = self._require_keys()
        stop = len(keys) if key is None else bisect.bisect_left(keys, key)
        return list(self._items[max(stop - limit, 0):stop])

    def _require_key(self) -> OrderingKey:
        if self._key is None:
            raise _missing_key()
        return self._key

    def _require_keys(self) -> list[Any]:
        if self._keys is None:
            raise _missing_key()
        return self._keys

    def __len__(self) -> int:
        return self.count()


def _missing_key() -> PaginationConfigError:
    return PaginationConfigError(
        "Cursor pagination requires an ordering key. "
        "Set ordering_key on the policy or pass key= to SequenceResultSet."
    )
