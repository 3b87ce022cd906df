from __future__ import annotations

import logging
from typing import Any, Callable

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

logger = logging.getLogger(__name__)


class MongoResultSet:
    """ResultSet over a live pymongo collection.

    Positional strategies translate to ``skip``/``limit``. Cursor
    traversal filters on the ordering field with ``$gt``/``$lt``, so
    documents inserted or deleted outside the current window never shift
    a cursor. The ordering field must hold unique values (``_id`` does).

    Args:
        collection: pymongo Collection to read from
        filter: Base MongoDB filter applied to every read
        ordering_field: Field that defines the total order
        projection: Optional projection; the ordering field is always kept
        document_factory: Optional callable applied to every raw document
    """

    def __init__(
        self,
        collection: Collection,
        filter: dict[str, Any] | None = None,
        ordering_field: str = "_id",
        projection: dict[str, int] | None = None,
        document_factory: Callable[[dict[str, Any]], Any] | None = None,
    ) -> None:
        self._collection = collection
        self._filter: dict[str, Any] = filter or {}
        self._ordering_field = ordering_field
        self._projection = None
        if projection:
            self._projection = {**projection, ordering_field: 1}
        self._factory = document_factory

    def count(self) -> int:
        return self._collection.count_documents(self._filter)

    def slice(self, start: int, stop: int) -> list[Any]:
        if stop <= start:
            return []
        cursor = (
            self._collection.find(self._filter, self._projection)
            .sort(self._ordering_field, ASCENDING)
            .skip(start)
            .limit(stop - start)
        )
        return self._wrap(cursor)

    def key_of(self, item: Any) -> Any:
        if isinstance(item, dict):
            return item[self._ordering_field]
        # Documents built by document_factory expose "_id" as "id"
        attr = "id" if self._ordering_field == "_id" else self._ordering_field
        return getattr(item, attr)

    def after(self, key: Any, limit: int) -> list[Any]:
        filter_spec = self._bounded_filter("$gt", key)
        cursor = (
            self._collection.find(filter_spec, self._projection)
            .sort(self._ordering_field, ASCENDING)
            .limit(limit)
        )
        return self._wrap(cursor)

    def before(self, key: Any, limit: int) -> list[Any]:
        filter_spec = self._bounded_filter("$lt", key)
        cursor = (
            self._collection.find(filter_spec, self._projection)
            .sort(self._ordering_field, DESCENDING)
            .limit(limit)
        )
        items = self._wrap(cursor)
        items.reverse()
        return items

    def _bounded_filter(self, op: str, key: Any) -> dict[str, Any]:
        if key is None:
            return self._filter
        bound = {self._ordering_field: {op: key}}
        if not self._filter:
            return bound
        return {"$and": [self._filter, bound]}

    def _wrap(self, cursor: Any) -> list[Any]:
        docs = list(cursor)
        logger.debug(f"Fetched {len(docs)} documents from {self._collection.name}")
        if self._factory is None:
            return docs
        return [self._factory(doc) for doc in docs]
