import pytest
from pymongo import MongoClient
from pymongo.errors import ServerSelectionTimeoutError

from pagepolicy import PaginationPolicy, disable_tracing


def _by_id(item: dict) -> int:
    return item["id"]


@pytest.fixture
def twelve_items() -> list[dict]:
    """Items 1..12 keyed by ``id``, in ordering-key order."""
    return [{"id": i, "name": f"item_{i:03d}"} for i in range(1, 13)]


@pytest.fixture
def page_policy() -> PaginationPolicy:
    return PaginationPolicy(default_page_size=5, max_page_size=10)


@pytest.fixture
def offset_policy() -> PaginationPolicy:
    return PaginationPolicy(style="limit_offset", default_page_size=5, max_page_size=10)


@pytest.fixture
def cursor_policy() -> PaginationPolicy:
    return PaginationPolicy(
        style="cursor", default_page_size=5, max_page_size=10, ordering_key=_by_id
    )


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    disable_tracing()
    yield
    disable_tracing()


@pytest.fixture
def mongo_collection():
    """A scratch collection on the local MongoDB server, dropped afterwards.

    Tests that use it are skipped when no server is reachable.
    """
    client = MongoClient("mongodb://localhost:27017", serverSelectionTimeoutMS=500)
    try:
        client.admin.command("ping")
    except ServerSelectionTimeoutError:
        client.close()
        pytest.skip("MongoDB is not reachable on localhost:27017")
    db = client["pagepolicy_test"]
    collection = db["items"]
    collection.drop()
    yield collection
    db.drop_collection("items")
    client.close()
