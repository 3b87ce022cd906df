from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pagepolicy import PageResult, PaginationPolicy, PaginationStyle
from pagepolicy.integrations.fastapi import (
    PaginatedResponse,
    Paginator,
    build_link,
    init_app,
    paginator,
    register_exception_handlers,
)

ITEMS = [{"id": i, "name": f"item_{i:03d}"} for i in range(1, 13)]

offset_policy = PaginationPolicy(style="limit_offset", default_page_size=5)
cursor_policy = PaginationPolicy(
    style="cursor", default_page_size=5, ordering_key=lambda item: item["id"]
)


def make_app() -> FastAPI:
    app = FastAPI()
    init_app(app, default_page_size=5, max_page_size=10)

    @app.get("/items")
    def list_items(pager: Paginator = Depends(paginator())):
        return pager.paginate(ITEMS)

    @app.get("/offset")
    def list_offset(pager: Paginator = Depends(paginator(offset_policy))):
        return pager.paginate(ITEMS)

    @app.get("/cursor")
    def list_cursor(pager: Paginator = Depends(paginator(cursor_policy))):
        return pager.paginate(ITEMS)

    return app


def ids(body: dict) -> list[int]:
    return [item["id"] for item in body["items"]]


def test_page_number_endpoint():
    client = TestClient(make_app())
    resp = client.get("/items", params={"page": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert ids(body) == [6, 7, 8, 9, 10]
    assert body["count"] == 12
    assert body["next"] == "http://testserver/items?page=3"
    assert body["previous"] == "http://testserver/items?page=1"


def test_other_query_params_are_preserved():
    client = TestClient(make_app())
    body = client.get("/items?sort=name&page=1&page_size=4").json()
    assert body["next"] == "http://testserver/items?sort=name&page_size=4&page=2"
    assert body["previous"] is None


def test_limit_offset_endpoint():
    client = TestClient(make_app())
    body = client.get("/offset?limit=5&offset=5").json()
    assert ids(body) == [6, 7, 8, 9, 10]
    assert body["previous"] == "http://testserver/offset?limit=5"
    assert body["next"] == "http://testserver/offset?limit=5&offset=10"


def test_cursor_endpoint_follows_links():
    client = TestClient(make_app())
    body = client.get("/cursor").json()
    assert ids(body) == [1, 2, 3, 4, 5]
    assert body["count"] is None
    seen = ids(body)
    while body["next"]:
        body = client.get(body["next"]).json()
        seen.extend(ids(body))
    assert seen == list(range(1, 13))


def test_invalid_page_is_404():
    client = TestClient(make_app())
    resp = client.get("/items", params={"page": 0})
    assert resp.status_code == 404
    assert resp.json() == {"detail": "page must be >= 1", "param": "page"}


def test_out_of_range_page_is_404():
    client = TestClient(make_app())
    resp = client.get("/items", params={"page": 4})
    assert resp.status_code == 404
    assert "out of range" in resp.json()["detail"]


def test_invalid_size_is_400():
    client = TestClient(make_app())
    resp = client.get("/items", params={"page_size": "lots"})
    assert resp.status_code == 400
    assert resp.json()["param"] == "page_size"


def test_invalid_cursor_is_400():
    client = TestClient(make_app())
    resp = client.get("/cursor", params={"cursor": "garbage!"})
    assert resp.status_code == 400
    assert resp.json()["param"] == "cursor"


def test_missing_policy_is_500():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/items")
    def list_items(pager: Paginator = Depends(paginator())):
        return pager.paginate(ITEMS)

    resp = TestClient(app).get("/items")
    assert resp.status_code == 500
    assert "init_app" in resp.json()["detail"]


def test_paginated_response_from_result():
    result = PageResult(
        items=[{"name": "Alice"}, {"name": "Bob"}],
        style=PaginationStyle.PAGE_NUMBER,
        page_size=2,
        next={"page": "2"},
        previous=None,
        count=3,
        page=1,
        total_pages=2,
    )
    resp = PaginatedResponse[dict].from_result(result, "http://example.com/users?page=1", ["page"])
    assert resp.items == [{"name": "Alice"}, {"name": "Bob"}]
    assert resp.count == 3
    assert resp.next == "http://example.com/users?page=2"
    assert resp.previous is None


def test_build_link():
    assert build_link("http://x/y?a=1", None) is None
    assert build_link("http://x/y?a=1&cursor=old", {"cursor": "new"}, ["cursor"]) == "http://x/y?a=1&cursor=new"
    assert build_link("http://x/y?offset=5&limit=5", {"limit": "5"}, ["offset", "limit"]) == "http://x/y?limit=5"
