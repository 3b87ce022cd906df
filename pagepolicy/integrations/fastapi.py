from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from fastapi import Request
from pydantic import BaseModel
from starlette.datastructures import URL

from pagepolicy.core.policy import PaginationPolicy
from pagepolicy.utils.exceptions import (
    InvalidPage,
    InvalidParameter,
    PaginationConfigError,
    PaginationError,
)
from pagepolicy.utils.pagination import PageResult
from pagepolicy.utils.settings import PaginationSettings

T = TypeVar("T")


def init_app(app: Any, settings: Any = None, **overrides: Any) -> Any:
    """Initialize a FastAPI app with a shared pagination policy.

    Sets up:
    - A PaginationPolicy on ``app.state.pagination_policy``
    - Exception handlers for pagepolicy exceptions

    Args:
        app: FastAPI application instance
        settings: Anything SettingsResolver accepts
        **overrides: Individual settings overrides
    """
    app.state.pagination_policy = PaginationPolicy(settings, **overrides)
    register_exception_handlers(app)
    return app


def register_exception_handlers(app: Any) -> None:
    """Register pagepolicy exception handlers on a FastAPI app."""
    from starlette.responses import JSONResponse

    @app.exception_handler(InvalidPage)
    async def invalid_page_handler(request: Any, exc: InvalidPage):
        return JSONResponse(status_code=404, content={"detail": str(exc), "param": exc.param})

    @app.exception_handler(InvalidParameter)
    async def invalid_parameter_handler(request: Any, exc: InvalidParameter):
        return JSONResponse(status_code=400, content={"detail": str(exc), "param": exc.param})

    @app.exception_handler(PaginationError)
    async def pagination_error_handler(request: Any, exc: PaginationError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


def managed_params(settings: PaginationSettings) -> list[str]:
    """Query parameter names owned by the policy."""
    return [
        settings.page_number_param_name,
        settings.page_size_param_name,
        settings.limit_param_name,
        settings.offset_param_name,
        settings.cursor_param_name,
    ]


def build_link(url: URL | str, params: dict[str, str] | None, managed: Iterable[str] = ()) -> str | None:
    """Turn navigation params into an absolute URL based on ``url``.

    Paging params in ``managed`` are dropped from ``url`` first so stale
    values (an old cursor, an offset that went back to 0) never leak into
    the link. Every other query parameter is preserved.
    """
    if params is None:
        return None
    if isinstance(url, str):
        url = URL(url)
    return str(url.remove_query_params(list(managed)).include_query_params(**params))


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response model for API endpoints."""

    items: list[T]
    count: Optional[int] = None
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_result(
        cls,
        result: PageResult,
        url: URL | str,
        managed: Iterable[str] = (),
    ) -> PaginatedResponse:
        managed = list(managed)
        return cls(
            items=result.items,
            count=result.count,
            next=build_link(url, result.next, managed),
            previous=build_link(url, result.previous, managed),
        )


class Paginator:
    """Pagination bound to one request.

    Obtain it with ``Depends(paginator())`` inside a route.
    """

    def __init__(self, request: Request, policy: PaginationPolicy) -> None:
        self.request = request
        self.policy = policy

    def paginate_result(self, result_set: Any) -> PageResult:
        return self.policy.paginate(result_set, self.request.query_params)

    def paginate(self, result_set: Any) -> PaginatedResponse:
        result = self.paginate_result(result_set)
        return PaginatedResponse.from_result(
            result, self.request.url, managed_params(self.policy.settings)
        )


def get_policy(request: Request) -> PaginationPolicy:
    """Return the app-wide policy installed by ``init_app``."""
    policy = getattr(request.app.state, "pagination_policy", None)
    if policy is None:
        raise PaginationConfigError("No pagination policy installed. Call init_app() first.")
    return policy


def paginator(policy: PaginationPolicy | None = None) -> Callable[[Request], Paginator]:
    """FastAPI dependency factory for a Paginator.

    Args:
        policy: Route-specific policy; defaults to the app-wide one
    """

    def dependency(request: Request) -> Paginator:
        return Paginator(request, policy or get_policy(request))

    return dependency
