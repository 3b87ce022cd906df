"""Settings resolution utilities for pagination policies."""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError, model_validator

from pagepolicy.utils.exceptions import PaginationConfigError
from pagepolicy.utils.pagination import PaginationStyle
from pagepolicy.utils.types import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


class PaginationSettings(BaseModel):
    """Per-policy configuration.

    Size bounds are validated on construction; parameter names are free
    so the policy can sit behind any query-string convention.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    style: PaginationStyle = PaginationStyle.PAGE_NUMBER
    default_page_size: PositiveInt = DEFAULT_PAGE_SIZE
    max_page_size: PositiveInt = MAX_PAGE_SIZE

    page_size_param_name: str = "page_size"
    page_number_param_name: str = "page"
    limit_param_name: str = "limit"
    offset_param_name: str = "offset"
    cursor_param_name: str = "cursor"

    last_page_strings: tuple[str, ...] = ("last",)
    out_of_range: Literal["error", "empty"] = "error"
    include_count: bool = True

    # Required for cursor pagination of plain sequences; must return a
    # unique key per item
    ordering_key: Optional[Callable[[Any], Any]] = None
    cursor_secret: Optional[str] = Field(default=None, repr=False)
    cursor_ttl: Optional[PositiveInt] = None

    @model_validator(mode="after")
    def check_bounds(self) -> PaginationSettings:
        if self.max_page_size < self.default_page_size:
            raise ValueError(
                f"max_page_size ({self.max_page_size}) must be >= "
                f"default_page_size ({self.default_page_size})"
            )
        names = [
            self.page_size_param_name,
            self.page_number_param_name,
            self.limit_param_name,
            self.offset_param_name,
            self.cursor_param_name,
        ]
        if any(not name for name in names):
            raise ValueError("query parameter names must be non-empty")
        return self


class SettingsResolver:
    """Builds PaginationSettings from the supported configuration sources."""

    @staticmethod
    def resolve(source: Any = None, **overrides: Any) -> PaginationSettings:
        """Resolve settings from an instance, a mapping, or a class.

        Args:
            source: None, a PaginationSettings, a mapping of options, or a
                class carrying an inner ``Pagination`` class
            **overrides: Options that take precedence over ``source``

        Returns:
            Validated settings

        Raises:
            PaginationConfigError: If the combined options are invalid
        """
        if isinstance(source, PaginationSettings):
            if not overrides:
                return source
            options = source.model_dump()
        elif source is None:
            options = {}
        elif isinstance(source, Mapping):
            options = dict(source)
        else:
            options = SettingsResolver.get_class_options(source)

        options.update(overrides)
        try:
            return PaginationSettings(**options)
        except ValidationError as e:
            logger.error(f"Invalid pagination settings: {e}")
            raise PaginationConfigError(f"Invalid pagination settings: {e}") from e

    @staticmethod
    def get_class_options(cls: type) -> dict[str, Any]:
        """Read public attributes of ``cls.Pagination`` as options.

        Args:
            cls: Class with an optional inner Pagination class

        Returns:
            Option mapping (empty when no Pagination class is declared)
        """
        inner = getattr(cls, "Pagination", None)
        if inner is None:
            return {}
        options: dict[str, Any] = {}
        for name in PaginationSettings.model_fields:
            if name in vars(inner):
                value = vars(inner)[name]
                # Read raw attributes so functions are not bound as methods
                if isinstance(value, staticmethod):
                    value = value.__func__
                options[name] = value
        return options
