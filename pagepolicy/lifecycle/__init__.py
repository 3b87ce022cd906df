from pagepolicy.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    PaginationEvent,
    add_listener,
    remove_listener,
    track_pagination,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "PaginationEvent",
    "add_listener",
    "remove_listener",
    "track_pagination",
]
