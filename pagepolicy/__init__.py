from pagepolicy.core import (
    PaginationPolicy,
    ResultSet,
    SequenceResultSet,
    as_result_set,
)
from pagepolicy.cursors import (
    CursorPosition,
    CursorCodec,
    Base64CursorCodec,
    FernetCursorCodec,
    generate_cursor_key,
)
from pagepolicy.lifecycle import (
    enable_tracing,
    disable_tracing,
    PaginationEvent,
    add_listener,
    remove_listener,
)
from pagepolicy.utils import (
    PaginationError,
    PaginationConfigError,
    InvalidParameter,
    InvalidPage,
    InvalidOffset,
    InvalidCursor,
    InvalidPageSize,
    PaginationStyle,
    PageRequest,
    PageNumberRequest,
    LimitOffsetRequest,
    CursorRequest,
    PageResult,
    PaginationSettings,
    SettingsResolver,
)

__all__ = [
    # Core
    "PaginationPolicy",
    "ResultSet",
    "SequenceResultSet",
    "as_result_set",
    # Cursors
    "CursorPosition",
    "CursorCodec",
    "Base64CursorCodec",
    "FernetCursorCodec",
    "generate_cursor_key",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "PaginationEvent",
    "add_listener",
    "remove_listener",
    # Utils
    "PaginationError",
    "PaginationConfigError",
    "InvalidParameter",
    "InvalidPage",
    "InvalidOffset",
    "InvalidCursor",
    "InvalidPageSize",
    "PaginationStyle",
    "PageRequest",
    "PageNumberRequest",
    "LimitOffsetRequest",
    "CursorRequest",
    "PageResult",
    "PaginationSettings",
    "SettingsResolver",
]
