from pagepolicy.cursors.codec import (
    CursorPosition,
    CursorCodec,
    Base64CursorCodec,
    FernetCursorCodec,
    generate_cursor_key,
    codec_from_settings,
)

__all__ = [
    "CursorPosition",
    "CursorCodec",
    "Base64CursorCodec",
    "FernetCursorCodec",
    "generate_cursor_key",
    "codec_from_settings",
]
