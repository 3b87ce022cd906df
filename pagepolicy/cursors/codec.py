"""Opaque cursor tokens.

Token payload: compact JSON ``{"k": <ordering key>, "r": <0|1>}``, wrapped
in URL-safe base64 (padding stripped) or a Fernet token. Keys that JSON
cannot carry exactly are tagged as ``{"$t": <type>, "v": <text>}``:
datetimes and dates keep microseconds and UTC offset, tuples stay tuples,
and ``ObjectId``, ``UUID`` and ``Decimal`` keep their type.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Protocol, runtime_checkable
from uuid import UUID

from bson import ObjectId
from bson.errors import BSONError

from pagepolicy.utils.exceptions import InvalidCursor, PaginationConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CursorPosition:
    """A traversal point in ordering-key space.

    ``key`` is the ordering key of the item the page starts after (or
    before, when ``reverse`` is set). A None key is the start of the
    result set going forward, or its end going backward.
    """

    key: Any = None
    reverse: bool = False


@runtime_checkable
class CursorCodec(Protocol):
    """Reversible transform between CursorPosition and an opaque token."""

    def encode(self, position: CursorPosition) -> str: ...

    def decode(self, token: str) -> CursorPosition: ...


_TAGGED: dict[str, tuple[type, Callable[[str], Any]]] = {
    "dt": (datetime, datetime.fromisoformat),
    "d": (date, date.fromisoformat),
    "oid": (ObjectId, ObjectId),
    "uuid": (UUID, UUID),
    "dec": (Decimal, Decimal),
}


def _pack(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, tuple):
        return {"$t": "tuple", "v": [_pack(v) for v in value]}
    if isinstance(value, list):
        return [_pack(v) for v in value]
    # datetime is checked before its base class date
    for tag, (cls, _) in _TAGGED.items():
        if isinstance(value, cls):
            text = value.isoformat() if isinstance(value, date) else str(value)
            return {"$t": tag, "v": text}
    raise PaginationConfigError(
        f"Ordering keys of type {type(value).__name__} cannot be stored in a cursor"
    )


def _unpack(value: Any) -> Any:
    if isinstance(value, list):
        return [_unpack(v) for v in value]
    if not isinstance(value, dict):
        return value
    tag = value.get("$t")
    if tag == "tuple" and isinstance(value.get("v"), list):
        return tuple(_unpack(v) for v in value["v"])
    if tag in _TAGGED and isinstance(value.get("v"), str):
        try:
            return _TAGGED[tag][1](value["v"])
        except (ArithmeticError, BSONError) as e:
            raise ValueError(f"malformed {tag} cursor key") from e
    raise ValueError(f"unknown cursor key tag {tag!r}")


def _dump_position(position: CursorPosition) -> bytes:
    payload = {"k": _pack(position.key), "r": 1 if position.reverse else 0}
    try:
        raw = json.dumps(payload, separators=(",", ":"), allow_nan=False).encode()
    except ValueError as e:
        raise PaginationConfigError(f"Ordering key {position.key!r} cannot be stored in a cursor") from e
    if _load_position(raw) != position:
        raise PaginationConfigError(
            f"Ordering key {position.key!r} does not survive a cursor round trip"
        )
    return raw


def _load_position(raw: bytes) -> CursorPosition:
    payload = json.loads(raw.decode())
    if not isinstance(payload, dict) or "k" not in payload:
        raise ValueError("cursor payload is missing its position")
    reverse = payload.get("r", 0)
    if reverse not in (0, 1) or isinstance(reverse, bool):
        raise ValueError("cursor direction must be 0 or 1")
    return CursorPosition(key=_unpack(payload["k"]), reverse=bool(reverse))


class Base64CursorCodec:
    """Plain base64 cursor codec. Opaque to clients, but not tamper-proof."""

    def encode(self, position: CursorPosition) -> str:
        token = base64.urlsafe_b64encode(_dump_position(position)).decode()
        return token.rstrip("=")

    def decode(self, token: str) -> CursorPosition:
        # Restore base64 padding if it was stripped
        padded = token + "=" * ((4 - len(token) % 4) % 4)
        try:
            raw = base64.b64decode(padded.encode(), altchars=b"-_", validate=True)
            return _load_position(raw)
        except (ValueError, TypeError) as e:
            logger.debug(f"Rejected cursor {token!r}: {e}")
            raise InvalidCursor(param="cursor", value=token) from e


class FernetCursorCodec:
    """Encrypted, authenticated cursor codec.

    Hides the ordering key from clients and rejects tampered tokens.
    With ``ttl`` set, tokens older than ``ttl`` seconds are rejected too.
    """

    def __init__(self, key: str | bytes, ttl: int | None = None) -> None:
        from cryptography.fernet import Fernet

        if isinstance(key, str):
            key = key.encode()
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid cursor key: {e}")
            raise PaginationConfigError(f"Invalid cursor key format: {e}") from e
        self.ttl = ttl

    def encode(self, position: CursorPosition) -> str:
        return self._fernet.encrypt(_dump_position(position)).decode()

    def decode(self, token: str) -> CursorPosition:
        from cryptography.fernet import InvalidToken

        try:
            raw = self._fernet.decrypt(token.encode(), ttl=self.ttl)
            return _load_position(raw)
        except (InvalidToken, ValueError, TypeError) as e:
            logger.debug(f"Rejected cursor {token!r}: {type(e).__name__}")
            raise InvalidCursor(param="cursor", value=token) from e


def generate_cursor_key() -> str:
    """Generate a new Fernet-compatible cursor key.

    Returns:
        New key as a base64-encoded string
    """
    from cryptography.fernet import Fernet

    return Fernet.generate_key().decode()


def codec_from_settings(secret: str | None, ttl: int | None = None) -> CursorCodec:
    """Pick the Fernet codec when a secret is configured, base64 otherwise."""
    if secret:
        return FernetCursorCodec(secret, ttl=ttl)
    if ttl is not None:
        raise PaginationConfigError("cursor_ttl requires cursor_secret")
    return Base64CursorCodec()
