"""Tracing for pagination calls.

Tracing is off until ``enable_tracing`` is called. Each traced call
produces one PaginationEvent, which is handed to registered listeners,
logged at WARNING when slower than the threshold, and mirrored as an
OpenTelemetry span when that library is installed.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

logger = logging.getLogger("pagepolicy")

Listener = Callable[["PaginationEvent"], Any]


@dataclass(frozen=True)
class PaginationEvent:
    """One traced pagination call."""

    style: str
    page_size: int | None = None
    item_count: int | None = None
    has_next: bool = False
    has_previous: bool = False
    duration_ms: float = 0.0
    error: str | None = None

    def span_attributes(self) -> dict[str, Any]:
        """Event fields as OpenTelemetry attributes, unset ones omitted."""
        attributes: dict[str, Any] = {
            "pagination.style": self.style,
            "pagination.has_next": self.has_next,
            "pagination.has_previous": self.has_previous,
            "pagination.duration_ms": self.duration_ms,
        }
        if self.page_size is not None:
            attributes["pagination.page_size"] = self.page_size
        if self.item_count is not None:
            attributes["pagination.item_count"] = self.item_count
        if self.error:
            attributes["pagination.error"] = self.error
        return attributes


class _TracingState:
    def __init__(self) -> None:
        self.enabled = False
        self.slow_ms = 100.0
        self.listeners: list[Listener] = []


_tracing = _TracingState()


def enable_tracing(slow_ms: float = 100.0) -> None:
    """Turn tracing on; calls slower than ``slow_ms`` are logged at WARNING."""
    _tracing.enabled = True
    _tracing.slow_ms = slow_ms


def disable_tracing() -> None:
    """Turn tracing off and drop every listener."""
    _tracing.enabled = False
    _tracing.slow_ms = 100.0
    _tracing.listeners.clear()


def add_listener(callback: Listener) -> None:
    _tracing.listeners.append(callback)


def remove_listener(callback: Listener) -> None:
    _tracing.listeners.remove(callback)


def _publish(event: PaginationEvent) -> None:
    if event.duration_ms > _tracing.slow_ms:
        logger.warning(
            "Slow pagination: %s page of %s items took %.1fms (threshold: %.1fms)",
            event.style,
            event.item_count,
            event.duration_ms,
            _tracing.slow_ms,
        )
    for listener in list(_tracing.listeners):
        listener(event)

    try:
        from opentelemetry import trace
    except ImportError:
        return
    tracer = trace.get_tracer("pagepolicy")
    with tracer.start_as_current_span(f"pagepolicy.{event.style}") as span:
        span.set_attributes(event.span_attributes())


@contextmanager
def track_pagination(style: str) -> Iterator[dict[str, Any]]:
    """Time one pagination call and publish a PaginationEvent for it.

    The caller fills the yielded dict with ``page_size``, ``item_count``,
    ``has_next`` and ``has_previous``. An exception is recorded on the
    event by class name and re-raised.
    """
    ctx: dict[str, Any] = {}
    if not _tracing.enabled:
        yield ctx
        return

    start = time.perf_counter()
    error: str | None = None
    try:
        yield ctx
    except Exception as e:
        error = type(e).__name__
        raise
    finally:
        _publish(
            PaginationEvent(
                style=style,
                page_size=ctx.get("page_size"),
                item_count=ctx.get("item_count"),
                has_next=ctx.get("has_next", False),
                has_previous=ctx.get("has_previous", False),
                duration_ms=(time.perf_counter() - start) * 1000,
                error=error,
            )
        )
