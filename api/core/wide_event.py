"""Request-scoped wide event for canonical log lines.

RequestTimingMiddleware creates the dict at request start and emits it as a
single ``request.completed`` line at request end. Anything in between (routes,
services, repositories) may add fields:

    set_wide_event_fields(person_id=1000, person_kind="child")
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any]] = ContextVar("wide_event")


def init_wide_event() -> dict[str, Any]:
    """Start a fresh wide event for the current async context."""
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Current wide event dict, or an empty dict outside a request."""
    try:
        return _wide_event.get()
    except LookupError:
        return {}


def set_wide_event_fields(**kwargs: Any) -> None:
    """Add fields to the current wide event.

    No-op outside request context (CLI, seeding, most tests).
    """
    event = get_wide_event()
    if event:
        event.update(kwargs)


def clear_wide_event() -> None:
    _wide_event.set({})
