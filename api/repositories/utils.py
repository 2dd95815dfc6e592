"""Repository utility functions for common database operations."""

import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from core.logger import get_logger
from core.wide_event import set_wide_event_fields

logger = get_logger(__name__)

# Threshold for logging slow queries (milliseconds)
SLOW_QUERY_THRESHOLD_MS = 500

P = ParamSpec("P")
R = TypeVar("R")


def log_slow_query(
    operation_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to record slow repository operations and errors.

    Slow calls (over SLOW_QUERY_THRESHOLD_MS) and failures are logged and
    stamped on the request's wide event. Exceptions are re-raised.

    Usage:
        @log_slow_query("get_person_by_id")
        async def get_by_id(self, person_id: int) -> Person | None:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
                logger.warning(
                    "db.query.failed",
                    db_operation=operation_name,
                    db_duration_ms=duration_ms,
                    db_error_type=type(e).__name__,
                )
                set_wide_event_fields(
                    db_query_error=True,
                    db_operation=operation_name,
                    db_duration_ms=duration_ms,
                    db_error=str(e),
                    db_error_type=type(e).__name__,
                )
                raise

            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            if duration_ms > SLOW_QUERY_THRESHOLD_MS:
                logger.debug(
                    "db.query.slow",
                    db_operation=operation_name,
                    db_duration_ms=duration_ms,
                )
                set_wide_event_fields(
                    db_slow_query=True,
                    db_operation=operation_name,
                    db_duration_ms=duration_ms,
                )
            return result

        return wrapper

    return decorator
