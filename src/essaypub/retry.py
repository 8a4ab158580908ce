"""Bounded fixed-delay retry for network operations.

Used by both the fetcher and the publisher. Retries are unconditional within
the given exception types: every failure gets the same delay, and after
``max_retries`` additional attempts the most recent error is re-raised as-is.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = structlog.get_logger()

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    event: str,
    max_retries: int,
    delay_seconds: float,
    retry_on: type[BaseException] | tuple[type[BaseException], ...],
    **context: Any,
) -> T:
    """Await ``operation()`` until it succeeds or ``max_retries`` retries are spent.

    ``event`` prefixes the log event names (``<event>_retry_scheduled``,
    ``<event>_retry_exhausted``); ``context`` is attached to every log line.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except retry_on as exc:
            if attempt >= max_retries:
                log.error(
                    f"{event}_retry_exhausted",
                    attempts=attempt + 1,
                    error=str(exc),
                    **context,
                )
                raise
            attempt += 1
            log.warning(
                f"{event}_retry_scheduled",
                attempt=attempt,
                max_retries=max_retries,
                delay_seconds=delay_seconds,
                error=str(exc),
                **context,
            )
            await asyncio.sleep(delay_seconds)
