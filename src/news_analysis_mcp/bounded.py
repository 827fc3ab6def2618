"""Deadline race for external model calls.

The call runs as its own task and is awaited through ``asyncio.shield``,
so when the deadline wins the caller stops waiting while the call keeps
running to completion in the background. Its late result is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .errors import AnalysisTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0

# Strong references to abandoned calls until they settle.
_abandoned: set[asyncio.Task] = set()


def _abandon(task: asyncio.Task) -> None:
    _abandoned.add(task)
    task.add_done_callback(_discard_late_result)


def _discard_late_result(task: asyncio.Task) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned call failed after its deadline: %s", exc)
    else:
        logger.debug("Abandoned call finished after its deadline; result discarded")


async def bounded_call(
    coro_factory: Callable[[], Awaitable[T]],
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> T:
    """Await ``coro_factory()`` for at most *timeout_seconds*.

    Args:
        coro_factory: Zero-arg callable returning the awaitable to race.
        timeout_seconds: Deadline in seconds.

    Returns:
        The call's result when it finishes first.

    Raises:
        AnalysisTimeoutError: If the deadline fires first.
        Exception: Whatever the call itself raised, unchanged.
    """
    task = asyncio.ensure_future(coro_factory())
    try:
        return await asyncio.wait_for(asyncio.shield(task), timeout_seconds)
    except asyncio.TimeoutError:
        if task.done() and not task.cancelled():
            # Settled in the tick the deadline fired, or raised TimeoutError itself.
            return task.result()
        _abandon(task)
        logger.warning("Model call exceeded %.0fs deadline; abandoning it", timeout_seconds)
        raise AnalysisTimeoutError(timeout_seconds) from None
    except asyncio.CancelledError:
        if not task.done():
            _abandon(task)
        raise


def pending_count() -> int:
    """Number of abandoned calls still running."""
    return len(_abandoned)
