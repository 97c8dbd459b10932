"""Async single-flight helper.

Coordinates concurrent requests for the same key so only one task performs
the work while others await its outcome. The work runs in its own task:
a caller that abandons the wait (timeout, cancellation) does not cancel it,
so the remaining waiters still receive the result.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

K = TypeVar("K")
T = TypeVar("T")


def consume_future_exception(fut: asyncio.Future[Any]) -> None:
    """Avoid 'Task exception was never retrieved' for coordination tasks."""
    try:
        _ = fut.exception()
    except asyncio.CancelledError:
        return


async def singleflight_cached(
    key: K,
    *,
    lock: asyncio.Lock,
    inflight: dict[K, asyncio.Task[T]],
    cache_get: Callable[[K], T | None],
    cache_set: Callable[[K, T], None],
    work: Callable[[], Awaitable[T]],
) -> T:
    """Return cached value for key, or compute it once with single-flight.

    - If cached, returns immediately without suspending.
    - If inflight, awaits the existing task.
    - Otherwise, installs a new task running *work* and awaits it.

    Failures are never cached: the inflight entry is cleared and the
    exception propagates to every waiter.
    """
    cached = cache_get(key)
    if cached is not None:
        return cached

    async with lock:
        cached = cache_get(key)
        if cached is not None:
            return cached

        task = inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(
                _settle(key, inflight=inflight, cache_set=cache_set, work=work)
            )
            task.add_done_callback(consume_future_exception)
            inflight[key] = task

    return await asyncio.shield(task)


async def _settle(
    key: K,
    *,
    inflight: dict[K, asyncio.Task[T]],
    cache_set: Callable[[K, T], None],
    work: Callable[[], Awaitable[T]],
) -> T:
    # No await between storing and clearing: waiters see either the inflight
    # task or the cached value, never neither.
    try:
        value = await work()
        cache_set(key, value)
        return value
    finally:
        inflight.pop(key, None)
