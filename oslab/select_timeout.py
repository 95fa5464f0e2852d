"""Timeouts and races between awaitables."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_ms: int) -> Optional[T]:
    """Return the result of ``awaitable`` if it finishes within ``timeout_ms``.

    Returns None if the time runs out first; the awaitable is then cancelled.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout_ms / 1000)
    except asyncio.TimeoutError:
        return None


async def race(first: Awaitable[T], second: Awaitable[T]) -> T:
    """Return the result of whichever awaitable finishes first.

    The other one is cancelled. If both finish together, ``first`` wins.
    """
    contenders = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    try:
        done, _ = await asyncio.wait(
            contenders, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        losers = [task for task in contenders if not task.done()]
        for task in losers:
            task.cancel()
        await asyncio.gather(*losers, return_exceptions=True)
    winner = next(task for task in contenders if task in done)
    return winner.result()