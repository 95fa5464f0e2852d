"""Running many small tasks concurrently on the event loop."""

from __future__ import annotations

import asyncio
from typing import List


async def _square(i: int) -> int:
    return i * i


async def _sleep_then_return(task_id: int, duration_ms: int) -> int:
    await asyncio.sleep(duration_ms / 1000)
    return task_id


async def concurrent_squares(n: int) -> List[int]:
    """Compute ``i * i`` for each ``i`` in ``range(n)`` in separate tasks.

    Results are returned in order of ``i``.
    """
    tasks = [asyncio.create_task(_square(i)) for i in range(n)]
    return [await task for task in tasks]


async def parallel_sleep_tasks(n: int, duration_ms: int) -> List[int]:
    """Start ``n`` tasks that each sleep ``duration_ms`` and return their id.

    The tasks run concurrently; the ids are returned sorted.
    """
    if duration_ms < 0:
        raise ValueError("duration_ms must not be negative")
    tasks = [
        asyncio.create_task(_sleep_then_return(task_id, duration_ms))
        for task_id in range(n)
    ]
    return sorted([await task for task in tasks])