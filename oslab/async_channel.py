"""Producer/consumer and fan-in over a bounded asynchronous queue."""

from __future__ import annotations

import asyncio
from typing import Iterable, List

_CLOSED = object()


async def _produce(queue: asyncio.Queue, items: Iterable[str]) -> None:
    for item in items:
        await queue.put(item)


async def _close_after(queue: asyncio.Queue, producers: List[asyncio.Task]) -> None:
    try:
        await asyncio.gather(*producers)
    finally:
        await queue.put(_CLOSED)


async def _drain(queue: asyncio.Queue) -> List[str]:
    received = []
    while (item := await queue.get()) is not _CLOSED:
        received.append(item)
    return received


async def producer_consumer(items: List[str]) -> List[str]:
    """Send ``items`` one by one through a bounded queue and collect them.

    The queue holds at most ``max(len(items), 1)`` items; the result keeps
    the order in which the items were sent.
    """
    items = list(items)
    queue: asyncio.Queue = asyncio.Queue(maxsize=max(len(items), 1))
    producer = asyncio.create_task(_produce(queue, items))
    closer = asyncio.create_task(_close_after(queue, [producer]))
    received = await _drain(queue)
    await closer
    return received


async def fan_in(n_producers: int) -> List[str]:
    """Start ``n_producers`` producers each sending one message; collect them.

    Each producer sends ``"producer {id}: message"``. The messages are
    returned sorted. The queue capacity is ``n_producers``, which must be
    positive.
    """
    if n_producers <= 0:
        raise ValueError("n_producers must be positive")
    queue: asyncio.Queue = asyncio.Queue(maxsize=n_producers)
    producers = [
        asyncio.create_task(_produce(queue, [f"producer {pid}: message"]))
        for pid in range(n_producers)
    ]
    closer = asyncio.create_task(_close_after(queue, producers))
    received = await _drain(queue)
    await closer
    return sorted(received)