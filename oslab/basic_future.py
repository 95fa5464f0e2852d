"""Hand-written awaitables that suspend a fixed number of times."""

from __future__ import annotations

from typing import Generator


class CountDown:
    """Awaitable that suspends once per unit of ``count``.

    Each time it is resumed it lowers ``count`` by one and yields control
    back to the event loop; once ``count`` reaches zero, awaiting it
    produces ``"liftoff!"``.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        self.count = count

    def __await__(self) -> Generator[None, None, str]:
        while self.count > 0:
            self.count -= 1
            # A bare yield asks the event loop to resume this task soon.
            yield
        return "liftoff!"


class YieldOnce:
    """Awaitable that suspends exactly once, then completes with None."""

    def __init__(self) -> None:
        self.yielded = False

    def __await__(self) -> Generator[None, None, None]:
        if not self.yielded:
            self.yielded = True
            yield
        return None