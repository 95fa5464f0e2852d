"""A busy-waiting lock with explicit lock and unlock calls."""

from __future__ import annotations

import threading
import time
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class SpinLock(Generic[T]):
    """Spin lock protecting ``data``.

    ``lock`` spins until the lock is free and returns the protected data;
    the holder may also rebind ``data`` directly while holding the lock.
    The holder must call ``unlock`` afterwards.
    """

    def __init__(self, data: T) -> None:
        self.data = data
        self._flag = threading.Lock()

    def lock(self) -> T:
        """Spin until the lock is acquired, then return the data."""
        while not self._flag.acquire(blocking=False):
            time.sleep(0)
        return self.data

    def unlock(self) -> None:
        """Release the lock. Raises RuntimeError if it is not held."""
        try:
            self._flag.release()
        except RuntimeError:
            raise RuntimeError("unlock of a SpinLock that is not locked") from None

    def try_lock(self) -> Optional[T]:
        """Make one attempt to acquire; return the data, or None if busy."""
        if self._flag.acquire(blocking=False):
            return self.data
        return None