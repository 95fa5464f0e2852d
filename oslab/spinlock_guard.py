"""A spin lock whose guard releases the lock when it goes out of scope."""

from __future__ import annotations

import threading
import time
from typing import Generic, TypeVar

T = TypeVar("T")


class SpinLock(Generic[T]):
    """Spin lock handing out :class:`SpinGuard` objects."""

    def __init__(self, data: T) -> None:
        self._data = data
        self._flag = threading.Lock()

    def lock(self) -> "SpinGuard[T]":
        """Spin until the lock is acquired and return a guard holding it."""
        while not self._flag.acquire(blocking=False):
            time.sleep(0)
        return SpinGuard(self)


class SpinGuard(Generic[T]):
    """Holds a :class:`SpinLock`; gives access to its data through ``value``.

    Use it as a context manager so the lock is released on leaving the
    block, including when an exception is raised.
    """

    def __init__(self, lock: SpinLock[T]) -> None:
        self._lock = lock
        self._held = True

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("SpinGuard used after release")

    @property
    def value(self) -> T:
        self._check_held()
        return self._lock._data

    @value.setter
    def value(self, new_value: T) -> None:
        self._check_held()
        self._lock._data = new_value

    def release(self) -> None:
        """Release the lock. Raises RuntimeError if already released."""
        self._check_held()
        self._held = False
        self._lock._flag.release()

    def __enter__(self) -> "SpinGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        if self._held:
            self.release()

    def __del__(self) -> None:
        if getattr(self, "_held", False):
            self._held = False
            self._lock._flag.release()