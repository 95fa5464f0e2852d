"""A writer-priority read-write lock.

Many readers may hold the lock at once; a writer holds it alone. Once a
writer is waiting, no new readers are admitted until that writer has run.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")

MAX_READERS = (1 << 30) - 1


class RwLock(Generic[T]):
    """Read-write lock protecting ``data``, giving priority to writers."""

    def __init__(self, data: T) -> None:
        self._data = data
        self._cond = threading.Condition()
        self._readers = 0
        self._writer_holding = False
        self._writers_waiting = 0

    def read(self) -> "RwLockReadGuard[T]":
        """Block until no writer holds or waits, then take a shared lock."""
        with self._cond:
            self._cond.wait_for(
                lambda: not self._writer_holding
                and self._writers_waiting == 0
                and self._readers < MAX_READERS
            )
            self._readers += 1
        return RwLockReadGuard(self)

    def write(self) -> "RwLockWriteGuard[T]":
        """Announce a waiting writer, then block until the lock is free."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(
                    lambda: self._readers == 0 and not self._writer_holding
                )
            except BaseException:
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer_holding = True
        return RwLockWriteGuard(self)

    def _release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            self._cond.notify_all()

    def _release_write(self) -> None:
        with self._cond:
            self._writer_holding = False
            self._cond.notify_all()


class _HeldState:
    _held: bool

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError(f"{type(self).__name__} used after release")


class RwLockReadGuard(_HeldState, Generic[T]):
    """Shared access to the data of an :class:`RwLock`, read through ``value``."""

    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    @property
    def value(self) -> T:
        self._check_held()
        return self._lock._data

    def release(self) -> None:
        """Release the read lock. Raises RuntimeError if already released."""
        self._check_held()
        self._held = False
        self._lock._release_read()

    def __enter__(self) -> "RwLockReadGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        if self._held:
            self.release()

    def __del__(self) -> None:
        if getattr(self, "_held", False):
            self._held = False
            self._lock._release_read()


class RwLockWriteGuard(_HeldState, Generic[T]):
    """Exclusive access to the data of an :class:`RwLock` through ``value``."""

    def __init__(self, lock: RwLock[T]) -> None:
        self._lock = lock
        self._held = True

    @property
    def value(self) -> T:
        self._check_held()
        return self._lock._data

    @value.setter
    def value(self, new_value: T) -> None:
        self._check_held()
        self._lock._data = new_value

    def release(self) -> None:
        """Release the write lock. Raises RuntimeError if already released."""
        self._check_held()
        self._held = False
        self._lock._release_write()

    def __enter__(self) -> "RwLockWriteGuard[T]":
        return self

    def __exit__(self, *args) -> None:
        if self._held:
            self.release()

    def __del__(self) -> None:
        if getattr(self, "_held", False):
            self._held = False
            self._lock._release_write()