"""Publishing a value between threads, and a set-once cell."""

from __future__ import annotations

import threading
from typing import Optional

_U32_MAX = (1 << 32) - 1


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"value {value} does not fit in an unsigned 32-bit integer")
    return value


class FlagChannel:
    """One-slot channel: the producer stores data, then raises a ready flag.

    The consumer waits for the flag and is then guaranteed to see the data.
    """

    def __init__(self) -> None:
        self._data = 0
        self._ready = False
        self._cond = threading.Condition()

    def produce(self, value: int) -> None:
        """Store ``value`` and mark the channel ready."""
        _check_u32(value)
        with self._cond:
            self._data = value
            self._ready = True
            self._cond.notify_all()

    def consume(self) -> int:
        """Wait until the channel is ready, then return the data."""
        with self._cond:
            self._cond.wait_for(lambda: self._ready)
            return self._data

    def reset(self) -> None:
        """Clear the ready flag and the data."""
        with self._cond:
            self._ready = False
            self._data = 0


class OnceCell:
    """A cell that can be initialised exactly once."""

    def __init__(self) -> None:
        self._initialized = False
        self._value = 0
        self._guard = threading.Lock()

    def init(self, val: int) -> bool:
        """Store ``val`` if the cell is empty; return whether this call did so."""
        _check_u32(val)
        with self._guard:
            if self._initialized:
                return False
            self._initialized = True
            self._value = val
            return True

    def get(self) -> Optional[int]:
        """Return the stored value, or None if the cell is still empty."""
        with self._guard:
            return self._value if self._initialized else None