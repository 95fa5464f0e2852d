"""A thread-safe unsigned 64-bit counter with compare-and-swap."""

from __future__ import annotations

import threading

_U64_MAX = (1 << 64) - 1


def _check_u64(value: int) -> int:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"value {value} does not fit in an unsigned 64-bit integer")
    return value


class CasFailed(Exception):
    """Raised when a compare-and-swap finds a value other than the expected one."""

    def __init__(self, actual: int) -> None:
        super().__init__(f"compare-and-swap failed: current value is {actual}")
        self.actual = actual


class AtomicCounter:
    """Counter whose operations are each performed atomically.

    Increment and decrement wrap around modulo 2**64, like hardware atomics.
    """

    __slots__ = ("_value", "_guard")

    def __init__(self, init: int = 0) -> None:
        self._value = _check_u64(init)
        self._guard = threading.Lock()

    def __repr__(self) -> str:
        return f"AtomicCounter({self.get()})"

    def increment(self) -> int:
        """Add one and return the value from before the increment."""
        with self._guard:
            previous = self._value
            self._value = (previous + 1) & _U64_MAX
        return previous

    def decrement(self) -> int:
        """Subtract one and return the value from before the decrement."""
        with self._guard:
            previous = self._value
            self._value = (previous - 1) & _U64_MAX
        return previous

    def get(self) -> int:
        """Return the current value."""
        with self._guard:
            return self._value

    def compare_and_swap(self, expected: int, new_val: int) -> int:
        """Store ``new_val`` if the value equals ``expected``.

        Returns the previous value on success; raises :class:`CasFailed`
        carrying the actual value otherwise.
        """
        _check_u64(new_val)
        with self._guard:
            current = self._value
            if current != expected:
                raise CasFailed(current)
            self._value = new_val
        return current

    def fetch_multiply(self, multiplier: int) -> int:
        """Multiply the value with a CAS retry loop; return the value before.

        Raises OverflowError if the product does not fit in 64 bits.
        """
        _check_u64(multiplier)
        while True:
            current = self.get()
            product = current * multiplier
            if product > _U64_MAX:
                raise OverflowError(f"{current} * {multiplier} overflows 64 bits")
            try:
                return self.compare_and_swap(current, product)
            except CasFailed:
                continue