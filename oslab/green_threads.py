"""A cooperative round-robin scheduler for green threads.

Each green thread runs its entry function until it calls :func:`yield_now`
or returns. Only one green thread runs at any moment; control passes
explicitly from one to the next.
"""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

Entry = Callable[[], None]


class ThreadState(enum.Enum):
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class _GreenThread:
    state: ThreadState
    entry: Optional[Entry] = None
    resume: threading.Semaphore = field(default_factory=lambda: threading.Semaphore(0))


_active: Optional["Scheduler"] = None
_active_guard = threading.Lock()


class Scheduler:
    """Round-robin scheduler; thread 0 is the caller of :meth:`run`."""

    def __init__(self) -> None:
        self._threads: List[_GreenThread] = [_GreenThread(ThreadState.RUNNING)]
        self._current = 0
        self._error: Optional[BaseException] = None

    @property
    def states(self) -> List[ThreadState]:
        """States of all threads, the main thread first."""
        return [t.state for t in self._threads]

    def spawn(self, entry: Entry) -> None:
        """Register a green thread that runs ``entry`` when first scheduled."""
        self._threads.append(_GreenThread(ThreadState.READY, entry))

    def run(self) -> None:
        """Run until every spawned thread has finished.

        If an entry raised, the first such exception is raised here once
        the other threads are done.
        """
        global _active
        with _active_guard:
            if _active is not None:
                raise RuntimeError("another scheduler is already running")
            _active = self
        try:
            while not all(t.state is ThreadState.FINISHED for t in self._threads[1:]):
                self._schedule_next()
        finally:
            with _active_guard:
                _active = None
        if self._error is not None:
            error, self._error = self._error, None
            raise error

    def _schedule_next(self) -> None:
        n = len(self._threads)
        if n <= 1:
            return
        current = self._current
        next_idx = next(
            (
                idx
                for idx in ((current + step) % n for step in range(1, n + 1))
                if self._threads[idx].state is ThreadState.READY
            ),
            None,
        )
        if next_idx is None:
            return

        me = self._threads[current]
        target = self._threads[next_idx]
        if me.state is ThreadState.RUNNING:
            me.state = ThreadState.READY
        target.state = ThreadState.RUNNING
        self._current = next_idx

        entry, target.entry = target.entry, None
        if entry is not None:
            threading.Thread(target=self._wrapper, args=(entry,), daemon=True).start()
        else:
            target.resume.release()

        if me.state is not ThreadState.FINISHED:
            me.resume.acquire()

    def _wrapper(self, entry: Entry) -> None:
        try:
            entry()
        except BaseException as exc:
            if self._error is None:
                self._error = exc
        self._threads[self._current].state = ThreadState.FINISHED
        self._schedule_next()


def yield_now() -> None:
    """Give up the processor to the next ready green thread.

    Does nothing when no scheduler is running.
    """
    scheduler = _active
    if scheduler is not None:
        scheduler._schedule_next()