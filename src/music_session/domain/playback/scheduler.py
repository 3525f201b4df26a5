"""
Timer scheduling for the playback session.

All session mutations are serialized through one re-entrant session lock.
Commands take it on the caller's thread; timer callbacks (load completions,
clock ticks) take it on the timer thread. A cancelled TimerHandle never runs,
even if it was already due when cancel() was called, because the cancelled
flag is checked after the session lock is acquired.

Two schedulers share that contract:
- ThreadScheduler: real time, one daemon timer thread
- ManualScheduler: virtual time advanced explicitly (tests, instant demos)
"""

import heapq
import itertools
import threading
import time
from typing import Callable, List, Optional, Protocol, Tuple

from loguru import logger

TimerCallback = Callable[[], None]


class TimerHandle:
    """A scheduled one-shot or repeating callback."""

    def __init__(self, deadline: float, callback: TimerCallback, interval: Optional[float] = None):
        self.deadline = deadline
        self.callback = callback
        self.interval = interval
        self.cancelled = False
        self._origin = deadline - interval if interval is not None else deadline
        self._runs = 1

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True

    def _advance(self, now: float) -> None:
        """Move a repeating handle to its next deadline after ``now``.

        Deadlines are origin + k * interval, so ticks never drift.
        """
        self._runs += 1
        self.deadline = self._origin + self._runs * self.interval
        while self.deadline <= now - self.interval:
            self._runs += 1
            self.deadline = self._origin + self._runs * self.interval


class Scheduler(Protocol):
    """What backends and the coordinator need from a scheduler."""

    lock: threading.RLock

    def now(self) -> float: ...

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle: ...

    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle: ...

    def shutdown(self) -> None: ...


class _TimerHeap:
    """Deadline-ordered heap of TimerHandles (FIFO among equal deadlines)."""

    def __init__(self):
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._heap, (handle.deadline, next(self._counter), handle))

    def peek_deadline(self) -> Optional[float]:
        self._discard_cancelled()
        return self._heap[0][0] if self._heap else None

    def pop_due(self, now: float) -> Optional[TimerHandle]:
        self._discard_cancelled()
        if self._heap and self._heap[0][0] <= now:
            return heapq.heappop(self._heap)[2]
        return None

    def clear(self) -> None:
        self._heap.clear()

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)

    def __len__(self) -> int:
        return sum(1 for _, _, handle in self._heap if not handle.cancelled)


def _run_handle(handle: TimerHandle) -> None:
    try:
        handle.callback()
    except Exception:
        logger.exception("Scheduled callback raised")


class ThreadScheduler:
    """Runs timer callbacks on one background thread, under the session lock."""

    def __init__(self, lock: Optional[threading.RLock] = None):
        self.lock = lock or threading.RLock()
        self._heap = _TimerHeap()
        self._cond = threading.Condition()
        self._running = True
        self._thread = threading.Thread(
            target=self._run, name="music-session-timers", daemon=True
        )
        self._thread.start()

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(self.now() + max(delay, 0.0), callback)
        self._schedule(handle)
        return handle

    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(self.now() + interval, callback, interval=interval)
        self._schedule(handle)
        return handle

    def _schedule(self, handle: TimerHandle) -> None:
        with self._cond:
            if not self._running:
                logger.debug("Scheduler is shut down; dropping timer")
                handle.cancel()
                return
            self._heap.push(handle)
            self._cond.notify()

    def shutdown(self, timeout: float = 2.0) -> None:
        """Stop the timer thread. Pending timers never fire."""
        with self._cond:
            self._running = False
            self._heap.clear()
            self._cond.notify()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=timeout)

    @property
    def running(self) -> bool:
        return self._running

    def _run(self) -> None:
        while True:
            with self._cond:
                if not self._running:
                    return
                handle = self._heap.pop_due(self.now())
                if handle is None:
                    deadline = self._heap.peek_deadline()
                    wait = None if deadline is None else max(deadline - self.now(), 0.0)
                    self._cond.wait(timeout=wait)
                    continue

            with self.lock:
                if handle.cancelled:
                    continue
                _run_handle(handle)

            if handle.repeating and not handle.cancelled:
                handle._advance(self.now())
                self._schedule(handle)


class ManualScheduler:
    """Virtual-clock scheduler: nothing fires until advance() is called."""

    def __init__(self, lock: Optional[threading.RLock] = None, start: float = 0.0):
        self.lock = lock or threading.RLock()
        self._heap = _TimerHeap()
        self._now = start

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(self._now + max(delay, 0.0), callback)
        self._heap.push(handle)
        return handle

    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(self._now + interval, callback, interval=interval)
        self._heap.push(handle)
        return handle

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every callback that comes due in order."""
        with self.lock:
            target = self._now + seconds
            while True:
                handle = self._heap.pop_due(target)
                if handle is None:
                    break
                self._now = max(self._now, handle.deadline)
                _run_handle(handle)
                if handle.repeating and not handle.cancelled:
                    handle._advance(self._now)
                    self._heap.push(handle)
            self._now = target

    @property
    def pending(self) -> int:
        """Number of live (uncancelled) timers."""
        return len(self._heap)

    def shutdown(self) -> None:
        self._heap.clear()
