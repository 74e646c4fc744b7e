"""
Repeating timer services used by the movement scheduler.

Both implementations run callbacks on a single thread: ``ManualTimer`` on
whatever thread calls ``advance``, ``AsyncioTimer`` on its event loop.
"""

import asyncio
import itertools
from typing import Callable, Dict, Optional, Protocol

TimerCallback = Callable[[], None]


class TimerService(Protocol):
    def set_interval(self, callback: TimerCallback, interval_ms: int) -> object:
        ...

    def clear_interval(self, handle: Optional[object]) -> None:
        ...


class _ManualInterval:
    __slots__ = ("callback", "interval_ms", "due_ms")

    def __init__(self, callback: TimerCallback, interval_ms: int, due_ms: int):
        self.callback = callback
        self.interval_ms = interval_ms
        self.due_ms = due_ms


class ManualTimer:
    """
    A virtual clock. Nothing fires until ``advance`` moves time forward,
    which makes tick sequences fully deterministic in tests and headless runs.
    """

    def __init__(self):
        self.now_ms = 0
        self._ids = itertools.count(1)
        self._intervals: Dict[int, _ManualInterval] = {}

    @property
    def active_count(self) -> int:
        return len(self._intervals)

    def set_interval(self, callback: TimerCallback, interval_ms: int) -> int:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        handle = next(self._ids)
        self._intervals[handle] = _ManualInterval(callback, interval_ms, self.now_ms + interval_ms)
        return handle

    def clear_interval(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._intervals.pop(handle, None)

    def next_due_ms(self) -> Optional[int]:
        if not self._intervals:
            return None
        return min(interval.due_ms for interval in self._intervals.values())

    def advance(self, ms: int) -> int:
        """
        Move the clock forward by ``ms`` and fire every callback that falls due,
        in time order (creation order on ties). Callbacks may set or clear
        intervals; newly created ones fire if they fall due inside the window.

        Returns:
            number of callbacks fired
        """
        target = self.now_ms + ms
        fired = 0
        while True:
            due = [
                (interval.due_ms, handle)
                for handle, interval in self._intervals.items()
                if interval.due_ms <= target
            ]
            if not due:
                break
            due_ms, handle = min(due)
            interval = self._intervals[handle]
            self.now_ms = due_ms
            interval.due_ms += interval.interval_ms
            interval.callback()
            fired += 1
        self.now_ms = target
        return fired

    def advance_to_next(self) -> bool:
        """Jump straight to the next due callback and fire it. False when nothing is scheduled."""
        due_ms = self.next_due_ms()
        if due_ms is None:
            return False
        self.advance(due_ms - self.now_ms)
        return True


class _AsyncioInterval:
    def __init__(self, loop: asyncio.AbstractEventLoop, callback: TimerCallback, interval_ms: int):
        self._loop = loop
        self._callback = callback
        self._interval_s = interval_ms / 1000.0
        self._next_at = loop.time() + self._interval_s
        self._handle = loop.call_at(self._next_at, self._fire)
        self.cancelled = False

    def _fire(self) -> None:
        # The next tick is booked before the callback runs. Slots missed while
        # the loop was blocked are dropped, not fired back to back.
        now = self._loop.time()
        self._next_at += self._interval_s
        if self._next_at <= now:
            self._next_at = now + self._interval_s
        self._handle = self._loop.call_at(self._next_at, self._fire)
        self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        self._handle.cancel()


class AsyncioTimer:
    """Repeating timers on an asyncio event loop. Intents must be delivered on the same loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def set_interval(self, callback: TimerCallback, interval_ms: int) -> _AsyncioInterval:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        return _AsyncioInterval(self.loop, callback, interval_ms)

    def clear_interval(self, handle: Optional[_AsyncioInterval]) -> None:
        if handle is not None:
            handle.cancel()
