"""Cancellable scheduled tasks for timers and delayed reverts.

The engine never sleeps. Everything that happens "later" goes through a
:class:`Scheduler`, which lets the Textual UI, an asyncio loop and the tests
(via :class:`ManualScheduler`) drive the same session code.
"""

from __future__ import annotations

import asyncio
import heapq
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

__all__ = [
    "Callback",
    "TaskHandle",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "SessionTasks",
]

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TaskHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - protocol
        ...


class Scheduler(Protocol):
    """Clock plus one-shot and periodic callbacks."""

    def now(self) -> float:  # pragma: no cover - protocol
        ...

    def call_later(self, delay: float, callback: Callback) -> TaskHandle:  # pragma: no cover - protocol
        ...

    def call_every(self, period: float, callback: Callback) -> TaskHandle:  # pragma: no cover - protocol
        ...


@dataclass(order=True, slots=True)
class _ManualTask:
    due: float
    seq: int
    callback: Callback = field(compare=False)
    period: float | None = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler on a virtual clock.

    Time only moves when :meth:`advance` is called; due callbacks run in
    chronological order with the clock set to their due time.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._seq = 0
        self._queue: list[_ManualTask] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> _ManualTask:
        return self._push(self._now + max(delay, 0.0), callback, None)

    def call_every(self, period: float, callback: Callback) -> _ManualTask:
        if period <= 0:
            raise ValueError("period must be positive")
        return self._push(self._now + period, callback, period)

    def pending(self) -> int:
        """Return the number of live (not cancelled) tasks."""

        return sum(1 for task in self._queue if not task.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due."""

        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + seconds
        while self._queue and self._queue[0].due <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = task.due
            task.callback()
            if task.period is not None and not task.cancelled:
                task.due += task.period
                heapq.heappush(self._queue, task)
        self._now = target

    def _push(self, due: float, callback: Callback, period: float | None) -> _ManualTask:
        self._seq += 1
        task = _ManualTask(due=due, seq=self._seq, callback=callback, period=period)
        heapq.heappush(self._queue, task)
        return task


class _AsyncioTask:
    def __init__(self, loop: asyncio.AbstractEventLoop, callback: Callback, period: float | None) -> None:
        self._loop = loop
        self._callback = callback
        self._period = period
        self._handle: asyncio.TimerHandle | None = None
        self.cancelled = False

    def arm(self, when: float) -> None:
        self._handle = self._loop.call_at(when, self._fire, when)

    def _fire(self, when: float) -> None:
        if self.cancelled:
            return
        if self._period is not None:
            # Re-arm from the scheduled instant, not from now, to avoid drift.
            self.arm(when + self._period)
        self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        if self._loop is None:
            return time.monotonic()
        return self._loop.time()

    def call_later(self, delay: float, callback: Callback) -> _AsyncioTask:
        task = _AsyncioTask(self.loop, callback, None)
        task.arm(self.loop.time() + max(delay, 0.0))
        return task

    def call_every(self, period: float, callback: Callback) -> _AsyncioTask:
        if period <= 0:
            raise ValueError("period must be positive")
        task = _AsyncioTask(self.loop, callback, period)
        task.arm(self.loop.time() + period)
        return task


class SessionTasks:
    """Named task handles belonging to a single session.

    Callbacks are wrapped so they are dropped once the tasks are closed or the
    owning session is no longer current.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        session_id: int,
        is_current: Callable[[int], bool] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.session_id = session_id
        self._is_current = is_current
        self._handles: dict[str, TaskHandle] = {}
        self.closed = False

    def once(self, name: str, delay: float, callback: Callback) -> None:
        self._schedule(name, callback, once=True, interval=delay)

    def every(self, name: str, period: float, callback: Callback) -> None:
        self._schedule(name, callback, once=False, interval=period)

    def active(self, name: str) -> bool:
        return name in self._handles

    def names(self) -> list[str]:
        return sorted(self._handles)

    def cancel(self, *names: str) -> None:
        """Cancel the named tasks; unknown or already finished names are ignored."""

        for name in names:
            handle = self._handles.pop(name, None)
            if handle is not None:
                handle.cancel()

    def cancel_all(self) -> None:
        """Cancel everything and refuse further scheduling."""

        self.cancel(*list(self._handles))
        self.closed = True

    def _is_live(self) -> bool:
        if self.closed:
            return False
        return self._is_current is None or self._is_current(self.session_id)

    def _schedule(self, name: str, callback: Callback, *, once: bool, interval: float) -> None:
        if self.closed:
            logger.debug("session %s closed; not scheduling %s", self.session_id, name)
            return
        self.cancel(name)

        def run() -> None:
            if not self._is_live():
                logger.debug("discarding stale %s callback for session %s", name, self.session_id)
                return
            if once:
                self._handles.pop(name, None)
            callback()

        if once:
            self._handles[name] = self.scheduler.call_later(interval, run)
        else:
            self._handles[name] = self.scheduler.call_every(interval, run)
