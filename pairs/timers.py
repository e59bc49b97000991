"""Elapsed-time and countdown timers for a session."""

from __future__ import annotations

import logging
import math
from typing import Callable, Final

from .events import CountersChanged, Notifier
from .scheduling import SessionTasks
from .state import GameMode, SessionState

__all__ = ["ELAPSED_TICK_SECONDS", "COUNTDOWN_TICK_SECONDS", "ELAPSED_TASK", "COUNTDOWN_TASK", "TimerService"]

logger = logging.getLogger(__name__)

ELAPSED_TICK_SECONDS: Final[float] = 0.25
COUNTDOWN_TICK_SECONDS: Final[float] = 1.0

ELAPSED_TASK: Final[str] = "elapsed"
COUNTDOWN_TASK: Final[str] = "countdown"


class TimerService:
    """Drive ``elapsed_seconds`` and, in time-attack, ``remaining_seconds``.

    Elapsed time is always recomputed from ``started_at`` rather than summed
    per tick, so late or skipped ticks never make the clock drift.
    """

    def __init__(
        self,
        tasks: SessionTasks,
        notify: Notifier,
        on_expired: Callable[[SessionState], None],
        *,
        elapsed_tick: float = ELAPSED_TICK_SECONDS,
        countdown_tick: float = COUNTDOWN_TICK_SECONDS,
    ) -> None:
        self.tasks = tasks
        self.notify = notify
        self.on_expired = on_expired
        self.elapsed_tick = elapsed_tick
        self.countdown_tick = countdown_tick

    def start(self, state: SessionState) -> bool:
        """Capture the start instant and schedule the ticks.

        Returns ``False`` when the timers were already started for ``state``.
        """

        if state.started_at is not None or state.ended:
            return False
        state.started_at = self.tasks.scheduler.now()
        self.tasks.every(ELAPSED_TASK, self.elapsed_tick, lambda: self.tick_elapsed(state))
        if state.config.mode is GameMode.TIME_ATTACK:
            self.tasks.every(COUNTDOWN_TASK, self.countdown_tick, lambda: self.tick_countdown(state))
        logger.debug("session %s timers started", state.session_id)
        return True

    def stop(self, state: SessionState) -> None:
        """Cancel both timers; safe to call any number of times."""

        self.tasks.cancel(ELAPSED_TASK, COUNTDOWN_TASK)
        self._recompute_elapsed(state)

    def tick_elapsed(self, state: SessionState) -> None:
        if self._recompute_elapsed(state):
            self._publish(state)

    def tick_countdown(self, state: SessionState) -> None:
        if state.ended or state.remaining_seconds is None:
            return
        state.remaining_seconds = max(state.remaining_seconds - 1, 0)
        self._publish(state)
        if state.remaining_seconds <= 0:
            logger.debug("session %s countdown expired", state.session_id)
            self.stop(state)
            self.on_expired(state)

    def _recompute_elapsed(self, state: SessionState) -> bool:
        if state.started_at is None:
            return False
        elapsed = math.floor(self.tasks.scheduler.now() - state.started_at)
        elapsed = max(elapsed, 0)
        changed = elapsed != state.elapsed_seconds
        state.elapsed_seconds = elapsed
        return changed

    def _publish(self, state: SessionState) -> None:
        self.notify(CountersChanged(state.moves, state.elapsed_seconds, state.remaining_seconds))
