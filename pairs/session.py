"""Session controller that owns the live game and wires its components."""

from __future__ import annotations

import logging
from typing import Final

from .cheat import CheatController
from .deck import DeckBuilder, Shuffler
from .endgame import EndgameHandler, GameResult
from .engine import MISMATCH_REVERT_SECONDS, FlipOutcome, MatchEngine
from .events import CountersChanged, Notifier, SessionEvent, SessionStarted
from .history import SessionHistory
from .scheduling import Scheduler, SessionTasks
from .state import SessionConfig, SessionState
from .timers import COUNTDOWN_TICK_SECONDS, ELAPSED_TICK_SECONDS, TimerService

__all__ = ["SessionController"]

logger = logging.getLogger(__name__)

_NO_SESSION: Final[str] = "no game has been started"


class SessionController:
    """Typed command surface: ``flip``, ``give_up``, ``cheat_on``, ``cheat_off``.

    The controller exclusively owns the current :class:`SessionState`. Starting
    a new game cancels every task scheduled for the previous one, and any
    callback that still fires for an old session is discarded.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        rng: Shuffler | None = None,
        history: SessionHistory | None = None,
        revert_delay: float = MISMATCH_REVERT_SECONDS,
        elapsed_tick: float = ELAPSED_TICK_SECONDS,
        countdown_tick: float = COUNTDOWN_TICK_SECONDS,
    ) -> None:
        self.scheduler = scheduler
        self.deck_builder = DeckBuilder(rng)
        self.history = history if history is not None else SessionHistory()
        self.revert_delay = revert_delay
        self.elapsed_tick = elapsed_tick
        self.countdown_tick = countdown_tick
        self._listeners: list[Notifier] = []
        self._session_id = 0
        self._state: SessionState | None = None
        self._tasks: SessionTasks | None = None
        self._engine: MatchEngine | None = None
        self._endgame: EndgameHandler | None = None
        self._cheat: CheatController | None = None

    @property
    def state(self) -> SessionState:
        if self._state is None:
            raise RuntimeError(_NO_SESSION)
        return self._state

    @property
    def has_session(self) -> bool:
        return self._state is not None

    @property
    def session_id(self) -> int:
        return self._session_id

    def subscribe(self, listener: Notifier) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Notifier) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _is_current(self, session_id: int) -> bool:
        return session_id == self._session_id

    def new_game(self, config: SessionConfig | None = None) -> SessionState:
        """Discard the current session (if any) and deal a fresh board."""

        if self._tasks is not None:
            self._tasks.cancel_all()
        if config is None:
            config = self._state.config if self._state is not None else SessionConfig()

        self._session_id += 1
        deck = self.deck_builder.build(config.total_pairs)
        state = SessionState(config=config, deck=deck, session_id=self._session_id)

        tasks = SessionTasks(self.scheduler, self._session_id, self._is_current)
        timers = TimerService(
            tasks,
            self._emit,
            self._on_countdown_expired,
            elapsed_tick=self.elapsed_tick,
            countdown_tick=self.countdown_tick,
        )
        endgame = EndgameHandler(tasks, timers, self._emit, self.history.record)
        self._engine = MatchEngine(tasks, timers, endgame, self._emit, revert_delay=self.revert_delay)
        self._cheat = CheatController(self._emit)
        self._endgame = endgame
        self._tasks = tasks
        self._state = state

        logger.info("session %s started: %sx%s %s", state.session_id, config.size, config.size, config.mode.value)
        self._emit(SessionStarted(session_id=state.session_id, config=config))
        self._emit(CountersChanged(state.moves, state.elapsed_seconds, state.remaining_seconds))
        return state

    def _on_countdown_expired(self, state: SessionState) -> None:
        if self._endgame is not None and state is self._state:
            self._endgame.end(state, victory=False)

    def flip(self, card_id: int) -> FlipOutcome:
        if self._engine is None:
            raise RuntimeError(_NO_SESSION)
        return self._engine.flip(self.state, card_id)

    def give_up(self) -> GameResult | None:
        """End the current session as a loss; ``None`` if it already ended."""

        if self._endgame is None:
            raise RuntimeError(_NO_SESSION)
        return self._endgame.end(self.state, victory=False)

    def cheat_on(self) -> bool:
        if self._cheat is None:
            raise RuntimeError(_NO_SESSION)
        return self._cheat.enable(self.state)

    def cheat_off(self) -> bool:
        if self._cheat is None:
            raise RuntimeError(_NO_SESSION)
        return self._cheat.disable(self.state)
