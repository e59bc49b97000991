"""Session finalisation and the result record handed to the history log."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .events import CardFaceChanged, GameEnded, Notifier
from .formatting import board_label, format_clock
from .scheduling import SessionTasks
from .state import CardFace, GameMode, SessionConfig, SessionState
from .timers import TimerService

__all__ = ["GameResult", "ResultSink", "end_message", "EndgameHandler"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of a finished session."""

    size: int
    mode: GameMode
    moves: int
    elapsed_seconds: int
    victory: bool

    @property
    def board(self) -> str:
        return board_label(SessionConfig(size=self.size, mode=self.mode))

    @property
    def mode_label(self) -> str:
        return self.mode.label

    @property
    def elapsed_time(self) -> str:
        return format_clock(self.elapsed_seconds)

    @property
    def outcome_label(self) -> str:
        return "Victory" if self.victory else "Defeat"


ResultSink = Callable[[GameResult], None]


def end_message(result: GameResult) -> str:
    """Return the player-facing end-of-game text."""

    if result.victory:
        return f"Congratulations! You won in {result.moves} moves and {result.elapsed_time}."
    return f"Game over! You lost. Moves: {result.moves}. Time: {result.elapsed_time}."


class EndgameHandler:
    """Terminal transition for a session, idempotent per session."""

    def __init__(
        self,
        tasks: SessionTasks,
        timers: TimerService,
        notify: Notifier,
        on_result: ResultSink | None = None,
    ) -> None:
        self.tasks = tasks
        self.timers = timers
        self.notify = notify
        self.on_result = on_result

    def end(self, state: SessionState, victory: bool) -> GameResult | None:
        if state.ended:
            logger.debug("session %s already ended; ignoring", state.session_id)
            return None
        state.ended = True
        state.victory = victory
        self.timers.stop(state)
        self.tasks.cancel_all()
        self._reveal_all(state)

        result = GameResult(
            size=state.config.size,
            mode=state.config.mode,
            moves=state.moves,
            elapsed_seconds=state.elapsed_seconds,
            victory=victory,
        )
        logger.info(
            "session %s ended: %s after %d moves in %s",
            state.session_id,
            result.outcome_label.lower(),
            result.moves,
            result.elapsed_time,
        )
        if self.on_result is not None:
            self.on_result(result)
        self.notify(GameEnded(result=result, message=end_message(result)))
        return result

    def _reveal_all(self, state: SessionState) -> None:
        for card in state.deck:
            face = CardFace.MATCHED if card.matched else CardFace.REVEALED
            if state.faces[card.id] is face:
                continue
            state.faces[card.id] = face
            self.notify(CardFaceChanged(card.id, face, card.symbol))
