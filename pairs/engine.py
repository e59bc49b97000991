"""Flip/selection state machine for the pairs game."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final

from .endgame import EndgameHandler
from .events import CardFaceChanged, CountersChanged, Notifier
from .scheduling import SessionTasks
from .state import CardFace, CardRef, SessionState
from .timers import TimerService

__all__ = ["MISMATCH_REVERT_SECONDS", "REVERT_TASK", "TurnPhase", "FlipOutcome", "MatchEngine", "turn_phase"]

logger = logging.getLogger(__name__)

MISMATCH_REVERT_SECONDS: Final[float] = 0.8
REVERT_TASK: Final[str] = "revert"


class TurnPhase(str, Enum):
    """Where the state machine currently sits."""

    IDLE = "idle"
    ONE_SELECTED = "one_selected"
    LOCKED = "locked"
    ENDED = "ended"


class FlipOutcome(str, Enum):
    """Result of a flip request."""

    SELECTED = "selected"
    MATCHED = "matched"
    MISMATCHED = "mismatched"
    VICTORY = "victory"
    ENDED = "ended"
    LOCKED = "locked"
    UNKNOWN_CARD = "unknown_card"
    ALREADY_MATCHED = "already_matched"
    ALREADY_SELECTED = "already_selected"

    @property
    def accepted(self) -> bool:
        return self in _ACCEPTED


_ACCEPTED = frozenset({FlipOutcome.SELECTED, FlipOutcome.MATCHED, FlipOutcome.MISMATCHED, FlipOutcome.VICTORY})


def turn_phase(state: SessionState) -> TurnPhase:
    if state.ended:
        return TurnPhase.ENDED
    if state.revert_pending:
        return TurnPhase.LOCKED
    if state.first_selection is not None:
        return TurnPhase.ONE_SELECTED
    return TurnPhase.IDLE


class MatchEngine:
    """Consume flip requests and decide match outcomes."""

    def __init__(
        self,
        tasks: SessionTasks,
        timers: TimerService,
        endgame: EndgameHandler,
        notify: Notifier,
        *,
        revert_delay: float = MISMATCH_REVERT_SECONDS,
    ) -> None:
        self.tasks = tasks
        self.timers = timers
        self.endgame = endgame
        self.notify = notify
        self.revert_delay = revert_delay

    def _rejection(self, state: SessionState, card_id: int) -> FlipOutcome | None:
        if state.ended:
            return FlipOutcome.ENDED
        if state.input_locked:
            return FlipOutcome.LOCKED
        card = state.card(card_id)
        if card is None:
            return FlipOutcome.UNKNOWN_CARD
        if card.matched:
            return FlipOutcome.ALREADY_MATCHED
        if state.first_selection is not None and state.first_selection.card_id == card_id:
            return FlipOutcome.ALREADY_SELECTED
        return None

    def flip(self, state: SessionState, card_id: int) -> FlipOutcome:
        """Apply a flip request for ``card_id`` to ``state``."""

        rejection = self._rejection(state, card_id)
        if rejection is not None:
            logger.debug("session %s rejected flip of %s: %s", state.session_id, card_id, rejection.value)
            return rejection

        card = state.deck[card_id]
        self._set_face(state, card_id, CardFace.REVEALED, card.symbol)
        self.timers.start(state)

        ref = CardRef(card_id=card.id, symbol=card.symbol)
        if state.first_selection is None:
            state.first_selection = ref
            return FlipOutcome.SELECTED

        state.second_selection = ref
        state.moves += 1
        self.notify(CountersChanged(state.moves, state.elapsed_seconds, state.remaining_seconds))
        return self._evaluate(state)

    def _evaluate(self, state: SessionState) -> FlipOutcome:
        first, second = state.first_selection, state.second_selection
        assert first is not None and second is not None
        assert first.card_id != second.card_id

        if first.symbol != second.symbol:
            state.revert_pending = True
            self.tasks.once(REVERT_TASK, self.revert_delay, lambda: self.revert(state))
            return FlipOutcome.MISMATCHED

        for ref in (first, second):
            state.deck[ref.card_id].mark_matched()
            self._set_face(state, ref.card_id, CardFace.MATCHED, ref.symbol)
        state.matched_pairs += 1
        state.clear_selections()
        logger.debug("session %s matched %s (%d/%d)", state.session_id, first.symbol, state.matched_pairs, state.total_pairs)
        if state.is_won:
            self.endgame.end(state, victory=True)
            return FlipOutcome.VICTORY
        return FlipOutcome.MATCHED

    def revert(self, state: SessionState) -> None:
        """Hide a mismatched pair and release the lock."""

        if not state.revert_pending:
            return
        if not state.cheat_active:
            for ref in state.selections():
                if ref is not None:
                    self._set_face(state, ref.card_id, CardFace.HIDDEN, None)
        state.clear_selections()
        state.revert_pending = False

    def _set_face(self, state: SessionState, card_id: int, face: CardFace, symbol: str | None) -> None:
        if state.faces[card_id] is face:
            return
        state.faces[card_id] = face
        self.notify(CardFaceChanged(card_id, face, symbol))
