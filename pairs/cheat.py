"""Reveal-all override that sits beside the match state machine."""

from __future__ import annotations

import logging

from .events import CardFaceChanged, Notifier
from .state import CardFace, SessionState

__all__ = ["CheatController"]

logger = logging.getLogger(__name__)


class CheatController:
    """Toggle a full reveal of unmatched cards.

    Only faces and the cheat half of the input lock are touched; ``matched``,
    ``moves`` and the current selections are left alone, so a pending mismatch
    revert keeps working underneath.
    """

    def __init__(self, notify: Notifier) -> None:
        self.notify = notify

    def enable(self, state: SessionState) -> bool:
        if state.ended or state.cheat_active:
            return False
        state.cheat_active = True
        for card in state.unmatched_cards():
            if state.faces[card.id] is CardFace.HIDDEN:
                state.faces[card.id] = CardFace.REVEALED
                self.notify(CardFaceChanged(card.id, CardFace.REVEALED, card.symbol))
        logger.debug("session %s cheat enabled", state.session_id)
        return True

    def disable(self, state: SessionState) -> bool:
        if not state.cheat_active:
            return False
        state.cheat_active = False
        if state.ended:
            return True
        for card in state.unmatched_cards():
            if state.is_selected(card.id):
                continue
            if state.faces[card.id] is CardFace.REVEALED:
                state.faces[card.id] = CardFace.HIDDEN
                self.notify(CardFaceChanged(card.id, CardFace.HIDDEN, None))
        logger.debug("session %s cheat disabled", state.session_id)
        return True
