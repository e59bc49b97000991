"""Headless self-play on a virtual clock."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Final

from .endgame import GameResult
from .engine import FlipOutcome
from .events import GameEnded, SessionEvent
from .history import SessionHistory
from .scheduling import ManualScheduler
from .session import SessionController
from .state import SessionConfig, SessionState

__all__ = ["DEFAULT_THINK_TIME", "MemoryPlayer", "play_session", "run_sessions"]

logger = logging.getLogger(__name__)

DEFAULT_THINK_TIME: Final[float] = 0.5


@dataclass(slots=True)
class MemoryPlayer:
    """Player with perfect recall of every card it has seen."""

    rng: random.Random = field(default_factory=random.Random)
    seen: dict[int, str] = field(default_factory=dict)

    def reset(self) -> None:
        self.seen.clear()

    def observe(self, card_id: int, symbol: str) -> None:
        self.seen[card_id] = symbol

    def _known_pair(self, state: SessionState) -> int | None:
        by_symbol: dict[str, list[int]] = {}
        for card_id, symbol in self.seen.items():
            if not state.deck[card_id].matched:
                by_symbol.setdefault(symbol, []).append(card_id)
        for ids in by_symbol.values():
            if len(ids) == 2:
                return min(ids)
        return None

    def _unseen(self, state: SessionState, exclude: int | None = None) -> list[int]:
        return [
            card.id
            for card in state.unmatched_cards()
            if card.id not in self.seen and card.id != exclude
        ]

    def choose(self, state: SessionState) -> int:
        """Pick the next card to flip for the current turn."""

        first = state.first_selection
        if first is None:
            known = self._known_pair(state)
            if known is not None:
                return known
            unseen = self._unseen(state)
            if unseen:
                return self.rng.choice(unseen)
            return next(card.id for card in state.unmatched_cards())

        for card_id, symbol in self.seen.items():
            if symbol == first.symbol and card_id != first.card_id and not state.deck[card_id].matched:
                return card_id
        unseen = self._unseen(state, exclude=first.card_id)
        if unseen:
            return self.rng.choice(unseen)
        return next(card.id for card in state.unmatched_cards() if card.id != first.card_id)


def play_session(
    controller: SessionController,
    scheduler: ManualScheduler,
    config: SessionConfig,
    player: MemoryPlayer,
    *,
    think_time: float = DEFAULT_THINK_TIME,
) -> GameResult:
    """Play one full game and return its result."""

    results: list[GameResult] = []

    def capture(event: SessionEvent) -> None:
        if isinstance(event, GameEnded):
            results.append(event.result)

    controller.subscribe(capture)
    try:
        state = controller.new_game(config)
        player.reset()
        max_flips = 4 * len(state.deck) * len(state.deck)
        flips = 0
        while not state.ended:
            if state.input_locked:
                scheduler.advance(controller.revert_delay)
                continue
            if flips >= max_flips:
                raise RuntimeError("simulation did not finish the game")
            card_id = player.choose(state)
            outcome = controller.flip(card_id)
            flips += 1
            if outcome.accepted:
                player.observe(card_id, state.deck[card_id].symbol)
            elif outcome is not FlipOutcome.ENDED:
                logger.debug("player flip of %s rejected: %s", card_id, outcome.value)
            if not state.ended:
                scheduler.advance(think_time)
    finally:
        controller.unsubscribe(capture)
    return results[0]


def run_sessions(
    config: SessionConfig,
    games: int,
    *,
    seed: int | None = None,
    think_time: float = DEFAULT_THINK_TIME,
    history: SessionHistory | None = None,
) -> SessionHistory:
    """Play ``games`` sessions back to back and return their history."""

    if games <= 0:
        raise ValueError("games must be positive")
    rng = random.Random(seed)
    scheduler = ManualScheduler()
    controller = SessionController(scheduler, rng=rng, history=history)
    player = MemoryPlayer(rng=random.Random(rng.getrandbits(32)))
    for _ in range(games):
        play_session(controller, scheduler, config, player, think_time=think_time)
    return controller.history
