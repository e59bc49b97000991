from __future__ import annotations

import random

import pytest

from pairs.engine import FlipOutcome
from pairs.events import CardFaceChanged, CountersChanged, SessionStarted
from pairs.scheduling import ManualScheduler
from pairs.session import SessionController
from pairs.state import CardFace, GameMode, SessionConfig


def test_commands_require_a_session(controller) -> None:
    with pytest.raises(RuntimeError):
        controller.flip(0)
    with pytest.raises(RuntimeError):
        controller.give_up()
    with pytest.raises(RuntimeError):
        controller.cheat_on()
    with pytest.raises(RuntimeError):
        _ = controller.state
    assert not controller.has_session


def test_new_game_announces_session(controller, events) -> None:
    state = controller.new_game(SessionConfig(size=6, mode=GameMode.TIME_ATTACK))

    assert isinstance(events[0], SessionStarted)
    assert events[0].session_id == state.session_id == 1
    assert events[1] == CountersChanged(moves=0, elapsed_seconds=0, remaining_seconds=60)
    assert len(state.deck) == 36


def test_new_game_defaults_to_previous_config(controller) -> None:
    controller.new_game(SessionConfig(size=2, mode=GameMode.TIME_ATTACK))
    state = controller.new_game()

    assert state.config == SessionConfig(size=2, mode=GameMode.TIME_ATTACK)
    assert state.session_id == 2


def test_stale_revert_does_not_touch_new_session(controller, scheduler, start, events) -> None:
    start()
    controller.flip(1)
    controller.flip(2)

    fresh = start()
    controller.flip(1)
    events.clear()
    scheduler.advance(1)

    assert fresh.faces[1] is CardFace.REVEALED
    assert fresh.first_selection is not None and fresh.first_selection.card_id == 1
    assert not fresh.input_locked
    assert not [event for event in events if isinstance(event, CardFaceChanged)]


def test_stale_countdown_does_not_end_new_session(controller, scheduler, start) -> None:
    start(size=2, mode=GameMode.TIME_ATTACK)
    controller.flip(0)
    scheduler.advance(5)

    fresh = start(size=2, mode=GameMode.TIME_ATTACK)
    scheduler.advance(20)

    assert not fresh.ended
    assert fresh.remaining_seconds == 10
    assert len(controller.history) == 0
    assert scheduler.pending() == 0


def test_mismatch_scenario(scheduler) -> None:
    class FixedShuffle:
        def shuffle(self, seq: list[str]) -> None:
            seq[:] = ["A", "A", "C", "B", "D", "D", "E", "C", "F", "F", "G", "G", "H", "H", "B", "E"]

    controller = SessionController(scheduler, rng=FixedShuffle())
    state = controller.new_game(SessionConfig(size=4))
    assert (state.deck[3].symbol, state.deck[7].symbol) == ("B", "C")

    controller.flip(3)
    outcome = controller.flip(7)

    assert outcome is FlipOutcome.MISMATCHED
    assert state.input_locked

    scheduler.advance(0.8)
    assert state.faces[3] is CardFace.HIDDEN and state.faces[7] is CardFace.HIDDEN
    assert not state.input_locked
    assert state.moves == 1


def test_random_session_can_be_won_with_full_knowledge() -> None:
    scheduler = ManualScheduler()
    controller = SessionController(scheduler, rng=random.Random(42))
    state = controller.new_game(SessionConfig(size=8))

    positions: dict[str, list[int]] = {}
    for card in state.deck:
        positions.setdefault(card.symbol, []).append(card.id)
    for first, second in positions.values():
        controller.flip(first)
        controller.flip(second)
        scheduler.advance(0.5)

    assert state.ended and state.victory is True
    assert state.moves == 32
    assert controller.history.entries()[0].elapsed_seconds == 15


def test_listener_can_unsubscribe(controller, events) -> None:
    controller.unsubscribe(events.append)
    controller.new_game()

    assert events == []
