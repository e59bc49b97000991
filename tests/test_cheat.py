from __future__ import annotations

from pairs.engine import FlipOutcome
from pairs.state import CardFace


def _match(controller, card_id: int) -> None:
    controller.flip(card_id)
    controller.flip(card_id + 8)


def test_cheat_reveals_unmatched_and_restores(controller, start) -> None:
    state = start()
    _match(controller, 0)
    _match(controller, 1)

    assert controller.cheat_on() is True
    assert state.input_locked
    assert all(face is not CardFace.HIDDEN for face in state.faces)
    assert state.faces[0] is CardFace.MATCHED

    assert controller.cheat_off() is True
    assert not state.input_locked
    for card in state.deck:
        expected = CardFace.MATCHED if card.matched else CardFace.HIDDEN
        assert state.faces[card.id] is expected


def test_cheat_does_not_touch_counters_or_matches(controller, start) -> None:
    state = start()
    _match(controller, 0)
    controller.flip(5)

    controller.cheat_on()
    controller.cheat_off()

    assert state.moves == 1
    assert state.matched_pairs == 1
    assert [card.id for card in state.deck if card.matched] == [0, 8]
    assert state.first_selection is not None and state.first_selection.card_id == 5
    assert state.faces[5] is CardFace.REVEALED


def test_flips_rejected_while_cheat_active(controller, start) -> None:
    state = start()
    controller.cheat_on()

    assert controller.flip(3) is FlipOutcome.LOCKED
    assert state.started_at is None


def test_cheat_during_pending_revert_keeps_the_lock(controller, scheduler, start) -> None:
    state = start()
    controller.flip(1)
    controller.flip(2)

    controller.cheat_on()
    controller.cheat_off()

    assert state.input_locked
    assert state.faces[1] is CardFace.REVEALED
    assert state.faces[2] is CardFace.REVEALED
    assert state.faces[3] is CardFace.HIDDEN

    scheduler.advance(1)
    assert not state.input_locked
    assert state.faces[1] is CardFace.HIDDEN
    assert state.faces[2] is CardFace.HIDDEN


def test_revert_while_cheat_active_leaves_cards_for_disable(controller, scheduler, start) -> None:
    state = start()
    controller.flip(1)
    controller.flip(2)
    controller.cheat_on()

    scheduler.advance(1)
    assert state.first_selection is None
    assert state.input_locked
    assert state.faces[1] is CardFace.REVEALED

    controller.cheat_off()
    assert not state.input_locked
    assert state.faces[1] is CardFace.HIDDEN
    assert state.faces[2] is CardFace.HIDDEN


def test_cheat_toggles_are_idempotent(controller, start, events) -> None:
    start()
    assert controller.cheat_off() is False
    assert controller.cheat_on() is True
    events.clear()
    assert controller.cheat_on() is False
    assert events == []


def test_cheat_unavailable_after_end(controller, start) -> None:
    state = start(size=2)
    controller.give_up()

    assert controller.cheat_on() is False
    assert not state.cheat_active
