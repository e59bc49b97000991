from __future__ import annotations

from pairs.engine import MISMATCH_REVERT_SECONDS, FlipOutcome, TurnPhase, turn_phase
from pairs.events import CardFaceChanged, CountersChanged
from pairs.state import CardFace, GameMode


def test_first_flip_selects_and_starts_timers(controller, scheduler, start) -> None:
    state = start()
    scheduler.advance(5)

    outcome = controller.flip(3)

    assert outcome is FlipOutcome.SELECTED
    assert state.first_selection is not None and state.first_selection.card_id == 3
    assert state.faces[3] is CardFace.REVEALED
    assert state.started_at == 5
    assert state.moves == 0
    assert turn_phase(state) is TurnPhase.ONE_SELECTED


def test_matching_pair_is_marked_and_never_reverted(controller, scheduler, start) -> None:
    state = start()

    controller.flip(0)
    outcome = controller.flip(8)
    scheduler.advance(5)

    assert outcome is FlipOutcome.MATCHED
    assert state.matched_pairs == 1
    assert state.moves == 1
    assert state.deck[0].matched and state.deck[8].matched
    assert state.faces[0] is CardFace.MATCHED and state.faces[8] is CardFace.MATCHED
    assert state.first_selection is None and state.second_selection is None
    assert turn_phase(state) is TurnPhase.IDLE


def test_mismatch_locks_then_reverts_after_delay(controller, scheduler, start) -> None:
    state = start()

    controller.flip(3)
    outcome = controller.flip(7)

    assert outcome is FlipOutcome.MISMATCHED
    assert state.input_locked
    assert state.moves == 1
    assert turn_phase(state) is TurnPhase.LOCKED

    scheduler.advance(MISMATCH_REVERT_SECONDS - 0.1)
    assert state.input_locked
    assert state.faces[3] is CardFace.REVEALED

    scheduler.advance(0.1)
    assert not state.input_locked
    assert state.faces[3] is CardFace.HIDDEN
    assert state.faces[7] is CardFace.HIDDEN
    assert state.first_selection is None and state.second_selection is None
    assert state.moves == 1


def test_flip_rejections_leave_state_untouched(controller, start, events) -> None:
    state = start()
    controller.flip(0)
    controller.flip(8)
    controller.flip(1)
    events.clear()

    assert controller.flip(1) is FlipOutcome.ALREADY_SELECTED
    assert controller.flip(0) is FlipOutcome.ALREADY_MATCHED
    assert controller.flip(8) is FlipOutcome.ALREADY_MATCHED
    assert controller.flip(16) is FlipOutcome.UNKNOWN_CARD
    assert controller.flip(-1) is FlipOutcome.UNKNOWN_CARD

    assert events == []
    assert state.moves == 1
    assert state.first_selection is not None and state.first_selection.card_id == 1
    assert state.second_selection is None


def test_flips_are_rejected_while_locked(controller, start) -> None:
    state = start()
    controller.flip(1)
    controller.flip(2)

    assert controller.flip(3) is FlipOutcome.LOCKED
    assert state.faces[3] is CardFace.HIDDEN
    assert state.moves == 1


def test_selection_never_pairs_with_itself(controller, scheduler, start) -> None:
    state = start(size=2)
    for card_id in (0, 0, 1, 1, 2, 3, 0, 2):
        controller.flip(card_id)
        if state.first_selection is not None and state.second_selection is not None:
            assert state.first_selection.card_id != state.second_selection.card_id
        scheduler.advance(1)


def test_victory_after_last_pair(controller, start) -> None:
    state = start()

    outcomes = []
    for card_id in range(8):
        controller.flip(card_id)
        outcomes.append(controller.flip(card_id + 8))

    assert outcomes[:-1] == [FlipOutcome.MATCHED] * 7
    assert outcomes[-1] is FlipOutcome.VICTORY
    assert state.matched_pairs == 8
    assert state.ended and state.victory is True
    assert controller.flip(0) is FlipOutcome.ENDED


def test_no_victory_before_all_pairs(controller, start) -> None:
    state = start()
    for card_id in range(7):
        controller.flip(card_id)
        controller.flip(card_id + 8)

    assert state.matched_pairs == 7
    assert not state.ended


def test_second_flip_publishes_moves(controller, start, events) -> None:
    start(mode=GameMode.TIME_ATTACK)
    events.clear()

    controller.flip(0)
    controller.flip(9)

    counters = [event for event in events if isinstance(event, CountersChanged)]
    faces = [event for event in events if isinstance(event, CardFaceChanged)]
    assert counters[-1].moves == 1
    assert counters[-1].remaining_seconds == 30
    assert [(event.card_id, event.face, event.symbol) for event in faces] == [
        (0, CardFace.REVEALED, "A"),
        (9, CardFace.REVEALED, "B"),
    ]


def test_flip_outcome_acceptance() -> None:
    assert FlipOutcome.SELECTED.accepted
    assert FlipOutcome.VICTORY.accepted
    assert not FlipOutcome.LOCKED.accepted
    assert not FlipOutcome.ENDED.accepted
