from __future__ import annotations

from rich.console import Console

from pairs.cli.render import format_card, render_board, render_counters, render_history
from pairs.endgame import GameResult
from pairs.history import SessionHistory
from pairs.state import CardFace, GameMode, SessionConfig


def _text(renderable) -> str:
    console = Console(width=100, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_format_card_hides_symbol() -> None:
    assert "??" in format_card(CardFace.HIDDEN, "A")
    assert "A" in format_card(CardFace.REVEALED, "A")
    assert "reverse" in format_card(CardFace.MATCHED, "B", cursor=True)


def test_board_shows_revealed_and_hidden_cards(controller, start) -> None:
    state = start(size=2)
    controller.flip(1)

    text = _text(render_board(state, cursor=0))

    assert text.count("??") == 3
    assert "B" in text


def test_counters_show_countdown_placeholder(start) -> None:
    text = _text(render_counters(start(size=2)))

    assert "2x2" in text
    assert "Classic" in text
    assert "--:--" in text


def test_history_table_lists_results() -> None:
    history = SessionHistory()
    assert "No games yet" in _text(render_history(history))

    history.record(GameResult(size=6, mode=GameMode.TIME_ATTACK, moves=20, elapsed_seconds=61, victory=False))
    text = _text(render_history(history))

    assert "6x6" in text
    assert "Time Attack" in text
    assert "01:01" in text
    assert "Defeat" in text
