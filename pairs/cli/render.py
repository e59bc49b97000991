"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..history import SessionHistory
from ..state import CardFace, SessionState
from .views import BoardView, CountersView, HistoryView

_FACE_STYLES = {
    CardFace.HIDDEN: "dim",
    CardFace.REVEALED: "bold yellow",
    CardFace.MATCHED: "bold green",
}


def format_card(face: CardFace, symbol: str | None, *, cursor: bool = False) -> str:
    """Return a Rich-markup cell for a single card."""

    text = "??" if face is CardFace.HIDDEN or symbol is None else symbol.center(2)
    style = _FACE_STYLES[face]
    if cursor:
        style = f"{style} reverse"
    return f"[{style}]{text}[/{style}]"


def render_board(state: SessionState, *, cursor: int | None = None, title: str = "Board") -> RenderableType:
    """Return a Rich panel with the card grid."""

    view = BoardView(state=state, cursor=cursor, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")


def render_counters(state: SessionState) -> RenderableType:
    return Panel(CountersView(state=state).render(), title="Session", border_style="blue")


def render_history(history: SessionHistory, *, title: str = "History") -> RenderableType:
    return Panel(HistoryView(history=history).render(), title=title, border_style="bright_blue")
