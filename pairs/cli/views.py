"""Composable view primitives for the pairs CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich import box
from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from ..formatting import board_label, format_clock, format_remaining
from ..history import SessionHistory
from ..state import CardFace, SessionState


@dataclass(slots=True)
class BoardView:
    """Renderable card grid for the current session."""

    state: SessionState
    cursor: int | None
    card_formatter: Callable[..., str]

    def render(self) -> RenderableType:
        size = self.state.config.size
        grid = Table.grid(padding=(0, 1))
        for _ in range(size):
            grid.add_column(justify="center")
        for row in range(size):
            cells = []
            for col in range(size):
                card_id = row * size + col
                face = self.state.faces[card_id]
                symbol = None if face is CardFace.HIDDEN else self.state.deck[card_id].symbol
                cells.append(self.card_formatter(face, symbol, cursor=card_id == self.cursor))
            grid.add_row(*cells)
        return grid


@dataclass(slots=True)
class CountersView:
    """Board, mode and live counters."""

    state: SessionState

    def render(self) -> RenderableType:
        config = self.state.config
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Board[/cyan]: {board_label(config)}")
        grid.add_row(f"[cyan]Mode[/cyan]: {config.mode.label}")
        grid.add_row(f"[cyan]Moves[/cyan]: {self.state.moves}")
        grid.add_row(f"[cyan]Pairs[/cyan]: {self.state.matched_pairs}/{self.state.total_pairs}")
        grid.add_row(f"[cyan]Time[/cyan]: {format_clock(self.state.elapsed_seconds)}")
        grid.add_row(f"[cyan]Remaining[/cyan]: {format_remaining(self.state)}")
        if self.state.cheat_active:
            grid.add_row("[magenta]Cheat reveal active[/magenta]")
        return grid


@dataclass(slots=True)
class HistoryView:
    """Table of finished sessions, newest first."""

    history: SessionHistory

    def render(self) -> RenderableType:
        table = Table(box=box.SIMPLE_HEAVY, expand=True)
        table.add_column("Board", justify="left")
        table.add_column("Mode", justify="left")
        table.add_column("Moves", justify="right")
        table.add_column("Time", justify="right")
        table.add_column("Result", justify="left")
        entries = self.history.entries()
        for entry in entries:
            style = "green" if entry.victory else "red"
            table.add_row(
                entry.board,
                entry.mode_label,
                str(entry.moves),
                entry.elapsed_time,
                f"[{style}]{entry.outcome_label}[/{style}]",
            )
        if not entries:
            table.add_row(Text.from_markup("[dim]No games yet[/dim]"), "-", "-", "-", "-")
        return table
