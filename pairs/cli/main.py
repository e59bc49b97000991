"""Typer entry-point wiring for the pairs CLI."""

from __future__ import annotations

import logging

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import simulation
from ..config import config_from_query, resolve_config
from ..formatting import format_clock
from ..state import SessionConfig
from .render import render_history
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _session_config(size: str | None, mode: str | None, query: str | None) -> SessionConfig:
    if query:
        return config_from_query(query)
    return resolve_config(size, mode)


@app.command()
def play(
    size: str = typer.Option("4", help="Board size: 2, 4, 6 or 8 (anything else falls back to 4)."),
    mode: str = typer.Option("classic", help="Game mode: classic or time-attack."),
    query: str | None = typer.Option(
        None,
        help="Read size/mode from a URL query string instead, e.g. 'size=6&mode=time-attack'.",
    ),
    seed: int | None = typer.Option(None, help="Random seed for reproducible boards (omit for randomness)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine events to the Textual console."),
) -> None:
    """Play interactively in the terminal."""

    run_textual_app(config=_session_config(size, mode, query), seed=seed, verbose=verbose)


@app.command()
def simulate(
    size: str = typer.Option("4", help="Board size: 2, 4, 6 or 8."),
    mode: str = typer.Option("classic", help="Game mode: classic or time-attack."),
    games: int = typer.Option(5, min=1, help="Number of sessions to play."),
    seed: int = typer.Option(123, help="Random seed for decks and player choices."),
    think_time: float = typer.Option(
        simulation.DEFAULT_THINK_TIME,
        min=0.0,
        help="Virtual seconds the player waits between flips.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging."),
) -> None:
    """Run headless sessions with a perfect-memory player."""

    _configure_logging(verbose)
    config = resolve_config(size, mode)
    history = simulation.run_sessions(config, games, seed=seed, think_time=think_time)

    console.print(render_history(history, title="Simulated Sessions"))

    totals = history.totals()
    summary = Table(title="Summary", box=box.SIMPLE_HEAVY)
    summary.add_column("Games", justify="right")
    summary.add_column("Wins", justify="right")
    summary.add_column("Losses", justify="right")
    summary.add_column("Best moves", justify="right")
    summary.add_column("Best time", justify="right")
    summary.add_row(
        str(totals.games),
        str(totals.wins),
        str(totals.losses),
        "-" if totals.best_moves is None else str(totals.best_moves),
        "-" if totals.best_time is None else format_clock(totals.best_time),
    )
    console.print(summary)


def main() -> None:
    """Entry-point for ``python -m pairs.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
