"""Textual-powered interactive pairs interface."""

from __future__ import annotations

import logging
import random
import time

from rich.panel import Panel
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.logging import TextualHandler
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Footer, Header, Static

from ...events import CardFaceChanged, CountersChanged, GameEnded, SessionEvent, SessionStarted
from ...scheduling import Callback
from ...session import SessionController
from ...state import SessionConfig
from ..render import render_board, render_counters, render_history


class _TimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Scheduler adapter over ``App.set_timer`` / ``App.set_interval``."""

    def __init__(self, app: App) -> None:
        self.app = app

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callback) -> _TimerHandle:
        return _TimerHandle(self.app.set_timer(delay, callback))

    def call_every(self, period: float, callback: Callback) -> _TimerHandle:
        return _TimerHandle(self.app.set_interval(period, callback))


class InfoPanel(Static):
    """Reusable wrapper that expects ``update_panel`` calls with Rich renderables."""

    def update_panel(self, body) -> None:
        self.update(body)


class StatusStrip(Static):
    """Single line status helper."""

    message: reactive[str] = reactive("", init=False)

    def watch_message(self, value: str) -> None:
        self.update(Panel(Text.from_markup(value or "[dim]Ready[/dim]"), border_style="green"))


class PairsTextualApp(App):
    """Textual memory-pairs game UI."""

    CSS = """
    Screen {
        layout: vertical;
        height: 100%;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    #left {
        width: 2fr;
        padding: 0 1;
    }

    #right {
        width: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }

    StatusStrip {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("up", "move(-1, 0)", "Up", show=False),
        Binding("down", "move(1, 0)", "Down", show=False),
        Binding("left", "move(0, -1)", "Left", show=False),
        Binding("right", "move(0, 1)", "Right", show=False),
        Binding("enter", "flip", "Flip"),
        Binding("space", "flip", "Flip", show=False),
        Binding("c", "toggle_cheat", "Cheat"),
        Binding("g", "give_up", "Give up"),
        Binding("n", "new_game", "New game"),
    ]

    def __init__(self, *, config: SessionConfig, seed: int | None = None) -> None:
        super().__init__()
        if seed is None:
            seed = random.SystemRandom().randrange(0, 2**63)
        self.seed = seed
        self.session_config = config
        self.controller = SessionController(TextualScheduler(self), rng=random.Random(seed))
        self.controller.subscribe(self._on_session_event)
        self.board_cursor = 0
        self._confirm_give_up = False

        # Widgets initialised in compose
        self.status_strip: StatusStrip | None = None
        self.board_panel: InfoPanel | None = None
        self.counters_panel: InfoPanel | None = None
        self.history_panel: InfoPanel | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_strip = StatusStrip(id="status")
        yield self.status_strip

        self.board_panel = InfoPanel(id="board")
        self.counters_panel = InfoPanel(id="counters")
        self.history_panel = InfoPanel(id="history")
        yield Horizontal(
            Vertical(self.board_panel, id="left"),
            Vertical(self.counters_panel, self.history_panel, id="right"),
            id="main",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.controller.new_game(self.session_config)

    def _on_session_event(self, event: SessionEvent) -> None:
        if isinstance(event, SessionStarted):
            self.board_cursor = 0
            self.title = f"Pairs {event.config.size}x{event.config.size}"
            self.sub_title = event.config.mode.label
            self._set_status("Find all the pairs. Enter flips, C toggles cheat, G gives up.")
            self._refresh_all()
        elif isinstance(event, CardFaceChanged):
            self._refresh_board()
        elif isinstance(event, CountersChanged):
            self._refresh_counters()
        elif isinstance(event, GameEnded):
            self._set_status(event.message + " Press N for a new game.")
            self.notify(event.message, severity="information" if event.result.victory else "warning")
            self._refresh_all()

    def _set_status(self, message: str) -> None:
        if self.status_strip is not None:
            self.status_strip.message = message

    def _refresh_board(self) -> None:
        if self.board_panel is not None and self.controller.has_session:
            self.board_panel.update_panel(render_board(self.controller.state, cursor=self.board_cursor))

    def _refresh_counters(self) -> None:
        if self.counters_panel is not None and self.controller.has_session:
            self.counters_panel.update_panel(render_counters(self.controller.state))

    def _refresh_all(self) -> None:
        self._refresh_board()
        self._refresh_counters()
        if self.history_panel is not None:
            self.history_panel.update_panel(render_history(self.controller.history))

    def action_move(self, d_row: int, d_col: int) -> None:
        size = self.controller.state.config.size
        row, col = divmod(self.board_cursor, size)
        row = (row + d_row) % size
        col = (col + d_col) % size
        self.board_cursor = row * size + col
        self._refresh_board()

    def action_flip(self) -> None:
        self._confirm_give_up = False
        self.controller.flip(self.board_cursor)
        self._refresh_counters()

    def action_toggle_cheat(self) -> None:
        self._confirm_give_up = False
        state = self.controller.state
        if state.cheat_active:
            self.controller.cheat_off()
            self._set_status("Cheat off.")
        elif self.controller.cheat_on():
            self._set_status("[magenta]Cheat on: flips are locked until you press C again.[/magenta]")
        self._refresh_counters()

    def action_give_up(self) -> None:
        if self.controller.state.ended:
            return
        if not self._confirm_give_up:
            self._confirm_give_up = True
            self._set_status("[yellow]Press G again to give up this game.[/yellow]")
            return
        self._confirm_give_up = False
        self.controller.give_up()

    def action_new_game(self) -> None:
        self._confirm_give_up = False
        self.controller.new_game(self.session_config)


def run_textual_app(*, config: SessionConfig, seed: int | None, verbose: bool) -> None:
    """Launch the Textual UI."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[TextualHandler()],
        force=True,
    )
    app = PairsTextualApp(config=config, seed=seed)
    app.run()
