"""Top-level package for the pairs memory-matching game engine."""

from . import (
    cheat,
    config,
    deck,
    endgame,
    engine,
    events,
    formatting,
    history,
    labels,
    scheduling,
    session,
    simulation,
    state,
    timers,
)

__all__ = [
    "cheat",
    "config",
    "deck",
    "endgame",
    "engine",
    "events",
    "formatting",
    "history",
    "labels",
    "scheduling",
    "session",
    "simulation",
    "state",
    "timers",
]
