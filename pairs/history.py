"""In-memory log of finished sessions, newest first."""

from __future__ import annotations

from dataclasses import dataclass, field

from .endgame import GameResult
from .state import GameMode

__all__ = ["HistoryTotals", "SessionHistory"]


@dataclass(frozen=True, slots=True)
class HistoryTotals:
    """Aggregate figures across every recorded session."""

    games: int
    wins: int
    losses: int
    best_moves: int | None
    best_time: int | None


@dataclass(slots=True)
class SessionHistory:
    """Mutable tracker that accumulates session results for display."""

    limit: int | None = None
    _entries: list[GameResult] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit <= 0:
            raise ValueError("limit must be positive")

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, result: GameResult) -> None:
        """Prepend ``result``, dropping the oldest entry beyond ``limit``."""

        self._entries.insert(0, result)
        if self.limit is not None:
            del self._entries[self.limit :]

    def entries(self, mode: GameMode | None = None) -> list[GameResult]:
        if mode is None:
            return list(self._entries)
        return [entry for entry in self._entries if entry.mode is mode]

    def clear(self) -> None:
        self._entries.clear()

    def totals(self) -> HistoryTotals:
        wins = [entry for entry in self._entries if entry.victory]
        return HistoryTotals(
            games=len(self._entries),
            wins=len(wins),
            losses=len(self._entries) - len(wins),
            best_moves=min((entry.moves for entry in wins), default=None),
            best_time=min((entry.elapsed_seconds for entry in wins), default=None),
        )
