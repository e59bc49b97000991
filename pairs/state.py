"""Core session data structures for the pairs game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterator, Mapping

from .deck import Card

__all__ = [
    "GameMode",
    "CardFace",
    "SUPPORTED_SIZES",
    "DEFAULT_SIZE",
    "TIME_ATTACK_LIMITS",
    "SessionConfig",
    "CardRef",
    "SessionState",
]


class GameMode(str, Enum):
    """The two ways a session can be played."""

    CLASSIC = "classic"
    TIME_ATTACK = "time-attack"

    @property
    def label(self) -> str:
        return "Classic" if self is GameMode.CLASSIC else "Time Attack"


class CardFace(str, Enum):
    """Visual state of a card as seen by the player."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


SUPPORTED_SIZES: Final[tuple[int, ...]] = (2, 4, 6, 8)
DEFAULT_SIZE: Final[int] = 4

# Countdown budget in seconds per board size.
TIME_ATTACK_LIMITS: Final[Mapping[int, int]] = {2: 10, 4: 30, 6: 60, 8: 120}


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable board size and mode for one session."""

    size: int = DEFAULT_SIZE
    mode: GameMode = GameMode.CLASSIC

    def __post_init__(self) -> None:
        if self.size not in SUPPORTED_SIZES:
            raise ValueError(f"unsupported board size {self.size}")
        if not isinstance(self.mode, GameMode):
            raise ValueError(f"unsupported mode {self.mode!r}")

    @property
    def total_pairs(self) -> int:
        return self.size * self.size // 2

    @property
    def time_limit(self) -> int | None:
        """Countdown seconds for time-attack, ``None`` for classic."""

        if self.mode is GameMode.TIME_ATTACK:
            return TIME_ATTACK_LIMITS[self.size]
        return None


@dataclass(frozen=True, slots=True)
class CardRef:
    """Selection handle: which card was picked and what it shows."""

    card_id: int
    symbol: str


@dataclass(slots=True)
class SessionState:
    """Mutable record of a single game.

    ``input_locked`` is derived rather than stored so that the mismatch revert
    and the cheat reveal can each hold the lock independently.
    """

    config: SessionConfig
    deck: list[Card]
    session_id: int = 0
    faces: list[CardFace] = field(default_factory=list)
    moves: int = 0
    matched_pairs: int = 0
    first_selection: CardRef | None = None
    second_selection: CardRef | None = None
    revert_pending: bool = False
    cheat_active: bool = False
    ended: bool = False
    victory: bool | None = None
    started_at: float | None = None
    elapsed_seconds: int = 0
    remaining_seconds: int | None = None

    def __post_init__(self) -> None:
        if len(self.deck) != self.config.size * self.config.size:
            raise ValueError("deck size does not match the board size")
        if not self.faces:
            self.faces = [CardFace.HIDDEN for _ in self.deck]
        if self.remaining_seconds is None:
            self.remaining_seconds = self.config.time_limit

    @property
    def input_locked(self) -> bool:
        return self.revert_pending or self.cheat_active or self.ended

    @property
    def total_pairs(self) -> int:
        return self.config.total_pairs

    @property
    def is_won(self) -> bool:
        return self.matched_pairs == self.total_pairs

    @property
    def timers_started(self) -> bool:
        return self.started_at is not None

    def card(self, card_id: int) -> Card | None:
        """Return the card with ``card_id`` or ``None`` for unknown ids."""

        if 0 <= card_id < len(self.deck):
            return self.deck[card_id]
        return None

    def is_selected(self, card_id: int) -> bool:
        return any(ref is not None and ref.card_id == card_id for ref in self.selections())

    def selections(self) -> Iterator[CardRef | None]:
        yield self.first_selection
        yield self.second_selection

    def clear_selections(self) -> None:
        self.first_selection = None
        self.second_selection = None

    def unmatched_cards(self) -> Iterator[Card]:
        return (card for card in self.deck if not card.matched)
