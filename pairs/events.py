"""Notifications emitted by the session engine to its observers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

from .state import CardFace, SessionConfig

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .endgame import GameResult

__all__ = [
    "SessionStarted",
    "CardFaceChanged",
    "CountersChanged",
    "GameEnded",
    "SessionEvent",
    "Notifier",
]


@dataclass(frozen=True, slots=True)
class SessionStarted:
    session_id: int
    config: SessionConfig


@dataclass(frozen=True, slots=True)
class CardFaceChanged:
    """A card changed visual state; ``symbol`` is ``None`` when hidden."""

    card_id: int
    face: CardFace
    symbol: str | None


@dataclass(frozen=True, slots=True)
class CountersChanged:
    moves: int
    elapsed_seconds: int
    remaining_seconds: int | None


@dataclass(frozen=True, slots=True)
class GameEnded:
    result: "GameResult"
    message: str


SessionEvent = Union[SessionStarted, CardFaceChanged, CountersChanged, GameEnded]
Notifier = Callable[[SessionEvent], None]
