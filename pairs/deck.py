"""Card values and shuffled deck assembly."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Protocol

from .labels import LabelGenerator

__all__ = ["Card", "Shuffler", "DeckBuilder", "symbol_counts"]


@dataclass(slots=True)
class Card:
    """A single card on the board.

    ``matched`` flips from ``False`` to ``True`` once a pair is found and never
    goes back.
    """

    id: int
    symbol: str
    matched: bool = False

    def mark_matched(self) -> None:
        self.matched = True


class Shuffler(Protocol):
    """Anything that can permute a list in place, e.g. :class:`random.Random`."""

    def shuffle(self, x: list[str]) -> None:  # pragma: no cover - protocol
        ...


class DeckBuilder:
    """Build decks of paired cards with an injectable random source."""

    def __init__(
        self,
        rng: Shuffler | None = None,
        labels: LabelGenerator | None = None,
    ) -> None:
        self.rng: Shuffler = rng if rng is not None else random.Random()
        self.labels = labels if labels is not None else LabelGenerator()

    def build(self, total_pairs: int) -> list[Card]:
        """Return ``2 * total_pairs`` shuffled cards with sequential ids."""

        symbols = self.labels.generate(total_pairs)
        pool = symbols + symbols
        # random.Random.shuffle is a Fisher-Yates permutation.
        self.rng.shuffle(pool)
        return [Card(id=idx, symbol=symbol) for idx, symbol in enumerate(pool)]


def symbol_counts(deck: Iterable[Card]) -> dict[str, int]:
    """Return how many times each symbol appears in ``deck``."""

    counts: dict[str, int] = {}
    for card in deck:
        counts[card.symbol] = counts.get(card.symbol, 0) + 1
    return counts
