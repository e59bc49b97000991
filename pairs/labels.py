"""Symbol label generation for deck construction."""

from __future__ import annotations

import string
from typing import Final

__all__ = ["BASE_ALPHABET", "LabelGenerator", "generate_labels"]

BASE_ALPHABET: Final[tuple[str, ...]] = tuple(string.ascii_uppercase)


class LabelGenerator:
    """Produce unique card symbols in a stable order.

    The first 26 labels are the single letters ``A``..``Z``. Further labels are
    composites of a prefix letter and a base letter: ``AA``, ``AB``, ... then
    ``BA`` and so on.
    """

    def __init__(self, alphabet: tuple[str, ...] = BASE_ALPHABET) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self.alphabet = alphabet

    @property
    def capacity(self) -> int:
        """Return how many distinct labels this generator can produce."""

        base = len(self.alphabet)
        return base + base * base

    def label_at(self, index: int) -> str:
        base = len(self.alphabet)
        if index < base:
            return self.alphabet[index]
        prefix, letter = divmod(index - base, base)
        if prefix >= base:
            raise ValueError(f"label index {index} exceeds generator capacity")
        return self.alphabet[prefix] + self.alphabet[letter]

    def generate(self, n: int) -> list[str]:
        """Return ``n`` distinct labels; ``n <= 0`` yields an empty list."""

        return [self.label_at(idx) for idx in range(max(n, 0))]


def generate_labels(n: int) -> list[str]:
    """Shortcut for :meth:`LabelGenerator.generate` over ``A``..``Z``."""

    return LabelGenerator().generate(n)
