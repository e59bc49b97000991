from __future__ import annotations

from typing import Callable

import pytest

from pairs.scheduling import ManualScheduler
from pairs.session import SessionController
from pairs.state import GameMode, SessionConfig


class IdentityShuffle:
    """Leave the deck in label order: ids ``i`` and ``i + pairs`` match."""

    def shuffle(self, seq: list[str]) -> None:
        return None


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> SessionController:
    return SessionController(scheduler, rng=IdentityShuffle())


@pytest.fixture
def events(controller: SessionController) -> list[object]:
    captured: list[object] = []
    controller.subscribe(captured.append)
    return captured


@pytest.fixture
def start(controller: SessionController) -> Callable[..., object]:
    def _start(size: int = 4, mode: GameMode = GameMode.CLASSIC):
        return controller.new_game(SessionConfig(size=size, mode=mode))

    return _start
