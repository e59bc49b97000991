"""Display helpers shared by the result record and the views."""

from __future__ import annotations

from typing import Final

from .state import SessionConfig, SessionState

__all__ = ["NO_COUNTDOWN", "format_clock", "format_remaining", "board_label"]

NO_COUNTDOWN: Final[str] = "--:--"


def format_clock(seconds: int | float) -> str:
    """Format ``seconds`` as zero-padded ``mm:ss``."""

    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_remaining(state: SessionState) -> str:
    if state.remaining_seconds is None:
        return NO_COUNTDOWN
    return format_clock(state.remaining_seconds)


def board_label(config: SessionConfig) -> str:
    return f"{config.size}x{config.size}"
