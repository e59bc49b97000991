"""Textual front-end for the pairs game."""

from .app import PairsTextualApp, TextualScheduler, run_textual_app

__all__ = ["PairsTextualApp", "TextualScheduler", "run_textual_app"]
