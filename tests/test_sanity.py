"""Sanity tests ensuring the scaffolding imports correctly."""

from __future__ import annotations

import importlib

import pytest


@pytest.mark.parametrize(
    "module_name",
    [
        "pairs",
        "pairs.labels",
        "pairs.deck",
        "pairs.state",
        "pairs.engine",
        "pairs.session",
        "pairs.simulation",
        "pairs.cli.main",
        "pairs.cli.textual",
    ],
)
def test_modules_import(module_name: str) -> None:
    """Ensure all foundational modules can be imported."""

    assert importlib.import_module(module_name)
