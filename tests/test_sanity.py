"""Sanity tests ensuring the package imports correctly."""

from __future__ import annotations

import importlib

import pytest


@pytest.mark.parametrize(
    "module_name",
    [
        "crazyeights",
        "crazyeights.cards",
        "crazyeights.deck",
        "crazyeights.rules",
        "crazyeights.state",
        "crazyeights.engine",
        "crazyeights.opponents",
        "crazyeights.simulation",
        "crazyeights.cli.main",
    ],
)
def test_modules_import(module_name: str) -> None:
    """Ensure all foundational modules can be imported."""

    assert importlib.import_module(module_name)


@pytest.mark.parametrize(
    "module_name",
    ["crazyeights.engine", "crazyeights.opponents", "crazyeights.simulation", "crazyeights.cli.main"],
)
def test_module_loggers_are_named_after_modules(module_name: str) -> None:
    from crazyeights.logging_utils import get_logger

    module = importlib.import_module(module_name)
    assert module.logger is get_logger(module_name)
