"""Top-level package for the Crazy Eights game engine."""

from . import actions, cards, deck, engine, opponents, rules, state

__all__ = [
    "actions",
    "cards",
    "deck",
    "engine",
    "opponents",
    "rules",
    "state",
]
