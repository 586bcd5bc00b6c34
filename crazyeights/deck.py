"""Deck assembly and shuffling utilities."""

from __future__ import annotations

import random
from typing import List, Sequence

from .cards import Card, CardIdFactory, Rank, Suit

__all__ = ["DECK_SIZE", "build", "shuffle", "new_shuffled_deck"]

DECK_SIZE = len(Suit) * len(Rank)


def build(ids: CardIdFactory | None = None) -> List[Card]:
    """Return the 52 cards of a standard deck in suit-major order."""

    return [Card.create(rank, suit, ids) for suit in Suit for rank in Rank]


def shuffle(cards: Sequence[Card], rng: random.Random | None = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards`` (Fisher-Yates).

    ``cards`` is left untouched. Pass a seeded ``random.Random`` to make the
    permutation reproducible.
    """

    rng = rng if rng is not None else random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def new_shuffled_deck(
    rng: random.Random | None = None,
    ids: CardIdFactory | None = None,
) -> List[Card]:
    deck = build(ids)
    if not deck:  # pragma: no cover - build always yields DECK_SIZE cards
        raise ValueError("deck construction produced no cards")
    return shuffle(deck, rng)
