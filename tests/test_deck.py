from __future__ import annotations

import random
from collections import Counter

from crazyeights import deck
from crazyeights.cards import CardIdFactory, Rank, Suit


def test_build_produces_full_deck() -> None:
    cards = deck.build(CardIdFactory())

    assert len(cards) == deck.DECK_SIZE == 52
    assert len({card.id for card in cards}) == 52
    assert {(card.rank, card.suit) for card in cards} == {(rank, suit) for suit in Suit for rank in Rank}


def test_shuffle_returns_permutation_without_mutating_input() -> None:
    cards = deck.build(CardIdFactory())
    original = list(cards)

    shuffled = deck.shuffle(cards, random.Random(42))

    assert cards == original
    assert sorted(card.id for card in shuffled) == sorted(card.id for card in cards)
    assert shuffled != cards


def test_shuffle_is_reproducible_with_seed() -> None:
    cards = deck.build(CardIdFactory())
    assert deck.shuffle(cards, random.Random(5)) == deck.shuffle(cards, random.Random(5))


def test_shuffle_handles_tiny_inputs() -> None:
    assert deck.shuffle([], random.Random(1)) == []
    single = deck.build(CardIdFactory())[:1]
    assert deck.shuffle(single, random.Random(1)) == single


def test_shuffle_positions_are_uniform() -> None:
    cards = deck.build(CardIdFactory())[:4]
    rng = random.Random(2024)
    trials = 24000
    counts = Counter(tuple(card.id for card in deck.shuffle(cards, rng)) for _ in range(trials))

    # 4! orderings, each expected 1000 times.
    assert len(counts) == 24
    for occurrences in counts.values():
        assert 850 < occurrences < 1150


def test_new_shuffled_deck_uses_injected_random_source() -> None:
    first = deck.new_shuffled_deck(random.Random(9), CardIdFactory())
    second = deck.new_shuffled_deck(random.Random(9), CardIdFactory())
    assert [card.id for card in first] == [card.id for card in second]
