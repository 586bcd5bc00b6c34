"""Card abstractions and helpers for Crazy Eights."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Sequence

__all__ = [
    "Suit",
    "Rank",
    "Card",
    "CardIdFactory",
    "WILD_RANK",
    "format_cards",
    "cards_from_codes",
]


class Suit(str, Enum):
    """Enumeration of the four suits, in nomination tie-break order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

_SUIT_LETTERS = {"H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS, "S": Suit.SPADES}


class Rank(str, Enum):
    """Enumeration of card ranks. Ranks carry no ordering in this game."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


WILD_RANK = Rank.EIGHT


@dataclass(slots=True)
class CardIdFactory:
    """Hands out card identities that never repeat within one factory.

    The module-level default factory is shared by the whole process, so cards
    built without an explicit factory never collide. Tests pass a fresh
    factory to get reproducible identifiers.
    """

    start: int = 0
    _counter: Iterator[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._counter = itertools.count(self.start)

    def next_id(self, rank: Rank, suit: Suit) -> str:
        return f"{rank.value}-{suit.value}-{next(self._counter)}"


DEFAULT_ID_FACTORY = CardIdFactory()


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing one physical card.

    Equality and hashing use ``id`` only; two cards with the same rank and
    suit from different decks are different cards.
    """

    id: str
    rank: Rank = field(compare=False)
    suit: Suit = field(compare=False)

    @classmethod
    def create(
        cls,
        rank: Rank | str,
        suit: Suit | str,
        ids: CardIdFactory | None = None,
    ) -> "Card":
        """Build a card with a freshly generated identity."""

        rank = Rank(rank)
        suit = Suit(suit)
        factory = ids if ids is not None else DEFAULT_ID_FACTORY
        return cls(id=factory.next_id(rank, suit), rank=rank, suit=suit)

    @classmethod
    def from_code(cls, code: str, ids: CardIdFactory | None = None) -> "Card":
        """Build a card from a short code such as ``8H`` or ``10D``."""

        code = code.strip().upper()
        if len(code) < 2 or code[-1] not in _SUIT_LETTERS:
            raise ValueError(f"invalid card code '{code}'")
        return cls.create(Rank(code[:-1]), _SUIT_LETTERS[code[-1]], ids)

    @property
    def is_wild(self) -> bool:
        return self.rank is WILD_RANK

    def label(self) -> str:
        """Create a plain display label such as ``10♥``."""

        return f"{self.rank.value}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def format_cards(cards: Sequence[Card]) -> str:
    return " ".join(card.label() for card in cards)


def cards_from_codes(codes: str, ids: CardIdFactory | None = None) -> list[Card]:
    """Build cards from a whitespace separated list of codes."""

    return [Card.from_code(code, ids) for code in codes.split()]
