"""Rule utilities and rejection types for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cards import WILD_RANK, Card, Suit

__all__ = [
    "RejectionReason",
    "Rejection",
    "IllegalOperation",
    "IllegalPlay",
    "IllegalDraw",
    "IllegalSuitChoice",
    "GameAlreadyStarted",
    "effective_suit",
    "is_legal",
]


class RejectionReason(str, Enum):
    """Reason tags attached to refused intents."""

    NOT_YOUR_TURN = "not_your_turn"
    WRONG_PHASE = "wrong_phase"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    ILLEGAL_CARD = "illegal_card"
    DRAW_PILE_EMPTY = "draw_pile_empty"
    SUIT_REQUIRED = "suit_required"
    INVALID_SUIT = "invalid_suit"
    UNKNOWN_PLAYER = "unknown_player"


@dataclass(frozen=True, slots=True)
class Rejection:
    """Value returned to the host when an intent is refused."""

    reason: RejectionReason
    message: str


class IllegalOperation(RuntimeError):
    """Raised by transition functions when an intent breaks the rules."""

    def __init__(self, reason: RejectionReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason

    def to_rejection(self) -> Rejection:
        return Rejection(reason=self.reason, message=str(self))


class IllegalPlay(IllegalOperation):
    """Raised when a player attempts to play a card illegally."""


class IllegalDraw(IllegalOperation):
    """Raised when a player attempts to draw illegally."""


class IllegalSuitChoice(IllegalOperation):
    """Raised when a suit nomination is out of phase or names no suit."""


class GameAlreadyStarted(RuntimeError):
    """Raised when ``start`` is called on a game that has already been dealt."""


def effective_suit(top_card: Card, active_suit: Suit | None) -> Suit:
    """Return the suit currently governing play."""

    return active_suit if active_suit is not None else top_card.suit


def is_legal(card: Card, top_card: Card | None, active_suit: Suit | None) -> bool:
    """Return ``True`` when ``card`` may be played onto ``top_card``.

    Eights are always playable. Otherwise the card must follow the active
    suit (the nominated suit if one is in effect, else the top card's suit)
    or match the top card's rank.
    """

    if card.rank is WILD_RANK:
        return True
    if top_card is None:
        return True
    return card.suit is effective_suit(top_card, active_suit) or card.rank is top_card.rank
