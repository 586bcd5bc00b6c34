"""Intent types and legal action generation for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .cards import Suit
from .engine import CrazyEightsGame, Transition, legal_card_ids
from .state import GameState, Player

__all__ = ["PlayAction", "DrawAction", "Action", "legal_play_actions", "apply_action", "describe_action"]


@dataclass(frozen=True)
class PlayAction:
    """Play ``card_id``; ``suit`` is the nomination when the card is an eight."""

    card_id: str
    suit: Suit | None = None


@dataclass(frozen=True)
class DrawAction:
    """Draw the top card of the draw pile."""


Action = Union[PlayAction, DrawAction]


def legal_play_actions(state: GameState, player: Player) -> list[PlayAction]:
    """Return play actions available to ``player`` in hand order."""

    playable = legal_card_ids(state, player)
    return [PlayAction(card_id=card.id) for card in state.hand(player) if card.id in playable]


def apply_action(game: CrazyEightsGame, player: Player, action: Action) -> Transition:
    """Issue ``action`` to ``game`` on behalf of ``player``."""

    if isinstance(action, DrawAction):
        return game.attempt_draw(player)
    if isinstance(action, PlayAction):
        return game.attempt_play(player, action.card_id, action.suit)
    raise ValueError(f"Unknown action {action!r}")  # pragma: no cover - defensive branch


def describe_action(state: GameState, player: Player, action: Action) -> str:
    if isinstance(action, DrawAction):
        return "Draw a card"
    card = state.find_card(player, action.card_id)
    label = card.label() if card is not None else action.card_id
    if action.suit is not None:
        return f"Play {label} and call {action.suit.value}"
    return f"Play {label}"
