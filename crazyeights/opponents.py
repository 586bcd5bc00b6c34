"""Greedy opponent policy for the automated seat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .actions import Action, DrawAction, PlayAction, apply_action
from .cards import Card, Suit
from .engine import CrazyEightsGame, Transition
from .logging_utils import get_logger
from .rules import is_legal
from .state import Phase, Player

__all__ = ["OpponentPolicy", "nominate_suit", "take_turn", "play_turn"]

logger = get_logger(__name__)


def nominate_suit(cards: Sequence[Card], suit_order: Sequence[Suit] = tuple(Suit)) -> Suit:
    """Return the most common suit in ``cards``; ties go to the earliest in ``suit_order``."""

    counts = {suit: 0 for suit in suit_order}
    for card in cards:
        if card.suit in counts:
            counts[card.suit] += 1
    best = suit_order[0]
    for suit in suit_order[1:]:
        if counts[suit] > counts[best]:
            best = suit
    return best


@dataclass(slots=True)
class OpponentPolicy:
    """One-ply greedy policy: keep eights in reserve, then call the longest suit.

    The policy is deterministic in its inputs so it can be asserted on
    directly in tests.
    """

    suit_order: tuple[Suit, ...] = tuple(Suit)

    def choose_move(
        self,
        hand: Sequence[Card],
        top_card: Card | None,
        active_suit: Suit | None,
    ) -> Action:
        """Return the play to make, or ``DrawAction`` when nothing is playable."""

        candidates = [card for card in hand if is_legal(card, top_card, active_suit)]
        if not candidates:
            return DrawAction()

        chosen = next((card for card in candidates if not card.is_wild), candidates[0])
        if not chosen.is_wild:
            return PlayAction(card_id=chosen.id)

        remaining = [card for card in hand if card.id != chosen.id]
        return PlayAction(card_id=chosen.id, suit=nominate_suit(remaining, self.suit_order))


def take_turn(game: CrazyEightsGame, policy: OpponentPolicy | None = None, player: Player = Player.AI) -> Transition:
    """Issue a single policy-chosen intent for ``player``.

    Driving the human seat is supported for self-play: an eight played there
    is followed by the matching suit choice.
    """

    policy = policy if policy is not None else OpponentPolicy()
    state = game.state
    action = policy.choose_move(state.hand(player), state.top_card, state.active_suit)
    logger.debug("%s policy chose %r", player.value, action)
    transition = apply_action(game, player, action)
    if (
        transition.ok
        and isinstance(action, PlayAction)
        and action.suit is not None
        and transition.snapshot.phase is Phase.AWAITING_SUIT_CHOICE
    ):
        transition = game.resolve_suit_choice(action.suit)
    return transition


def play_turn(
    game: CrazyEightsGame,
    policy: OpponentPolicy | None = None,
    player: Player = Player.AI,
) -> list[Transition]:
    """Act for ``player`` until the turn passes or the game ends."""

    transitions: list[Transition] = []
    while game.state.phase is Phase.IN_PROGRESS and game.state.turn is player:
        transition = take_turn(game, policy, player)
        transitions.append(transition)
        if not transition.ok:
            break
    return transitions
