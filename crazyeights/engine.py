"""Game state machine for a two-seat Crazy Eights game.

The module is split in two layers. The transition functions (``deal``,
``play_card``, ``resolve_suit``, ``draw_card``, ``pass_turn``,
``reshuffle_if_needed``, ``check_winner``) take a :class:`GameState` and
return a new one, raising :class:`~crazyeights.rules.IllegalOperation` when
an intent breaks the rules. :class:`CrazyEightsGame` wraps them for a host:
it owns the current state and the random source, and turns refused intents
into :class:`~crazyeights.rules.Rejection` values instead of exceptions.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, Sequence

from . import deck
from .cards import Card, CardIdFactory, Suit, format_cards
from .logging_utils import get_logger
from .rules import (
    GameAlreadyStarted,
    IllegalDraw,
    IllegalOperation,
    IllegalPlay,
    IllegalSuitChoice,
    Rejection,
    RejectionReason,
    is_legal,
)
from .state import GameConfig, GameState, Phase, Player, Snapshot

__all__ = [
    "Transition",
    "CrazyEightsGame",
    "deal",
    "play_card",
    "resolve_suit",
    "draw_card",
    "pass_turn",
    "reshuffle_if_needed",
    "check_winner",
    "legal_card_ids",
]

logger = get_logger(__name__)


def _with_event(state: GameState, message: str, **changes) -> GameState:
    """Return ``state`` updated with ``changes`` and ``message`` appended to the log."""

    history = (state.history + (message,))[-state.config.history_limit :]
    return replace(state, history=history, **changes)


def _hand_field(player: Player) -> str:
    return "human_hand" if player is Player.HUMAN else "ai_hand"


def _coerce_suit(suit: Suit | str, error: type[IllegalOperation]) -> Suit:
    try:
        return Suit(suit)
    except ValueError:
        raise error(RejectionReason.INVALID_SUIT, f"{suit!r} is not a suit") from None


def _coerce_player(player: Player | str, error: type[IllegalOperation]) -> Player:
    try:
        return Player(player)
    except ValueError:
        raise error(RejectionReason.UNKNOWN_PLAYER, f"{player!r} is not a seat at this table") from None


def _require_turn(state: GameState, player: Player, error: type[IllegalOperation]) -> None:
    if state.phase is not Phase.IN_PROGRESS:
        raise error(RejectionReason.WRONG_PHASE, f"cannot act while the game is {state.phase.value}")
    if state.turn is not player:
        raise error(RejectionReason.NOT_YOUR_TURN, f"it is not the {player.value} player's turn")


def deal(cards: Sequence[Card], config: GameConfig | None = None) -> GameState:
    """Deal a fresh game from ``cards`` in the given order.

    Each seat takes ``hand_size`` cards from the front; the first remaining
    non-eight starts the discard pile (or the first remaining card when every
    remaining card is an eight) and the rest become the draw pile.
    """

    config = config if config is not None else GameConfig()
    cards = list(cards)
    needed = 2 * config.hand_size + 1
    if len(cards) < needed:
        raise ValueError(
            f"deck of {len(cards)} card(s) cannot deal two hands of {config.hand_size} and a starter"
        )
    if len({card.id for card in cards}) != len(cards):
        raise ValueError("deck contains duplicate card identities")

    size = config.hand_size
    human_hand = tuple(cards[:size])
    ai_hand = tuple(cards[size : 2 * size])
    remainder = cards[2 * size :]
    starter_index = next((idx for idx, card in enumerate(remainder) if not card.is_wild), 0)
    starter = remainder.pop(starter_index)

    return GameState(
        human_hand=human_hand,
        ai_hand=ai_hand,
        draw_pile=tuple(remainder),
        discard_pile=(starter,),
        active_suit=None,
        turn=Player.HUMAN,
        phase=Phase.IN_PROGRESS,
        winner=None,
        history=(f"Game started with {starter.label()} face up. Your turn.",),
        config=config,
    )


def play_card(
    state: GameState,
    player: Player,
    card_id: str,
    suit: Suit | str | None = None,
) -> GameState:
    """Play ``card_id`` from ``player``'s hand onto the discard pile.

    An eight played by the human moves the game into the suit-choice phase
    without passing the turn. The automated seat must nominate its suit in
    the same call. ``suit`` is ignored for every other play.
    """

    _require_turn(state, player, IllegalPlay)
    card = state.find_card(player, card_id)
    if card is None:
        raise IllegalPlay(RejectionReason.CARD_NOT_IN_HAND, f"card {card_id!r} is not in the {player.value} hand")
    if not is_legal(card, state.top_card, state.active_suit):
        raise IllegalPlay(RejectionReason.ILLEGAL_CARD, f"{card.label()} cannot be played now")
    if card.is_wild and player is Player.AI and suit is None:
        raise IllegalPlay(RejectionReason.SUIT_REQUIRED, "an eight played by the opponent needs a suit")
    nominated = _coerce_suit(suit, IllegalPlay) if card.is_wild and player is Player.AI else None

    remaining = tuple(held for held in state.hand(player) if held.id != card.id)
    changes = {
        _hand_field(player): remaining,
        "discard_pile": state.discard_pile + (card,),
    }

    if card.is_wild and player is Player.HUMAN:
        next_state = _with_event(
            state,
            f"You played {card.label()}. Choose a suit.",
            active_suit=None,
            phase=Phase.AWAITING_SUIT_CHOICE,
            **changes,
        )
    elif card.is_wild:
        next_state = _with_event(
            state,
            f"Opponent played {card.label()}. New suit: {nominated.value}.",
            active_suit=nominated,
            turn=Player.HUMAN,
            **changes,
        )
    else:
        next_state = _with_event(
            state,
            f"{player.label} played {card.label()}.",
            active_suit=None,
            turn=player.other,
            **changes,
        )
    return check_winner(next_state)


def resolve_suit(state: GameState, suit: Suit | str) -> GameState:
    """Apply the human's suit nomination after an eight and pass the turn."""

    if state.phase is not Phase.AWAITING_SUIT_CHOICE:
        raise IllegalSuitChoice(RejectionReason.WRONG_PHASE, "no suit choice is pending")
    nominated = _coerce_suit(suit, IllegalSuitChoice)
    return _with_event(
        state,
        f"You chose {nominated.value}. Opponent's turn.",
        active_suit=nominated,
        turn=Player.AI,
        phase=Phase.IN_PROGRESS,
    )


def draw_card(state: GameState, player: Player, rng: random.Random | None = None) -> GameState:
    """Move the top draw-pile card into ``player``'s hand.

    The turn stays with ``player`` when the drawn card is playable; otherwise
    it passes. The draw pile is topped up from the discard pile before and
    after the draw when it runs low.
    """

    _require_turn(state, player, IllegalDraw)
    if not state.draw_pile:
        state = reshuffle_if_needed(state, rng)
    if not state.draw_pile:
        raise IllegalDraw(RejectionReason.DRAW_PILE_EMPTY, "no cards left to draw")

    drawn = state.draw_pile[-1]
    playable = is_legal(drawn, state.top_card, state.active_suit)
    if player is Player.HUMAN:
        message = f"You drew {drawn.label()}."
        if playable:
            message += " It can be played."
    else:
        message = "Opponent drew a card."

    next_state = _with_event(
        state,
        message,
        draw_pile=state.draw_pile[:-1],
        turn=player if playable else player.other,
        **{_hand_field(player): state.hand(player) + (drawn,)},
    )
    return reshuffle_if_needed(next_state, rng)


def pass_turn(state: GameState, player: Player) -> GameState:
    """Hand the turn over when ``player`` has nothing to draw."""

    subject = "You pass" if player is Player.HUMAN else "Opponent passes"
    return _with_event(state, f"{subject}: no cards left to draw.", turn=player.other)


def reshuffle_if_needed(state: GameState, rng: random.Random | None = None) -> GameState:
    """Recycle all but the top discard into the draw pile once it runs low."""

    if state.phase is not Phase.IN_PROGRESS:
        return state
    if len(state.draw_pile) > state.config.reshuffle_threshold or len(state.discard_pile) <= 1:
        return state

    top_card = state.discard_pile[-1]
    pool = deck.shuffle(state.draw_pile + state.discard_pile[:-1], rng)
    logger.info("reshuffled %d card(s) into the draw pile", len(pool))
    return _with_event(
        state,
        "Draw pile exhausted; discard pile reshuffled.",
        draw_pile=tuple(pool),
        discard_pile=(top_card,),
    )


def check_winner(state: GameState) -> GameState:
    """Finish the game when either hand is empty."""

    if state.phase in (Phase.NOT_STARTED, Phase.FINISHED):
        return state
    if not state.human_hand:
        winner, message, leftover = Player.HUMAN, "You win!", state.ai_hand
    elif not state.ai_hand:
        winner, message, leftover = Player.AI, "Opponent wins!", state.human_hand
    else:
        return state
    logger.info("game finished, winner=%s, loser holds %s", winner.value, format_cards(leftover))
    return _with_event(state, message, phase=Phase.FINISHED, winner=winner)


def legal_card_ids(state: GameState, player: Player) -> FrozenSet[str]:
    """Return identifiers of cards ``player`` may play right now."""

    if state.phase is not Phase.IN_PROGRESS or state.turn is not player:
        return frozenset()
    top_card = state.top_card
    return frozenset(
        card.id for card in state.hand(player) if is_legal(card, top_card, state.active_suit)
    )


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of a host intent: the resulting snapshot and an optional rejection."""

    snapshot: Snapshot
    rejection: Rejection | None = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


class CrazyEightsGame:
    """Host-facing state machine for one game.

    A finished game accepts no further intents; start a new instance for the
    next game.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        ids: CardIdFactory | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random()
        self.ids = ids
        self._state = GameState(config=self.config)

    @classmethod
    def from_state(cls, state: GameState, *, rng: random.Random | None = None) -> "CrazyEightsGame":
        """Resume play from a previously captured ``state``."""

        game = cls(state.config, rng=rng)
        game._state = state
        return game

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def start(self, cards: Sequence[Card] | None = None) -> Snapshot:
        """Deal a new game, from a freshly shuffled deck unless ``cards`` is given."""

        if self._state.phase is not Phase.NOT_STARTED:
            raise GameAlreadyStarted("game has already been dealt; create a new game instead")
        if cards is None:
            cards = deck.new_shuffled_deck(self.rng, self.ids)
        self._state = deal(cards, self.config)
        logger.info(
            "game started: %d card(s) in the draw pile, starter %s",
            len(self._state.draw_pile),
            self._state.top_card,
        )
        return self.snapshot

    def attempt_play(
        self,
        player: Player | str,
        card_id: str,
        suit: Suit | str | None = None,
    ) -> Transition:
        return self._apply(
            f"{player} plays {card_id}",
            lambda state: play_card(state, _coerce_player(player, IllegalPlay), card_id, suit),
        )

    def resolve_suit_choice(self, suit: Suit | str) -> Transition:
        return self._apply(f"suit choice {suit}", lambda state: resolve_suit(state, suit))

    def attempt_draw(self, player: Player | str) -> Transition:
        try:
            seat = _coerce_player(player, IllegalDraw)
            self._state = draw_card(self._state, seat, self.rng)
        except IllegalDraw as exc:
            if exc.reason is RejectionReason.DRAW_PILE_EMPTY:
                self._state = pass_turn(self._state, seat)
            logger.debug("rejected %s draw: %s", player, exc)
            return Transition(self.snapshot, exc.to_rejection())
        logger.debug("accepted %s draw", seat.value)
        return Transition(self.snapshot)

    def reshuffle_if_needed(self) -> Snapshot:
        self._state = reshuffle_if_needed(self._state, self.rng)
        return self.snapshot

    def legal_moves(self, player: Player | str) -> FrozenSet[str]:
        try:
            seat = Player(player)
        except ValueError:
            return frozenset()
        return legal_card_ids(self._state, seat)

    def _apply(self, intent: str, transition: Callable[[GameState], GameState]) -> Transition:
        try:
            self._state = transition(self._state)
        except IllegalOperation as exc:
            logger.debug("rejected %s: %s", intent, exc)
            return Transition(self.snapshot, exc.to_rejection())
        logger.debug("accepted %s", intent)
        return Transition(self.snapshot)
