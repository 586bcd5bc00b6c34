"""Core game state data structures for Crazy Eights."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .cards import Card, Suit

__all__ = ["Player", "Phase", "GameConfig", "GameState", "Snapshot"]


class Player(str, Enum):
    """The two seats at the table."""

    HUMAN = "human"
    AI = "ai"

    @property
    def other(self) -> "Player":
        return Player.AI if self is Player.HUMAN else Player.HUMAN

    @property
    def label(self) -> str:
        return "You" if self is Player.HUMAN else "Opponent"


class Phase(str, Enum):
    """Lifecycle phases of a single game."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    AWAITING_SUIT_CHOICE = "awaiting_suit_choice"
    FINISHED = "finished"


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game."""

    hand_size: int = 8
    reshuffle_threshold: int = 2
    ai_delay: float = 1.5
    history_limit: int = 12

    def __post_init__(self) -> None:
        if self.hand_size <= 0:
            raise ValueError("hand_size must be positive")
        if self.reshuffle_threshold < 0:
            raise ValueError("reshuffle_threshold cannot be negative")
        if self.ai_delay < 0:
            raise ValueError("ai_delay cannot be negative")
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")


@dataclass(frozen=True, slots=True)
class GameState:
    """Authoritative immutable game state.

    Every transition returns a new instance; piles are tuples so a state can
    be kept around for replay without defensive copies. The tail of
    ``draw_pile`` is the top of the pile and the tail of ``discard_pile`` is
    the card in play.
    """

    human_hand: Tuple[Card, ...] = ()
    ai_hand: Tuple[Card, ...] = ()
    draw_pile: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    active_suit: Suit | None = None
    turn: Player = Player.HUMAN
    phase: Phase = Phase.NOT_STARTED
    winner: Player | None = None
    history: Tuple[str, ...] = ()
    config: GameConfig = field(default_factory=GameConfig, compare=False)

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def last_event(self) -> str:
        return self.history[-1] if self.history else ""

    @property
    def total_cards(self) -> int:
        return len(self.human_hand) + len(self.ai_hand) + len(self.draw_pile) + len(self.discard_pile)

    def hand(self, player: Player) -> Tuple[Card, ...]:
        return self.human_hand if player is Player.HUMAN else self.ai_hand

    def find_card(self, player: Player, card_id: str) -> Card | None:
        for card in self.hand(player):
            if card.id == card_id:
                return card
        return None


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view handed to the host for rendering.

    The draw pile is reduced to its size; its order is hidden information.
    """

    human_hand: Tuple[Card, ...]
    ai_hand: Tuple[Card, ...]
    draw_pile_size: int
    discard_pile: Tuple[Card, ...]
    active_suit: Suit | None
    turn: Player
    phase: Phase
    winner: Player | None
    last_event: str
    history: Tuple[str, ...]

    @classmethod
    def from_state(cls, state: GameState) -> "Snapshot":
        return cls(
            human_hand=state.human_hand,
            ai_hand=state.ai_hand,
            draw_pile_size=len(state.draw_pile),
            discard_pile=state.discard_pile,
            active_suit=state.active_suit,
            turn=state.turn,
            phase=state.phase,
            winner=state.winner,
            last_event=state.last_event,
            history=state.history,
        )

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    def hand(self, player: Player) -> Tuple[Card, ...]:
        return self.human_hand if player is Player.HUMAN else self.ai_hand

    @property
    def ai_to_act(self) -> bool:
        """True when the host should invoke the opponent policy."""

        return self.phase is Phase.IN_PROGRESS and self.turn is Player.AI
