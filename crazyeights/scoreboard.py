"""Helpers for tracking results across consecutive games in one session."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import GameState, Player

__all__ = ["GameSummary", "SeatTotal", "MatchHistory", "summarise_game"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Summary captured after a single game."""

    game_number: int
    winner: Player | None
    turns: int
    human_cards_left: int
    ai_cards_left: int


@dataclass(frozen=True, slots=True)
class SeatTotal:
    """Aggregate totals for one seat."""

    player: Player
    wins: int
    cards_left: int


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates game summaries for a session."""

    games: list[GameSummary] = field(default_factory=list)
    _wins: dict[Player, int] = field(init=False, repr=False)
    _cards_left: dict[Player, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._wins = {player: 0 for player in Player}
        self._cards_left = {player: 0 for player in Player}

    def record(self, summary: GameSummary) -> None:
        """Record ``summary`` and update cumulative totals."""

        if summary.game_number <= 0:
            raise ValueError("game_number must be positive")
        self.games.append(summary)
        self._cards_left[Player.HUMAN] += summary.human_cards_left
        self._cards_left[Player.AI] += summary.ai_cards_left
        if summary.winner is not None:
            self._wins[summary.winner] += 1

    @property
    def draws(self) -> int:
        return sum(1 for game in self.games if game.winner is None)

    def next_game_number(self) -> int:
        return len(self.games) + 1

    def totals(self) -> list[SeatTotal]:
        """Return the cumulative totals for each seat."""

        return [
            SeatTotal(player=player, wins=self._wins[player], cards_left=self._cards_left[player])
            for player in Player
        ]


def summarise_game(game_number: int, state: GameState, turns: int) -> GameSummary:
    return GameSummary(
        game_number=game_number,
        winner=state.winner,
        turns=turns,
        human_cards_left=len(state.human_hand),
        ai_cards_left=len(state.ai_hand),
    )
