"""Headless self-play harness pitting the opponent policy against itself."""

from __future__ import annotations

import random
from dataclasses import dataclass

from . import scoreboard
from .engine import CrazyEightsGame
from .logging_utils import get_logger
from .opponents import OpponentPolicy, take_turn
from .state import GameConfig, Phase, Player

__all__ = ["SimulationReport", "play_headless_game", "run_simulations"]

logger = get_logger(__name__)

DEFAULT_TURN_LIMIT = 500


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Aggregate results of a batch of self-play games."""

    history: scoreboard.MatchHistory
    human_wins: int
    ai_wins: int
    draws: int


def play_headless_game(
    game_number: int,
    rng: random.Random,
    *,
    config: GameConfig | None = None,
    policy: OpponentPolicy | None = None,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> scoreboard.GameSummary:
    """Play one game with ``policy`` on both seats.

    A game still running after ``turn_limit`` intents is recorded without a
    winner; both seats can be stuck passing once every card is in a hand.
    """

    policy = policy if policy is not None else OpponentPolicy()
    game = CrazyEightsGame(config, rng=rng)
    game.start()
    dealt = game.state.total_cards

    turns = 0
    while game.state.phase is not Phase.FINISHED and turns < turn_limit:
        take_turn(game, policy, game.state.turn)
        turns += 1
        if game.state.total_cards != dealt:  # pragma: no cover - conservation guard
            raise RuntimeError("card conservation violated during simulation")

    if game.state.phase is not Phase.FINISHED:
        logger.info("game %d stopped after %d turn(s) without a winner", game_number, turns)
    return scoreboard.summarise_game(game_number, game.state, turns)


def run_simulations(
    games: int,
    *,
    seed: int = 123,
    config: GameConfig | None = None,
    turn_limit: int = DEFAULT_TURN_LIMIT,
) -> SimulationReport:
    """Run ``games`` self-play games returning aggregate statistics."""

    if games <= 0:
        raise ValueError("games must be positive")

    rng = random.Random(seed)
    policy = OpponentPolicy()
    history = scoreboard.MatchHistory()
    for game_number in range(1, games + 1):
        summary = play_headless_game(
            game_number,
            rng,
            config=config,
            policy=policy,
            turn_limit=turn_limit,
        )
        history.record(summary)

    totals = {total.player: total.wins for total in history.totals()}
    return SimulationReport(
        history=history,
        human_wins=totals[Player.HUMAN],
        ai_wins=totals[Player.AI],
        draws=history.draws,
    )
