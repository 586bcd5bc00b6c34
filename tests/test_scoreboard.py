from __future__ import annotations

import pytest

from crazyeights import scoreboard
from crazyeights.cards import cards_from_codes
from crazyeights.state import GameState, Phase, Player


def _summary(number: int, winner: Player | None, human_left: int, ai_left: int) -> scoreboard.GameSummary:
    return scoreboard.GameSummary(
        game_number=number,
        winner=winner,
        turns=10,
        human_cards_left=human_left,
        ai_cards_left=ai_left,
    )


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory()
    history.record(_summary(1, Player.HUMAN, 0, 4))
    history.record(_summary(2, Player.AI, 3, 0))
    history.record(_summary(3, Player.AI, 5, 0))
    history.record(_summary(4, None, 2, 2))

    totals = {total.player: total for total in history.totals()}
    assert len(history.games) == 4
    assert totals[Player.HUMAN].wins == 1
    assert totals[Player.AI].wins == 2
    assert totals[Player.HUMAN].cards_left == 10
    assert totals[Player.AI].cards_left == 6
    assert history.draws == 1
    assert history.next_game_number() == 5


def test_match_history_validates_game_number() -> None:
    history = scoreboard.MatchHistory()
    with pytest.raises(ValueError):
        history.record(_summary(0, Player.HUMAN, 0, 1))


def test_summarise_game_reads_final_state() -> None:
    state = GameState(
        human_hand=(),
        ai_hand=tuple(cards_from_codes("2C 3C")),
        discard_pile=tuple(cards_from_codes("4C")),
        phase=Phase.FINISHED,
        winner=Player.HUMAN,
    )

    summary = scoreboard.summarise_game(7, state, turns=21)

    assert summary.game_number == 7
    assert summary.winner is Player.HUMAN
    assert summary.turns == 21
    assert (summary.human_cards_left, summary.ai_cards_left) == (0, 2)
