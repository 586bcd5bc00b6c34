from __future__ import annotations

from crazyeights import actions
from crazyeights.cards import CardIdFactory, Suit, cards_from_codes
from crazyeights.engine import CrazyEightsGame
from crazyeights.state import GameState, Phase, Player


def _make_state(human: str, discard: str, *, turn: Player = Player.HUMAN) -> GameState:
    ids = CardIdFactory()
    return GameState(
        human_hand=tuple(cards_from_codes(human, ids)),
        ai_hand=tuple(cards_from_codes("KS QS", ids)),
        draw_pile=tuple(cards_from_codes("2C 4C 6C", ids)),
        discard_pile=tuple(cards_from_codes(discard, ids)),
        turn=turn,
        phase=Phase.IN_PROGRESS,
    )


def test_legal_play_actions_follow_hand_order() -> None:
    state = _make_state("9D 5C 8S 3H", "3D")

    options = actions.legal_play_actions(state, Player.HUMAN)

    hand = state.human_hand
    assert options == [
        actions.PlayAction(card_id=hand[0].id),
        actions.PlayAction(card_id=hand[2].id),
        actions.PlayAction(card_id=hand[3].id),
    ]


def test_legal_play_actions_empty_off_turn() -> None:
    state = _make_state("9D 5C", "3D", turn=Player.AI)
    assert actions.legal_play_actions(state, Player.HUMAN) == []


def test_apply_action_routes_intents() -> None:
    state = _make_state("9D 5C", "3D")
    game = CrazyEightsGame.from_state(state)

    drawn = actions.apply_action(game, Player.HUMAN, actions.DrawAction())
    assert drawn.ok
    assert len(drawn.snapshot.human_hand) == 3

    game = CrazyEightsGame.from_state(state)
    played = actions.apply_action(game, Player.HUMAN, actions.PlayAction(card_id=state.human_hand[0].id))
    assert played.ok
    assert played.snapshot.top_card == state.human_hand[0]


def test_describe_action() -> None:
    state = _make_state("9D 8S", "3D")
    eight = state.human_hand[1]

    assert actions.describe_action(state, Player.HUMAN, actions.DrawAction()) == "Draw a card"
    assert actions.describe_action(state, Player.HUMAN, actions.PlayAction(card_id=eight.id)) == "Play 8♠"
    assert (
        actions.describe_action(state, Player.HUMAN, actions.PlayAction(card_id=eight.id, suit=Suit.CLUBS))
        == "Play 8♠ and call clubs"
    )
