from __future__ import annotations

import random

import pytest

from crazyeights.actions import DrawAction, PlayAction
from crazyeights.cards import Card, CardIdFactory, Suit, cards_from_codes
from crazyeights.engine import CrazyEightsGame
from crazyeights.opponents import OpponentPolicy, nominate_suit, play_turn, take_turn
from crazyeights.state import GameState, Phase, Player


def _hand(codes: str) -> list[Card]:
    return cards_from_codes(codes, CardIdFactory())


def _game(human: str, ai: str, draw: str, discard: str, *, turn: Player = Player.AI) -> CrazyEightsGame:
    ids = CardIdFactory()
    state = GameState(
        human_hand=tuple(cards_from_codes(human, ids)),
        ai_hand=tuple(cards_from_codes(ai, ids)),
        draw_pile=tuple(cards_from_codes(draw, ids)),
        discard_pile=tuple(cards_from_codes(discard, ids)),
        turn=turn,
        phase=Phase.IN_PROGRESS,
    )
    return CrazyEightsGame.from_state(state, rng=random.Random(0))


def test_policy_prefers_non_wild_in_hand_order() -> None:
    hand = _hand("5H 5C 8D")
    top = Card.from_code("5S")

    move = OpponentPolicy().choose_move(hand, top, None)

    assert move == PlayAction(card_id=hand[0].id)


def test_policy_draws_without_candidates() -> None:
    hand = _hand("2H 3C KD")
    assert OpponentPolicy().choose_move(hand, Card.from_code("9S"), None) == DrawAction()


def test_policy_respects_active_suit() -> None:
    hand = _hand("7S 4H")
    top = Card.from_code("9D")

    move = OpponentPolicy().choose_move(hand, top, Suit.HEARTS)

    assert move == PlayAction(card_id=hand[1].id)


def test_policy_plays_eight_last_and_calls_longest_suit() -> None:
    hand = _hand("KD 8S 2C 3C JD 9C")
    top = Card.from_code("5H")

    move = OpponentPolicy().choose_move(hand, top, None)

    assert move == PlayAction(card_id=hand[1].id, suit=Suit.CLUBS)


def test_policy_is_deterministic() -> None:
    hand = _hand("8S 8H 2D")
    top = Card.from_code("5C")
    policy = OpponentPolicy()
    assert policy.choose_move(hand, top, None) == policy.choose_move(hand, top, None)


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        ("2S 3S 4C", Suit.SPADES),
        ("2S 2C", Suit.CLUBS),
        ("2S 2C 2H 2D", Suit.HEARTS),
        ("", Suit.HEARTS),
        ("JD QS", Suit.DIAMONDS),
    ],
)
def test_nominate_suit_tie_break(codes: str, expected: Suit) -> None:
    assert nominate_suit(_hand(codes)) is expected


def test_nominate_suit_excludes_played_eight() -> None:
    hand = _hand("8H 2S")
    move = OpponentPolicy().choose_move(hand, Card.from_code("KC"), None)
    assert move == PlayAction(card_id=hand[0].id, suit=Suit.SPADES)


def test_custom_suit_order_changes_tie_break() -> None:
    policy = OpponentPolicy(suit_order=(Suit.SPADES, Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS))
    hand = _hand("8D 2H 2S")
    move = policy.choose_move(hand, Card.from_code("KC"), None)
    assert move == PlayAction(card_id=hand[0].id, suit=Suit.SPADES)


def test_take_turn_plays_matching_card() -> None:
    game = _game("2H 3H", "5H 5C 8D", "4S 6S", "5S")

    transition = take_turn(game)

    assert transition.ok
    assert transition.snapshot.top_card.label() == "5♥"
    assert transition.snapshot.turn is Player.HUMAN
    assert len(transition.snapshot.ai_hand) == 2


def test_take_turn_wild_sets_suit_atomically() -> None:
    game = _game("2H 3H", "8D 2C 3C", "4S 6S", "KH")

    transition = take_turn(game)

    assert transition.snapshot.active_suit is Suit.CLUBS
    assert transition.snapshot.phase is Phase.IN_PROGRESS
    assert transition.snapshot.turn is Player.HUMAN


def test_take_turn_for_human_seat_resolves_suit() -> None:
    game = _game("8D 2C 3C", "2H 3H", "4S 6S", "KH", turn=Player.HUMAN)

    transition = take_turn(game, player=Player.HUMAN)

    assert transition.ok
    assert transition.snapshot.active_suit is Suit.CLUBS
    assert transition.snapshot.turn is Player.AI


def test_play_turn_draws_then_plays_drawn_card() -> None:
    # Top of the draw pile is the last code: 7S matches the spade on the discard.
    game = _game("2H 3H", "2D 3D", "4C 6C 9C 7S", "5S")

    transitions = play_turn(game)

    assert len(transitions) == 2
    assert all(transition.ok for transition in transitions)
    snapshot = game.snapshot
    assert snapshot.top_card.label() == "7♠"
    assert snapshot.turn is Player.HUMAN
    assert len(snapshot.ai_hand) == 2


def test_play_turn_stops_when_drawn_card_is_unplayable() -> None:
    game = _game("2H 3H", "2D 3D", "4C 6C 9C 7H", "5S")

    transitions = play_turn(game)

    assert len(transitions) == 1
    assert game.snapshot.turn is Player.HUMAN
    assert len(game.snapshot.ai_hand) == 3


def test_play_turn_forced_pass_when_nothing_to_draw() -> None:
    game = _game("2H 3H", "2D 3D", "", "5S")

    transitions = play_turn(game)

    assert len(transitions) == 1
    assert not transitions[0].ok
    assert game.snapshot.turn is Player.HUMAN


def test_play_turn_is_noop_on_human_turn() -> None:
    game = _game("2H 3H", "2D 3D", "4C", "5S", turn=Player.HUMAN)
    assert play_turn(game) == []
