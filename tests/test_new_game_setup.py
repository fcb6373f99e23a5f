from random import Random

import pytest

from pyramid_game.cards import Card, Rank, Suit
from pyramid_game.deck import InvalidSetup, build_deck, ordered_deck
from pyramid_game.events import GameStarted
from pyramid_game.game import GameService, GameSession
from pyramid_game.layout import Pyramid
from pyramid_game.rules_schema import RuleSet
from pyramid_game.state import RoundPhase


def test_build_deck_has_every_card_once():
    deck = build_deck(Random(3))
    assert len(deck) == 52
    assert set(deck) == set(ordered_deck())


def test_new_game_deals_pyramid_and_draw_stack():
    service = GameService()
    state = service.new_game("Alice", "Bob")

    assert state.player1.name == "Alice"
    assert state.player2.name == "Bob"
    assert state.current_player == 1
    assert state.passed is False
    assert state.phase is RoundPhase.SETUP
    assert state.scores() == (0, 0)
    assert state.reserve_stack.empty

    assert state.pyramid.height == 7
    for row_index, row in enumerate(state.pyramid.rows):
        assert len(row) == row_index + 1
    assert state.pyramid.occupied_count() == 28
    assert state.draw_stack.size == 24

    pyramid_cards = set(state.pyramid.cards())
    draw_cards = set(state.draw_stack.peek_all())
    assert pyramid_cards.isdisjoint(draw_cards)
    assert pyramid_cards | draw_cards == set(ordered_deck())


def test_only_row_edges_start_revealed():
    state = GameService().new_game("Alice", "Bob")

    for row_index, row in enumerate(state.pyramid.rows):
        for col_index in range(len(row)):
            card = state.pyramid.card_at(row_index, col_index)
            assert card is not None
            assert card.revealed == (col_index in (0, row_index))
    assert not any(card.revealed for card in state.draw_stack)


def test_ordered_deck_scenario():
    service = GameService()
    state = service.new_game("Alice", "Bob", deck=ordered_deck())

    assert state.pyramid.card_at(0, 0) == Card(Suit.CLUBS, Rank.TWO)
    assert state.pyramid.card_at(0, 0).revealed

    bottom = [state.pyramid.card_at(6, col) for col in range(7)]
    assert [card.revealed for card in bottom] == [True, False, False, False, False, False, True]
    assert bottom[0] == Card(Suit.SPADES, Rank.TEN)
    assert bottom[-1] == Card(Suit.HEARTS, Rank.THREE)

    assert state.draw_stack.size == 24
    assert state.draw_stack.peek() == Card(Suit.HEARTS, Rank.FOUR)


def test_same_seed_deals_same_round():
    first = GameService(GameSession(rules=RuleSet(seed=7))).new_game("A", "B")
    second = GameService(GameSession(rules=RuleSet(seed=7))).new_game("A", "B")
    assert first.pyramid.cards() == second.pyramid.cards()
    assert first.draw_stack.peek_all() == second.draw_stack.peek_all()


def test_new_game_replaces_previous_round_and_emits_start():
    session = GameSession()
    events = []
    session.events.subscribe(events.append)
    service = GameService(session)

    old = service.new_game("Alice", "Bob")
    old.player1.score = 5
    new = service.new_game("Carol", "Dave")

    assert session.state is new
    assert new.scores() == (0, 0)
    assert events == [GameStarted(("Alice", "Bob")), GameStarted(("Carol", "Dave"))]


def test_pyramid_needs_enough_cards():
    with pytest.raises(InvalidSetup):
        Pyramid.from_cards(ordered_deck()[:27])


def test_new_game_rejects_bad_input():
    service = GameService()
    with pytest.raises(InvalidSetup):
        service.new_game("", "Bob")
    with pytest.raises(InvalidSetup):
        service.new_game("Alice", "Bob", deck=ordered_deck()[:51])
    deck = ordered_deck()
    deck[1] = deck[0]
    with pytest.raises(InvalidSetup):
        service.new_game("Alice", "Bob", deck=deck)
    assert not service.session.has_active_round()


def test_smaller_pyramid_from_rules():
    service = GameService(GameSession(rules=RuleSet(pyramid_rows=3)))
    state = service.new_game("Alice", "Bob")
    assert state.pyramid.occupied_count() == 6
    assert state.draw_stack.size == 46
