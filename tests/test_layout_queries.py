import pytest

from pyramid_game.actions import PlayerActionService
from pyramid_game.cards import Card, Rank, Suit
from pyramid_game.deck import ordered_deck
from pyramid_game.game import RESERVE_POSITION, GameService, GameSession, NoActiveRound


def start_ordered_game():
    session = GameSession()
    service = GameService(session)
    state = service.new_game("Alice", "Bob", deck=ordered_deck())
    return service, state


def clubs(rank: Rank) -> Card:
    return Card(Suit.CLUBS, rank)


def test_find_card_position_in_pyramid():
    service, _ = start_ordered_game()
    assert service.find_card_position(clubs(Rank.TWO)) == (0, 0)
    assert service.find_card_position(clubs(Rank.SIX)) == (2, 1)
    assert service.find_card_position(Card(Suit.HEARTS, Rank.THREE)) == (6, 6)


def test_find_card_position_reserve_top_and_missing():
    service, state = start_ordered_game()
    actions = PlayerActionService(service.session, service)
    hearts_four = Card(Suit.HEARTS, Rank.FOUR)

    assert service.find_card_position(hearts_four) is None

    actions.reveal_card()
    assert service.find_card_position(hearts_four) == RESERVE_POSITION

    actions.reveal_card()
    assert service.find_card_position(hearts_four) is None
    assert service.find_card_position(Card(Suit.HEARTS, Rank.FIVE)) == RESERVE_POSITION
    assert service.find_card_position(Card(Suit.DIAMONDS, Rank.ACE)) is None


def test_adjacency_within_row():
    service, state = start_ordered_game()

    assert not service.has_adjacent_left_card(0, 0)
    assert not service.has_adjacent_right_card(0, 0)
    assert service.has_adjacent_right_card(3, 0)
    assert not service.has_adjacent_left_card(3, 0)
    assert service.has_adjacent_left_card(3, 3)
    assert not service.has_adjacent_right_card(3, 3)

    state.pyramid.clear(3, 1)
    assert not service.has_adjacent_right_card(3, 0)
    assert not service.has_adjacent_left_card(3, 2)


def test_reveal_adjacent_cards_reveals_only_new_edges():
    service, state = start_ordered_game()

    state.pyramid.clear(4, 1)
    service.reveal_adjacent_cards(4, 1)

    assert state.pyramid.card_at(4, 2).revealed
    assert not state.pyramid.card_at(4, 3).revealed
    assert state.pyramid.card_at(4, 0).revealed


def test_removing_edge_reveals_its_neighbour():
    service, state = start_ordered_game()
    assert not state.pyramid.card_at(5, 1).revealed

    state.pyramid.clear(5, 0)
    service.reveal_adjacent_cards(5, 0)

    assert state.pyramid.card_at(5, 1).revealed
    assert not state.pyramid.card_at(5, 2).revealed


def test_is_pyramid_empty():
    service, state = start_ordered_game()
    assert not service.is_pyramid_empty()
    for row, col, _ in list(state.pyramid.positions()):
        state.pyramid.clear(row, col)
    assert service.is_pyramid_empty()


def test_selectable_cards_are_face_up():
    service, state = start_ordered_game()
    selectable = service.selectable_cards()
    assert len(selectable) == 13
    assert all(card.revealed for card in selectable)


def test_queries_without_round_fail():
    service = GameService()
    with pytest.raises(NoActiveRound):
        service.find_card_position(clubs(Rank.TWO))
    with pytest.raises(NoActiveRound):
        service.has_adjacent_left_card(1, 1)
    with pytest.raises(NoActiveRound):
        service.is_pyramid_empty()
