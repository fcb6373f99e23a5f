"""Convenience service layer for UI consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .actions import PlayerActionService
from .cards import Card, card_label, deserialize_card, serialize_card
from .events import Subscriber
from .game import GameService, GameSession
from .rules_schema import RuleSet
from .state import GameState


@dataclass
class CardView:
    card: dict
    label: str
    short: str


@dataclass
class PlayerView:
    name: str
    score: int
    passed: bool


@dataclass
class GameView:
    phase: str
    current_player: int
    players: list[PlayerView]
    # Face-down cards are reported as hidden; cleared slots are None.
    pyramid: list[list[Optional[CardView | str]]]
    draw_size: int
    reserve_size: int
    reserve_top: Optional[CardView]
    selectable: list[CardView]
    finished: bool
    winner: Optional[str]


HIDDEN = "hidden"


class PyramidService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None, *, rules: Optional[RuleSet] = None) -> None:
        if session is None:
            session = GameSession(rules=rules) if rules is not None else GameSession()
        self.session = session
        self.game = GameService(self.session)
        self.actions = PlayerActionService(self.session, self.game)

    def subscribe(self, subscriber: Subscriber) -> None:
        self.session.events.subscribe(subscriber)

    # Session lifecycle -------------------------------------------------

    def start_new_game(self, player1_name: str, player2_name: str) -> GameView:
        self.game.new_game(player1_name, player2_name)
        return self.get_view()

    def has_active_game(self) -> bool:
        return self.session.has_active_round()

    # Actions -----------------------------------------------------------

    def pass_turn(self) -> GameView:
        self.actions.pass_turn()
        return self.get_view()

    def reveal_card(self) -> GameView:
        self.actions.reveal_card()
        return self.get_view()

    def remove_pair(self, card1: dict, card2: dict) -> GameView:
        self.actions.remove_pair(deserialize_card(card1), deserialize_card(card2))
        return self.get_view()

    # Views -------------------------------------------------------------

    def get_view(self) -> GameView:
        state = self.session.require_state()
        winner = state.winner() if state.is_finished() else None
        top = state.reserve_stack.top()
        return GameView(
            phase=state.phase.name.lower(),
            current_player=state.current_player,
            players=[PlayerView(name=p.name, score=p.score, passed=p.passed) for p in state.players],
            pyramid=self._pyramid_rows(state),
            draw_size=state.draw_stack.size,
            reserve_size=state.reserve_stack.size,
            reserve_top=_card_view(top) if top is not None else None,
            selectable=[_card_view(card) for card in self.game.selectable_cards()],
            finished=state.is_finished(),
            winner=winner.name if winner else None,
        )

    # Helpers -----------------------------------------------------------

    def _pyramid_rows(self, state: GameState) -> list[list[Optional[CardView | str]]]:
        rows: list[list[Optional[CardView | str]]] = []
        for row_index, row in enumerate(state.pyramid.rows):
            entries: list[Optional[CardView | str]] = []
            for col_index in range(len(row)):
                card = state.pyramid.card_at(row_index, col_index)
                if card is None:
                    entries.append(None)
                elif card.revealed:
                    entries.append(_card_view(card))
                else:
                    entries.append(HIDDEN)
            rows.append(entries)
        return rows


def _card_view(card: Card) -> CardView:
    return CardView(card=serialize_card(card), label=card_label(card), short=str(card))
