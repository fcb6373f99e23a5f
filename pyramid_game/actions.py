"""Player commands: pass, reveal a card, remove a pair."""

from __future__ import annotations

import logging
from typing import Optional

from .cards import Card
from .events import CardRevealed, PairRemoved, Passed, ScoresChanged
from .game import RESERVE_POSITION, GameService, GameSession, RoundOver
from .rules import pair_points
from .state import GameState, Player, RoundPhase

logger = logging.getLogger(__name__)


class PlayerActionService:
    """The only mutator players interact with.

    Every command checks its preconditions before touching the round, applies
    the change, switches the turn and then emits its events.
    """

    def __init__(self, session: GameSession, game_service: Optional[GameService] = None) -> None:
        self.session = session
        self.game_service = game_service or GameService(session)

    def pass_turn(self) -> None:
        state = self._require_open_round()
        self._start_play(state)
        active = self.game_service.active_player()
        active.passed = True
        logger.debug("%s passes", active.name)

        if state.player1.passed and state.player2.passed:
            state.passed = True

        self.game_service.change_player()
        self.session.emit(Passed(player=active.name))
        if state.passed:
            self.game_service.end_game()

    def reveal_card(self, player: Optional[Player] = None) -> Optional[Card]:
        """Move the front card of the draw pile face up onto the reserve pile."""
        state = self._require_open_round()
        actor = self._resolve_player(state, player)
        self._start_play(state)
        if state.draw_stack.empty:
            logger.info("Draw stack is empty, nothing to reveal.")
            return None

        card = state.draw_stack.draw()[0]
        card.revealed = True
        state.reserve_stack.push(card)
        actor.passed = False
        logger.debug("%s reveals %s", actor.name, card)

        self.game_service.change_player()
        self.session.emit(CardRevealed(player=actor.name, card=card))
        return card

    def remove_pair(self, card1: Card, card2: Card) -> bool:
        """Remove a matching pair and score it for the player on turn.

        Returns False, without changing anything, when the pair does not
        match or a card is neither in the pyramid nor on top of the reserve.
        """
        state = self._require_open_round()
        self._start_play(state)
        position1 = self.game_service.find_card_position(card1)
        position2 = self.game_service.find_card_position(card2)
        if (
            card1 == card2
            or position1 is None
            or position2 is None
            or not self.game_service.check_card_choice(card1, card2)
        ):
            logger.debug("Rejected pair %s %s", card1, card2)
            self.session.emit(PairRemoved(is_valid=False))
            return False

        for position in (position1, position2):
            self._remove_card_at(state, position)

        active = self.game_service.active_player()
        active.score += pair_points(card1, card2, self.session.rules)
        logger.debug("%s removes %s %s, score %d", active.name, card1, card2, active.score)
        self.session.emit(ScoresChanged(scores=state.scores()))

        self.game_service.change_player()
        self.session.emit(PairRemoved(is_valid=True))
        self.game_service.end_game()
        return True

    # Helpers -----------------------------------------------------------

    def _remove_card_at(self, state: GameState, position: tuple[int, int]) -> None:
        if position == RESERVE_POSITION:
            state.reserve_stack.pop_top()
            return
        row, col = position
        state.pyramid.clear(row, col)
        self.game_service.reveal_adjacent_cards(row, col)

    def _require_open_round(self) -> GameState:
        state = self.session.require_state()
        if state.phase is RoundPhase.ENDED:
            raise RoundOver("The round has already ended.")
        return state

    def _start_play(self, state: GameState) -> None:
        if state.phase is RoundPhase.SETUP:
            state.phase = RoundPhase.IN_PROGRESS

    def _resolve_player(self, state: GameState, player: Optional[Player]) -> Player:
        if player is None:
            return self.game_service.active_player()
        if player is not state.player1 and player is not state.player2:
            raise ValueError(f"{player.name} is not playing this round.")
        return player
