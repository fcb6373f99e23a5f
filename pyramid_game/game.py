"""Round setup and structural queries for Pyramid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card
from .deck import InvalidSetup, build_deck, split_deck
from .events import EventBus, GameEnded, GameEvent, GameStarted, PlayerChanged
from .layout import Pyramid
from .rules import is_pair_valid
from .rules_schema import RuleSet
from .stack import CardStack
from .state import GameState, Player, RoundPhase

logger = logging.getLogger(__name__)

# Position reported for the top card of the reserve pile.
RESERVE_POSITION: Tuple[int, int] = (-1, -1)


class NoActiveRound(RuntimeError):
    """Raised when a command or query needs a round and none was started."""


class RoundOver(RuntimeError):
    """Raised when a command is issued after the round has ended."""


@dataclass
class GameSession:
    """Owned handle for the current round, shared by both services."""

    rules: RuleSet = field(default_factory=RuleSet)
    events: EventBus = field(default_factory=EventBus)
    state: Optional[GameState] = field(default=None, init=False)
    rng: Random = field(init=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.rules.seed)

    def has_active_round(self) -> bool:
        return self.state is not None

    def require_state(self) -> GameState:
        if self.state is None:
            raise NoActiveRound("No active round.")
        return self.state

    def emit(self, event: GameEvent) -> None:
        self.events.publish(event)


class GameService:
    """Builds rounds and answers questions about the layout."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    @property
    def rules(self) -> RuleSet:
        return self.session.rules

    # Setup -------------------------------------------------------------

    def build_deck(self) -> List[Card]:
        return build_deck(self.session.rng)

    def build_pyramid(self, cards: Sequence[Card]) -> Pyramid:
        return Pyramid.from_cards(cards, rows=self.rules.pyramid_rows)

    def build_draw_stack(self, remaining_cards: Sequence[Card]) -> CardStack:
        return CardStack(list(remaining_cards))

    def new_game(self, player1_name: str, player2_name: str, *, deck: Optional[Sequence[Card]] = None) -> GameState:
        """Deal a fresh round and make it the session's current round."""
        names = [player1_name.strip(), player2_name.strip()]
        if not all(names):
            raise InvalidSetup("Player names must not be empty.")

        cards = list(deck) if deck is not None else self.build_deck()
        pyramid_cards, remaining = split_deck(cards, rows=self.rules.pyramid_rows)

        state = GameState(
            player1=Player(names[0]),
            player2=Player(names[1]),
            pyramid=self.build_pyramid(pyramid_cards),
            draw_stack=self.build_draw_stack(remaining),
            reserve_stack=CardStack(),
            current_player=1,
            passed=False,
        )
        self.session.state = state
        logger.info("New round: %s vs %s", names[0], names[1])
        self.session.emit(GameStarted(player_names=(names[0], names[1])))
        return state

    # Turn handling -----------------------------------------------------

    def change_player(self) -> int:
        state = self.session.require_state()
        state.current_player = 2 if state.current_player == 1 else 1
        self.session.emit(PlayerChanged(current_player=state.current_player))
        return state.current_player

    def active_player(self) -> Player:
        return self.session.require_state().active_player()

    def opponent(self) -> Player:
        return self.session.require_state().opponent()

    def end_game(self) -> bool:
        """Close the round if the pyramid is cleared or both players passed."""
        state = self.session.require_state()
        if state.phase is RoundPhase.ENDED:
            return True
        if not (self.is_pyramid_empty() or state.passed):
            return False

        state.phase = RoundPhase.ENDED
        winner = state.winner()
        logger.info(
            "Round over: %s, scores %s",
            f"{winner.name} wins" if winner else "draw",
            state.scores(),
        )
        self.session.emit(GameEnded(scores=state.scores(), winner=winner.name if winner else None))
        return True

    # Queries -----------------------------------------------------------

    def check_card_choice(self, card1: Card, card2: Card) -> bool:
        return is_pair_valid(card1, card2, self.rules)

    def find_card_position(self, card: Card) -> Optional[Tuple[int, int]]:
        """Return the card's pyramid position, ``RESERVE_POSITION`` or ``None``."""
        state = self.session.require_state()
        for row, col, laid in state.pyramid.positions():
            if laid == card:
                return row, col
        if state.reserve_stack.top() == card:
            return RESERVE_POSITION
        return None

    def has_adjacent_left_card(self, row: int, col: int) -> bool:
        state = self.session.require_state()
        return state.pyramid.is_occupied(row, col - 1)

    def has_adjacent_right_card(self, row: int, col: int) -> bool:
        state = self.session.require_state()
        return state.pyramid.is_occupied(row, col + 1)

    def reveal_adjacent_cards(self, row: int, col: int) -> None:
        """Reveal same-row neighbours of a freshly cleared slot that became edges."""
        pyramid = self.session.require_state().pyramid

        left = pyramid.card_at(row, col - 1)
        if left is not None and not self.has_adjacent_right_card(row, col - 1):
            left.revealed = True

        right = pyramid.card_at(row, col + 1)
        if right is not None and not self.has_adjacent_left_card(row, col + 1):
            right.revealed = True

    def is_pyramid_empty(self) -> bool:
        return self.session.require_state().pyramid.is_empty()

    def selectable_cards(self) -> List[Card]:
        """Face-up pyramid cards plus the top of the reserve pile."""
        state = self.session.require_state()
        selectable = [card for card in state.pyramid.cards() if card.revealed]
        top = state.reserve_stack.top()
        if top is not None:
            selectable.append(top)
        return selectable
