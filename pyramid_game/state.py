"""Round state for Pyramid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from .cards import Card
from .layout import Pyramid
from .stack import CardStack


class RoundPhase(Enum):
    SETUP = auto()
    IN_PROGRESS = auto()
    ENDED = auto()


@dataclass
class Player:
    name: str
    score: int = 0
    passed: bool = False

    def __str__(self) -> str:
        return f"{self.name}: Score - {self.score}"


@dataclass
class GameState:
    """Everything that changes during one round.

    ``current_player`` is 1 or 2. ``passed`` is set once the round has ended
    through both players passing.
    """

    player1: Player
    player2: Player
    pyramid: Pyramid
    draw_stack: CardStack
    reserve_stack: CardStack = field(default_factory=CardStack)
    current_player: int = 1
    passed: bool = False
    phase: RoundPhase = RoundPhase.SETUP

    def __post_init__(self) -> None:
        if self.current_player not in (1, 2):
            raise ValueError("current_player must be 1 or 2.")

    @property
    def players(self) -> Tuple[Player, Player]:
        return self.player1, self.player2

    def player(self, number: int) -> Player:
        if number == 1:
            return self.player1
        if number == 2:
            return self.player2
        raise ValueError(f"No player number {number}.")

    def active_player(self) -> Player:
        return self.player(self.current_player)

    def opponent(self) -> Player:
        return self.player(3 - self.current_player)

    def scores(self) -> Tuple[int, int]:
        return self.player1.score, self.player2.score

    def all_cards(self) -> List[Card]:
        return self.pyramid.cards() + self.draw_stack.peek_all() + self.reserve_stack.peek_all()

    def winner(self) -> Optional[Player]:
        """Higher score wins; ``None`` on a draw."""
        if self.player1.score > self.player2.score:
            return self.player1
        if self.player2.score > self.player1.score:
            return self.player2
        return None

    def is_finished(self) -> bool:
        return self.phase is RoundPhase.ENDED
