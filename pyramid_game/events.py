"""Domain events emitted after each committed state change."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .cards import Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameStarted:
    player_names: Tuple[str, str]


@dataclass(frozen=True)
class PlayerChanged:
    current_player: int


@dataclass(frozen=True)
class Passed:
    player: str


@dataclass(frozen=True)
class CardRevealed:
    player: str
    card: Card


@dataclass(frozen=True)
class PairRemoved:
    is_valid: bool


@dataclass(frozen=True)
class ScoresChanged:
    scores: Tuple[int, int]


@dataclass(frozen=True)
class GameEnded:
    scores: Tuple[int, int]
    winner: Optional[str]


GameEvent = Union[GameStarted, PlayerChanged, Passed, CardRevealed, PairRemoved, ScoresChanged, GameEnded]

Subscriber = Callable[[GameEvent], None]


class GameObserver:
    """Base class for event consumers.

    Override only the hooks you need. An instance can be subscribed directly
    to an :class:`EventBus`.
    """

    def after_start_game(self, event: GameStarted) -> None:
        return None

    def after_change_player(self, event: PlayerChanged) -> None:
        return None

    def after_pass(self, event: Passed) -> None:
        return None

    def after_reveal_card(self, event: CardRevealed) -> None:
        return None

    def after_remove_pair(self, event: PairRemoved) -> None:
        return None

    def after_scores_changed(self, event: ScoresChanged) -> None:
        return None

    def after_end_game(self, event: GameEnded) -> None:
        return None

    def __call__(self, event: GameEvent) -> None:
        if isinstance(event, GameStarted):
            self.after_start_game(event)
        elif isinstance(event, PlayerChanged):
            self.after_change_player(event)
        elif isinstance(event, Passed):
            self.after_pass(event)
        elif isinstance(event, CardRevealed):
            self.after_reveal_card(event)
        elif isinstance(event, PairRemoved):
            self.after_remove_pair(event)
        elif isinstance(event, ScoresChanged):
            self.after_scores_changed(event)
        elif isinstance(event, GameEnded):
            self.after_end_game(event)
        else:
            raise TypeError(f"Unknown event {event!r}")


class EventBus:
    """Synchronous fan-out in subscription order.

    Subscribers must not issue commands from inside a notification.
    """

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.remove(subscriber)

    @property
    def subscribers(self) -> Tuple[Subscriber, ...]:
        return tuple(self._subscribers)

    def publish(self, event: GameEvent) -> None:
        logger.debug("event %s", event)
        for subscriber in list(self._subscribers):
            subscriber(event)
