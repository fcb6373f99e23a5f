"""Ordered card sequences used for the draw and reserve piles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .cards import Card


@dataclass
class CardStack:
    """Ordered sequence of cards. The front is the next card to be drawn.

    The draw pile is consumed from the front with :meth:`draw`. The reserve
    pile grows at the back with :meth:`push`, so its top is the most recently
    pushed card.
    """

    cards: List[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.cards = list(self.cards)

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def draw(self, amount: int = 1) -> List[Card]:
        """Remove and return the first ``amount`` cards."""
        if amount < 1 or amount > len(self.cards):
            raise IndexError(f"can't draw {amount} cards from a stack of {len(self.cards)}")
        drawn = self.cards[:amount]
        del self.cards[:amount]
        return drawn

    def draw_all(self) -> List[Card]:
        return self.draw(len(self.cards))

    def peek(self) -> Card:
        """Return the front card without removing it."""
        if not self.cards:
            raise IndexError("can't peek into an empty stack")
        return self.cards[0]

    def peek_all(self) -> List[Card]:
        return list(self.cards)

    def push(self, card: Card) -> None:
        self.cards.append(card)

    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def pop_top(self) -> Card:
        if not self.cards:
            raise IndexError("can't take the top of an empty stack")
        return self.cards.pop()

    def __str__(self) -> str:
        return "[" + ", ".join(str(card) for card in self.cards) + "]"
