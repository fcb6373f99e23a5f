"""Card-related data structures and helpers for Pyramid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class Suit(Enum):
    CLUBS = "♣"
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


# Numeric values used for the sum rule. The ace is a wildcard and has no value.
RANK_VALUES: dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
}

RANK_ORDER: list[Rank] = list(Rank)

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}


@dataclass(order=True)
class Card:
    """A playing card.

    Identity is the (suit, rank) pair. ``revealed`` is table state and takes
    no part in equality, hashing or ordering. Ordering compares ranks only.
    """

    sort_index: int = field(init=False, repr=False)
    suit: Suit = field(compare=False)
    rank: Rank = field(compare=False)
    revealed: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        self.sort_index = RANK_STRENGTH[self.rank]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.suit is other.suit and self.rank is other.rank

    def __hash__(self) -> int:
        return hash((self.suit, self.rank))

    def __str__(self) -> str:
        return f"{self.suit}{self.rank}"

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    rank_name = payload["rank"].upper()
    suit_name = payload["suit"].upper()
    return Card(Suit[suit_name], Rank[rank_name])
