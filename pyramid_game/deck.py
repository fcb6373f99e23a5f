"""Deck creation utilities for Pyramid."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, RANK_ORDER, Suit

DECK_SIZE = 52


class InvalidSetup(ValueError):
    """Raised when a round cannot be set up from the supplied inputs."""


def pyramid_size(rows: int) -> int:
    """Number of slots in a triangular layout with ``rows`` rows."""
    return rows * (rows + 1) // 2


def ordered_deck() -> List[Card]:
    """Return the 52-card deck, suit by suit, ranks in ascending order."""
    return [Card(suit, rank) for suit in Suit for rank in RANK_ORDER]


def build_deck(rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled 52-card deck."""
    cards = ordered_deck()
    if rng is None:
        rng = Random()
    rng.shuffle(cards)
    return cards


def validate_deck(deck: Sequence[Card]) -> List[Card]:
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        raise InvalidSetup(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if len(set(cards)) != DECK_SIZE:
        raise InvalidSetup("Deck contains duplicate cards.")
    return cards


def split_deck(deck: Sequence[Card], rows: int = 7) -> Tuple[List[Card], List[Card]]:
    """Split a deck into the pyramid cards and the draw pile cards."""
    cards = validate_deck(deck)
    cut = pyramid_size(rows)
    # Dealt cards start face down; the pyramid reveals its own edges.
    for card in cards:
        card.revealed = False
    return cards[:cut], cards[cut:]
