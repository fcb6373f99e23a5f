"""Triangular card layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .cards import Card
from .deck import InvalidSetup, pyramid_size

DEFAULT_ROWS = 7


@dataclass(frozen=True)
class Occupied:
    card: Card


class Empty:
    """Marker for a slot whose card has been removed."""

    _instance: Optional["Empty"] = None

    def __new__(cls) -> "Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty()

Slot = Union[Occupied, Empty]


class Pyramid:
    """Rows of slots; row ``r`` holds ``r + 1`` slots."""

    def __init__(self, rows: Sequence[Sequence[Slot]]) -> None:
        self.rows: List[List[Slot]] = [list(row) for row in rows]

    @classmethod
    def from_cards(cls, cards: Sequence[Card], rows: int = DEFAULT_ROWS) -> "Pyramid":
        """Lay out cards row-major, revealing the first and last slot of each row."""
        needed = pyramid_size(rows)
        if len(cards) < needed:
            raise InvalidSetup(f"A pyramid of {rows} rows needs {needed} cards, got {len(cards)}.")

        layout: List[List[Slot]] = []
        index = 0
        for row in range(rows):
            slots: List[Slot] = []
            for col in range(row + 1):
                card = cards[index]
                index += 1
                card.revealed = col == 0 or col == row
                slots.append(Occupied(card))
            layout.append(slots)
        return cls(layout)

    @property
    def height(self) -> int:
        return len(self.rows)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.rows) and 0 <= col < len(self.rows[row])

    def card_at(self, row: int, col: int) -> Optional[Card]:
        if not self.in_bounds(row, col):
            return None
        slot = self.rows[row][col]
        if isinstance(slot, Occupied):
            return slot.card
        return None

    def is_occupied(self, row: int, col: int) -> bool:
        return self.card_at(row, col) is not None

    def clear(self, row: int, col: int) -> Card:
        card = self.card_at(row, col)
        if card is None:
            raise IndexError(f"No card at ({row}, {col}).")
        self.rows[row][col] = EMPTY
        return card

    def positions(self) -> Iterator[Tuple[int, int, Card]]:
        """Yield ``(row, col, card)`` for every occupied slot, row-major."""
        for row_index, row in enumerate(self.rows):
            for col_index, slot in enumerate(row):
                if isinstance(slot, Occupied):
                    yield row_index, col_index, slot.card

    def cards(self) -> List[Card]:
        return [card for _, _, card in self.positions()]

    def occupied_count(self) -> int:
        return sum(1 for _ in self.positions())

    def is_empty(self) -> bool:
        return next(self.positions(), None) is None

    def __str__(self) -> str:
        lines = []
        for row in self.rows:
            labels = []
            for slot in row:
                if isinstance(slot, Occupied):
                    labels.append(str(slot.card) if slot.card.revealed else "##")
                else:
                    labels.append("..")
            lines.append(" ".join(labels).center(self.height * 4))
        return "\n".join(lines)
