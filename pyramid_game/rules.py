"""Pair matching and pair scoring."""

from __future__ import annotations

from .cards import Card, RANK_VALUES
from .rules_schema import DEFAULT_RULES, RuleSet


def is_pair_valid(card1: Card, card2: Card, rules: RuleSet = DEFAULT_RULES) -> bool:
    """Return True if the two cards may be removed together.

    An ace matches any single non-ace card. Two aces never match. Otherwise
    the rank values have to add up to the target sum.
    """
    if card1.is_ace and card2.is_ace:
        return False
    if card1.is_ace or card2.is_ace:
        return True
    return RANK_VALUES[card1.rank] + RANK_VALUES[card2.rank] == rules.pair_sum


def pair_points(card1: Card, card2: Card, rules: RuleSet = DEFAULT_RULES) -> int:
    if card1.is_ace or card2.is_ace:
        return rules.ace_pair_points
    return rules.pair_points
