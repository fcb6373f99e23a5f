"""Rule engine for the two-player Pyramid card game."""

__all__ = [
    "cards",
    "stack",
    "deck",
    "layout",
    "state",
    "rules",
    "rules_schema",
    "events",
    "game",
    "actions",
    "service",
]
