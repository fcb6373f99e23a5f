"""Validation schema for Pyramid rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .deck import DECK_SIZE, pyramid_size


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    pyramid_rows: int = Field(7, ge=1, description="Number of rows in the pyramid layout.")
    pair_sum: int = Field(15, description="Rank total a pair without aces has to reach.")
    pair_points: int = Field(2, description="Points for removing a pair without an ace.")
    ace_pair_points: int = Field(1, description="Points for removing a pair that contains an ace.")
    seed: Optional[int] = Field(None, description="Seed for the shuffle; random when unset.")

    @field_validator("pyramid_rows")
    @classmethod
    def ensure_pyramid_fits(cls, value: int) -> int:
        if pyramid_size(value) > DECK_SIZE:
            raise ValueError(f"A pyramid of {value} rows does not fit in a {DECK_SIZE}-card deck.")
        return value

    @field_validator("pair_sum", "pair_points", "ace_pair_points")
    @classmethod
    def ensure_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be positive.")
        return value


DEFAULT_RULES = RuleSet()


def load_ruleset(path: Union[str, Path]) -> RuleSet:
    """Read a JSON rules file."""
    return RuleSet.model_validate_json(Path(path).read_text(encoding="utf-8"))
