"""
Payout aggregation and special sequence detection.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from grid_types import Grid, Match

SEVEN = "seven"


class SpecialSequence(Enum):
    """Whole-grid outcomes decided by how many sevens landed."""

    SIX_SIX_SIX = "666"  # Bad: coins reset
    NINE_NINE_NINE = "999"  # Good: payout doubled


def total_payout(
    matches: Iterable[Match],
    symbols_multiplier: float = 1.0,
    patterns_multiplier: float = 1.0,
) -> float:
    """
    Sum of match payouts scaled by the session multipliers.

    The result is not rounded; callers floor or round for display.

    Raises:
        ValueError: if either multiplier is negative
    """
    if symbols_multiplier < 0 or patterns_multiplier < 0:
        raise ValueError(
            f"Payout multipliers must be non-negative\n"
            f"  symbols_multiplier: {symbols_multiplier}\n"
            f"  patterns_multiplier: {patterns_multiplier}"
        )
    base = sum(match.payout for match in matches)
    return base * symbols_multiplier * patterns_multiplier


def special_sequence(grid: Grid, symbol: str = SEVEN) -> SpecialSequence | None:
    """Six or more sevens is a 999, three or more is a 666."""
    count = sum(row.count(symbol) for row in grid.cells)
    if count >= 6:
        return SpecialSequence.NINE_NINE_NINE
    if count >= 3:
        return SpecialSequence.SIX_SIX_SIX
    return None


def apply_special_sequence(coins: float, payout: float, special: SpecialSequence | None) -> float:
    """New coin balance after a spin's payout and any special sequence."""
    match special:
        case SpecialSequence.SIX_SIX_SIX:
            return 0.0
        case SpecialSequence.NINE_NINE_NINE:
            return coins + payout * 2
        case _:
            return coins + payout
