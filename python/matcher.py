"""
Pattern matching: which catalog patterns are fully covered by one symbol.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from grid_types import Grid, InvalidGrid, Match, Pattern, SymbolSpec
from symbols import DEFAULT_SYMBOLS, SymbolTable, symbol_table, validate_grid

logger = logging.getLogger(__name__)


def pattern_payout(pattern: Pattern, spec: SymbolSpec) -> float:
    """baseSymbolValue * pattern multiplier * symbol-specific multiplier."""
    return spec.base_value * pattern.base_multiplier * spec.multiplier


def check_pattern(grid: Grid, pattern: Pattern) -> str | None:
    """
    Return the symbol covering every position of the pattern, or None.

    Raises:
        InvalidGrid: if a pattern position lies outside the grid
    """
    if not pattern.positions:
        return None
    rows, cols = grid.rows, grid.cols
    for row, col in pattern.positions:
        if not (0 <= row < rows and 0 <= col < cols):
            raise InvalidGrid(
                f"Pattern '{pattern.name}' reaches ({row},{col}) "
                f"outside a {rows}x{cols} grid"
            )

    first_row, first_col = pattern.positions[0]
    symbol = grid.cells[first_row][first_col]
    for row, col in pattern.positions[1:]:
        if grid.cells[row][col] != symbol:
            return None
    return symbol


def find_matches(
    grid: Grid,
    catalog: Sequence[Pattern],
    symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS,
) -> list[Match]:
    """
    Find every pattern in the catalog whose cells all hold the same symbol.

    Matches are returned in catalog order. No partial credit is given.

    Args:
        grid: A well-formed grid of known symbols
        catalog: Patterns to check (must fit within the grid)
        symbols: Vocabulary supplying base values and symbol multipliers

    Returns:
        One Match per satisfied pattern, with its payout already computed

    Raises:
        InvalidGrid: for ragged rows, unknown symbols or out-of-range patterns
    """
    table: SymbolTable = symbol_table(symbols)
    validate_grid(grid, table.values())

    matches: list[Match] = []
    for pattern in catalog:
        symbol = check_pattern(grid, pattern)
        if symbol is None:
            continue
        payout = pattern_payout(pattern, table[symbol])
        matches.append(Match(pattern, symbol, pattern.positions, payout))
        logger.debug(
            "Matched %s with %s at %s (x%.3f) -> %.3f",
            pattern.name,
            symbol,
            " ".join(f"({r},{c})" for r, c in pattern.positions),
            pattern.base_multiplier,
            payout,
        )

    logger.debug("find_matches: %d of %d patterns matched", len(matches), len(catalog))
    return matches
