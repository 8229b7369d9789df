"""
Random grid generation and luck forcing.

Each whole point of luck guarantees one cell. All guaranteed cells receive the
same symbol, drawn by weight, so luck tends to build real patterns rather than
scattered high-value symbols.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable

from grid_types import Grid, GridSize, SymbolSpec
from symbols import DEFAULT_SYMBOLS, weights

logger = logging.getLogger(__name__)


def draw_symbol(rng: random.Random, symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> str:
    """One weighted draw from the symbol vocabulary."""
    table = weights(symbols)
    return rng.choices(list(table), weights=list(table.values()), k=1)[0]


def random_grid(
    size: GridSize,
    symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS,
    rng: random.Random | None = None,
) -> Grid:
    """
    Fill a grid of the given size with independent weighted draws.

    Raises:
        InvalidGridSize: if either dimension is below 1
    """
    size.validate()
    rng = rng or random.Random()
    table = weights(symbols)
    ids = list(table)
    draws = rng.choices(ids, weights=list(table.values()), k=size.cell_count)
    return Grid(tuple(tuple(draws[r * size.cols:(r + 1) * size.cols]) for r in range(size.rows)))


def guaranteed_cells(luck: float, size: GridSize) -> int:
    """min(floor(luck), rows*cols); zero for luck of 0 or less."""
    if luck <= 0:
        return 0
    return min(math.floor(luck), size.cell_count)


def apply_luck(
    grid: Grid,
    luck: float,
    symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS,
    rng: random.Random | None = None,
) -> Grid:
    """
    Overwrite floor(luck) randomly chosen cells with one weighted-random symbol.

    Args:
        grid: The freshly generated grid (not modified)
        luck: Luck scalar; values of 0 or less leave the grid untouched
        symbols: Vocabulary supplying draw weights
        rng: Source of randomness

    Returns:
        A new grid with the forced cells applied, or the same grid when no
        cells are forced
    """
    count = guaranteed_cells(luck, grid.size)
    if count == 0:
        logger.debug("No luck applied (luck=%s)", luck)
        return grid

    rng = rng or random.Random()
    chosen = rng.sample(grid.positions(), count)
    symbol = draw_symbol(rng, symbols)
    logger.debug("Luck %s forces %d cells to %s: %s", luck, count, symbol, chosen)
    return grid.replace({pos: symbol for pos in chosen})
