"""
Symbol vocabulary and grid well-formedness checks.
"""

from __future__ import annotations

from typing import Iterable

from grid_types import Grid, InvalidGrid, SymbolSpec

__all__ = [
    "DEFAULT_SYMBOLS",
    "SymbolTable",
    "symbol_table",
    "validate_grid",
    "weights",
]

DEFAULT_SYMBOLS: tuple[SymbolSpec, ...] = (
    SymbolSpec("lemon", base_value=10, weight=1.3, multiplier=1.0, code="L", emoji="🍋"),
    SymbolSpec("cherry", base_value=10, weight=1.3, multiplier=1.0, code="C", emoji="🍒"),
    SymbolSpec("clover", base_value=15, weight=1.0, multiplier=1.2, code="V", emoji="🍀"),
    SymbolSpec("bell", base_value=15, weight=1.0, multiplier=1.2, code="B", emoji="🔔"),
    SymbolSpec("diamond", base_value=25, weight=0.8, multiplier=1.5, code="D", emoji="💎"),
    SymbolSpec("treasure", base_value=25, weight=0.8, multiplier=1.5, code="T", emoji="💰"),
    SymbolSpec("seven", base_value=50, weight=0.5, multiplier=2.0, code="7", emoji="7️⃣"),
)

SymbolTable = dict[str, SymbolSpec]


def symbol_table(symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> SymbolTable:
    """Index a symbol vocabulary by identifier, rejecting duplicates."""
    table: SymbolTable = {}
    for spec in symbols:
        if spec.id in table:
            raise ValueError(f"Duplicate symbol identifier: '{spec.id}'")
        table[spec.id] = spec
    return table


def weights(symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> dict[str, float]:
    """Draw weights keyed by symbol identifier, validated for weighted sampling."""
    table = {spec.id: spec.weight for spec in symbols}
    if not table:
        raise ValueError("Symbol table is empty")
    negative = [sid for sid, w in table.items() if w < 0]
    if negative:
        raise ValueError(f"Symbol weights must be non-negative: {', '.join(negative)}")
    if sum(table.values()) <= 0:
        raise ValueError("Symbol weights must sum to > 0")
    return table


def validate_grid(grid: Grid, symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> None:
    """
    Check that a grid is rectangular, non-empty and only holds known symbols.

    Raises:
        InvalidGrid: describing every offending row or cell
    """
    if grid.rows == 0 or grid.cols == 0:
        raise InvalidGrid(f"Grid is empty ({grid.rows}x{grid.cols})")

    cols = grid.cols
    mismatched = [(i, len(row)) for i, row in enumerate(grid.cells) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
        error_msg += "  All rows must have the same number of cells"
        raise InvalidGrid(error_msg)

    known = {spec.id for spec in symbols}
    unknown = [
        (r, c, cell)
        for r, row in enumerate(grid.cells)
        for c, cell in enumerate(row)
        if cell not in known
    ]
    if unknown:
        error_msg = "Unknown symbols in grid:\n"
        for r, c, cell in unknown:
            error_msg += f"    ({r},{c}): '{cell}'\n"
        error_msg += f"  Known symbols: {', '.join(sorted(known))}"
        raise InvalidGrid(error_msg)
