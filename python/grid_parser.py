"""
Grid parsing utilities for slotgrid.

Provides two parsing formats:
1. Standard format with spaces between symbol identifiers or codes
2. Concise format with single-character symbol codes, several named grids at once
"""

from __future__ import annotations

from typing import Iterable

from grid_types import EMPTY, Grid, SymbolSpec
from symbols import DEFAULT_SYMBOLS

__all__ = ["format_grid", "parse_grid", "parse_grids_concise"]


def _lookup_tables(symbols: Iterable[SymbolSpec]) -> tuple[set[str], dict[str, str]]:
    specs = list(symbols)
    ids = {spec.id for spec in specs}
    codes = {spec.code: spec.id for spec in specs if spec.code}
    return ids, codes


def parse_grid(definition: str, symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> Grid:
    """
    Parse one grid from a compact string format.

    Format:
    - Rows separated by |
    - Cells separated by whitespace
    - Each cell is a full symbol identifier ("lemon") or its one-character code ("L")
    - Underscore (_) is an empty cell

    Example:
        "lemon lemon seven|L L 7|C C C"
        Creates a 3x3 grid whose first two rows are lemon, lemon, seven.

    Args:
        definition: Grid definition string
        symbols: Vocabulary used to resolve identifiers and codes

    Returns:
        The parsed Grid

    Raises:
        ValueError: for unknown cells or inconsistent row lengths
    """
    ids, codes = _lookup_tables(symbols)
    row_strings = definition.strip().split("|")
    rows: list[tuple[str, ...]] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[str] = []
        for col_idx, cell_str in enumerate(row_str.split()):
            if cell_str == "_":
                cells.append(EMPTY)
            elif cell_str in ids:
                cells.append(cell_str)
            elif cell_str in codes:
                cells.append(codes[cell_str])
            else:
                error_msg = (
                    f"Invalid cell string: '{cell_str}'\n"
                    f"  Row {row_idx}: \"{row_str.strip()}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid cells:\n"
                    f"    - Symbol identifiers: {', '.join(sorted(ids))}\n"
                    f"    - Symbol codes: {', '.join(sorted(codes))}\n"
                    f"    - '_': Empty cell"
                )
                raise ValueError(error_msg)
        rows.append(tuple(cells))

    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx].strip()}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return Grid(tuple(rows))


def parse_grids_concise(definition: str, symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> dict[str, Grid]:
    """
    Parse named grids from a concise multi-line format.

    Format:
    - One grid per line: "name: grid_definition"
    - Grid definition uses single-character symbol codes (no spaces between cells)
    - Rows separated by |
    - Underscore (_) is an empty cell

    Example:
        \"\"\"
        jackpot: 777|777|777
        mixed: LC7|BVD|TLC
        \"\"\"

    Args:
        definition: Multi-line string with one grid per line
        symbols: Vocabulary supplying the one-character codes

    Returns:
        Grids keyed by name, in definition order

    Raises:
        ValueError: for duplicate names, unknown codes or inconsistent row lengths
    """
    _, codes = _lookup_tables(symbols)
    store: dict[str, Grid] = {}
    lines = [line.strip() for line in definition.strip().split("\n") if line.strip()]

    for line_idx, line in enumerate(lines):
        if ":" not in line:
            raise ValueError(
                f"Invalid grid definition on line {line_idx + 1}: '{line}'\n"
                f"  Expected format: 'name: grid_definition'"
            )

        grid_name, grid_def = (part.strip() for part in line.split(":", 1))
        if not grid_name:
            raise ValueError(f"Empty grid name on line {line_idx + 1}: '{line}'")
        if not grid_def:
            raise ValueError(f"Empty grid definition for '{grid_name}' on line {line_idx + 1}")
        if grid_name in store:
            raise ValueError(f"Duplicate grid name '{grid_name}' on line {line_idx + 1}")

        rows: list[tuple[str, ...]] = []
        for row_idx, row_str in enumerate(grid_def.split("|")):
            cells: list[str] = []
            for col_idx, char in enumerate(row_str):
                if char == "_":
                    cells.append(EMPTY)
                elif char in codes:
                    cells.append(codes[char])
                else:
                    raise ValueError(
                        f"Invalid character '{char}' in grid '{grid_name}'\n"
                        f"  Row {row_idx}, column {col_idx}\n"
                        f"  Valid characters: {''.join(sorted(codes))} and underscore (_)"
                    )
            rows.append(tuple(cells))

        if len({len(row) for row in rows}) > 1:
            raise ValueError(
                f"Inconsistent row lengths in grid '{grid_name}': "
                f"{', '.join(str(len(row)) for row in rows)}"
            )

        store[grid_name] = Grid(tuple(rows))

    return store


def format_grid(grid: Grid, symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> str:
    """Inverse of the concise row format: one code per cell, rows joined by |."""
    code_of = {spec.id: spec.code or spec.id[0] for spec in symbols}
    return "|".join(
        "".join("_" if cell == EMPTY else code_of.get(cell, "?") for cell in row)
        for row in grid.cells
    )
