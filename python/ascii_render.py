"""
ASCII rendering for slot grids.

Provides:
1. Grid rendering with resolved matches highlighted, one colour per match
2. Pattern footprint rendering for inspecting a catalog
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import EMPTY, Grid, GridSize, Match, Pattern, Position, SymbolSpec
from symbols import DEFAULT_SYMBOLS

logger = logging.getLogger(__name__)

MATCH_COLORS: list[Callable[[str], str]] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]


def cell_colors(matches: Sequence[Match]) -> dict[Position, Callable[[str], str]]:
    """Colour for each cell covered by a match; the first match covering a cell wins."""
    colors: dict[Position, Callable[[str], str]] = {}
    for i, match in enumerate(matches):
        colorize = MATCH_COLORS[i % len(MATCH_COLORS)]
        for pos in match.positions:
            colors.setdefault(pos, colorize)
    return colors


def render_grid(
    grid: Grid,
    matches: Sequence[Match] = (),
    symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS,
    cell_width: int = 3,
) -> str:
    """
    Render a grid as a boxed character grid.

    Each cell shows its symbol's one-character code, centred in cell_width
    characters. Cells belonging to a match are shown in that match's colour
    with bold text; other cells are dimmed.

    Args:
        grid: The grid to draw
        matches: Resolved matches to highlight
        symbols: Vocabulary supplying display codes
        cell_width: Characters per cell (default 3)

    Returns:
        Rendered string, one line per text row
    """
    code_of = {spec.id: spec.code or spec.id[:1] for spec in symbols}
    colors = cell_colors(matches)
    inner_width = grid.cols * cell_width

    lines = ["┌" + "─" * inner_width + "┐"]
    for r, row in enumerate(grid.cells):
        parts = ["│"]
        for c, cell in enumerate(row):
            char = "_" if cell == EMPTY else code_of.get(cell, "?")
            content = char.center(cell_width)
            colorize = colors.get((r, c))
            if colorize is not None:
                content = chalk.bold(colorize(content))
            else:
                content = chalk.dim(content)
            parts.append(content)
        parts.append("│")
        lines.append("".join(parts))
    lines.append("└" + "─" * inner_width + "┘")
    return "\n".join(lines)


def render_pattern(pattern: Pattern, size: GridSize, filled: str = "#", blank: str = ".") -> str:
    """Draw a pattern's footprint on an otherwise blank grid of the given size."""
    cells = pattern.cells
    return "\n".join(
        "".join(filled if (r, c) in cells else blank for c in range(size.cols))
        for r in range(size.rows)
    )


def render_match_summary(matches: Sequence[Match], symbols: Iterable[SymbolSpec] = DEFAULT_SYMBOLS) -> str:
    """One coloured line per match: pattern name, symbol and payout."""
    emoji_of = {spec.id: spec.emoji for spec in symbols}
    lines = []
    for i, match in enumerate(matches):
        colorize = MATCH_COLORS[i % len(MATCH_COLORS)]
        label = f"{match.pattern.name} ({match.pattern.type.value})"
        lines.append(
            colorize(f"{label:<24}") + f" {emoji_of.get(match.symbol, '')} {match.symbol:<9} {match.payout:8.2f}"
        )
    return "\n".join(lines)
