"""
Shared type definitions for the slotgrid engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Position = tuple[int, int]
"""(row, col), zero-based from the top-left cell."""

EMPTY = ""
"""Placeholder symbol for cells that have not been filled yet."""


# =============================================================================
# Errors
# =============================================================================


class InvalidGridSize(ValueError):
    """Grid dimensions are not both positive."""


class InvalidGrid(ValueError):
    """A grid is malformed: ragged rows, unknown symbols, or out-of-range lookups."""


# =============================================================================
# Configuration
# =============================================================================


class PatternType(Enum):
    """Family a generated pattern belongs to."""

    LINE = "line"
    DIAGONAL = "diagonal"
    GEOMETRIC = "geometric"


@dataclass(frozen=True)
class RuleSet:
    """Tunables for pattern generation and overlap resolution."""

    min_length: int = 3  # Shortest winning line or diagonal
    length_growth: float = 1.2  # Multiplier growth per cell beyond min_length
    line_factor: float = 1.0
    diagonal_factor: float = 1.2
    geometric_factor: float = 1.5
    line_bonus: int = 0
    diagonal_bonus: int = 25
    geometric_bonus: int = 50

    def type_factor(self, pattern_type: PatternType) -> float:
        match pattern_type:
            case PatternType.LINE:
                return self.line_factor
            case PatternType.DIAGONAL:
                return self.diagonal_factor
            case PatternType.GEOMETRIC:
                return self.geometric_factor

    def type_bonus(self, pattern_type: PatternType) -> int:
        match pattern_type:
            case PatternType.LINE:
                return self.line_bonus
            case PatternType.DIAGONAL:
                return self.diagonal_bonus
            case PatternType.GEOMETRIC:
                return self.geometric_bonus


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class GridSize:
    """Dimensions of a slot grid."""

    rows: int
    cols: int

    def validate(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidGridSize(
                f"Invalid grid size {self.rows}x{self.cols}\n"
                f"  Rows and columns must both be at least 1"
            )

    def apply(self, modifier: GridSizeModifier) -> GridSize:
        """Return the size after a modifier, never shrinking a dimension below 1."""
        return GridSize(max(1, self.rows + modifier.rows), max(1, self.cols + modifier.cols))

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass(frozen=True)
class GridSizeModifier:
    """A change to the grid dimensions granted by a charm or event."""

    source: str
    rows: int = 0
    cols: int = 0


@dataclass(frozen=True)
class Grid:
    """A 2D grid of symbol identifiers."""

    cells: tuple[tuple[str, ...], ...]

    @classmethod
    def from_rows(cls, rows: list[list[str]] | tuple[tuple[str, ...], ...]) -> Grid:
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def filled(cls, size: GridSize, symbol: str) -> Grid:
        """A grid with every cell holding the same symbol."""
        return cls(tuple((symbol,) * size.cols for _ in range(size.rows)))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def size(self) -> GridSize:
        return GridSize(self.rows, self.cols)

    def __getitem__(self, pos: Position) -> str:
        row, col = pos
        return self.cells[row][col]

    def positions(self) -> list[Position]:
        """All cell positions in row-major order."""
        return [(r, c) for r in range(self.rows) for c in range(self.cols)]

    def replace(self, overrides: dict[Position, str]) -> Grid:
        """Return a new grid with the given cells overwritten."""
        rows = [list(row) for row in self.cells]
        for (r, c), symbol in overrides.items():
            rows[r][c] = symbol
        return Grid.from_rows(rows)


# =============================================================================
# Symbols, Patterns and Matches
# =============================================================================


@dataclass(frozen=True)
class SymbolSpec:
    """One entry of the symbol vocabulary."""

    id: str
    base_value: float
    weight: float
    multiplier: float = 1.0  # Symbol-specific payout multiplier
    code: str = ""  # Single character used by the text format and renderer
    emoji: str = ""


@dataclass(frozen=True)
class Pattern:
    """A named set of absolute grid positions that pays when all hold one symbol."""

    name: str
    positions: tuple[Position, ...]
    base_multiplier: float
    type: PatternType
    rarity: float = 0.0
    description: str = ""

    @property
    def difficulty(self) -> int:
        return len(self.positions)

    @property
    def cells(self) -> frozenset[Position]:
        return frozenset(self.positions)


@dataclass(frozen=True)
class Match:
    """A pattern confirmed against a concrete grid."""

    pattern: Pattern
    symbol: str
    positions: tuple[Position, ...]
    payout: float

    @property
    def cells(self) -> frozenset[Position]:
        return frozenset(self.positions)
