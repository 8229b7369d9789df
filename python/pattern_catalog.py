"""
Pattern catalog generation for arbitrary grid sizes.

A catalog is the ordered, deduplicated set of patterns that can pay on a grid
of one size: every contiguous horizontal/vertical run, every diagonal and
anti-diagonal run, and the fixed L/T/cross shapes placed at every anchor.
Catalogs depend only on (GridSize, RuleSet), so they are cached per key.
"""

from __future__ import annotations

import logging
from typing import Iterable

from grid_types import GridSize, Pattern, PatternType, Position, RuleSet

logger = logging.getLogger(__name__)

Catalog = tuple[Pattern, ...]

# Shape templates relative to the anchor cell. Orientations that coincide
# (e.g. three of the T templates are the same plus shape) collapse during
# deduplication.
L_TEMPLATES: tuple[tuple[Position, ...], ...] = (
    ((0, 0), (0, 1), (1, 0)),  # Right-down
    ((0, 1), (1, 1), (1, 0)),  # Down-left
    ((1, 1), (1, 0), (0, 1)),  # Left-up
    ((1, 0), (0, 0), (0, 1)),  # Up-right
)

T_TEMPLATES: tuple[tuple[Position, ...], ...] = (
    ((0, 1), (1, 0), (1, 1), (1, 2), (2, 1)),  # Up
    ((0, 0), (0, 1), (0, 2), (1, 1), (2, 1)),  # Right
    ((2, 1), (1, 0), (1, 1), (1, 2), (0, 1)),  # Down
    ((0, 1), (1, 2), (1, 1), (1, 0), (2, 1)),  # Left
)


# =============================================================================
# Scoring Formulas
# =============================================================================


def calculate_multiplier(length: int, pattern_type: PatternType, rules: RuleSet = RuleSet()) -> float:
    """typeBaseFactor(type) * growth^(length - min_length)."""
    return rules.type_factor(pattern_type) * rules.length_growth ** (length - rules.min_length)


def calculate_rarity(length: int, max_dimension: int) -> float:
    """Longer patterns relative to the limiting dimension are exponentially rarer."""
    return 2 ** (3 * length / max_dimension)


def is_within(positions: Iterable[Position], size: GridSize) -> bool:
    return all(0 <= row < size.rows and 0 <= col < size.cols for row, col in positions)


def position_key(positions: Iterable[Position]) -> frozenset[Position]:
    """Order-independent identity of a pattern's footprint."""
    return frozenset(positions)


# =============================================================================
# Pattern Families
# =============================================================================


def generate_line_patterns(size: GridSize, rules: RuleSet = RuleSet()) -> list[Pattern]:
    """Every contiguous horizontal and vertical run of at least min_length cells."""
    patterns: list[Pattern] = []

    for row in range(size.rows):
        for length in range(rules.min_length, size.cols + 1):
            for start in range(size.cols - length + 1):
                patterns.append(
                    Pattern(
                        name=f"H-{row}-{start}-{length}",
                        positions=tuple((row, start + i) for i in range(length)),
                        base_multiplier=calculate_multiplier(length, PatternType.LINE, rules),
                        type=PatternType.LINE,
                        rarity=calculate_rarity(length, size.cols),
                        description=f"{length}-symbol horizontal line in row {row}",
                    )
                )

    for col in range(size.cols):
        for length in range(rules.min_length, size.rows + 1):
            for start in range(size.rows - length + 1):
                patterns.append(
                    Pattern(
                        name=f"V-{col}-{start}-{length}",
                        positions=tuple((start + i, col) for i in range(length)),
                        base_multiplier=calculate_multiplier(length, PatternType.LINE, rules),
                        type=PatternType.LINE,
                        rarity=calculate_rarity(length, size.rows),
                        description=f"{length}-symbol vertical line in column {col}",
                    )
                )

    return patterns


def generate_diagonal_patterns(size: GridSize, rules: RuleSet = RuleSet()) -> list[Pattern]:
    """
    Main diagonals (down-right) and anti-diagonals (down-left) of every length
    from min_length up to the longest run that fits from each anchor.
    """
    patterns: list[Pattern] = []
    limit = min(size.rows, size.cols)
    shortest = rules.min_length

    for start_row in range(size.rows - shortest + 1):
        for start_col in range(size.cols - shortest + 1):
            max_length = min(size.rows - start_row, size.cols - start_col)
            for length in range(shortest, max_length + 1):
                patterns.append(
                    Pattern(
                        name=f"D-{start_row}-{start_col}-{length}",
                        positions=tuple((start_row + i, start_col + i) for i in range(length)),
                        base_multiplier=calculate_multiplier(length, PatternType.DIAGONAL, rules),
                        type=PatternType.DIAGONAL,
                        rarity=calculate_rarity(length, limit),
                        description=f"{length}-symbol diagonal from ({start_row},{start_col})",
                    )
                )

    for start_row in range(size.rows - shortest + 1):
        for start_col in range(shortest - 1, size.cols):
            max_length = min(size.rows - start_row, start_col + 1)
            for length in range(shortest, max_length + 1):
                patterns.append(
                    Pattern(
                        name=f"AD-{start_row}-{start_col}-{length}",
                        positions=tuple((start_row + i, start_col - i) for i in range(length)),
                        base_multiplier=calculate_multiplier(length, PatternType.DIAGONAL, rules),
                        type=PatternType.DIAGONAL,
                        rarity=calculate_rarity(length, limit),
                        description=f"{length}-symbol anti-diagonal from ({start_row},{start_col})",
                    )
                )

    return patterns


def generate_geometric_patterns(size: GridSize, rules: RuleSet = RuleSet()) -> list[Pattern]:
    """
    L, T and cross shapes at every anchor, for bounding sizes 2..min(rows, cols)-1.

    Templates are fixed 3x3-relative offsets; any placement that leaves the grid
    is discarded, so very narrow grids produce no geometric patterns at all.
    """
    patterns: list[Pattern] = []
    limit = min(size.rows, size.cols)

    families = (
        ("L", "L-shape", L_TEMPLATES),
        ("T", "T-shape", T_TEMPLATES),
    )
    for prefix, label, templates in families:
        for shape_size in range(2, limit):
            for row in range(size.rows - shape_size):
                for col in range(size.cols - shape_size):
                    for i, shape in enumerate(templates):
                        positions = tuple((row + r, col + c) for r, c in shape)
                        if not is_within(positions, size):
                            continue
                        patterns.append(
                            Pattern(
                                name=f"{prefix}-{shape_size}-{i}-{row}-{col}",
                                positions=positions,
                                base_multiplier=calculate_multiplier(
                                    len(positions), PatternType.GEOMETRIC, rules
                                ),
                                type=PatternType.GEOMETRIC,
                                rarity=calculate_rarity(len(positions), limit),
                                description=f"{label} pattern at ({row},{col})",
                            )
                        )

    return patterns


def remove_duplicate_patterns(patterns: Iterable[Pattern]) -> list[Pattern]:
    """Keep the first pattern for each distinct footprint, regardless of name or type."""
    unique: list[Pattern] = []
    seen: set[frozenset[Position]] = set()
    for pattern in patterns:
        key = position_key(pattern.positions)
        if key in seen:
            logger.debug("Dropping duplicate footprint: %s", pattern.name)
            continue
        seen.add(key)
        unique.append(pattern)
    return unique


def generate_catalog(size: GridSize, rules: RuleSet = RuleSet()) -> Catalog:
    """
    Build the full catalog for a grid size.

    Args:
        size: Grid dimensions
        rules: Generation tunables

    Returns:
        Lines, then diagonals, then geometric shapes, deduplicated by footprint

    Raises:
        InvalidGridSize: if either dimension is below 1
    """
    size.validate()

    generated = [
        *generate_line_patterns(size, rules),
        *generate_diagonal_patterns(size, rules),
        *generate_geometric_patterns(size, rules),
    ]
    catalog = tuple(remove_duplicate_patterns(generated))

    logger.info(
        "generate_catalog: %s grid -> %d patterns (%d before deduplication)",
        size,
        len(catalog),
        len(generated),
    )
    return catalog


def legacy_catalog() -> Catalog:
    """The fixed 3x3 catalog: three rows, three columns and both diagonals."""
    rows = ("Top Row", "Middle Row", "Bottom Row")
    cols = ("Left Column", "Middle Column", "Right Column")
    patterns: list[Pattern] = []

    for r, name in enumerate(rows):
        patterns.append(
            Pattern(name, tuple((r, c) for c in range(3)), 1.0, PatternType.LINE, calculate_rarity(3, 3))
        )
    for c, name in enumerate(cols):
        patterns.append(
            Pattern(name, tuple((r, c) for r in range(3)), 1.0, PatternType.LINE, calculate_rarity(3, 3))
        )
    patterns.append(
        Pattern("Main Diagonal", ((0, 0), (1, 1), (2, 2)), 1.5, PatternType.DIAGONAL, calculate_rarity(3, 3))
    )
    patterns.append(
        Pattern("Anti-Diagonal", ((0, 2), (1, 1), (2, 0)), 1.5, PatternType.DIAGONAL, calculate_rarity(3, 3))
    )
    return tuple(patterns)


# =============================================================================
# Caching
# =============================================================================


class CatalogCache:
    """
    Catalogs keyed by (GridSize, RuleSet), least recently used evicted first.

    Usage:
        cache = CatalogCache()
        catalog = cache.get(GridSize(4, 4))
        cache.invalidate(GridSize(3, 3))  # after the grid grows
    """

    def __init__(self, maxsize: int = 8) -> None:
        if maxsize < 1:
            raise ValueError(f"Cache size must be at least 1, got {maxsize}")
        self.maxsize = maxsize
        self._entries: dict[tuple[GridSize, RuleSet], Catalog] = {}
        self.hits = 0
        self.misses = 0

    def get(self, size: GridSize, rules: RuleSet = RuleSet()) -> Catalog:
        key = (size, rules)
        catalog = self._entries.pop(key, None)
        if catalog is not None:
            self.hits += 1
            logger.debug("Catalog cache hit for %s", size)
        else:
            self.misses += 1
            logger.debug("Catalog cache miss for %s", size)
            catalog = generate_catalog(size, rules)
        self._entries[key] = catalog  # Reinsert as most recently used

        while len(self._entries) > self.maxsize:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        return catalog

    def invalidate(self, size: GridSize | None = None) -> None:
        """Forget catalogs for one size (any rules), or everything when size is None."""
        if size is None:
            self._entries.clear()
            return
        for key in [k for k in self._entries if k[0] == size]:
            del self._entries[key]

    def __contains__(self, size: object) -> bool:
        return any(key[0] == size for key in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
