"""
Catalog statistics and pattern shape metrics, for tuning and inspection.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from grid_types import GridSize, Pattern, PatternType, Position, RuleSet
from pattern_catalog import generate_catalog, position_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogStats:
    total: int
    by_type: dict[PatternType, int]
    by_difficulty: dict[int, int]
    multiplier_buckets: dict[str, int]
    duplicates: int


@dataclass(frozen=True)
class Complexity:
    area: int  # Bounding box cells
    coverage: float  # Fraction of the bounding box the pattern fills
    spread: float  # Diagonal extent of the bounding box
    complexity: float


def catalog_stats(catalog: Sequence[Pattern]) -> CatalogStats:
    """Counts by type, difficulty and multiplier range, plus duplicate footprints."""
    seen: set[frozenset[Position]] = set()
    duplicates = 0
    for pattern in catalog:
        key = position_key(pattern.positions)
        if key in seen:
            duplicates += 1
        seen.add(key)

    by_type = {t: 0 for t in PatternType}
    by_type.update(Counter(p.type for p in catalog))
    by_difficulty = dict(sorted(Counter(p.difficulty for p in catalog).items()))

    buckets = {"1.0-1.5": 0, "1.5-2.0": 0, "2.0+": 0}
    for pattern in catalog:
        m = pattern.base_multiplier
        if 1.0 <= m < 1.5:
            buckets["1.0-1.5"] += 1
        elif 1.5 <= m < 2.0:
            buckets["1.5-2.0"] += 1
        elif m >= 2.0:
            buckets["2.0+"] += 1

    return CatalogStats(
        total=len(catalog),
        by_type=by_type,
        by_difficulty=by_difficulty,
        multiplier_buckets=buckets,
        duplicates=duplicates,
    )


def pattern_complexity(positions: Iterable[Position]) -> Complexity:
    """
    Bounding-box metrics for a footprint.

    Raises:
        ValueError: for an empty footprint
    """
    cells = list(positions)
    if not cells:
        raise ValueError("Cannot measure an empty pattern")

    rows = [r for r, _ in cells]
    cols = [c for _, c in cells]
    row_span = max(rows) - min(rows)
    col_span = max(cols) - min(cols)
    area = (row_span + 1) * (col_span + 1)
    coverage = len(cells) / area
    spread = math.hypot(row_span, col_span)
    return Complexity(area, coverage, spread, coverage * spread / area)


def describe_catalog(size: GridSize, rules: RuleSet = RuleSet()) -> CatalogStats:
    """Generate a catalog and log a summary of it."""
    stats = catalog_stats(generate_catalog(size, rules))
    logger.info("Pattern analysis for %s grid", size)
    logger.info(
        "  total=%d line=%d diagonal=%d geometric=%d duplicates=%d",
        stats.total,
        stats.by_type[PatternType.LINE],
        stats.by_type[PatternType.DIAGONAL],
        stats.by_type[PatternType.GEOMETRIC],
        stats.duplicates,
    )
    for difficulty, count in stats.by_difficulty.items():
        logger.info("  difficulty %d: %d patterns", difficulty, count)
    for bucket, count in stats.multiplier_buckets.items():
        logger.info("  multiplier %s: %d patterns", bucket, count)
    return stats
