"""
Overlap and containment resolution for raw matches.

A long run contains many shorter runs of the same symbol, and shapes compete
for shared cells. Resolution runs in two phases:

1. Containment removal: drop a match whose cells are a subset of another
   match with the same symbol.
2. Priority-ordered overlap resolution: accept the remaining matches greedily
   by descending priority, rejecting any that shares a cell with a match
   already accepted.

The result is a subset of the input in which no cell is counted twice.
"""

from __future__ import annotations

import logging
from typing import Sequence

from grid_types import Match, Position, RuleSet

logger = logging.getLogger(__name__)


def is_contained(inner: Match, outer: Match) -> bool:
    """True when every cell of inner is also a cell of outer."""
    return inner.cells <= outer.cells


def calculate_priority(match: Match, rules: RuleSet = RuleSet()) -> float:
    """positionCount*100 + typeBonus(type) + baseMultiplier*10."""
    pattern = match.pattern
    return len(match.positions) * 100 + rules.type_bonus(pattern.type) + pattern.base_multiplier * 10


def remove_contained(matches: Sequence[Match]) -> list[Match]:
    """
    Drop matches whose cells are contained in another match with the same symbol.

    Identical footprints cannot both be dropped: of two equal cell sets, the one
    that appears first is kept.
    """
    cell_sets = [match.cells for match in matches]
    kept: list[Match] = []
    for i, match in enumerate(matches):
        cells = cell_sets[i]
        container = None
        for j, other in enumerate(matches):
            if i == j or other.symbol != match.symbol:
                continue
            if not cells <= cell_sets[j]:
                continue
            if cells == cell_sets[j] and i < j:
                continue
            container = other
            break

        if container is None:
            kept.append(match)
        else:
            logger.debug("REMOVED %s (contained in %s)", match.pattern.name, container.pattern.name)

    return kept


def resolve_overlaps(matches: Sequence[Match], rules: RuleSet = RuleSet()) -> list[Match]:
    """
    Greedily keep the highest-priority matches that do not share any cell.

    Ties keep input order, so resolution is deterministic for a fixed catalog.
    The result is returned in acceptance (priority) order.
    """
    ranked = sorted(matches, key=lambda m: calculate_priority(m, rules), reverse=True)

    accepted: list[Match] = []
    used: set[Position] = set()
    for match in ranked:
        cells = match.cells
        if cells & used:
            logger.debug("SKIPPED %s (overlaps accepted cells)", match.pattern.name)
            continue
        accepted.append(match)
        used |= cells
        logger.debug(
            "ADDED %s (priority %.1f)", match.pattern.name, calculate_priority(match, rules)
        )

    return accepted


def resolve(matches: Sequence[Match], rules: RuleSet = RuleSet()) -> list[Match]:
    """Containment removal followed by priority-ordered overlap resolution."""
    if not matches:
        return []
    non_contained = remove_contained(matches)
    resolved = resolve_overlaps(non_contained, rules)
    logger.debug(
        "resolve: %d raw -> %d non-contained -> %d resolved",
        len(matches),
        len(non_contained),
        len(resolved),
    )
    return resolved
