"""
Slot grid pattern engine.
One spin: random grid -> luck forcing -> cached catalog -> match -> resolve -> payout.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Sequence

from effects import CHARM_EFFECTS, Effect, SessionModifiers, apply_effects, charm_effects
from grid_parser import parse_grid, parse_grids_concise
from grid_types import (
    EMPTY,
    Grid,
    GridSize,
    GridSizeModifier,
    InvalidGrid,
    InvalidGridSize,
    Match,
    Pattern,
    PatternType,
    Position,
    RuleSet,
    SymbolSpec,
)
from luck import apply_luck, random_grid
from matcher import find_matches
from pattern_catalog import CatalogCache, generate_catalog, legacy_catalog
from payout import SpecialSequence, apply_special_sequence, special_sequence, total_payout
from resolver import resolve
from symbols import DEFAULT_SYMBOLS

__all__ = [
    "CatalogCache",
    "EMPTY",
    "Grid",
    "GridSize",
    "GridSizeModifier",
    "InvalidGrid",
    "InvalidGridSize",
    "Match",
    "Pattern",
    "PatternType",
    "Position",
    "RuleSet",
    "SlotSession",
    "SpecialSequence",
    "SpinResult",
    "SymbolSpec",
    "evaluate",
    "generate_catalog",
    "legacy_catalog",
    "parse_grid",
    "parse_grids_concise",
    "spin",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinResult:
    """Everything one spin produced, published read-only to presentation."""

    grid: Grid
    raw_matches: tuple[Match, ...]
    matches: tuple[Match, ...]  # Resolved, non-overlapping
    payout: float
    special: SpecialSequence | None = None
    symbols_multiplier: float = 1.0
    patterns_multiplier: float = 1.0

    @property
    def winning_positions(self) -> frozenset[Position]:
        return frozenset(pos for match in self.matches for pos in match.positions)

    @property
    def is_win(self) -> bool:
        return bool(self.matches)


def evaluate(
    grid: Grid,
    *,
    symbols_multiplier: float = 1.0,
    patterns_multiplier: float = 1.0,
    symbols: Sequence[SymbolSpec] = DEFAULT_SYMBOLS,
    catalog: Sequence[Pattern] | None = None,
    cache: CatalogCache | None = None,
    rules: RuleSet = RuleSet(),
) -> SpinResult:
    """
    Score an existing grid.

    Args:
        grid: Well-formed grid of known symbols
        symbols_multiplier: Session multiplier applied to the summed payout
        patterns_multiplier: Session multiplier applied to the summed payout
        symbols: Vocabulary for values and validation
        catalog: Explicit catalog; defaults to the generated one for the grid's size
        cache: Where generated catalogs are kept between spins
        rules: Generation and resolution tunables

    Raises:
        InvalidGrid: if the grid is malformed
        InvalidGridSize: if the grid has no rows or columns
    """
    if catalog is None:
        size = grid.size
        catalog = cache.get(size, rules) if cache is not None else generate_catalog(size, rules)

    raw = find_matches(grid, catalog, symbols)
    resolved = resolve(raw, rules)
    payout = total_payout(resolved, symbols_multiplier, patterns_multiplier)
    special = special_sequence(grid)

    logger.debug(
        "evaluate: %d raw matches, %d resolved, payout %.3f, special %s",
        len(raw),
        len(resolved),
        payout,
        special.value if special else None,
    )
    return SpinResult(
        grid=grid,
        raw_matches=tuple(raw),
        matches=tuple(resolved),
        payout=payout,
        special=special,
        symbols_multiplier=symbols_multiplier,
        patterns_multiplier=patterns_multiplier,
    )


def spin(
    size: GridSize,
    *,
    luck: float = 0,
    symbols_multiplier: float = 1.0,
    patterns_multiplier: float = 1.0,
    symbols: Sequence[SymbolSpec] = DEFAULT_SYMBOLS,
    rng: random.Random | None = None,
    cache: CatalogCache | None = None,
    rules: RuleSet = RuleSet(),
) -> SpinResult:
    """Generate a random grid, apply luck, and score it."""
    rng = rng or random.Random()
    grid = random_grid(size, symbols, rng)
    grid = apply_luck(grid, luck, symbols, rng)
    return evaluate(
        grid,
        symbols_multiplier=symbols_multiplier,
        patterns_multiplier=patterns_multiplier,
        symbols=symbols,
        cache=cache,
        rules=rules,
    )


@dataclass
class SlotSession:
    """
    A run of spins sharing equipped charms, a coin balance and a catalog cache.

    Usage:
        session = SlotSession(rng=random.Random(7))
        session.equip("expansive_vision")
        result = session.spin()
        print(session.coins)
    """

    base: SessionModifiers = field(default_factory=SessionModifiers)
    charms: list[str] = field(default_factory=list)
    coins: float = 0.0
    spins_remaining: int | None = None  # None = unlimited
    max_charms: int = 3
    symbols: Sequence[SymbolSpec] = DEFAULT_SYMBOLS
    rules: RuleSet = field(default_factory=RuleSet)
    rng: random.Random = field(default_factory=random.Random)
    cache: CatalogCache = field(default_factory=CatalogCache)
    last_size: GridSize | None = None

    def equip(self, charm_id: str) -> bool:
        """Equip a charm; False when slots are full or it is already equipped."""
        if charm_id not in CHARM_EFFECTS:
            raise ValueError(f"Unknown charm: '{charm_id}'")
        if len(self.charms) >= self.max_charms or charm_id in self.charms:
            return False
        self.charms.append(charm_id)
        return True

    def unequip(self, charm_id: str) -> bool:
        if charm_id not in self.charms:
            return False
        self.charms.remove(charm_id)
        return True

    @property
    def effects(self) -> list[tuple[str, Effect]]:
        return charm_effects(self.charms)

    @property
    def final_spin(self) -> bool:
        return self.spins_remaining == 1

    def modifiers(self, match_count: int = 0) -> SessionModifiers:
        return apply_effects(
            self.base, self.effects, final_spin=self.final_spin, match_count=match_count
        )

    def spin(self) -> SpinResult:
        """
        Spin once with the current charms and settle the coin balance.

        Raises:
            RuntimeError: if no spins remain
        """
        if self.spins_remaining is not None and self.spins_remaining <= 0:
            raise RuntimeError("No spins remaining")

        before = self.modifiers()
        size = before.grid_size
        if self.last_size is not None and self.last_size != size:
            logger.info("Grid size changed %s -> %s, dropping old catalog", self.last_size, size)
            self.cache.invalidate(self.last_size)
        self.last_size = size

        result = spin(
            size,
            luck=before.luck,
            symbols_multiplier=before.symbols_multiplier,
            patterns_multiplier=before.patterns_multiplier,
            symbols=self.symbols,
            rng=self.rng,
            cache=self.cache,
            rules=self.rules,
        )

        after = self.modifiers(match_count=len(result.matches))
        if (after.symbols_multiplier, after.patterns_multiplier) != (
            before.symbols_multiplier,
            before.patterns_multiplier,
        ):
            result = replace(
                result,
                payout=total_payout(result.matches, after.symbols_multiplier, after.patterns_multiplier),
                symbols_multiplier=after.symbols_multiplier,
                patterns_multiplier=after.patterns_multiplier,
            )

        self.coins = apply_special_sequence(self.coins, result.payout, result.special)
        if self.spins_remaining is not None:
            self.spins_remaining -= 1

        logger.info(
            "Spin on %s: %d matches, payout %.2f, coins %.2f",
            size,
            len(result.matches),
            result.payout,
            self.coins,
        )
        return result
