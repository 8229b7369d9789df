"""
Charm effects as data.

Each charm declares its effects as tagged variants at definition time; folding
them over a base yields the session modifiers the engine consumes (luck, the
two payout multipliers, and the grid size).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from grid_types import GridSize, GridSizeModifier

logger = logging.getLogger(__name__)


class EffectKind(Enum):
    """What an effect changes."""

    LUCK = "luck"  # Adds to luck
    SYMBOLS_MULTIPLIER = "symbols_multiplier"  # Adds to the symbols multiplier
    PATTERNS_MULTIPLIER = "patterns_multiplier"  # Adds to the patterns multiplier
    SCALE_SYMBOLS_MULTIPLIER = "scale_symbols_multiplier"  # Multiplies the symbols multiplier
    SCALE_PATTERNS_MULTIPLIER = "scale_patterns_multiplier"  # Multiplies the patterns multiplier
    GRID_SIZE = "grid_size"  # Adds rows/cols


class Trigger(Enum):
    """When an effect applies."""

    ALWAYS = "always"
    FINAL_SPIN = "final_spin"  # Only on the last spin before a deadline
    MIN_MATCHES = "min_matches"  # Only when at least `threshold` patterns resolved


@dataclass(frozen=True)
class Effect:
    """A single declarative effect."""

    kind: EffectKind
    amount: float = 0.0
    trigger: Trigger = Trigger.ALWAYS
    threshold: int = 0
    rows: int = 0  # GRID_SIZE only
    cols: int = 0  # GRID_SIZE only

    def fires(self, final_spin: bool, match_count: int) -> bool:
        match self.trigger:
            case Trigger.ALWAYS:
                return True
            case Trigger.FINAL_SPIN:
                return final_spin
            case Trigger.MIN_MATCHES:
                return match_count >= self.threshold


@dataclass(frozen=True)
class SessionModifiers:
    """Inputs to a spin that charms and events can change."""

    grid_size: GridSize = GridSize(3, 3)
    luck: float = 0.0
    symbols_multiplier: float = 1.0
    patterns_multiplier: float = 1.0


def apply_effect(base: SessionModifiers, effect: Effect, source: str = "") -> SessionModifiers:
    """Apply one effect unconditionally."""
    match effect.kind:
        case EffectKind.LUCK:
            return replace(base, luck=base.luck + effect.amount)
        case EffectKind.SYMBOLS_MULTIPLIER:
            return replace(base, symbols_multiplier=base.symbols_multiplier + effect.amount)
        case EffectKind.PATTERNS_MULTIPLIER:
            return replace(base, patterns_multiplier=base.patterns_multiplier + effect.amount)
        case EffectKind.SCALE_SYMBOLS_MULTIPLIER:
            return replace(base, symbols_multiplier=base.symbols_multiplier * effect.amount)
        case EffectKind.SCALE_PATTERNS_MULTIPLIER:
            return replace(base, patterns_multiplier=base.patterns_multiplier * effect.amount)
        case EffectKind.GRID_SIZE:
            modifier = GridSizeModifier(source, effect.rows, effect.cols)
            return replace(base, grid_size=base.grid_size.apply(modifier))
    raise ValueError(f"Unknown effect kind: {effect.kind}")


def apply_effects(
    base: SessionModifiers,
    effects: Iterable[tuple[str, Effect]],
    *,
    final_spin: bool = False,
    match_count: int = 0,
) -> SessionModifiers:
    """
    Fold (source, effect) pairs over a base, skipping effects whose trigger does not fire.

    Effects apply in the given order, so additive bonuses listed before a
    scaling effect are scaled by it.
    """
    result = base
    for source, effect in effects:
        if not effect.fires(final_spin, match_count):
            continue
        result = apply_effect(result, effect, source)
        logger.debug("%s applied %s %s -> %s", source, effect.kind.value, effect.amount, result)
    return result


CHARM_EFFECTS: dict[str, tuple[Effect, ...]] = {
    "expansive_vision": (Effect(EffectKind.GRID_SIZE, rows=1, cols=1),),
    "wide_screen": (Effect(EffectKind.GRID_SIZE, cols=3),),
    "tall_tower": (Effect(EffectKind.GRID_SIZE, rows=3),),
    "mini_grid": (Effect(EffectKind.GRID_SIZE, rows=-1, cols=-1),),
    "hamsa": (Effect(EffectKind.LUCK, 7, Trigger.FINAL_SPIN),),
    "pentacle": (
        Effect(EffectKind.SYMBOLS_MULTIPLIER, 1),
        Effect(EffectKind.SYMBOLS_MULTIPLIER, 1, Trigger.MIN_MATCHES, threshold=5),
    ),
    "shrooms": (Effect(EffectKind.SCALE_SYMBOLS_MULTIPLIER, 2, Trigger.MIN_MATCHES, threshold=3),),
    "stain": (Effect(EffectKind.SCALE_PATTERNS_MULTIPLIER, 1.5, Trigger.MIN_MATCHES, threshold=4),),
}


def charm_effects(charm_ids: Iterable[str]) -> list[tuple[str, Effect]]:
    """
    Flatten the effects of equipped charms into (source, effect) pairs.

    Raises:
        ValueError: for a charm with no known effects
    """
    pairs: list[tuple[str, Effect]] = []
    for charm_id in charm_ids:
        if charm_id not in CHARM_EFFECTS:
            raise ValueError(
                f"Unknown charm: '{charm_id}'\n"
                f"  Known charms: {', '.join(sorted(CHARM_EFFECTS))}"
            )
        pairs.extend((charm_id, effect) for effect in CHARM_EFFECTS[charm_id])
    return pairs
