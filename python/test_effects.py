"""Tests for charm effects and grid size modifiers."""

import pytest

from effects import (
    CHARM_EFFECTS,
    Effect,
    EffectKind,
    SessionModifiers,
    Trigger,
    apply_effect,
    apply_effects,
    charm_effects,
)
from grid_types import GridSize, GridSizeModifier


class TestGridSizeModifier:
    """Tests for resizing."""

    def test_grow(self) -> None:
        assert GridSize(3, 3).apply(GridSizeModifier("test", 1, 2)) == GridSize(4, 5)

    def test_never_below_one(self) -> None:
        assert GridSize(1, 1).apply(GridSizeModifier("test", -1, -1)) == GridSize(1, 1)
        assert GridSize(3, 2).apply(GridSizeModifier("test", -5, 0)) == GridSize(1, 2)


class TestTriggers:
    """Tests for when effects fire."""

    def test_always(self) -> None:
        assert Effect(EffectKind.LUCK, 1).fires(final_spin=False, match_count=0)

    def test_final_spin(self) -> None:
        effect = Effect(EffectKind.LUCK, 7, Trigger.FINAL_SPIN)
        assert effect.fires(final_spin=True, match_count=0)
        assert not effect.fires(final_spin=False, match_count=10)

    def test_min_matches(self) -> None:
        effect = Effect(EffectKind.LUCK, 1, Trigger.MIN_MATCHES, threshold=3)
        assert not effect.fires(final_spin=False, match_count=2)
        assert effect.fires(final_spin=False, match_count=3)


class TestApplyEffect:
    """Tests for single effects."""

    @pytest.mark.parametrize(
        "effect,expected",
        [
            (Effect(EffectKind.LUCK, 2), SessionModifiers(luck=2)),
            (Effect(EffectKind.SYMBOLS_MULTIPLIER, 1), SessionModifiers(symbols_multiplier=2.0)),
            (Effect(EffectKind.PATTERNS_MULTIPLIER, 0.5), SessionModifiers(patterns_multiplier=1.5)),
            (Effect(EffectKind.SCALE_SYMBOLS_MULTIPLIER, 3), SessionModifiers(symbols_multiplier=3.0)),
            (Effect(EffectKind.SCALE_PATTERNS_MULTIPLIER, 2), SessionModifiers(patterns_multiplier=2.0)),
            (Effect(EffectKind.GRID_SIZE, rows=2), SessionModifiers(grid_size=GridSize(5, 3))),
        ],
    )
    def test_kinds(self, effect: Effect, expected: SessionModifiers) -> None:
        assert apply_effect(SessionModifiers(), effect) == expected


class TestCharms:
    """Tests for the built-in charms."""

    def test_expansive_vision(self) -> None:
        """3x3 becomes 4x4."""
        mods = apply_effects(SessionModifiers(), charm_effects(["expansive_vision"]))
        assert mods.grid_size == GridSize(4, 4)

    def test_stacked_size_charms(self) -> None:
        mods = apply_effects(SessionModifiers(), charm_effects(["wide_screen", "tall_tower"]))
        assert mods.grid_size == GridSize(6, 6)

    def test_mini_grid_floor(self) -> None:
        base = SessionModifiers(grid_size=GridSize(1, 1))
        mods = apply_effects(base, charm_effects(["mini_grid"]))
        assert mods.grid_size == GridSize(1, 1)

    def test_hamsa_only_on_final_spin(self) -> None:
        effects = charm_effects(["hamsa"])
        assert apply_effects(SessionModifiers(), effects).luck == 0
        assert apply_effects(SessionModifiers(), effects, final_spin=True).luck == 7

    def test_shrooms_needs_three_matches(self) -> None:
        effects = charm_effects(["shrooms"])
        assert apply_effects(SessionModifiers(), effects, match_count=2).symbols_multiplier == 1.0
        assert apply_effects(SessionModifiers(), effects, match_count=3).symbols_multiplier == 2.0

    def test_pentacle_then_shrooms(self) -> None:
        """Additive bonuses listed before a scaling effect are scaled by it."""
        effects = charm_effects(["pentacle", "shrooms"])
        assert apply_effects(SessionModifiers(), effects, match_count=5).symbols_multiplier == 6.0
        assert apply_effects(SessionModifiers(), effects, match_count=3).symbols_multiplier == 4.0
        assert apply_effects(SessionModifiers(), effects, match_count=0).symbols_multiplier == 2.0

    def test_stain(self) -> None:
        effects = charm_effects(["stain"])
        assert apply_effects(SessionModifiers(), effects, match_count=4).patterns_multiplier == 1.5

    def test_sources_recorded(self) -> None:
        pairs = charm_effects(["pentacle", "hamsa"])
        assert [source for source, _ in pairs] == ["pentacle", "pentacle", "hamsa"]

    def test_unknown_charm(self) -> None:
        with pytest.raises(ValueError, match="Unknown charm"):
            charm_effects(["horseshoe"])

    def test_every_charm_has_effects(self) -> None:
        for charm_id, effects in CHARM_EFFECTS.items():
            assert effects, charm_id
