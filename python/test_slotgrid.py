"""
Tests for the spin pipeline and sessions.
"""

import random

import pytest

from effects import SessionModifiers
from payout import apply_special_sequence
from slotgrid import (
    CatalogCache,
    Grid,
    GridSize,
    InvalidGrid,
    SlotSession,
    SpecialSequence,
    evaluate,
    legacy_catalog,
    parse_grid,
    parse_grids_concise,
    spin,
)

GRIDS = parse_grids_concise(
    """
    lemons: LLL|LLL|LLL
    no_adjacent: LCVB|BDT7|7LCV|VBDT
    sevens: 777|777|LCB
    """
)


# =============================================================================
# Test Evaluate
# =============================================================================


class TestEvaluate:
    """Scoring fixed grids."""

    def test_all_lemons_legacy(self) -> None:
        result = evaluate(GRIDS["lemons"], catalog=legacy_catalog())
        assert len(result.raw_matches) == 8
        assert [m.pattern.name for m in result.matches] == ["Main Diagonal"]
        assert result.payout == pytest.approx(15.0)
        assert result.special is None
        assert result.is_win

    def test_all_lemons_generated(self) -> None:
        result = evaluate(GRIDS["lemons"])
        assert len(result.raw_matches) == 12
        assert result.payout == pytest.approx(21.6)
        assert result.winning_positions == frozenset({(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)})

    def test_multipliers(self) -> None:
        result = evaluate(GRIDS["lemons"], symbols_multiplier=2.0, patterns_multiplier=1.5)
        assert result.payout == pytest.approx(21.6 * 3)
        assert result.symbols_multiplier == 2.0

    def test_no_matches(self) -> None:
        result = evaluate(GRIDS["no_adjacent"])
        assert result.raw_matches == ()
        assert result.matches == ()
        assert result.payout == 0
        assert not result.is_win

    def test_special_sequence_reported(self) -> None:
        result = evaluate(GRIDS["sevens"])
        assert result.special is SpecialSequence.NINE_NINE_NINE

    def test_cache_is_used(self) -> None:
        cache = CatalogCache()
        evaluate(GRIDS["lemons"], cache=cache)
        evaluate(GRIDS["lemons"], cache=cache)
        assert (cache.hits, cache.misses) == (1, 1)

    def test_malformed_grid(self) -> None:
        with pytest.raises(InvalidGrid):
            evaluate(parse_grid("L L L|L _ L|L L L"))

    def test_one_by_one_grid_never_wins(self) -> None:
        result = evaluate(Grid.filled(GridSize(1, 1), "seven"))
        assert result.matches == ()
        assert result.payout == 0


# =============================================================================
# Test Spin
# =============================================================================


class TestSpin:
    """Random spins."""

    def test_seeded_spins_repeat(self) -> None:
        first = spin(GridSize(4, 4), luck=3, rng=random.Random(11))
        second = spin(GridSize(4, 4), luck=3, rng=random.Random(11))
        assert first == second

    def test_grid_has_requested_size(self) -> None:
        result = spin(GridSize(3, 5), rng=random.Random(1))
        assert result.grid.size == GridSize(3, 5)

    def test_full_luck_always_wins(self) -> None:
        for seed in range(5):
            result = spin(GridSize(3, 3), luck=9, rng=random.Random(seed))
            assert len(result.raw_matches) == 12
            assert len(result.matches) == 1

    def test_resolved_matches_never_share_cells(self) -> None:
        rng = random.Random(21)
        cache = CatalogCache()
        for _ in range(25):
            result = spin(GridSize(4, 5), luck=5, rng=rng, cache=cache)
            cells = [pos for match in result.matches for pos in match.positions]
            assert len(cells) == len(set(cells))
        assert cache.misses == 1


# =============================================================================
# Test Session
# =============================================================================


class TestSlotSession:
    """Charms, coins and spin limits."""

    def test_coins_follow_payout(self) -> None:
        session = SlotSession(rng=random.Random(5))
        result = session.spin()
        assert session.coins == pytest.approx(apply_special_sequence(0.0, result.payout, result.special))

    def test_expansive_vision_grows_grid(self) -> None:
        session = SlotSession(rng=random.Random(2))
        session.equip("expansive_vision")
        result = session.spin()
        assert result.grid.rows == 4
        assert result.grid.cols == 4

    def test_size_change_drops_old_catalog(self) -> None:
        session = SlotSession(rng=random.Random(2))
        session.spin()
        assert GridSize(3, 3) in session.cache
        session.equip("expansive_vision")
        session.spin()
        assert GridSize(3, 3) not in session.cache
        assert GridSize(4, 4) in session.cache

    def test_equip_limits(self) -> None:
        session = SlotSession(max_charms=2)
        assert session.equip("hamsa")
        assert not session.equip("hamsa")
        assert session.equip("pentacle")
        assert not session.equip("shrooms")
        assert session.charms == ["hamsa", "pentacle"]

    def test_unequip(self) -> None:
        session = SlotSession()
        session.equip("hamsa")
        assert session.unequip("hamsa")
        assert not session.unequip("hamsa")
        assert session.charms == []

    def test_equip_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown charm"):
            SlotSession().equip("horseshoe")

    def test_spin_limit(self) -> None:
        session = SlotSession(spins_remaining=2, rng=random.Random(0))
        session.spin()
        session.spin()
        assert session.spins_remaining == 0
        with pytest.raises(RuntimeError, match="No spins remaining"):
            session.spin()

    def test_hamsa_on_final_spin(self) -> None:
        session = SlotSession(spins_remaining=3, rng=random.Random(0))
        session.equip("hamsa")
        assert session.modifiers().luck == 0
        session.spin()
        session.spin()
        assert session.final_spin
        assert session.modifiers().luck == 7

    def test_shrooms_rescales_payout(self) -> None:
        """A spin resolving enough matches is paid at the triggered multiplier."""
        session = SlotSession(
            base=SessionModifiers(grid_size=GridSize(6, 6), luck=36),
            rng=random.Random(4),
        )
        session.equip("shrooms")
        result = session.spin()
        if len(result.matches) >= 3:
            assert result.symbols_multiplier == 2.0
            assert result.payout == pytest.approx(2.0 * sum(m.payout for m in result.matches))
        else:
            assert result.symbols_multiplier == 1.0

    def test_unlimited_spins(self) -> None:
        session = SlotSession(rng=random.Random(0))
        for _ in range(3):
            session.spin()
        assert session.spins_remaining is None
        assert not session.final_spin
