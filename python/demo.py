"""
Demonstration scripts for the slotgrid pattern engine.
"""

import logging
import random

from analysis import describe_catalog
from ascii_render import render_grid, render_match_summary, render_pattern
from grid_types import GridSize, PatternType
from pattern_catalog import generate_catalog, legacy_catalog
from slotgrid import CatalogCache, evaluate, parse_grids_concise, spin


def demo_catalogs() -> None:
    """Pattern counts across grid shapes, including a grid too narrow for shapes."""
    for size in (GridSize(3, 3), GridSize(4, 4), GridSize(3, 6), GridSize(6, 3), GridSize(2, 8)):
        describe_catalog(size)

    print("=" * 40)
    print("First geometric patterns on a 4x4 grid:")
    print("=" * 40)
    size = GridSize(4, 4)
    shapes = [p for p in generate_catalog(size) if p.type is PatternType.GEOMETRIC][:4]
    for pattern in shapes:
        print(f"{pattern.name}  x{pattern.base_multiplier:.2f}")
        print(render_pattern(pattern, size))
        print()


def demo_fixed_grids() -> None:
    """Score hand-written grids against generated and legacy catalogs."""
    store = parse_grids_concise(
        """
        lemons: LLL|LLL|LLL
        cross: CLC|LLL|CLC
        sevens: 777C|BBBB|D7TV|7LC7
        """
    )

    print("=" * 40)
    print("All lemons, legacy 8-pattern catalog:")
    print("=" * 40)
    result = evaluate(store["lemons"], catalog=legacy_catalog())
    print(render_grid(result.grid, result.matches))
    print(f"raw={len(result.raw_matches)} resolved={len(result.matches)} payout={result.payout:.2f}")
    print()

    for name in ("lemons", "cross", "sevens"):
        print("=" * 40)
        print(f"{name}, generated catalog:")
        print("=" * 40)
        result = evaluate(store[name])
        print(render_grid(result.grid, result.matches))
        print(render_match_summary(result.matches))
        print(f"payout={result.payout:.2f} special={result.special}")
        print()


def demo_spins(count: int = 5, seed: int = 42) -> None:
    """A handful of lucky spins on a 4x4 grid sharing one catalog cache."""
    rng = random.Random(seed)
    cache = CatalogCache()
    for i in range(count):
        result = spin(GridSize(4, 4), luck=6, rng=rng, cache=cache)
        print(f"Spin {i + 1}: payout {result.payout:.2f}")
        print(render_grid(result.grid, result.matches))
        print()
    print(f"cache hits={cache.hits} misses={cache.misses}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    demo_catalogs()
    demo_fixed_grids()
    demo_spins()
