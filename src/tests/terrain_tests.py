"""
Terrain generator tests: spawn layout, streaming invariants, despawn.

Usage (from repo root):
  python -m src.tests.terrain_tests
  python -m src.tests.terrain_tests --walks 20 --steps 2000
"""

from __future__ import annotations
import argparse
import random
import sys
from typing import List

from src.runner.config import (
    MIN_PLATFORM_W, MAX_PLATFORM_W, MIN_GAP, MAX_GAP,
    SPAWN_DISTANCE, DESPAWN_DISTANCE, INITIAL_HORIZON,
)
from src.runner.platform import Platform, KIND_GROUND, KIND_RAIL
from src.runner.terrain import TerrainGen, jump_reach

TOL = 1e-6


class ScriptedRng:
    """Stands in for random.Random: replays fixed random() draws."""
    def __init__(self, values: List[float]):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


def draws_for(widths, gaps) -> List[float]:
    out = []
    for w, g in zip(widths, gaps):
        out.append((w - MIN_PLATFORM_W) / (MAX_PLATFORM_W - MIN_PLATFORM_W))
        out.append((g - MIN_GAP) / (MAX_GAP - MIN_GAP))
    return out


def example_gen() -> TerrainGen:
    gen = TerrainGen(0, rng=ScriptedRng(draws_for([300, 500], [150, 200])))
    gen.spawn()
    gen.spawn()
    return gen


def check_invariants(gen: TerrainGen):
    plats = gen.platforms
    for p in plats:
        assert MIN_PLATFORM_W - TOL <= p.width <= MAX_PLATFORM_W + TOL, f"width {p.width} out of range"
    for a, b in zip(plats, plats[1:]):
        gap = b.left - a.right
        assert a.left < b.left, "edges must strictly increase"
        assert MIN_GAP - TOL <= gap <= MAX_GAP + TOL, f"gap {gap} out of range"
    if plats:
        tail = gen.frontier - plats[-1].right
        assert MIN_GAP - TOL <= tail <= MAX_GAP + TOL, f"trailing gap {tail} out of range"


def test_example_scenario():
    gen = example_gen()
    a, b = gen.platforms
    assert abs(a.left - 0) < TOL and abs(a.right - 300) < TOL
    assert abs(b.left - 450) < TOL and abs(b.right - 950) < TOL
    assert abs(gen.frontier - 1150) < TOL


def test_initialize_fills_horizon(seed: int = 7):
    gen = TerrainGen(seed)
    delta = gen.initialize()
    assert gen.frontier >= INITIAL_HORIZON
    assert gen.platforms[0].left == 0.0
    assert delta.spawned == gen.platforms and delta.despawned == []
    check_invariants(gen)

    # a second initialize starts over and releases the old strip
    old = list(gen.platforms)
    delta = gen.initialize()
    assert delta.despawned == old
    assert gen.platforms[0].left == 0.0


def test_random_walk_invariants(walks: int = 5, steps: int = 500):
    for seed in range(walks):
        gen = TerrainGen(seed, width_skew=0.6 if seed % 2 else 1.0)
        gen.initialize()
        walk = random.Random(1000 + seed)
        x = 0.0
        for _ in range(steps):
            x += walk.uniform(0.0, 60.0)
            gen.update(x)
            check_invariants(gen)
            assert gen.frontier >= x + SPAWN_DISTANCE
            assert all(p.right >= x + DESPAWN_DISTANCE for p in gen.platforms)


def test_despawn_behind_threshold(seed: int = 3):
    gen = TerrainGen(seed)
    gen.initialize()
    gen.update(0.0)
    before = list(gen.platforms)
    x = 2500.0
    delta = gen.update(x)
    gone = [p for p in before if p.right < x + DESPAWN_DISTANCE]
    kept = [p for p in before if p.right >= x + DESPAWN_DISTANCE]
    assert delta.despawned == gone and gone, "expected something to fall behind"
    assert gen.platforms[:len(kept)] == kept
    assert all(a is b for a, b in zip(gen.platforms, kept)), "kept platforms must be untouched"


def test_stationary_reference_is_noop(seed: int = 11):
    gen = TerrainGen(seed)
    gen.initialize()
    gen.update(500.0)
    snapshot = list(gen.platforms)
    delta = gen.update(500.0)
    assert not delta
    assert gen.platforms == snapshot


def test_backward_reference_is_noop(seed: int = 12):
    gen = TerrainGen(seed)
    gen.initialize()
    gen.update(3000.0)
    snapshot = list(gen.platforms)
    frontier = gen.frontier
    assert not gen.update(1000.0)
    assert gen.platforms == snapshot and gen.frontier == frontier


def test_teleport_spawns_whole_horizon(seed: int = 13):
    gen = TerrainGen(seed)
    gen.initialize()
    x = 100_000.0
    delta = gen.update(x)
    assert gen.frontier >= x + SPAWN_DISTANCE
    assert len(delta.spawned) > 100
    check_invariants(gen)
    assert all(p.right >= x + DESPAWN_DISTANCE for p in gen.platforms)


def test_skew_favours_wide_rooftops(seed: int = 21, n: int = 300):
    uniform, skewed = TerrainGen(seed), TerrainGen(seed, width_skew=0.6)
    wu = [uniform.spawn().width for _ in range(n)]
    ws = [skewed.spawn().width for _ in range(n)]
    # same draws, r ** 0.6 >= r on [0, 1]
    assert all(s >= u - TOL for s, u in zip(ws, wu))
    assert sum(ws) > sum(wu)


def test_seed_reproducible():
    a, b = TerrainGen(99), TerrainGen(99)
    a.initialize(); b.initialize()
    assert [(p.left, p.width) for p in a.platforms] == [(p.left, p.width) for p in b.platforms]
    assert TerrainGen(None).seed is not None


def test_rails_mixed_in(seed: int = 5):
    gen = TerrainGen(seed, rail_chance=1.0)
    gen.initialize()
    assert gen.platforms[0].kind == KIND_GROUND
    assert all(p.kind == KIND_RAIL for p in gen.platforms[1:])
    assert gen.platforms[1].category == "rail"
    assert gen.platforms[0].category == "platform"
    check_invariants(gen)


def test_queries():
    gen = example_gen()
    first, second = gen.platforms
    assert gen.platform_under(100) is first
    assert gen.platform_under(400) is None
    assert gen.platform_under(950) is None
    start, width = gen.next_gap(100)
    assert abs(start - 300) < TOL and abs(width - 150) < TOL
    start, width = gen.next_gap(400)
    assert abs(start - 400) < TOL and abs(width - 50) < TOL
    start, width = gen.next_gap(600)
    assert abs(start - 950) < TOL and abs(width - 200) < TOL
    assert gen.active_count == 2


def test_platform_contract():
    try:
        Platform(left=0.0, width=0.0)
    except ValueError:
        pass
    else:
        raise AssertionError("zero-width platform must be rejected")
    a, b = Platform(0.0, 200.0), Platform(0.0, 200.0)
    assert a != b, "platforms compare by identity"
    assert a.right == 200.0 and a.top < a.bottom
    assert a.rect.width == 200


def test_max_gap_is_jumpable():
    assert MAX_GAP < jump_reach(), "re-derive MAX_GAP after changing jump physics"


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--walks", type=int, default=5, help="Random walks for the invariant test")
    ap.add_argument("--steps", type=int, default=500, help="update() calls per walk")
    args = ap.parse_args()

    try:
        for name, fn in sorted(globals().items()):
            if not (name.startswith("test_") and callable(fn)):
                continue
            if fn is test_random_walk_invariants:
                fn(walks=args.walks, steps=args.steps)
            else:
                fn()
            print(f"✓ {name}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All terrain tests passed")


if __name__ == "__main__":
    main()
