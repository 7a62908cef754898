# src/runner/terrain.py
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import List, Optional
from .config import (
    MIN_PLATFORM_W, MAX_PLATFORM_W, MIN_GAP, MAX_GAP,
    SPAWN_DISTANCE, DESPAWN_DISTANCE, INITIAL_HORIZON,
    GRAVITY, JUMP_VELOCITY, RUN_SPEED, PLAYER_W,
)
from .platform import Platform, KIND_GROUND, KIND_RAIL


def jump_reach() -> float:
    """
    Widest gap a running jump clears when taking off at the very edge:
    flight time back to roof height times run speed, plus the player's width.
    MAX_GAP has to stay below this whenever jump physics change.
    """
    airtime = 2.0 * abs(JUMP_VELOCITY) / GRAVITY
    return airtime * RUN_SPEED + PLAYER_W


@dataclass
class TerrainDelta:
    """Platforms the host must register (spawned) and release (despawned)."""
    spawned: List[Platform] = field(default_factory=list)
    despawned: List[Platform] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.spawned or self.despawned)


class TerrainGen:
    """
    Endless strip of rooftops, created ahead of a moving reference x and
    released behind it. Platforms are kept in spawn order, which is also
    left-to-right order.

    width_skew: exponent applied to the width draw; 1.0 = uniform,
                < 1 biases toward wide (easier) rooftops.
    rail_chance: probability that a slot is a rail instead of a rooftop.
    """
    def __init__(self, seed: int | None = None, *,
                 width_skew: float = 1.0,
                 rail_chance: float = 0.0,
                 rng: Optional[random.Random] = None):
        if not width_skew > 0:
            raise ValueError(f"width_skew must be > 0, got {width_skew}")
        if not 0.0 <= rail_chance <= 1.0:
            raise ValueError(f"rail_chance must be in [0, 1], got {rail_chance}")
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.width_skew = float(width_skew)
        self.rail_chance = float(rail_chance)
        self.platforms: List[Platform] = []
        self.rightmost_edge: float = 0.0
        self._reference_x: Optional[float] = None

    # -------------------- Generation --------------------

    def _draw_width(self) -> float:
        # random()^power * range + min
        span = MAX_PLATFORM_W - MIN_PLATFORM_W
        return self.rng.random() ** self.width_skew * span + MIN_PLATFORM_W

    def _draw_gap(self) -> float:
        return self.rng.random() * (MAX_GAP - MIN_GAP) + MIN_GAP

    def _draw_kind(self) -> str:
        # no extra draw when rails are off, so the width/gap stream is unchanged
        if self.rail_chance > 0.0 and self.rng.random() < self.rail_chance:
            return KIND_RAIL
        return KIND_GROUND

    def spawn(self, kind: Optional[str] = None) -> Platform:
        """Place one platform at the frontier, then advance past it and a gap."""
        if kind is None:
            kind = self._draw_kind()
        width = self._draw_width()
        platform = Platform(left=self.rightmost_edge, width=width, kind=kind)
        self.platforms.append(platform)
        self.rightmost_edge += width
        self.rightmost_edge += self._draw_gap()
        return platform

    def initialize(self) -> TerrainDelta:
        """Start over from x=0 and fill the look-ahead horizon."""
        delta = TerrainDelta(despawned=list(self.platforms))
        self.platforms = []
        self.rightmost_edge = 0.0
        self._reference_x = None
        # first rooftop is always solid ground so the player has somewhere to land
        delta.spawned.append(self.spawn(KIND_GROUND))
        while self.rightmost_edge < INITIAL_HORIZON:
            delta.spawned.append(self.spawn())
        return delta

    def update(self, reference_x: float) -> TerrainDelta:
        """
        Spawn until the frontier is SPAWN_DISTANCE ahead of reference_x and
        drop every platform whose right edge is behind reference_x + DESPAWN_DISTANCE.
        A reference that moved backward changes nothing.
        """
        delta = TerrainDelta()
        if self._reference_x is not None and reference_x < self._reference_x:
            return delta
        self._reference_x = reference_x

        while self.rightmost_edge < reference_x + SPAWN_DISTANCE:
            delta.spawned.append(self.spawn())

        threshold = reference_x + DESPAWN_DISTANCE
        kept: List[Platform] = []
        for platform in self.platforms:
            if platform.right < threshold:
                delta.despawned.append(platform)
            else:
                kept.append(platform)
        self.platforms = kept
        return delta

    # -------------------- Queries --------------------

    @property
    def frontier(self) -> float:
        return self.rightmost_edge

    @property
    def active_count(self) -> int:
        return len(self.platforms)

    def platform_under(self, x: float) -> Optional[Platform]:
        for platform in self.platforms:
            if platform.left <= x < platform.right:
                return platform
            if platform.left > x:
                break
        return None

    def next_gap(self, x: float) -> tuple[float, float]:
        """
        (start, width) of the first gap at or after x. A gap still being
        generated (past the last platform) reports its width up to the frontier.
        """
        for i, platform in enumerate(self.platforms):
            if platform.right <= x:
                continue
            if platform.left > x:
                # x already sits in a gap
                prev_right = self.platforms[i - 1].right if i > 0 else x
                return max(x, prev_right), platform.left - max(x, prev_right)
            if i + 1 < len(self.platforms):
                return platform.right, self.platforms[i + 1].left - platform.right
            return platform.right, self.rightmost_edge - platform.right
        return x, max(0.0, self.rightmost_edge - x)
