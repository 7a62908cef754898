# src/runner/world.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from .config import GRAVITY, CAMERA_LEAD, PLAYER_W, PLAYER_H
from .events import (
    CollisionStart, CollisionEnd, SIDE_BOTTOM, SIDE_LEFT, SIDE_RIGHT
)
from .platform import Platform
from .player import Player
from .terrain import TerrainGen, TerrainDelta

CONTACT_EPS = 2.0   # resting contact tolerance (px)


@dataclass
class StepResult:
    events: List[object] = field(default_factory=list)
    spawned: List[Platform] = field(default_factory=list)
    despawned: List[Platform] = field(default_factory=list)


class World:
    """
    Minimal host loop around the core: gravity integration, AABB contacts
    against live platforms, collision begin/end bookkeeping.
    One step = player tick -> terrain update -> integrate -> contacts.
    """
    def __init__(self, seed: int | None = None, *,
                 width_skew: float = 1.0, rail_chance: float = 0.0):
        self.terrain = TerrainGen(seed, width_skew=width_skew, rail_chance=rail_chance)
        self.seed = self.terrain.seed
        self.player = Player()
        self._contacts: Dict[Platform, str] = {}   # platform -> side of contact
        # the starting strip is handed to the host with the first step
        self._pending: Optional[TerrainDelta] = self.terrain.initialize()

    @property
    def camera_x(self) -> float:
        return self.player.x + CAMERA_LEAD

    @property
    def distance(self) -> int:
        return self.player.distance

    @property
    def grounded(self) -> bool:
        return any(side == SIDE_BOTTOM for side in self._contacts.values())

    def tap(self):
        self.player.tap()

    def step(self, dt: float) -> StepResult:
        dt = max(0.0, dt)
        result = StepResult()
        player = self.player

        result.events += player.on_tick(dt)

        if self._pending is not None:
            result.spawned += self._pending.spawned
            result.despawned += self._pending.despawned
            self._pending = None

        delta = self.terrain.update(self.camera_x)
        result.spawned += delta.spawned
        result.despawned += delta.despawned
        for platform in delta.despawned:
            side = self._contacts.pop(platform, None)
            if side is not None:
                result.events += player.on_collision(CollisionEnd(side, platform.category))

        if player.game_over:
            # frozen in place once the run is over
            player.vx = player.vy = 0.0
            return result

        prev_y = player.y
        player.vy += GRAVITY * dt
        player.x += player.vx * dt
        player.y += player.vy * dt

        result.events += self._resolve_contacts(prev_y)
        return result

    def _resolve_contacts(self, prev_y: float) -> List[object]:
        player = self.player
        touching: Dict[Platform, str] = {}

        for platform in self.terrain.platforms:
            if player.x + PLAYER_W <= platform.left or player.x >= platform.right:
                continue
            bottom = player.y + PLAYER_H
            if bottom < platform.top - CONTACT_EPS or player.y >= platform.bottom:
                continue

            if prev_y + PLAYER_H <= platform.top + CONTACT_EPS and player.vy >= 0.0:
                # came from above: stand on the roof
                player.y = platform.top - PLAYER_H
                player.vy = 0.0
                touching[platform] = SIDE_BOTTOM
            elif bottom > platform.top:
                # hit a wall: push out toward the side we came from
                if player.x + PLAYER_W / 2 < platform.left + platform.width / 2:
                    player.x = platform.left - PLAYER_W
                    touching[platform] = SIDE_RIGHT
                else:
                    player.x = platform.right
                    touching[platform] = SIDE_LEFT

        events: List[object] = []
        for platform, side in list(self._contacts.items()):
            if platform not in touching:
                del self._contacts[platform]
                events += player.on_collision(CollisionEnd(side, platform.category))
        for platform, side in touching.items():
            if platform not in self._contacts:
                self._contacts[platform] = side
                events += player.on_collision(CollisionStart(side, platform.category))
        return events
