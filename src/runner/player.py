# src/runner/player.py
from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List
import pygame
from .config import (
    PLAYER_START_X, PLAYER_START_Y, PLAYER_W, PLAYER_H,
    RUN_SPEED, GRIND_SPEED, JUMP_VELOCITY, JUMP_APEX_WINDOW, LANDING_WINDOW,
    FALL_EPSILON, DEATH_Y, MAX_AIR_TRICKS, TRICK_NAMES,
)
from .events import (
    CollisionStart, CollisionEnd, CollisionEvent,
    SIDE_BOTTOM, CATEGORY_PLATFORM, CATEGORY_RAIL,
    ModeChanged, Trick, TrickPulse, LandingBurst, GameOver,
)


class Mode(Enum):
    RUNNING = "running"     # on a roof, auto-running
    JUMPING = "jumping"     # first ~100 ms of a jump
    IN_AIR = "in_air"       # airborne, tricks allowed
    GRINDING = "grinding"   # on a rail
    LANDING = "landing"     # ~50 ms touchdown before running again


@dataclass
class Player:
    """
    Skater state machine. The host integrates (x, y) from (vx, vy);
    the player only writes velocity on mode entry and on jump start.

    Stimuli: tap(), on_tick(dt), on_collision(event).
    Every handler returns the output events it produced, in order.
    """
    x: float = PLAYER_START_X
    y: float = PLAYER_START_Y   # TOP-based
    vx: float = 0.0
    vy: float = 0.0
    mode: Mode = Mode.IN_AIR    # spawns in the air and drops onto the first roof
    mode_timer: float = 0.0
    air_trick_count: int = 0
    game_over: bool = False
    start_x: float = PLAYER_START_X
    particle_timer: float = 0.0
    _pending_taps: int = field(default=0, repr=False)

    def __post_init__(self):
        self._enter(self.mode)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), PLAYER_W, PLAYER_H)

    @property
    def distance(self) -> int:
        return max(0, math.floor(self.x - self.start_x))

    @property
    def emitting_particles(self) -> bool:
        return self.particle_timer > 0.0

    @property
    def pose(self) -> str:
        """Visual state key for the presentation layer."""
        if self.mode is Mode.GRINDING:
            return "grind"
        if self.mode is Mode.IN_AIR and self.air_trick_count > 0:
            return f"trick{self.air_trick_count}"
        if self.mode in (Mode.JUMPING, Mode.IN_AIR):
            return "jump"
        return "run"

    # -------------------- Transitions --------------------

    def _enter(self, mode: Mode):
        assert isinstance(mode, Mode), f"not a player mode: {mode!r}"
        self.mode = mode
        self.mode_timer = 0.0
        # horizontal speed is set once per entry, the integrator owns it afterwards
        self.vx = GRIND_SPEED if mode is Mode.GRINDING else RUN_SPEED

    def _transition(self, mode: Mode) -> List[object]:
        previous = self.mode
        self._enter(mode)
        return [ModeChanged(previous, mode)]

    def _jump(self) -> List[object]:
        self.vy = JUMP_VELOCITY
        return self._transition(Mode.JUMPING)

    def _trick(self) -> List[object]:
        if self.air_trick_count >= MAX_AIR_TRICKS:
            return []
        self.air_trick_count += 1
        return [Trick(TRICK_NAMES[self.air_trick_count - 1], self.air_trick_count),
                TrickPulse()]

    def _touch_down(self, mode: Mode) -> List[object]:
        if self.mode is mode:
            # repeated contact in the same frame
            return []
        self.air_trick_count = 0
        self.particle_timer = LandingBurst().duration
        return self._transition(mode) + [LandingBurst()]

    # -------------------- Stimuli --------------------

    def tap(self):
        """Latch a tap; it is applied at the start of the next tick."""
        if not self.game_over:
            self._pending_taps += 1

    def _apply_tap(self) -> List[object]:
        if self.mode in (Mode.RUNNING, Mode.GRINDING):
            return self._jump()
        if self.mode is Mode.IN_AIR:
            return self._trick()
        return []   # JUMPING, LANDING

    def on_tick(self, dt: float) -> List[object]:
        if not dt > 0.0:    # negative or NaN
            dt = 0.0
        self.mode_timer += dt

        if self.particle_timer > 0.0:
            self.particle_timer = max(0.0, self.particle_timer - dt)

        if self.game_over:
            self._pending_taps = 0
            return []

        if self.y > DEATH_Y:
            self.game_over = True
            self._pending_taps = 0
            return [GameOver(self.distance)]

        events: List[object] = []
        taps, self._pending_taps = self._pending_taps, 0
        for _ in range(taps):
            events += self._apply_tap()

        if self.mode is Mode.JUMPING and self.mode_timer > JUMP_APEX_WINDOW:
            events += self._transition(Mode.IN_AIR)
        elif self.mode is Mode.LANDING and self.mode_timer > LANDING_WINDOW:
            events += self._transition(Mode.RUNNING)
        return events

    def on_collision(self, event: CollisionEvent) -> List[object]:
        if isinstance(event, CollisionStart):
            return self.on_collision_start(event.side, event.other)
        if isinstance(event, CollisionEnd):
            return self.on_collision_end(event.side, event.other)
        raise TypeError(f"not a collision event: {event!r}")

    def on_collision_start(self, side: str, other: str) -> List[object]:
        if self.game_over or side != SIDE_BOTTOM:
            # side contact would be the place for a crash; it ends nothing today
            return []
        if other == CATEGORY_RAIL:
            return self._touch_down(Mode.GRINDING)
        if other == CATEGORY_PLATFORM:
            return self._touch_down(Mode.LANDING)
        return []

    def on_collision_end(self, side: str, other: str) -> List[object]:
        if self.game_over or side != SIDE_BOTTOM:
            return []
        if other not in (CATEGORY_PLATFORM, CATEGORY_RAIL):
            return []
        if self.mode in (Mode.RUNNING, Mode.GRINDING) and abs(self.vy) > FALL_EPSILON:
            return self._transition(Mode.IN_AIR)
        return []
