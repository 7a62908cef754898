# src/runner/events.py
"""
Closed set of messages crossing the core boundary.

Inbound  (host -> player): CollisionStart / CollisionEnd.
Outbound (player -> presentation): ModeChanged, Trick, TrickPulse,
LandingBurst, GameOver. Handlers return them as a list, in order.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union
from .config import (
    LANDING_PARTICLE_S, TRICK_PULSE_SCALE, TRICK_PULSE_GROW, TRICK_PULSE_SHRINK
)

if TYPE_CHECKING:
    from .player import Mode

# Contact side, seen from the player
SIDE_TOP = "top"
SIDE_BOTTOM = "bottom"
SIDE_LEFT = "left"
SIDE_RIGHT = "right"
SIDES = (SIDE_TOP, SIDE_BOTTOM, SIDE_LEFT, SIDE_RIGHT)

# Category of the other body
CATEGORY_PLATFORM = "platform"
CATEGORY_RAIL = "rail"
CATEGORY_OTHER = "other"
CATEGORIES = (CATEGORY_PLATFORM, CATEGORY_RAIL, CATEGORY_OTHER)


@dataclass(frozen=True)
class CollisionStart:
    side: str
    other: str

    def __post_init__(self):
        assert self.side in SIDES, f"unknown contact side {self.side!r}"
        assert self.other in CATEGORIES, f"unknown body category {self.other!r}"


@dataclass(frozen=True)
class CollisionEnd:
    side: str
    other: str

    def __post_init__(self):
        assert self.side in SIDES, f"unknown contact side {self.side!r}"
        assert self.other in CATEGORIES, f"unknown body category {self.other!r}"


CollisionEvent = Union[CollisionStart, CollisionEnd]


@dataclass(frozen=True)
class ModeChanged:
    previous: "Mode"
    current: "Mode"


@dataclass(frozen=True)
class Trick:
    name: str
    count: int         # 1..MAX_AIR_TRICKS within the current airborne period


@dataclass(frozen=True)
class TrickPulse:
    """Fire-and-forget scale animation: grow to peak, then back to 1.0."""
    peak_scale: float = TRICK_PULSE_SCALE
    grow_rate: float = TRICK_PULSE_GROW
    shrink_rate: float = TRICK_PULSE_SHRINK


@dataclass(frozen=True)
class LandingBurst:
    duration: float = LANDING_PARTICLE_S


@dataclass(frozen=True)
class GameOver:
    distance: int
