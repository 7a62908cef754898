# src/runner/platform.py
from __future__ import annotations
from dataclasses import dataclass
import pygame
from .config import ROOF_Y, PLATFORM_H, RAIL_H
from .events import CATEGORY_PLATFORM, CATEGORY_RAIL

KIND_GROUND = "ground"
KIND_RAIL = "rail"


@dataclass(frozen=True, eq=False)
class Platform:
    """
    Static rectangle the player runs on. Never moves after creation.
    eq=False keeps identity semantics: the host registers platforms by object.
    """
    left: float
    width: float
    kind: str = KIND_GROUND   # "ground" or "rail"

    def __post_init__(self):
        if not self.width > 0:
            raise ValueError(f"platform width must be > 0, got {self.width}")
        if self.kind not in (KIND_GROUND, KIND_RAIL):
            raise ValueError(f"unknown platform kind {self.kind!r}")

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return float(ROOF_Y)

    @property
    def height(self) -> float:
        return float(RAIL_H if self.kind == KIND_RAIL else PLATFORM_H)

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def category(self) -> str:
        """Collision category reported to the player."""
        return CATEGORY_RAIL if self.kind == KIND_RAIL else CATEGORY_PLATFORM

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.left), int(self.top), int(self.width), int(self.height))
