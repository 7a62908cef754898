# src/env/observations.py
from __future__ import annotations
import numpy as np
from src.runner.config import (
    HEIGHT, PLAYER_W, PLAYER_H, MAX_GAP, MAX_PLATFORM_W, GRAVITY, JUMP_VELOCITY,
)
from src.runner.player import Mode
from src.runner.terrain import TerrainGen

MODES = tuple(Mode)
OBS_SIZE = 2 + len(MODES) + 5
LOOKAHEAD_PX = 800.0      # distance to next gap is normalized over one screen
VY_MAX = max(abs(JUMP_VELOCITY), GRAVITY)

OBS_LOW = np.array([0.0, -1.0] + [0.0] * (len(MODES) + 5), dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def build_observation(player, terrain: TerrainGen, grounded: bool) -> np.ndarray:
    """
    [y_norm, vy_norm, mode one-hot (5), tricks/3, on_ground,
     dist_to_gap, gap_width, next_platform_width]   -> float32, shape (12,)
    """
    y_norm = _clamp01(player.y / max(1.0, HEIGHT - PLAYER_H))
    vy_norm = max(-1.0, min(1.0, player.vy / VY_MAX))
    one_hot = [1.0 if player.mode is m else 0.0 for m in MODES]
    tricks = _clamp01(player.air_trick_count / 3.0)

    front = player.x + PLAYER_W
    gap_start, gap_w = terrain.next_gap(front)
    dist_norm = _clamp01((gap_start - front) / LOOKAHEAD_PX)
    gap_norm = _clamp01(gap_w / MAX_GAP)

    next_plat_w = 0.0
    for p in terrain.platforms:
        if p.left >= gap_start + gap_w - 1e-6:
            next_plat_w = p.width
            break
    plat_norm = _clamp01(next_plat_w / MAX_PLATFORM_W)

    obs = [y_norm, vy_norm] + one_hot + [tricks, 1.0 if grounded else 0.0,
                                         dist_norm, gap_norm, plat_norm]
    return np.clip(np.asarray(obs, dtype=np.float32), OBS_LOW, OBS_HIGH)
