# src/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.runner.config import (
    WIDTH, HEIGHT, FPS, PLAYER_W, PLAYER_H,
    COLOR_SKY, COLOR_BUILDING, COLOR_RAIL, COLOR_POSE,
)
from src.runner.events import Trick, GameOver
from src.runner.platform import KIND_RAIL
from src.runner.world import World
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

TRICK_BONUS = 0.1


class RunnerEnv(gym.Env):
    """
    Rooftop runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (12,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 width_skew: float = 1.0,
                 rail_chance: float = 0.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width_skew = width_skew
        self.rail_chance = rail_chance

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = TAP (jump on the ground, trick in the air)
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.world: Optional[World] = None
        self.timestep: int = 0
        self.tricks: int = 0

        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Explicit seed -> reproducible terrain; None -> TerrainGen draws one
        level_seed = int(seed) if seed is not None else None
        self.world = World(level_seed, width_skew=self.width_skew, rail_chance=self.rail_chance)
        self.timestep = 0
        self.tricks = 0

        obs = self._get_obs()
        info = {"seed": self.world.seed, "distance": self.world.distance}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.world is not None

        if int(action) == 1:
            self.world.tap()

        reward = 0.0
        died = False
        for _ in range(self.frame_skip):
            result = self.world.step(self.dt)
            for ev in result.events:
                if isinstance(ev, Trick):
                    self.tricks += 1
                    reward += TRICK_BONUS
                elif isinstance(ev, GameOver):
                    died = True
            if died:
                break

        # +1 for surviving the decision, -1 on death (once)
        reward += -1.0 if died else 1.0

        self.timestep += 1
        terminated = self.world.player.game_over
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "distance": self.world.distance,
            "timestep": self.timestep,
            "seed": self.world.seed,
            "mode": self.world.player.mode.value,
            "tricks": self.tricks,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        return build_observation(self.world.player, self.world.terrain, self.world.grounded)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.world is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Rooftop Runner - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        cam_left = self.world.camera_x - WIDTH / 2
        self.screen.fill(COLOR_SKY)
        for platform in self.world.terrain.platforms:
            color = COLOR_RAIL if platform.kind == KIND_RAIL else COLOR_BUILDING
            pygame.draw.rect(self.screen, color, platform.rect.move(-int(cam_left), 0))
        player = self.world.player
        pygame.draw.rect(self.screen, COLOR_POSE[player.pose],
                         pygame.Rect(int(player.x - cam_left), int(player.y), PLAYER_W, PLAYER_H))

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
