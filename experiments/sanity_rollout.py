# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Appends one row per episode to a CSV for notebook analysis

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds, wide-biased rooftops with rails:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --tuned --rails

  # Quick random-only smoke somewhere disposable:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from src.env.runner_env import RunnerEnv
from src.env.observations import LOOKAHEAD_PX, MODES
from src.runner.config import WIDTH_SKEW_TUNED, RAIL_CHANCE
from src.runner.player import Mode

IDX_MODE = 2
IDX_TRICKS = 2 + len(MODES)
IDX_GAP_DIST = IDX_TRICKS + 2
TAKEOFF_PX = 8.0     # taps early enough while the back foot is still on the roof


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, tap_prob: float = 0.15):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < tap_prob)
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule:
      - on a roof or rail: tap when the next gap edge is within TAKEOFF_PX;
      - in the air: land one trick per jump, never more.
    """
    running = IDX_MODE + MODES.index(Mode.RUNNING)
    grinding = IDX_MODE + MODES.index(Mode.GRINDING)
    in_air = IDX_MODE + MODES.index(Mode.IN_AIR)

    def act(obs: np.ndarray) -> int:
        if obs[running] == 1.0 or obs[grinding] == 1.0:
            return int(obs[IDX_GAP_DIST] * LOOKAHEAD_PX <= TAKEOFF_PX)
        if obs[in_air] == 1.0:
            return int(obs[IDX_TRICKS] == 0.0)
        return 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    width_skew: float,
                    rail_chance: float) -> Tuple[int, float, int, bool, bool, int]:
    """
    Returns: (ep_len, ret_sum, distance, terminated, truncated, tricks)
    """
    env = RunnerEnv(frame_skip=frame_skip, width_skew=width_skew, rail_chance=rail_chance)

    if policy_name == "random":
        # Make action RNG seed a function of seed for determinism
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    ret_sum = 0.0
    ep_len = 0
    info = {}
    term = trunc = False

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            obs, r, term, trunc, info = env.step(policy(obs))
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    return ep_len, ret_sum, int(info.get("distance", 0)), bool(term), bool(trunc), int(info.get("tricks", 0))


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim frames per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--tuned", action="store_true",
                    help="Wide-biased rooftop widths")
    ap.add_argument("--rails", action="store_true",
                    help="Mix grind rails into the terrain")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    width_skew = WIDTH_SKEW_TUNED if args.tuned else 1.0
    rail_chance = RAIL_CHANCE if args.rails else 0.0

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "seed",
        "frame_skip", "width_skew", "rail_chance",
        "episode_len_decisions", "return_sum", "distance",
        "terminated", "truncated", "tricks",
    ]
    env_name = "RunnerEnv"
    decision_hz = 60 / max(1, args.frame_skip)

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds "
          f"(frame_skip={args.frame_skip}, decision_hz≈{decision_hz:.1f})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, dist, terminated, truncated, tricks = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                width_skew=width_skew,
                rail_chance=rail_chance,
            )

            row = [
                env_name, policy_name, seed,
                args.frame_skip, width_skew, rail_chance,
                ep_len, f"{ret_sum:.1f}", dist,
                int(terminated), int(truncated), tricks,
            ]
            write_episode_row(episodes_csv, header, row)

            print(f"[{policy_name}] seed={seed}  len={ep_len}  dist={dist}  "
                  f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}  tricks={tricks}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
