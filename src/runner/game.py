# src/runner/game.py
import sys, argparse, random
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n
from .config import (
    WIDTH, HEIGHT, FPS,
    COLOR_SKY, COLOR_FG, COLOR_BUILDING, COLOR_RAIL, COLOR_DUST, COLOR_PANEL, COLOR_POSE,
    PLAYER_W, PLAYER_H, SEED_DEFAULT, WIDTH_SKEW_TUNED, RAIL_CHANCE,
)
from .events import Trick, TrickPulse, LandingBurst, GameOver
from .platform import KIND_RAIL
from .world import World

TRICK_DISPLAY_S = 1.0


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Terrain seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--uniform", action="store_true",
                   help="Uniform rooftop widths instead of the wide-biased draw.")
    p.add_argument("--rails", action="store_true",
                   help="Mix grind rails in with the rooftops.")
    return p.parse_args()


class ScalePulse:
    """Grow to peak, then shrink back to 1.0; done when it gets there."""
    def __init__(self, pulse: TrickPulse):
        self.pulse = pulse
        self.scale = 1.0
        self.growing = True

    def update(self, dt: float) -> bool:
        if self.growing:
            self.scale = min(self.pulse.peak_scale, self.scale + self.pulse.grow_rate * dt)
            if self.scale >= self.pulse.peak_scale:
                self.growing = False
        else:
            self.scale = max(1.0, self.scale - self.pulse.shrink_rate * dt)
        return self.growing or self.scale > 1.0


def run():
    args = parse_args()

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals TerrainGen to randomize
    else:
        launch_seed = args.seed
    width_skew = 1.0 if args.uniform else WIDTH_SKEW_TUNED
    rail_chance = RAIL_CHANCE if args.rails else 0.0

    pygame.init()
    pygame.display.set_caption("Rooftop Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 24)
    big_font = pygame.font.SysFont("arial", 48)
    rng = random.Random()

    def reset_world(seed_spec):
        return World(seed_spec, width_skew=width_skew, rail_chance=rail_chance)

    world = reset_world(launch_seed)
    pulse = None
    trick_text, trick_timer = "", 0.0
    dust = []   # [x, y, vx, vy, life]
    final_distance = None

    while True:
        dt = clock.tick(FPS) / 1000.0
        if dt > 1.0 / 30.0:  # clamp stalls
            dt = 1.0 / 30.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            tapped = (
                (event.type == pygame.KEYDOWN and event.key == K_SPACE)
                or (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1)
            )
            if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                pygame.quit(); sys.exit()
            if final_distance is not None:
                restart_same = tapped or (event.type == pygame.KEYDOWN and event.key == K_r)
                restart_new = event.type == pygame.KEYDOWN and event.key == K_n
                if restart_same or restart_new:
                    world = reset_world(None if restart_new else world.seed)
                    pulse, trick_text, trick_timer, dust, final_distance = None, "", 0.0, [], None
            elif tapped:
                world.tap()

        result = world.step(dt)
        for ev in result.events:
            if isinstance(ev, Trick):
                trick_text, trick_timer = f"{ev.name}!", TRICK_DISPLAY_S
            elif isinstance(ev, TrickPulse):
                pulse = ScalePulse(ev)
            elif isinstance(ev, LandingBurst):
                pass  # emission follows player.emitting_particles below
            elif isinstance(ev, GameOver):
                final_distance = ev.distance
                print(f"Game Over! Distance traveled: {ev.distance}m (seed {world.seed})")

        player = world.player
        if player.emitting_particles:
            for _ in range(2):
                dust.append([player.x + PLAYER_W / 2, player.y + PLAYER_H,
                             rng.uniform(-150, 150), -rng.uniform(50, 150), 0.5])
        for d in dust:
            d[3] += 300 * dt
            d[0] += d[2] * dt
            d[1] += d[3] * dt
            d[4] -= dt
        dust = [d for d in dust if d[4] > 0]

        if pulse is not None and not pulse.update(dt):
            pulse = None
        trick_timer = max(0.0, trick_timer - dt)

        # --- Render ---
        cam_left = world.camera_x - WIDTH / 2
        screen.fill(COLOR_SKY)
        for platform in world.terrain.platforms:
            r = platform.rect.move(-int(cam_left), 0)
            pygame.draw.rect(screen, COLOR_RAIL if platform.kind == KIND_RAIL else COLOR_BUILDING, r)

        for d in dust:
            pygame.draw.circle(screen, COLOR_DUST, (int(d[0] - cam_left), int(d[1])), max(1, int(4 * d[4] / 0.5)))

        scale = pulse.scale if pulse is not None else 1.0
        pr = pygame.Rect(0, 0, int(PLAYER_W * scale), int(PLAYER_H * scale))
        pr.center = (int(player.x + PLAYER_W / 2 - cam_left), int(player.y + PLAYER_H / 2))
        pygame.draw.rect(screen, COLOR_POSE[player.pose], pr)

        screen.blit(font.render(f"Distance: {world.distance}m", True, COLOR_FG), (50, 30))
        if trick_timer > 0.0:
            txt = big_font.render(trick_text, True, COLOR_FG)
            screen.blit(txt, ((WIDTH - txt.get_width()) // 2, 120))

        if final_distance is not None:
            panel = pygame.Rect((WIDTH - 360) // 2, 200, 360, 170)
            pygame.draw.rect(screen, COLOR_PANEL, panel, border_radius=10)
            lines = [(big_font, "GAME OVER"), (font, f"Distance: {final_distance}m"),
                     (font, "Click / R restart   N new seed")]
            y = panel.top + 15
            for f, msg in lines:
                txt = f.render(msg, True, COLOR_FG)
                screen.blit(txt, (panel.centerx - txt.get_width() // 2, y))
                y += txt.get_height() + 8

        pygame.display.flip()

if __name__ == "__main__":
    run()
