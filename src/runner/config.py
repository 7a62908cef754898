# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60

# --- World / Physics ---
GRAVITY = 1200.0            # px/s^2, y grows downward
CAMERA_LEAD = 200           # camera x = player x + lead (player sits at left quarter)

# --- Player ---
PLAYER_START_X = 100.0      # top-left spawn, a little above the first roof
PLAYER_START_Y = 380.0
PLAYER_W = 40
PLAYER_H = 60
RUN_SPEED = 350.0           # px/s horizontal
GRIND_SPEED = 400.0         # slightly faster on rails
JUMP_VELOCITY = -450.0      # negative = upward
JUMP_APEX_WINDOW = 0.1      # JUMPING -> IN_AIR after this (s)
LANDING_WINDOW = 0.05       # LANDING -> RUNNING after this (s)
FALL_EPSILON = 1.0          # |vy| above this on contact loss = really falling
LANDING_PARTICLE_S = 0.1    # dust burst duration (s)
DEATH_Y = 700.0             # fell off the world
MAX_AIR_TRICKS = 3
TRICK_NAMES = ("OLLIE", "KICKFLIP", "HEELFLIP")
TRICK_PULSE_SCALE = 1.3
TRICK_PULSE_GROW = 15.0     # scale units per second
TRICK_PULSE_SHRINK = 10.0

# --- Terrain generation ---
ROOF_Y = 450                # top line shared by rooftops and rails
PLATFORM_H = 100
RAIL_H = 12
MIN_PLATFORM_W = 200
MAX_PLATFORM_W = 600
MIN_GAP = 100
MAX_GAP = 250               # must stay under jump_reach() in terrain.py
SPAWN_DISTANCE = 1600       # two screen widths ahead
DESPAWN_DISTANCE = -800     # one screen width behind
INITIAL_HORIZON = 1600
WIDTH_SKEW_TUNED = 0.6      # power < 1 favours wide rooftops
RAIL_CHANCE = 0.15
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_SKY = (135, 206, 235)
COLOR_FG = (255, 255, 255)
COLOR_BUILDING = (139, 69, 19)
COLOR_RAIL = (120, 120, 130)
COLOR_DUST = (210, 180, 140)
COLOR_PANEL = (40, 60, 90)
COLOR_POSE = {
    "run": (0, 200, 0),
    "jump": (0, 0, 255),
    "trick1": (255, 255, 0),
    "trick2": (255, 165, 0),
    "trick3": (255, 0, 0),
    "grind": (255, 140, 0),
}
