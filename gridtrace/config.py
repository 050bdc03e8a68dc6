# --- Board ---
GRID_SIZE = 45
START = (1, 1)
TARGET = (15, 25)

# --- Algorithms ---
DEFAULT_SEARCH = "uniform-cost"
DEFAULT_GENERATOR = "randomized-frontier"

# --- Pacing (milliseconds between yield points, 0 = synchronous) ---
SEARCH_PACE_MS = {
    "breadth-first": 20,
    "depth-first": 1,
    "depth-first-top-down": 1,
    "uniform-cost": 1,
}
# Sleep only every Nth step for the fast searches
SEARCH_PACE_EVERY = {
    "breadth-first": 1,
    "depth-first": 3,
    "depth-first-top-down": 3,
    "uniform-cost": 3,
}
GENERATION_PACE_MS = {
    "randomized-frontier": 0,
    "recursive-division": 120,
}

# --- Viewer ---
WINDOW_WIDTH = 900
WINDOW_HEIGHT = 900
FPS = 60
STEPS_PER_FRAME = 4
