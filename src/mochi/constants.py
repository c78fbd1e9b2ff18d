GRID_ROWS = 8
GRID_COLS = 6
NUM_COLORS = 3

# Display names for color indices; the palette may be widened past NUM_COLORS during a shuffle fallback.
COLOR_NAMES = ['yellow', 'pink', 'blue', 'green', 'orange', 'purple', 'white', 'red']

# Supported construction ranges
MIN_DIMENSION = 3
MAX_DIMENSION = 32
MIN_COLORS = 3
MAX_COLORS = len(COLOR_NAMES)

# Scoring
POINTS_PER_CELL = 10
CHAIN_BONUS = 0.5

# Power-up thresholds
LINE_RUN_LENGTH = 6   # straight run that earns a Line
LINE_SHAPE_SIZE = 6   # L/T region size that earns a Line
BOMB_RUN_LENGTH = 4   # straight run that earns a Bomb

# Shuffle bounds: attempts per palette width, and how far the palette may widen before giving up.
SHUFFLE_MAX_ATTEMPTS = 200
SHUFFLE_MAX_EXTRA_COLORS = 2

LEADERBOARD_SIZE = 5
DEFAULT_PLAYER_NAME = 'Player'
