"""
Global constants for Manatee Treasure Hunt
All timings are in frames at 60 FPS unless the name says otherwise
"""

# Screen settings
FPS = 60
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800

# World size (pixels)
GAME_WIDTH = 4800
GAME_HEIGHT = 3600

# Maze cell codes
CELL_OPEN = '0'
CELL_WALL = '1'
CELL_SPAWN = 'X'
CELL_MERMAID = 'M'

# Default pattern size
DEFAULT_PATTERN_ROWS = 14
DEFAULT_PATTERN_COLS = 28

# Wall decorations
SHELL_CHANCE = 0.35
SHELL_MIN_SIZE = 32
SHELL_SIZE_SPREAD = 16
CORAL_DECO_CHANCE = 0.28
CORAL_DECO_MIN_SIZE = 42
CORAL_DECO_SIZE_SPREAD = 32

# Player (manatee)
MANATEE_SPEED = 5
MANATEE_WIDTH = 80
MANATEE_HEIGHT = 60
MANATEE_JUMPS_TOTAL = 3
MANATEE_JUMP_DURATION = 40
MANATEE_JUMP_HEIGHT = 110

# Speed modifiers
SEAWEED_BOOST_AMOUNT = 1.5
SEAWEED_BOOST_DURATION = 8 * 60
FAKE_CHEST_SLOW_AMOUNT = 0.5
FAKE_CHEST_SLOW_DURATION = 180

# Treasures
CHEST_SIZE = 60
TREASURE_VALUES = (5, 10, 15)
FAKE_CHEST_PENALTY = 5
TREASURE_MIN_DISTANCE = 180
FAKE_CHEST_MIN_DISTANCE = 140
PLACEMENT_MAX_ATTEMPTS = 2000

# Collectible seaweed / bubbles
SEAWEED_WIDTH = 60
SEAWEED_HEIGHT = 120
BUBBLE_SIZE = 52
BUBBLE_VALUES = (5, 10, 15)
PICKUP_OVERLAP = 60

# Mines
MINE_SIZE = 80
MINE_MARGIN = 16
MINE_MIN_DISTANCE = 220
MINE_OVERLAP_DISTANCE = 100
MINE_SPAWN_EXCLUSION = 200
MINE_MAX_ATTEMPTS = 300
MINE_MIN_SPEED = 3.0
MINE_SPEED_SPREAD = 2.0
MINE_MIN_RANGE = 300.0
MINE_RANGE_SPREAD = 400.0
MINE_DEAD_END_WALLS = 3

# Mermaids
MERMAID_SIZE = 70
MERMAID_SPEED = MANATEE_SPEED
MERMAID_ROAM_STEP = 2.3
MERMAID_EXHAUSTED_STEP = 1.2
MERMAID_TARGET_REACHED = 40
MERMAID_STUCK_LIMIT = 20
MERMAID_EXCLAMATION_TIME = 60
MERMAID_CHASE_TIME = 480
MERMAID_EXHAUSTED_TIME = 240

# Explosion
EXPLOSION_DURATION = 180
DEBRIS_COUNT = 9
DEBRIS_MIN_SPEED = 6.0
DEBRIS_SPEED_SPREAD = 4.0
DEBRIS_ANGLE_JITTER = 0.15
DEBRIS_SPIN = 0.12
SCREENSHAKE_FRAMES = 30
SCREENSHAKE_MAGNITUDE = 60.0
SCREENSHAKE_DECAY = 0.92

# Floating reward text
REWARD_RISE_SPEED = -1.3
REWARD_FADE = 0.012

# Celebration
CELEBRATION_FRAMES = 120
CONFETTI_PER_SIDE = 80
CONFETTI_GRAVITY = 0.12
CONFETTI_MIN_LIFE = 54
CONFETTI_LIFE_SPREAD = 26
CONFETTI_MARGIN = 40

# Ambient decoration
AMBIENT_BUBBLE_COUNT = 120
AMBIENT_SEAWEED_COUNT = 700
AMBIENT_CORAL_COUNT = 80

# Session timing (milliseconds / counts)
PRE_GAME_TIMER = 3
COUNTDOWN_INTERVAL_MS = 1000
TIMER_DISPLAY_INTERVAL_MS = 200

# Minimap
MINIMAP_WIDTH = 240
MINIMAP_HEIGHT = 180
MINIMAP_MARGIN = 20

# Difficulty names
DIFFICULTY_EASY = 'easy'
DIFFICULTY_NORMAL = 'normal'
DIFFICULTY_HARD = 'hard'

DIFFICULTY_NAMES = [
    DIFFICULTY_EASY,
    DIFFICULTY_NORMAL,
    DIFFICULTY_HARD,
]

# Credits charged by the backend per difficulty (display only)
DIFFICULTY_CREDIT_COST = {
    DIFFICULTY_EASY: 100,
    DIFFICULTY_NORMAL: 150,
    DIFFICULTY_HARD: 250,
}
