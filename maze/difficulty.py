"""
Difficulty configurations for Manatee Treasure Hunt
A game config selects the maze pattern and how many of each entity to place
"""

import logging

from maze.layout import is_valid_pattern
from utils.constants import (
    DIFFICULTY_EASY, DIFFICULTY_NORMAL, DIFFICULTY_HARD,
    DIFFICULTY_CREDIT_COST, DEFAULT_PATTERN_ROWS, DEFAULT_PATTERN_COLS,
    CELL_OPEN, CELL_WALL, CELL_SPAWN, CELL_MERMAID
)

logger = logging.getLogger(__name__)

__all__ = [
    'GameConfig', 'build_open_pattern', 'build_pillar_pattern',
    'DEFAULT_GAME_CONFIG', 'DIFFICULTY_CONFIGS', 'DIFFICULTY_CREDIT_COST',
    'get_difficulty_config',
]


def build_open_pattern(rows=DEFAULT_PATTERN_ROWS, cols=DEFAULT_PATTERN_COLS):
    """
    Build a fully open pattern with one spawn and one mermaid

    The spawn sits roughly a fifth of the way in from the top-left,
    the mermaid roughly seven tenths of the way across.
    """
    grid = [[CELL_OPEN] * cols for _ in range(rows)]
    spawn_row = max(1, int(rows * 0.2))
    spawn_col = max(1, int(cols * 0.2))
    mermaid_row = min(rows - 2, int(rows * 0.7))
    mermaid_col = min(cols - 2, int(cols * 0.7))
    grid[spawn_row][spawn_col] = CELL_SPAWN
    grid[mermaid_row][mermaid_col] = CELL_MERMAID
    return [''.join(row) for row in grid]


def build_pillar_pattern(rows=DEFAULT_PATTERN_ROWS, cols=DEFAULT_PATTERN_COLS):
    """Open pattern with a regular grid of single-cell wall pillars"""
    grid = [list(row) for row in build_open_pattern(rows, cols)]
    for r in range(1, rows - 1):
        for c in range(1, cols - 1):
            if r % 3 == 1 and c % 4 == 3 and grid[r][c] == CELL_OPEN:
                grid[r][c] = CELL_WALL
    return [''.join(row) for row in grid]


class GameConfig:
    """Configuration for a single session"""
    def __init__(self, **kwargs):
        # Maze
        self.maze_pattern = kwargs.get('maze_pattern') or build_open_pattern()

        # Collectibles
        self.total_treasures = kwargs.get('total_treasures', 16)
        self.total_fake_chests = kwargs.get('total_fake_chests', 4)
        self.total_seaweeds = kwargs.get('total_seaweeds', 50)
        self.total_bubbles = kwargs.get('total_bubbles', 6)

        # Hazards
        self.total_mines = kwargs.get('total_mines', 6)

        # Time limit (seconds)
        self.game_time_seconds = kwargs.get('game_time_seconds', 90)

    @classmethod
    def from_dict(cls, raw, fallback=None):
        """
        Build a config from a backend payload, falling back field by field

        Args:
            raw: Dict using the backend's camelCase keys (mazePattern,
                totalTreasures, ...). Anything else yields the fallback.
            fallback: GameConfig supplying defaults (DEFAULT_GAME_CONFIG)

        Returns:
            GameConfig, never raises
        """
        base = fallback or DEFAULT_GAME_CONFIG
        if not isinstance(raw, dict):
            logger.warning("Game config payload is not an object, using defaults")
            return base.copy()

        pattern = raw.get('mazePattern')
        if not is_valid_pattern(pattern):
            logger.warning("Game config has no usable maze pattern, using default pattern")
            pattern = base.maze_pattern

        def count(key, default):
            value = raw.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                if value is not None:
                    logger.warning("Game config %s=%r is invalid, using %d", key, value, default)
                return default
            return value

        game_time = count('gameTimeSeconds', base.game_time_seconds)
        if game_time <= 0:
            game_time = base.game_time_seconds

        # a session with nothing to collect can never be won
        treasures = count('totalTreasures', base.total_treasures)
        if treasures <= 0:
            treasures = base.total_treasures

        return cls(
            maze_pattern=list(pattern),
            total_treasures=treasures,
            total_fake_chests=count('totalFakeChests', base.total_fake_chests),
            total_seaweeds=count('totalSeaweeds', base.total_seaweeds),
            total_bubbles=count('totalBubbles', base.total_bubbles),
            total_mines=count('totalMines', base.total_mines),
            game_time_seconds=game_time,
        )

    def copy(self, **overrides):
        """Copy with some fields replaced"""
        fields = {
            'maze_pattern': list(self.maze_pattern),
            'total_treasures': self.total_treasures,
            'total_fake_chests': self.total_fake_chests,
            'total_seaweeds': self.total_seaweeds,
            'total_bubbles': self.total_bubbles,
            'total_mines': self.total_mines,
            'game_time_seconds': self.game_time_seconds,
        }
        fields.update(overrides)
        return GameConfig(**fields)

    def __repr__(self):
        rows = len(self.maze_pattern)
        cols = len(self.maze_pattern[0]) if rows else 0
        return (f"GameConfig({cols}x{rows}, treasures={self.total_treasures}, "
                f"mines={self.total_mines}, time={self.game_time_seconds}s)")


# ========== DIFFICULTY DEFINITIONS ==========

DEFAULT_GAME_CONFIG = GameConfig(
    maze_pattern=build_open_pattern(DEFAULT_PATTERN_ROWS, DEFAULT_PATTERN_COLS),
    total_treasures=16,
    total_fake_chests=4,
    total_seaweeds=50,
    total_bubbles=6,
    total_mines=6,
    game_time_seconds=90,
)

LEVEL_EASY = GameConfig(
    maze_pattern=build_open_pattern(),
    total_treasures=12,
    total_fake_chests=2,
    total_seaweeds=50,
    total_bubbles=8,
    total_mines=3,
    game_time_seconds=120,
)

LEVEL_NORMAL = DEFAULT_GAME_CONFIG.copy()

LEVEL_HARD = GameConfig(
    maze_pattern=build_pillar_pattern(),
    total_treasures=20,
    total_fake_chests=6,
    total_seaweeds=30,
    total_bubbles=4,
    total_mines=10,
    game_time_seconds=75,
)

DIFFICULTY_CONFIGS = {
    DIFFICULTY_EASY: LEVEL_EASY,
    DIFFICULTY_NORMAL: LEVEL_NORMAL,
    DIFFICULTY_HARD: LEVEL_HARD,
}


def get_difficulty_config(difficulty):
    """
    Get a fresh configuration for a difficulty name

    Args:
        difficulty: 'easy', 'normal' or 'hard'; anything else means default

    Returns:
        GameConfig copy the caller may mutate
    """
    config = DIFFICULTY_CONFIGS.get(difficulty)
    if config is None:
        logger.warning("Unknown difficulty %r, using default config", difficulty)
        return DEFAULT_GAME_CONFIG.copy()
    return config.copy()
