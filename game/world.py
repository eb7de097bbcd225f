"""
World - the complete mutable simulation state for one play session
"""

import logging
import random

from entities.ambient import AmbientScenery
from entities.mermaid import MermaidManager
from entities.mine import MineManager
from entities.particle import FloatingRewards, Confetti
from entities.player import Manatee
from entities.powerup import place_seaweeds, place_bubbles
from entities.treasure import place_treasures, place_fake_chests
from game.camera import ScreenShake
from maze.difficulty import DEFAULT_GAME_CONFIG
from maze.layout import MazeLayout, is_valid_pattern
from utils.constants import GAME_WIDTH, GAME_HEIGHT, MANATEE_WIDTH, MANATEE_HEIGHT

logger = logging.getLogger(__name__)


class World:
    """
    Every entity set, counter and effect of one session.
    Owned by the GameSession; the renderer only reads it.
    """
    def __init__(self, layout, config, rng=None):
        """
        Args:
            layout: MazeLayout (fixed for the session)
            config: GameConfig the session was started with
            rng: random.Random shared by all factories and effects
        """
        self.layout = layout
        self.config = config
        self.rng = rng or random.Random()

        # Entities
        self.player = Manatee()
        self.treasures = []
        self.seaweeds = []
        self.bubbles = []
        self.mines = MineManager()
        self.mermaids = MermaidManager()
        self.scenery = AmbientScenery(layout.world_width, layout.world_height, self.rng)

        # Effects
        self.debris = []
        self.rewards = FloatingRewards()
        self.confetti = Confetti()
        self.shake = ScreenShake(self.rng)

        # Progress
        self.score = 0
        self.collected_treasures = 0
        self.total_treasures = config.total_treasures
        self.game_timer = config.game_time_seconds  # seconds, grows with bubbles

        # Sub-states
        self.explosion_active = False
        self.explosion_timer = 0
        self.celebration_active = False
        self.celebration_timer = 0

    @classmethod
    def build(cls, config, rng=None, world_width=GAME_WIDTH, world_height=GAME_HEIGHT):
        """
        Create and populate a world for a config

        A missing or malformed maze pattern falls back to the default one.
        """
        rng = rng or random.Random()
        pattern = config.maze_pattern
        if not is_valid_pattern(pattern):
            logger.warning("No usable maze pattern at init, applying default pattern")
            pattern = DEFAULT_GAME_CONFIG.maze_pattern
            config = config.copy(maze_pattern=list(pattern))

        layout = MazeLayout(pattern, world_width, world_height, rng)
        world = cls(layout, config, rng)
        world.populate()
        return world

    def populate(self):
        """Run every entity factory for this layout"""
        layout, config, rng = self.layout, self.config, self.rng

        self.scenery.generate()
        self.mines.generate(layout, config.total_mines, rng)
        self.mermaids.spawn_from_layout(layout, rng)

        self.player.reset_effects()
        self.player.place(*layout.spawn_position(MANATEE_WIDTH, MANATEE_HEIGHT, rng))

        self.treasures, used = place_treasures(layout, config.total_treasures, rng)
        # the win target is what actually fit on the map
        if len(self.treasures) < config.total_treasures:
            logger.warning("Win target lowered from %d to %d placed treasures",
                           config.total_treasures, len(self.treasures))
        self.total_treasures = len(self.treasures)
        self.treasures += place_fake_chests(layout, config.total_fake_chests, used, rng)

        self.seaweeds = place_seaweeds(layout, config.total_seaweeds, self.treasures, rng)
        self.bubbles = place_bubbles(layout, config.total_bubbles, self.treasures, self.seaweeds, rng)

    # ========== QUERIES ==========

    @property
    def width(self):
        return self.layout.world_width

    @property
    def height(self):
        return self.layout.world_height

    @property
    def real_treasures(self):
        return [t for t in self.treasures if not t.is_fake]

    @property
    def seaweeds_collected(self):
        return sum(1 for s in self.seaweeds if s.collected)

    @property
    def has_won(self):
        return self.collected_treasures >= self.total_treasures

    def entity_counts(self):
        """Entity totals for logging"""
        return {
            'treasures': len(self.real_treasures),
            'fake_chests': len(self.treasures) - len(self.real_treasures),
            'seaweeds': len(self.seaweeds),
            'bubbles': len(self.bubbles),
            'mines': len(self.mines),
            'mermaids': len(self.mermaids),
        }

    def __repr__(self):
        return f"World({self.layout!r}, score={self.score}, {self.collected_treasures}/{self.total_treasures})"
