"""
Sea mines
Mines patrol back and forth along one axis and blow up the manatee on contact
"""

import logging
import math
import random

from game.collision import box_hits_walls, clamp_to_world, rects_overlap
from utils.constants import (
    GAME_WIDTH, GAME_HEIGHT, MINE_SIZE, MINE_MARGIN, MINE_MIN_DISTANCE,
    MINE_OVERLAP_DISTANCE, MINE_SPAWN_EXCLUSION, MINE_MAX_ATTEMPTS,
    MINE_MIN_SPEED, MINE_SPEED_SPREAD, MINE_MIN_RANGE, MINE_RANGE_SPREAD,
    MINE_DEAD_END_WALLS
)

logger = logging.getLogger(__name__)


class HorizontalPatrol:
    """Patrols along X, anchored at the spawn column"""
    axis = 'x'

    def __init__(self, base_x, travel_range):
        self.base_x = base_x
        self.range = travel_range

    def __repr__(self):
        return f"HorizontalPatrol(base_x={self.base_x:.0f}, range={self.range:.0f})"


class VerticalPatrol:
    """Patrols along Y, anchored at the spawn row"""
    axis = 'y'

    def __init__(self, base_y, travel_range):
        self.base_y = base_y
        self.range = travel_range

    def __repr__(self):
        return f"VerticalPatrol(base_y={self.base_y:.0f}, range={self.range:.0f})"


class Mine:
    """
    Patrolling mine
    """
    def __init__(self, x, y, patrol, speed, direction):
        """
        Args:
            x, y: Top-left position (pixels)
            patrol: HorizontalPatrol or VerticalPatrol
            speed: Pixels per frame
            direction: +1 or -1
        """
        self.x = x
        self.y = y
        self.width = MINE_SIZE
        self.height = MINE_SIZE
        self.patrol = patrol
        self.speed = speed
        self.direction = direction

    def update(self, walls_array, world_width=GAME_WIDTH, world_height=GAME_HEIGHT):
        """
        Advance one frame along the patrol axis

        A step that would overlap a wall is undone and the direction flips,
        so the mine stays put on the frame it bounces.

        Returns:
            True if the mine bounced this frame
        """
        step = self.speed * self.direction
        bounced = False

        if isinstance(self.patrol, HorizontalPatrol):
            new_x = self.x + step
            if box_hits_walls(new_x, self.y, self.width, self.height, walls_array):
                self.direction = -self.direction
                bounced = True
            else:
                self.x = new_x
        elif isinstance(self.patrol, VerticalPatrol):
            new_y = self.y + step
            if box_hits_walls(self.x, new_y, self.width, self.height, walls_array):
                self.direction = -self.direction
                bounced = True
            else:
                self.y = new_y
        else:
            raise TypeError(f"unknown patrol type: {self.patrol!r}")

        clamp_to_world(self, world_width, world_height)
        return bounced

    def __repr__(self):
        return f"Mine(pos=({self.x:.0f},{self.y:.0f}), {self.patrol!r}, dir={self.direction})"


def random_patrol(x, y, rng):
    """Pick a horizontal or vertical patrol with random range, speed and heading"""
    horizontal = rng.random() < 0.5
    travel_range = MINE_MIN_RANGE + rng.random() * MINE_RANGE_SPREAD
    speed = MINE_MIN_SPEED + rng.random() * MINE_SPEED_SPREAD
    direction = 1 if rng.random() > 0.5 else -1
    patrol = HorizontalPatrol(x, travel_range) if horizontal else VerticalPatrol(y, travel_range)
    return patrol, speed, direction


def generate_mines(layout, count, rng=None):
    """
    Place up to count mines on open cells

    A candidate is rejected when it is in the spawn corner, too close to
    another mine, inside a dead end (3+ wall neighbours) or overlapping a
    wall. Gives up after a fixed number of tries.

    Args:
        layout: MazeLayout
        count: Mines wanted
        rng: random.Random

    Returns:
        List of Mine
    """
    rng = rng or random.Random()
    positions = layout.open_positions()
    mines = []
    if count <= 0 or not positions:
        return mines

    max_offset_x = max(0.0, layout.cell_w - MINE_SIZE - 2 * MINE_MARGIN)
    max_offset_y = max(0.0, layout.cell_h - MINE_SIZE - 2 * MINE_MARGIN)

    tries = 0
    while len(mines) < count and tries < MINE_MAX_ATTEMPTS:
        tries += 1
        px, py = rng.choice(positions)
        x = px + MINE_MARGIN + rng.random() * max_offset_x
        y = py + MINE_MARGIN + rng.random() * max_offset_y

        if x < MINE_SPAWN_EXCLUSION and y < MINE_SPAWN_EXCLUSION:
            continue
        if any(abs(m.x - x) < MINE_OVERLAP_DISTANCE and abs(m.y - y) < MINE_OVERLAP_DISTANCE
               for m in mines):
            continue
        if any(math.hypot(m.x - x, m.y - y) < MINE_MIN_DISTANCE for m in mines):
            continue
        row, col = layout.cell_at(x, y)
        if layout.wall_neighbors(row, col) >= MINE_DEAD_END_WALLS:
            continue
        if box_hits_walls(x, y, MINE_SIZE, MINE_SIZE, layout.walls_array):
            continue

        patrol, speed, direction = random_patrol(x, y, rng)
        mines.append(Mine(x, y, patrol, speed, direction))

    if len(mines) < count:
        logger.warning("Placed %d of %d mines after %d tries", len(mines), count, tries)
    return mines


class MineManager:
    """
    Manages all mines in the session
    """
    def __init__(self):
        self.mines = []

    def generate(self, layout, count, rng=None):
        """Replace the mine set with freshly placed mines"""
        self.mines = generate_mines(layout, count, rng)
        return self.mines

    def update(self, walls_array, player, exploding, world_width=GAME_WIDTH, world_height=GAME_HEIGHT):
        """
        Move every mine one frame and look for a hit

        Args:
            walls_array: Packed wall array
            player: Manatee
            exploding: True while an explosion is already running

        Returns:
            The first mine touching the player, or None
        """
        hit = None
        for mine in self.mines:
            mine.update(walls_array, world_width, world_height)
            if hit is None and not exploding and rects_overlap(player, mine):
                hit = mine
        return hit

    def remove(self, mine):
        """Take a detonated mine out of play"""
        if mine in self.mines:
            self.mines.remove(mine)

    def clear(self):
        self.mines.clear()

    def __len__(self):
        return len(self.mines)

    def __iter__(self):
        return iter(self.mines)
