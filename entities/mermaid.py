"""
Mermaid AI
Each mermaid roams the maze, stops in surprise on bumping into the
manatee, then chases it for a while before tiring out.

    ROAMING -> EXCLAMATION -> CHASE -> EXHAUSTED -> ROAMING
                                 \\-> explosion (player caught)
"""

import logging
import math
import random
from enum import Enum

from game.collision import try_move, clamp_to_world, rects_overlap
from utils.constants import (
    MERMAID_SIZE, MERMAID_SPEED,
    MERMAID_ROAM_STEP, MERMAID_EXHAUSTED_STEP, MERMAID_TARGET_REACHED,
    MERMAID_STUCK_LIMIT, MERMAID_EXCLAMATION_TIME, MERMAID_CHASE_TIME,
    MERMAID_EXHAUSTED_TIME
)

logger = logging.getLogger(__name__)


class MermaidState(Enum):
    """Mermaid behaviour states"""
    ROAMING = 'roaming'
    EXCLAMATION = 'exclamation'
    CHASE = 'chase'
    EXHAUSTED = 'exhausted'


class Mermaid:
    """
    Pursuit hazard with a 4-state machine
    """
    def __init__(self, x, y, roam_target):
        """
        Args:
            x, y: Top-left position (pixels)
            roam_target: (x, y) open-cell anchor to wander toward
        """
        self.x = x
        self.y = y
        self.width = MERMAID_SIZE
        self.height = MERMAID_SIZE

        self.state = MermaidState.ROAMING
        self.state_timer = 0
        self.roam_target = roam_target
        self.stuck_counter = 0
        self.last_chase_target = None

    def _step_toward(self, tx, ty, step, walls_array, world_width, world_height):
        """
        Step toward a point, each axis rejected separately by walls.
        Axes already within a pixel of the target are not moved.
        """
        dx = tx - self.x
        dy = ty - self.y
        dist = math.hypot(dx, dy)
        if dist == 0:
            return False
        move_x = step * dx / dist if abs(dx) > 1 else 0
        move_y = step * dy / dist if abs(dy) > 1 else 0
        moved_x, moved_y = try_move(self, move_x, move_y, walls_array, world_width, world_height)
        return moved_x or moved_y

    def _enter(self, state, timer=0):
        logger.debug("Mermaid %s -> %s", self.state.value, state.value)
        self.state = state
        self.state_timer = timer

    def update(self, player, layout, rng=None):
        """
        Run one frame of the state machine

        Args:
            player: Manatee
            layout: MazeLayout (walls, bounds and roam targets)
            rng: random.Random for new roam targets

        Returns:
            True if the mermaid caught the player while chasing
        """
        walls = layout.walls_array
        world_w, world_h = layout.world_width, layout.world_height
        caught = False

        if self.state is MermaidState.ROAMING:
            tx, ty = self.roam_target
            moved = False
            if math.hypot(tx - self.x, ty - self.y) < MERMAID_TARGET_REACHED:
                self.roam_target = layout.random_open_position(rng)
            else:
                moved = self._step_toward(tx, ty, MERMAID_ROAM_STEP, walls, world_w, world_h)

            if moved:
                self.stuck_counter = 0
            else:
                self.stuck_counter += 1
                if self.stuck_counter > MERMAID_STUCK_LIMIT:
                    self.roam_target = layout.random_open_position(rng)
                    self.stuck_counter = 0

            if rects_overlap(self, player):
                self._enter(MermaidState.EXCLAMATION, MERMAID_EXCLAMATION_TIME)
                self.last_chase_target = (self.x, self.y)

        elif self.state is MermaidState.EXCLAMATION:
            self.state_timer -= 1
            if self.state_timer <= 0:
                self._enter(MermaidState.CHASE, MERMAID_CHASE_TIME)

        elif self.state is MermaidState.CHASE:
            if math.hypot(player.x - self.x, player.y - self.y) > 0.1:
                self._step_toward(player.x, player.y, MERMAID_SPEED, walls, world_w, world_h)
            if rects_overlap(self, player):
                caught = True
            self.state_timer -= 1
            if self.state_timer <= 0 and not caught:
                self._enter(MermaidState.EXHAUSTED, MERMAID_EXHAUSTED_TIME)
                self.roam_target = layout.random_open_position(rng)

        elif self.state is MermaidState.EXHAUSTED:
            tx, ty = self.roam_target
            if math.hypot(tx - self.x, ty - self.y) > MERMAID_EXHAUSTED_STEP:
                self._step_toward(tx, ty, MERMAID_EXHAUSTED_STEP, walls, world_w, world_h)
            self.state_timer -= 1
            if self.state_timer <= 0:
                self._enter(MermaidState.ROAMING)
                self.roam_target = layout.random_open_position(rng)

        else:
            raise ValueError(f"unknown mermaid state: {self.state!r}")

        clamp_to_world(self, world_w, world_h)
        return caught

    def __repr__(self):
        return f"Mermaid(pos=({self.x:.0f},{self.y:.0f}), state={self.state.value}, timer={self.state_timer})"


class MermaidManager:
    """
    Manages all mermaids in the session
    """
    def __init__(self):
        self.mermaids = []

    def spawn_from_layout(self, layout, rng=None):
        """One mermaid per 'M' cell, centred in the cell"""
        rng = rng or random.Random()
        self.mermaids = [
            Mermaid(x, y, layout.random_open_position(rng))
            for x, y in layout.mermaid_positions(MERMAID_SIZE)
        ]
        return self.mermaids

    def update(self, player, layout, exploding, rng=None):
        """
        Update every mermaid

        Args:
            player: Manatee
            layout: MazeLayout
            exploding: Mermaids are frozen while an explosion runs

        Returns:
            True if any mermaid caught the player
        """
        if exploding:
            return False
        for mermaid in self.mermaids:
            if mermaid.update(player, layout, rng):
                # the explosion starts now, the rest stay frozen
                return True
        return False

    def clear(self):
        self.mermaids.clear()

    def __len__(self):
        return len(self.mermaids)

    def __iter__(self):
        return iter(self.mermaids)
