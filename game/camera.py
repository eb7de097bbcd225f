"""
Camera/Viewport System - follows the manatee across the large world map
"""

import math
import random
from collections import namedtuple

from utils.constants import (
    WINDOW_WIDTH, WINDOW_HEIGHT, GAME_WIDTH, GAME_HEIGHT,
    SCREENSHAKE_FRAMES, SCREENSHAKE_MAGNITUDE, SCREENSHAKE_DECAY
)
from utils.helpers import clamp

# Immutable view rectangle in world pixels
CameraSnapshot = namedtuple('CameraSnapshot', ['x', 'y', 'width', 'height'])


class ScreenShake:
    """
    Decaying random camera offset
    """
    def __init__(self, rng=None):
        self.rng = rng or random.Random()
        self.timer = 0
        self.magnitude = 0.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    @property
    def active(self):
        return self.timer > 0

    def start(self, frames=SCREENSHAKE_FRAMES, magnitude=SCREENSHAKE_MAGNITUDE):
        self.timer = frames
        self.magnitude = magnitude

    def update(self):
        """
        Pick this frame's offset: a random point inside a circle whose
        radius shrinks every frame. Zero once the timer runs out.
        """
        if self.timer > 0:
            self.timer -= 1
            angle = self.rng.random() * math.pi * 2
            mag = self.rng.random() * self.magnitude
            self.offset_x = math.cos(angle) * mag
            self.offset_y = math.sin(angle) * mag
            self.magnitude *= SCREENSHAKE_DECAY
        else:
            self.offset_x = 0.0
            self.offset_y = 0.0

    def reset(self):
        self.timer = 0
        self.magnitude = 0.0
        self.offset_x = 0.0
        self.offset_y = 0.0


class Camera:
    """
    Viewport position (top-left corner in world pixels)
    """
    def __init__(self, viewport_width=WINDOW_WIDTH, viewport_height=WINDOW_HEIGHT):
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.x = 0.0
        self.y = 0.0

    def follow(self, player, world_width=GAME_WIDTH, world_height=GAME_HEIGHT, shake=None):
        """
        Center on the player, clamp to the world, then add any shake

        Args:
            player: Entity with x, y, width, height
            world_width, world_height: World size in pixels
            shake: Optional ScreenShake whose offset is added after clamping
        """
        target_x = player.x + player.width / 2 - self.viewport_width / 2
        target_y = player.y + player.height / 2 - self.viewport_height / 2
        self.x = clamp(target_x, 0, max(0, world_width - self.viewport_width))
        self.y = clamp(target_y, 0, max(0, world_height - self.viewport_height))

        if shake is not None:
            self.x += shake.offset_x
            self.y += shake.offset_y

    def snapshot(self):
        """Freeze the current view"""
        return CameraSnapshot(self.x, self.y, self.viewport_width, self.viewport_height)

    def world_to_screen(self, world_x, world_y):
        """
        Convert world coordinates to screen coordinates

        Returns:
            tuple: (screen_x, screen_y) in pixels
        """
        return world_x - self.x, world_y - self.y

    def is_visible(self, x, y, width, height, margin=0):
        """Check if a world-space box touches the viewport"""
        return (x + width >= self.x - margin and
                x <= self.x + self.viewport_width + margin and
                y + height >= self.y - margin and
                y <= self.y + self.viewport_height + margin)

    def resize(self, viewport_width, viewport_height):
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height

    def reset(self):
        """Reset camera to origin"""
        self.x = 0.0
        self.y = 0.0
