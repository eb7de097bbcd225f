"""
Ambient decoration - background bubbles, seaweed fronds and seabed corals
Purely visual; nothing here collides with anything.
"""

import random

from utils.constants import (
    GAME_WIDTH, GAME_HEIGHT,
    AMBIENT_BUBBLE_COUNT, AMBIENT_SEAWEED_COUNT, AMBIENT_CORAL_COUNT
)


class AmbientBubble:
    """Rising background bubble (x, y is the center)"""
    def __init__(self, x, y, radius, speed):
        self.x = x
        self.y = y
        self.radius = radius
        self.speed = speed

    def update(self, rng, world_width=GAME_WIDTH, world_height=GAME_HEIGHT):
        """Rise; once fully above the top, restart below the bottom edge"""
        self.y -= self.speed
        if self.y + self.radius < 0:
            self.y = world_height + self.radius
            self.x = rng.random() * (world_width - 30) + 15
            self.radius = rng.random() * 12 + 8
            self.speed = rng.random() * 0.7 + 0.3


class Frond:
    """Background seaweed or coral sprite box"""
    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class AmbientScenery:
    """
    All background decoration for a session
    """
    def __init__(self, world_width=GAME_WIDTH, world_height=GAME_HEIGHT, rng=None):
        self.world_width = world_width
        self.world_height = world_height
        self.rng = rng or random.Random()
        self.bubbles = []
        self.seaweeds = []
        self.corals = []

    def generate(self, bubble_count=AMBIENT_BUBBLE_COUNT, seaweed_count=AMBIENT_SEAWEED_COUNT,
                 coral_count=AMBIENT_CORAL_COUNT):
        """Scatter bubbles and seaweed over the map; line corals along the seabed"""
        w, h, rng = self.world_width, self.world_height, self.rng

        self.bubbles = [
            AmbientBubble(
                x=rng.random() * (w - 30) + 15,
                y=rng.random() * (h - 200) + 100,
                radius=rng.random() * 12 + 8,
                speed=rng.random() * 0.7 + 0.3,
            )
            for _ in range(bubble_count)
        ]

        self.seaweeds = []
        for _ in range(seaweed_count):
            sw = 60 + rng.random() * 70
            sh = 160 + rng.random() * 140
            self.seaweeds.append(Frond(rng.random() * (w - sw), rng.random() * (h - sh), sw, sh))

        self.corals = []
        for i in range(coral_count):
            cw = 120 + rng.random() * 180
            ch = 100 + rng.random() * 230
            x = i * w / coral_count + rng.random() * 50
            self.corals.append(Frond(x, h - ch + rng.random() * 30, cw, ch))

    def update(self):
        """Drift the bubbles"""
        for bubble in self.bubbles:
            bubble.update(self.rng, self.world_width, self.world_height)

    def clear(self):
        self.bubbles = []
        self.seaweeds = []
        self.corals = []
