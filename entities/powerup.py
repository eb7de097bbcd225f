"""
Power-up pickups
Seaweed gives a temporary speed boost, bubbles add seconds to the clock
"""

import logging
import random

from utils.constants import (
    SEAWEED_WIDTH, SEAWEED_HEIGHT, BUBBLE_SIZE, BUBBLE_VALUES,
    PICKUP_OVERLAP, CHEST_SIZE
)

logger = logging.getLogger(__name__)


class PowerUp:
    """
    Base pickup class
    """
    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.collected = False

    def collect(self):
        """
        Mark as collected

        Returns:
            True if collected by this call
        """
        if self.collected:
            return False
        self.collected = True
        return True


class Seaweed(PowerUp):
    """Speed boost pickup"""
    def __init__(self, x, y):
        super().__init__(x, y, SEAWEED_WIDTH, SEAWEED_HEIGHT)

    def __repr__(self):
        return f"Seaweed(pos=({self.x:.0f},{self.y:.0f}), collected={self.collected})"


class Bubble(PowerUp):
    """Time bonus pickup, value in seconds"""
    def __init__(self, x, y, value):
        super().__init__(x, y, BUBBLE_SIZE, BUBBLE_SIZE)
        self.value = value

    def __repr__(self):
        return f"Bubble(+{self.value}s, collected={self.collected})"


def _near_any(x, y, entities, reach):
    return any(abs(e.x - x) < reach and abs(e.y - y) < reach for e in entities)


def _candidate_order(positions, rng):
    order = list(range(len(positions)))
    rng.shuffle(order)
    return order


def place_seaweeds(layout, count, treasures, rng=None):
    """
    Place boost seaweed on open cells away from chests

    Each open cell is tried at most once, so a crowded map yields fewer
    seaweeds instead of looping.
    """
    rng = rng or random.Random()
    positions = layout.open_positions()
    target = min(count, len(positions))
    seaweeds = []
    for idx in _candidate_order(positions, rng):
        if len(seaweeds) >= target:
            break
        x, y = positions[idx]
        if _near_any(x, y, treasures, PICKUP_OVERLAP):
            continue
        seaweeds.append(Seaweed(x, y))

    if len(seaweeds) < target:
        logger.warning("Placed %d of %d seaweeds", len(seaweeds), target)
    return seaweeds


def place_bubbles(layout, count, treasures, seaweeds, rng=None):
    """
    Place time bubbles on open cells away from chests and seaweed
    """
    rng = rng or random.Random()
    positions = layout.open_positions()
    target = min(count, len(positions))
    bubbles = []
    for idx in _candidate_order(positions, rng):
        if len(bubbles) >= target:
            break
        x, y = positions[idx]
        if _near_any(x, y, treasures, CHEST_SIZE) or _near_any(x, y, seaweeds, PICKUP_OVERLAP):
            continue
        bubbles.append(Bubble(x, y, rng.choice(BUBBLE_VALUES)))

    if len(bubbles) < target:
        logger.warning("Placed %d of %d bubbles", len(bubbles), target)
    return bubbles
