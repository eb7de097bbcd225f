"""
Treasure chests
Real chests add score and count toward the win; fake chests slow the player
"""

import logging
import math
import random
from enum import Enum

from utils.constants import (
    CHEST_SIZE, TREASURE_VALUES, FAKE_CHEST_PENALTY,
    TREASURE_MIN_DISTANCE, FAKE_CHEST_MIN_DISTANCE, PLACEMENT_MAX_ATTEMPTS
)

logger = logging.getLogger(__name__)


class TreasureKind(Enum):
    """Chest types"""
    SMALL = 'small'
    FAKE = 'fake'


class Treasure:
    """
    Collectible chest
    """
    def __init__(self, x, y, kind=TreasureKind.SMALL, value=0, penalty=0):
        """
        Args:
            x, y: Top-left position (pixels)
            kind: TreasureKind
            value: Score awarded (real chests)
            penalty: Penalty reported for fake chests
        """
        self.x = x
        self.y = y
        self.width = CHEST_SIZE
        self.height = CHEST_SIZE
        self.kind = kind
        self.value = value
        self.penalty = penalty
        self.collected = False

    @property
    def is_fake(self):
        return self.kind is TreasureKind.FAKE

    def collect(self):
        """
        Mark as collected. Collection never reverts.

        Returns:
            True if this call collected it
        """
        if self.collected:
            return False
        self.collected = True
        return True

    def __repr__(self):
        return f"Treasure({self.kind.value}, value={self.value}, collected={self.collected})"


def place_spread_out(positions, count, rng=None, used_indices=None, min_distance=TREASURE_MIN_DISTANCE):
    """
    Greedy spread placement over a shuffled candidate list

    Each pass walks the shuffled candidates once, accepting any unused
    position at least min_distance from everything accepted in this call.
    Stops when count is reached, a pass adds nothing, or the attempt
    budget runs out; may return fewer than requested.

    Args:
        positions: List of (x, y) anchors
        count: How many to place
        rng: random.Random
        used_indices: Indices already taken by an earlier call
        min_distance: Minimum pairwise distance among this call's picks

    Returns:
        (picked, used) where picked is a list of (index, (x, y)) and used
        is the updated set of taken indices
    """
    rng = rng or random.Random()
    used = set(used_indices or ())
    order = list(range(len(positions)))
    rng.shuffle(order)

    picked = []
    attempts = 0
    while len(picked) < count and attempts < PLACEMENT_MAX_ATTEMPTS:
        attempts += 1
        placed_this_pass = 0
        for idx in order:
            if idx in used:
                continue
            x, y = positions[idx]
            if any(math.hypot(px - x, py - y) < min_distance for _, (px, py) in picked):
                continue
            picked.append((idx, (x, y)))
            used.add(idx)
            placed_this_pass += 1
            if len(picked) >= count:
                break
        if placed_this_pass == 0:
            break

    return picked, used


def place_treasures(layout, count, rng=None):
    """
    Place real chests on open cells

    Returns:
        (treasures, used_indices)
    """
    rng = rng or random.Random()
    picked, used = place_spread_out(layout.open_positions(), count, rng,
                                    min_distance=TREASURE_MIN_DISTANCE)
    treasures = [
        Treasure(x, y, TreasureKind.SMALL, value=rng.choice(TREASURE_VALUES))
        for _, (x, y) in picked
    ]
    if len(treasures) < count:
        logger.warning("Placed %d of %d treasures", len(treasures), count)
    return treasures, used


def place_fake_chests(layout, count, used_indices, rng=None):
    """
    Place fake chests on cells not taken by real ones

    Returns:
        List of fake Treasure
    """
    if count <= 0:
        return []
    picked, _ = place_spread_out(layout.open_positions(), count, rng, used_indices,
                                 min_distance=FAKE_CHEST_MIN_DISTANCE)
    fakes = [
        Treasure(x, y, TreasureKind.FAKE, value=0, penalty=FAKE_CHEST_PENALTY)
        for _, (x, y) in picked
    ]
    if len(fakes) < count:
        logger.warning("Placed %d of %d fake chests", len(fakes), count)
    return fakes
