"""
Collision detection - axis-aligned bounding box tests

Every entity exposes x, y, width, height in world pixels. Wall geometry is
packed into an (N, 4) float64 array once per session so the per-frame scan
runs in a compiled kernel.
"""

import numpy as np
from numba import njit

from utils.helpers import clamp


@njit(cache=True)
def overlaps_any(x, y, w, h, rects):
    """
    Check a box against every row of a packed rectangle array.

    Args:
        x, y, w, h: Box to test (pixels)
        rects: float64 array of shape (N, 4) holding x, y, width, height

    Returns:
        True if any rectangle strictly overlaps the box
    """
    for i in range(rects.shape[0]):
        rx = rects[i, 0]
        ry = rects[i, 1]
        rw = rects[i, 2]
        rh = rects[i, 3]
        if x < rx + rw and x + w > rx and y < ry + rh and y + h > ry:
            return True
    return False


def pack_rects(rects):
    """
    Pack rectangle-like objects into the array layout used by the kernels

    Args:
        rects: Iterable of objects with x, y, width, height

    Returns:
        numpy float64 array of shape (N, 4)
    """
    rows = [(r.x, r.y, r.width, r.height) for r in rects]
    if not rows:
        return np.zeros((0, 4), dtype=np.float64)
    return np.asarray(rows, dtype=np.float64)


def rects_overlap(a, b):
    """
    Strict AABB overlap between two rectangle-like objects.
    Touching edges do not count as a collision.
    """
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def box_hits_walls(x, y, width, height, walls_array):
    """Check a raw box against the packed wall array"""
    return bool(overlaps_any(float(x), float(y), float(width), float(height), walls_array))


def clamp_to_world(entity, world_width, world_height):
    """Keep an entity's box inside [0, world - size] on both axes"""
    entity.x = clamp(entity.x, 0, world_width - entity.width)
    entity.y = clamp(entity.y, 0, world_height - entity.height)


def try_move(entity, dx, dy, walls_array, world_width, world_height):
    """
    Move an entity one axis at a time, rejecting each axis separately

    The X step is tried first, then the Y step from wherever X ended up,
    so a diagonal push into a wall slides along it. Proposed coordinates
    are clamped to the world before the wall test.

    Args:
        entity: Object with x, y, width, height
        dx, dy: Desired displacement this frame (pixels)
        walls_array: Packed wall array
        world_width, world_height: World bounds

    Returns:
        (moved_x, moved_y) tuple of bools
    """
    moved_x = moved_y = False

    if dx:
        new_x = clamp(entity.x + dx, 0, world_width - entity.width)
        if new_x != entity.x and not box_hits_walls(new_x, entity.y, entity.width, entity.height, walls_array):
            entity.x = new_x
            moved_x = True

    if dy:
        new_y = clamp(entity.y + dy, 0, world_height - entity.height)
        if new_y != entity.y and not box_hits_walls(entity.x, new_y, entity.width, entity.height, walls_array):
            entity.y = new_y
            moved_y = True

    return moved_x, moved_y
