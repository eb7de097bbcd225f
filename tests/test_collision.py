import unittest
from types import SimpleNamespace

import numpy as np

from game.collision import (
    overlaps_any, pack_rects, rects_overlap, clamp_to_world, try_move
)


def box(x, y, w, h):
    return SimpleNamespace(x=x, y=y, width=w, height=h)


class CollisionKernelTests(unittest.TestCase):
    def test_touching_edges_do_not_overlap(self):
        rects = pack_rects([box(100, 0, 50, 50)])
        self.assertFalse(overlaps_any(50.0, 0.0, 50.0, 50.0, rects))
        self.assertTrue(overlaps_any(51.0, 0.0, 50.0, 50.0, rects))

    def test_empty_wall_array(self):
        rects = pack_rects([])
        self.assertEqual(rects.shape, (0, 4))
        self.assertEqual(rects.dtype, np.float64)
        self.assertFalse(overlaps_any(0.0, 0.0, 10.0, 10.0, rects))

    def test_rects_overlap_is_strict(self):
        a = box(0, 0, 10, 10)
        self.assertTrue(rects_overlap(a, box(9, 9, 10, 10)))
        self.assertFalse(rects_overlap(a, box(10, 0, 10, 10)))
        self.assertFalse(rects_overlap(a, box(0, 10, 10, 10)))


class TryMoveTests(unittest.TestCase):
    def setUp(self):
        # one wall block to the right of the entity
        self.walls = pack_rects([box(100, 0, 50, 400)])

    def test_slides_along_wall(self):
        entity = box(18, 100, 80, 60)
        moved_x, moved_y = try_move(entity, 5, 5, self.walls, 1000, 1000)
        self.assertFalse(moved_x)
        self.assertTrue(moved_y)
        self.assertEqual(entity.x, 18)
        self.assertEqual(entity.y, 105)

    def test_free_move(self):
        entity = box(200, 100, 80, 60)
        self.assertEqual(try_move(entity, 5, -5, self.walls, 1000, 1000), (True, True))
        self.assertEqual((entity.x, entity.y), (205, 95))

    def test_clamped_at_world_edge(self):
        entity = box(0, 940, 80, 60)
        moved_x, moved_y = try_move(entity, -5, 5, pack_rects([]), 1000, 1000)
        self.assertEqual((moved_x, moved_y), (False, False))
        self.assertEqual((entity.x, entity.y), (0, 940))

    def test_partial_step_to_world_edge(self):
        entity = box(3, 500, 80, 60)
        try_move(entity, -5, 0, pack_rects([]), 1000, 1000)
        self.assertEqual(entity.x, 0)

    def test_clamp_to_world(self):
        entity = box(-20, 2000, 80, 60)
        clamp_to_world(entity, 1000, 1000)
        self.assertEqual((entity.x, entity.y), (0, 940))


if __name__ == "__main__":
    unittest.main()
