import unittest
from types import SimpleNamespace

from entities.mine import HorizontalPatrol, Mine, MineManager, VerticalPatrol
from entities.player import Manatee
from game.collision import pack_rects


def wall(x, y, w, h):
    return SimpleNamespace(x=x, y=y, width=w, height=h)


class MineMovementTests(unittest.TestCase):
    def setUp(self):
        self.walls = pack_rects([wall(200, 0, 50, 1000)])

    def test_moves_along_its_axis(self):
        mine = Mine(500, 300, HorizontalPatrol(500, 300), speed=4, direction=1)
        self.assertFalse(mine.update(self.walls, 2000, 2000))
        self.assertEqual((mine.x, mine.y), (504, 300))

        vmine = Mine(500, 300, VerticalPatrol(300, 300), speed=4, direction=-1)
        vmine.update(self.walls, 2000, 2000)
        self.assertEqual((vmine.x, vmine.y), (500, 296))

    def test_reverses_on_wall_without_moving(self):
        mine = Mine(110, 300, HorizontalPatrol(110, 300), speed=15, direction=1)
        self.assertTrue(mine.update(self.walls, 2000, 2000))
        self.assertEqual(mine.x, 110)
        self.assertEqual(mine.direction, -1)

        self.assertFalse(mine.update(self.walls, 2000, 2000))
        self.assertEqual(mine.x, 95)

    def test_stays_inside_world(self):
        mine = Mine(1918, 300, HorizontalPatrol(1918, 300), speed=5, direction=1)
        mine.update(pack_rects([]), 2000, 2000)
        self.assertEqual(mine.x, 1920)

    def test_unknown_patrol_type(self):
        mine = Mine(0, 0, object(), speed=3, direction=1)
        with self.assertRaises(TypeError):
            mine.update(self.walls, 2000, 2000)


class MineManagerTests(unittest.TestCase):
    def setUp(self):
        self.manager = MineManager()
        self.player = Manatee(500, 500)
        self.touching = Mine(560, 490, HorizontalPatrol(560, 300), speed=3, direction=1)
        self.far = Mine(1500, 1500, VerticalPatrol(1500, 300), speed=3, direction=1)
        self.manager.mines = [self.far, self.touching]

    def test_reports_hit_mine(self):
        hit = self.manager.update(pack_rects([]), self.player, False, 4800, 3600)
        self.assertIs(hit, self.touching)

    def test_no_hit_while_exploding_but_mines_still_move(self):
        hit = self.manager.update(pack_rects([]), self.player, True, 4800, 3600)
        self.assertIsNone(hit)
        self.assertEqual(self.far.y, 1503)

    def test_remove(self):
        self.manager.remove(self.touching)
        self.manager.remove(self.touching)
        self.assertEqual(len(self.manager), 1)
        self.assertEqual(list(self.manager), [self.far])


if __name__ == "__main__":
    unittest.main()
