import random
import unittest

from entities.mine import HorizontalPatrol, Mine
from entities.powerup import Bubble
from entities.treasure import Treasure, TreasureKind
from game.game_state import Outcome, SessionState
from game.scheduler import Scheduler
from game.session import GameSession
from maze.difficulty import GameConfig, build_open_pattern
from reporting.ledger import SessionLedger
from reporting.reporter import NullReporter
from utils.constants import CELEBRATION_FRAMES, EXPLOSION_DURATION, FAKE_CHEST_SLOW_DURATION


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingReporter(NullReporter):
    """Keeps every submitted event instead of sending it"""
    def __init__(self, clock):
        super().__init__(SessionLedger(clock=lambda: clock() / 1000.0), grace_seconds=5)
        self.events = []

    def _submit(self, kind, payload):
        self.events.append((kind, payload))

    def kinds(self):
        return [kind for kind, _ in self.events]


def quiet_config(**overrides):
    fields = dict(
        maze_pattern=build_open_pattern(),
        total_treasures=1,
        total_fake_chests=0,
        total_seaweeds=0,
        total_bubbles=0,
        total_mines=0,
        game_time_seconds=90,
    )
    fields.update(overrides)
    return GameConfig(**fields)


class SessionTestCase(unittest.TestCase):
    def make_session(self, config=None, on_render=None):
        self.clock = FakeClock()
        self.scheduler = Scheduler()
        self.reporter = RecordingReporter(self.clock)
        self.config = config or quiet_config()
        return GameSession(
            self.scheduler,
            self.reporter,
            clock=self.clock,
            rng=random.Random(1234),
            on_render=on_render,
            config_source=lambda difficulty: self.config,
        )

    def start_running(self, session):
        self.assertTrue(session.begin("normal"))
        for _ in range(4):
            self.scheduler.tick(1000)
        self.assertTrue(session.state.is_state(SessionState.RUNNING))

    def step(self, frames=1):
        for _ in range(frames):
            self.scheduler.tick(16)


class CountdownTests(SessionTestCase):
    def test_counts_down_then_runs(self):
        labels = []
        session = self.make_session(on_render=lambda s: labels.append(s.countdown_label))
        session.begin("easy")
        self.assertTrue(session.state.is_state(SessionState.COUNTDOWN))
        for _ in range(3):
            self.scheduler.tick(1000)
        self.assertEqual(labels, ["3", "2", "1", "Start!"])
        self.assertIsNone(session.world)

        self.scheduler.tick(1000)
        self.assertTrue(session.state.is_state(SessionState.RUNNING))
        self.assertIsNotNone(session.world)
        self.assertTrue(self.scheduler.frame_loop_running)
        self.assertEqual(self.reporter.events[0], ("start", {"difficulty": "easy"}))

    def test_render_failure_aborts_to_idle(self):
        calls = []

        def flaky_render(session):
            calls.append(1)
            if len(calls) == 2:
                raise RuntimeError("display lost")

        session = self.make_session(on_render=flaky_render)
        session.begin()
        self.scheduler.tick(1000)
        self.assertTrue(session.state.is_state(SessionState.IDLE))
        self.assertIsInstance(session.last_error, RuntimeError)
        self.assertEqual(self.scheduler.timers, [])
        self.assertNotIn("start", self.reporter.kinds())

        # retryable
        self.assertTrue(session.begin())
        for _ in range(4):
            self.scheduler.tick(1000)
        self.assertTrue(session.state.is_state(SessionState.RUNNING))

    def test_config_failure_never_opens_backend_session(self):
        session = self.make_session()

        def broken(difficulty):
            raise KeyError(difficulty)

        session.config_source = broken
        session.begin()
        for _ in range(4):
            self.scheduler.tick(1000)
        self.assertTrue(session.state.is_state(SessionState.IDLE))
        self.assertIsNone(session.world)
        self.assertFalse(self.scheduler.frame_loop_running)
        self.assertEqual(self.reporter.events, [])

    def test_initial_render_failure(self):
        def broken(session):
            raise RuntimeError("no surface")

        session = self.make_session(on_render=broken)
        self.assertFalse(session.begin())
        self.assertTrue(session.state.is_state(SessionState.IDLE))
        self.assertEqual(self.scheduler.timers, [])

    def test_quit_cancels_countdown(self):
        session = self.make_session()
        session.begin()
        self.scheduler.tick(1000)
        session.quit()
        self.assertTrue(session.state.is_state(SessionState.IDLE))
        for _ in range(5):
            self.scheduler.tick(1000)
        self.assertIsNone(session.world)

    def test_begin_ignored_while_running(self):
        session = self.make_session()
        self.start_running(session)
        self.assertFalse(session.begin())
        self.assertTrue(session.state.is_state(SessionState.RUNNING))

    def test_invalid_pattern_uses_default(self):
        session = self.make_session(config=quiet_config(maze_pattern=["0X", "0"]))
        self.start_running(session)
        self.assertEqual(session.world.layout.rows, 14)
        self.assertEqual(session.world.layout.cols, 28)


class PickupTests(SessionTestCase):
    def place_next_to_player(self, entity):
        player = self.session.world.player
        entity.x = player.x + player.width + 2
        entity.y = player.y
        return entity

    def setUp(self):
        self.session = self.make_session()
        self.start_running(self.session)
        self.world = self.session.world

    def test_collecting_last_treasure_starts_celebration(self):
        treasure = self.place_next_to_player(self.world.treasures[0])
        self.session.input.press('right')
        self.step()

        self.assertEqual(self.world.collected_treasures, 1)
        self.assertEqual(self.world.score, treasure.value)
        self.assertTrue(self.world.celebration_active)
        self.assertTrue(self.world.confetti.active)
        self.assertTrue(self.world.player.jumping)
        self.assertTrue(self.session.state.is_state(SessionState.CELEBRATION))
        self.assertEqual(self.reporter.events[-1][0], "chest")
        self.assertEqual(self.reporter.ledger.chests_collected, 1)

        self.step(CELEBRATION_FRAMES - 1)
        self.assertTrue(self.session.state.is_state(SessionState.CELEBRATION))
        self.step()
        self.assertTrue(self.session.state.is_state(SessionState.ENDED))
        self.assertEqual(self.session.result.outcome, Outcome.WIN)
        self.assertTrue(self.session.result.won)
        self.assertFalse(self.scheduler.frame_loop_running)
        self.assertEqual(self.reporter.kinds().count("end"), 1)

    def test_one_treasure_per_frame(self):
        first = self.world.treasures[0]
        second = Treasure(0, 0, TreasureKind.SMALL, value=10)
        self.world.treasures.append(second)
        self.world.total_treasures = 2
        self.place_next_to_player(first)
        self.place_next_to_player(second)
        self.session.input.press('right')
        self.step()
        self.assertEqual(self.world.collected_treasures, 1)
        self.step()
        self.assertEqual(self.world.collected_treasures, 2)

    def test_fake_chest_slows(self):
        fake = Treasure(0, 0, TreasureKind.FAKE, value=0, penalty=5)
        self.world.treasures.insert(0, fake)
        self.place_next_to_player(fake)
        self.session.input.press('right')
        self.step()
        self.assertTrue(fake.collected)
        self.assertEqual(self.world.score, 0)
        self.assertEqual(self.world.collected_treasures, 0)
        self.assertEqual(self.world.player.slow_timer, FAKE_CHEST_SLOW_DURATION)
        self.assertEqual([r.text for r in self.world.rewards], ["Slowed!"])
        self.assertEqual(self.reporter.events[-1][1]["kind"], "fake")

    def test_bubble_adds_time(self):
        bubble = self.place_next_to_player(Bubble(0, 0, 10))
        self.world.bubbles.append(bubble)
        self.session.input.press('right')
        self.step()
        self.assertEqual(self.world.game_timer, 100)
        self.assertEqual([r.text for r in self.world.rewards], ["+10s"])
        self.assertIn("bubble", self.reporter.kinds())

    def test_timer_runs_out(self):
        self.clock.now = 89_999
        self.step(13)
        self.assertTrue(self.session.state.is_state(SessionState.RUNNING))
        self.assertEqual(self.session.remaining_seconds, 1)

        self.clock.now = 90_000
        self.step(13)
        self.assertTrue(self.session.state.is_state(SessionState.ENDED))
        self.assertEqual(self.session.result.outcome, Outcome.TIME_UP)
        self.assertEqual(self.session.result.title, "Time's up!")


class CrowdedMapTests(SessionTestCase):
    def test_win_target_matches_placed_treasures(self):
        # a single open cell can hold only one of the three chests asked for
        self.session = self.make_session(config=quiet_config(maze_pattern=["X0"], total_treasures=3))
        self.start_running(self.session)
        world = self.session.world
        self.assertEqual(len(world.real_treasures), 1)
        self.assertEqual(world.total_treasures, 1)

        chest = world.treasures[0]
        player = world.player
        chest.x = player.x + player.width + 2
        chest.y = player.y
        self.session.input.press('right')
        self.step()

        self.assertEqual(world.collected_treasures, 1)
        self.assertTrue(self.session.state.is_state(SessionState.CELEBRATION))
        self.step(CELEBRATION_FRAMES)
        self.assertEqual(self.session.result.outcome, Outcome.WIN)
        self.assertEqual(self.session.result.total, 1)


class ExplosionTests(SessionTestCase):
    def setUp(self):
        self.session = self.make_session()
        self.start_running(self.session)
        self.world = self.session.world
        player = self.world.player
        self.mine = Mine(player.x + 200, player.y, HorizontalPatrol(player.x + 200, 300), speed=5, direction=-1)
        self.world.mines.mines = [self.mine]

    def run_until_explosion(self, limit=100):
        for _ in range(limit):
            self.step()
            if self.world.explosion_active:
                return
        self.fail("mine never reached the manatee")

    def test_patrolling_mine_blows_up_player(self):
        self.run_until_explosion()
        self.assertEqual(len(self.world.mines), 0)
        self.assertTrue(self.session.state.is_state(SessionState.EXPLOSION))
        self.assertEqual(len(self.world.debris), 9)
        self.assertTrue(self.world.shake.active)
        self.assertEqual(self.reporter.ledger.mine_deaths, 1)

    def test_explosion_window(self):
        self.run_until_explosion()
        player = self.world.player
        start = (player.x, player.y)
        self.session.input.press('left')

        self.step(EXPLOSION_DURATION - 1)
        self.assertEqual((player.x, player.y), start)
        self.assertTrue(self.session.state.is_state(SessionState.EXPLOSION))
        self.assertFalse(self.session.is_game_over)

        self.step()
        self.assertTrue(self.session.state.is_state(SessionState.ENDED))
        self.assertEqual(self.session.result.outcome, Outcome.EXPLODED)
        self.assertEqual(self.reporter.kinds().count("end"), 1)

    def test_second_explosion_ignored(self):
        self.run_until_explosion()
        self.assertFalse(self.session.start_explosion())
        self.assertEqual(self.reporter.kinds().count("mine_death"), 1)


class SessionEndTests(SessionTestCase):
    def setUp(self):
        self.session = self.make_session()
        self.start_running(self.session)

    def test_end_is_idempotent(self):
        self.assertTrue(self.session.end_session(Outcome.TIME_UP))
        self.assertFalse(self.session.quit())
        self.assertFalse(self.session.end_session(Outcome.EXPLODED))
        self.assertEqual(self.reporter.kinds().count("end"), 1)
        self.assertEqual(self.session.result.outcome, Outcome.TIME_UP)
        self.assertFalse(self.scheduler.frame_loop_running)
        self.assertEqual(self.scheduler.timers, [])

    def test_quit_reports_ended_early(self):
        self.assertTrue(self.session.quit())
        kind, payload = self.reporter.events[-1]
        self.assertEqual(kind, "end")
        self.assertTrue(payload["ended_early"])
        self.assertEqual(self.session.result.title, "Game Over!")
        self.assertTrue(self.reporter.is_within_grace())

    def test_new_session_after_end(self):
        self.session.quit()
        self.assertTrue(self.session.begin())
        for _ in range(4):
            self.scheduler.tick(1000)
        self.assertTrue(self.session.state.is_state(SessionState.RUNNING))
        self.assertEqual(self.reporter.kinds().count("start"), 2)

    def test_reset(self):
        self.session.reset()
        self.assertTrue(self.session.state.is_state(SessionState.IDLE))
        self.assertIsNone(self.session.world)
        self.assertFalse(self.scheduler.frame_loop_running)


if __name__ == "__main__":
    unittest.main()
