"""
Game Session - owns one World and drives it through its lifecycle

IDLE -> COUNTDOWN -> RUNNING -> {CELEBRATION | EXPLOSION} -> ENDED

The session never touches pygame. The host feeds time through the
Scheduler and draws through the on_render callback.
"""

import logging
import random
import time

from entities.particle import spawn_debris
from game.camera import Camera
from game.collision import rects_overlap
from game.errors import CountdownAborted
from game.game_state import GameStateManager, SessionState, Outcome, SessionResult
from game.input import InputState
from game.world import World
from maze.difficulty import get_difficulty_config
from utils.constants import (
    GAME_WIDTH, GAME_HEIGHT, WINDOW_WIDTH, WINDOW_HEIGHT,
    PRE_GAME_TIMER, COUNTDOWN_INTERVAL_MS, TIMER_DISPLAY_INTERVAL_MS,
    EXPLOSION_DURATION, CELEBRATION_FRAMES, DIFFICULTY_NORMAL
)

logger = logging.getLogger(__name__)

ACTIVE_STATES = (SessionState.RUNNING, SessionState.CELEBRATION, SessionState.EXPLOSION)


def monotonic_ms():
    return time.monotonic() * 1000.0


class GameSession:
    """
    Session orchestrator: countdown, frame loop, timers and end guard
    """
    def __init__(self, scheduler, reporter, clock=None, rng=None,
                 viewport=(WINDOW_WIDTH, WINDOW_HEIGHT), on_render=None,
                 config_source=None, world_size=(GAME_WIDTH, GAME_HEIGHT)):
        """
        Args:
            scheduler: Scheduler fed by the host loop
            reporter: NullReporter or SessionReporter
            clock: Callable returning milliseconds (monotonic)
            rng: random.Random used for every random decision
            viewport: (width, height) of the visible area
            on_render: Called with the session whenever a frame should be drawn
            config_source: Callable difficulty -> GameConfig
            world_size: (width, height) of the world in pixels
        """
        self.scheduler = scheduler
        self.reporter = reporter
        self.clock = clock or monotonic_ms
        self.rng = rng or random.Random()
        self.on_render = on_render
        self.config_source = config_source or get_difficulty_config
        self.world_width, self.world_height = world_size

        self.state = GameStateManager()
        self.camera = Camera(*viewport)
        self.input = InputState()

        self.difficulty = DIFFICULTY_NORMAL
        self.world = None
        self.result = None
        self.is_game_over = False
        self.last_error = None

        # Countdown
        self.countdown = 0
        self._countdown_timer = None

        # Timer display
        self.start_time_ms = 0.0
        self.remaining_seconds = 0
        self._display_timer = None

    # ========== LIFECYCLE ==========

    @property
    def is_active(self):
        return self.state.is_state(*ACTIVE_STATES)

    @property
    def countdown_label(self):
        """Text of the countdown overlay, None when not counting down"""
        if not self.state.is_state(SessionState.COUNTDOWN):
            return None
        return str(self.countdown) if self.countdown > 0 else "Start!"

    def begin(self, difficulty=None):
        """
        Start the pre-game countdown

        Returns:
            False if a session is already counting down or running
        """
        if self.state.is_state(SessionState.COUNTDOWN, *ACTIVE_STATES):
            logger.warning("Session already in %s, ignoring start", self.state.get_state_name())
            return False

        if difficulty is not None:
            self.difficulty = difficulty

        # never two frame loops at once
        self.scheduler.stop_frame_loop()
        self._cancel_timers()

        self.is_game_over = False
        self.result = None
        self.last_error = None
        self.countdown = PRE_GAME_TIMER
        self.state.transition_to(SessionState.COUNTDOWN)
        logger.info("Countdown started (difficulty=%s)", self.difficulty)

        try:
            self.render()
        except Exception as e:
            self._abort_countdown(e)
            return False

        self._countdown_timer = self.scheduler.set_interval(
            COUNTDOWN_INTERVAL_MS, self._countdown_tick, 'countdown')
        return True

    def _countdown_tick(self):
        try:
            self._advance_countdown()
        except CountdownAborted as e:
            self._abort_countdown(e.__cause__ or e)

    def _advance_countdown(self):
        """3, 2, 1, Start!, then the game"""
        try:
            if self.countdown > 0:
                self.countdown -= 1
                logger.debug("Countdown %s", self.countdown_label)
                self.render()
            else:
                self._countdown_timer.cancel()
                self._countdown_timer = None
                self.init_game()
        except Exception as e:
            raise CountdownAborted(str(e)) from e

    def _abort_countdown(self, error):
        logger.error("Countdown aborted, back to idle", exc_info=error)
        self.last_error = error
        self._cancel_timers()
        self.scheduler.stop_frame_loop()
        self.world = None
        if self.state.is_state(SessionState.COUNTDOWN):
            self.state.transition_to(SessionState.IDLE)

    def init_game(self):
        """
        Build the world and start the frame loop

        The backend session is opened only once the world is built.
        """
        config = self.config_source(self.difficulty)
        self.world = World.build(config, self.rng, self.world_width, self.world_height)
        self.camera.reset()
        self.input.clear()

        self.start_time_ms = self.clock()
        self.remaining_seconds = self.world.game_timer
        self._display_timer = self.scheduler.set_interval(
            TIMER_DISPLAY_INTERVAL_MS, self.update_timer_display, 'timer-display')

        self.state.transition_to(SessionState.RUNNING)
        self.reporter.start(self.difficulty)
        logger.info("Session initialised (difficulty=%s, %s)", self.difficulty, self.world.entity_counts())
        self.scheduler.start_frame_loop(self.frame)

    def _cancel_timers(self):
        for timer in (self._countdown_timer, self._display_timer):
            if timer is not None:
                timer.cancel()
        self._countdown_timer = None
        self._display_timer = None

    # ========== FRAME ==========

    def frame(self):
        """One simulation step plus render"""
        world = self.world
        player = world.player

        player.update_jump()

        if world.celebration_active:
            world.confetti.update()
            world.celebration_timer -= 1
            self.render()
            if world.celebration_timer <= 0:
                world.celebration_active = False
                self.end_session(Outcome.WIN)
            return

        world.scenery.update()
        player.update_boost()
        multiplier = player.consume_speed_multiplier()
        dx, dy = player.desired_move(self.input, multiplier)

        world.rewards.update()

        if world.mermaids.update(player, world.layout, world.explosion_active, world.rng):
            self.start_explosion()

        world.confetti.update()

        hit = world.mines.update(world.layout.walls_array, player, world.explosion_active,
                                 world.width, world.height)
        if hit is not None:
            self.start_explosion(hit)

        if not world.explosion_active:
            player.move(dx, dy, world.layout.walls_array, world.width, world.height)
            self._collect_treasure()
            self._collect_seaweeds()
            self._collect_bubbles()
        else:
            world.explosion_timer += 1
            for piece in world.debris:
                piece.update()
            if world.explosion_timer > EXPLOSION_DURATION:
                self.end_session(Outcome.EXPLODED)
                return

        world.shake.update()
        self.render()

    def _collect_treasure(self):
        """At most one chest per frame"""
        world = self.world
        player = world.player
        for treasure in world.treasures:
            if treasure.collected or not rects_overlap(player, treasure):
                continue
            treasure.collect()
            self.reporter.log_chest(treasure.x, treasure.y, treasure.value, treasure.kind.value)
            label_x = treasure.x + treasure.width / 2
            if treasure.is_fake:
                player.apply_slow()
                world.rewards.spawn(label_x, treasure.y, "Slowed!")
            else:
                world.score += treasure.value
                world.collected_treasures += 1
                world.rewards.spawn(label_x, treasure.y, treasure.value)
                if world.has_won:
                    self._start_celebration()
            break

    def _collect_seaweeds(self):
        world = self.world
        for seaweed in world.seaweeds:
            if not seaweed.collected and rects_overlap(world.player, seaweed):
                seaweed.collect()
                world.player.activate_boost()

    def _collect_bubbles(self):
        world = self.world
        for bubble in world.bubbles:
            if not bubble.collected and rects_overlap(world.player, bubble):
                bubble.collect()
                world.game_timer += bubble.value
                self.reporter.log_bubble(bubble.x, bubble.y, bubble.value)
                world.rewards.spawn(bubble.x + bubble.width / 2, bubble.y, f"+{bubble.value}s")

    def _start_celebration(self):
        world = self.world
        world.player.start_jump()
        world.celebration_active = True
        world.celebration_timer = CELEBRATION_FRAMES
        world.confetti.start(self.camera.snapshot(), world.rng)
        self.state.transition_to(SessionState.CELEBRATION)
        logger.info("All %d treasures found, celebrating", world.total_treasures)

    def start_explosion(self, mine=None):
        """
        Blow the manatee up; movement and pickups stop until the session ends

        Args:
            mine: The mine that was hit, removed from the field (None for a mermaid)

        Returns:
            False if an explosion was already running
        """
        world = self.world
        if world is None or world.explosion_active:
            return False

        world.explosion_active = True
        world.explosion_timer = 0
        self.reporter.log_mine_death()
        if mine is not None:
            world.mines.remove(mine)
        world.shake.start()
        world.debris = spawn_debris(*world.player.center, world.rng)
        if self.state.is_state(SessionState.RUNNING):
            self.state.transition_to(SessionState.EXPLOSION)
        logger.info("Explosion at (%.0f, %.0f), cause=%s",
                    world.player.x, world.player.y, 'mine' if mine is not None else 'mermaid')
        return True

    # ========== TIMER ==========

    def update_timer_display(self):
        """Recompute remaining time from the wall clock; time up ends the session"""
        if self.world is None or self.is_game_over or self.world.celebration_active:
            return
        if not self.state.is_state(SessionState.RUNNING, SessionState.EXPLOSION):
            return
        elapsed = int((self.clock() - self.start_time_ms) // 1000)
        self.remaining_seconds = max(0, self.world.game_timer - elapsed)
        if self.remaining_seconds <= 0:
            self.end_session(Outcome.TIME_UP)

    # ========== END ==========

    def end_session(self, outcome):
        """
        Stop everything and report the result; only the first call counts

        Returns:
            True if this call ended the session
        """
        if self.is_game_over or self.world is None:
            return False
        self.is_game_over = True

        self._cancel_timers()
        self.scheduler.stop_frame_loop()

        world = self.world
        world.confetti.clear()
        world.celebration_active = False
        world.explosion_active = False
        world.shake.reset()

        self.result = SessionResult(
            outcome,
            world.score,
            world.collected_treasures,
            world.total_treasures,
            world.seaweeds_collected,
            self.remaining_seconds,
        )
        self.reporter.end(outcome is Outcome.QUIT, world.score, world.seaweeds_collected)
        self.state.transition_to(SessionState.ENDED)
        logger.info("Session ended: %s, score %d (%d/%d)", outcome.value, world.score,
                    world.collected_treasures, world.total_treasures)
        return True

    def quit(self):
        """Manual quit; cancels a countdown, ends a running session early"""
        if self.state.is_state(SessionState.COUNTDOWN):
            logger.info("Countdown cancelled")
            self._cancel_timers()
            self.state.transition_to(SessionState.IDLE)
            return False
        if self.is_active:
            return self.end_session(Outcome.QUIT)
        return False

    def reset(self):
        """Drop the world and go back to idle"""
        self._cancel_timers()
        self.scheduler.stop_frame_loop()
        self.world = None
        self.result = None
        self.is_game_over = False
        self.countdown = 0
        self.remaining_seconds = 0
        self.input.clear()
        self.camera.reset()
        self.state.reset()

    # ========== RENDER ==========

    def update_camera(self):
        if self.world is not None:
            self.camera.follow(self.world.player, self.world.width, self.world.height, self.world.shake)

    def render(self):
        """Compute the camera for this frame and hand off to the host"""
        self.update_camera()
        if self.on_render is not None:
            self.on_render(self)

    def __repr__(self):
        return f"GameSession(state={self.state.get_state_name()}, difficulty={self.difficulty})"

