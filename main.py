"""
Manatee Treasure Hunt
Swim the manatee through an underwater maze, grab the treasure chests
before time runs out, and stay clear of mines and mermaids.
"""

import logging
import os
import random
import sys

# Enable smooth live resize on Windows (must be set before pygame import)
if sys.platform == 'win32':
    os.environ.setdefault('SDL_WINDOWS_ENABLE_MESSAGELOOP', '1')

os.environ.setdefault('SDL_VIDEO_ALLOW_SCREENSAVER', '1')

import pygame

import config
from game.game_state import SessionState
from game.scheduler import Scheduler
from game.session import GameSession
from maze.difficulty import get_difficulty_config
from render import Renderer
from reporting import create_client, create_reporter, create_config_cache
from utils.constants import FPS, DIFFICULTY_EASY, DIFFICULTY_NORMAL, DIFFICULTY_HARD, DIFFICULTY_NAMES

logger = logging.getLogger(__name__)

DIFFICULTY_KEYS = {
    pygame.K_1: DIFFICULTY_EASY,
    pygame.K_2: DIFFICULTY_NORMAL,
    pygame.K_3: DIFFICULTY_HARD,
}


class TreasureHuntGame:
    """
    Main game class: owns the window and feeds the session
    """
    def __init__(self):
        pygame.init()
        pygame.joystick.init()

        self.screen_w = config.WINDOW_WIDTH
        self.screen_h = config.WINDOW_HEIGHT
        self.screen = pygame.display.set_mode((self.screen_w, self.screen_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"{config.GAME_TITLE} v{config.GAME_VERSION}")

        self.clock = pygame.time.Clock()
        self.running = True

        # Gamepads stay referenced or pygame stops sending their events
        self.joysticks = [pygame.joystick.Joystick(i) for i in range(pygame.joystick.get_count())]

        # Backend
        self.client = create_client()
        self.reporter = create_reporter(self.client)
        self.remote_configs = create_config_cache(self.client)

        # Session
        self.scheduler = Scheduler()
        self.renderer = Renderer(self.screen_w, self.screen_h)
        self.session = GameSession(
            self.scheduler,
            self.reporter,
            rng=random.Random(),
            viewport=(self.screen_w, self.screen_h),
            config_source=self.load_config,
        )
        difficulty = config.DEFAULT_DIFFICULTY
        if difficulty not in DIFFICULTY_NAMES:
            logger.warning("DEFAULT_DIFFICULTY=%r is not a difficulty, using normal", difficulty)
            difficulty = DIFFICULTY_NORMAL
        self.session.difficulty = difficulty
        self.prefetch_config(difficulty)

        logger.info("%s v%s started (%s)", config.GAME_TITLE, config.GAME_VERSION,
                    f"backend {config.BACKEND_URL}" if self.client else "offline")

    def prefetch_config(self, difficulty):
        """Refresh the backend config for a difficulty in the background"""
        if self.remote_configs is not None:
            self.remote_configs.prefetch(difficulty)

    def load_config(self, difficulty):
        """
        Session config for a difficulty: the cached backend one when
        enabled and available, the built-in one otherwise
        """
        local = get_difficulty_config(difficulty)
        if self.remote_configs is None:
            return local
        return self.remote_configs.get(difficulty, local)

    def handle_events(self):
        """Handle input events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.VIDEORESIZE:
                self._handle_window_resize(event.w, event.h)
                continue

            if event.type == pygame.JOYDEVICEADDED:
                self.joysticks.append(pygame.joystick.Joystick(event.device_index))
                continue

            if event.type == pygame.KEYDOWN and self._handle_command_key(event.key):
                continue

            self.session.input.handle_event(event)

    def _handle_command_key(self, key):
        """
        Keys that drive the session rather than the manatee

        Returns:
            True if the key was consumed
        """
        state = self.session.state
        idle = state.is_state(SessionState.IDLE, SessionState.ENDED)

        if key in DIFFICULTY_KEYS and idle:
            self.session.difficulty = DIFFICULTY_KEYS[key]
            self.prefetch_config(self.session.difficulty)
            return True

        if key in (pygame.K_RETURN, pygame.K_KP_ENTER) and idle:
            self.prefetch_config(self.session.difficulty)
            self.session.begin()
            return True

        if key == pygame.K_ESCAPE:
            if idle:
                self.running = False
            else:
                self.session.quit()
            return True

        return False

    def _handle_window_resize(self, width, height):
        self.screen_w = max(320, width)
        self.screen_h = max(240, height)
        self.screen = pygame.display.set_mode((self.screen_w, self.screen_h), pygame.RESIZABLE)
        self.renderer.resize(self.screen_w, self.screen_h)
        self.session.camera.resize(self.screen_w, self.screen_h)

    def render(self):
        """Draw the current frame"""
        self.session.update_camera()
        self.renderer.draw(self.screen, self.session)
        pygame.display.flip()

    def run(self):
        """Main game loop"""
        while self.running:
            dt_ms = self.clock.tick(FPS)

            self.handle_events()
            self.scheduler.tick(dt_ms)
            self.render()

        if self.session.is_active:
            self.session.quit()
        self.scheduler.cancel_all()
        self.reporter.close()
        pygame.quit()


def main():
    """Entry point"""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    game = TreasureHuntGame()
    game.run()


if __name__ == "__main__":
    main()
