"""
HUD - score bar, timer, credits, and the idle/result screens
"""

import pygame

from game.game_state import SessionState
from utils.colors import (
    COLOR_TEXT, COLOR_TEXT_HIGHLIGHT, COLOR_TEXT_DIM, COLOR_TEXT_ALERT,
    COLOR_PANEL_BG, COLOR_SEAWEED_GLOW, COLOR_OVERLAY
)
from utils.constants import DIFFICULTY_NAMES, DIFFICULTY_CREDIT_COST
from utils.helpers import format_time, format_score


class HUD:
    """
    Manages all UI rendering on top of the world
    """
    def __init__(self):
        # Fonts
        self.font_small = None
        self.font_medium = None
        self.font_large = None
        self.font_title = None
        self._init_fonts()

    def _init_fonts(self):
        """Initialize fonts"""
        pygame.font.init()
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_medium = pygame.font.SysFont("consolas", 18)
        self.font_large = pygame.font.SysFont("consolas", 28, bold=True)
        self.font_title = pygame.font.SysFont("consolas", 48, bold=True)

    def draw(self, screen, session):
        """
        Draw the top status bar while a world exists

        Args:
            screen: Pygame screen
            session: GameSession
        """
        world = session.world
        if world is None:
            return
        screen_w, _ = screen.get_size()

        panel = pygame.Surface((screen_w, 44), pygame.SRCALPHA)
        panel.fill((*COLOR_PANEL_BG, 180))
        screen.blit(panel, (0, 0))

        # Score and treasures (left)
        score = self.font_medium.render(f"Score: {format_score(world.score)}", True, COLOR_TEXT)
        screen.blit(score, (12, 12))
        found = self.font_medium.render(
            f"Treasures: {world.collected_treasures}/{world.total_treasures}", True, COLOR_TEXT)
        screen.blit(found, (180, 12))

        # Timer (center)
        self._draw_timer(screen, session.remaining_seconds, screen_w // 2, 6)

        # Credits (right)
        credits = session.reporter.credits
        if credits is not None:
            text = self.font_medium.render(f"Credits: {credits}", True, COLOR_TEXT_HIGHLIGHT)
            screen.blit(text, text.get_rect(topright=(screen_w - 12, 12)))

        # Active effects
        self._draw_active_effects(screen, world.player, 12, 50)

    def _draw_timer(self, screen, remaining, x, y):
        """Draw timer"""
        if remaining <= 10:
            color = COLOR_TEXT_ALERT
        elif remaining <= 30:
            color = (255, 200, 100)
        else:
            color = COLOR_TEXT

        text = self.font_large.render(format_time(remaining), True, color)
        screen.blit(text, text.get_rect(midtop=(x, y)))

    def _draw_active_effects(self, screen, player, x, y):
        """Draw boost/slow indicators"""
        effects = []
        if player.boost_active:
            effects.append(("BOOST", COLOR_SEAWEED_GLOW))
        if player.slow_timer > 0:
            effects.append(("SLOWED", COLOR_TEXT_ALERT))

        for i, (label, color) in enumerate(effects):
            text = self.font_small.render(label, True, color)
            screen.blit(text, (x + i * 80, y))

    def draw_screens(self, screen, session):
        """Idle (difficulty select) and result screens"""
        if session.state.is_state(SessionState.IDLE):
            self.draw_difficulty_select(screen, session.difficulty, session.reporter.credits, session.last_error)
        elif session.state.is_state(SessionState.ENDED) and session.result is not None:
            self.draw_result(screen, session.result, session.reporter.ledger.report())

    def _dim(self, screen, alpha=150):
        screen_w, screen_h = screen.get_size()
        overlay = pygame.Surface((screen_w, screen_h), pygame.SRCALPHA)
        overlay.fill((*COLOR_OVERLAY, alpha))
        screen.blit(overlay, (0, 0))

    def draw_difficulty_select(self, screen, selected, credits=None, error=None):
        """Draw difficulty selection screen"""
        self._dim(screen)
        screen_w, screen_h = screen.get_size()

        title = self.font_title.render("MANATEE TREASURE HUNT", True, COLOR_TEXT_HIGHLIGHT)
        screen.blit(title, title.get_rect(center=(screen_w // 2, 120)))

        start_y = 240
        gap = 60
        for i, name in enumerate(DIFFICULTY_NAMES):
            is_selected = name == selected
            color = COLOR_TEXT_HIGHLIGHT if is_selected else COLOR_TEXT
            label = f"{i + 1}. {name.upper()}  ({DIFFICULTY_CREDIT_COST[name]} credits)"
            text = self.font_large.render(label, True, color)
            text_rect = text.get_rect(center=(screen_w // 2, start_y + i * gap))
            if is_selected:
                pygame.draw.rect(screen, COLOR_TEXT_HIGHLIGHT, text_rect.inflate(40, 16), 3, border_radius=8)
            screen.blit(text, text_rect)

        if credits is not None:
            text = self.font_medium.render(f"Credits: {credits}", True, COLOR_TEXT)
            screen.blit(text, text.get_rect(center=(screen_w // 2, start_y + 3 * gap + 10)))

        if error is not None:
            text = self.font_medium.render("Could not start the game, press ENTER to retry", True, COLOR_TEXT_ALERT)
            screen.blit(text, text.get_rect(center=(screen_w // 2, screen_h - 120)))

        help_text = self.font_small.render("1/2/3: Difficulty | ENTER: Start | ESC: Quit", True, COLOR_TEXT_DIM)
        screen.blit(help_text, help_text.get_rect(center=(screen_w // 2, screen_h - 60)))

    def draw_result(self, screen, result, log=None):
        """
        Draw the end-of-session panel

        Args:
            screen: Pygame screen
            result: SessionResult
            log: SessionLedger.report() of the session, for the extra stats
        """
        self._dim(screen)
        screen_w, screen_h = screen.get_size()

        color = (100, 255, 150) if result.won else (255, 100, 100)
        title = self.font_title.render(result.title, True, color)
        screen.blit(title, title.get_rect(center=(screen_w // 2, screen_h // 2 - 110)))

        message = self.font_medium.render(result.message, True, COLOR_TEXT)
        screen.blit(message, message.get_rect(center=(screen_w // 2, screen_h // 2 - 55)))

        start_y = screen_h // 2
        for i, stat in enumerate(result_stats(result, log)):
            text = self.font_large.render(stat, True, COLOR_TEXT)
            screen.blit(text, text.get_rect(center=(screen_w // 2, start_y + i * 40)))

        prompt = self.font_medium.render("Press ENTER to play again", True, COLOR_TEXT_HIGHLIGHT)
        screen.blit(prompt, prompt.get_rect(center=(screen_w // 2, screen_h - 80)))


def result_stats(result, log=None):
    """Stat lines of the result panel; the ledger adds bubbles and play time"""
    stats = [
        f"Score: {format_score(result.score)}",
        f"Treasures: {result.collected}/{result.total}",
        f"Seaweed: {result.seaweeds_collected}",
    ]
    if log is not None:
        bonus = sum(entry["value"] for entry in log["bubbleLog"])
        stats.append(f"Bubbles: {log['bubblesCollected']} (+{bonus}s)")
        stats.append(f"Time played: {format_time(log['elapsedSeconds'])}")
    return stats
