"""
World Renderer - draws one frame of the session with pygame primitives

Layer order (bottom to top):
background, mermaids, corals, background seaweed, collectible seaweed,
walls, ambient bubbles, treasures, bubbles, mines, manatee or explosion,
floating rewards, minimap, HUD, countdown overlay, confetti, screens.
"""

import math

import numpy as np
import pygame

from entities.mermaid import MermaidState
from render.hud import HUD
from render.minimap import Minimap
from utils.colors import (
    COLOR_WATER_TOP, COLOR_WATER_BOTTOM, COLOR_WALL, COLOR_SHELL, COLOR_CORAL,
    COLOR_MANATEE, COLOR_MERMAID, COLOR_MINE, COLOR_TREASURE, COLOR_TREASURE_FAKE,
    COLOR_SEAWEED, COLOR_SEAWEED_GLOW, COLOR_AMBIENT_SEAWEED, COLOR_BUBBLE,
    COLOR_BUBBLE_TEXT, COLOR_AMBIENT_BUBBLE, COLOR_DEBRIS, COLOR_BLAST,
    COLOR_REWARD, COLOR_REWARD_OUTLINE, COLOR_OVERLAY, COLOR_OVERLAY_TEXT,
    COLOR_TEXT_HIGHLIGHT
)
from utils.constants import EXPLOSION_DURATION
from utils.helpers import clamp, pulse


def build_gradient(width, height, top=COLOR_WATER_TOP, bottom=COLOR_WATER_BOTTOM):
    """
    Vertical two-colour gradient surface

    Returns:
        pygame.Surface of the given size
    """
    t = np.linspace(0.0, 1.0, height, dtype=np.float64)[:, None]
    column = (1.0 - t) * np.asarray(top, dtype=np.float64) + t * np.asarray(bottom, dtype=np.float64)
    # surfarray is indexed [x][y]
    pixels = np.broadcast_to(column[None, :, :], (width, height, 3)).astype(np.uint8)
    return pygame.surfarray.make_surface(pixels)


def rotated_rect_points(cx, cy, width, height, angle):
    """Corners of a width x height box centred on (cx, cy) rotated by angle"""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    hw, hh = width / 2, height / 2
    points = []
    for px, py in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)):
        points.append((cx + px * cos_a - py * sin_a, cy + px * sin_a + py * cos_a))
    return points


class Renderer:
    """
    Draws a GameSession onto a pygame surface; reads state, never changes it
    """
    def __init__(self, width, height):
        """
        Args:
            width, height: Viewport size in pixels
        """
        self.width = width
        self.height = height
        self.minimap = Minimap()
        self.hud = HUD()

        self.font_reward = pygame.font.SysFont("consolas", 28, bold=True)
        self.font_label = pygame.font.SysFont("consolas", 16, bold=True)
        self.font_marker = pygame.font.SysFont("consolas", 36, bold=True)
        self.font_countdown = pygame.font.SysFont("consolas", 120, bold=True)

        self._background = None
        self._alpha_layer = None
        self.frame_count = 0
        self.resize(width, height)

    def resize(self, width, height):
        """Rebuild the cached viewport-sized surfaces"""
        self.width = width
        self.height = height
        self._background = build_gradient(width, height)
        self._alpha_layer = pygame.Surface((width, height), pygame.SRCALPHA)

    def draw(self, surface, session):
        """
        Draw the whole frame

        Args:
            surface: Target pygame.Surface (the window)
            session: GameSession
        """
        self.frame_count += 1
        surface.blit(self._background, (0, 0))

        world = session.world
        camera = session.camera
        if world is not None:
            self._draw_mermaids(surface, world, camera)
            self._draw_scenery(surface, world, camera)
            self._draw_seaweeds(surface, world, camera, self.frame_count)
            self._draw_walls(surface, world, camera)
            self._draw_ambient_bubbles(surface, world, camera)
            self._draw_treasures(surface, world, camera)
            self._draw_bubbles(surface, world, camera)
            self._draw_mines(surface, world, camera)
            if world.explosion_active:
                self._draw_explosion(surface, world, camera)
            else:
                self._draw_manatee(surface, world.player, camera)
            self._draw_rewards(surface, world, camera)
            self.minimap.render(surface, world, camera)

        self.hud.draw(surface, session)

        label = session.countdown_label
        if label is not None:
            self._draw_countdown(surface, label)

        if world is not None and world.confetti.active:
            self._draw_confetti(surface, world.confetti)

        self.hud.draw_screens(surface, session)

    # ========== HAZARDS ==========

    def _draw_mermaids(self, surface, world, camera):
        for mermaid in world.mermaids:
            if not camera.is_visible(mermaid.x, mermaid.y, mermaid.width, mermaid.height):
                continue
            sx, sy = camera.world_to_screen(mermaid.x, mermaid.y)
            body = pygame.Rect(int(sx), int(sy + mermaid.height * 0.15), mermaid.width, int(mermaid.height * 0.7))
            pygame.draw.ellipse(surface, COLOR_MERMAID, body)
            pygame.draw.polygon(surface, COLOR_MERMAID, [
                (body.right - 4, body.centery),
                (body.right + 12, body.top),
                (body.right + 12, body.bottom),
            ])
            if mermaid.state is MermaidState.EXHAUSTED:
                pygame.draw.ellipse(surface, (140, 70, 120), body, 3)
            if mermaid.state is MermaidState.EXCLAMATION:
                mark = self.font_marker.render("!", True, COLOR_TEXT_HIGHLIGHT)
                surface.blit(mark, mark.get_rect(midbottom=(body.centerx, int(sy))))

    def _draw_mines(self, surface, world, camera):
        for mine in world.mines:
            if not camera.is_visible(mine.x, mine.y, mine.width, mine.height):
                continue
            sx, sy = camera.world_to_screen(mine.x, mine.y)
            cx = int(sx + mine.width / 2)
            cy = int(sy + mine.height / 2)
            radius = mine.width // 2 - 10
            for i in range(8):
                angle = i * math.pi / 4
                end = (cx + math.cos(angle) * (radius + 10), cy + math.sin(angle) * (radius + 10))
                pygame.draw.line(surface, COLOR_MINE, (cx, cy), end, 4)
            pygame.draw.circle(surface, COLOR_MINE, (cx, cy), radius)
            pygame.draw.circle(surface, (60, 0, 0), (cx, cy), radius, 2)

    # ========== SCENERY ==========

    def _draw_scenery(self, surface, world, camera):
        """Corals and background seaweed, translucent"""
        layer = self._alpha_layer
        layer.fill((0, 0, 0, 0))
        for coral in world.scenery.corals:
            if not camera.is_visible(coral.x, coral.y, coral.width, coral.height):
                continue
            sx, sy = camera.world_to_screen(coral.x, coral.y)
            radius = int(min(coral.width, coral.height) / 2)
            pygame.draw.circle(layer, (*COLOR_CORAL, 178), (int(sx + coral.width / 2), int(sy + coral.height / 2)), radius)
        for frond in world.scenery.seaweeds:
            if not camera.is_visible(frond.x, frond.y, frond.width, frond.height):
                continue
            sx, sy = camera.world_to_screen(frond.x, frond.y)
            pygame.draw.ellipse(layer, (*COLOR_AMBIENT_SEAWEED, 84),
                                (int(sx), int(sy), int(frond.width), int(frond.height)))
        surface.blit(layer, (0, 0))

    def _draw_seaweeds(self, surface, world, camera, frame):
        glow = int(60 + 60 * pulse(frame, 75))
        for seaweed in world.seaweeds:
            if seaweed.collected or not camera.is_visible(seaweed.x, seaweed.y, seaweed.width, seaweed.height, 10):
                continue
            sx, sy = camera.world_to_screen(seaweed.x, seaweed.y)
            halo = pygame.Surface((seaweed.width + 20, seaweed.height + 20), pygame.SRCALPHA)
            pygame.draw.ellipse(halo, (*COLOR_SEAWEED_GLOW, glow), halo.get_rect())
            surface.blit(halo, (int(sx) - 10, int(sy) - 10))
            blade_w = seaweed.width // 3
            for i in range(3):
                pygame.draw.ellipse(surface, COLOR_SEAWEED,
                                    (int(sx) + i * blade_w, int(sy) + i * 8, blade_w, seaweed.height - i * 8))

    def _draw_walls(self, surface, world, camera):
        for wall in world.layout.walls:
            if not camera.is_visible(wall.x, wall.y, wall.width, wall.height):
                continue
            sx, sy = camera.world_to_screen(wall.x, wall.y)
            rect = pygame.Rect(int(sx), int(sy), int(math.ceil(wall.width)), int(math.ceil(wall.height)))
            pygame.draw.rect(surface, COLOR_WALL, rect)
            for deco in wall.decorations:
                dx = int(sx + deco.x)
                dy = int(sy + deco.y)
                size = int(deco.size)
                if deco.kind == 'shell':
                    pygame.draw.ellipse(surface, COLOR_SHELL, (dx, dy, size, int(size * 0.8)))
                    pygame.draw.ellipse(surface, (200, 170, 140), (dx, dy, size, int(size * 0.8)), 2)
                else:
                    pygame.draw.circle(surface, COLOR_CORAL, (dx + size // 2, dy + size // 2), size // 2)

    def _draw_ambient_bubbles(self, surface, world, camera):
        for bubble in world.scenery.bubbles:
            r = bubble.radius
            if not camera.is_visible(bubble.x - r, bubble.y - r, r * 2, r * 2):
                continue
            sx, sy = camera.world_to_screen(bubble.x, bubble.y)
            pygame.draw.circle(surface, COLOR_AMBIENT_BUBBLE, (int(sx), int(sy)), int(r), 2)

    # ========== COLLECTIBLES ==========

    def _draw_treasures(self, surface, world, camera):
        for treasure in world.treasures:
            if treasure.collected or not camera.is_visible(treasure.x, treasure.y, treasure.width, treasure.height):
                continue
            sx, sy = camera.world_to_screen(treasure.x, treasure.y)
            color = COLOR_TREASURE_FAKE if treasure.is_fake else COLOR_TREASURE
            body = pygame.Rect(int(sx), int(sy + treasure.height * 0.3), treasure.width, int(treasure.height * 0.7))
            lid = pygame.Rect(int(sx), int(sy + treasure.height * 0.1), treasure.width, int(treasure.height * 0.25))
            pygame.draw.rect(surface, color, body, border_radius=4)
            pygame.draw.rect(surface, color, lid, border_top_left_radius=10, border_top_right_radius=10)
            pygame.draw.rect(surface, COLOR_REWARD_OUTLINE, body, 2, border_radius=4)
            pygame.draw.rect(surface, COLOR_REWARD_OUTLINE, (body.centerx - 5, body.top, 10, 12))

    def _draw_bubbles(self, surface, world, camera):
        for bubble in world.bubbles:
            if bubble.collected or not camera.is_visible(bubble.x, bubble.y, bubble.width, bubble.height):
                continue
            sx, sy = camera.world_to_screen(bubble.x, bubble.y)
            center = (int(sx + bubble.width / 2), int(sy + bubble.height / 2))
            pygame.draw.circle(surface, COLOR_BUBBLE, center, bubble.width // 2)
            pygame.draw.circle(surface, (255, 255, 255), center, bubble.width // 2, 2)
            label = self.font_label.render(f"+{bubble.value}s", True, COLOR_BUBBLE_TEXT)
            surface.blit(label, label.get_rect(center=center))

    # ========== PLAYER ==========

    def _draw_manatee(self, surface, player, camera):
        sx, sy = camera.world_to_screen(player.x, player.y + player.jump_offset_y)
        body = pygame.Rect(int(sx), int(sy + 8), player.width, player.height - 16)

        if player.boost_active:
            halo = pygame.Surface((player.width + 24, player.height + 24), pygame.SRCALPHA)
            pygame.draw.ellipse(halo, (*COLOR_SEAWEED_GLOW, 90), halo.get_rect())
            surface.blit(halo, (int(sx) - 12, int(sy) - 12))

        pygame.draw.ellipse(surface, COLOR_MANATEE, body)
        # snout on the facing side, tail paddle on the other
        if player.direction > 0:
            snout = (body.right - 10, body.centery)
            tail = body.left
        else:
            snout = (body.left + 10, body.centery)
            tail = body.right
        pygame.draw.circle(surface, (150, 150, 150), snout, 12)
        pygame.draw.circle(surface, (20, 20, 20), (snout[0], snout[1] - 6), 3)
        pygame.draw.ellipse(surface, COLOR_MANATEE, (tail - 12, body.centery - 14, 24, 28))

    def _draw_explosion(self, surface, world, camera):
        """Debris pieces plus an expanding ring that fades out"""
        t = world.explosion_timer / EXPLOSION_DURATION
        cx, cy = world.player.center
        scx, scy = camera.world_to_screen(cx, cy)

        alpha = int(255 * clamp(1.0 - t * 2, 0.0, 1.0))
        if alpha > 0:
            radius = int(20 + 140 * t)
            ring = pygame.Surface((radius * 2 + 8, radius * 2 + 8), pygame.SRCALPHA)
            pygame.draw.circle(ring, (*COLOR_BLAST, alpha), (radius + 4, radius + 4), radius, 8)
            surface.blit(ring, (int(scx) - radius - 4, int(scy) - radius - 4))

        for piece in world.debris:
            px, py = camera.world_to_screen(piece.x, piece.y)
            points = rotated_rect_points(px, py, 18, 10, piece.rot)
            color = COLOR_MANATEE if piece.part_idx % 2 else COLOR_DEBRIS
            pygame.draw.polygon(surface, color, points)

    # ========== EFFECTS ==========

    def _draw_rewards(self, surface, world, camera):
        for reward in world.rewards:
            sx, sy = camera.world_to_screen(reward.x, reward.y)
            text = self.font_reward.render(reward.text, True, COLOR_REWARD)
            outline = self.font_reward.render(reward.text, True, COLOR_REWARD_OUTLINE)
            alpha = int(255 * clamp(reward.alpha, 0.0, 1.0))
            text.set_alpha(alpha)
            outline.set_alpha(alpha)
            rect = text.get_rect(center=(int(sx), int(sy)))
            surface.blit(outline, rect.move(2, 2))
            surface.blit(text, rect)

    def _draw_countdown(self, surface, label):
        dim = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        dim.fill((*COLOR_OVERLAY, 140))
        surface.blit(dim, (0, 0))
        text = self.font_countdown.render(label, True, COLOR_OVERLAY_TEXT)
        surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))

    def _draw_confetti(self, surface, confetti):
        """Drawn against the view captured at win time"""
        snap = confetti.snapshot
        for p in confetti.particles:
            alpha = int(255 * clamp(p.life / 30, 0.0, 1.0))
            if alpha <= 0:
                continue
            size = int(p.size)
            strip = pygame.Surface((size, max(1, size // 3)), pygame.SRCALPHA)
            strip.fill((*p.color, alpha))
            strip = pygame.transform.rotate(strip, -math.degrees(p.angle))
            sx = p.x - snap.x
            sy = p.y - snap.y
            surface.blit(strip, strip.get_rect(center=(int(sx), int(sy))))
