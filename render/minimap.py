"""
Minimap - scaled top-down overview of the whole world in the bottom-left corner
"""

import pygame

from utils.colors import (
    COLOR_MINIMAP_BG, COLOR_MINIMAP_BORDER, COLOR_MINIMAP_MINE, COLOR_MINIMAP_VIEWPORT,
    COLOR_MINIMAP_PLAYER, COLOR_MINIMAP_PLAYER_OUTLINE, COLOR_WALL, COLOR_TREASURE,
    COLOR_SEAWEED
)
from utils.constants import MINIMAP_WIDTH, MINIMAP_HEIGHT, MINIMAP_MARGIN


class Minimap:
    """
    Minimap overlay showing walls, treasures, mines, seaweed and the view box
    """

    def __init__(self, width=MINIMAP_WIDTH, height=MINIMAP_HEIGHT):
        """
        Args:
            width, height: Minimap dimensions in pixels
        """
        self.width = width
        self.height = height
        self.margin = MINIMAP_MARGIN
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)

    def position(self, screen):
        """Top-left corner of the minimap on screen"""
        _, screen_h = screen.get_size()
        return self.margin, screen_h - self.height - self.margin

    def render(self, screen, world, camera):
        """
        Render minimap on screen

        Args:
            screen: pygame.Surface to render to
            world: World
            camera: Camera (its view box is outlined)
        """
        scale_x = self.width / world.width
        scale_y = self.height / world.height

        self.surface.fill((0, 0, 0, 0))
        pygame.draw.rect(self.surface, (*COLOR_MINIMAP_BG, 200), (0, 0, self.width, self.height))

        # Walls
        for wall in world.layout.walls:
            pygame.draw.rect(self.surface, COLOR_WALL, (
                int(wall.x * scale_x), int(wall.y * scale_y),
                max(1, int(wall.width * scale_x + 0.5)), max(1, int(wall.height * scale_y + 0.5))
            ))

        # Real treasures still to find
        for treasure in world.treasures:
            if treasure.collected or treasure.is_fake:
                continue
            self._dot(treasure, scale_x, scale_y, COLOR_TREASURE, 3)

        for mine in world.mines:
            self._dot(mine, scale_x, scale_y, COLOR_MINIMAP_MINE, 3)

        for seaweed in world.seaweeds:
            if not seaweed.collected:
                self._dot(seaweed, scale_x, scale_y, COLOR_SEAWEED, 2)

        # Camera box
        pygame.draw.rect(self.surface, COLOR_MINIMAP_VIEWPORT, (
            int(camera.x * scale_x), int(camera.y * scale_y),
            int(camera.viewport_width * scale_x), int(camera.viewport_height * scale_y)
        ), 1)

        # Player
        px, py = world.player.center
        center = (int(px * scale_x), int(py * scale_y))
        pygame.draw.circle(self.surface, COLOR_MINIMAP_PLAYER, center, 4)
        pygame.draw.circle(self.surface, COLOR_MINIMAP_PLAYER_OUTLINE, center, 4, 1)

        pygame.draw.rect(self.surface, COLOR_MINIMAP_BORDER, (0, 0, self.width, self.height), 2)

        screen.blit(self.surface, self.position(screen))

    def _dot(self, entity, scale_x, scale_y, color, radius):
        cx = int((entity.x + entity.width / 2) * scale_x)
        cy = int((entity.y + entity.height / 2) * scale_y)
        pygame.draw.circle(self.surface, color, (cx, cy), radius)
