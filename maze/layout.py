"""
Maze layout - converts a textual cell pattern into world geometry

A pattern is a list of equal-length strings, one character per cell:
'0' open, '1' wall, 'X' player spawn, 'M' mermaid spawn. The whole
pattern is stretched over the world, so every cell is
world_width / cols by world_height / rows pixels.
"""

import random
import numpy as np

from game.collision import pack_rects
from utils.constants import (
    GAME_WIDTH, GAME_HEIGHT, CHEST_SIZE,
    CELL_OPEN, CELL_WALL, CELL_SPAWN, CELL_MERMAID,
    SHELL_CHANCE, SHELL_MIN_SIZE, SHELL_SIZE_SPREAD,
    CORAL_DECO_CHANCE, CORAL_DECO_MIN_SIZE, CORAL_DECO_SIZE_SPREAD
)

VALID_CELLS = (CELL_OPEN, CELL_WALL, CELL_SPAWN, CELL_MERMAID)


def is_valid_pattern(pattern):
    """
    Check that a pattern is a non-empty rectangular list of strings
    made only of known cell codes
    """
    if not isinstance(pattern, (list, tuple)) or not pattern:
        return False
    if not all(isinstance(row, str) and row for row in pattern):
        return False
    width = len(pattern[0])
    for row in pattern:
        if len(row) != width:
            return False
        if any(ch not in VALID_CELLS for ch in row):
            return False
    return True


class Decoration:
    """Shell or coral drawn on top of a wall block, relative to the wall"""
    def __init__(self, kind, x, y, size):
        self.kind = kind  # 'shell' or 'coral'
        self.x = x
        self.y = y
        self.size = size

    def __repr__(self):
        return f"Decoration({self.kind}, size={self.size:.0f})"


class Wall:
    """Solid wall block covering one cell"""
    def __init__(self, x, y, width, height, decorations=None):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.decorations = decorations or []

    def __repr__(self):
        return f"Wall(x={self.x:.0f}, y={self.y:.0f})"


class MazeLayout:
    """
    Immutable world geometry for one session
    """
    def __init__(self, pattern, world_width=GAME_WIDTH, world_height=GAME_HEIGHT, rng=None):
        """
        Args:
            pattern: List of row strings (see module docstring)
            world_width, world_height: World size in pixels
            rng: random.Random used for decorations

        Raises:
            ValueError: if the pattern is empty, ragged or has unknown codes
        """
        if not is_valid_pattern(pattern):
            raise ValueError("maze pattern must be a non-empty rectangular list of cell strings")

        self.rng = rng or random.Random()
        self.pattern = list(pattern)
        self.grid = np.array([list(row) for row in pattern], dtype='<U1')
        self.rows, self.cols = self.grid.shape
        self.world_width = world_width
        self.world_height = world_height
        self.cell_w = world_width / self.cols
        self.cell_h = world_height / self.rows

        self.walls = self._build_walls()
        self.walls_array = pack_rects(self.walls)
        self._open_positions = self._collect_open_positions()

    def _build_walls(self):
        """Create one wall per '1' cell, row-major, with random decorations"""
        walls = []
        for row, col in np.argwhere(self.grid == CELL_WALL):
            wall = Wall(col * self.cell_w, row * self.cell_h, self.cell_w, self.cell_h)
            if self.rng.random() < SHELL_CHANCE:
                size = SHELL_MIN_SIZE + self.rng.random() * SHELL_SIZE_SPREAD
                wall.decorations.append(self._decoration('shell', size))
            if self.rng.random() < CORAL_DECO_CHANCE:
                size = CORAL_DECO_MIN_SIZE + self.rng.random() * CORAL_DECO_SIZE_SPREAD
                wall.decorations.append(self._decoration('coral', size))
            walls.append(wall)
        return walls

    def _decoration(self, kind, size):
        x = self.rng.random() * max(0.0, self.cell_w - size)
        y = self.rng.random() * max(0.0, self.cell_h - size)
        return Decoration(kind, x, y, size)

    def _collect_open_positions(self):
        half = CHEST_SIZE / 2
        positions = []
        for row, col in np.argwhere(self.grid == CELL_OPEN):
            cx, cy = self.cell_center(row, col)
            positions.append((cx - half, cy - half))
        return positions

    # ========== QUERIES ==========

    def cell_center(self, row, col):
        """Pixel center of a cell"""
        return (col * self.cell_w + self.cell_w / 2,
                row * self.cell_h + self.cell_h / 2)

    def cell_at(self, x, y):
        """Grid (row, col) containing a pixel position, clamped to the grid"""
        row = int(y // self.cell_h)
        col = int(x // self.cell_w)
        return (min(max(row, 0), self.rows - 1),
                min(max(col, 0), self.cols - 1))

    def is_wall(self, row, col):
        """Check if a cell is a wall; out-of-grid cells are not"""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.grid[row, col] == CELL_WALL
        return False

    def wall_neighbors(self, row, col):
        """Number of wall cells among the 4 orthogonal neighbours"""
        return sum(
            1 for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1))
            if self.is_wall(row + dr, col + dc)
        )

    def find_cells(self, code):
        """All (row, col) cells holding a code, row-major"""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == code)]

    def open_positions(self):
        """
        Placement anchors for every open cell

        Returns:
            List of (x, y): cell center offset by half a chest, so a
            chest-sized box placed there sits centred in the cell
        """
        return list(self._open_positions)

    def random_open_position(self, rng=None):
        """Random placement anchor, or the world origin on a map with no open cells"""
        if not self._open_positions:
            return (0.0, 0.0)
        return (rng or self.rng).choice(self._open_positions)

    def spawn_position(self, width, height, rng=None):
        """
        Top-left position for the player

        Uses the first 'X' cell (row-major), centred for the given size.
        Falls back to a random open position when the pattern has none.
        """
        spawns = self.find_cells(CELL_SPAWN)
        if spawns:
            cx, cy = self.cell_center(*spawns[0])
            return (cx - width / 2, cy - height / 2)
        return self.random_open_position(rng)

    def mermaid_positions(self, size):
        """Top-left positions of size x size boxes centred on every 'M' cell"""
        positions = []
        for row, col in self.find_cells(CELL_MERMAID):
            cx, cy = self.cell_center(row, col)
            positions.append((cx - size / 2, cy - size / 2))
        return positions

    def __repr__(self):
        return f"MazeLayout({self.cols}x{self.rows}, walls={len(self.walls)})"
