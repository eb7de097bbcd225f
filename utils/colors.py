"""
Color palette for Manatee Treasure Hunt
"""

# Background colors
COLOR_BG = (20, 22, 28)                 # Window background
COLOR_WATER_TOP = (26, 117, 255)        # Gradient top
COLOR_WATER_BOTTOM = (0, 51, 102)       # Gradient bottom
COLOR_PANEL_BG = (12, 14, 18)           # HUD panel background

# UI colors
COLOR_TEXT = (210, 210, 210)
COLOR_TEXT_HIGHLIGHT = (255, 230, 160)
COLOR_TEXT_DIM = (150, 150, 150)
COLOR_TEXT_ALERT = (220, 60, 60)

# Walls and decorations
COLOR_WALL = (43, 62, 47)
COLOR_SHELL = (245, 222, 190)
COLOR_CORAL = (204, 78, 91)

# Entity colors
COLOR_MANATEE = (128, 128, 128)
COLOR_MERMAID = (219, 113, 188)
COLOR_MINE = (139, 0, 0)
COLOR_TREASURE = (255, 215, 0)
COLOR_TREASURE_FAKE = (191, 164, 4)
COLOR_SEAWEED = (0, 238, 85)
COLOR_SEAWEED_GLOW = (0, 255, 136)
COLOR_AMBIENT_SEAWEED = (11, 143, 101)
COLOR_BUBBLE = (170, 238, 255)
COLOR_BUBBLE_TEXT = (34, 51, 68)
COLOR_AMBIENT_BUBBLE = (200, 220, 255)

# Effect colors
COLOR_DEBRIS = (187, 187, 187)
COLOR_BLAST = (255, 200, 60)
COLOR_REWARD = (255, 215, 0)
COLOR_REWARD_OUTLINE = (139, 117, 0)

# Minimap
COLOR_MINIMAP_BG = (34, 34, 34)
COLOR_MINIMAP_BORDER = (255, 255, 255)
COLOR_MINIMAP_MINE = (255, 49, 49)
COLOR_MINIMAP_VIEWPORT = (118, 227, 255)
COLOR_MINIMAP_PLAYER = (255, 229, 180)
COLOR_MINIMAP_PLAYER_OUTLINE = (85, 85, 85)

# Overlay
COLOR_OVERLAY = (0, 0, 0)
COLOR_OVERLAY_TEXT = (255, 255, 255)

CONFETTI_COLORS = [
    (255, 215, 0),
    (255, 105, 180),
    (0, 230, 255),
    (68, 255, 68),
    (255, 99, 71),
    (255, 179, 71),
    (0, 255, 234),
    (179, 102, 255),
]
