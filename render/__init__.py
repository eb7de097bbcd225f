"""
Rendering Module - pygame drawing for the world, minimap and HUD
"""

from .hud import HUD
from .minimap import Minimap
from .renderer import Renderer

__all__ = ['HUD', 'Minimap', 'Renderer']
