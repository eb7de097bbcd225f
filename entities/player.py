"""
Player entity - the manatee
Movement with speed modifiers, per-axis wall sliding and the win jump
"""

from game.collision import try_move
from utils.constants import (
    GAME_WIDTH, GAME_HEIGHT, CHEST_SIZE,
    MANATEE_SPEED, MANATEE_WIDTH, MANATEE_HEIGHT,
    MANATEE_JUMPS_TOTAL, MANATEE_JUMP_DURATION, MANATEE_JUMP_HEIGHT,
    SEAWEED_BOOST_AMOUNT, SEAWEED_BOOST_DURATION,
    FAKE_CHEST_SLOW_AMOUNT, FAKE_CHEST_SLOW_DURATION
)
from utils.helpers import parabolic_offset


class Manatee:
    """
    Player entity with speed effects and jump animation
    """
    def __init__(self, x=CHEST_SIZE, y=CHEST_SIZE):
        self.x = x
        self.y = y
        self.width = MANATEE_WIDTH
        self.height = MANATEE_HEIGHT
        self.direction = 1  # +1 facing right, -1 facing left

        # Speed effects (frames remaining)
        self.boost_active = False
        self.boost_timer = 0
        self.slow_timer = 0

        # Win animation
        self.jumping = False
        self.jump_frame = 0
        self.jump_count = 0
        self.jump_offset_y = 0.0

    def place(self, x, y):
        """Teleport to a spawn position"""
        self.x = x
        self.y = y

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    # ========== EFFECTS ==========

    def activate_boost(self):
        """Start or restart the seaweed boost; boosts never stack"""
        self.boost_active = True
        self.boost_timer = SEAWEED_BOOST_DURATION

    def apply_slow(self):
        """Start or restart the fake-chest slow"""
        self.slow_timer = FAKE_CHEST_SLOW_DURATION

    def update_boost(self):
        """Count the boost down one frame"""
        if self.boost_active:
            self.boost_timer -= 1
            if self.boost_timer <= 0:
                self.boost_active = False
                self.boost_timer = 0

    def consume_speed_multiplier(self):
        """
        Speed multiplier for this frame

        Boost and slow compose multiplicatively. The slow timer is
        counted down here, once per frame.
        """
        multiplier = SEAWEED_BOOST_AMOUNT if self.boost_active else 1.0
        if self.slow_timer > 0:
            multiplier *= FAKE_CHEST_SLOW_AMOUNT
            self.slow_timer -= 1
        return multiplier

    # ========== MOVEMENT ==========

    def desired_move(self, input_state, multiplier):
        """
        Convert input into a displacement for this frame and update facing

        Args:
            input_state: InputState
            multiplier: Result of consume_speed_multiplier()

        Returns:
            (dx, dy) in pixels
        """
        ix, iy = input_state.axis()
        dx = MANATEE_SPEED * ix * multiplier
        dy = MANATEE_SPEED * iy * multiplier
        if dx < 0:
            self.direction = -1
        elif dx > 0:
            self.direction = 1
        return dx, dy

    def move(self, dx, dy, walls_array, world_width=GAME_WIDTH, world_height=GAME_HEIGHT):
        """
        Resolve a move against the walls, X then Y

        Returns:
            (moved_x, moved_y)
        """
        return try_move(self, dx, dy, walls_array, world_width, world_height)

    # ========== JUMP ==========

    def start_jump(self):
        """Begin the celebration jumps"""
        self.jumping = True
        self.jump_frame = 0
        self.jump_count = 0

    def update_jump(self):
        """Advance the parabolic jump; several hops in a row, then rest"""
        if not self.jumping:
            self.jump_offset_y = 0.0
            return

        self.jump_frame += 1
        progress = self.jump_frame / MANATEE_JUMP_DURATION
        self.jump_offset_y = parabolic_offset(progress, MANATEE_JUMP_HEIGHT)
        if self.jump_frame >= MANATEE_JUMP_DURATION:
            self.jump_count += 1
            if self.jump_count < MANATEE_JUMPS_TOTAL:
                self.jump_frame = 0
            else:
                self.jumping = False
                self.jump_offset_y = 0.0

    def reset_effects(self):
        """Clear all timers at session start"""
        self.boost_active = False
        self.boost_timer = 0
        self.slow_timer = 0
        self.jumping = False
        self.jump_frame = 0
        self.jump_count = 0
        self.jump_offset_y = 0.0

    def __repr__(self):
        return f"Manatee(pos=({self.x:.0f},{self.y:.0f}), boost={self.boost_active}, slow={self.slow_timer})"
