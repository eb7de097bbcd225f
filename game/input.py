"""
Input state - keyboard and gamepad folded into one movement vector
"""

import pygame

from utils.helpers import clamp

KEY_BINDINGS = {
    pygame.K_LEFT: 'left',
    pygame.K_a: 'left',
    pygame.K_RIGHT: 'right',
    pygame.K_d: 'right',
    pygame.K_UP: 'up',
    pygame.K_w: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_s: 'down',
}

JOYSTICK_DEADZONE = 0.15


class InputState:
    """
    Currently held directions plus an optional analog stick vector
    """
    def __init__(self):
        self.pressed = set()
        self.joystick = None  # (x, y) in [-1, 1], None when idle

    def press(self, direction):
        self.pressed.add(direction)

    def release(self, direction):
        self.pressed.discard(direction)

    def set_joystick(self, x, y):
        """Set the stick vector; small deflections count as released"""
        if abs(x) < JOYSTICK_DEADZONE and abs(y) < JOYSTICK_DEADZONE:
            self.joystick = None
        else:
            self.joystick = (clamp(x, -1.0, 1.0), clamp(y, -1.0, 1.0))

    def handle_event(self, event):
        """
        Feed a pygame event

        Returns:
            True if the event was a movement input
        """
        if event.type == pygame.KEYDOWN and event.key in KEY_BINDINGS:
            self.press(KEY_BINDINGS[event.key])
            return True
        if event.type == pygame.KEYUP and event.key in KEY_BINDINGS:
            self.release(KEY_BINDINGS[event.key])
            return True
        if event.type == pygame.JOYAXISMOTION and event.axis in (0, 1):
            x, y = self.joystick or (0.0, 0.0)
            if event.axis == 0:
                x = event.value
            else:
                y = event.value
            self.set_joystick(x, y)
            return True
        return False

    def axis(self):
        """
        Movement direction for this frame

        The stick wins while deflected; otherwise held keys give -1/0/+1
        per axis (opposite keys cancel).

        Returns:
            (x, y) tuple
        """
        if self.joystick is not None:
            return self.joystick
        x = ('right' in self.pressed) - ('left' in self.pressed)
        y = ('down' in self.pressed) - ('up' in self.pressed)
        return float(x), float(y)

    def clear(self):
        self.pressed.clear()
        self.joystick = None
