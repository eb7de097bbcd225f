"""
Particle Effects
Explosion debris, floating reward text and win confetti.
All motion is per frame (60 FPS), not per second.
"""

import math
import random

from utils.colors import CONFETTI_COLORS
from utils.constants import (
    DEBRIS_COUNT, DEBRIS_MIN_SPEED, DEBRIS_SPEED_SPREAD, DEBRIS_ANGLE_JITTER,
    DEBRIS_SPIN, REWARD_RISE_SPEED, REWARD_FADE,
    CONFETTI_PER_SIDE, CONFETTI_GRAVITY, CONFETTI_MIN_LIFE,
    CONFETTI_LIFE_SPREAD, CONFETTI_MARGIN
)


class Debris:
    """
    One piece of the exploded manatee
    """
    def __init__(self, part_idx, x, y, vx, vy, rot, rot_speed):
        """
        Args:
            part_idx: Which body part this piece is drawn as
            x, y: Center position (pixels)
            vx, vy: Velocity (pixels per frame)
            rot: Rotation (radians)
            rot_speed: Spin (radians per frame)
        """
        self.part_idx = part_idx
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.rot = rot
        self.rot_speed = rot_speed

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.rot += self.rot_speed


def spawn_debris(cx, cy, rng=None):
    """
    Radial burst of debris around a point

    Pieces are spaced evenly around the circle with a small angular
    jitter, each with its own speed and spin.
    """
    rng = rng or random.Random()
    pieces = []
    for i in range(DEBRIS_COUNT):
        angle = (math.pi * 2) * (i / DEBRIS_COUNT) + rng.random() * 2 * DEBRIS_ANGLE_JITTER - DEBRIS_ANGLE_JITTER
        speed = DEBRIS_MIN_SPEED + rng.random() * DEBRIS_SPEED_SPREAD
        pieces.append(Debris(
            part_idx=i,
            x=cx,
            y=cy,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            rot=rng.random() * math.pi * 2,
            rot_speed=(rng.random() - 0.5) * DEBRIS_SPIN,
        ))
    return pieces


class FloatingReward:
    """Text that drifts up from a pickup and fades"""
    def __init__(self, x, y, text):
        self.x = x
        self.y = y
        self.text = str(text)
        self.alpha = 1.0
        self.vy = REWARD_RISE_SPEED

    @property
    def alive(self):
        return self.alpha > 0

    def update(self):
        self.y += self.vy
        self.alpha -= REWARD_FADE


class FloatingRewards:
    """
    Manages floating reward labels
    """
    def __init__(self):
        self.rewards = []

    def spawn(self, x, y, text):
        reward = FloatingReward(x, y, text)
        self.rewards.append(reward)
        return reward

    def update(self):
        """Move every label and drop the faded ones"""
        for reward in self.rewards:
            reward.update()
        self.rewards = [r for r in self.rewards if r.alive]

    def clear(self):
        self.rewards.clear()

    def __len__(self):
        return len(self.rewards)

    def __iter__(self):
        return iter(self.rewards)


class ConfettiParticle:
    """Single confetti strip"""
    def __init__(self, x, y, vx, vy, size, color, angle, angular_speed, life):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size
        self.color = color
        self.angle = angle
        self.angular_speed = angular_speed
        self.life = life

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.vy += CONFETTI_GRAVITY
        self.angle += self.angular_speed
        self.life -= 1


class Confetti:
    """
    Win confetti

    The camera snapshot is captured when the burst starts, so particles
    are spawned, pruned and drawn against a fixed view even while the
    real camera keeps moving.
    """
    def __init__(self):
        self.active = False
        self.particles = []
        self.snapshot = None

    def start(self, snapshot, rng=None):
        """
        Spawn the burst along the top edge of the captured view

        Args:
            snapshot: CameraSnapshot taken at the moment of winning
            rng: random.Random
        """
        rng = rng or random.Random()
        self.active = True
        self.snapshot = snapshot
        self.particles = []
        for _side in (-1, 1):
            for _ in range(CONFETTI_PER_SIDE):
                self.particles.append(ConfettiParticle(
                    x=snapshot.x + rng.random() * snapshot.width,
                    y=snapshot.y - 20 + rng.random() * 30,
                    vx=(rng.random() - 0.5) * 3,
                    vy=rng.random() * 3 + 2,
                    size=rng.random() * 8 + 7,
                    color=rng.choice(CONFETTI_COLORS),
                    angle=rng.random() * math.pi * 2,
                    angular_speed=(rng.random() - 0.5) * 0.2,
                    life=rng.random() * CONFETTI_LIFE_SPREAD + CONFETTI_MIN_LIFE,
                ))

    def _in_view(self, p):
        s = self.snapshot
        return (p.life > 0 and
                p.y < s.y + s.height + CONFETTI_MARGIN and
                s.x - CONFETTI_MARGIN < p.x < s.x + s.width + CONFETTI_MARGIN)

    def update(self):
        """Advance all particles and prune the expired or off-view ones"""
        if not self.active:
            return
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if self._in_view(p)]
        if not self.particles:
            self.active = False

    def clear(self):
        self.active = False
        self.particles = []
        self.snapshot = None

    def __len__(self):
        return len(self.particles)
