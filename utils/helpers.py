"""
Helper utility functions for Manatee Treasure Hunt
"""

import math


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def format_time(seconds):
    """Remaining time as MM:SS, never negative"""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_score(score):
    """Format score with thousands separator"""
    return f"{score:,}"


def parabolic_offset(progress, height):
    """Vertical offset of a jump at progress (0-1), peaking at -height"""
    return -height * 4 * progress * (1 - progress)


def pulse(frame, period):
    """0-1 sine pulse with the given period in frames"""
    return (math.sin(frame * math.pi * 2 / period) + 1) / 2
