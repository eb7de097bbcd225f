"""
Scheduler - drives interval timers and the frame loop from the host clock

The host calls tick(dt_ms) once per display frame. Interval timers fire on
wall-clock cadence (zero or more times per tick), the frame loop fires
exactly once per tick. Nothing here serialises them against each other:
within one tick the frame loop runs first, then due timers, and callbacks
must tolerate any interleaving.
"""

import logging

logger = logging.getLogger(__name__)


class IntervalTimer:
    """
    Repeating wall-clock timer
    """
    def __init__(self, interval_ms, callback, name=''):
        """
        Args:
            interval_ms: Period in milliseconds
            callback: Called with no arguments each period
            name: Label for logs
        """
        if interval_ms <= 0:
            raise ValueError("interval must be positive")
        self.interval_ms = interval_ms
        self.callback = callback
        self.name = name or getattr(callback, '__name__', 'timer')
        self.elapsed_ms = 0.0
        self.cancelled = False

    def cancel(self):
        """Stop the timer; safe to call more than once"""
        self.cancelled = True

    def advance(self, dt_ms):
        """Add elapsed time and fire once per full period, stopping early if cancelled"""
        if self.cancelled:
            return
        self.elapsed_ms += dt_ms
        while self.elapsed_ms >= self.interval_ms and not self.cancelled:
            self.elapsed_ms -= self.interval_ms
            self.callback()

    def __repr__(self):
        return f"IntervalTimer({self.name}, {self.interval_ms}ms, cancelled={self.cancelled})"


class FrameLoop:
    """
    Per-frame callback with its own cancellation flag

    The flag is checked before every frame, so cancelling from inside the
    callback stops the loop before the next one.
    """
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False
        self.frames = 0

    def cancel(self):
        self.cancelled = True

    def step(self):
        if self.cancelled:
            return
        self.frames += 1
        self.callback()


class Scheduler:
    """
    Owns all timers and the single frame loop
    """
    def __init__(self):
        self.timers = []
        self.frame_loop = None

    def set_interval(self, interval_ms, callback, name=''):
        """
        Register a repeating timer

        Returns:
            IntervalTimer handle (call cancel() on it to stop)
        """
        timer = IntervalTimer(interval_ms, callback, name)
        self.timers.append(timer)
        logger.debug("Interval %s started (%dms)", timer.name, interval_ms)
        return timer

    def start_frame_loop(self, callback):
        """
        Start a new frame loop, cancelling any previous one first

        Returns:
            FrameLoop handle
        """
        self.stop_frame_loop()
        self.frame_loop = FrameLoop(callback)
        return self.frame_loop

    def stop_frame_loop(self):
        """Cancel the frame loop if one is running; safe to repeat"""
        if self.frame_loop is not None:
            self.frame_loop.cancel()
            self.frame_loop = None

    def cancel_all(self):
        """Cancel every timer and the frame loop"""
        for timer in self.timers:
            timer.cancel()
        self.timers = []
        self.stop_frame_loop()

    @property
    def frame_loop_running(self):
        return self.frame_loop is not None and not self.frame_loop.cancelled

    def tick(self, dt_ms):
        """
        Advance the host clock

        Args:
            dt_ms: Milliseconds since the previous tick
        """
        loop = self.frame_loop
        if loop is not None:
            loop.step()

        for timer in list(self.timers):
            timer.advance(dt_ms)

        self.timers = [t for t in self.timers if not t.cancelled]
        if self.frame_loop is not None and self.frame_loop.cancelled:
            self.frame_loop = None
