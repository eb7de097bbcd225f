"""
ledger.py -- Local mirror of one session's event log.

Keeps the same record the backend builds (chest and bubble logs stamped
with whole seconds since start, mine deaths, elapsed time) so the result
screen and tests can inspect a session without a server.
"""

import threading
import time


class SessionLedger:
    """
    Thread-safe session event log
    """
    def __init__(self, clock=None):
        """
        Args:
            clock: Callable returning seconds (defaults to time.monotonic)
        """
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._reset_fields()

    def _reset_fields(self):
        self.start_time = None
        self.end_time = None
        self.elapsed_seconds = 0
        self.chests_collected = 0
        self.chest_log = []
        self.bubbles_collected = 0
        self.bubble_log = []
        self.mine_deaths = 0

    def _since_start(self, now):
        if self.start_time is None:
            return 0
        return int(now - self.start_time)

    def start(self):
        """Begin a new session, discarding the previous log"""
        with self._lock:
            self._reset_fields()
            self.start_time = self._clock()

    def record_chest(self, x, y, value, kind):
        with self._lock:
            self.chests_collected += 1
            self.chest_log.append({
                "time": self._since_start(self._clock()),
                "x": x, "y": y, "value": value, "type": kind,
            })

    def record_bubble(self, x, y, value):
        with self._lock:
            self.bubbles_collected += 1
            self.bubble_log.append({
                "time": self._since_start(self._clock()),
                "x": x, "y": y, "value": value,
            })

    def record_mine_death(self):
        with self._lock:
            self.mine_deaths += 1

    def end(self):
        """Stamp the end time; later calls keep the first stamp"""
        with self._lock:
            if self.end_time is not None:
                return
            self.end_time = self._clock()
            self.elapsed_seconds = self._since_start(self.end_time)

    def is_within_grace(self, threshold):
        """
        True if the session ended (or, while running, is still) inside the
        grace window the backend refunds
        """
        with self._lock:
            if self.start_time is None:
                return False
            stop = self.end_time if self.end_time is not None else self._clock()
            return (stop - self.start_time) < threshold

    def report(self):
        """Snapshot copy of the whole log"""
        with self._lock:
            return {
                "startTime": self.start_time,
                "endTime": self.end_time,
                "elapsedSeconds": self.elapsed_seconds,
                "chestsCollected": self.chests_collected,
                "chestLog": [dict(e) for e in self.chest_log],
                "bubblesCollected": self.bubbles_collected,
                "bubbleLog": [dict(e) for e in self.bubble_log],
                "mineDeaths": self.mine_deaths,
            }
