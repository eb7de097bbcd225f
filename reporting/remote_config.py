"""
remote_config.py -- Per-difficulty game configs fetched off the game thread.

prefetch() starts a daemon thread that asks the backend for one
difficulty's config and caches the raw payload. get() never touches the
network: it validates whatever is cached with GameConfig.from_dict, or
hands back the built-in fallback when nothing has arrived yet.
"""

import logging
import threading

from game.errors import ReportingError
from maze.difficulty import GameConfig

logger = logging.getLogger(__name__)


class RemoteConfigCache:
    """
    Last backend config payload per difficulty
    """
    def __init__(self, client):
        """
        Args:
            client: BackendClient
        """
        self.client = client
        self._lock = threading.Lock()
        self._payloads = {}
        self._threads = {}

    def prefetch(self, difficulty):
        """
        Start fetching a difficulty's config in the background

        Returns:
            False if a fetch for that difficulty is already running
        """
        with self._lock:
            running = self._threads.get(difficulty)
            if running is not None and running.is_alive():
                return False
            thread = threading.Thread(target=self._fetch, args=(difficulty,), daemon=True,
                                      name=f"config-fetch-{difficulty}")
            self._threads[difficulty] = thread
        thread.start()
        return True

    def _fetch(self, difficulty):
        try:
            raw = self.client.fetch_game_config(difficulty)
        except ReportingError as e:
            logger.warning("Remote %s config unavailable: %s", difficulty, e)
            return
        except Exception:
            logger.exception("Unexpected error fetching %s config", difficulty)
            return
        with self._lock:
            self._payloads[difficulty] = raw
        logger.debug("Remote %s config cached", difficulty)

    def get(self, difficulty, fallback):
        """
        Validated config for a difficulty, or fallback when none is cached
        """
        with self._lock:
            raw = self._payloads.get(difficulty)
        if raw is None:
            logger.info("No remote %s config yet, using built-in one", difficulty)
            return fallback
        return GameConfig.from_dict(raw, fallback=fallback)

    def wait(self, timeout=None):
        """Join running fetches (shutdown and tests)"""
        with self._lock:
            threads = list(self._threads.values())
        for thread in threads:
            thread.join(timeout)
