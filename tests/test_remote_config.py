import threading
import unittest
from unittest import mock

import config
from game.errors import ReportingError
from maze.difficulty import get_difficulty_config
from reporting import create_config_cache
from reporting.remote_config import RemoteConfigCache


class RemoteConfigCacheTests(unittest.TestCase):
    def setUp(self):
        self.client = mock.Mock()
        self.cache = RemoteConfigCache(self.client)
        self.local = get_difficulty_config("easy")

    def test_nothing_cached_gives_fallback_without_network(self):
        self.assertIs(self.cache.get("easy", self.local), self.local)
        self.client.fetch_game_config.assert_not_called()

    def test_prefetched_payload_is_validated(self):
        self.client.fetch_game_config.return_value = {"totalTreasures": 4, "totalMines": -1}
        self.assertTrue(self.cache.prefetch("easy"))
        self.cache.wait(timeout=2)

        cfg = self.cache.get("easy", self.local)
        self.client.fetch_game_config.assert_called_once_with("easy")
        self.assertEqual(cfg.total_treasures, 4)
        self.assertEqual(cfg.total_mines, self.local.total_mines)
        self.assertIs(self.cache.get("hard", self.local), self.local)

    def test_failed_fetch_keeps_fallback(self):
        self.client.fetch_game_config.side_effect = ReportingError("timed out")
        self.cache.prefetch("normal")
        self.cache.wait(timeout=2)
        self.assertIs(self.cache.get("normal", self.local), self.local)

    def test_slow_backend_does_not_block_get(self):
        gate = threading.Event()

        def slow_fetch(difficulty):
            gate.wait(2)
            return {"totalTreasures": 9}

        self.client.fetch_game_config.side_effect = slow_fetch
        self.assertTrue(self.cache.prefetch("hard"))
        self.assertFalse(self.cache.prefetch("hard"))
        self.assertIs(self.cache.get("hard", self.local), self.local)

        gate.set()
        self.cache.wait(timeout=2)
        self.assertEqual(self.cache.get("hard", self.local).total_treasures, 9)
        self.assertEqual(self.client.fetch_game_config.call_count, 1)


class CreateConfigCacheTests(unittest.TestCase):
    def test_disabled_without_flag_or_client(self):
        with mock.patch.object(config, "FETCH_REMOTE_CONFIG", False):
            self.assertIsNone(create_config_cache(mock.Mock()))
        with mock.patch.object(config, "FETCH_REMOTE_CONFIG", True):
            self.assertIsNone(create_config_cache(None))
            self.assertIsInstance(create_config_cache(mock.Mock()), RemoteConfigCache)


if __name__ == "__main__":
    unittest.main()
