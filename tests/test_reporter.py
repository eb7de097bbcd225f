import io
import json
import unittest
import urllib.error
from unittest import mock

from game.errors import ReportingError
from reporting import create_client, create_reporter
from reporting.client import BackendClient
from reporting.reporter import NullReporter, SessionReporter


def fake_response(body):
    opened = mock.MagicMock()
    opened.__enter__.return_value.read.return_value = body
    return opened


class BackendClientTests(unittest.TestCase):
    def setUp(self):
        self.client = BackendClient("http://localhost:3000/api/", timeout=1, start_timeout=2)

    def test_start_posts_json(self):
        with mock.patch("urllib.request.urlopen",
                        return_value=fake_response(b'{"sessionId": "abc", "credits": 4}')) as urlopen:
            result = self.client.start("hard")

        self.assertEqual(result, {"sessionId": "abc", "credits": 4})
        req = urlopen.call_args.args[0]
        self.assertEqual(req.full_url, "http://localhost:3000/api/start")
        self.assertEqual(req.get_method(), "POST")
        self.assertEqual(json.loads(req.data), {"difficulty": "hard"})
        self.assertIsNone(req.get_header("X-dry-run"))
        self.assertEqual(urlopen.call_args.kwargs["timeout"], 2)

    def test_dry_run_header_and_email(self):
        client = BackendClient("http://localhost:3000/api", email="a@b.c", dry_run=True)
        with mock.patch("urllib.request.urlopen", return_value=fake_response(b"{}")) as urlopen:
            client.start("easy")
        req = urlopen.call_args.args[0]
        self.assertEqual(req.get_header("X-dry-run"), "1")
        self.assertEqual(json.loads(req.data), {"difficulty": "easy", "email": "a@b.c"})

    def test_end_payload(self):
        with mock.patch("urllib.request.urlopen", return_value=fake_response(b"")) as urlopen:
            self.assertEqual(self.client.end("abc", 1, 55, 3), {})
        req = urlopen.call_args.args[0]
        self.assertEqual(req.full_url, "http://localhost:3000/api/end")
        self.assertEqual(json.loads(req.data), {
            "sessionId": "abc", "endedEarly": True, "score": 55, "seaweedsCollected": 3,
        })

    def test_fetch_game_config_is_get(self):
        with mock.patch("urllib.request.urlopen",
                        return_value=fake_response(b'{"totalTreasures": 8}')) as urlopen:
            self.assertEqual(self.client.fetch_game_config("easy"), {"totalTreasures": 8})
        req = urlopen.call_args.args[0]
        self.assertEqual(req.get_method(), "GET")
        self.assertTrue(req.full_url.endswith("/game-config?difficulty=easy"))
        self.assertIsNone(req.data)

    def test_http_error_keeps_status(self):
        err = urllib.error.HTTPError("http://x", 403, "Forbidden", {}, io.BytesIO(b"no credits"))
        with mock.patch("urllib.request.urlopen", side_effect=err):
            with self.assertRaises(ReportingError) as ctx:
                self.client.start("normal")
        self.assertEqual(ctx.exception.status, 403)
        self.assertIn("no credits", str(ctx.exception))

    def test_transport_error_has_no_status(self):
        with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with self.assertRaises(ReportingError) as ctx:
                self.client.log_mine_death("abc")
        self.assertIsNone(ctx.exception.status)

    def test_bad_json(self):
        with mock.patch("urllib.request.urlopen", return_value=fake_response(b"<html>")):
            with self.assertRaises(ReportingError):
                self.client.log_bubble("abc", 1, 2, 5)
        with mock.patch("urllib.request.urlopen", return_value=fake_response(b"[1, 2]")):
            with self.assertRaises(ReportingError):
                self.client.log_bubble("abc", 1, 2, 5)


class SessionReporterTests(unittest.TestCase):
    def setUp(self):
        self.client = mock.Mock()
        self.client.start.return_value = {"sessionId": "s1", "credits": 3}
        self.client.end.return_value = {"credits": 2, "refunded": False}
        self.reporter = SessionReporter(self.client, max_attempts=3, retry_delay=0, grace_seconds=5)

    def tearDown(self):
        self.reporter.close(timeout=2)

    def test_events_use_session_id(self):
        self.reporter.start("normal")
        self.reporter.log_chest(10, 20, 15, "small")
        self.reporter.log_bubble(30, 40, 5)
        self.reporter.log_mine_death()
        self.reporter.end(False, 15, 2)
        self.assertTrue(self.reporter.flush(timeout=2))

        self.assertEqual(self.reporter.session_id, "s1")
        self.client.start.assert_called_once_with("normal")
        self.client.log_chest.assert_called_once_with("s1", 10, 20, 15, "small")
        self.client.log_bubble.assert_called_once_with("s1", 30, 40, 5)
        self.client.log_mine_death.assert_called_once_with("s1")
        self.client.end.assert_called_once_with("s1", False, 15, 2)
        self.assertEqual(self.reporter.credits, 2)

    def test_transient_failure_retried(self):
        self.client.start.side_effect = [ReportingError("timeout"), {"sessionId": "s2"}]
        self.reporter.start("easy")
        self.reporter.log_chest(1, 2, 5, "small")
        self.assertTrue(self.reporter.flush(timeout=2))
        self.assertEqual(self.client.start.call_count, 2)
        self.client.log_chest.assert_called_once_with("s2", 1, 2, 5, "small")

    def test_gives_up_after_max_attempts(self):
        self.client.log_mine_death.side_effect = ReportingError("down")
        self.reporter.start("easy")
        self.reporter.log_mine_death()
        self.reporter.end(True, 0, 0)
        self.assertTrue(self.reporter.flush(timeout=2))
        self.assertEqual(self.client.log_mine_death.call_count, 3)
        self.client.end.assert_called_once()

    def test_rejected_start_skips_session_events(self):
        self.client.start.side_effect = ReportingError("no credits", status=403)
        self.reporter.start("hard")
        self.reporter.log_chest(1, 2, 5, "small")
        self.reporter.end(False, 5, 0)
        self.assertTrue(self.reporter.flush(timeout=2))
        self.assertEqual(self.client.start.call_count, 1)
        self.assertIsNone(self.reporter.session_id)
        self.client.log_chest.assert_not_called()
        self.client.end.assert_not_called()

    def test_unexpected_error_does_not_stop_worker(self):
        self.client.log_bubble.side_effect = RuntimeError("boom")
        self.reporter.start("normal")
        self.reporter.log_bubble(1, 1, 10)
        self.reporter.log_mine_death()
        self.assertTrue(self.reporter.flush(timeout=2))
        self.client.log_mine_death.assert_called_once_with("s1")

    def test_ledger_mirrored_immediately(self):
        self.reporter.start("normal")
        self.reporter.log_chest(1, 2, 10, "small")
        self.reporter.log_chest(3, 4, 0, "fake")
        self.reporter.log_mine_death()
        self.assertEqual(self.reporter.ledger.chests_collected, 2)
        self.assertEqual(self.reporter.ledger.chest_log[1]["type"], "fake")
        self.assertEqual(self.reporter.ledger.mine_deaths, 1)

    def test_close_stops_worker(self):
        self.reporter.start("normal")
        self.reporter.close(timeout=2)
        self.assertIsNone(self.reporter._thread)


class FactoryTests(unittest.TestCase):
    def test_offline_without_url(self):
        self.assertIsNone(create_client(""))
        self.assertIsInstance(create_reporter(None), NullReporter)
        self.assertNotIsInstance(create_reporter(None), SessionReporter)

    def test_online_with_url(self):
        client = create_client("http://localhost:3000/api/")
        self.assertEqual(client.base_url, "http://localhost:3000/api")
        self.assertIsInstance(create_reporter(client), SessionReporter)

    def test_null_reporter_keeps_ledger(self):
        reporter = NullReporter(grace_seconds=5)
        reporter.start("easy")
        reporter.log_bubble(1, 2, 10)
        reporter.end(True, 0, 0)
        self.assertEqual(reporter.ledger.bubbles_collected, 1)
        self.assertTrue(reporter.is_within_grace())
        self.assertTrue(reporter.flush())


if __name__ == "__main__":
    unittest.main()
