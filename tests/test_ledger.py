import unittest

from reporting.ledger import SessionLedger


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class SessionLedgerTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(100.0)
        self.ledger = SessionLedger(clock=self.clock)

    def test_events_stamped_in_whole_seconds(self):
        self.ledger.start()
        self.clock.now = 103.7
        self.ledger.record_chest(10, 20, 15, "small")
        self.clock.now = 104.2
        self.ledger.record_bubble(30, 40, 5)
        self.assertEqual(self.ledger.chest_log, [{"time": 3, "x": 10, "y": 20, "value": 15, "type": "small"}])
        self.assertEqual(self.ledger.bubble_log[0]["time"], 4)

    def test_end_keeps_first_stamp(self):
        self.ledger.start()
        self.clock.now = 110.0
        self.ledger.end()
        self.clock.now = 150.0
        self.ledger.end()
        self.assertEqual(self.ledger.end_time, 110.0)
        self.assertEqual(self.ledger.elapsed_seconds, 10)

    def test_grace_window(self):
        self.assertFalse(self.ledger.is_within_grace(5))
        self.ledger.start()
        self.clock.now = 103.0
        self.assertTrue(self.ledger.is_within_grace(5))
        self.clock.now = 110.0
        self.ledger.end()
        self.assertFalse(self.ledger.is_within_grace(5))

    def test_start_discards_previous_session(self):
        self.ledger.start()
        self.ledger.record_mine_death()
        self.ledger.end()
        self.clock.now = 200.0
        self.ledger.start()
        self.assertEqual(self.ledger.mine_deaths, 0)
        self.assertIsNone(self.ledger.end_time)
        self.assertEqual(self.ledger.start_time, 200.0)

    def test_report_is_a_copy(self):
        self.ledger.start()
        self.ledger.record_chest(1, 2, 10, "small")
        report = self.ledger.report()
        self.assertEqual(set(report), {
            "startTime", "endTime", "elapsedSeconds", "chestsCollected",
            "chestLog", "bubblesCollected", "bubbleLog", "mineDeaths",
        })
        report["chestLog"][0]["value"] = 999
        self.assertEqual(self.ledger.chest_log[0]["value"], 10)


if __name__ == "__main__":
    unittest.main()
