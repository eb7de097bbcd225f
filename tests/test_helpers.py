import unittest

from utils.helpers import clamp, format_score, format_time, parabolic_offset, pulse


class HelperTests(unittest.TestCase):
    def test_clamp(self):
        self.assertEqual(clamp(5, 0, 3), 3)
        self.assertEqual(clamp(-1, 0, 3), 0)
        self.assertEqual(clamp(2, 0, 3), 2)

    def test_format_time(self):
        self.assertEqual(format_time(90), "01:30")
        self.assertEqual(format_time(9.7), "00:09")
        self.assertEqual(format_time(-4), "00:00")

    def test_format_score(self):
        self.assertEqual(format_score(12345), "12,345")

    def test_parabolic_offset_peaks_midway(self):
        self.assertEqual(parabolic_offset(0.0, 110), 0)
        self.assertAlmostEqual(parabolic_offset(0.5, 110), -110.0)
        self.assertEqual(parabolic_offset(1.0, 110), 0)

    def test_pulse_range(self):
        values = [pulse(frame, 75) for frame in range(150)]
        self.assertAlmostEqual(values[0], 0.5)
        self.assertTrue(all(0.0 <= v <= 1.0 for v in values))


if __name__ == "__main__":
    unittest.main()
