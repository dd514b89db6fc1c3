import datetime
import unittest

from modules.time_utils import format_time, parse_hours


class FormatTimeTests(unittest.TestCase):

    def test_valid_hhmm_is_unchanged(self):
        for value in ["0:00", "8:30", "12:05", "07:45", "99:59"]:
            self.assertEqual(format_time(value), value)
            self.assertEqual(format_time(format_time(value)), value)

    def test_day_fraction(self):
        self.assertEqual(format_time(0.5), "12:00")
        self.assertEqual(format_time(0.020833), "0:30")
        self.assertEqual(format_time(1.5), "36:00")
        self.assertEqual(format_time(0), "0:00")

    def test_empty_values(self):
        for value in [None, "", "   "]:
            self.assertEqual(format_time(value), "0:00")

    def test_decimal_hours_text(self):
        self.assertEqual(format_time("7.5"), "7:30")
        self.assertEqual(format_time("8.25"), "8:15")
        self.assertEqual(format_time("7.999"), "8:00")

    def test_whole_hours_text(self):
        self.assertEqual(format_time("8"), "8:00")

    def test_unrecognized_text(self):
        for value in ["ocho", "8:5", "120:00", "-1", "8h"]:
            self.assertEqual(format_time(value), "0:00")

    def test_negative_and_bool(self):
        self.assertEqual(format_time(-0.25), "0:00")
        self.assertEqual(format_time(True), "0:00")

    def test_time_cells(self):
        self.assertEqual(format_time(datetime.time(8, 30)), "8:30")
        self.assertEqual(format_time(datetime.timedelta(hours=26, minutes=15)), "26:15")
        self.assertEqual(format_time(datetime.datetime(1899, 12, 30, 9, 45)), "9:45")


class ParseHoursTests(unittest.TestCase):

    def test_hhmm(self):
        self.assertAlmostEqual(parse_hours("8:30"), 8.5)
        self.assertAlmostEqual(parse_hours("0:45"), 0.75)

    def test_missing_components(self):
        self.assertEqual(parse_hours("8"), 8.0)
        self.assertEqual(parse_hours(":30"), 0.5)
        self.assertEqual(parse_hours(""), 0.0)
        self.assertEqual(parse_hours(None), 0.0)

    def test_invalid_components(self):
        self.assertEqual(parse_hours("ocho:xx"), 0.0)
        self.assertAlmostEqual(parse_hours("2:xx"), 2.0)
