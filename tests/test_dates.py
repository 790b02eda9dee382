import datetime as dt
import unittest

from zoneinfo import ZoneInfo

from pollen_feed.dates import (
    MONTH_NAMES,
    format_time_label,
    resolve_requested_date,
    to_human_label,
    to_utc_window,
    today_in,
)
from pollen_feed.errors import InvalidDateError


class TestResolveRequestedDate(unittest.TestCase):
    def test_missing_param_uses_today(self):
        today = dt.date(2024, 9, 12)
        self.assertEqual(resolve_requested_date(None, today=today), today)
        self.assertEqual(resolve_requested_date("   ", today=today), today)

    def test_parses_iso_date(self):
        self.assertEqual(resolve_requested_date("2024-09-12"), dt.date(2024, 9, 12))

    def test_malformed_date_raises(self):
        for raw in ("2024-9", "12/09/2024", "2024-13-01", "2024-02-30", "yesterday"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidDateError):
                    resolve_requested_date(raw)

    def test_invalid_date_is_a_value_error(self):
        with self.assertRaises(ValueError):
            resolve_requested_date("not-a-date")

    def test_missing_param_uses_today_in_timezone(self):
        expected = dt.datetime.now(ZoneInfo("Pacific/Kiritimati")).date()
        self.assertEqual(resolve_requested_date(None, tz_name="Pacific/Kiritimati"), expected)

    def test_unknown_timezone_falls_back_to_local_date(self):
        self.assertEqual(today_in("Not/AZone"), dt.date.today())
        self.assertEqual(today_in(None), dt.date.today())


class TestUtcWindow(unittest.TestCase):
    def test_window_spans_whole_utc_day(self):
        for day in (dt.date(2024, 9, 12), dt.date(2024, 2, 29), dt.date(2023, 12, 31)):
            with self.subTest(day=day):
                window = to_utc_window(day)
                self.assertEqual(window.start, dt.datetime(day.year, day.month, day.day, 0, 0, 0, tzinfo=dt.timezone.utc))
                self.assertEqual(window.end, dt.datetime(day.year, day.month, day.day, 23, 59, 59, tzinfo=dt.timezone.utc))
                self.assertLessEqual(window.start, window.end)

    def test_request_strings(self):
        window = to_utc_window(dt.date(2024, 9, 12))
        self.assertEqual(window.starting, "2024-09-12T00:00:00Z")
        self.assertEqual(window.ending, "2024-09-12T23:59:59Z")


class TestLabels(unittest.TestCase):
    def test_human_label(self):
        self.assertEqual(to_human_label(dt.date(2024, 9, 2)), "September 2, 2024")

    def test_human_label_uses_english_month_names(self):
        self.assertEqual(to_human_label(dt.date(2024, 1, 31)), "January 31, 2024")
        self.assertEqual(to_human_label(dt.date(2025, 12, 1)), "December 1, 2025")
        self.assertEqual(len(MONTH_NAMES), 12)

    def test_time_label_12_hour_clock(self):
        self.assertEqual(format_time_label("2024-09-12T15:05:00Z"), "As of 3:05 PM")
        self.assertEqual(format_time_label("2024-09-12T00:30:00Z"), "As of 12:30 AM")
        self.assertEqual(format_time_label("2024-09-12T12:00:00"), "As of 12:00 PM")
        self.assertEqual(format_time_label("2024-09-12T09:45:00-04:00"), "As of 9:45 AM")

    def test_time_label_without_time_part_is_empty(self):
        self.assertEqual(format_time_label("2024-09-12"), "")
        self.assertEqual(format_time_label("2024-09-12T"), "")
        self.assertEqual(format_time_label("2024-09-12T15"), "")


if __name__ == "__main__":
    unittest.main()
