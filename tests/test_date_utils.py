import unittest

from travelmetrics.date_utils import (
    TimestampCache,
    format_date,
    format_date_range_of_days,
    iso_date_with_offset,
    iso_dates_difference,
)


class TestDateUtils(unittest.TestCase):
    def test_offsets_and_differences(self) -> None:
        self.assertEqual(iso_date_with_offset("2023-06-08", -7), "2023-06-01")
        self.assertEqual(iso_date_with_offset("2023-02-28", 1), "2023-03-01")
        self.assertEqual(iso_dates_difference("2023-06-01", "2023-06-08"), 7)
        self.assertEqual(iso_dates_difference("2023-06-08", "2023-06-01"), -7)
        with self.assertRaises(ValueError):
            iso_date_with_offset("not-a-date", 1)

    def test_timestamp_cache_memoizes_local_midnight(self) -> None:
        utc = TimestampCache("UTC")
        self.assertEqual(utc.ts_for_date("2023-06-01"), 1685577600.0)
        self.assertEqual(len(utc), 1)
        utc.clear()
        self.assertEqual(len(utc), 0)
        self.assertEqual(utc.ts_for_date("2023-06-01"), 1685577600.0)

        pacific = TimestampCache("America/Los_Angeles")
        self.assertEqual(pacific.ts_for_date("2023-06-01"), 1685577600.0 + 7 * 3600)
        self.assertIsNone(pacific.ts_for_date("bogus"))

    def test_unknown_timezone_falls_back_to_utc(self) -> None:
        self.assertEqual(TimestampCache("Not/AZone").ts_for_date("2023-06-01"), 1685577600.0)

    def test_format_dates(self) -> None:
        days = [{"date": "2023-06-01"}, {"date": "2023-06-08"}]
        self.assertEqual(format_date(days[0]), "6/1")
        self.assertEqual(format_date_range_of_days(days), "6/1 - 6/8")
        self.assertEqual(format_date_range_of_days([]), "")


if __name__ == "__main__":
    unittest.main()
