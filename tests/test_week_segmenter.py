import unittest
from datetime import date, timedelta

from travelmetrics.week_segmenter import calculate_percent_change, segment_days_by_weeks


def _days(start: str, count: int, step: int = 1) -> list[dict]:
    first = date.fromisoformat(start)
    return [
        {"date": (first + timedelta(days=i * step)).isoformat(), "nUsers": 1, "mode_confirm_walk": i}
        for i in range(count)
    ]


class TestSegmentDaysByWeeks(unittest.TestCase):
    def test_day_on_cutoff_starts_previous_week(self) -> None:
        days = [
            {"date": "2023-06-01", "mode_confirm_walk": 300},
            {"date": "2023-06-08", "mode_confirm_walk": 700},
        ]
        weeks = segment_days_by_weeks(days, "2023-06-08")

        self.assertEqual(len(weeks), 2)
        self.assertEqual([day["date"] for day in weeks[0]], ["2023-06-08"])
        self.assertEqual([day["date"] for day in weeks[1]], ["2023-06-01"])

    def test_full_weeks_are_ascending_and_most_recent_first(self) -> None:
        days = _days("2023-06-01", 14)
        weeks = segment_days_by_weeks(days, "2023-06-14")

        self.assertEqual(len(weeks), 2)
        self.assertEqual([day["date"] for day in weeks[0]], [f"2023-06-{d:02d}" for d in range(8, 15)])
        self.assertEqual([day["date"] for day in weeks[1]], [f"2023-06-{d:02d}" for d in range(1, 8)])

    def test_empty_input_yields_one_empty_week(self) -> None:
        self.assertEqual(segment_days_by_weeks([], "2023-06-08"), [[]])

    def test_gap_weeks_keep_their_slot(self) -> None:
        days = [{"date": "2023-06-01"}, {"date": "2023-06-22"}]
        weeks = segment_days_by_weeks(days, "2023-06-22")

        self.assertEqual(len(weeks), 4)
        self.assertEqual(weeks[0], [{"date": "2023-06-22"}])
        self.assertEqual(weeks[1], [])
        self.assertEqual(weeks[2], [])
        self.assertEqual(weeks[3], [{"date": "2023-06-01"}])

    def test_boundaries_anchor_on_reference_date_not_data(self) -> None:
        days = _days("2023-06-01", 3)
        weeks = segment_days_by_weeks(days, "2023-06-10")

        # 2023-06-04..10 has no data; 2023-05-28..06-03 holds all three days
        self.assertEqual(len(weeks), 2)
        self.assertEqual(weeks[0], [])
        self.assertEqual([day["date"] for day in weeks[1]], ["2023-06-01", "2023-06-02", "2023-06-03"])

    def test_every_day_lands_in_exactly_one_week(self) -> None:
        days = _days("2023-01-03", 40, step=3)
        weeks = segment_days_by_weeks(days, "2023-05-01")

        flattened = [day for week in reversed(weeks) for day in week]
        self.assertEqual(flattened, days)
        seen = [day["date"] for week in weeks for day in week]
        self.assertEqual(len(seen), len(set(seen)))


class TestPercentChange(unittest.TestCase):
    def test_low_and_high_change(self) -> None:
        change = calculate_percent_change({"low": 110, "high": 150}, {"low": 100, "high": 200})
        self.assertAlmostEqual(change["low"], 10.0)
        self.assertAlmostEqual(change["high"], -25.0)

    def test_zero_previous_week_has_no_change(self) -> None:
        change = calculate_percent_change({"low": 5, "high": 5}, {"low": 0, "high": 10})
        self.assertIsNone(change["low"])
        self.assertAlmostEqual(change["high"], -50.0)


if __name__ == "__main__":
    unittest.main()
