import unittest
from unittest.mock import patch

from travelmetrics.localization import Translator
from travelmetrics.metric_kinds import MetricKind
from travelmetrics.numeric_utils import format_for_display, round_half_up
from travelmetrics.unit_config import UnitConfig, unit_config_for
from travelmetrics.unit_policy import seconds_to_hours, seconds_to_minutes, unit_utils_for_metric


class TestUnitUtilsForMetric(unittest.TestCase):
    def test_distance_delegates_to_unit_config(self) -> None:
        metric_units = unit_utils_for_metric("distance", UnitConfig(use_imperial=False))
        self.assertEqual(metric_units.suffix, "km")
        self.assertAlmostEqual(metric_units.convert(1500), 1.5)
        self.assertEqual(metric_units.format(1500), "1.5 km")

        imperial_units = unit_utils_for_metric(MetricKind.DISTANCE, UnitConfig(use_imperial=True))
        self.assertEqual(imperial_units.suffix, "mi")
        self.assertAlmostEqual(imperial_units.convert(1609.34), 1.0)
        self.assertEqual(imperial_units.format(1609.34), "1 mi")

    def test_duration_is_hours(self) -> None:
        units = unit_utils_for_metric("duration", UnitConfig())
        self.assertEqual(units.suffix, "hours")
        self.assertAlmostEqual(units.convert(7200), 2.0)
        self.assertEqual(units.format(5400), "1.5 hours")

    def test_duration_display_goes_through_unit_config(self) -> None:
        config = UnitConfig()
        with patch.object(UnitConfig, "format_for_display", return_value="1,5") as formatter:
            units = unit_utils_for_metric("duration", config)
            self.assertEqual(units.format(5400), "1,5 hours")
        formatter.assert_called_once_with(1.5)
        self.assertEqual(config.format_for_display(1234.4), "1,234")

    def test_count_is_identity_with_plural_label(self) -> None:
        units = unit_utils_for_metric("count", UnitConfig())
        self.assertEqual(units.suffix, "trips")
        self.assertEqual(units.convert(3), 3.0)
        self.assertEqual(units.format(3), "3 trips")
        self.assertEqual(units.format(1), "1 trip")

    def test_response_count_uses_pair(self) -> None:
        units = unit_utils_for_metric("response_count", UnitConfig())
        self.assertEqual(units.suffix, "responses")
        self.assertEqual(units.convert({"responded": 4, "not_responded": 5}), 4.0)
        self.assertEqual(units.convert({}), 0.0)
        self.assertEqual(units.format({"responded": 4, "not_responded": 5}), "4/9 responses")
        self.assertEqual(units.format({"not_responded": 2}), "0/2 responses")

    def test_mean_speed_uses_speed_units(self) -> None:
        units = unit_utils_for_metric("mean_speed", UnitConfig())
        self.assertEqual(units.suffix, "kmph")
        self.assertAlmostEqual(units.convert(10), 36.0)
        self.assertEqual(units.format(10), "36 kmph")

    def test_translated_suffixes(self) -> None:
        translator = Translator({"metrics": {"hours": "Stunden", "responses": "Antworten"}})
        self.assertEqual(unit_utils_for_metric("duration", UnitConfig(), translator).suffix, "Stunden")
        self.assertEqual(
            unit_utils_for_metric("response_count", UnitConfig(), translator).format({"responded": 1}),
            "1/1 Antworten",
        )

    def test_unknown_metric_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            unit_utils_for_metric("calories", UnitConfig())


class TestNumericHelpers(unittest.TestCase):
    def test_round_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(0.49), 0)

    def test_format_for_display(self) -> None:
        self.assertEqual(format_for_display(1234.4), "1,234")
        self.assertEqual(format_for_display(12.345), "12.3")
        self.assertEqual(format_for_display(0.456), "0.46")
        self.assertEqual(format_for_display(0.7), "0.7")
        self.assertEqual(format_for_display(0), "0")
        self.assertEqual(format_for_display(None), "N/A")

    def test_seconds_helpers(self) -> None:
        self.assertEqual(seconds_to_minutes(90), 1.5)
        self.assertEqual(seconds_to_hours(1800), 0.5)

    def test_unit_config_for(self) -> None:
        self.assertTrue(unit_config_for("miles").use_imperial)
        self.assertFalse(unit_config_for("km").use_imperial)
        self.assertFalse(unit_config_for(None).use_imperial)


if __name__ == "__main__":
    unittest.main()
