from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from travelmetrics.cli import main
from travelmetrics.storage import load_metrics_data, load_trips, read_json


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)
        self.metrics_file = self.tmp_path / "metrics.json"
        self.metrics_file.write_text(
            json.dumps(
                {
                    "distance": [
                        {"date": "2023-06-01", "nUsers": 2, "mode_confirm_walk": 600},
                        {"date": "2023-06-08", "nUsers": 2, "mode_confirm_walk": 1400},
                    ],
                    "notes": "ignored",
                }
            ),
            encoding="utf-8",
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_report_file(self) -> None:
        output = self.tmp_path / "out" / "report.json"
        with patch.dict(os.environ, {"STATE_DIR": str(self.tmp_path)}, clear=True):
            code = main(
                [
                    str(self.metrics_file),
                    "--population",
                    "aggregate",
                    "--metric",
                    "distance",
                    "--reference-date",
                    "2023-06-08",
                    "--output",
                    str(output),
                ]
            )
        self.assertEqual(code, 0)
        report = read_json(output)
        self.assertEqual(report["population"], "aggregate")
        self.assertEqual(report["metrics"]["distance"]["summary"], [{"key": "walk", "value": 1000, "display": "1 km"}])
        self.assertEqual(len(report["metrics"]["distance"]["weeks"]), 2)

    def test_prints_report_to_stdout(self) -> None:
        buffer = io.StringIO()
        with patch.dict(os.environ, {"STATE_DIR": str(self.tmp_path)}, clear=True), redirect_stdout(buffer):
            code = main([str(self.metrics_file), "-m", "distance", "--imperial"])
        self.assertEqual(code, 0)
        report = json.loads(buffer.getvalue())
        self.assertEqual(report["metrics"]["distance"]["unit"], "mi")
        self.assertEqual(report["reference_date"], "2023-06-08")

    def test_bad_reference_date_is_an_error(self) -> None:
        with patch.dict(os.environ, {"STATE_DIR": str(self.tmp_path)}, clear=True):
            code = main([str(self.metrics_file), "-m", "distance", "--reference-date", "June 8th"])
        self.assertEqual(code, 2)

    def test_loaders_tolerate_malformed_files(self) -> None:
        bad = self.tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        self.assertEqual(load_metrics_data(bad), {})
        self.assertEqual(load_trips(bad), [])
        self.assertEqual(load_trips(self.tmp_path / "missing.json"), [])
        self.assertEqual(list(load_metrics_data(self.metrics_file).keys()), ["distance"])


if __name__ == "__main__":
    unittest.main()
