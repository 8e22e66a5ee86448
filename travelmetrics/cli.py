from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import Settings
from .localization import Translator
from .metrics_report import build_metrics_report
from .storage import load_metrics_data, load_trips, write_json
from .unit_config import UnitConfig


logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize per-day travel metrics by mode and week.")
    parser.add_argument("metrics_file", type=Path, help="JSON document mapping metric name to a list of days.")
    parser.add_argument("--trips-file", type=Path, default=None, help="Optional JSON list of trips with sections.")
    parser.add_argument(
        "-p",
        "--population",
        choices=["user", "aggregate"],
        default=None,
        help="Whether values are one user's totals or aggregates to divide by nUsers.",
    )
    parser.add_argument(
        "-m",
        "--metric",
        action="append",
        default=None,
        help="Metric to include (repeatable). Defaults to METRICS_KINDS.",
    )
    parser.add_argument("--reference-date", default=None, help="End date (YYYY-MM-DD) the weeks are anchored to.")
    parser.add_argument("--imperial", action="store_true", help="Display distances in miles.")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write the report here instead of stdout.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()
    _configure_logging(settings.log_level)

    metrics_data = load_metrics_data(args.metrics_file)
    if not metrics_data:
        logger.warning("No metric data found in %s", args.metrics_file)
    trips = load_trips(args.trips_file) if args.trips_file else None

    try:
        report = build_metrics_report(
            metrics_data,
            population=args.population or settings.population,
            metrics=args.metric or list(settings.metrics),
            reference_date=args.reference_date,
            unit_config=UnitConfig(use_imperial=True) if args.imperial else settings.unit_config,
            translator=Translator.from_file(settings.translations_file),
            timezone_name=settings.timezone,
            trips=trips,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    if args.output:
        write_json(args.output, report)
        logger.info("Wrote metrics report to %s", args.output)
    else:
        sys.stdout.write(json.dumps(report, indent=2, sort_keys=True) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
