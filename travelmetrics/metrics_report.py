from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from .date_utils import TimestampCache, format_date_range_of_days, parse_iso_date, resolve_timezone
from .key_namespace import classify_label_provenance, trim_grouping_prefix
from .localization import Translator
from .metric_kinds import MetricKind, Population, normalize_metric_kind, normalize_population
from .mode_aggregator import ModeSeries, parse_data_from_metrics
from .summary_reducer import generate_summary_from_data
from .trip_sections import get_decorated_detected_modes, get_formatted_section_properties
from .unit_config import UnitConfig
from .unit_policy import UnitUtils, unit_utils_for_metric
from .week_segmenter import calculate_percent_change, segment_days_by_weeks


logger = logging.getLogger(__name__)


def _json_number(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def _serialize_series(series_map: Mapping[str, ModeSeries]) -> dict[str, list[list[Any]]]:
    return {
        key: [[point.ts, _json_number(point.value), point.fmt_time] for point in series.values]
        for key, series in series_map.items()
    }


def _response_totals(days: Sequence[Mapping[str, Any]]) -> dict[str, dict[str, int]]:
    totals: dict[str, dict[str, int]] = {}
    for day in days:
        for field, value in day.items():
            label = trim_grouping_prefix(field)
            if not label or not isinstance(value, Mapping):
                continue
            entry = totals.setdefault(label, {"responded": 0, "not_responded": 0})
            for part in ("responded", "not_responded"):
                raw = value.get(part)
                if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                    entry[part] += int(raw)
    return totals


def _summaries(
    days: Sequence[Mapping[str, Any]],
    kind: MetricKind,
    population: Population,
    unit_utils: UnitUtils,
    ts_cache: TimestampCache,
) -> tuple[dict[str, ModeSeries], list[dict[str, Any]]]:
    series_map = parse_data_from_metrics(days, population, kind=kind, ts_cache=ts_cache)
    response_totals = _response_totals(days) if kind is MetricKind.RESPONSE_COUNT else {}
    rows: list[dict[str, Any]] = []
    for summary in generate_summary_from_data(series_map, kind):
        if summary.value is None:
            display = None
        elif kind is MetricKind.RESPONSE_COUNT:
            if population is Population.USER and summary.key in response_totals:
                display = unit_utils.format(response_totals[summary.key])
            else:
                display = f"{summary.value} {unit_utils.suffix}"
        else:
            display = unit_utils.format(summary.value)
        rows.append({"key": summary.key, "value": summary.value, "display": display})
    return series_map, rows


def _week_total(rows: Sequence[Mapping[str, Any]]) -> float | None:
    values = [row["value"] for row in rows if isinstance(row.get("value"), (int, float))]
    if not values:
        return None
    return float(sum(values))


def _default_reference_date(metrics_data: Mapping[str, Sequence[Mapping[str, Any]]], timezone_name: str) -> str:
    latest = None
    for days in metrics_data.values():
        for day in days:
            parsed = parse_iso_date(day.get("date")) if isinstance(day, Mapping) else None
            if parsed is not None and (latest is None or parsed > latest):
                latest = parsed
    if latest is None:
        latest = datetime.now(timezone.utc).astimezone(resolve_timezone(timezone_name)).date()
    return latest.isoformat()


def build_metric_report(
    days: Sequence[Mapping[str, Any]],
    metric: MetricKind | str,
    *,
    population: Population | str,
    reference_date: str,
    unit_config: UnitConfig,
    translator: Translator,
    ts_cache: TimestampCache,
) -> dict[str, Any]:
    kind = normalize_metric_kind(metric)
    population = normalize_population(population)
    unit_utils = unit_utils_for_metric(kind, unit_config, translator)
    series_map, summary_rows = _summaries(days, kind, population, unit_utils, ts_cache)

    warnings: list[str] = []
    # survey names are not mode labels, so only mode-style metrics are classified
    classify = bool(series_map) and kind is not MetricKind.RESPONSE_COUNT
    provenance = classify_label_provenance(series_map.keys()) if classify else None
    if classify and provenance is None:
        warnings.append(translator.t("metrics.mixed-labels"))

    weeks: list[dict[str, Any]] = []
    for week in segment_days_by_weeks(days, reference_date):
        _week_series, week_rows = _summaries(week, kind, population, unit_utils, ts_cache)
        weeks.append(
            {
                "range": format_date_range_of_days(week),
                "start_date": week[0].get("date") if week else None,
                "end_date": week[-1].get("date") if week else None,
                "day_count": len(week),
                "summary": week_rows,
                "total": _week_total(week_rows),
            }
        )

    week_over_week = None
    if len(weeks) > 1 and weeks[0]["total"] is not None and weeks[1]["total"] is not None:
        week_over_week = calculate_percent_change(
            {"low": weeks[0]["total"], "high": weeks[0]["total"]},
            {"low": weeks[1]["total"], "high": weeks[1]["total"]},
        )

    return {
        "metric": kind.value,
        "unit": unit_utils.suffix,
        "series": _serialize_series(series_map),
        "summary": summary_rows,
        "weeks": weeks,
        "week_over_week_pct": week_over_week,
        "label_provenance": provenance.value if provenance is not None else None,
        "warnings": warnings,
    }


def build_metrics_report(
    metrics_data: Mapping[str, Sequence[Mapping[str, Any]]],
    *,
    population: Population | str = Population.USER,
    metrics: Sequence[MetricKind | str] | None = None,
    reference_date: str | None = None,
    unit_config: UnitConfig | None = None,
    translator: Translator | None = None,
    timezone_name: str = "UTC",
    trips: Sequence[Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Series, summaries and weekly buckets for every requested metric."""
    population = normalize_population(population)
    unit_config = unit_config or UnitConfig()
    translator = translator or Translator()
    ts_cache = TimestampCache(timezone_name)
    reference = reference_date or _default_reference_date(metrics_data, timezone_name)
    if metrics is None:
        requested = [kind for kind in MetricKind if kind.value in metrics_data]
    else:
        requested = [normalize_metric_kind(item) for item in metrics]

    report: dict[str, Any] = {
        "population": population.value,
        "reference_date": reference,
        "metrics": {},
    }
    for kind in requested:
        days = [day for day in metrics_data.get(kind.value) or [] if isinstance(day, Mapping)]
        logger.debug("Building %s report from %d days", kind.value, len(days))
        report["metrics"][kind.value] = build_metric_report(
            days,
            kind,
            population=population,
            reference_date=reference,
            unit_config=unit_config,
            translator=translator,
            ts_cache=ts_cache,
        )

    if trips is not None:
        report["trips"] = [
            {
                "id": trip.get("id") or trip.get("_id"),
                "detected_modes": get_decorated_detected_modes(trip),
                "sections": get_formatted_section_properties(trip, unit_config, translator),
            }
            for trip in trips
            if isinstance(trip, Mapping)
        ]
    return report
