"""Per-mode time series built from days of metric data.

Two key conventions coexist on a day record: legacy directly-sensed mode
keys (``WALKING``, ``IN_VEHICLE``) and grouping-field keys
(``mode_confirm_bike``). Both are folded into one mapping of label to
series. The walking, running and on-foot sensed modes are merged into a
single ``ON_FOOT`` series.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple

from .date_utils import TimestampCache, fmt_time_for_day, ts_for_day
from .key_namespace import trim_grouping_prefix
from .metric_kinds import MetricKind, Population, metric_kind_spec, normalize_population
from .numeric_utils import as_float, round_half_up


logger = logging.getLogger(__name__)

ON_FOOT_KEY = "ON_FOOT"
ON_FOOT_MODES = ("WALKING", "RUNNING", "ON_FOOT")
LESS_THAN_ONE_PCT = "<1"
RUNNING_MODES = ("RUNNING", "MotionTypes.RUNNING")


class SeriesPoint(NamedTuple):
    ts: float
    value: float
    fmt_time: str


@dataclass(frozen=True)
class ModeSeries:
    key: str
    values: tuple[SeriesPoint, ...]

    def total(self) -> float:
        return sum(point.value for point in self.values)


def is_on_foot(mode: str) -> bool:
    return mode in ON_FOOT_MODES


def metric_to_value(
    population: Population | str,
    metric: Mapping[str, Any],
    field: str,
    extract: Callable[[Any], float | None] = as_float,
) -> float | None:
    """The field's value on one day; aggregate values are normalized per user.

    A day with no users yields ``nan`` so callers can render it as no data.
    """
    raw = extract(metric.get(field))
    if raw is None:
        return None
    if normalize_population(population) is Population.USER:
        return raw
    n_users = as_float(metric.get("nUsers"))
    if not n_users:
        logger.warning("Day %s has no users; %s cannot be normalized.", metric.get("date"), field)
        return math.nan
    return raw / n_users


def _round_value(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(round_half_up(value))


def parse_data_from_metrics(
    metrics: Iterable[Mapping[str, Any]] | None,
    population: Population | str,
    *,
    kind: MetricKind | str = MetricKind.DISTANCE,
    ts_cache: TimestampCache | None = None,
) -> dict[str, ModeSeries]:
    population = normalize_population(population)
    extract = metric_kind_spec(kind).extract
    cache = ts_cache if ts_cache is not None else TimestampCache()
    logger.debug("parse_data_from_metrics: population=%s kind=%s", population.value, kind)

    mode_bins: dict[str, list[SeriesPoint]] = {}
    if not isinstance(metrics, Iterable) or isinstance(metrics, (str, bytes, Mapping)):
        return {}
    for metric in metrics:
        if not isinstance(metric, Mapping):
            continue
        ts = ts_for_day(metric, cache)
        fmt_time = fmt_time_for_day(metric, cache)
        if ts is None or fmt_time is None:
            logger.debug("Skipping day without a usable date: %s", metric.get("date"))
            continue

        on_foot_total = 0.0
        on_foot_seen = False
        for field in metric.keys():
            if not isinstance(field, str):
                continue
            if field.isupper():
                value = metric_to_value(population, metric, field, extract)
                if value is None:
                    continue
                if is_on_foot(field):
                    on_foot_total += value
                    on_foot_seen = True
                    continue
                mode_bins.setdefault(field, []).append(SeriesPoint(ts, value, fmt_time))
                continue

            trimmed = trim_grouping_prefix(field)
            if not trimmed:
                continue
            value = metric_to_value(population, metric, field, extract)
            if value is None:
                continue
            logger.debug("Mapped field %s to mode %s", field, trimmed)
            mode_bins.setdefault(trimmed, []).append(SeriesPoint(ts, _round_value(value), fmt_time))

        if on_foot_seen:
            mode_bins.setdefault(ON_FOOT_KEY, []).append(
                SeriesPoint(ts, _round_value(on_foot_total), fmt_time)
            )

    return {key: ModeSeries(key=key, values=tuple(points)) for key, points in mode_bins.items()}


def _filter_running(mode: str) -> str:
    if mode in RUNNING_MODES:
        return mode.replace("RUNNING", "WALKING")
    return mode


def get_detected_modes(trip: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    """Share of a trip's distance per sensed mode, largest first."""
    sections = (trip or {}).get("sections")
    if not isinstance(sections, list) or not sections:
        return []

    total_dist = 0.0
    dists: dict[str, float] = {}
    for section in sections:
        if not isinstance(section, Mapping):
            continue
        mode = _filter_running(str(section.get("sensed_mode_str") or "UNKNOWN"))
        distance = as_float(section.get("distance")) or 0.0
        dists[mode] = dists.get(mode, 0.0) + distance
        total_dist += distance

    ordered = sorted(dists.items(), key=lambda item: item[1], reverse=True)
    section_pcts: list[dict[str, Any]] = []
    for mode, dist in ordered:
        pct = round_half_up(dist / total_dist * 100) if total_dist > 0 else 0
        section_pcts.append({"mode": mode, "pct": pct or LESS_THAN_ONE_PCT})
    return section_pcts
