from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from .metric_kinds import MetricKind, Reduction, metric_kind_spec
from .mode_aggregator import ModeSeries
from .numeric_utils import round_or_none


logger = logging.getLogger(__name__)


class MetricsSummary(NamedTuple):
    key: str
    value: int | None


def summarize_series(series: ModeSeries, reduction: Reduction) -> int | None:
    total = series.total()
    if reduction is Reduction.MEAN:
        if not series.values:
            return None
        total = total / len(series.values)
    return round_or_none(total)


def generate_summary_from_data(
    mode_map: Mapping[str, ModeSeries] | Iterable[ModeSeries],
    metric: MetricKind | str,
) -> list[MetricsSummary]:
    """One rounded value per mode: the sum of its series, or the mean for ``mean_speed``.

    ``None`` marks a mode with no usable data (an empty mean or a series
    holding values that could not be normalized).
    """
    reduction = metric_kind_spec(metric).reduction
    series_list = list(mode_map.values()) if isinstance(mode_map, Mapping) else list(mode_map)
    logger.debug("Summarizing %d series for %s", len(series_list), metric)
    return [MetricsSummary(series.key, summarize_series(series, reduction)) for series in series_list]
