from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .numeric_utils import as_float


class MetricKind(str, Enum):
    DISTANCE = "distance"
    DURATION = "duration"
    COUNT = "count"
    RESPONSE_COUNT = "response_count"
    MEAN_SPEED = "mean_speed"


class Reduction(str, Enum):
    SUM = "sum"
    MEAN = "mean"


class Population(str, Enum):
    USER = "user"
    AGGREGATE = "aggregate"


def _responded_value(raw: Any) -> float | None:
    if not isinstance(raw, Mapping):
        return None
    return as_float(raw.get("responded")) or 0.0


@dataclass(frozen=True)
class MetricKindSpec:
    kind: MetricKind
    reduction: Reduction
    extract: Callable[[Any], float | None]


METRIC_KIND_SPECS: dict[MetricKind, MetricKindSpec] = {
    MetricKind.DISTANCE: MetricKindSpec(MetricKind.DISTANCE, Reduction.SUM, as_float),
    MetricKind.DURATION: MetricKindSpec(MetricKind.DURATION, Reduction.SUM, as_float),
    MetricKind.COUNT: MetricKindSpec(MetricKind.COUNT, Reduction.SUM, as_float),
    MetricKind.RESPONSE_COUNT: MetricKindSpec(MetricKind.RESPONSE_COUNT, Reduction.SUM, _responded_value),
    MetricKind.MEAN_SPEED: MetricKindSpec(MetricKind.MEAN_SPEED, Reduction.MEAN, as_float),
}


def normalize_metric_kind(value: object) -> MetricKind:
    if isinstance(value, MetricKind):
        return value
    normalized = str(value or "").strip().lower()
    try:
        return MetricKind(normalized)
    except ValueError as exc:
        expected = ", ".join(kind.value for kind in MetricKind)
        raise ValueError(f"Invalid metric '{value}'. Expected one of: {expected}.") from exc


def normalize_population(value: object) -> Population:
    if isinstance(value, Population):
        return value
    normalized = str(value or "").strip().lower()
    if normalized in {"aggregate", "agg", "all"}:
        return Population.AGGREGATE
    if normalized in {"user", "me", ""}:
        return Population.USER
    raise ValueError(f"Invalid population '{value}'. Expected one of: user, aggregate.")


def metric_kind_spec(kind: MetricKind | str) -> MetricKindSpec:
    return METRIC_KIND_SPECS[normalize_metric_kind(kind)]
