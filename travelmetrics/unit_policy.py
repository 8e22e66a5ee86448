from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, NamedTuple

from .localization import Translator
from .metric_kinds import MetricKind, normalize_metric_kind
from .numeric_utils import as_float, format_for_display, round_half_up
from .unit_config import UnitConfig


class UnitUtils(NamedTuple):
    """[unit suffix, base-unit conversion, base-unit display] for one metric kind."""

    suffix: str
    convert: Callable[[Any], float]
    format: Callable[[Any], str]


def seconds_to_minutes(seconds: float) -> float:
    return seconds / 60


def seconds_to_hours(seconds: float) -> float:
    return seconds / 3600


def _number(value: Any) -> float:
    parsed = as_float(value)
    return parsed if parsed is not None else 0.0


def _response_counts(value: Any) -> tuple[int, int]:
    if not isinstance(value, Mapping):
        return (0, 0)
    responded = int(_number(value.get("responded")))
    not_responded = int(_number(value.get("not_responded")))
    return (responded, responded + not_responded)


def _format_count(value: Any) -> str:
    number = _number(value)
    if number.is_integer():
        return str(int(number))
    return format_for_display(number)


def unit_utils_for_metric(
    metric: MetricKind | str,
    unit_config: UnitConfig,
    translator: Translator | None = None,
) -> UnitUtils:
    kind = normalize_metric_kind(metric)
    t = translator or Translator()

    if kind is MetricKind.DISTANCE:
        return UnitUtils(
            unit_config.distance_suffix,
            unit_config.convert_distance,
            lambda v: f"{unit_config.get_formatted_distance(v)} {unit_config.distance_suffix}",
        )

    if kind is MetricKind.DURATION:
        hours = t("metrics.hours")
        return UnitUtils(
            hours,
            lambda v: seconds_to_hours(_number(v)),
            lambda v: f"{unit_config.format_for_display(seconds_to_hours(_number(v)))} {hours}",
        )

    if kind is MetricKind.COUNT:
        return UnitUtils(
            t("metrics.trips"),
            _number,
            lambda v: f"{_format_count(v)} {t('metrics.trips', count=round_half_up(_number(v)))}",
        )

    if kind is MetricKind.RESPONSE_COUNT:
        responses = t("metrics.responses")

        def _format_responses(v: Any) -> str:
            responded, total = _response_counts(v)
            return f"{responded}/{total} {responses}"

        return UnitUtils(
            responses,
            lambda v: float(_response_counts(v)[0]),
            _format_responses,
        )

    return UnitUtils(
        unit_config.speed_suffix,
        unit_config.convert_speed,
        lambda v: f"{unit_config.get_formatted_speed(v)} {unit_config.speed_suffix}",
    )
