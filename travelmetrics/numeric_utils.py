from __future__ import annotations

import math
from typing import Any


METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0
MPS_TO_KMPH = 3.6
MPS_TO_MPH = 2.23694


def as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def round_half_up(value: float) -> int:
    # 2.5 -> 3 and -2.5 -> -2; the display layer expects this rather than banker's rounding.
    return int(math.floor(value + 0.5))


def round_or_none(value: float | None) -> int | None:
    if value is None or not math.isfinite(value):
        return None
    return round_half_up(value)


def format_for_display(value: Any, *, none_value: str = "N/A") -> str:
    number = as_float(value)
    if number is None or not math.isfinite(number):
        return none_value
    magnitude = abs(number)
    if magnitude >= 100:
        text = f"{round_half_up(number):,d}"
    elif magnitude >= 1:
        text = f"{number:.3g}"
    else:
        text = f"{number:.2f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def meters_to_km(value: Any) -> float | None:
    meters = as_float(value)
    if meters is None:
        return None
    return meters / METERS_PER_KM


def meters_to_miles(value: Any) -> float | None:
    meters = as_float(value)
    if meters is None:
        return None
    return meters / METERS_PER_MILE


def mps_to_kmph(value: Any) -> float | None:
    speed_mps = as_float(value)
    if speed_mps is None:
        return None
    return speed_mps * MPS_TO_KMPH


def mps_to_mph(value: Any) -> float | None:
    speed_mps = as_float(value)
    if speed_mps is None:
        return None
    return speed_mps * MPS_TO_MPH
