from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .numeric_utils import (
    format_for_display,
    meters_to_km,
    meters_to_miles,
    mps_to_kmph,
    mps_to_mph,
)


@dataclass(frozen=True)
class UnitConfig:
    """Metric or imperial display units for distances and speeds."""

    use_imperial: bool = False

    @property
    def distance_suffix(self) -> str:
        return "mi" if self.use_imperial else "km"

    @property
    def speed_suffix(self) -> str:
        return "mph" if self.use_imperial else "kmph"

    def convert_distance(self, meters: Any) -> float:
        converted = meters_to_miles(meters) if self.use_imperial else meters_to_km(meters)
        return converted if converted is not None else 0.0

    def convert_speed(self, mps: Any) -> float:
        converted = mps_to_mph(mps) if self.use_imperial else mps_to_kmph(mps)
        return converted if converted is not None else 0.0

    def get_formatted_distance(self, meters: Any) -> str:
        return format_for_display(self.convert_distance(meters))

    def get_formatted_speed(self, mps: Any) -> str:
        return format_for_display(self.convert_speed(mps))

    def format_for_display(self, value: Any) -> str:
        return format_for_display(value)


def unit_config_for(distance_unit: object) -> UnitConfig:
    normalized = str(distance_unit or "").strip().lower()
    return UnitConfig(use_imperial=normalized in {"mi", "mile", "miles", "imperial"})
