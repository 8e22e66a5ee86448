from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


MODE_COLORS = {
    "pink": "#c32e85",
    "red": "#c21725",
    "orange": "#bf5900",
    "green": "#008148",
    "blue": "#0074b7",
    "periwinkle": "#6356bf",
    "magenta": "#9240a4",
    "grey": "#555555",
    "taupe": "#7d585a",
}


@dataclass(frozen=True)
class BaseMode:
    name: str
    icon: str
    color: str


def _mode(name: str, icon: str, color: str) -> BaseMode:
    return BaseMode(name=name, icon=icon, color=MODE_COLORS[color])


# Motion types reported by the phone come first; the rest are label base modes.
BASE_MODES: dict[str, BaseMode] = {
    "IN_VEHICLE": _mode("IN_VEHICLE", "speedometer", "red"),
    "BICYCLING": _mode("BICYCLING", "bike", "green"),
    "ON_FOOT": _mode("ON_FOOT", "walk", "blue"),
    "UNKNOWN": _mode("UNKNOWN", "help", "grey"),
    "WALKING": _mode("WALKING", "walk", "blue"),
    "AIR_OR_HSR": _mode("AIR_OR_HSR", "airplane", "orange"),
    "CAR": _mode("CAR", "car", "red"),
    "E_CAR": _mode("E_CAR", "car-electric", "pink"),
    "E_BIKE": _mode("E_BIKE", "bicycle-electric", "green"),
    "E_SCOOTER": _mode("E_SCOOTER", "scooter-electric", "periwinkle"),
    "MOPED": _mode("MOPED", "moped", "green"),
    "TAXI": _mode("TAXI", "taxi", "red"),
    "BUS": _mode("BUS", "bus-side", "magenta"),
    "AIR": _mode("AIR", "airplane", "orange"),
    "LIGHT_RAIL": _mode("LIGHT_RAIL", "train-car-passenger", "periwinkle"),
    "TRAIN": _mode("TRAIN", "train-car-passenger", "periwinkle"),
    "TRAM": _mode("TRAM", "fas fa-tram", "periwinkle"),
    "SUBWAY": _mode("SUBWAY", "subway-variant", "periwinkle"),
    "FERRY": _mode("FERRY", "ferry", "taupe"),
    "TROLLEYBUS": _mode("TROLLEYBUS", "bus-side", "taupe"),
    "UNPROCESSED": _mode("UNPROCESSED", "help", "grey"),
    "OTHER": _mode("OTHER", "pencil-circle", "taupe"),
}


def normalize_mode_key(motion_name: object) -> str:
    """``"MotionTypes.WALKING"`` and ``"walking"`` both normalize to ``"WALKING"``."""
    return str(motion_name or "").upper().split(".")[-1]


def get_base_mode_by_key(motion_name: object) -> BaseMode:
    return BASE_MODES.get(normalize_mode_key(motion_name), BASE_MODES["UNKNOWN"])


def get_base_mode_of_labeled_trip(
    trip: Mapping[str, Any],
    label_options: Mapping[str, Any] | None,
) -> BaseMode | None:
    user_input = trip.get("user_input") or trip.get("userInput") or {}
    mode_input = user_input.get("MODE") if isinstance(user_input, Mapping) else None
    mode_key = mode_input.get("value") if isinstance(mode_input, Mapping) else None
    if not mode_key:
        return None
    return get_base_mode_by_value(mode_key, label_options)


def get_base_mode_by_value(value: object, label_options: Mapping[str, Any] | None) -> BaseMode:
    options = (label_options or {}).get("MODE") or []
    for option in options:
        if isinstance(option, Mapping) and option.get("value") == value:
            return get_base_mode_by_key(option.get("baseMode") or "OTHER")
    return BASE_MODES["OTHER"]


def get_base_mode_by_text(text: object, label_options: Mapping[str, Any] | None) -> BaseMode:
    options = (label_options or {}).get("MODE") or []
    for option in options:
        if isinstance(option, Mapping) and option.get("text") == text:
            return get_base_mode_by_key(option.get("baseMode") or "OTHER")
    return BASE_MODES["OTHER"]
