from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .base_modes import get_base_mode_by_key
from .date_utils import parse_iso_date
from .localization import Translator
from .mode_aggregator import get_detected_modes
from .numeric_utils import round_half_up
from .unit_config import UnitConfig


def _parse_fmt_time(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def is_multi_day(begin_fmt_time: str | None, end_fmt_time: str | None) -> bool:
    if not begin_fmt_time or not end_fmt_time:
        return False
    return parse_iso_date(begin_fmt_time) != parse_iso_date(end_fmt_time)


def get_formatted_date(begin_fmt_time: str | None, end_fmt_time: str | None = None) -> str | None:
    """Long date of a trip, e.g. "Fri July 14, 2023", or a range when it spans days."""
    if not begin_fmt_time and not end_fmt_time:
        return None
    if is_multi_day(begin_fmt_time, end_fmt_time):
        return f"{get_formatted_date(begin_fmt_time)} - {get_formatted_date(end_fmt_time)}"
    moment = _parse_fmt_time(begin_fmt_time or end_fmt_time)
    if moment is None:
        return None
    return f"{moment:%a} {moment:%B} {moment.day:02d}, {moment.year}"


def get_formatted_date_abbr(begin_fmt_time: str | None, end_fmt_time: str | None = None) -> str | None:
    if not begin_fmt_time and not end_fmt_time:
        return None
    if is_multi_day(begin_fmt_time, end_fmt_time):
        return f"{get_formatted_date_abbr(begin_fmt_time)} - {get_formatted_date_abbr(end_fmt_time)}"
    # dates stay in the offset the timestamp was recorded with
    moment = _parse_fmt_time(begin_fmt_time or end_fmt_time)
    if moment is None:
        return None
    return f"{moment:%a}, {moment:%b} {moment.day}"


def get_formatted_time_range(
    begin_fmt_time: str | None,
    end_fmt_time: str | None,
    translator: Translator | None = None,
) -> str | None:
    begin = _parse_fmt_time(begin_fmt_time)
    end = _parse_fmt_time(end_fmt_time)
    if begin is None or end is None:
        return None
    try:
        hours = (end - begin).total_seconds() / 3600
    except TypeError:
        # one side is naive, the other aware
        return None
    rounded = round_half_up(hours)
    return (translator or Translator()).t("diary.hours", count=rounded)


def get_local_time_string(local_dt: Mapping[str, Any] | None) -> str | None:
    if not isinstance(local_dt, Mapping):
        return None
    try:
        hour = int(local_dt.get("hour"))
        minute = int(local_dt.get("minute"))
    except (TypeError, ValueError):
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour:02d}:{minute:02d} {suffix}"


def get_formatted_section_properties(
    trip: Mapping[str, Any],
    unit_config: UnitConfig,
    translator: Translator | None = None,
) -> list[dict[str, Any]]:
    sections = trip.get("sections")
    if not isinstance(sections, list):
        return []
    properties: list[dict[str, Any]] = []
    for section in sections:
        if not isinstance(section, Mapping):
            continue
        base_mode = get_base_mode_by_key(section.get("sensed_mode_str"))
        properties.append(
            {
                "start_time": get_local_time_string(section.get("start_local_dt")),
                "duration": get_formatted_time_range(
                    section.get("start_fmt_time"),
                    section.get("end_fmt_time"),
                    translator,
                ),
                "distance": unit_config.get_formatted_distance(section.get("distance")),
                "distance_suffix": unit_config.distance_suffix,
                "icon": base_mode.icon,
                "color": base_mode.color,
            }
        )
    return properties


def get_decorated_detected_modes(trip: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    decorated: list[dict[str, Any]] = []
    for entry in get_detected_modes(trip):
        base_mode = get_base_mode_by_key(entry["mode"])
        decorated.append({**entry, "icon": base_mode.icon, "color": base_mode.color})
    return decorated
