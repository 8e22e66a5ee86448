from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def parse_iso_date(raw: object) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        return None


def resolve_timezone(timezone_name: str | None) -> tzinfo:
    if not timezone_name:
        return timezone.utc
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def iso_date_with_offset(iso_date: str | date, offset_days: int) -> str:
    parsed = parse_iso_date(iso_date)
    if parsed is None:
        raise ValueError(f"Invalid ISO date: {iso_date!r}")
    return (parsed + timedelta(days=offset_days)).isoformat()


def iso_dates_difference(date1: str | date, date2: str | date) -> int:
    """Whole days from ``date1`` to ``date2``; positive when ``date1`` is older."""
    first = parse_iso_date(date1)
    second = parse_iso_date(date2)
    if first is None or second is None:
        raise ValueError(f"Invalid ISO dates: {date1!r}, {date2!r}")
    return (second - first).days


class TimestampCache:
    """Memo of calendar date -> epoch seconds of local midnight.

    Pure function memo; clearing it never changes results.
    """

    def __init__(self, timezone_name: str | None = None) -> None:
        self._tz = resolve_timezone(timezone_name)
        self._cache: dict[str, float] = {}

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self._tz)

    def ts_for_date(self, iso_date: str) -> float | None:
        cached = self._cache.get(iso_date)
        if cached is not None:
            return cached
        parsed = parse_iso_date(iso_date)
        if parsed is None:
            return None
        ts = self.midnight(parsed).timestamp()
        self._cache[iso_date] = ts
        return ts

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


def ts_for_day(day: Mapping[str, Any], cache: TimestampCache) -> float | None:
    raw_ts = day.get("ts")
    if isinstance(raw_ts, (int, float)) and not isinstance(raw_ts, bool):
        return float(raw_ts)
    raw_date = day.get("date")
    if not isinstance(raw_date, str):
        return None
    return cache.ts_for_date(raw_date)


def fmt_time_for_day(day: Mapping[str, Any], cache: TimestampCache) -> str | None:
    raw_fmt = day.get("fmt_time")
    if isinstance(raw_fmt, str) and raw_fmt.strip():
        try:
            parsed = datetime.fromisoformat(raw_fmt.strip().replace("Z", "+00:00"))
        except ValueError:
            return raw_fmt
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=cache.tz)
        return parsed.isoformat()
    parsed_date = parse_iso_date(day.get("date"))
    if parsed_date is None:
        return None
    return cache.midnight(parsed_date).isoformat()


def format_date(day: Mapping[str, Any]) -> str:
    parsed = parse_iso_date(day.get("date"))
    if parsed is None:
        return ""
    return f"{parsed.month}/{parsed.day}"


def format_date_range_of_days(days: Sequence[Mapping[str, Any]]) -> str:
    if not days:
        return ""
    return f"{format_date(days[0])} - {format_date(days[-1])}"
