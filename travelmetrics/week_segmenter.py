from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .date_utils import iso_date_with_offset, iso_dates_difference, parse_iso_date


logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def segment_days_by_weeks(
    days: Sequence[Mapping[str, Any]],
    last_date: str,
) -> list[list[Mapping[str, Any]]]:
    """Split ascending days into 7-day buckets ending at ``last_date``, most recent week first.

    Boundaries are anchored on ``last_date`` rather than on the data, so a
    week without any days still gets its (empty) slot.
    """
    weeks: list[list[Mapping[str, Any]]] = [[]]
    cutoff = iso_date_with_offset(last_date, -DAYS_PER_WEEK * len(weeks))
    for day in reversed(days):
        day_date = parse_iso_date(day.get("date")) if isinstance(day, Mapping) else None
        if day_date is None:
            logger.debug("Skipping day without a usable date: %r", day)
            continue
        # a day on or before the cutoff belongs to an older week, which keeps each
        # bucket exactly 7 days wide (cutoff < day <= week end); do not relax to > 0
        while iso_dates_difference(day_date, cutoff) >= 0:
            weeks.append([])
            cutoff = iso_date_with_offset(last_date, -DAYS_PER_WEEK * len(weeks))
        weeks[-1].append(day)
    return [list(reversed(week)) for week in weeks]


def calculate_percent_change(
    past_week_range: Mapping[str, float],
    previous_week_range: Mapping[str, float],
) -> dict[str, float | None]:
    change: dict[str, float | None] = {}
    for bound in ("low", "high"):
        past = past_week_range.get(bound)
        previous = previous_week_range.get(bound)
        if past is None or not previous:
            change[bound] = None
            continue
        change[bound] = (past / previous) * 100 - 100
    return change
