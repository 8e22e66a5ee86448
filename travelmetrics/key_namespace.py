"""Interpretation of the grouping-field keys found on a day of metric data.

A day record carries keys such as ``mode_confirm_bike`` or
``primary_ble_sensed_mode_CAR``. The part before the separator names the
grouping field; the remainder is the label suffix. Whether a suffix is a
machine-sensed mode (upper case) or a user-declared label (lower case) is
decided here and nowhere else.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


logger = logging.getLogger(__name__)

GROUPING_SEPARATOR = "_"


class GroupingField(str, Enum):
    MODE_CONFIRM = "mode_confirm"
    PURPOSE_CONFIRM = "purpose_confirm"
    REPLACED_MODE_CONFIRM = "replaced_mode_confirm"
    PRIMARY_BLE_SENSED_MODE = "primary_ble_sensed_mode"
    SURVEY = "survey"


GROUPING_FIELDS: tuple[str, ...] = tuple(field.value for field in GroupingField)


class LabelProvenance(str, Enum):
    SENSED = "sensed"
    CUSTOM = "custom"


def trim_grouping_prefix(key: str, fields: Iterable[str] = GROUPING_FIELDS) -> str | None:
    """Return the label suffix of ``key``, or None when no grouping field matches.

    >>> trim_grouping_prefix("purpose_confirm_access_recreation")
    'access_recreation'
    >>> trim_grouping_prefix("primary_ble_sensed_mode_CAR")
    'CAR'
    >>> trim_grouping_prefix("nUsers") is None
    True
    """
    if not isinstance(key, str):
        return None
    for field in fields:
        prefix = f"{field}{GROUPING_SEPARATOR}"
        if key.startswith(prefix):
            return key[len(prefix):]
    return None


def labels_for_day(day: Mapping[str, Any]) -> list[str]:
    labels: list[str] = []
    for key in day.keys():
        trimmed = trim_grouping_prefix(key)
        if trimmed:
            labels.append(trimmed)
    return labels


def unique_labels_for_days(days: Iterable[Mapping[str, Any]]) -> list[str]:
    unique: list[str] = []
    seen: set[str] = set()
    for day in days:
        if not isinstance(day, Mapping):
            continue
        for label in labels_for_day(day):
            if label not in seen:
                seen.add(label)
                unique.append(label)
    return unique


def value_for_field_on_day(day: Mapping[str, Any], field: str, label: str) -> Any:
    return day.get(f"{field}{GROUPING_SEPARATOR}{label}")


def is_sensed_label(label: str) -> bool:
    return label == label.upper()


def is_custom_label(label: str) -> bool:
    return label == label.lower()


def is_all_custom(sensed_flags: Iterable[bool], custom_flags: Iterable[bool]) -> bool | None:
    """Tri-state corpus check: False if all sensed, True if all custom, None if mixed."""
    sensed = list(sensed_flags)
    custom = list(custom_flags)
    all_sensed = all(sensed)
    any_sensed = any(sensed)
    all_custom = all(custom)
    any_custom = any(custom)
    if all_sensed and not any_custom:
        return False
    if not any_sensed and all_custom:
        return True
    return None


def classify_label_provenance(labels: Iterable[str]) -> LabelProvenance | None:
    corpus = [label for label in labels if isinstance(label, str)]
    sensed_flags = [is_sensed_label(label) for label in corpus]
    custom_flags = [is_custom_label(label) for label in corpus]
    logger.debug("Checking metric keys %s; sensed %s; custom %s", corpus, sensed_flags, custom_flags)
    result = is_all_custom(sensed_flags, custom_flags)
    if result is None:
        logger.warning("Mixed entries that combine sensed and custom labels: %s", corpus)
        return None
    return LabelProvenance.CUSTOM if result else LabelProvenance.SENSED


def is_custom_labels(series_map: Mapping[str, Any]) -> bool | None:
    provenance = classify_label_provenance(series_map.keys())
    if provenance is None:
        return None
    return provenance is LabelProvenance.CUSTOM
