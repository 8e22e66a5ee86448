from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from .storage import read_json


logger = logging.getLogger(__name__)

DEFAULT_CATALOG: dict[str, str] = {
    "metrics.hours": "hours",
    "metrics.trips": "trips",
    "metrics.trips_one": "trip",
    "metrics.trips_other": "trips",
    "metrics.responses": "responses",
    "metrics.no-data": "No data",
    "metrics.mixed-labels": "Mixed entries that combine sensed and custom labels",
    "diary.hours_one": "{{count}} hour",
    "diary.hours_other": "{{count}} hours",
}


def _template_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=False,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def _flatten_catalog(payload: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in payload.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten_catalog(value, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
    return flat


class Translator:
    """Resolves translation keys with i18next-style plural suffixes and ``{{var}}`` interpolation."""

    def __init__(self, catalog: Mapping[str, Any] | None = None) -> None:
        self._catalog = dict(DEFAULT_CATALOG)
        if catalog:
            self._catalog.update(_flatten_catalog(catalog))
        self._env = _template_environment()

    @classmethod
    def from_file(cls, path: Path | None) -> "Translator":
        if path is None:
            return cls()
        payload = read_json(path)
        if not isinstance(payload, dict):
            logger.warning("Translations file %s is missing or unreadable; using defaults.", path)
            return cls()
        return cls(payload)

    def _resolve(self, key: str, count: Any) -> str | None:
        if count is not None:
            plural_key = f"{key}_one" if count == 1 else f"{key}_other"
            if plural_key in self._catalog:
                return self._catalog[plural_key]
        return self._catalog.get(key)

    def t(self, key: str, **params: Any) -> str:
        text = self._resolve(key, params.get("count"))
        if text is None:
            logger.debug("Missing translation for %s", key)
            return key
        if "{{" not in text:
            return text
        try:
            return self._env.from_string(text).render(params)
        except TemplateError as exc:
            logger.warning("Failed to interpolate translation %s: %s", key, exc)
            return text

    __call__ = t
