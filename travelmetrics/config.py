from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

from .metric_kinds import MetricKind, Population, normalize_metric_kind, normalize_population
from .unit_config import UnitConfig


load_dotenv()


EnvGetter = Callable[[str], str | None]

DEFAULT_METRICS = (
    MetricKind.DISTANCE,
    MetricKind.DURATION,
    MetricKind.COUNT,
    MetricKind.RESPONSE_COUNT,
)


def _bool_env(name: str, default: bool, *, getenv: EnvGetter = os.getenv) -> bool:
    value = getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(*names: str, default: str = "", getenv: EnvGetter = os.getenv) -> str:
    for name in names:
        value = getenv(name)
        if value is not None:
            return value.strip()
    return default


def _optional_str_env(*names: str, getenv: EnvGetter = os.getenv) -> str | None:
    value = _str_env(*names, default="", getenv=getenv)
    return value or None


def _population_env(name: str, default: Population, *, getenv: EnvGetter = os.getenv) -> Population:
    value = getenv(name)
    if value is None:
        return default
    try:
        return normalize_population(value)
    except ValueError:
        return default


def _metrics_env(name: str, *, getenv: EnvGetter = os.getenv) -> tuple[MetricKind, ...]:
    value = getenv(name)
    if value is None or not value.strip():
        return DEFAULT_METRICS
    metrics: list[MetricKind] = []
    for raw in value.split(","):
        try:
            kind = normalize_metric_kind(raw)
        except ValueError:
            continue
        if kind not in metrics:
            metrics.append(kind)
    return tuple(metrics) or DEFAULT_METRICS


@dataclass(frozen=True)
class Settings:
    log_level: str
    timezone: str
    use_imperial: bool
    population: Population
    metrics: tuple[MetricKind, ...]

    state_dir: Path
    translations_file: Path | None

    @classmethod
    def from_env(cls) -> "Settings":
        state_dir = Path(os.getenv("STATE_DIR", "state")).resolve()
        translations_raw = _optional_str_env("TRANSLATIONS_FILE")
        translations_file = None
        if translations_raw:
            translations_path = Path(translations_raw)
            translations_file = translations_path if translations_path.is_absolute() else state_dir / translations_path

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            timezone=_str_env("TIMEZONE", "TZ", default="UTC"),
            use_imperial=_bool_env("USE_IMPERIAL", False),
            population=_population_env("METRICS_POPULATION", Population.USER),
            metrics=_metrics_env("METRICS_KINDS"),
            state_dir=state_dir,
            translations_file=translations_file,
        )

    @property
    def unit_config(self) -> UnitConfig:
        return UnitConfig(use_imperial=self.use_imperial)
