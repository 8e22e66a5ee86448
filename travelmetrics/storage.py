from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp_path.replace(path)


def load_metrics_data(path: Path) -> dict[str, list[dict[str, Any]]]:
    """Read a ``{metric: [day, ...]}`` document; anything malformed reads as empty."""
    payload = read_json(path)
    if not isinstance(payload, dict):
        return {}
    metrics: dict[str, list[dict[str, Any]]] = {}
    for metric_name, days in payload.items():
        if not isinstance(days, list):
            continue
        metrics[str(metric_name)] = [day for day in days if isinstance(day, dict)]
    return metrics


def load_trips(path: Path) -> list[dict[str, Any]]:
    payload = read_json(path)
    if isinstance(payload, dict):
        payload = payload.get("trips")
    if not isinstance(payload, list):
        return []
    return [trip for trip in payload if isinstance(trip, dict)]
