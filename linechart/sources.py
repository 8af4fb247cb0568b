from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from linechart.errors import ChartDataError
from linechart.series import Series


def load_series_json(path: str | Path) -> list[Series]:
    """Read ``[{"title": ..., "data": [[x, y], ...]}, ...]`` from a JSON file."""
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"series file not found: {source_path}")
    try:
        payload = json.loads(source_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChartDataError(f"invalid series JSON in {source_path}: {exc}") from exc
    return parse_series(payload)


def parse_series(payload: Any) -> list[Series]:
    if not isinstance(payload, list):
        raise ChartDataError("series payload must be a list")
    out: list[Series] = []
    for idx, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ChartDataError(f"series entry {idx} must be an object")
        title = entry.get("title")
        if not isinstance(title, str) or not title:
            raise ChartDataError(f"series entry {idx} must have a non-empty title")
        data = entry.get("data")
        if not isinstance(data, list):
            raise ChartDataError(f"series entry {idx} ({title!r}) must have a data list")
        samples = []
        for j, point in enumerate(data):
            if not isinstance(point, list) or len(point) != 2:
                raise ChartDataError(f"series {title!r} sample {j} must be an [x, y] pair")
            samples.append((point[0], point[1]))
        out.append(Series(title=title, samples=tuple(samples)))
    return out
