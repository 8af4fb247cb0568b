from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from linechart.scales import LinearScale


Point = tuple[float, float]


@dataclass(frozen=True)
class PathSegment:
    """One unbroken run of vertices. ``vertices`` are pixels, ``points`` the source data."""

    vertices: tuple[Point, ...]
    points: tuple[Point, ...]


@dataclass(frozen=True)
class SubSeriesPath:
    index: int
    color_index: int
    color: str
    segments: tuple[PathSegment, ...]


def contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    """Half-open ``(start, stop)`` index ranges of consecutive ``True`` cells."""
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def build_segments(
    x: np.ndarray,
    values: np.ndarray,
    *,
    x_scale: LinearScale,
    y_scale: LinearScale,
) -> tuple[PathSegment, ...]:
    """Split one sub-series into segments, breaking at every missing value.

    Runs of a single valid sample still produce a one-vertex segment.
    """
    live = np.isfinite(x) & np.isfinite(values)
    px_all = x_scale(x)
    py_all = y_scale(values)
    segments: list[PathSegment] = []
    for start, stop in contiguous_true_runs(live):
        px = px_all[start:stop].tolist()
        py = py_all[start:stop].tolist()
        dx = x[start:stop].tolist()
        dy = values[start:stop].tolist()
        segments.append(
            PathSegment(
                vertices=tuple(zip(px, py)),
                points=tuple(zip(dx, dy)),
            )
        )
    return tuple(segments)
