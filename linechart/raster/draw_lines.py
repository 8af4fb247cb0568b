from __future__ import annotations

from typing import Sequence

import numpy as np

from linechart.palette import RGBA
from linechart.raster.canvas import draw_pixel


def draw_polyline(
    dst: np.ndarray,
    vertices: Sequence[tuple[float, float]],
    color: RGBA,
    *,
    width: int = 1,
    offset: tuple[int, int] = (0, 0),
) -> None:
    """Stroke consecutive vertices. Fewer than two vertices draws nothing."""
    if len(vertices) < 2:
        return
    ox, oy = offset
    pts = np.rint(np.asarray(vertices, dtype=np.float64)).astype(np.int64)
    for i in range(pts.shape[0] - 1):
        _draw_line_segment(
            dst,
            int(pts[i, 0]) + ox,
            int(pts[i, 1]) + oy,
            int(pts[i + 1, 0]) + ox,
            int(pts[i + 1, 1]) + oy,
            color=color,
            width=width,
        )


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    # Even widths lean one pixel up/left so a width of 2 covers exactly two rows.
    lo = (max(1, width) - 1) // 2
    hi = max(1, width) // 2
    for yy in range(y - hi, y + lo + 1):
        for xx in range(x - hi, x + lo + 1):
            draw_pixel(dst, xx, yy, color)
