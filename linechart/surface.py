from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
import xml.etree.ElementTree as ET
from typing import TypeVar

import numpy as np
from PIL import Image

from linechart.config import ChartStyle
from linechart.palette import Palette, parse_hex_color
from linechart.plan import RenderPlan
from linechart.raster import draw_hline, draw_polyline, draw_text, draw_vline, fill_canvas, new_canvas, text_size
from linechart.svg import build_svg


class Surface(ABC):
    """Drawing target owned by the caller.

    ``clear`` must drop all prior geometry; ``draw`` only ever adds to it.
    """

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw(self, plan: RenderPlan) -> None:
        raise NotImplementedError


SurfaceT = TypeVar("SurfaceT", bound=Surface)


def redraw(plan: RenderPlan, surface: SurfaceT) -> SurfaceT:
    surface.clear()
    surface.draw(plan)
    return surface


class RasterSurface(Surface):
    def __init__(
        self,
        width: int,
        height: int,
        style: ChartStyle | None = None,
        *,
        palette: Palette | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = width
        self.height = height
        self.style = style or ChartStyle()
        # Recolors sub-series by color index; None keeps the colors stored in the plan.
        self.palette = palette
        self._canvas = new_canvas(width, height, color=self.style.background)

    @classmethod
    def for_plan(
        cls,
        plan: RenderPlan,
        style: ChartStyle | None = None,
        *,
        palette: Palette | None = None,
    ) -> "RasterSurface":
        return cls(plan.width, plan.height, style=style, palette=palette)

    @property
    def rgba(self) -> np.ndarray:
        return self._canvas

    def clear(self) -> None:
        fill_canvas(self._canvas, self.style.background)

    def draw(self, plan: RenderPlan) -> None:
        style = self.style
        canvas = self._canvas
        ox = plan.margins.left
        oy = plan.margins.top
        x_axis_y = oy + plan.plot_height
        x_right = ox + plan.plot_width

        draw_hline(canvas, ox, x_right, x_axis_y, style.axis_color)
        draw_vline(canvas, ox, oy, x_axis_y, style.axis_color)

        label_gap = 3
        for tick in plan.x_ticks:
            px = ox + int(round(tick.position))
            draw_vline(canvas, px, x_axis_y, x_axis_y + style.tick_size, style.axis_color)
            draw_text(
                canvas,
                px,
                x_axis_y + style.tick_size + label_gap,
                tick.label,
                style.text_color,
                anchor="middle",
                font_size_px=style.tick_font_px,
            )
        for tick in plan.y_ticks:
            py = oy + int(round(tick.position))
            draw_hline(canvas, ox - style.tick_size, ox, py, style.axis_color)
            _, th = text_size(tick.label, font_size_px=style.tick_font_px)
            draw_text(
                canvas,
                ox - style.tick_size - label_gap,
                py - th // 2,
                tick.label,
                style.text_color,
                anchor="end",
                font_size_px=style.tick_font_px,
            )

        for path in plan.paths:
            if self.palette is not None:
                color = self.palette.rgba(path.color_index)
            else:
                color = parse_hex_color(path.color)
            for segment in path.segments:
                draw_polyline(canvas, segment.vertices, color, width=style.line_width, offset=(ox, oy))

        if plan.title:
            _, th = text_size(plan.title, font_size_px=style.title_font_px)
            draw_text(
                canvas,
                ox + plan.plot_width // 2,
                max(0, oy - 10 - th),
                plan.title,
                style.text_color,
                anchor="middle",
                font_size_px=style.title_font_px,
                embolden_px=2,
            )

    def save_png(self, path: str | Path) -> Path:
        return save_png(self._canvas, path)


class SvgSurface(Surface):
    def __init__(self, line_width: int = 2) -> None:
        self.line_width = line_width
        self._root: ET.Element | None = None

    def clear(self) -> None:
        self._root = None

    def draw(self, plan: RenderPlan) -> None:
        if self._root is not None:
            raise RuntimeError("svg surface already holds a chart; clear it before drawing")
        self._root = build_svg(plan, line_width=self.line_width)

    @property
    def is_empty(self) -> bool:
        return self._root is None

    def to_markup(self) -> str:
        if self._root is None:
            return ""
        return ET.tostring(self._root, encoding="unicode")

    def save(self, path: str | Path) -> Path:
        out_path = Path(path)
        out_path.write_text(self.to_markup() + "\n", encoding="utf-8")
        return out_path


def save_png(frame: np.ndarray, path: str | Path) -> Path:
    out_path = Path(path)
    Image.fromarray(np.ascontiguousarray(frame)).save(out_path)
    return out_path
