from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import Any

from linechart.palette import Palette, RGBA, parse_hex_color


DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 400
DEFAULT_TICK_COUNT = 10


@dataclass(frozen=True)
class Margins:
    top: int = 30
    right: int = 20
    bottom: int = 40
    left: int = 50


@dataclass(frozen=True)
class ChartLayout:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        m = self.margins
        if min(m.top, m.right, m.bottom, m.left) < 0:
            raise ValueError("margins must be >= 0")
        if self.plot_width <= 1 or self.plot_height <= 1:
            raise ValueError("margins leave no drawable plot area")

    @property
    def plot_width(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def plot_height(self) -> int:
        return self.height - self.margins.top - self.margins.bottom


@dataclass(frozen=True)
class ChartStyle:
    background: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (31, 41, 55, 255)
    text_color: RGBA = (31, 41, 55, 255)
    line_width: int = 2
    tick_size: int = 6
    tick_font_px: float = 10.0
    title_font_px: float = 18.0


@dataclass(frozen=True)
class ChartConfig:
    layout: ChartLayout = field(default_factory=ChartLayout)
    palette: Palette = field(default_factory=Palette.default)
    style: ChartStyle = field(default_factory=ChartStyle)
    tick_count: int = DEFAULT_TICK_COUNT

    def __post_init__(self) -> None:
        if self.tick_count <= 0:
            raise ValueError("tick_count must be > 0")


def load_config(path: str | Path) -> ChartConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, Any]) -> ChartConfig:
    layout_raw = _coerce_table(raw.get("layout", {}), "layout")
    margins_raw = _coerce_table(layout_raw.get("margins", {}), "layout.margins")
    defaults = Margins()
    margins = Margins(
        top=_coerce_int(margins_raw.get("top", defaults.top), "layout.margins.top"),
        right=_coerce_int(margins_raw.get("right", defaults.right), "layout.margins.right"),
        bottom=_coerce_int(margins_raw.get("bottom", defaults.bottom), "layout.margins.bottom"),
        left=_coerce_int(margins_raw.get("left", defaults.left), "layout.margins.left"),
    )
    layout = ChartLayout(
        width=_coerce_int(layout_raw.get("width", DEFAULT_WIDTH), "layout.width"),
        height=_coerce_int(layout_raw.get("height", DEFAULT_HEIGHT), "layout.height"),
        margins=margins,
    )

    palette_raw = _coerce_table(raw.get("palette", {}), "palette")
    colors = palette_raw.get("colors")
    if colors is None:
        palette = Palette.default()
    else:
        if not isinstance(colors, list) or not all(isinstance(c, str) for c in colors):
            raise ValueError("palette.colors must be a list of strings")
        palette = Palette.from_colors(colors)

    style_raw = _coerce_table(raw.get("style", {}), "style")
    base = ChartStyle()
    style = ChartStyle(
        background=_coerce_color(style_raw.get("background"), base.background, "style.background"),
        axis_color=_coerce_color(style_raw.get("axis_color"), base.axis_color, "style.axis_color"),
        text_color=_coerce_color(style_raw.get("text_color"), base.text_color, "style.text_color"),
        line_width=_coerce_int(style_raw.get("line_width", base.line_width), "style.line_width"),
        tick_size=_coerce_int(style_raw.get("tick_size", base.tick_size), "style.tick_size"),
        tick_font_px=_coerce_float(style_raw.get("tick_font_px", base.tick_font_px), "style.tick_font_px"),
        title_font_px=_coerce_float(style_raw.get("title_font_px", base.title_font_px), "style.title_font_px"),
    )

    tick_count = _coerce_int(raw.get("tick_count", DEFAULT_TICK_COUNT), "tick_count")
    return ChartConfig(layout=layout, palette=palette, style=style, tick_count=tick_count)


def _coerce_table(value: Any, field_name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table")
    return value


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value


def _coerce_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    return float(value)


def _coerce_color(value: Any, default: RGBA, field_name: str) -> RGBA:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a #hex string")
    return parse_hex_color(value)
