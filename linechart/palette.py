from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


RGBA = tuple[int, int, int, int]

DEFAULT_SERIES_COLORS = ("#3B82F6", "#22C55E", "#EF4444")


@dataclass(frozen=True)
class Palette:
    """Ordered series colors; sub-series ``i`` takes color ``i mod size``."""

    colors: tuple[str, ...] = DEFAULT_SERIES_COLORS

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("palette must contain at least one color")
        for color in self.colors:
            parse_hex_color(color)

    @classmethod
    def default(cls) -> "Palette":
        return cls()

    @classmethod
    def from_colors(cls, colors: Sequence[str]) -> "Palette":
        return cls(colors=tuple(str(c) for c in colors))

    @property
    def size(self) -> int:
        return len(self.colors)

    def index_for(self, sub_series: int) -> int:
        return sub_series % self.size

    def color_for(self, sub_series: int) -> str:
        return self.colors[self.index_for(sub_series)]

    def rgba(self, sub_series: int) -> RGBA:
        return parse_hex_color(self.color_for(sub_series))


def parse_hex_color(value: str) -> RGBA:
    value = value.strip()
    if not value.startswith("#"):
        raise ValueError(f"color must be a #hex string: {value!r}")
    hex_value = value[1:]
    try:
        if len(hex_value) == 3:
            r = int(hex_value[0] * 2, 16)
            g = int(hex_value[1] * 2, 16)
            b = int(hex_value[2] * 2, 16)
            return (r, g, b, 255)
        if len(hex_value) == 6:
            r = int(hex_value[0:2], 16)
            g = int(hex_value[2:4], 16)
            b = int(hex_value[4:6], 16)
            return (r, g, b, 255)
        if len(hex_value) == 8:
            r = int(hex_value[0:2], 16)
            g = int(hex_value[2:4], 16)
            b = int(hex_value[4:6], 16)
            a = int(hex_value[6:8], 16)
            return (r, g, b, a)
    except ValueError as exc:
        raise ValueError(f"invalid hex color: {value!r}") from exc
    raise ValueError(f"invalid hex color length: {value!r}")
