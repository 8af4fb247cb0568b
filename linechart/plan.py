from __future__ import annotations

from dataclasses import dataclass

from linechart.config import Margins
from linechart.geometry import SubSeriesPath
from linechart.scales import Domain
from linechart.series import SeriesShape


@dataclass(frozen=True)
class AxisTick:
    value: float
    label: str
    position: float


@dataclass(frozen=True)
class RenderPlan:
    """Everything a surface needs to draw one chart.

    Tick positions and path vertices are in plot-area pixels; surfaces offset
    them by ``margins.left`` / ``margins.top``.
    """

    title: str
    width: int
    height: int
    margins: Margins
    plot_width: int
    plot_height: int
    shape: SeriesShape
    x_domain: Domain
    y_domain: Domain
    x_ticks: tuple[AxisTick, ...]
    y_ticks: tuple[AxisTick, ...]
    paths: tuple[SubSeriesPath, ...]

    @property
    def sub_series_count(self) -> int:
        return len(self.paths)

    @property
    def color_indices(self) -> list[int]:
        return [path.color_index for path in self.paths]
