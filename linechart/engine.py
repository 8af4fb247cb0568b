from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from linechart.adapters.normalize import normalize_samples, normalize_xy
from linechart.config import ChartConfig, ChartLayout, DEFAULT_TICK_COUNT
from linechart.geometry import SubSeriesPath, build_segments
from linechart.palette import Palette
from linechart.plan import AxisTick, RenderPlan
from linechart.scales import (
    LinearScale,
    compute_x_domain,
    compute_y_domain,
    format_ticks_for_axis,
)
from linechart.series import Sample, Series, SeriesData


class ChartGeometryEngine:
    """Turns one titled series into a :class:`RenderPlan`.

    The engine holds configuration only. Every call recomputes shape, domains,
    scales and paths from its input, so one engine may serve many series and
    many threads.
    """

    def __init__(
        self,
        layout: ChartLayout | None = None,
        palette: Palette | None = None,
        *,
        tick_count: int = DEFAULT_TICK_COUNT,
    ) -> None:
        if tick_count <= 0:
            raise ValueError("tick_count must be > 0")
        self._layout = layout or ChartLayout()
        self._palette = palette or Palette.default()
        self._tick_count = tick_count

    @classmethod
    def from_config(cls, config: ChartConfig) -> "ChartGeometryEngine":
        return cls(config.layout, config.palette, tick_count=config.tick_count)

    @property
    def layout(self) -> ChartLayout:
        return self._layout

    @property
    def palette(self) -> Palette:
        return self._palette

    def render(self, title: str, samples: Sequence[Sample]) -> RenderPlan:
        """Raises :class:`~linechart.errors.NoValidDataError` for empty or all-null input."""
        data = normalize_samples(samples)
        return self.render_data(title, data)

    def render_series(self, series: Series) -> RenderPlan:
        return self.render(series.title, series.samples)

    def render_columns(self, title: str, x: Any, y: Any) -> RenderPlan:
        """Column input: ``y`` 1-D for a single line, ``(n, k)`` for ``k`` sub-series."""
        return self.render_data(title, normalize_xy(x, y))

    def render_data(self, title: str, data: SeriesData) -> RenderPlan:
        layout = self._layout
        x_scale = LinearScale(
            domain=compute_x_domain(data.x),
            range_start=0.0,
            range_stop=float(layout.plot_width),
        )
        y_scale = LinearScale(
            domain=compute_y_domain(data),
            range_start=float(layout.plot_height),
            range_stop=0.0,
        ).nice(self._tick_count)

        paths = tuple(
            SubSeriesPath(
                index=i,
                color_index=self._palette.index_for(i),
                color=self._palette.color_for(i),
                segments=build_segments(data.x, data.column(i), x_scale=x_scale, y_scale=y_scale),
            )
            for i in range(data.sub_series_count)
        )
        return RenderPlan(
            title=title,
            width=layout.width,
            height=layout.height,
            margins=layout.margins,
            plot_width=layout.plot_width,
            plot_height=layout.plot_height,
            shape=data.shape,
            x_domain=x_scale.domain,
            y_domain=y_scale.domain,
            x_ticks=_axis_ticks(x_scale, self._tick_count),
            y_ticks=_axis_ticks(y_scale, self._tick_count),
            paths=paths,
        )


def _axis_ticks(scale: LinearScale, count: int) -> tuple[AxisTick, ...]:
    values = scale.ticks(count)
    labels = format_ticks_for_axis(values)
    positions = scale(values) if values.size else np.asarray([], dtype=np.float64)
    return tuple(
        AxisTick(value=float(v), label=label, position=float(p))
        for v, label, p in zip(values.tolist(), labels, positions.tolist(), strict=True)
    )
