from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

from linechart.engine import ChartGeometryEngine
from linechart.errors import ChartDataError, NoValidDataError
from linechart.plan import RenderPlan
from linechart.series import Series

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedSeries:
    title: str
    reason: str


@dataclass
class GalleryResult:
    plans: list[RenderPlan] = field(default_factory=list)
    skipped: list[SkippedSeries] = field(default_factory=list)

    @property
    def rendered_titles(self) -> list[str]:
        return [plan.title for plan in self.plans]


def render_gallery(series_list: Iterable[Series], engine: ChartGeometryEngine | None = None) -> GalleryResult:
    """Render every series in order; a series that cannot be charted is logged and skipped."""
    engine = engine or ChartGeometryEngine()
    result = GalleryResult()
    for series in series_list:
        try:
            plan = engine.render_series(series)
        except NoValidDataError as exc:
            LOGGER.error("No valid data points to render a chart: %s (%s)", series.title, exc)
            result.skipped.append(SkippedSeries(title=series.title, reason=str(exc)))
            continue
        except ChartDataError as exc:
            LOGGER.warning("skipping chart %r: %s", series.title, exc)
            result.skipped.append(SkippedSeries(title=series.title, reason=str(exc)))
            continue
        result.plans.append(plan)
    LOGGER.info("rendered %d chart(s), skipped %d", len(result.plans), len(result.skipped))
    return result
