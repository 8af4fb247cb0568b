from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import torch

from linechart import ChartGeometryEngine, RasterSurface, Series, redraw, render_gallery
from linechart.errors import ChartDataError


def _build_series() -> list[Series]:
    x = np.arange(24, dtype=np.float64)
    temps = 20.0 + 4.0 * np.sin(x / 4.0)
    samples = [(float(xv), None if i in (6, 7, 15) else float(tv)) for i, (xv, tv) in enumerate(zip(x, temps))]
    return [
        Series(title="Room Temperature", samples=tuple(samples)),
        Series(title="No Readings", samples=((0.0, None), (1.0, None))),
    ]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    out_dir = Path(__file__).resolve().parent / "line_charts" / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    engine = ChartGeometryEngine()
    plans = render_gallery(_build_series(), engine).plans

    t = torch.linspace(0.0, 6.0, 61, dtype=torch.float64)
    phases = torch.stack([torch.sin(t), torch.sin(t + 2.1), torch.sin(t + 4.2)], dim=1)
    phases[20:24, 1] = float("nan")
    try:
        plans.append(engine.render_columns("Three-Phase Signal", t, phases))
    except ChartDataError as exc:
        logging.getLogger(__name__).error("skipping three-phase chart: %s", exc)

    for idx, plan in enumerate(plans):
        surface = redraw(plan, RasterSurface.for_plan(plan))
        path = surface.save_png(out_dir / f"demo-{idx:02d}.png")
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
