from __future__ import annotations

import argparse
import logging
from pathlib import Path
import re
from typing import Sequence

from linechart.config import ChartConfig, load_config
from linechart.engine import ChartGeometryEngine
from linechart.gallery import render_gallery
from linechart.sources import load_series_json
from linechart.surface import RasterSurface, SvgSurface, redraw

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linechart")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render every series in a JSON file to one image per chart.")
    render.add_argument("series_json", type=Path)
    render.add_argument("--out", type=Path, required=True, help="Output directory (created if missing).")
    render.add_argument("--format", choices=["png", "svg"], default="svg")
    render.add_argument("--config", type=Path, default=None, help="Optional chart TOML config.")
    render.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.command == "render":
        return _run_render(args)
    return 2


def _run_render(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config is not None else ChartConfig()
    engine = ChartGeometryEngine.from_config(config)
    result = render_gallery(load_series_json(args.series_json), engine)

    out_dir: Path = args.out
    out_dir.mkdir(parents=True, exist_ok=True)
    for idx, plan in enumerate(result.plans):
        out_path = out_dir / f"{idx:02d}-{slugify(plan.title)}.{args.format}"
        if args.format == "png":
            surface = RasterSurface.for_plan(plan, style=config.style, palette=config.palette)
            redraw(plan, surface)
            surface.save_png(out_path)
        else:
            svg_surface = SvgSurface(line_width=config.style.line_width)
            redraw(plan, svg_surface)
            svg_surface.save(out_path)
        LOGGER.info("wrote %s", out_path)
    return 0 if result.plans else 1


def slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "chart"


if __name__ == "__main__":
    raise SystemExit(main())
