from __future__ import annotations

import xml.etree.ElementTree as ET

from linechart.geometry import PathSegment
from linechart.plan import RenderPlan


SVG_NAMESPACE = "http://www.w3.org/2000/svg"
AXIS_COLOR = "currentColor"
TICK_SIZE = 6
TICK_PADDING = 3
LINE_WIDTH = 2


def build_svg(plan: RenderPlan, *, line_width: int = LINE_WIDTH) -> ET.Element:
    """Build an SVG tree for ``plan``.

    The plot group is translated by the left/top margins, so every coordinate
    inside it is taken from the plan unchanged.
    """
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NAMESPACE,
            "width": str(plan.width),
            "height": str(plan.height),
            "viewBox": f"0 0 {plan.width} {plan.height}",
        },
    )
    plot = ET.SubElement(
        root,
        "g",
        {"transform": f"translate({plan.margins.left},{plan.margins.top})"},
    )
    _append_x_axis(plot, plan)
    _append_y_axis(plot, plan)

    for path in plan.paths:
        ET.SubElement(
            plot,
            "path",
            {
                "class": "series",
                "data-sub-series": str(path.index),
                "fill": "none",
                "stroke": path.color,
                "stroke-width": str(line_width),
                "d": path_data(path.segments),
            },
        )

    title = ET.SubElement(
        plot,
        "text",
        {
            "class": "title",
            "x": _fmt(plan.plot_width / 2),
            "y": "-10",
            "text-anchor": "middle",
            "font-family": "sans-serif",
            "font-weight": "bold",
        },
    )
    title.text = plan.title
    return root


def to_markup(plan: RenderPlan, *, line_width: int = LINE_WIDTH) -> str:
    return ET.tostring(build_svg(plan, line_width=line_width), encoding="unicode")


def path_data(segments: tuple[PathSegment, ...]) -> str:
    """SVG ``d`` attribute: every segment opens with its own ``M`` command."""
    parts: list[str] = []
    for segment in segments:
        for i, (px, py) in enumerate(segment.vertices):
            parts.append(f"{'M' if i == 0 else 'L'}{_fmt(px)},{_fmt(py)}")
    return "".join(parts)


def _append_x_axis(parent: ET.Element, plan: RenderPlan) -> None:
    axis = ET.SubElement(
        parent,
        "g",
        {"class": "axis x-axis", "transform": f"translate(0,{plan.plot_height})", "text-anchor": "middle"},
    )
    ET.SubElement(
        axis,
        "path",
        {"class": "domain", "stroke": AXIS_COLOR, "fill": "none", "d": f"M0,{TICK_SIZE}V0H{plan.plot_width}V{TICK_SIZE}"},
    )
    for tick in plan.x_ticks:
        group = ET.SubElement(axis, "g", {"class": "tick", "transform": f"translate({_fmt(tick.position)},0)"})
        ET.SubElement(group, "line", {"stroke": AXIS_COLOR, "y2": str(TICK_SIZE)})
        label = ET.SubElement(group, "text", {"fill": AXIS_COLOR, "y": str(TICK_SIZE + TICK_PADDING), "dy": "0.71em"})
        label.text = tick.label


def _append_y_axis(parent: ET.Element, plan: RenderPlan) -> None:
    axis = ET.SubElement(parent, "g", {"class": "axis y-axis", "text-anchor": "end"})
    ET.SubElement(
        axis,
        "path",
        {"class": "domain", "stroke": AXIS_COLOR, "fill": "none", "d": f"M-{TICK_SIZE},{plan.plot_height}H0V0H-{TICK_SIZE}"},
    )
    for tick in plan.y_ticks:
        group = ET.SubElement(axis, "g", {"class": "tick", "transform": f"translate(0,{_fmt(tick.position)})"})
        ET.SubElement(group, "line", {"stroke": AXIS_COLOR, "x2": f"-{TICK_SIZE}"})
        label = ET.SubElement(group, "text", {"fill": AXIS_COLOR, "x": f"-{TICK_SIZE + TICK_PADDING}", "dy": "0.32em"})
        label.text = tick.label


def _fmt(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    if out in ("-0", ""):
        return "0"
    return out
