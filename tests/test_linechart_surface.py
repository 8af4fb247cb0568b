from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from linechart import ChartGeometryEngine, Palette, RasterSurface, SvgSurface, redraw
from linechart.config import ChartStyle
from linechart.svg import SVG_NAMESPACE, path_data, to_markup


def _tag(name: str) -> str:
    return f"{{{SVG_NAMESPACE}}}{name}"


class SvgSurfaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = ChartGeometryEngine()

    def test_one_path_per_sub_series_with_palette_colors(self) -> None:
        plan = self.engine.render("vec", [(0, [1, None]), (1, [2, 4]), (2, [None, 5])])
        root = ET.fromstring(to_markup(plan))
        series_paths = [el for el in root.iter(_tag("path")) if el.attrib.get("class") == "series"]
        self.assertEqual(len(series_paths), 2)
        self.assertEqual([p.attrib["stroke"] for p in series_paths], ["#3B82F6", "#22C55E"])
        self.assertEqual(series_paths[0].attrib["d"], "M0,330L265,247.5")
        self.assertEqual(series_paths[1].attrib["d"], "M265,82.5L530,0")
        self.assertEqual(root.attrib["width"], "600")
        plot_group = root.find(_tag("g"))
        assert plot_group is not None
        self.assertEqual(plot_group.attrib["transform"], "translate(50,30)")

    def test_gap_starts_a_new_subpath(self) -> None:
        plan = self.engine.render("gap", [(0, 1), (1, None), (2, 3)])
        self.assertEqual(path_data(plan.paths[0].segments), "M0,330M530,0")

    def test_title_and_tick_labels_are_emitted(self) -> None:
        plan = self.engine.render("Throughput", [(0, 0), (10, 10)])
        root = ET.fromstring(to_markup(plan))
        texts = [el.text for el in root.iter(_tag("text"))]
        self.assertIn("Throughput", texts)
        self.assertIn("10", texts)

    def test_redraw_is_idempotent(self) -> None:
        plan = self.engine.render("idem", [(0, 1), (1, 3), (2, 2)])
        surface = SvgSurface()
        first = redraw(plan, surface).to_markup()
        second = redraw(plan, surface).to_markup()
        self.assertEqual(first, second)

    def test_drawing_without_clearing_is_refused(self) -> None:
        plan = self.engine.render("twice", [(0, 1), (1, 2)])
        surface = SvgSurface()
        surface.draw(plan)
        with self.assertRaises(RuntimeError):
            surface.draw(plan)
        surface.clear()
        self.assertTrue(surface.is_empty)
        self.assertEqual(surface.to_markup(), "")


class RasterSurfaceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = ChartGeometryEngine()

    def test_line_is_drawn_in_palette_color(self) -> None:
        plan = self.engine.render("line", [(0, 0), (10, 10)])
        surface = redraw(plan, RasterSurface.for_plan(plan))
        frame = surface.rgba
        self.assertEqual(frame.shape, (400, 600, 4))
        blue = np.all(frame[:, :, :3] == np.asarray([59, 130, 246], dtype=np.uint8), axis=2)
        self.assertTrue(np.any(blue))
        self.assertEqual(tuple(int(v) for v in frame[0, 0]), (255, 255, 255, 255))

    def test_redraw_replaces_previous_geometry(self) -> None:
        first = self.engine.render("first", [(0, 0), (10, 10)])
        second = self.engine.render("second", [(0, 10), (10, 0)])
        reused = RasterSurface.for_plan(first)
        redraw(first, reused)
        redraw(second, reused)
        fresh = redraw(second, RasterSurface.for_plan(second))
        self.assertTrue(np.array_equal(reused.rgba, fresh.rgba))

    def test_redraw_same_plan_is_stable(self) -> None:
        plan = self.engine.render("stable", [(0, [1, 2, 3]), (1, [3, None, 1]), (2, [2, 2, 2])])
        surface = RasterSurface.for_plan(plan)
        redraw(plan, surface)
        snapshot = surface.rgba.copy()
        redraw(plan, surface)
        self.assertTrue(np.array_equal(snapshot, surface.rgba))

    def test_single_vertex_segments_leave_no_stroke(self) -> None:
        plan = self.engine.render("dots", [(0, 1), (1, None), (2, 3)])
        surface = redraw(plan, RasterSurface.for_plan(plan, style=ChartStyle()))
        blue = np.all(surface.rgba[:, :, :3] == np.asarray([59, 130, 246], dtype=np.uint8), axis=2)
        self.assertFalse(np.any(blue))

    def test_palette_recolors_sub_series(self) -> None:
        plan = self.engine.render("recolor", [(0, 1), (1, 2), (2, 3)])
        palette = Palette.from_colors(["#FF00FF"])
        surface = redraw(plan, RasterSurface.for_plan(plan, palette=palette))
        magenta = np.all(surface.rgba[:, :, :3] == np.asarray([255, 0, 255], dtype=np.uint8), axis=2)
        blue = np.all(surface.rgba[:, :, :3] == np.asarray([59, 130, 246], dtype=np.uint8), axis=2)
        self.assertTrue(np.any(magenta))
        self.assertFalse(np.any(blue))

    def test_save_png(self) -> None:
        plan = self.engine.render("png", [(0, 1), (1, 2)])
        surface = redraw(plan, RasterSurface.for_plan(plan))
        with tempfile.TemporaryDirectory() as tmp:
            out = surface.save_png(Path(tmp) / "chart.png")
            with Image.open(out) as image:
                self.assertEqual(image.size, (600, 400))
                self.assertEqual(image.mode, "RGBA")


if __name__ == "__main__":
    unittest.main()
