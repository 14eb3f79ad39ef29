from __future__ import annotations

import unittest

import numpy as np

from caseplot.brush import PointerEvent
from caseplot.chart import ScatterPlotChart
from caseplot.config import CATEGORY10
from caseplot.rasterize import rasterize
from caseplot.raster import (
    blit,
    draw_filled_rect,
    draw_markers,
    draw_polyline,
    draw_text,
    marker_outline,
    new_canvas,
    text_size,
)

from _fixtures import three_case_dataset


class CanvasPrimitiveTests(unittest.TestCase):
    def test_blit_clips_negative_offsets(self) -> None:
        dst = new_canvas(4, 4, color=(0, 0, 0, 255))
        src = new_canvas(3, 3, color=(255, 0, 0, 255))
        blit(dst, src, -1, -1)
        self.assertEqual(tuple(dst[1, 1]), (255, 0, 0, 255))
        self.assertEqual(tuple(dst[2, 2]), (0, 0, 0, 255))

    def test_filled_rect_is_clipped(self) -> None:
        dst = new_canvas(5, 5, color=(0, 0, 0, 0))
        draw_filled_rect(dst, 3, 3, 10, 10, (9, 9, 9, 255))
        self.assertEqual(int(dst[4, 4, 0]), 9)
        self.assertEqual(int(dst[2, 2, 3]), 0)

    def test_polyline_draws_endpoints(self) -> None:
        dst = new_canvas(10, 10, color=(0, 0, 0, 0))
        draw_polyline(dst, [(1, 1), (8, 1), (8, 8)], (255, 255, 255, 255))
        for x, y in ((1, 1), (5, 1), (8, 1), (8, 5), (8, 8)):
            self.assertEqual(int(dst[y, x, 3]), 255)
        self.assertEqual(int(dst[5, 5, 3]), 0)


class MarkerTests(unittest.TestCase):
    def test_outline_vertices(self) -> None:
        self.assertEqual(marker_outline("square", 10, 10, 10), [(5, 5), (15, 5), (15, 15), (5, 15)])
        self.assertEqual(marker_outline("triangle", 10, 10, 10), [(10, 5), (15, 14), (5, 14)])
        with self.assertRaises(ValueError):
            marker_outline("circle", 0, 0, 10)

    def test_off_layer_markers_are_skipped(self) -> None:
        dst = new_canvas(20, 20, color=(0, 0, 0, 0))
        draw_markers(
            dst,
            np.asarray([-50.0, 10.0]),
            np.asarray([10.0, 10.0]),
            ("square", "square"),
            ((255, 0, 0, 255), (0, 255, 0, 255)),
            size=10,
        )
        self.assertEqual(tuple(dst[5, 5]), (0, 255, 0, 255))
        self.assertEqual(int(dst[10, 10, 3]), 0)


class TextTests(unittest.TestCase):
    def test_text_lands_inside_its_box(self) -> None:
        dst = new_canvas(80, 30, color=(0, 0, 0, 0))
        w, h = text_size("120", font_size_px=11.0)
        draw_text(dst, 40, 5, "120", (255, 255, 255, 255), font_size_px=11.0, anchor="middle")
        ys, xs = np.nonzero(dst[:, :, 3])
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        self.assertGreaterEqual(int(xs.min()), 40 - w // 2)
        self.assertLessEqual(int(xs.max()), 40 - w // 2 + w)
        self.assertGreaterEqual(int(ys.min()), 5)

    def test_rotated_size_swaps_axes(self) -> None:
        w, h = text_size("Age at diagnosis")
        self.assertEqual(text_size("Age at diagnosis", rotate_deg=90), (h, w))
        with self.assertRaises(ValueError):
            draw_text(new_canvas(4, 4), 0, 0, "x", (0, 0, 0, 255), anchor="top")


class ChartRasterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = ScatterPlotChart(830, 530).data(three_case_dataset())
        self.chart.render()

    def test_frame_matches_chart_size(self) -> None:
        frame = self.chart.to_rgba()
        self.assertEqual(frame.shape, (500, 800, 4))
        self.assertEqual(frame.dtype, np.uint8)
        self.assertEqual(tuple(frame[0, 0]), self.chart.config.background)

    def test_cached_static_layer_matches_fresh_paint(self) -> None:
        self.chart.to_rgba()
        self.chart.handle_pointer(PointerEvent("down", 42.0, 460.0))
        self.chart.handle_pointer(PointerEvent("up", 400.0, 460.0))
        np.testing.assert_array_equal(self.chart.to_rgba(), rasterize(self.chart))

    def test_marker_is_painted_with_stage_color(self) -> None:
        frame = self.chart.to_rgba()
        # Stage IIB case sits at plot (370, 200); its triangle apex is 5 px above.
        self.assertEqual(tuple(frame[215, 410, :3]), CATEGORY10[1][:3])

    def test_brush_fill_follows_selection(self) -> None:
        cfg = self.chart.config
        before = self.chart.to_rgba()
        self.chart.handle_pointer(PointerEvent("down", 42.0, 460.0))
        self.chart.handle_pointer(PointerEvent("up", 400.0, 460.0))
        after = self.chart.to_rgba()

        row = self.chart.geometry.scope_y + 10
        self.assertNotEqual(tuple(before[row, 200]), cfg.background)
        self.assertEqual(tuple(after[row, 200]), cfg.background)
        self.assertNotEqual(tuple(after[row, 600]), cfg.background)


if __name__ == "__main__":
    unittest.main()
